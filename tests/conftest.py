import os

os.environ.setdefault("PYTEST_RUNNING", "1")

import pytest
from fastapi.testclient import TestClient

from songbook.api.main import app
from songbook.db import models, schemas
from songbook.db.database import SessionLocal, engine
from songbook.services import SongDetailsUnavailable, get_song_details_client


class FakeSongDetailsClient:
    """Stand-in for the music-info API; records every lookup."""

    def __init__(self):
        self.details = None
        self.error = None
        self.calls = []

    @property
    def is_enabled(self):
        return True

    def fetch(self, group, song):
        self.calls.append((group, song))
        if self.error is not None:
            raise SongDetailsUnavailable(self.error)
        return self.details


@pytest.fixture(scope="session", autouse=True)
def create_schema_once():
    models.Base.metadata.create_all(bind=engine)
    yield
    models.Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_data():
    """Empty all tables between tests without dropping metadata."""
    with engine.begin() as connection:
        for table in reversed(models.Base.metadata.sorted_tables):
            connection.execute(table.delete())
    yield


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def details_client():
    fake = FakeSongDetailsClient()
    fake.details = schemas.SongDetails(
        releaseDate="16.07.2006",
        text="Ooh baby, don't you know I suffer?\nOoh baby, can you hear me moan?\n\nYou caught me under false pretenses",
        link="https://www.youtube.com/watch?v=Xsp3_a-PMTw",
    )
    app.dependency_overrides[get_song_details_client] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_song_details_client, None)


@pytest.fixture
def client(details_client):
    return TestClient(app)


@pytest.fixture
def song_factory(db_session):
    """Insert a song straight through the ORM, creating its group as needed."""
    def _create(song: str, group: str = "Muse", text: str = "", release_date: str = "", link: str = ""):
        grp = db_session.query(models.Group).filter(models.Group.name == group).first()
        if grp is None:
            grp = models.Group(name=group)
            db_session.add(grp)
            db_session.flush()
        row = models.Song(group_id=grp.id, song=song, text=text, release_date=release_date, link=link)
        db_session.add(row)
        db_session.commit()
        db_session.refresh(row)
        return row
    return _create
