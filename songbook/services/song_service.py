"""Song service: thin layer between the HTTP routes and the repository."""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from songbook.db import models, schemas
from songbook.db.repositories import songs as repo_songs
from songbook.services.song_details import SongDetailsClient, get_song_details_client
from songbook.utils.lyrics import extract_verse

logger = logging.getLogger(__name__)


class SongNotFound(LookupError):
    def __init__(self, song_id: int):
        self.song_id = song_id
        super().__init__(f"song with id {song_id} not found")


class SongService:
    def __init__(self, db: Session, details_client: Optional[SongDetailsClient] = None) -> None:
        self.db = db
        self.details_client = details_client or get_song_details_client()

    def list_songs(
        self,
        filters: schemas.SongFilter,
        page: int,
        page_size: int,
    ) -> Tuple[List[models.Song], int]:
        return repo_songs.get_songs(self.db, filters, page, page_size)

    def get_song(self, song_id: int, verse: int = 0) -> schemas.Song:
        """Return the song; with ``verse`` > 0 only that verse is kept in ``text``."""
        db_song = repo_songs.get_song(self.db, song_id)
        if db_song is None:
            raise SongNotFound(song_id)
        song = schemas.Song.model_validate(db_song)
        if verse:
            song = song.model_copy(update={"text": extract_verse(song.text, verse)})
        return song

    def create_song(self, song: schemas.SongCreate) -> models.Song:
        details = self.details_client.fetch(song.group, song.song)
        if details is not None:
            found = {k: v for k, v in details.model_dump(exclude_unset=True).items() if v}
            song = song.model_copy(update=found)
        logger.info("create_song: group=%r song=%r release_date=%r", song.group, song.song, song.release_date)
        return repo_songs.create_song(self.db, song)

    def update_song(self, song_id: int, song: schemas.SongUpdate) -> models.Song:
        db_song = repo_songs.update_song(self.db, song_id, song.changes())
        if db_song is None:
            raise SongNotFound(song_id)
        return db_song

    def delete_song(self, song_id: int) -> None:
        if not repo_songs.delete_song(self.db, song_id):
            raise SongNotFound(song_id)
