from sqlalchemy.exc import OperationalError


def test_health_ok(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "service": "songbook-service", "database": "ok"}


def test_health_reports_database_outage(client, monkeypatch):
    def broken_ping():
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr("songbook.api.main.database.ping", broken_ping)
    r = client.get("/health")
    assert r.status_code == 503
    assert r.json()["database"] == "unavailable"


def test_build_info_reads_environment(client, monkeypatch):
    monkeypatch.setenv("VERSION", "1.2.3")
    monkeypatch.setenv("BUILD_SHA", "abc123")
    monkeypatch.delenv("BUILD_TIMESTAMP", raising=False)
    monkeypatch.delenv("IMAGE_TAG", raising=False)
    data = client.get("/build-info").json()
    assert data == {
        "build_sha": "abc123",
        "build_timestamp": None,
        "image_tag": None,
        "service_name": "songbook-service",
        "version": "1.2.3",
    }


def test_repository_failure_maps_to_500(client, monkeypatch):
    from songbook.db.repositories.songs import RepositoryError

    def broken(*args, **kwargs):
        raise RepositoryError("Failed to list songs: database is locked")

    monkeypatch.setattr("songbook.services.song_service.repo_songs.get_songs", broken)
    r = client.get("/songs")
    assert r.status_code == 500
    assert r.json()["detail"] == "Database error"
