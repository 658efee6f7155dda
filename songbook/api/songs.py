"""
Songs API endpoints.

List, fetch (optionally a single verse), create, partially update and
delete songs.
"""
import logging
from typing import NoReturn, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from songbook.api.deps import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    get_song_service,
    normalize_pagination,
    parse_int_param,
)
from songbook.db import schemas
from songbook.db.repositories.songs import RepositoryError
from songbook.services import SongDetailsUnavailable, SongNotFound, SongService
from songbook.utils.lyrics import VerseOutOfRange

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/songs", tags=["songs"])


def _raise_http(e: Exception) -> NoReturn:
    if isinstance(e, SongNotFound):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, VerseOutOfRange):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if isinstance(e, SongDetailsUnavailable):
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    logger.error("songs: unexpected failure: %s", e)
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")


_DOMAIN_ERRORS = (SongNotFound, VerseOutOfRange, SongDetailsUnavailable, RepositoryError)


@router.get("", response_model=schemas.PaginatedSongs)
def list_songs_endpoint(
    page: Optional[str] = None,
    page_size: Optional[str] = Query(default=None, alias="pageSize"),
    song: str = "",
    group: str = "",
    text: str = "",
    release_date: str = Query(default="", alias="releaseDate"),
    link: str = "",
    service: SongService = Depends(get_song_service),
):
    page_num, size = normalize_pagination(
        parse_int_param("page", page, DEFAULT_PAGE),
        parse_int_param("pageSize", page_size, DEFAULT_PAGE_SIZE),
    )
    filters = schemas.SongFilter(song=song, group=group, text=text, release_date=release_date, link=link)
    logger.info("list_songs: page=%s page_size=%s filters=%s", page_num, size, filters.model_dump())
    try:
        songs, total_pages = service.list_songs(filters, page_num, size)
    except _DOMAIN_ERRORS as e:
        _raise_http(e)
    return schemas.PaginatedSongs(
        songs=[schemas.Song.model_validate(s) for s in songs],
        total_pages=total_pages,
        current_page=page_num,
        page_size=size,
    )


@router.post("", response_model=schemas.Song, status_code=status.HTTP_201_CREATED)
def create_song_endpoint(
    song: schemas.SongCreate,
    service: SongService = Depends(get_song_service),
):
    """Create a song, filling release date, lyrics and link from the music-info API."""
    try:
        created = service.create_song(song)
    except _DOMAIN_ERRORS as e:
        _raise_http(e)
    return schemas.Song.model_validate(created)


@router.get("/{song_id}", response_model=schemas.Song)
def get_song_endpoint(
    song_id: int,
    vers: Optional[str] = None,
    service: SongService = Depends(get_song_service),
):
    """Return a song; `vers=N` (1-based) replaces the text with that verse only."""
    verse = parse_int_param("vers", vers, 0)
    logger.info("get_song: song_id=%s verse=%s", song_id, verse)
    try:
        return service.get_song(song_id, verse)
    except _DOMAIN_ERRORS as e:
        _raise_http(e)


@router.patch("/{song_id}", response_model=schemas.Song)
def update_song_endpoint(
    song_id: int,
    song: schemas.SongUpdate,
    service: SongService = Depends(get_song_service),
):
    logger.info("update_song: song_id=%s", song_id)
    try:
        updated = service.update_song(song_id, song)
    except _DOMAIN_ERRORS as e:
        _raise_http(e)
    return schemas.Song.model_validate(updated)


@router.delete("/{song_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_song_endpoint(
    song_id: int,
    service: SongService = Depends(get_song_service),
):
    logger.info("delete_song: song_id=%s", song_id)
    try:
        service.delete_song(song_id)
    except _DOMAIN_ERRORS as e:
        _raise_http(e)
