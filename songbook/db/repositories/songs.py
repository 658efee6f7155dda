"""
Song repository functions.

Implements filtered/paginated listing and create/read/update/delete for
songs. Every mutating call keeps its group bookkeeping (ensure the group
exists, drop groups left without songs) inside a single transaction.
"""
from __future__ import annotations

import logging
import math
from typing import List, Optional, Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from songbook.db import models, schemas
from songbook.db.repositories import groups as repo_groups

logger = logging.getLogger(__name__)


class RepositoryError(RuntimeError):
    """Raised when a database operation fails; the session has been rolled back."""


# Filter field -> column it matches against (case-insensitive substring)
_FILTER_COLUMNS = {
    "song": models.Song.song,
    "group": models.Group.name,
    "text": models.Song.text,
    "release_date": models.Song.release_date,
    "link": models.Song.link,
}

# Fields PATCH may touch directly on the song row
_UPDATABLE_FIELDS = ("song", "text", "release_date", "link")


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _apply_filters(q, filters: schemas.SongFilter):
    for field, column in _FILTER_COLUMNS.items():
        value = getattr(filters, field)
        if value:
            q = q.filter(column.ilike(f"%{_escape_like(value)}%", escape="\\"))
    return q


def get_songs(
    db: Session,
    filters: Optional[schemas.SongFilter] = None,
    page: int = 1,
    page_size: int = 10,
) -> Tuple[List[models.Song], int]:
    """Return one page of songs matching ``filters`` and the total page count."""
    filters = filters or schemas.SongFilter()
    offset = (page - 1) * page_size
    q = db.query(models.Song).join(models.Group, models.Song.group_id == models.Group.id)
    q = _apply_filters(q, filters)
    logger.debug(
        "get_songs: filters=%s page=%s page_size=%s offset=%s",
        filters.model_dump(), page, page_size, offset,
    )
    try:
        total = q.count()
        songs = q.order_by(models.Song.id).offset(offset).limit(page_size).all()
    except SQLAlchemyError as e:
        logger.error("get_songs query failed: %s", e)
        raise RepositoryError(f"Failed to list songs: {e}") from e
    total_pages = math.ceil(total / page_size) if page_size else 0
    return songs, total_pages


def get_song(db: Session, song_id: int):
    logger.debug("get_song: song_id=%s", song_id)
    try:
        return db.query(models.Song).filter(models.Song.id == song_id).first()
    except SQLAlchemyError as e:
        logger.error("get_song query failed for song_id=%s: %s", song_id, e)
        raise RepositoryError(f"Failed to get song {song_id}: {e}") from e


def create_song(db: Session, song: schemas.SongBase) -> models.Song:
    try:
        group = repo_groups.ensure_group(db, song.group)
        db_song = models.Song(
            group_id=group.id,
            song=song.song,
            text=song.text,
            release_date=song.release_date,
            link=song.link,
        )
        db.add(db_song)
        db.commit()
        db.refresh(db_song)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("create_song failed for group=%r song=%r: %s", song.group, song.song, e)
        raise RepositoryError(f"Failed to create song: {e}") from e
    logger.debug("create_song: created song_id=%s group_id=%s", db_song.id, db_song.group_id)
    return db_song


def update_song(db: Session, song_id: int, changes: dict):
    """Apply ``changes`` (already stripped of empty values) to a song.

    Returns the updated song, or None if it does not exist.
    """
    db_song = get_song(db, song_id)
    if db_song is None:
        return None
    logger.debug("update_song: song_id=%s changes=%s", song_id, changes)
    try:
        for key in _UPDATABLE_FIELDS:
            if key in changes:
                setattr(db_song, key, changes[key])
        new_group_name = changes.get("group")
        if new_group_name:
            old_group_id = db_song.group_id
            group = repo_groups.ensure_group(db, new_group_name)
            if group.id != old_group_id:
                db_song.group = group
                db.flush()
                repo_groups.delete_group_if_orphaned(db, old_group_id, exclude_song_id=song_id)
        db.commit()
        db.refresh(db_song)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("update_song failed for song_id=%s: %s", song_id, e)
        raise RepositoryError(f"Failed to update song {song_id}: {e}") from e
    return db_song


def delete_song(db: Session, song_id: int) -> bool:
    """Delete a song and its group if that was the group's last song."""
    db_song = get_song(db, song_id)
    if db_song is None:
        return False
    group_id = db_song.group_id
    logger.debug("delete_song: song_id=%s group_id=%s", song_id, group_id)
    try:
        db.delete(db_song)
        db.flush()
        repo_groups.delete_group_if_orphaned(db, group_id)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("delete_song failed for song_id=%s: %s", song_id, e)
        raise RepositoryError(f"Failed to delete song {song_id}: {e}") from e
    return True
