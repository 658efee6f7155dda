"""
Group repository functions.

Groups are never managed directly through the API: a group row exists while
at least one song references it. These helpers flush but do not commit; the
song repository owns the transaction.
"""
from __future__ import annotations

import logging
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from songbook.db import models

logger = logging.getLogger(__name__)


def get_group_by_name(db: Session, name: str):
    return (
        db.query(models.Group)
        .filter(func.lower(models.Group.name) == func.lower(name))
        .order_by(models.Group.id)
        .first()
    )


def ensure_group(db: Session, name: str) -> models.Group:
    """Return the group called ``name`` (case-insensitive), creating it if missing."""
    name = name.strip()
    group = get_group_by_name(db, name)
    if group is not None:
        return group
    logger.debug("ensure_group: creating group name=%r", name)
    group = models.Group(name=name)
    db.add(group)
    db.flush()
    return group


def count_group_songs(db: Session, group_id: int, *, exclude_song_id: Optional[int] = None) -> int:
    q = db.query(func.count(models.Song.id)).filter(models.Song.group_id == group_id)
    if exclude_song_id is not None:
        q = q.filter(models.Song.id != exclude_song_id)
    return int(q.scalar() or 0)


def delete_group_if_orphaned(db: Session, group_id: int, *, exclude_song_id: Optional[int] = None) -> bool:
    """Delete the group when no song (other than ``exclude_song_id``) references it."""
    db.flush()
    remaining = count_group_songs(db, group_id, exclude_song_id=exclude_song_id)
    if remaining:
        return False
    logger.debug("delete_group_if_orphaned: deleting group_id=%s", group_id)
    db.query(models.Group).filter(models.Group.id == group_id).delete(synchronize_session=False)
    return True
