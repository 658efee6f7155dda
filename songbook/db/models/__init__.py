"""
SQLAlchemy models for the song catalog.

Exposes `Base` and the ORM classes so callers can import from
`songbook.db.models` directly.
"""

from .base import Base  # re-export
from .songs import Group, Song

__all__ = [
    "Base",
    "Group",
    "Song",
]
