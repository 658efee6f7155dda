"""
Pydantic schemas for request and response bodies.
"""

from .songs import (
    SongBase,
    SongCreate,
    SongUpdate,
    Song,
    SongFilter,
    SongDetails,
    PaginatedSongs,
)

__all__ = [
    "SongBase",
    "SongCreate",
    "SongUpdate",
    "Song",
    "SongFilter",
    "SongDetails",
    "PaginatedSongs",
]
