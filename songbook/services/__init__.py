"""Business logic services package with public service helpers."""

from .song_details import (
    SongDetailsClient,
    SongDetailsConfig,
    SongDetailsUnavailable,
    get_song_details_client,
    reset_song_details_client_for_tests,
)
from .song_service import SongNotFound, SongService

__all__ = [
    "SongDetailsClient",
    "SongDetailsConfig",
    "SongDetailsUnavailable",
    "get_song_details_client",
    "reset_song_details_client_for_tests",
    "SongNotFound",
    "SongService",
]
