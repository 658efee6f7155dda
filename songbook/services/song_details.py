"""Client for the external music-info API used to enrich new songs."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

import requests
from pydantic import ValidationError

from songbook.db import schemas

logger = logging.getLogger(__name__)

_CONNECT_TIMEOUT = 3


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


class SongDetailsUnavailable(RuntimeError):
    """Raised when the music-info API cannot provide details for a song."""


@dataclass(frozen=True)
class SongDetailsConfig:
    base_url: Optional[str] = None
    timeout_seconds: float = 10.0

    @classmethod
    def from_env(cls) -> "SongDetailsConfig":
        base_url = (os.getenv("SONG_DETAILS_API_URL") or "").strip() or None
        return cls(
            base_url=base_url,
            timeout_seconds=_env_float("SONG_DETAILS_TIMEOUT_SECONDS", 10.0),
        )

    @property
    def is_enabled(self) -> bool:
        return bool(self.base_url)


class SongDetailsClient:
    """Looks up release date, lyrics and link for a (group, song) pair."""

    def __init__(self, config: Optional[SongDetailsConfig] = None) -> None:
        self.config = config or SongDetailsConfig.from_env()

    @property
    def is_enabled(self) -> bool:
        return self.config.is_enabled

    def fetch(self, group: str, song: str) -> Optional[schemas.SongDetails]:
        """Return details for the song, or None when no API is configured.

        Raises:
            SongDetailsUnavailable: on transport errors, non-200 responses or
                a body that is not a JSON object.
        """
        if not self.is_enabled:
            logger.debug("song_details: lookup disabled; skipping group=%r song=%r", group, song)
            return None

        url = self.config.base_url
        logger.info("song_details: requesting url=%s group=%r song=%r", url, group, song)
        try:
            response = requests.get(
                url,
                params={"group": group, "song": song},
                timeout=(_CONNECT_TIMEOUT, self.config.timeout_seconds),
            )
        except requests.RequestException as e:
            logger.error("song_details: request failed: %s", e)
            raise SongDetailsUnavailable(f"Music info API request failed: {e}") from e

        logger.info("song_details: received status=%s", response.status_code)
        if response.status_code != 200:
            raise SongDetailsUnavailable(
                f"Music info API returned status {response.status_code}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            logger.error("song_details: invalid JSON body: %s", e)
            raise SongDetailsUnavailable("Music info API returned invalid JSON") from e
        if not isinstance(payload, dict):
            raise SongDetailsUnavailable("Unexpected music info API response structure")
        logger.debug("song_details: payload=%s", payload)

        try:
            return schemas.SongDetails.model_validate(payload)
        except ValidationError as e:
            raise SongDetailsUnavailable(f"Unexpected music info API response: {e}") from e


_song_details_client: Optional[SongDetailsClient] = None


def get_song_details_client() -> SongDetailsClient:
    global _song_details_client
    if _song_details_client is None:
        _song_details_client = SongDetailsClient()
    return _song_details_client


def reset_song_details_client_for_tests() -> None:
    global _song_details_client
    _song_details_client = None
