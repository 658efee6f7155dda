"""
Shared FastAPI dependencies and request-parsing helpers.
"""
import logging
import re
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from songbook.db.database import get_db
from songbook.services import SongDetailsClient, SongService, get_song_details_client

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Signed 64-bit range; larger values cannot reach the database
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")


def parse_int_param(name: str, raw: Optional[str], default: int) -> int:
    """Parse an integer query parameter, falling back to ``default`` when absent or malformed."""
    if raw is None or raw == "":
        return default
    if not _INT_RE.fullmatch(raw):
        logger.debug("parse_int_param: %s=%r is not an integer; using %s", name, raw, default)
        return default
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        logger.debug("parse_int_param: %s=%r is out of range; using %s", name, raw, default)
        return default
    return value


def normalize_pagination(page: int, page_size: int) -> tuple[int, int]:
    if page < 1:
        page = DEFAULT_PAGE
    if page_size < 1:
        page_size = DEFAULT_PAGE_SIZE
    page_size = min(page_size, MAX_PAGE_SIZE)
    # keep the row offset representable as a 64-bit integer
    return min(page, INT64_MAX // page_size + 1), page_size


def get_song_service(
    db: Session = Depends(get_db),
    details_client: SongDetailsClient = Depends(get_song_details_client),
) -> SongService:
    return SongService(db, details_client)
