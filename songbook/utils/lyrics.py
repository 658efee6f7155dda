"""Lyrics helpers: splitting song text into verses."""

import re
from typing import List

# Verses are separated by one blank line; tolerate Windows line endings.
_VERSE_SEPARATOR = re.compile(r"\r?\n\r?\n")


class VerseOutOfRange(ValueError):
    """Raised when a requested verse number does not exist in the lyrics."""

    def __init__(self, verse: int, available: int):
        self.verse = verse
        self.available = available
        super().__init__(f"invalid verse index: {verse}")


def split_verses(text: str) -> List[str]:
    """Return the verses of ``text`` in order.

    An empty text still yields a single (empty) verse, mirroring ``str.split``.
    """
    return _VERSE_SEPARATOR.split(text or "")


def extract_verse(text: str, verse: int) -> str:
    """Return the 1-based ``verse`` from ``text``.

    Raises:
        VerseOutOfRange: if ``verse`` is below 1 or past the last verse.
    """
    verses = split_verses(text)
    if verse < 1 or verse > len(verses):
        raise VerseOutOfRange(verse, len(verses))
    return verses[verse - 1]
