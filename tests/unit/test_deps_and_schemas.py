import pytest

from songbook.api.deps import normalize_pagination, parse_int_param
from songbook.db import schemas


@pytest.mark.parametrize("raw,expected", [
    (None, 7),
    ("", 7),
    ("  ", 7),
    ("3", 3),
    ("-2", -2),
    ("3.5", 7),
    ("abc", 7),
    ("+4", 4),
    (" 5", 7),
    ("5 ", 7),
    ("1_000", 7),
    ("\u0663", 7),
    ("9223372036854775807", 9223372036854775807),
    ("-9223372036854775808", -9223372036854775808),
    ("9223372036854775808", 7),
    ("99999999999999999999", 7),
])
def test_parse_int_param(raw, expected):
    assert parse_int_param("page", raw, 7) == expected


@pytest.mark.parametrize("page,size,expected", [
    (1, 10, (1, 10)),
    (0, 10, (1, 10)),
    (-3, 0, (1, 10)),
    (4, 250, (4, 100)),
    (9223372036854775807, 10, (922337203685477581, 10)),
])
def test_normalize_pagination(page, size, expected):
    assert normalize_pagination(page, size) == expected


def test_song_create_accepts_camel_case_release_date():
    s = schemas.SongCreate.model_validate({"group": " Muse ", "song": "Uprising", "releaseDate": "2009"})
    assert s.group == "Muse"
    assert s.release_date == "2009"


def test_song_update_changes_drop_empty_and_null():
    u = schemas.SongUpdate.model_validate({"song": "", "text": "new", "link": None, "releaseDate": "2010"})
    assert u.changes() == {"text": "new", "release_date": "2010"}


def test_song_serializes_with_camel_case():
    song = schemas.Song(id=1, group="Muse", song="Uprising", release_date="2009")
    assert song.model_dump(by_alias=True) == {
        "group": "Muse",
        "song": "Uprising",
        "text": "",
        "releaseDate": "2009",
        "link": "",
        "id": 1,
    }


def test_paginated_songs_serializes_with_camel_case():
    page = schemas.PaginatedSongs(songs=[], total_pages=0, current_page=1, page_size=10)
    assert page.model_dump(by_alias=True) == {
        "songs": [],
        "totalPages": 0,
        "currentPage": 1,
        "pageSize": 10,
    }


def test_song_details_nulls_become_empty():
    d = schemas.SongDetails.model_validate({"releaseDate": None, "text": None})
    assert d.release_date == ""
    assert d.text == ""


def test_song_update_changes_ignore_whitespace_and_trim_names():
    u = schemas.SongUpdate.model_validate({"group": "   ", "song": "  ", "text": "\n\n", "link": " http://u "})
    assert u.changes() == {"link": " http://u "}
    u = schemas.SongUpdate.model_validate({"group": " Coldplay ", "song": " Yellow "})
    assert u.changes() == {"group": "Coldplay", "song": "Yellow"}
