from typing import List, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _camel(name: str, camel: str):
    """Accept both the python and the camelCase spelling, emit camelCase."""
    return {
        "validation_alias": AliasChoices(camel, name),
        "serialization_alias": camel,
    }


class SongBase(BaseModel):
    group: str
    song: str
    text: str = ''
    release_date: str = Field(default='', **_camel('release_date', 'releaseDate'))
    link: str = ''


class SongCreate(SongBase):
    @field_validator('group', 'song')
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError('must not be blank')
        return value


_TRIMMED_FIELDS = ('group', 'song')


class SongUpdate(BaseModel):
    group: Optional[str] = None
    song: Optional[str] = None
    text: Optional[str] = None
    release_date: Optional[str] = Field(default=None, **_camel('release_date', 'releaseDate'))
    link: Optional[str] = None

    def changes(self) -> dict:
        """Fields the caller actually supplied; blank strings mean "leave as is".

        Group and song names are stored trimmed, as on create.
        """
        changes = {}
        for key, value in self.model_dump(exclude_unset=True).items():
            if value is None or not value.strip():
                continue
            changes[key] = value.strip() if key in _TRIMMED_FIELDS else value
        return changes


class Song(SongBase):
    id: int
    # ORM rows expose the group name as `group_name`; `group` is the relationship
    group: str = Field(validation_alias=AliasChoices('group_name', 'group'))
    model_config = ConfigDict(from_attributes=True)


class SongFilter(BaseModel):
    song: str = ''
    group: str = ''
    text: str = ''
    release_date: str = ''
    link: str = ''


class SongDetails(BaseModel):
    """Payload returned by the external music-info API."""
    release_date: str = Field(default='', **_camel('release_date', 'releaseDate'))
    text: str = ''
    link: str = ''

    @field_validator('release_date', 'text', 'link', mode='before')
    @classmethod
    def _null_as_empty(cls, value):
        return '' if value is None else value


class PaginatedSongs(BaseModel):
    songs: List[Song]
    total_pages: int = Field(**_camel('total_pages', 'totalPages'))
    current_page: int = Field(**_camel('current_page', 'currentPage'))
    page_size: int = Field(**_camel('page_size', 'pageSize'))
