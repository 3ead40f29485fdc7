# jellytui/models.py

from enum import Enum
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field, ConfigDict, model_validator

# --- session ---
DEFAULT_SERVER_URL = "https://jellyfin.example.com"
DEFAULT_API_KEY = "your_api_key_here"

class SessionProfile(BaseModel):
    model_config = ConfigDict(extra='ignore')

    server_url: str = DEFAULT_SERVER_URL
    api_key: str = DEFAULT_API_KEY

# --- catalog records ---
class RecordKind(str, Enum):
    MOVIE = "Movie"
    SERIES = "Series"
    SEASON = "Season"
    EPISODE = "Episode"
    CATEGORY = "Category"
    ACTION = "Action"

PLAYABLE_KINDS = (RecordKind.MOVIE, RecordKind.EPISODE)

class CatalogRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = ""  # empty only for synthetic menu rows
    title: str
    kind: RecordKind
    parent_id: Optional[str] = None
    sequence_number: Optional[int] = Field(None, ge=0)
    display_title: str = ""
    stream_locator: str = ""

    @model_validator(mode='before')
    @classmethod
    def _default_display_title(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get('display_title'):
            data = {**data, 'display_title': data.get('title', '')}
        return data

    @property
    def is_playable(self) -> bool:
        return bool(self.stream_locator)

    @property
    def sort_key(self):
        """Episode ordering: absent sequence numbers sort before any number."""
        return (self.sequence_number is not None, self.sequence_number or 0)

def menu_entry(title: str, kind: RecordKind = RecordKind.CATEGORY) -> CatalogRecord:
    return CatalogRecord(title=title, kind=kind)

# --- queries ---
class CatalogQuery(BaseModel):
    """Describes one read-only request against the media server."""
    model_config = ConfigDict(frozen=True)

    name: str
    path: str
    params: Dict[str, str] = {}
    kind: Optional[RecordKind] = None  # used when the server reports an unknown type
    parent_id: Optional[str] = None

    @classmethod
    def movies(cls) -> "CatalogQuery":
        return cls(name="movies", path="/Items", kind=RecordKind.MOVIE,
                   params={"IncludeItemTypes": "Movie", "Recursive": "true"})

    @classmethod
    def series(cls) -> "CatalogQuery":
        return cls(name="series", path="/Items", kind=RecordKind.SERIES,
                   params={"IncludeItemTypes": "Series", "Recursive": "true"})

    @classmethod
    def seasons(cls, series_id: str) -> "CatalogQuery":
        return cls(name="seasons", path=f"/Shows/{series_id}/Seasons", kind=RecordKind.SEASON,
                   parent_id=series_id)

    @classmethod
    def episodes(cls, season_id: str) -> "CatalogQuery":
        return cls(name="episodes", path="/Items", kind=RecordKind.EPISODE, parent_id=season_id,
                   params={"ParentId": season_id, "SortBy": "SortName"})

    @classmethod
    def search(cls, text: str) -> "CatalogQuery":
        return cls(name="search", path="/Items", params={
            "SearchTerm": text,
            "Recursive": "true",
            "IncludeItemTypes": "Movie,Series,Episode",
        })

    @classmethod
    def custom(cls, path: str, params: Optional[Dict[str, str]] = None, kind: Optional[RecordKind] = None) -> "CatalogQuery":
        return cls(name="custom", path=path, params=params or {}, kind=kind)

# --- server wire models ---
class ServerItem(BaseModel):
    model_config = ConfigDict(
        validate_by_name=True,
        extra='ignore'  # jellyfin returns far more than we read
    )

    id: str = Field(..., alias='Id')
    name: str = Field("", alias='Name')
    type: Optional[str] = Field(None, alias='Type')
    media_type: Optional[str] = Field(None, alias='MediaType')
    index_number: Optional[int] = Field(None, alias='IndexNumber')
    parent_id: Optional[str] = Field(None, alias='ParentId')

class ItemsResponse(BaseModel):
    model_config = ConfigDict(validate_by_name=True, extra='ignore')

    items: List[ServerItem] = Field(..., alias='Items')
    total_record_count: Optional[int] = Field(None, alias='TotalRecordCount')
