# jellytui/tui/events.py

from dataclasses import dataclass, field
from typing import List

from ..models import CatalogQuery, CatalogRecord, SessionProfile
from .state import View

# --- events: everything the loop consumes ---
@dataclass(frozen=True)
class KeyPressed:
    key: str

@dataclass(frozen=True)
class Resized:
    width: int
    height: int

@dataclass(frozen=True)
class FetchSucceeded:
    view: View
    records: List[CatalogRecord] = field(default_factory=list)

@dataclass(frozen=True)
class FetchFailed:
    view: View
    error: Exception

@dataclass(frozen=True)
class PlayFailed:
    error: Exception

# --- commands: side effects the navigator asks the app to run ---
@dataclass(frozen=True)
class FetchCommand:
    view: View
    query: CatalogQuery
    profile: SessionProfile  # snapshot taken when the fetch is dispatched

@dataclass(frozen=True)
class PlayCommand:
    record: CatalogRecord

@dataclass(frozen=True)
class QuitCommand:
    pass
