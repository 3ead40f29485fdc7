# jellytui/tui/state.py

from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..models import CatalogRecord, RecordKind, SessionProfile, menu_entry

class View(str, Enum):
    MAIN = "main"
    MOVIES = "movies"
    TV_SHOWS = "tvshows"
    SEASONS = "seasons"
    EPISODES = "episodes"
    SEARCH = "search"
    CONFIGURE = "configure"

VIEW_TITLES = {
    View.MAIN: "Jellyfin TUI",
    View.MOVIES: "Movies",
    View.TV_SHOWS: "TV Shows",
    View.SEASONS: "Seasons",
    View.EPISODES: "Episodes",
    View.SEARCH: "Search",
    View.CONFIGURE: "Configure",
}

# views that show a list of records
LIST_VIEWS = (View.MAIN, View.MOVIES, View.TV_SHOWS, View.SEASONS, View.EPISODES, View.SEARCH)

MAIN_MENU = [
    menu_entry("Movies"),
    menu_entry("TV Shows"),
    menu_entry("Search", RecordKind.ACTION),
    menu_entry("Configure", RecordKind.ACTION),
]

SEARCH_INPUT = "input"
SEARCH_RESULTS = "results"

Frame = Tuple[View, Optional[CatalogRecord]]

class ViewState:
    """Everything the screen shows. Only the navigator mutates it."""

    def __init__(self, profile: Optional[SessionProfile] = None):
        self.profile = profile or SessionProfile()
        self.active_view = View.MAIN
        self.selection_context: Optional[CatalogRecord] = None
        self.nav_stack: List[Frame] = []
        self.buffers: Dict[View, List[CatalogRecord]] = {view: [] for view in LIST_VIEWS}
        self.buffers[View.MAIN] = list(MAIN_MENU)
        self.cursors: Dict[View, int] = {view: 0 for view in LIST_VIEWS}
        self.pending: Dict[View, int] = {view: 0 for view in LIST_VIEWS}
        self.last_error: Optional[Exception] = None

        self.search_query = ""
        self.search_focus = SEARCH_INPUT

        self.config_fields = [self.profile.server_url, self.profile.api_key]
        self.config_focus = 0

        self.width = 80
        self.height = 24

    # --- lists ---
    def records(self, view: Optional[View] = None) -> List[CatalogRecord]:
        return self.buffers.get(view or self.active_view, [])

    def cursor(self, view: Optional[View] = None) -> int:
        return self.cursors.get(view or self.active_view, 0)

    @property
    def selected(self) -> Optional[CatalogRecord]:
        records = self.records()
        if not records:
            return None
        return records[min(self.cursor(), len(records) - 1)]

    def move_cursor(self, delta: int):
        view = self.active_view
        records = self.buffers.get(view)
        if not records:
            return
        self.cursors[view] = max(0, min(len(records) - 1, self.cursors[view] + delta))

    def jump_cursor(self, index: int):
        view = self.active_view
        records = self.buffers.get(view)
        if records:
            self.cursors[view] = max(0, min(len(records) - 1, index))

    def store(self, view: View, records: List[CatalogRecord]):
        """Replaces a view's buffer wholesale."""
        if view == View.EPISODES:
            records = sorted(records, key=lambda r: r.sort_key)
        self.buffers[view] = list(records)
        self.cursors[view] = 0

    # --- navigation ---
    def enter(self, view: View, context: Optional[CatalogRecord] = None):
        self.nav_stack.append((self.active_view, self.selection_context))
        self.active_view = view
        self.selection_context = context
        self.last_error = None

    def back(self, target: View):
        """Returns to target, restoring the selection context of the frame it left."""
        context = None
        if self.nav_stack:
            _, context = self.nav_stack.pop()
        if target == View.MAIN:
            self.nav_stack.clear()
            context = None
        self.active_view = target
        self.selection_context = context
        self.last_error = None

    def home(self):
        self.nav_stack.clear()
        self.active_view = View.MAIN
        self.selection_context = None

    @property
    def breadcrumbs(self) -> List[str]:
        """Titles from the main menu down to the active view."""
        frames = self.nav_stack + [(self.active_view, self.selection_context)]
        crumbs = []
        for view, context in frames:
            if view in (View.SEASONS, View.EPISODES) and context is not None:
                crumbs.append(context.title)
            else:
                crumbs.append(VIEW_TITLES[view])
        return crumbs

    @property
    def is_loading(self) -> bool:
        return self.pending.get(self.active_view, 0) > 0
