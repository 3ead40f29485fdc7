# jellytui/tui/navigation.py

import logging
from typing import Callable, Optional, Union

from ..errors import ConfigError
from ..models import CatalogQuery, CatalogRecord, SessionProfile
from .. import config
from .events import (
    KeyPressed, Resized, FetchSucceeded, FetchFailed, PlayFailed,
    FetchCommand, PlayCommand, QuitCommand,
)
from .state import ViewState, View, SEARCH_INPUT, SEARCH_RESULTS

logger = logging.getLogger(__name__)

Event = Union[KeyPressed, Resized, FetchSucceeded, FetchFailed, PlayFailed]
Command = Union[FetchCommand, PlayCommand, QuitCommand]

BACK_TARGETS = {
    View.EPISODES: View.SEASONS,
    View.SEASONS: View.TV_SHOWS,
    View.MOVIES: View.MAIN,
    View.TV_SHOWS: View.MAIN,
    View.SEARCH: View.MAIN,
}

QUIT_KEYS = ("q", "ctrl+c")
BACK_KEYS = ("esc", "b")
SELECT_KEY = "enter"
PAGE = 10

# views where printable keys are text, not commands
TEXT_VIEWS = (View.SEARCH, View.CONFIGURE)

class Navigator:
    """The transition table: one event in, state mutated, at most one command out."""

    def __init__(self, state: ViewState, save_profile: Callable[[SessionProfile], None] = config.save_profile):
        self.state = state
        self.save_profile = save_profile

    def handle(self, event: Event) -> Optional[Command]:
        try:
            return self._dispatch(event)
        except Exception as e:
            # a bad event must not take the loop down
            logger.exception("error while handling %r", event)
            self.state.last_error = e
            return None

    def _dispatch(self, event: Event) -> Optional[Command]:
        if isinstance(event, KeyPressed):
            return self.on_key(event.key)
        if isinstance(event, FetchSucceeded):
            return self.on_fetch_succeeded(event)
        if isinstance(event, FetchFailed):
            return self.on_fetch_failed(event)
        if isinstance(event, PlayFailed):
            self.state.last_error = event.error
            return None
        if isinstance(event, Resized):
            self.state.width, self.state.height = event.width, event.height
            return None
        logger.warning("ignoring unknown event %r", event)
        return None

    # --- results ---
    def on_fetch_succeeded(self, event: FetchSucceeded) -> None:
        state = self.state
        state.pending[event.view] = max(0, state.pending.get(event.view, 0) - 1)
        # results for a view the user already left are kept, not dropped
        state.store(event.view, event.records)
        if event.view == state.active_view:
            state.last_error = None
            if event.view == View.SEARCH:
                state.search_focus = SEARCH_RESULTS if event.records else SEARCH_INPUT
        return None

    def on_fetch_failed(self, event: FetchFailed) -> None:
        state = self.state
        state.pending[event.view] = max(0, state.pending.get(event.view, 0) - 1)
        state.last_error = event.error
        return None

    # --- keys ---
    def on_key(self, key: str) -> Optional[Command]:
        view = self.state.active_view
        if key == "ctrl+c" or (key in QUIT_KEYS and view not in TEXT_VIEWS):
            return QuitCommand()

        if view == View.CONFIGURE:
            return self.on_configure_key(key)
        if view == View.SEARCH and self.state.search_focus == SEARCH_INPUT:
            return self.on_search_input_key(key)

        if key == "esc" or (key in BACK_KEYS and view not in TEXT_VIEWS):
            return self.back()
        if view == View.SEARCH and key == "tab":
            self.state.search_focus = SEARCH_INPUT
            return None
        if view == View.SEARCH and key == "up" and self.state.cursor() == 0:
            self.state.search_focus = SEARCH_INPUT
            return None
        if self.move(key):
            return None
        if key == SELECT_KEY:
            return self.select(self.state.selected)
        return None

    def move(self, key: str) -> bool:
        state = self.state
        if key in ("up", "k"):
            state.move_cursor(-1)
        elif key in ("down", "j"):
            state.move_cursor(1)
        elif key == "pgup":
            state.move_cursor(-PAGE)
        elif key == "pgdn":
            state.move_cursor(PAGE)
        elif key in ("home", "g"):
            state.jump_cursor(0)
        elif key in ("end", "G"):
            state.jump_cursor(len(state.records()) - 1)
        else:
            return False
        return True

    def back(self) -> None:
        target = BACK_TARGETS.get(self.state.active_view)
        if target is not None:
            self.state.back(target)
        else:
            # nowhere to go: esc only dismisses an error
            self.state.last_error = None
        return None

    # --- selection ---
    def select(self, record: Optional[CatalogRecord]) -> Optional[Command]:
        if record is None:
            return None
        view = self.state.active_view
        if view == View.MAIN:
            return self.select_menu(record)
        if not record.id:
            # placeholder rows
            return None
        if view in (View.MOVIES, View.TV_SHOWS):
            return self.enter(View.SEASONS, CatalogQuery.seasons(record.id), context=record)
        if view == View.SEASONS:
            return self.enter(View.EPISODES, CatalogQuery.episodes(record.id), context=record)
        if view in (View.EPISODES, View.SEARCH):
            return PlayCommand(record)
        return None

    def select_menu(self, record: CatalogRecord) -> Optional[Command]:
        state = self.state
        if record.title == "Movies":
            return self.enter(View.MOVIES, CatalogQuery.movies())
        if record.title == "TV Shows":
            return self.enter(View.TV_SHOWS, CatalogQuery.series())
        if record.title == "Search":
            state.enter(View.SEARCH)
            state.search_query = ""
            state.search_focus = SEARCH_INPUT
            return None
        if record.title == "Configure":
            state.enter(View.CONFIGURE)
            state.config_fields = [state.profile.server_url, state.profile.api_key]
            state.config_focus = 0
            return None
        return None

    def enter(self, view: View, query: CatalogQuery, context: Optional[CatalogRecord] = None) -> FetchCommand:
        state = self.state
        state.enter(view, context)
        return self.fetch(view, query)

    def fetch(self, view: View, query: CatalogQuery) -> FetchCommand:
        state = self.state
        state.pending[view] = state.pending.get(view, 0) + 1
        logger.debug("fetch %s for %s", query.name, view.value)
        return FetchCommand(view=view, query=query, profile=state.profile.model_copy())

    # --- search ---
    def on_search_input_key(self, key: str) -> Optional[Command]:
        state = self.state
        if key == "esc":
            return self.back()
        if key == "enter":
            if not state.search_query:
                return None
            state.last_error = None
            return self.fetch(View.SEARCH, CatalogQuery.search(state.search_query))
        if key in ("tab", "down"):
            if state.records(View.SEARCH):
                state.search_focus = SEARCH_RESULTS
            return None
        state.search_query = edit(state.search_query, key)
        return None

    # --- configure ---
    def on_configure_key(self, key: str) -> Optional[Command]:
        state = self.state
        if key in ("tab", "shift+tab", "up", "down"):
            state.config_focus = 1 - state.config_focus
            return None
        if key == "enter":
            return self.commit_profile()
        if key == "esc":
            # no way back without committing
            return None
        i = state.config_focus
        state.config_fields[i] = edit(state.config_fields[i], key)
        return None

    def commit_profile(self) -> None:
        state = self.state
        server_url, api_key = state.config_fields
        profile = SessionProfile(server_url=server_url.strip(), api_key=api_key.strip())
        try:
            self.save_profile(profile)
        except ConfigError as e:
            logger.error("%s", e)
            state.last_error = e
            return None
        state.profile = profile
        state.home()
        state.last_error = None
        return None

def edit(text: str, key: str) -> str:
    """Applies one key to a single-line text field."""
    if key == "backspace":
        return text[:-1]
    if key == "ctrl+u":
        return ""
    if len(key) == 1 and key.isprintable():
        return text + key
    return text
