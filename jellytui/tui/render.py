# jellytui/tui/render.py

from typing import List, Tuple

from rich.align import Align
from rich.console import Group, RenderableType
from rich.layout import Layout
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from . import theme
from .components import Footer, RecordList, text_field
from .state import ViewState, View, VIEW_TITLES, SEARCH_INPUT, SEARCH_RESULTS

HINTS = {
    View.MAIN: [("enter", "open"), ("q", "quit")],
    View.MOVIES: [("enter", "open"), ("esc", "back"), ("q", "quit")],
    View.TV_SHOWS: [("enter", "seasons"), ("esc", "back"), ("q", "quit")],
    View.SEASONS: [("enter", "episodes"), ("esc", "back"), ("q", "quit")],
    View.EPISODES: [("enter", "play"), ("esc", "back"), ("q", "quit")],
    View.SEARCH: [("enter", "search/play"), ("tab", "results"), ("esc", "back"), ("ctrl+c", "quit")],
    View.CONFIGURE: [("tab", "next field"), ("enter", "save"), ("ctrl+c", "quit")],
}

ERROR_HINTS = {
    View.MAIN: "press esc to dismiss",
    View.CONFIGURE: "press enter to save again",
}

HEADER_SIZE = 1
FOOTER_SIZE = 4
QUERY_SIZE = 3

def render(state: ViewState) -> Layout:
    """Builds the whole screen from the view state. Reads the state, never writes it."""
    layout = Layout(name="root")
    layout.split(
        Layout(render_header(state), name="header", size=HEADER_SIZE),
        Layout(render_body(state), name="body", ratio=1),
        Layout(Footer(hints(state), state.profile.server_url), name="footer", size=FOOTER_SIZE),
    )
    return layout

def hints(state: ViewState) -> List[Tuple[str, str]]:
    if state.active_view == View.SEARCH and state.search_focus == SEARCH_RESULTS:
        return [("enter", "play"), ("tab", "query"), ("esc", "back"), ("ctrl+c", "quit")]
    return HINTS[state.active_view]

def render_header(state: ViewState) -> Text:
    crumbs = state.breadcrumbs
    header = Text()
    header.append(crumbs[0], style=theme.STYLE_HEADER)
    for crumb in crumbs[1:]:
        header.append(" / ", style=theme.STYLE_DIM)
        header.append(crumb, style=theme.STYLE_HEADER_PATH)
    if state.is_loading:
        header.append("  loading...", style=theme.STYLE_DIM)
    header.truncate(state.width, overflow="ellipsis")
    return header

def body_height(state: ViewState) -> int:
    """Rows left for the body once the header and footer are drawn, at the last known terminal size."""
    return max(3, state.height - HEADER_SIZE - FOOTER_SIZE)

def render_body(state: ViewState) -> RenderableType:
    if state.last_error is not None:
        return render_error(state)
    view = state.active_view
    if view == View.SEARCH:
        return render_search(state)
    if view == View.CONFIGURE:
        return render_configure(state)
    empty_text = "loading..." if state.is_loading else "nothing here"
    return RecordList(state.records(), state.cursor(), title=VIEW_TITLES[view], empty_text=empty_text,
                      height=body_height(state))

def render_error(state: ViewState) -> Panel:
    text = Text()
    text.append("error: ", style=theme.STYLE_ERROR)
    text.append(str(state.last_error) or type(state.last_error).__name__)
    text.append(f"\n\n{ERROR_HINTS.get(state.active_view, 'press esc to go back')}", style=theme.STYLE_DIM)
    return Panel(Align.center(text, vertical="middle"), title=escape(VIEW_TITLES[state.active_view]),
                 box=theme.BOX_STYLE, border_style=theme.STYLE_ERROR)

def render_search(state: ViewState) -> Layout:
    input_focused = state.search_focus == SEARCH_INPUT
    query = Panel(
        text_field("Search", state.search_query, input_focused),
        box=theme.BOX_STYLE_FOCUSED if input_focused else theme.BOX_STYLE,
        border_style=theme.STYLE_FOCUSED if input_focused else theme.STYLE_DIM,
    )
    empty_text = "searching..." if state.is_loading else "type a search query and press enter"
    results = RecordList(state.records(View.SEARCH), state.cursor(View.SEARCH), title="Search Results",
                         is_focused=not input_focused, empty_text=empty_text,
                         height=body_height(state) - QUERY_SIZE)
    layout = Layout(name="search")
    layout.split(Layout(query, name="query", size=QUERY_SIZE), Layout(results, name="results", ratio=1))
    return layout

def render_configure(state: ViewState) -> Panel:
    server_url, api_key = state.config_fields
    form = Group(
        Text("Configure Jellyfin Connection\n", style=theme.STYLE_BOLD),
        text_field("Server URL", server_url, state.config_focus == 0),
        Text(""),
        text_field("API Key", api_key, state.config_focus == 1, secret=True),
        Text("\n(press enter to save and return to the main menu)", style=theme.STYLE_DIM),
    )
    return Panel(form, title="Configure", box=theme.BOX_STYLE_FOCUSED, border_style=theme.STYLE_FOCUSED)
