# jellytui/tui/components.py

from typing import List, Optional, Sequence, Tuple
from rich.console import Console, ConsoleOptions, RenderResult
from rich.panel import Panel
from rich.text import Text
from rich.align import Align

from . import theme
from ..models import CatalogRecord, RecordKind

def format_record(record: CatalogRecord, is_selected: bool) -> Text:
    style = theme.STYLE_FOCUSED if is_selected else theme.STYLE_NORMAL
    line = Text.assemble((" > " if is_selected else "   "), (record.display_title or "untitled", style))
    if record.kind not in (RecordKind.CATEGORY, RecordKind.ACTION):
        line.append(f"  {record.kind.value.lower()}", style=theme.STYLE_KIND)
    return line

def visible_window(count: int, cursor: int, height: int) -> Tuple[int, int]:
    """The slice of a list to draw so that the cursor row stays on screen."""
    height = max(1, height)
    if count <= height:
        return 0, count
    start = max(0, min(cursor - height // 2, count - height))
    return start, start + height

# --- record list with a highlighted cursor row ---
class RecordList:
    def __init__(self, records: Sequence[CatalogRecord], cursor: int, title: Optional[str] = None,
                 is_focused: bool = True, empty_text: str = "nothing here", height: Optional[int] = None):
        self.records = records
        self.height = height
        self.cursor = cursor
        self.title = title
        self.is_focused = is_focused
        self.empty_text = empty_text

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        # top and bottom border rows
        height = (self.height or options.height or options.max_height or console.height) - 2
        if not self.records:
            body = Align.center(Text(self.empty_text, style=theme.STYLE_DIM))
        else:
            start, stop = visible_window(len(self.records), self.cursor, height)
            body = Text()
            for i in range(start, stop):
                if i > start:
                    body.append("\n")
                body.append(format_record(self.records[i], self.is_focused and i == self.cursor))
        yield Panel(
            body,
            title=self.title or "",
            box=theme.BOX_STYLE_FOCUSED if self.is_focused else theme.BOX_STYLE,
            border_style=theme.STYLE_FOCUSED if self.is_focused else theme.STYLE_DIM,
        )

# --- single line text input ---
def text_field(label: str, value: str, is_focused: bool, secret: bool = False) -> Text:
    shown = "*" * len(value) if secret and not is_focused else value
    line = Text.assemble((f"{label}: ", theme.STYLE_BOLD if is_focused else theme.STYLE_DIM))
    line.append(shown, style=theme.STYLE_INPUT if is_focused else theme.STYLE_NORMAL)
    if is_focused:
        line.append(" ", style=theme.STYLE_CURSOR)
    return line

# --- footer / key hints ---
class Footer:
    def __init__(self, hints: List[Tuple[str, str]], server_url: str):
        self.hints = hints
        self.server_url = server_url

    def __rich__(self) -> Panel:
        text = Text()
        for i, (key, action) in enumerate(self.hints):
            if i:
                text.append("  ")
            text.append(key, style=theme.STYLE_BOLD)
            text.append(f" {action}", style=theme.STYLE_DIM)
        text.append(f"\n{self.server_url}", style=theme.STYLE_DIM)
        return Panel(text, box=theme.BOX_STYLE, border_style=theme.STYLE_DIM)
