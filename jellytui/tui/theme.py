# jellytui/tui/theme.py

from rich import box

# styles
STYLE_NORMAL = "white"
STYLE_DIM = "dim"
STYLE_BOLD = "bold"
STYLE_FOCUSED = "bold yellow"
STYLE_INVERSE = "black on white"
STYLE_ERROR = "bold red"

# component styles
STYLE_HEADER = "bold"
STYLE_HEADER_PATH = "dim"
STYLE_KIND = "dim"
STYLE_INPUT = "bold"
STYLE_CURSOR = "reverse"

# box styles
BOX_STYLE = box.SIMPLE
BOX_STYLE_FOCUSED = box.HEAVY
