# jellytui/logs.py

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

log_dir = Path(os.environ.get("XDG_STATE_HOME") or Path.home() / ".local" / "state") / "jellyfin-tui"
log_file = log_dir / "jellyfin-tui.log"

FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

def setup_logging(debug: bool = False, path: Optional[Path] = None) -> Path:
    """Sends the package's logs to a rotating file; the terminal belongs to the ui.

    Safe to call more than once, earlier handlers are replaced.
    """
    path = path or log_file
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    handler.setFormatter(logging.Formatter(FORMAT))

    logger = logging.getLogger("jellytui")
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.propagate = False
    return path
