# jellytui/tui/keys.py

import os
import sys
import threading
from typing import Callable, Optional

ESCAPE_SEQUENCES = {
    "[A": "up", "[B": "down", "[C": "right", "[D": "left",
    "OA": "up", "OB": "down", "OC": "right", "OD": "left",
    "[H": "home", "[F": "end", "OH": "home", "OF": "end",
    "[1~": "home", "[4~": "end", "[7~": "home", "[8~": "end",
    "[5~": "pgup", "[6~": "pgdn", "[3~": "delete",
    "[Z": "shift+tab",
}

CONTROL_KEYS = {
    "\r": "enter", "\n": "enter",
    "\t": "tab",
    "\x7f": "backspace", "\x08": "backspace",
    "\x03": "ctrl+c",
    "\x15": "ctrl+u",
}

def decode_key(data: str) -> Optional[str]:
    """Maps the bytes of one key press to the key names the navigator understands."""
    if not data:
        return None
    if data == "\x1b":
        return "esc"
    if data.startswith("\x1b"):
        return ESCAPE_SEQUENCES.get(data[1:], "esc")
    if data in CONTROL_KEYS:
        return CONTROL_KEYS[data]
    if len(data) == 1 and not data.isprintable():
        return None
    return data

class KeyReader:
    """Reads the keyboard on a daemon thread and hands each key name to on_key."""

    def __init__(self, on_key: Callable[[str], None]):
        self.on_key = on_key
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self):
        self._thread = threading.Thread(target=self._run, name="key-reader", daemon=True)
        self._thread.start()

    def stop(self):
        self._stop_event.set()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=0.5)

    def _run(self):
        if os.name == "nt":
            self._run_windows()
        else:
            self._run_posix()

    def _run_windows(self):
        import msvcrt
        import time

        while not self._stop_event.is_set():
            if not msvcrt.kbhit():
                time.sleep(0.05)
                continue
            key = _read_key_windows()
            if key:
                self.on_key(key)

    def _run_posix(self):
        import select
        import termios
        import tty

        fd = sys.stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        # cbreak, not raw: output post-processing must stay on for the renderer
        tty.setcbreak(fd)
        try:
            while not self._stop_event.is_set():
                readable, _, _ = select.select([fd], [], [], 0.1)
                if not readable:
                    continue
                key = decode_key(_read_key_posix(fd))
                if key:
                    self.on_key(key)
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

def _utf8_length(lead: int) -> int:
    """Bytes in the utf-8 sequence that starts with lead."""
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1

def _read_key_posix(fd: int) -> str:
    import select

    raw = os.read(fd, 1)
    if not raw:
        return ""
    # one key press, multi-byte characters included, arrives as a whole sequence
    need = _utf8_length(raw[0])
    while len(raw) < need:
        chunk = os.read(fd, need - len(raw))
        if not chunk:
            break
        raw += chunk
    data = raw.decode(errors="ignore")
    if data != "\x1b":
        return data
    # an escape sequence arrives in one burst; a lone esc does not
    while select.select([fd], [], [], 0.02)[0]:
        data += os.read(fd, 1).decode(errors="ignore")
        if len(data) > 2 and (data[-1].isalpha() or data[-1] == "~"):
            break
    return data

def _read_key_windows() -> Optional[str]:
    import msvcrt

    ch = msvcrt.getwch()
    if ch in ("\x00", "\xe0"):
        mapping = {
            "H": "up", "P": "down", "K": "left", "M": "right",
            "I": "pgup", "Q": "pgdn", "G": "home", "O": "end",
        }
        return mapping.get(msvcrt.getwch())
    return decode_key(ch)
