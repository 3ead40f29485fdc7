# jellytui/player.py

import logging
import subprocess
from typing import List

from .errors import ExecError
from .models import CatalogRecord

logger = logging.getLogger(__name__)

DEFAULT_PLAYER = "mpv"

class Player:
    """Hands stream locators to an external player.

    Playback is not tracked; the handles are only kept so that players which
    have exited get reaped. Players still running when the app exits keep
    running in their own session.
    """

    def __init__(self, executable: str = DEFAULT_PLAYER):
        self.executable = executable
        self.children: List[subprocess.Popen] = []

    def command(self, locator: str) -> List[str]:
        return [self.executable, locator]

    def reap(self) -> int:
        """Collects players that have exited. Returns how many are still running."""
        self.children = [proc for proc in self.children if proc.poll() is None]
        return len(self.children)

    def play(self, record: CatalogRecord) -> subprocess.Popen:
        if not record.stream_locator:
            raise ExecError(f"{record.display_title or record.id} is not playable")

        argv = self.command(record.stream_locator)
        logger.info("playing %s (%s) with %s", record.title, record.id, self.executable)
        try:
            # own session and no stdio: the player must not draw over the tui or die with it
            proc = subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            raise ExecError(f"failed to start {self.executable}: {e}") from e
        self.reap()
        self.children.append(proc)
        return proc
