# jellytui/tui/app.py

import asyncio
import logging
import signal
from typing import Callable, Optional

from rich.console import Console
from rich.live import Live

from .events import (
    KeyPressed, Resized, PlayFailed, FetchCommand, PlayCommand, QuitCommand,
)
from .fetch import FetchOrchestrator
from .keys import KeyReader
from .navigation import Navigator, Event, Command
from .render import render
from .state import ViewState
from .. import config
from ..api import APIClient
from ..errors import ExecError
from ..models import SessionProfile
from ..player import Player

logger = logging.getLogger(__name__)

class TUIApp:
    def __init__(self, profile: SessionProfile, api: Optional[APIClient] = None, player: Optional[Player] = None,
                 save_profile: Callable[[SessionProfile], None] = config.save_profile,
                 console: Optional[Console] = None):
        self.api = api or APIClient()
        self.player = player or Player()
        self.state = ViewState(profile)
        self.navigator = Navigator(self.state, save_profile=save_profile)
        self.console = console or Console()
        self.running = True
        self.events: asyncio.Queue = asyncio.Queue()
        self.fetcher = FetchOrchestrator(self.api, self.events)

    # --- event handling ---
    def process(self, event: Event):
        """Feeds one event through the navigator and runs the command it returns."""
        command = self.navigator.handle(event)
        if command is not None:
            self.execute(command)

    def execute(self, command: Command):
        if isinstance(command, QuitCommand):
            self.running = False
        elif isinstance(command, FetchCommand):
            self.fetcher.dispatch(command)
        elif isinstance(command, PlayCommand):
            try:
                self.player.play(command.record)
            except ExecError as e:
                logger.error("%s", e)
                self.events.put_nowait(PlayFailed(e))

    def post(self, event: Event):
        self.events.put_nowait(event)

    # --- terminal wiring ---
    def _install_signal_handlers(self, loop: asyncio.AbstractEventLoop):
        if hasattr(signal, "SIGWINCH"):
            loop.add_signal_handler(signal.SIGWINCH, self._on_resize)
        if hasattr(signal, "SIGINT"):
            try:
                loop.add_signal_handler(signal.SIGINT, self.post, KeyPressed("ctrl+c"))
            except NotImplementedError:  # windows event loops
                pass

    def _remove_signal_handlers(self, loop: asyncio.AbstractEventLoop):
        for name in ("SIGWINCH", "SIGINT"):
            if hasattr(signal, name):
                try:
                    loop.remove_signal_handler(getattr(signal, name))
                except NotImplementedError:
                    pass

    def _on_resize(self):
        width, height = self.console.size
        self.post(Resized(width, height))

    async def _event_loop(self, live: Live):
        while self.running:
            event = await self.events.get()
            self.process(event)
            self.player.reap()
            live.update(render(self.state), refresh=True)

    async def run(self):
        """run the main application loop."""
        loop = asyncio.get_running_loop()
        reader = KeyReader(lambda key: loop.call_soon_threadsafe(self.post, KeyPressed(key)))
        self.state.width, self.state.height = self.console.size
        logger.info("starting against %s", self.state.profile.server_url)

        with Live(render(self.state), console=self.console, screen=True, auto_refresh=False,
                  redirect_stderr=False, transient=True) as live:
            self._install_signal_handlers(loop)
            reader.start()
            try:
                await self._event_loop(live)
            finally:
                reader.stop()
                self._remove_signal_handlers(loop)
        # in-flight fetches are abandoned with the process, nothing waits on them
        await self.api.close()

async def run_tui(profile: SessionProfile, player: Optional[Player] = None):
    await TUIApp(profile, player=player).run()
