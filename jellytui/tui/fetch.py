# jellytui/tui/fetch.py

import asyncio
import logging
from typing import Set

from ..api import APIClient
from ..errors import CatalogError
from .events import FetchCommand, FetchFailed, FetchSucceeded

logger = logging.getLogger(__name__)

class FetchOrchestrator:
    """Runs each fetch as its own task and posts exactly one result event back to the loop.

    Tasks are never cancelled and never coalesced; the only thing a task touches
    is the event queue.
    """

    def __init__(self, api: APIClient, events: asyncio.Queue):
        self.api = api
        self.events = events
        self._tasks: Set[asyncio.Task] = set()

    def dispatch(self, command: FetchCommand) -> asyncio.Task:
        task = asyncio.create_task(self._run(command), name=f"fetch-{command.view.value}")
        # keep a reference until done so the task is not garbage collected mid-flight
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run(self, command: FetchCommand):
        try:
            records = await self.api.fetch(command.profile, command.query)
        except CatalogError as e:
            logger.warning("%s fetch for %s failed: %s", command.query.name, command.view.value, e)
            event = FetchFailed(command.view, e)
        except Exception as e:
            logger.exception("%s fetch for %s crashed", command.query.name, command.view.value)
            event = FetchFailed(command.view, e)
        else:
            event = FetchSucceeded(command.view, records)
        await self.events.put(event)

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    async def join(self):
        """Waits for every outstanding fetch to post its result."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))
            # let the done callbacks drop finished tasks
            await asyncio.sleep(0)
