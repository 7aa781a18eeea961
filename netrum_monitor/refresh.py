"""Periodic background refresh of the node list."""

import asyncio
import logging
import time
from enum import Enum
from typing import Callable, Sequence

from netrum_monitor.cache import NodeCache
from netrum_monitor.models import Node

logger = logging.getLogger(__name__)

REFRESH_INTERVAL = 30  # seconds


class RefreshState(Enum):
    IDLE = "idle"
    FETCHING_INITIAL = "fetching-initial"
    FETCHING_BACKGROUND = "fetching-background"
    ERROR = "error"


class RefreshLoop:
    """Owns the countdown and the in-flight flag for node list refreshes.

    The UI calls tick() once per second. The flag is a plain bool: everything
    runs on one event loop, and the blocking fetch itself sits in an executor.
    """

    def __init__(
        self,
        cache: NodeCache,
        fetch_nodes: Callable[[], Sequence[Node]],
        interval: int = REFRESH_INTERVAL,
        on_change: Callable[["RefreshLoop"], None] | None = None,
    ) -> None:
        self.cache = cache
        self.fetch_nodes = fetch_nodes
        self.interval = interval
        self.on_change = on_change
        self.state = RefreshState.IDLE
        self.remaining = interval
        self.in_flight = False
        self.running = False
        self.error: str | None = None
        self.last_updated_at: float | None = None
        self.requests_issued = 0
        self.task: asyncio.Task | None = None

    async def start(self) -> None:
        """Cache-first start: only fetch when the cache is still empty."""
        self.running = True
        self.remaining = self.interval
        if self.cache.has_data:
            self.state = RefreshState.IDLE
            self.last_updated_at = self.cache.updated_at
            self._notify()
            return
        await self._fetch(RefreshState.FETCHING_INITIAL)

    def stop(self) -> None:
        self.running = False

    def tick(self) -> asyncio.Task | None:
        """Advance the countdown; returns the fetch task when one was started."""
        if not self.running or self.in_flight:
            return None
        self.remaining -= 1
        if self.remaining > 0:
            self._notify()
            return None
        return self._schedule()

    def force_refresh(self) -> asyncio.Task | None:
        if self.in_flight:
            return None
        return self._schedule()

    def _schedule(self) -> asyncio.Task:
        # Claim the flag before the task runs so a second tick cannot queue another fetch
        self._begin(RefreshState.FETCHING_BACKGROUND)
        self.task = asyncio.ensure_future(self._run_fetch())
        return self.task

    async def _fetch(self, state: RefreshState) -> None:
        if self.in_flight:
            return
        self._begin(state)
        await self._run_fetch()

    def _begin(self, state: RefreshState) -> None:
        self.in_flight = True
        self.requests_issued += 1
        self.state = state
        self._notify()

    async def _run_fetch(self) -> None:
        try:
            nodes = await asyncio.get_event_loop().run_in_executor(None, self.fetch_nodes)
        except Exception as exc:
            self.error = str(exc) or "Failed to load nodes"
            self.state = RefreshState.ERROR
            logger.warning("Node list refresh failed: %s", self.error)
        else:
            self.cache.write(nodes)
            self.error = None
            self.last_updated_at = time.time()
            self.state = RefreshState.IDLE
            logger.info("Node list refreshed: %d nodes", len(nodes))
        finally:
            self.in_flight = False
            self.remaining = self.interval
        self._notify()

    def _notify(self) -> None:
        # Results arriving after stop() still land in the cache but no view is told
        if self.running and self.on_change is not None:
            self.on_change(self)
