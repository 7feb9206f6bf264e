"""The sampling-render loop."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

from livetop.config import REFRESH_INTERVAL
from livetop.input import InputGovernor
from livetop.models import AppState, DashboardModel, SystemSnapshot
from livetop.transform import build_model

logger = logging.getLogger(__name__)


class Provider(Protocol):
    def refresh_all(self) -> None: ...

    def snapshot(self) -> SystemSnapshot: ...


class Renderer(Protocol):
    def draw(self, model: DashboardModel) -> None: ...


class RunLoop:
    """
    Owns the cadence: draw, poll input, refresh metrics, sleep.

    A quit seen while polling lets the current cycle finish its refresh and
    sleep; the loop then stops before drawing again. Errors from drawing,
    input or the provider propagate out of `run()`.
    """

    def __init__(
        self,
        provider: Provider,
        renderer: Renderer,
        governor: InputGovernor,
        state: AppState,
        interval: float = REFRESH_INTERVAL,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self._provider = provider
        self._renderer = renderer
        self._governor = governor
        self._state = state
        self._interval = interval
        self._sleep = sleep
        self._cycles = 0

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def cycles(self) -> int:
        """Number of completed cycles."""
        return self._cycles

    async def run(self) -> None:
        logger.info("Run loop started (interval %.2fs)", self._interval)
        while self._state.running:
            self._renderer.draw(build_model(self._provider.snapshot()))
            await self._governor.poll_and_handle()
            self._provider.refresh_all()
            await self._sleep(self._interval)
            self._cycles += 1
            logger.debug("Cycle %d complete", self._cycles)
        logger.info("Run loop stopped after %d cycles", self._cycles)
