import asyncio
import logging
from datetime import datetime
from typing import Any, Callable, Optional

from config import TICK_INTERVAL_SECONDS
from events import event_bus, AppEvent
from services.bedtime import BedtimeController

logger = logging.getLogger(__name__)


class TickService:
    """Recurring tick that re-evaluates the bedtime while one is active.

    Framework-agnostic: uses an injected scheduler for async operations
    (page.run_task under Flet, asyncio.create_task headless). Kept separate
    from the one-shot notification so each can be driven on its own.
    """

    def __init__(
        self,
        controller: BedtimeController,
        interval_seconds: float = TICK_INTERVAL_SECONDS,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._controller = controller
        self._interval = interval_seconds
        self._clock = clock
        self._schedule_async: Optional[Callable[..., asyncio.Task]] = None

        self.running: bool = False
        self.ticks: int = 0
        self._stop_event: asyncio.Event = asyncio.Event()
        self._generation: int = 0
        self._task: Optional[Any] = None

    def inject_dependencies(self, async_scheduler: Callable[..., asyncio.Task]) -> None:
        """Inject dependencies after construction.

        Args:
            async_scheduler: Function to schedule async work (e.g., page.run_task)
        """
        self._schedule_async = async_scheduler

    def start(self) -> None:
        """Start the tick loop."""
        if self.running:
            return

        if self._schedule_async is None:
            raise RuntimeError("TickService dependencies not injected")

        self.running = True
        self.ticks = 0
        self._stop_event.clear()
        self._generation += 1
        generation = self._generation

        # run_task wants a coroutine function, not a coroutine object
        async def _run() -> None:
            await self._tick_loop(generation)
        self._task = self._schedule_async(_run)

    async def _tick_loop(self, generation: int) -> None:
        logger.info(f"Tick loop started ({self._interval}s interval)")

        try:
            while self._is_current(generation):
                await asyncio.sleep(self._interval)

                if not self._is_current(generation):
                    break

                self.tick()

        except asyncio.CancelledError:
            logger.info("Tick loop cancelled")
        finally:
            if generation == self._generation:
                self.running = False

    def _is_current(self, generation: int) -> bool:
        # A stop() followed by start() leaves the old loop with a stale generation
        return self.running and generation == self._generation and not self._stop_event.is_set()

    def tick(self) -> None:
        """Run a single re-evaluation now."""
        self.ticks += 1
        now = self._clock()
        event_bus.emit(AppEvent.TICK, now)
        display = self._controller.on_periodic_tick(now)
        if display is not None:
            logger.debug(f"Tick {self.ticks}: progress {display.progress_percentage:.1f}%")

    def stop(self) -> None:
        """Stop the tick loop."""
        if not self.running:
            return
        self.running = False
        self._stop_event.set()
        # asyncio.Task headless, concurrent Future from page.run_task
        if self._task is not None:
            self._task.cancel()
            self._task = None
        logger.info("Tick loop stopped")
