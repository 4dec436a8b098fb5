"""Headless bootstrap for Sleep Guide services.

Initializes the bedtime engine without any Flet dependency, suitable for
CLI tools, scripts, and testing.

Usage:
    from core import bootstrap, shutdown, start

    svc = bootstrap()
    svc.bedtime.set_target(TimeSpecification(10, 30, 0, Period.PM))
    start(svc)
    ...
    shutdown(svc)
"""
import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from config import TICK_INTERVAL_SECONDS
from events import event_bus
from registry import registry, Services
from services.bedtime import BedtimeController
from services.notification_service import NotificationBackend, NotificationService
from services.scheduler import NotificationScheduler
from services.ticker import TickService


@dataclass
class ServiceContainer:
    """Container holding all initialized services for headless use."""
    scheduler: NotificationScheduler
    bedtime: BedtimeController
    ticker: TickService
    notification: NotificationService


def _create_task(coro_fn: Callable[[], Any]) -> asyncio.Task:
    return asyncio.get_running_loop().create_task(coro_fn())


def bootstrap(
    async_scheduler: Optional[Callable[..., Any]] = None,
    tick_interval: float = TICK_INTERVAL_SECONDS,
    clock: Callable[[], datetime] = datetime.now,
    scheduler: Optional[NotificationScheduler] = None,
    notification_backend: Optional[NotificationBackend] = None,
) -> ServiceContainer:
    """Create and register the service layer.

    Args:
        async_scheduler: Runs a coroutine function on the loop. Flet passes
            page.run_task; the default creates a task on the running loop.
        tick_interval: Seconds between bedtime re-evaluations.
        clock: Source of "now" for the controller and tick loop.
        scheduler: Notification scheduler; a fake one in tests.
        notification_backend: Force a delivery backend instead of detecting one.

    Returns:
        ServiceContainer with all services wired but not started.
    """
    async_scheduler = async_scheduler or _create_task
    scheduler = scheduler or NotificationScheduler()

    bedtime = BedtimeController(scheduler, clock=clock)
    ticker = TickService(bedtime, interval_seconds=tick_interval, clock=clock)
    ticker.inject_dependencies(async_scheduler)
    notification = NotificationService(backend=notification_backend)
    notification.inject_dependencies(async_scheduler)

    registry.register(Services.EVENT_BUS, event_bus)
    registry.register(Services.SCHEDULER, scheduler)
    registry.register(Services.BEDTIME, bedtime)
    registry.register(Services.TICKER, ticker)
    registry.register(Services.NOTIFICATION, notification)

    return ServiceContainer(
        scheduler=scheduler,
        bedtime=bedtime,
        ticker=ticker,
        notification=notification,
    )


def start(svc: ServiceContainer) -> None:
    """Start the tick loop and notification delivery."""
    svc.notification.start()
    svc.ticker.start()


def shutdown(svc: ServiceContainer) -> None:
    """Stop loops and cancel the pending notification."""
    svc.ticker.stop()
    svc.notification.stop()
    svc.bedtime.cleanup()
    svc.scheduler.cancel_all()
