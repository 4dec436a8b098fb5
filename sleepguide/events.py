from enum import Enum, auto
from typing import Callable, Dict, Any, Optional
import threading
import uuid
import weakref
import inspect
import logging

logger = logging.getLogger(__name__)


class AppEvent(Enum):
    """Application-wide events for the observer pattern."""
    BEDTIME_SET = auto()
    PROGRESS_UPDATED = auto()
    BEDTIME_REACHED = auto()
    NOTIFICATION_SCHEDULED = auto()
    NOTIFICATION_CANCELED = auto()
    NOTIFICATION_FIRED = auto()
    SCHEDULING_FAILED = auto()
    TICK = auto()


class Subscription:
    """Handle returned by EventBus.subscribe().

    Holds the callback strongly when subscribed with strong=True, so the
    Subscription itself must be kept until unsubscribe() is called.
    """

    def __init__(
        self,
        event_bus: "EventBus",
        event: AppEvent,
        subscription_id: str,
        strong_ref: Optional[Callable[[Any], None]] = None,
    ):
        self._event_bus = event_bus
        self._event = event
        self._subscription_id = subscription_id
        self._active = True
        self._strong_ref = strong_ref

    @property
    def id(self) -> str:
        return self._subscription_id

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        """Unsubscribe this subscription."""
        if self._active:
            self._event_bus._unsubscribe_by_id(self._event, self._subscription_id)
            self._active = False
            self._strong_ref = None


class _CallbackRef:
    """Weak reference to a bound method or function.

    Built-ins cannot be weakly referenced and are held strongly instead.
    """

    def __init__(
        self,
        callback: Callable[[Any], None],
        on_dead: Optional[Callable[[], None]] = None,
        event_name: str = "unknown",
    ):
        self._on_dead = on_dead
        self._event_name = event_name
        self._callback_repr = repr(callback)

        if inspect.ismethod(callback):
            self._ref = weakref.WeakMethod(callback, self._invoke_on_dead)
        else:
            try:
                self._ref = weakref.ref(callback, self._invoke_on_dead)
            except TypeError:
                self._ref = lambda: callback

    def _invoke_on_dead(self, _ref) -> None:
        logger.debug(
            f"EventBus: subscriber to {self._event_name} was garbage collected ({self._callback_repr})"
        )
        if self._on_dead:
            self._on_dead()

    def __call__(self) -> Optional[Callable[[Any], None]]:
        return self._ref()


class EventBus:
    """Singleton event bus connecting the bedtime engine to its views.

    Bound-method subscribers are held weakly and drop out when their owner
    is destroyed. Lambdas and closures are held strongly by the returned
    Subscription.
    """
    _instance: Optional["EventBus"] = None
    _instance_lock = threading.Lock()

    def __new__(cls) -> "EventBus":
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._listeners: Dict[AppEvent, Dict[str, _CallbackRef]] = {}
        return cls._instance

    def subscribe(
        self,
        event: AppEvent,
        callback: Callable[[Any], None],
        strong: bool = False,
    ) -> Subscription:
        """Subscribe a callback to an event.

        Example:
            self._sub = event_bus.subscribe(AppEvent.BEDTIME_SET, lambda display: ...)
            # Later: self._sub.unsubscribe()
        """
        listeners = self._listeners.setdefault(event, {})
        subscription_id = str(uuid.uuid4())

        # A lambda or closure has no other owner - weak refs would vanish immediately
        is_lambda = getattr(callback, "__name__", "") == "<lambda>"
        is_closure = not inspect.ismethod(callback) and getattr(callback, "__closure__", None) is not None
        if (is_lambda or is_closure) and not strong:
            strong = True

        def on_dead():
            self._unsubscribe_by_id(event, subscription_id)

        listeners[subscription_id] = _CallbackRef(callback, on_dead, event.name)
        return Subscription(self, event, subscription_id, strong_ref=callback if strong else None)

    def _unsubscribe_by_id(self, event: AppEvent, subscription_id: str) -> None:
        if event in self._listeners:
            self._listeners[event].pop(subscription_id, None)

    def emit(self, event: AppEvent, data: Any = None) -> None:
        """Emit an event to all live subscribers.

        A failing handler is logged and does not stop delivery to the others.
        """
        if event not in self._listeners:
            return

        for sub_id, cb_ref in list(self._listeners[event].items()):
            callback = cb_ref()
            if callback is None:
                self._unsubscribe_by_id(event, sub_id)
                continue
            try:
                callback(data)
            except Exception as e:
                logger.error(f"Error in event handler for {event.name}: {e}")

    def subscriber_count(self, event: AppEvent) -> int:
        return len(self._listeners.get(event, {}))

    def clear(self) -> None:
        """Clear all event subscriptions. Used primarily for testing."""
        self._listeners.clear()

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance. Used primarily for testing."""
        if cls._instance is not None:
            cls._instance._listeners.clear()
            cls._instance = None


event_bus = EventBus()
