"""
Publish/subscribe dispatcher with colon-delimited topics.

A pattern whose last segment is ``*`` matches every topic that starts with the
pattern's other segments (``webhook:*`` matches ``webhook:message``). Handlers
run synchronously, in subscription order. Awaitable results are scheduled on
the event loop and not tracked further, so handlers may be emitted from a
worker thread while their coroutines run on the loop.
"""

from __future__ import annotations

import asyncio
import inspect
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Union

from linehook.constants.line_types import EventType
from linehook.infra.logging_config import get_logger

logger = get_logger("event_bus")

DELIMITER = ":"
WILDCARD = "*"
DEFAULT_MAX_LISTENERS = 20

Handler = Callable[[Any], Any]
Topic = Union[str, EventType]


def normalize_topic(topic: Topic) -> str:
    """EventType members stand for their webhook topic."""
    if isinstance(topic, EventType):
        return topic.topic
    if not isinstance(topic, str) or not topic:
        raise ValueError(f"Topic must be a non-empty string, got {topic!r}")
    return topic


def topic_matches(pattern: str, topic: str) -> bool:
    if pattern == WILDCARD:
        return True
    pattern_parts = pattern.split(DELIMITER)
    topic_parts = topic.split(DELIMITER)
    if pattern_parts[-1] != WILDCARD:
        return pattern_parts == topic_parts
    prefix = pattern_parts[:-1]
    return len(topic_parts) > len(prefix) and topic_parts[: len(prefix)] == prefix


async def _await(awaitable: Awaitable[Any]) -> Any:
    return await awaitable


@dataclass(frozen=True)
class Subscription:
    pattern: str
    handler: Handler

    def matches(self, topic: str) -> bool:
        return topic_matches(self.pattern, topic)


class EventBus:
    """Ordered subscription list guarded by a lock for registration after startup."""

    def __init__(self, max_listeners: int = DEFAULT_MAX_LISTENERS) -> None:
        self._subscriptions: list[Subscription] = []
        self._lock = threading.Lock()
        self._pending: set[asyncio.Future[Any]] = set()
        self.max_listeners = max_listeners

    def on(self, pattern: Topic, handler: Handler) -> Subscription:
        """Subscribe handler to every topic matching pattern."""
        if not callable(handler):
            raise TypeError(f"Handler must be callable, got {handler!r}")
        subscription = Subscription(normalize_topic(pattern), handler)
        with self._lock:
            self._subscriptions.append(subscription)
            count = sum(
                1 for s in self._subscriptions if s.pattern == subscription.pattern
            )
        if self.max_listeners and count > self.max_listeners:
            logger.warning(
                "%d listeners subscribed to %s (max %d); possible leak",
                count,
                subscription.pattern,
                self.max_listeners,
            )
        return subscription

    def off(self, pattern: Topic, handler: Handler) -> bool:
        """Remove the first subscription of handler to pattern. True if found."""
        target = Subscription(normalize_topic(pattern), handler)
        with self._lock:
            for index, subscription in enumerate(self._subscriptions):
                if subscription == target:
                    del self._subscriptions[index]
                    return True
        return False

    def listeners(self, topic: Topic) -> list[Handler]:
        """Handlers that an emit on topic would invoke, in order."""
        name = normalize_topic(topic)
        with self._lock:
            snapshot = list(self._subscriptions)
        return [s.handler for s in snapshot if s.matches(name)]

    def emit(
        self,
        topic: Topic,
        payload: Any,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> int:
        """
        Invoke every handler matching topic with payload.

        Handler exceptions propagate to the caller; later handlers do not run.
        Awaitable results go to the running loop, or to loop when emitting
        from a worker thread. Returns the number of handlers invoked.
        """
        handlers = self.listeners(topic)
        for handler in handlers:
            result = handler(payload)
            if inspect.isawaitable(result):
                self._schedule(result, topic, loop)
        return len(handlers)

    def _schedule(
        self,
        awaitable: Any,
        topic: Topic,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is not None:
            future = asyncio.ensure_future(awaitable, loop=running)
            self._pending.add(future)
            future.add_done_callback(self._on_handler_done)
        elif loop is not None and loop.is_running():
            asyncio.run_coroutine_threadsafe(
                _await(awaitable), loop
            ).add_done_callback(self._on_handler_done)
        else:
            logger.warning(
                "Async handler for %s returned an awaitable outside an event loop; dropped",
                normalize_topic(topic),
            )
            if inspect.iscoroutine(awaitable):
                awaitable.close()

    def _on_handler_done(self, future: Union[asyncio.Future[Any], Future[Any]]) -> None:
        self._pending.discard(future)
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error(
                "Async event handler failed: %s", exc, exc_info=exc
            )
