"""Named-channel observer used between the UI and the transport."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

_logger = logging.getLogger(__name__)

Handler = Callable[..., None]


class EventEmitter:
    """Synchronous publish/subscribe keyed by channel name.

    Handlers are invoked in registration order on the emitting call stack.
    Errors raised by a handler propagate to the caller of :meth:`emit`.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = {}

    def on(self, channel: str, handler: Handler) -> Callable[[], None]:
        """Register *handler* for *channel* and return an unsubscribe callable."""
        self._handlers.setdefault(channel, []).append(handler)

        def _unsubscribe() -> None:
            self.off(channel, handler)

        return _unsubscribe

    def off(self, channel: str, handler: Handler) -> None:
        handlers = self._handlers.get(channel)
        if not handlers:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            return
        if not handlers:
            del self._handlers[channel]

    def emit(self, channel: str, *args: Any) -> None:
        # Copy so handlers may unsubscribe themselves while being called.
        handlers = list(self._handlers.get(channel, ()))
        if not handlers:
            _logger.debug("No handlers for channel=%s", channel)
            return
        for handler in handlers:
            handler(*args)

    def listener_count(self, channel: str) -> int:
        return len(self._handlers.get(channel, ()))
