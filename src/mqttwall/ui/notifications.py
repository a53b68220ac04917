"""Transient user-facing notices ("toasts")."""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Callable
from typing import Any, Protocol

from mqttwall.render.base import Renderer, Transition

_logger = logging.getLogger(__name__)

#: Seconds a non-persistent notification stays visible.
DEFAULT_DISMISS_DELAY: float = 5.0

ENTER_TRANSITION = Transition("fade-in")
EXIT_TRANSITION = Transition("slide-up")


class _Cancelable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """The subset of :class:`asyncio.AbstractEventLoop` used for timers."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> _Cancelable: ...


class NotificationState(enum.Enum):
    VISIBLE = "visible"
    DISMISSING = "dismissing"
    REMOVED = "removed"


class Notification:
    """A single notice and its view node.

    Instances are created by :class:`NotificationManager`; use the manager
    (or the shortcuts here, which delegate to it) to change or dismiss them.
    """

    def __init__(
        self,
        manager: NotificationManager,
        node: Any,
        message: str,
        kind: str,
        persistent: bool,
    ) -> None:
        self._manager = manager
        self.node = node
        self.message = message
        self.kind = kind
        self.persistent = persistent
        self.state = NotificationState.VISIBLE
        self.timer: _Cancelable | None = None

    @property
    def visible(self) -> bool:
        return self.state is NotificationState.VISIBLE

    def set_message(self, message: str) -> None:
        self._manager.set_message(self, message)

    def dismiss(self) -> None:
        self._manager.dismiss(self)


class NotificationManager:
    """Creates, rewrites and dismisses notifications inside ``container``.

    Auto-dismiss timers are scheduled on ``loop`` (an asyncio event loop by
    default). A timer that fires after the notification was dismissed by
    other means does nothing.
    """

    def __init__(
        self,
        renderer: Renderer,
        container: Any,
        *,
        loop: Scheduler | None = None,
        dismiss_delay: float = DEFAULT_DISMISS_DELAY,
    ) -> None:
        self._renderer = renderer
        self._container = container
        self._loop = loop
        self._dismiss_delay = dismiss_delay
        self._active: list[Notification] = []

    @property
    def active(self) -> list[Notification]:
        """Notifications not yet fully removed, oldest first."""
        return list(self._active)

    def _scheduler(self) -> Scheduler:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def create(self, message: str, kind: str = "info", persistent: bool = False) -> Notification:
        r = self._renderer
        node = r.create("div", classes=("toast-item", kind), text=message)
        r.set_visible(node, False)
        r.append(self._container, node)
        r.set_visible(node, True)
        r.animate(node, ENTER_TRANSITION)

        notification = Notification(self, node, message, kind, persistent)
        self._active.append(notification)

        if persistent:
            r.toggle_class(node, "persistent", True)
        else:
            notification.timer = self._scheduler().call_later(self._dismiss_delay, self._expire, notification)

        _logger.debug("Notification created kind=%s persistent=%s message=%s", kind, persistent, message)
        return notification

    def _expire(self, notification: Notification) -> None:
        notification.timer = None
        if not notification.visible:
            _logger.debug("Auto-dismiss ignored for already dismissed notification")
            return
        self.dismiss(notification)

    def dismiss(self, notification: Notification) -> None:
        if not notification.visible:
            return
        notification.state = NotificationState.DISMISSING
        if notification.timer is not None:
            notification.timer.cancel()
            notification.timer = None
        self._renderer.animate(notification.node, EXIT_TRANSITION, lambda: self._remove(notification))

    def _remove(self, notification: Notification) -> None:
        if notification.state is NotificationState.REMOVED:
            return
        notification.state = NotificationState.REMOVED
        self._renderer.remove(notification.node)
        if notification in self._active:
            self._active.remove(notification)
        _logger.debug("Notification removed message=%s", notification.message)

    def set_message(self, notification: Notification, message: str) -> None:
        if not notification.visible:
            return
        notification.message = message
        self._renderer.set_text(notification.node, message)
