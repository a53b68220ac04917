"""Wall controller: wires the transport to the UI components."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Protocol

from mqttwall.config import WallConfig
from mqttwall.models import ConnectionState, MessageEvent, StateEvent
from mqttwall.render.base import Renderer
from mqttwall.ui.messages import OrderedKeyedCollection
from mqttwall.ui.notifications import Notification, NotificationManager
from mqttwall.ui.status import ConnectionStatusView
from mqttwall.ui.toolbar import TOPIC_CHANGED, CommandInput

_logger = logging.getLogger(__name__)

TITLE = "MQTT Wall"


def window_title(topic: str | None) -> str:
    return f"{TITLE} for {topic}" if topic else TITLE


class Transport(Protocol):
    """What the wall needs from a broker connection (see ``MqttTransport``)."""

    def on(self, channel: str, handler: Callable[..., None]) -> Callable[[], None]: ...

    def subscribe(self, topic: str) -> None: ...

    def connect(self) -> None: ...

    def disconnect(self) -> None: ...

    def snapshot(self) -> StateEvent: ...


class Wall:
    """The complete wall page.

    Builds the topic input, message list, status footer and notification
    area under ``root`` and routes transport events into them.
    """

    def __init__(
        self,
        config: WallConfig,
        renderer: Renderer,
        root: Any,
        *,
        transport: Transport,
        loop: asyncio.AbstractEventLoop | None = None,
        fragment: str | None = None,
    ) -> None:
        self._config = config
        self._renderer = renderer
        self._transport = transport
        self._loop = loop
        self._error_notice: Notification | None = None
        self.title = window_title(None)
        self.fragment = fragment

        r = renderer
        self.topic_field = r.create("input")
        r.set_attr(self.topic_field, "id", "topic")
        self.message_list = r.create("section")
        r.set_attr(self.message_list, "id", "messages")
        self.footer = r.create("footer")
        self.toast_area = r.create("div")
        r.set_attr(self.toast_area, "id", "toast")
        for node in (self.topic_field, self.message_list, self.footer, self.toast_area):
            r.append(root, node)

        self.messages = OrderedKeyedCollection(
            renderer,
            self.message_list,
            policy=config.sort,
            show_counter=config.show_counter,
        )
        self.status = ConnectionStatusView(renderer, self.footer)
        self.notifications = NotificationManager(
            renderer,
            self.toast_area,
            loop=loop,
            dismiss_delay=config.notification_delay,
        )
        self.toolbar = CommandInput(
            renderer,
            self.topic_field,
            default_topic=config.default_topic,
            fragment=fragment,
        )

        transport.on("message", self._on_message)
        transport.on("state", self._on_state)
        transport.on("error", self._on_error)
        self.toolbar.on(TOPIC_CHANGED, self._on_topic)

    def toast(self, message: str, kind: str = "info", persistent: bool = False) -> Notification:
        return self.notifications.create(message, kind, persistent)

    async def start(self) -> None:
        """Subscribe the initial topic and connect the transport."""
        topic = self.toolbar.topic
        self.title = window_title(topic)
        self._transport.subscribe(topic)
        self.status.apply(self._transport.snapshot())

        loop = self._loop or asyncio.get_running_loop()
        await loop.run_in_executor(None, self._transport.connect)

    async def stop(self) -> None:
        loop = self._loop or asyncio.get_running_loop()
        await loop.run_in_executor(None, self._transport.disconnect)

    def _on_message(self, event: MessageEvent) -> None:
        self.messages.handle_message(event)

    def _on_state(self, event: StateEvent) -> None:
        self.status.apply(event)
        if event.state is ConnectionState.CONNECTED and self._error_notice is not None:
            self._error_notice.dismiss()
            self._error_notice = None

    def _on_error(self, message: str) -> None:
        _logger.debug("Transport error: %s", message)
        if self._error_notice is not None and self._error_notice.visible:
            self._error_notice.set_message(message)
            return
        self._error_notice = self.toast(message, "error", persistent=True)

    def _on_topic(self, topic: str) -> None:
        self.messages.reset()
        self._transport.subscribe(topic)
        self.title = window_title(topic)
        self.fragment = f"#{topic}"
        _logger.debug("Subscribed topic changed topic=%s", topic)
