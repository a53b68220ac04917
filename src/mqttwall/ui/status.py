"""Connection status footer."""

from __future__ import annotations

import logging
from typing import Any

from mqttwall.exceptions import UnknownConnectionStateError
from mqttwall.models import ConnectionState, StateEvent
from mqttwall.render.base import Renderer

_logger = logging.getLogger(__name__)

#: (label, style class) rendered for each state.
_STATE_PRESENTATION: dict[ConnectionState, tuple[str, str]] = {
    ConnectionState.NEW: ("", "connecting"),
    ConnectionState.CONNECTING: ("connecting...", "connecting"),
    ConnectionState.CONNECTED: ("connected", "connected"),
    ConnectionState.RECONNECTING: ("reconnecting...", "connecting"),
    ConnectionState.ERROR: ("not connected", "fail"),
}

_STYLE_CLASSES = frozenset(style for _, style in _STATE_PRESENTATION.values())


def state_label(state: ConnectionState | str, reconnect_attempts: int = 0) -> tuple[str, str]:
    """Return ``(label, style class)`` for *state*.

    Raises
    ------
    UnknownConnectionStateError
        If *state* is not a :class:`ConnectionState` value.
    """
    try:
        text, class_name = _STATE_PRESENTATION[ConnectionState(state)]
    except (ValueError, KeyError) as exc:
        raise UnknownConnectionStateError(state) from exc

    if reconnect_attempts > 1:
        text += f" ({reconnect_attempts})"
    return text, class_name


class ConnectionStatusView:
    """Renders connection state, client id and broker URI.

    State transitions are owned by the transport; this view only draws
    whatever it is told.
    """

    def __init__(self, renderer: Renderer, parent: Any) -> None:
        self._renderer = renderer
        self.reconnect_attempts = 0
        self.state: ConnectionState | None = None

        r = renderer
        self.state_node = r.create("div")
        r.set_attr(self.state_node, "id", "status-state")
        self.label_node = r.create("span")
        r.append(self.state_node, self.label_node)
        self.client_node = r.create("span")
        r.set_attr(self.client_node, "id", "status-client")
        self.host_node = r.create("span")
        r.set_attr(self.host_node, "id", "status-host")
        for node in (self.state_node, self.client_node, self.host_node):
            r.append(parent, node)

    def set_client_id(self, value: str) -> None:
        self._renderer.set_text(self.client_node, value)

    def set_uri(self, value: str) -> None:
        self._renderer.set_text(self.host_node, value)

    def set_state(self, value: ConnectionState | str) -> None:
        text, class_name = state_label(value, self.reconnect_attempts)
        self.state = ConnectionState(value)

        for style in _STYLE_CLASSES:
            self._renderer.toggle_class(self.state_node, style, style == class_name)
        self._renderer.set_text(self.label_node, text)
        _logger.debug("Connection state rendered state=%s label=%r", self.state, text)

    def apply(self, event: StateEvent) -> None:
        """Render a full state snapshot from the transport."""
        self.set_client_id(event.client_id)
        self.set_uri(event.uri)
        self.reconnect_attempts = event.reconnect_attempts
        self.set_state(event.state)
