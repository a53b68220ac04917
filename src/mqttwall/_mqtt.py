"""Internal paho-mqtt adapter.

Translates broker callbacks into :class:`MessageEvent` / :class:`StateEvent`
emissions. paho runs its network loop on a background thread; every callback
is handed to the asyncio loop with ``call_soon_threadsafe`` so the UI only
ever sees events from a single thread.
"""

from __future__ import annotations

import asyncio
import logging
import secrets
from typing import Any, cast

import paho.mqtt.client as mqtt

from mqttwall.config import WallConfig
from mqttwall.events import EventEmitter
from mqttwall.exceptions import WallTransportError
from mqttwall.models import ConnectionState, MessageEvent, StateEvent

MESSAGE = "message"
STATE = "state"
ERROR = "error"


def _build_client_id(config: WallConfig) -> str:
    if config.client_id:
        return config.client_id
    return f"wall_{secrets.token_hex(4)}"


def _build_uri(config: WallConfig) -> str:
    if config.transport == "websockets":
        path = config.path if config.path.startswith("/") else f"/{config.path}"
        return f"ws://{config.host}:{config.port}{path}"
    return f"tcp://{config.host}:{config.port}"


def _decode_payload(payload: bytes) -> str:
    return payload.decode("utf-8", errors="replace")


class MqttTransport(EventEmitter):
    """Connection to the broker for a single topic subscription.

    Emits ``"state"`` (:class:`StateEvent`) on every transition,
    ``"message"`` (:class:`MessageEvent`) for each PUBLISH and ``"error"``
    (``str``) when the broker refuses the connection or paho rejects a
    topic filter. Reconnection is left to paho's network loop; this class
    only reports it.
    """

    def __init__(
        self,
        config: WallConfig,
        *,
        loop: asyncio.AbstractEventLoop,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__()
        self._config = config
        self._loop = loop
        self._logger = logger or logging.getLogger(__name__)
        self._client_id = _build_client_id(config)
        self._uri = _build_uri(config)
        self._client: mqtt.Client | None = None
        self._running = False
        self._topic: str | None = None
        self._state = ConnectionState.NEW
        self._reconnect_attempts = 0

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def reconnect_attempts(self) -> int:
        return self._reconnect_attempts

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def uri(self) -> str:
        return self._uri

    @property
    def topic(self) -> str | None:
        return self._topic

    @property
    def is_running(self) -> bool:
        return self._running

    def snapshot(self) -> StateEvent:
        return StateEvent(
            state=self._state,
            reconnect_attempts=self._reconnect_attempts,
            client_id=self._client_id,
            uri=self._uri,
        )

    def _set_state(self, state: ConnectionState) -> None:
        self._state = state
        self._logger.debug("MQTT state=%s attempts=%d", state, self._reconnect_attempts)
        self.emit(STATE, self.snapshot())

    def _create_client(self) -> mqtt.Client:
        config = self._config
        client = mqtt.Client(
            callback_api_version=cast(Any, mqtt).CallbackAPIVersion.VERSION2,
            client_id=self._client_id,
            transport=config.transport,
        )
        client.enable_logger(self._logger)
        if config.transport == "websockets":
            client.ws_set_options(path=config.path)
        if config.username:
            client.username_pw_set(config.username, config.password)
        client.on_connect = self._on_connect
        client.on_connect_fail = self._on_connect_fail
        client.on_disconnect = self._on_disconnect
        client.on_message = self._on_message
        return client

    def connect(self) -> None:
        """Open the broker connection and start paho's network loop.

        Blocks for the TCP/websocket handshake; call it from an executor
        when running inside the event loop.
        """
        self.disconnect()
        self._logger.debug("MQTT connect requested uri=%s client_id=%s", self._uri, self._client_id)

        self._loop.call_soon_threadsafe(self._handle_connecting)

        client = self._create_client()
        try:
            client.connect(self._config.host, self._config.port, keepalive=self._config.keepalive)
        except (OSError, ValueError) as exc:
            self._loop.call_soon_threadsafe(self._handle_failure, str(exc))
            raise WallTransportError(f"Cannot connect to {self._uri}: {exc}", uri=self._uri) from exc

        self._client = client
        self._running = True
        client.loop_start()
        self._logger.debug("MQTT network loop started")

    def disconnect(self) -> None:
        """Stop the network loop and disconnect if connected."""
        client = self._client
        self._client = None
        was_running = self._running
        self._running = False

        if client is None:
            return
        try:
            if was_running:
                self._logger.debug("MQTT disconnect requested")
                client.disconnect()
        finally:
            client.loop_stop()
            self._logger.debug("MQTT network loop stopped")

    def subscribe(self, topic: str) -> None:
        """Replace the current subscription with *topic*."""
        previous = self._topic
        self._topic = topic
        client = self._client
        if client is None or self._state is not ConnectionState.CONNECTED:
            return
        if previous and previous != topic:
            self._logger.debug("MQTT unsubscribing topic=%s", previous)
            client.unsubscribe(previous)
        self._send_subscribe(client, topic)

    def _send_subscribe(self, client: mqtt.Client, topic: str) -> None:
        self._logger.debug("MQTT subscribing topic=%s", topic)
        try:
            client.subscribe(topic, qos=self._config.qos)
        except ValueError as exc:
            # paho validates the filter before sending; report instead of raising into the UI.
            self._logger.warning("MQTT subscribe rejected topic=%r: %s", topic, exc)
            self.emit(ERROR, f"Cannot subscribe to {topic!r}: {exc}")

    # ------------------------------------------------------------------
    # paho callbacks (network thread)
    # ------------------------------------------------------------------

    def _on_connect(
        self,
        _client: mqtt.Client,
        _userdata: Any,
        _flags: Any,
        reason_code: Any,
        _properties: Any,
    ) -> None:
        if reason_code.value != 0:
            self._logger.warning("MQTT connect failed: %s", reason_code)
            self._loop.call_soon_threadsafe(self._handle_failure, str(reason_code))
            return
        self._logger.debug("MQTT connected successfully reason=%s", reason_code)
        self._loop.call_soon_threadsafe(self._handle_connected)

    def _on_connect_fail(self, _client: mqtt.Client, _userdata: Any) -> None:
        self._loop.call_soon_threadsafe(self._handle_connection_lost)

    def _on_disconnect(
        self,
        _client: mqtt.Client,
        _userdata: Any,
        _disconnect_flags: Any,
        reason_code: Any,
        _properties: Any,
    ) -> None:
        if not self._running:
            return
        self._logger.debug("MQTT disconnected: %s", reason_code)
        self._loop.call_soon_threadsafe(self._handle_connection_lost)

    def _on_message(self, _client: mqtt.Client, _userdata: Any, msg: mqtt.MQTTMessage) -> None:
        event = MessageEvent(
            topic=msg.topic,
            payload=_decode_payload(msg.payload),
            retained=bool(msg.retain),
            qos=msg.qos,
        )
        self._loop.call_soon_threadsafe(self.emit, MESSAGE, event)

    # ------------------------------------------------------------------
    # loop-side handlers
    # ------------------------------------------------------------------

    def _handle_connecting(self) -> None:
        self._reconnect_attempts = 0
        self._set_state(ConnectionState.CONNECTING)

    def _handle_connected(self) -> None:
        self._reconnect_attempts = 0
        self._set_state(ConnectionState.CONNECTED)
        if self._topic and self._client is not None:
            self._send_subscribe(self._client, self._topic)

    def _handle_connection_lost(self) -> None:
        if not self._running:
            return
        self._reconnect_attempts += 1
        self._set_state(ConnectionState.RECONNECTING)

    def _handle_failure(self, reason: str) -> None:
        self._set_state(ConnectionState.ERROR)
        self.emit(ERROR, f"Connection to {self._uri} failed: {reason}")
