"""Wall configuration."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from mqttwall.exceptions import WallConfigError
from mqttwall.models import SortPolicy

_TRANSPORTS = frozenset({"tcp", "websockets"})


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_int(env_key: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise WallConfigError(f"{env_key} must be an integer, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class WallConfig:
    """Wall configuration.

    Parameters
    ----------
    default_topic : str or None
        Topic filter subscribed when no URL fragment supplies one.
        ``None`` (or empty) falls back to ``"/#"``.
    show_counter : bool
        Render a per-topic message counter next to each entry title.
    sort : SortPolicy
        Placement policy for newly seen topics.
    host : str
        Broker host name.
    port : int
        Broker port.
    transport : str
        ``"tcp"`` or ``"websockets"``.
    path : str
        HTTP path used for the websocket handshake.
    username : str or None
        Broker user name.
    password : str or None
        Broker password. Only sent when ``username`` is set.
    client_id : str or None
        MQTT client identifier; generated when not supplied.
    qos : int
        QoS requested for the topic subscription.
    keepalive : int
        MQTT keepalive in seconds.
    notification_delay : float
        Seconds before a non-persistent notification dismisses itself.
    """

    default_topic: str | None = None
    show_counter: bool = False
    sort: SortPolicy = SortPolicy.ALPHABETICAL
    host: str = "localhost"
    port: int = 1883
    transport: str = "tcp"
    path: str = "/mqtt"
    username: str | None = None
    password: str | None = None
    client_id: str | None = None
    qos: int = 0
    keepalive: int = 60
    notification_delay: float = 5.0

    def __post_init__(self) -> None:
        if self.qos not in (0, 1, 2):
            raise WallConfigError(f"qos must be 0, 1 or 2, got {self.qos!r}")
        if self.transport not in _TRANSPORTS:
            raise WallConfigError(f"transport must be one of {sorted(_TRANSPORTS)}, got {self.transport!r}")
        if not isinstance(self.sort, SortPolicy):
            try:
                object.__setattr__(self, "sort", SortPolicy(self.sort))
            except ValueError as exc:
                raise WallConfigError(f"Unknown sort policy: {self.sort!r}") from exc
        if self.notification_delay < 0:
            raise WallConfigError("notification_delay must not be negative")

    @classmethod
    def from_env(cls, **overrides: Any) -> WallConfig:
        """Create configuration from ``MQTTWALL_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "MQTTWALL_DEFAULT_TOPIC": "default_topic",
            "MQTTWALL_SORT": "sort",
            "MQTTWALL_HOST": "host",
            "MQTTWALL_TRANSPORT": "transport",
            "MQTTWALL_PATH": "path",
            "MQTTWALL_USERNAME": "username",
            "MQTTWALL_PASSWORD": "password",
            "MQTTWALL_CLIENT_ID": "client_id",
        }
        _ENV_INT_MAP = {
            "MQTTWALL_PORT": "port",
            "MQTTWALL_QOS": "qos",
            "MQTTWALL_KEEPALIVE": "keepalive",
        }

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val
        for env_key, field_name in _ENV_INT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_int(env_key, val)

        if "show_counter" not in overrides:
            config_kwargs["show_counter"] = _env_bool(env.get("MQTTWALL_SHOW_COUNTER"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
