"""mqttwall - live MQTT topic wall presentation layer."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("mqttwall")
except PackageNotFoundError:
    __version__ = "0+local"
from mqttwall._mqtt import MqttTransport
from mqttwall.app import Wall, window_title
from mqttwall.config import WallConfig
from mqttwall.events import EventEmitter
from mqttwall.exceptions import (
    UnknownConnectionStateError,
    WallConfigError,
    WallError,
    WallTransportError,
)
from mqttwall.models import ConnectionState, MessageEvent, SortPolicy, StateEvent
from mqttwall.render import MemoryRenderer, Renderer
from mqttwall.ui import (
    TOPIC_CHANGED,
    CommandInput,
    ConnectionStatusView,
    Notification,
    NotificationManager,
    OrderedKeyedCollection,
    TopicEntry,
)

__all__ = [
    "__version__",
    "TOPIC_CHANGED",
    "CommandInput",
    "ConnectionState",
    "ConnectionStatusView",
    "EventEmitter",
    "MemoryRenderer",
    "MessageEvent",
    "MqttTransport",
    "Notification",
    "NotificationManager",
    "OrderedKeyedCollection",
    "Renderer",
    "SortPolicy",
    "StateEvent",
    "TopicEntry",
    "UnknownConnectionStateError",
    "Wall",
    "WallConfig",
    "WallConfigError",
    "WallError",
    "WallTransportError",
    "window_title",
]
