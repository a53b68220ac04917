"""UI components.

Every component receives a renderer and a parent node; none of them knows
which toolkit draws the result.
"""

from mqttwall.ui.messages import OrderedKeyedCollection, TopicEntry
from mqttwall.ui.notifications import Notification, NotificationManager
from mqttwall.ui.status import ConnectionStatusView
from mqttwall.ui.toolbar import TOPIC_CHANGED, CommandInput

__all__ = [
    "TOPIC_CHANGED",
    "CommandInput",
    "ConnectionStatusView",
    "Notification",
    "NotificationManager",
    "OrderedKeyedCollection",
    "TopicEntry",
]
