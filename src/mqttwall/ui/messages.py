"""Topic entries and the ordered, keyed collection that owns them.

The collection is the only writer of entry state. Every update for a topic
is applied synchronously, in delivery order, before the next event is
handled.
"""

from __future__ import annotations

import logging
from typing import Any

from mqttwall.models import MessageEvent, SortPolicy
from mqttwall.render.base import Highlight, Renderer

_logger = logging.getLogger(__name__)

#: Text shown in place of an empty payload.
NULL_PAYLOAD_TEXT = "NULL"


class TopicEntry:
    """Mutable per-topic state plus the view node that displays it."""

    def __init__(self, renderer: Renderer, topic: str, *, show_counter: bool = False) -> None:
        self._renderer = renderer
        self._topic = topic
        self.counter = 0
        self.is_new = True
        self.retained = False
        self.qos = 0
        self.payload = ""
        self.is_system_payload = False
        self._build(show_counter)

    @property
    def topic(self) -> str:
        return self._topic

    def _build(self, show_counter: bool) -> None:
        r = self._renderer
        self.root: Any = r.create("article", classes=("message",))

        header = r.create("header")
        r.append(self.root, header)
        r.append(header, r.create("h2", text=self._topic))

        self._counter_mark: Any = None
        if show_counter:
            self._counter_mark = r.create("span", classes=("mark", "counter"), text="0")
            r.set_attr(self._counter_mark, "title", "Message counter")
            r.append(header, self._counter_mark)

        self._retain_mark = r.create("span", classes=("mark", "retain"), text="R")
        r.set_attr(self._retain_mark, "title", "Retain message")
        r.append(header, self._retain_mark)

        self._qos_mark = r.create("span", classes=("mark", "qos"), text="QoS")
        r.set_attr(self._qos_mark, "title", "Received message QoS")
        r.append(header, self._qos_mark)

        self._payload_node = r.create("p")
        r.append(self.root, self._payload_node)

    def set_retained(self, value: bool) -> None:
        self.retained = value
        self._renderer.set_visible(self._retain_mark, value)

    def set_system_payload(self, value: bool) -> None:
        self.is_system_payload = value
        self._renderer.toggle_class(self._payload_node, "sys", value)

    def set_qos(self, qos: int) -> None:
        self.qos = qos
        if qos == 0:
            self._renderer.set_visible(self._qos_mark, False)
            return
        self._renderer.set_visible(self._qos_mark, True)
        self._renderer.set_text(self._qos_mark, f"QoS {qos}")
        self._renderer.set_attr(self._qos_mark, "data-qos", str(qos))

    def highlight(self, line: bool = False) -> None:
        """Flash the whole row (``line``) or just the payload."""
        self._renderer.animate(self.root if line else self._payload_node, Highlight())

    def apply_update(self, payload: str, retained: bool, qos: int) -> None:
        self.counter += 1
        self.set_retained(retained)

        if self._counter_mark is not None:
            self._renderer.set_text(self._counter_mark, str(self.counter))

        self.set_qos(qos)

        if payload == "":
            payload = NULL_PAYLOAD_TEXT
            self.set_system_payload(True)
        else:
            self.set_system_payload(False)

        self.payload = payload
        self._renderer.set_text(self._payload_node, payload)
        self.highlight(self.is_new)
        self.is_new = False


class OrderedKeyedCollection:
    """Topic entries keyed by topic, laid out under a :class:`SortPolicy`.

    Only the node of a newly seen topic is positioned; existing nodes never
    move. Reassigning :attr:`policy` therefore affects later insertions only.
    """

    def __init__(
        self,
        renderer: Renderer,
        parent: Any,
        *,
        policy: SortPolicy = SortPolicy.ALPHABETICAL,
        show_counter: bool = False,
    ) -> None:
        self._renderer = renderer
        self._parent = parent
        self.policy = policy
        self._show_counter = show_counter
        self._entries: dict[str, TopicEntry] = {}
        self._order: list[str] = []
        self.reset()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, topic: object) -> bool:
        return topic in self._entries

    @property
    def order(self) -> list[str]:
        return list(self._order)

    def get(self, topic: str) -> TopicEntry | None:
        return self._entries.get(topic)

    def reset(self) -> None:
        self._entries = {}
        self._order = []
        self._renderer.clear(self._parent)

    def update(self, topic: str, payload: str, retained: bool, qos: int) -> None:
        entry = self._entries.get(topic)
        if entry is None:
            entry = TopicEntry(self._renderer, topic, show_counter=self._show_counter)
            if self.policy is SortPolicy.ALPHABETICAL:
                self._add_alphabetically(entry)
            else:
                self._add_chronologically(entry)
            self._entries[topic] = entry
            _logger.debug("Topic entry created topic=%s position=%d", topic, self._order.index(topic))

        entry.apply_update(payload, retained, qos)

    def handle_message(self, event: MessageEvent) -> None:
        self.update(event.topic, event.payload, event.retained, event.qos)

    def _add_alphabetically(self, entry: TopicEntry) -> None:
        if not self._order:
            self._add_chronologically(entry)
            return

        topic = entry.topic
        ranked = sorted([*self._order, topic])
        n = ranked.index(topic)

        if n == 0:
            self._order.insert(0, topic)
            self._renderer.prepend(self._parent, entry.root)
            return

        previous = ranked[n - 1]
        # _order mirrors the rendered sibling order, which may not be sorted
        # if the policy was switched after entries were inserted.
        self._order.insert(self._order.index(previous) + 1, topic)
        self._renderer.insert_after(self._entries[previous].root, entry.root)

    def _add_chronologically(self, entry: TopicEntry) -> None:
        self._order.append(entry.topic)
        self._renderer.append(self._parent, entry.root)
