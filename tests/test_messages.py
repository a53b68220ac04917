from __future__ import annotations

from mqttwall.models import MessageEvent, SortPolicy
from mqttwall.render.base import Highlight
from mqttwall.render.memory import MemoryRenderer, ViewNode
from mqttwall.ui.messages import OrderedKeyedCollection


def _collection(policy: SortPolicy, *, show_counter: bool = False) -> tuple[OrderedKeyedCollection, ViewNode]:
    renderer = MemoryRenderer()
    parent = renderer.create("section")
    return OrderedKeyedCollection(renderer, parent, policy=policy, show_counter=show_counter), parent


def _rendered_topics(parent: ViewNode) -> list[str]:
    topics = []
    for article in parent.children:
        title = article.find("h2")
        assert title is not None
        topics.append(title.text)
    return topics


def test_alphabetical_order_of_first_sightings() -> None:
    messages, parent = _collection(SortPolicy.ALPHABETICAL)

    for topic in ("b/1", "a/2", "c/3"):
        messages.update(topic, "x", False, 0)

    assert messages.order == ["a/2", "b/1", "c/3"]
    assert _rendered_topics(parent) == ["a/2", "b/1", "c/3"]


def test_chronological_order_of_first_sightings() -> None:
    messages, parent = _collection(SortPolicy.CHRONOLOGICAL)

    for topic in ("b/1", "a/2", "c/3"):
        messages.update(topic, "x", False, 0)

    assert messages.order == ["b/1", "a/2", "c/3"]
    assert _rendered_topics(parent) == ["b/1", "a/2", "c/3"]


def test_alphabetical_comparison_is_case_sensitive() -> None:
    messages, parent = _collection(SortPolicy.ALPHABETICAL)

    for topic in ("b", "B", "a", "A"):
        messages.update(topic, "x", False, 0)

    assert _rendered_topics(parent) == ["A", "B", "a", "b"]


def test_entry_count_equals_distinct_topics() -> None:
    messages, parent = _collection(SortPolicy.ALPHABETICAL)

    for topic in ("x", "y", "x", "z", "y", "x"):
        messages.update(topic, "p", False, 0)

    assert len(messages) == 3
    assert len(parent.children) == 3
    assert sorted(messages.order) == ["x", "y", "z"]


def test_repeat_updates_do_not_move_existing_entries() -> None:
    messages, parent = _collection(SortPolicy.ALPHABETICAL)
    messages.update("m", "1", False, 0)
    messages.update("z", "1", False, 0)
    first = parent.children[0]

    messages.update("m", "2", False, 0)

    assert parent.children[0] is first
    assert _rendered_topics(parent) == ["m", "z"]


def test_policy_change_does_not_reorder_existing_entries() -> None:
    messages, parent = _collection(SortPolicy.CHRONOLOGICAL)
    for topic in ("c", "a"):
        messages.update(topic, "x", False, 0)

    messages.policy = SortPolicy.ALPHABETICAL
    messages.update("b", "x", False, 0)

    # "b" lands after its alphabetical predecessor "a"; "c" and "a" stay put.
    assert _rendered_topics(parent) == ["c", "a", "b"]
    assert messages.order == ["c", "a", "b"]


def test_counter_counts_updates() -> None:
    messages, _ = _collection(SortPolicy.ALPHABETICAL, show_counter=True)

    for _ in range(4):
        messages.update("t", "x", False, 0)

    entry = messages.get("t")
    assert entry is not None
    assert entry.counter == 4
    counter_mark = entry.root.find("span", "counter")
    assert counter_mark is not None
    assert counter_mark.text == "4"


def test_counter_mark_absent_unless_configured() -> None:
    messages, _ = _collection(SortPolicy.ALPHABETICAL)
    messages.update("t", "x", False, 0)

    entry = messages.get("t")
    assert entry is not None
    assert entry.root.find("span", "counter") is None


def test_qos_indicator_visibility_and_text() -> None:
    messages, _ = _collection(SortPolicy.ALPHABETICAL)
    messages.update("t", "x", False, 1)
    entry = messages.get("t")
    assert entry is not None
    mark = entry.root.find("span", "qos")
    assert mark is not None

    assert mark.visible is True
    assert mark.text == "QoS 1"
    assert mark.attrs["data-qos"] == "1"

    messages.update("t", "x", False, 2)
    assert mark.text == "QoS 2"

    messages.update("t", "x", False, 0)
    assert mark.visible is False


def test_out_of_range_qos_is_shown_literally() -> None:
    messages, _ = _collection(SortPolicy.ALPHABETICAL)
    messages.update("t", "x", False, 7)

    entry = messages.get("t")
    assert entry is not None
    mark = entry.root.find("span", "qos")
    assert mark is not None
    assert mark.visible is True
    assert mark.text == "QoS 7"


def test_retained_marker_follows_latest_update() -> None:
    messages, _ = _collection(SortPolicy.ALPHABETICAL)
    messages.update("t", "x", True, 0)
    entry = messages.get("t")
    assert entry is not None
    mark = entry.root.find("span", "retain")
    assert mark is not None
    assert entry.retained is True
    assert mark.visible is True

    messages.update("t", "x", False, 0)
    assert entry.retained is False
    assert mark.visible is False


def test_empty_payload_is_rendered_as_null_system_text() -> None:
    messages, _ = _collection(SortPolicy.ALPHABETICAL)
    messages.update("t", "", False, 0)
    entry = messages.get("t")
    assert entry is not None
    payload = entry.root.find("p")
    assert payload is not None

    assert payload.text == "NULL"
    assert entry.is_system_payload is True
    assert "sys" in payload.classes

    messages.update("t", "21.5", False, 0)
    assert payload.text == "21.5"
    assert entry.is_system_payload is False
    assert "sys" not in payload.classes


def test_first_update_highlights_row_then_payload_only() -> None:
    messages, _ = _collection(SortPolicy.ALPHABETICAL)
    messages.update("t", "1", False, 0)
    entry = messages.get("t")
    assert entry is not None
    payload = entry.root.find("p")
    assert payload is not None

    assert entry.root.history == [Highlight()]
    assert payload.history == []
    assert entry.is_new is False

    messages.update("t", "2", False, 0)
    messages.update("t", "3", False, 0)

    assert len(entry.root.history) == 1
    assert len(payload.history) == 2


def test_highlight_supersedes_running_animation() -> None:
    renderer = MemoryRenderer(auto_complete=False)
    parent = renderer.create("section")
    messages = OrderedKeyedCollection(renderer, parent)

    messages.update("t", "1", False, 0)
    messages.update("t", "2", False, 0)
    messages.update("t", "3", False, 0)

    entry = messages.get("t")
    assert entry is not None
    payload = entry.root.find("p")
    assert payload is not None
    assert payload.stopped == 1
    assert payload.animation == Highlight()


def test_reset_clears_entries_and_view() -> None:
    messages, parent = _collection(SortPolicy.ALPHABETICAL)
    messages.update("a", "x", False, 0)
    messages.update("b", "x", False, 0)

    messages.reset()

    assert len(messages) == 0
    assert messages.order == []
    assert parent.children == []

    messages.update("a", "y", False, 0)
    entry = messages.get("a")
    assert entry is not None
    assert entry.counter == 1
    assert entry.root.history == [Highlight()]


def test_handle_message_routes_event_fields() -> None:
    messages, _ = _collection(SortPolicy.ALPHABETICAL)

    messages.handle_message(MessageEvent(topic="home/temp", payload="20", retained=True, qos=1))

    entry = messages.get("home/temp")
    assert entry is not None
    assert entry.payload == "20"
    assert entry.retained is True
    assert entry.qos == 1
