from __future__ import annotations

import pytest

from mqttwall.render.base import Highlight, Renderer, Transition
from mqttwall.render.memory import MemoryRenderer


def test_memory_renderer_satisfies_protocol() -> None:
    assert isinstance(MemoryRenderer(), Renderer)


def test_insertion_primitives() -> None:
    r = MemoryRenderer()
    parent = r.create("ul")
    a, b, c = (r.create("li", text=t) for t in "abc")

    r.append(parent, b)
    r.prepend(parent, a)
    r.insert_after(b, c)

    assert [n.text for n in parent.children] == ["a", "b", "c"]
    assert all(n.parent is parent for n in parent.children)

    r.remove(b)
    assert [n.text for n in parent.children] == ["a", "c"]
    assert b.attached is False

    r.clear(parent)
    assert parent.children == []


def test_insert_after_detached_anchor_rejected() -> None:
    r = MemoryRenderer()
    with pytest.raises(ValueError):
        r.insert_after(r.create("li"), r.create("li"))


def test_animate_supersedes_in_flight_animation() -> None:
    r = MemoryRenderer(auto_complete=False)
    node = r.create("p")
    completed: list[str] = []

    r.animate(node, Transition("fade-in"), lambda: completed.append("first"))
    r.animate(node, Highlight(), lambda: completed.append("second"))
    r.finish(node)

    assert node.stopped == 1
    assert completed == ["second"]
    assert node.history == [Transition("fade-in"), Highlight()]
