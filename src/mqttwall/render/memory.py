"""In-memory node tree implementing the renderer capability.

Used for headless operation and as the renderer in tests. Nothing is drawn;
the tree records exactly what a real toolkit would have been asked to do.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from mqttwall.render.base import Animation


@dataclass(eq=False)
class ViewNode:
    tag: str
    classes: set[str] = field(default_factory=set)
    text: str = ""
    visible: bool = True
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[ViewNode] = field(default_factory=list)
    parent: ViewNode | None = None
    animation: Animation | None = None
    history: list[Animation] = field(default_factory=list)
    stopped: int = 0
    _on_complete: Callable[[], None] | None = field(default=None, repr=False)

    def find(self, tag: str, cls: str | None = None) -> ViewNode | None:
        """Depth-first search for the first descendant matching tag/class."""
        for child in self.children:
            if child.tag == tag and (cls is None or cls in child.classes):
                return child
            found = child.find(tag, cls)
            if found is not None:
                return found
        return None

    @property
    def attached(self) -> bool:
        return self.parent is not None


class MemoryRenderer:
    """Renderer backed by :class:`ViewNode` objects.

    With ``auto_complete`` (the default) every animation finishes as soon as
    it starts. Otherwise animations stay in flight until :meth:`finish`.
    """

    def __init__(self, *, auto_complete: bool = True) -> None:
        self.auto_complete = auto_complete

    def create(self, tag: str, *, classes: Iterable[str] = (), text: str = "") -> ViewNode:
        return ViewNode(tag=tag, classes=set(classes), text=text)

    def _detach(self, node: ViewNode) -> None:
        if node.parent is not None:
            node.parent.children.remove(node)
            node.parent = None

    def append(self, parent: ViewNode, node: ViewNode) -> None:
        self._detach(node)
        parent.children.append(node)
        node.parent = parent

    def prepend(self, parent: ViewNode, node: ViewNode) -> None:
        self._detach(node)
        parent.children.insert(0, node)
        node.parent = parent

    def insert_after(self, anchor: ViewNode, node: ViewNode) -> None:
        parent = anchor.parent
        if parent is None:
            raise ValueError("Anchor node is not attached")
        self._detach(node)
        parent.children.insert(parent.children.index(anchor) + 1, node)
        node.parent = parent

    def remove(self, node: ViewNode) -> None:
        self._stop(node)
        self._detach(node)

    def clear(self, parent: ViewNode) -> None:
        for child in list(parent.children):
            self.remove(child)

    def set_text(self, node: ViewNode, text: str) -> None:
        node.text = text

    def get_text(self, node: ViewNode) -> str:
        return node.text

    def toggle_class(self, node: ViewNode, name: str, enabled: bool) -> None:
        if enabled:
            node.classes.add(name)
        else:
            node.classes.discard(name)

    def set_visible(self, node: ViewNode, visible: bool) -> None:
        node.visible = visible

    def set_attr(self, node: ViewNode, name: str, value: str) -> None:
        node.attrs[name] = value

    def animate(
        self,
        node: ViewNode,
        animation: Animation,
        on_complete: Callable[[], None] | None = None,
    ) -> None:
        self._stop(node)
        node.animation = animation
        node.history.append(animation)
        node._on_complete = on_complete
        if self.auto_complete:
            self.finish(node)

    def _stop(self, node: ViewNode) -> None:
        if node.animation is None:
            return
        node.animation = None
        node._on_complete = None
        node.stopped += 1

    def finish(self, node: ViewNode) -> None:
        """Run the in-flight animation on *node* to completion."""
        callback = node._on_complete
        node.animation = None
        node._on_complete = None
        if callback is not None:
            callback()
