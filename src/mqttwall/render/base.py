"""Rendering capability consumed by the UI components.

The UI layer never touches a concrete toolkit. It receives an object
implementing :class:`Renderer` and manipulates opaque node handles through it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

#: Accent color a freshly updated row or payload flashes to.
HIGHLIGHT_COLOR = "#0CB0FF"
#: Background the highlight fades back to.
NEUTRAL_COLOR = "#fff"
HIGHLIGHT_DURATION_MS = 2000


@dataclass(frozen=True)
class Highlight:
    """Jump the background to ``color`` then fade to ``neutral``."""

    color: str = HIGHLIGHT_COLOR
    neutral: str = NEUTRAL_COLOR
    duration_ms: int = HIGHLIGHT_DURATION_MS


@dataclass(frozen=True)
class Transition:
    """Named enter/exit effect (e.g. ``fade-in``, ``slide-up``)."""

    name: str
    duration_ms: int = 400


Animation = Highlight | Transition


@runtime_checkable
class Renderer(Protocol):
    """Abstract view-node operations.

    ``animate`` must stop any animation still running on the same node
    before starting the new one. ``on_complete`` is only called for an
    animation that ran to its end.
    """

    def create(self, tag: str, *, classes: Iterable[str] = (), text: str = "") -> Any: ...

    def append(self, parent: Any, node: Any) -> None: ...

    def prepend(self, parent: Any, node: Any) -> None: ...

    def insert_after(self, anchor: Any, node: Any) -> None: ...

    def remove(self, node: Any) -> None: ...

    def clear(self, parent: Any) -> None: ...

    def set_text(self, node: Any, text: str) -> None: ...

    def get_text(self, node: Any) -> str: ...

    def toggle_class(self, node: Any, name: str, enabled: bool) -> None: ...

    def set_visible(self, node: Any, visible: bool) -> None: ...

    def set_attr(self, node: Any, name: str, value: str) -> None: ...

    def animate(
        self,
        node: Any,
        animation: Animation,
        on_complete: Callable[[], None] | None = None,
    ) -> None: ...
