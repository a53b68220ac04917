"""Rendering layer.

The UI components depend only on the :class:`Renderer` protocol; concrete
renderers live alongside it.
"""

from mqttwall.render.base import Animation, Highlight, Renderer, Transition
from mqttwall.render.memory import MemoryRenderer, ViewNode

__all__ = ["Animation", "Highlight", "MemoryRenderer", "Renderer", "Transition", "ViewNode"]
