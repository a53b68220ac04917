"""Topic filter input with commit/revert editing."""

from __future__ import annotations

import logging
from typing import Any

from mqttwall.events import EventEmitter
from mqttwall.render.base import Renderer

_logger = logging.getLogger(__name__)

#: Channel emitted with the new topic whenever the committed value changes.
TOPIC_CHANGED = "topic_changed"

FALLBACK_TOPIC = "/#"

KEY_ENTER = "Enter"
KEY_ESCAPE = "Escape"


def initial_topic(fragment: str | None, default_topic: str | None) -> str:
    """Resolve the starting topic.

    A URL fragment wins when something remains after stripping its leading
    ``#``, then the configured default, then ``"/#"``.
    """
    topic = ""
    if fragment:
        topic = fragment[1:] if fragment.startswith("#") else fragment
    return topic or default_topic or FALLBACK_TOPIC


class CommandInput(EventEmitter):
    """Single-field editor for the subscription topic.

    The hosting toolkit forwards focus, key and blur events to
    :meth:`on_focus`, :meth:`on_key` and :meth:`on_blur`; the field's text
    is read back through the renderer.
    """

    def __init__(
        self,
        renderer: Renderer,
        field: Any,
        *,
        default_topic: str | None = None,
        fragment: str | None = None,
    ) -> None:
        super().__init__()
        self._renderer = renderer
        self._field = field
        self._revert = False
        self._topic = initial_topic(fragment, default_topic)
        self._update_ui()

    @property
    def topic(self) -> str:
        return self._topic

    @property
    def pending_revert(self) -> bool:
        return self._revert

    def set_value(self, value: str) -> None:
        self._topic = value
        self._update_ui()
        self.emit(TOPIC_CHANGED, value)

    def on_focus(self) -> None:
        self._revert = False

    def on_key(self, key: str) -> None:
        if key == KEY_ENTER:
            self.blur()
        elif key == KEY_ESCAPE:
            self._revert = True
            self.blur()

    def blur(self) -> None:
        """End the edit session; toolkits without native blur call this directly."""
        self.on_blur()

    def on_blur(self) -> None:
        if self._revert:
            self._update_ui()
            return
        self._input_changed()

    def _input_changed(self) -> None:
        new_topic = self._renderer.get_text(self._field)
        if new_topic == self._topic:
            return
        if not new_topic:
            # An empty filter is not a valid subscription; keep the committed one.
            self._update_ui()
            return

        self._topic = new_topic
        _logger.debug("Topic committed topic=%s", new_topic)
        self.emit(TOPIC_CHANGED, new_topic)

    def _update_ui(self) -> None:
        self._renderer.set_text(self._field, self._topic)
