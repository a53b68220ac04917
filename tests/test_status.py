from __future__ import annotations

import pytest

from mqttwall.exceptions import UnknownConnectionStateError
from mqttwall.models import ConnectionState, StateEvent
from mqttwall.render.memory import MemoryRenderer
from mqttwall.ui.status import ConnectionStatusView, state_label


def _view() -> ConnectionStatusView:
    renderer = MemoryRenderer()
    return ConnectionStatusView(renderer, renderer.create("footer"))


@pytest.mark.parametrize(
    ("state", "label", "style"),
    [
        (ConnectionState.NEW, "", "connecting"),
        (ConnectionState.CONNECTING, "connecting...", "connecting"),
        (ConnectionState.CONNECTED, "connected", "connected"),
        (ConnectionState.RECONNECTING, "reconnecting...", "connecting"),
        (ConnectionState.ERROR, "not connected", "fail"),
    ],
)
def test_state_rendering(state: ConnectionState, label: str, style: str) -> None:
    view = _view()

    view.set_state(state)

    assert view.label_node.text == label
    assert view.state_node.classes == {style}


def test_reconnect_attempts_appended_above_one() -> None:
    view = _view()

    view.reconnect_attempts = 3
    view.set_state(ConnectionState.RECONNECTING)
    assert view.label_node.text == "reconnecting... (3)"

    view.reconnect_attempts = 1
    view.set_state(ConnectionState.RECONNECTING)
    assert view.label_node.text == "reconnecting..."


def test_style_class_replaced_on_transition() -> None:
    view = _view()
    view.set_state(ConnectionState.CONNECTED)
    view.set_state(ConnectionState.ERROR)

    assert view.state_node.classes == {"fail"}


def test_unknown_state_propagates() -> None:
    view = _view()

    with pytest.raises(UnknownConnectionStateError):
        view.set_state("sleeping")

    with pytest.raises(UnknownConnectionStateError):
        state_label(42)  # type: ignore[arg-type]


def test_apply_renders_metadata_independently_of_state() -> None:
    view = _view()

    view.apply(
        StateEvent(
            state=ConnectionState.RECONNECTING,
            reconnect_attempts=2,
            client_id="wall_1234",
            uri="ws://broker:9001/mqtt",
        )
    )

    assert view.client_node.text == "wall_1234"
    assert view.host_node.text == "ws://broker:9001/mqtt"
    assert view.label_node.text == "reconnecting... (2)"

    view.set_client_id("wall_5678")
    assert view.client_node.text == "wall_5678"
    assert view.label_node.text == "reconnecting... (2)"
