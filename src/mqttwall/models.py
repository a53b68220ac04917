"""Normalized transport events and shared enums.

The transport adapter converts every broker callback into one of these
events. Only the UI layer consumes them.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class ConnectionState(StrEnum):
    NEW = "new"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    RECONNECTING = "reconnecting"
    ERROR = "error"


class SortPolicy(StrEnum):
    """Where a newly seen topic is placed among existing entries."""

    ALPHABETICAL = "alphabetical"
    CHRONOLOGICAL = "chronological"


class MessageEvent(BaseModel):
    """A single PUBLISH delivered for a subscribed topic."""

    model_config = ConfigDict(frozen=True)

    topic: str
    payload: str = ""
    retained: bool = False
    # Values above 2 are not rejected; the entry view shows them literally.
    qos: int = Field(default=0, ge=0)


class StateEvent(BaseModel):
    """Snapshot of the connection after a state transition."""

    model_config = ConfigDict(frozen=True)

    state: ConnectionState
    reconnect_attempts: int = Field(default=0, ge=0)
    client_id: str = ""
    uri: str = ""
