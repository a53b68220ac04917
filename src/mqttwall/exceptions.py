"""Custom exception hierarchy for mqttwall."""

from __future__ import annotations


class WallError(Exception):
    """Base exception for all mqttwall errors."""


class WallConfigError(WallError):
    """Invalid or missing configuration."""


class UnknownConnectionStateError(WallError):
    """A connection state outside the known set was reported.

    This signals a defect in the transport collaborator (or a mismatched
    version of it) and is never handled inside this package.
    """

    def __init__(self, state: object) -> None:
        self.state = state
        super().__init__(f"Unknown connection state: {state!r}")


class WallTransportError(WallError):
    """Broker connection could not be initiated."""

    def __init__(self, message: str, *, uri: str = "") -> None:
        self.uri = uri
        super().__init__(message)
