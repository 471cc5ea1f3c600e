from __future__ import annotations

from typing import Optional


class FlectAnalyticsError(Exception):
    """Base class for errors raised by the analytics library."""


class RelayError(FlectAnalyticsError):
    """The AI relay could not produce a usable response."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class StorageError(FlectAnalyticsError):
    """A persisted payload could not be written."""
