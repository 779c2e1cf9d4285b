"""Custom exception hierarchy for pyhistory."""

from __future__ import annotations

from typing import Any


class HistoryError(Exception):
    """Base exception for all pyhistory errors."""


class HistoryConfigError(HistoryError):
    """Invalid or missing configuration."""


class HistoryInvalidArgumentError(HistoryError, TypeError):
    """A mutation or read was called with an argument it cannot accept.

    Raised synchronously by the call that received the argument; it is never
    deferred into an event.
    """

    def __init__(self, message: str, *, argument: Any = None) -> None:
        self.argument = argument
        super().__init__(message)
