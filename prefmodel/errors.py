"""Exception types raised by the data model."""

from __future__ import annotations


class TasteError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgumentError(TasteError, ValueError):
    """Raised when construction input is missing or malformed."""


class NotFoundError(TasteError, KeyError):
    """Raised when a single user or item lookup misses."""

    def __str__(self) -> str:
        # KeyError repr()s its argument; keep the plain message instead.
        return str(self.args[0]) if self.args else ""


class UnsupportedOperationError(TasteError, NotImplementedError):
    """Raised by mutation entry points of read-only data models."""
