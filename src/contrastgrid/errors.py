"""Structured errors for the contrast grid core."""

from __future__ import annotations
from typing import Any


class ContrastGridError(Exception):
    """Base class for contrast grid issues."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class InvalidColorError(ContrastGridError, ValueError):
    """Raised by strict conversions when a color specification cannot be parsed."""


class StorageError(ContrastGridError):
    """Raised when persisted state cannot be written."""
