"""Exceptions raised by numsort."""

from __future__ import annotations

__all__ = ["InvalidConfiguration", "NumsortError"]


class NumsortError(Exception):
    """Base class for numsort errors."""


class InvalidConfiguration(NumsortError, ValueError):
    """Comparison settings cannot be turned into a working comparator."""

    def __init__(self, message: str, *, locale: str | None = None) -> None:
        super().__init__(message)
        self.locale = locale
