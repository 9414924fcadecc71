"""Numeric-aware string comparison and sorting."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterable
from enum import IntEnum
from typing import Any, TypeVar

from .collation import Collator, build_collator
from .segments import split_segments
from .settings import CaseSensitivity, ComparisonConfig

__all__ = [
    "NumericStringComparator",
    "Ordering",
    "compare",
    "get_comparator",
    "natural_sort_key",
    "sort_numeric",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Bands order segments of different kinds found at the same position.
_BEFORE_DIGITS = 0
_DIGITS = 1
_AFTER_DIGITS = 2


class Ordering(IntEnum):
    """Outcome of comparing two strings."""

    LESS = -1
    EQUAL = 0
    GREATER = 1

    def reverse(self) -> Ordering:
        return Ordering(-self.value)


class NumericStringComparator:
    """Compare strings with embedded numbers the way people read them.

    Digit runs are compared by numeric value, the text between them by the
    configured collator.  The collator is resolved once here, so an
    unavailable locale fails at construction with
    :class:`~numsort.errors.InvalidConfiguration`.  Instances keep no mutable
    state and can be shared between threads.
    """

    def __init__(
        self,
        config: ComparisonConfig | None = None,
        *,
        collator: Collator | None = None,
    ) -> None:
        self.config = config if config is not None else ComparisonConfig()
        self.collator = collator if collator is not None else build_collator(self.config)
        # Sensitive mode must never report distinct texts as equal, even when
        # the collator gives them the same key.
        self._tie_break = self.config.case_sensitivity is CaseSensitivity.SENSITIVE

    def __repr__(self) -> str:
        return f"NumericStringComparator({self.config!r}, collator={self.collator!r})"

    def _text_key(self, text: str) -> tuple[Any, ...]:
        key = self.collator.sort_key(text)
        if self._tie_break:
            return (key, text)
        return (key,)

    def _segment_key(self, text: str, is_digit: bool) -> tuple[Any, ...]:
        if is_digit:
            magnitude = text.lstrip("0")
            # Equal magnitudes order by run length: "7" < "07" < "007".
            return (_DIGITS, len(magnitude), magnitude, len(text))
        band = _BEFORE_DIGITS if text[0] < "0" else _AFTER_DIGITS
        return (band, *self._text_key(text))

    def sort_key(self, text: str) -> tuple[Any, ...]:
        """Return a key whose natural ordering matches :meth:`compare`."""
        if not self.config.numeric:
            return self._text_key(text)
        return tuple(
            self._segment_key(segment.text, segment.is_digit)
            for segment in split_segments(text)
        )

    def compare(self, a: str, b: str) -> Ordering:
        """Return how *a* orders relative to *b*."""
        key_a = self.sort_key(a)
        key_b = self.sort_key(b)
        if key_a < key_b:
            return Ordering.LESS
        if key_a > key_b:
            return Ordering.GREATER
        return Ordering.EQUAL

    def sort(
        self,
        items: Iterable[T],
        *,
        key: Callable[[T], str] | None = None,
        reverse: bool = False,
    ) -> list[T]:
        """Return a new, stably sorted list of *items*.

        ``key`` extracts the string to compare from each item.  Items that
        compare equal keep their input order, also when ``reverse`` is set.
        """
        if key is None:
            sort_key = self.sort_key
        else:
            def sort_key(item: T) -> tuple[Any, ...]:
                return self.sort_key(key(item))

        result = sorted(items, key=sort_key, reverse=reverse)
        logger.debug(
            "sorted",
            extra={"json": {"event": "sorted", "payload": {"count": len(result)}}},
        )
        return result


@functools.lru_cache(maxsize=32)
def get_comparator(config: ComparisonConfig | None = None) -> NumericStringComparator:
    """Return a shared comparator for *config*."""
    return NumericStringComparator(config)


def compare(a: str, b: str, config: ComparisonConfig | None = None) -> Ordering:
    """Compare *a* and *b* under *config* (numeric, case-sensitive by default)."""
    return get_comparator(config).compare(a, b)


def sort_numeric(
    items: Iterable[T],
    config: ComparisonConfig | None = None,
    *,
    key: Callable[[T], str] | None = None,
    reverse: bool = False,
) -> list[T]:
    """Return *items* sorted with numeric-aware ordering; see :meth:`NumericStringComparator.sort`."""
    return get_comparator(config).sort(items, key=key, reverse=reverse)


def natural_sort_key(value: Any, config: ComparisonConfig | None = None) -> tuple[Any, ...]:
    """Return a natural sorting key for any value, treating ``None`` as ``""``."""
    text = "" if value is None else str(value)
    return get_comparator(config).sort_key(text)
