"""Split strings into digit and non-digit runs."""

from __future__ import annotations

import re
from typing import NamedTuple

__all__ = ["Segment", "split_segments"]

_DIGIT_SPLIT = re.compile(r"([0-9]+)")


class Segment(NamedTuple):
    """A maximal run of ASCII digits or of non-digit characters."""

    text: str
    is_digit: bool


def split_segments(text: str) -> list[Segment]:
    """Return the alternating digit and non-digit runs of *text* in order."""
    parts = _DIGIT_SPLIT.split(text)
    # re.split puts captured digit runs at odd positions
    return [
        Segment(part, index % 2 == 1)
        for index, part in enumerate(parts)
        if part
    ]
