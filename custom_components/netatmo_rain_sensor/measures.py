"""
Filename: measures.py
Description: The trailing time window requested on every poll and the reduction of a measure
             response into a single "rain detected" flag.
Author: netatmo_rain_sensor contributors
Date: 2026-10-19
Version: 0.1.0
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class PollWindow:
    begin: int
    end: int

    @classmethod
    def trailing(cls, now: float, size: timedelta) -> PollWindow:
        """Window of `size` ending at `now`, both in whole epoch seconds."""
        end = int(now)
        return cls(begin=end - int(size.total_seconds()), end=end)


def aggregate(measures: Iterable) -> bool:
    """True if any sample in the (possibly nested) groups is above zero.

    Empty input and all-zero input are both "no rain"; None samples are skipped.
    """
    for item in measures:
        if item is None:
            continue
        if isinstance(item, (list, tuple)):
            if aggregate(item):
                return True
        elif item > 0:
            return True
    return False
