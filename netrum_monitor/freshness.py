"""Classify how recently a node last reported metrics."""

import time
from enum import Enum

# Fixed policy, seconds since the last metrics report
FRESH_LIMIT = 3600
DELAYED_LIMIT = 86400


class Freshness(Enum):
    FRESH = ("Fresh", 0)
    DELAYED = ("Delayed", 1)
    STALE = ("Stale", 2)
    UNKNOWN = ("N/A", 3)

    def __init__(self, label: str, rank: int) -> None:
        self.label = label
        self.rank = rank

    def __str__(self) -> str:
        return self.label


def classify(last_seen: float | None, now: float | None = None) -> Freshness:
    if last_seen is None:
        return Freshness.UNKNOWN
    if now is None:
        now = time.time()
    age = now - last_seen
    if age < FRESH_LIMIT:
        return Freshness.FRESH
    if age < DELAYED_LIMIT:
        return Freshness.DELAYED
    return Freshness.STALE
