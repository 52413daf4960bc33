"""Sequence tracking for overlapping asynchronous calls.

Each logical query stream (a flow at a call site) gets a monotonically
increasing sequence number per issued call. A completion is only current if
its number is still the latest issued for its stream; anything else is stale
and must not be applied by the caller.
"""

from __future__ import annotations

from collections.abc import Hashable


class SequenceTracker:
    """Issues sequence numbers per stream key and answers "is this still the latest?"."""

    def __init__(self) -> None:
        self._latest: dict[Hashable, int] = {}

    def issue(self, key: Hashable) -> int:
        """Register a new call for ``key`` and return its sequence number."""
        sequence = self._latest.get(key, 0) + 1
        self._latest[key] = sequence
        return sequence

    def is_latest(self, key: Hashable, sequence: int) -> bool:
        return self._latest.get(key) == sequence

    def latest(self, key: Hashable) -> int:
        """Latest issued number for ``key``; 0 if nothing was issued yet."""
        return self._latest.get(key, 0)

    def invalidate(self, key: Hashable) -> None:
        """Mark every outstanding call for ``key`` as stale."""
        self.issue(key)

    def reset(self) -> None:
        self._latest.clear()
