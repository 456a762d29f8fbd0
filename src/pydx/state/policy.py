"""Request policies for callers of the stores.

Stores apply whatever they are given, in call order. When two requests
for the same data overlap, the one that resolves last wins even if it
was issued first. Callers that care issue a token per request and drop
results whose token is no longer the latest.

Several request kinds can feed one store, which has a single
``is_loading``/``error`` pair. :class:`InFlightCounter` tells the caller
when the first request for a store starts and when the last one ends.
"""

from __future__ import annotations

import itertools
from collections.abc import Hashable


class RequestSequencer:
    """Monotonic request tokens, tracked per request kind."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._latest: dict[str, int] = {}

    def begin(self, kind: str) -> int:
        """Issue a new token for *kind*; older tokens become stale."""
        token = next(self._counter)
        self._latest[kind] = token
        return token

    def is_current(self, kind: str, token: int) -> bool:
        return self._latest.get(kind) == token


class InFlightCounter:
    """Count outstanding requests per key (typically a store)."""

    def __init__(self) -> None:
        self._counts: dict[Hashable, int] = {}

    def acquire(self, key: Hashable) -> int:
        """Register a request for *key*; return the new count."""
        count = self._counts.get(key, 0) + 1
        self._counts[key] = count
        return count

    def release(self, key: Hashable) -> int:
        """Unregister a request for *key*; return the remaining count."""
        count = self._counts.get(key, 0) - 1
        if count <= 0:
            self._counts.pop(key, None)
            return 0
        self._counts[key] = count
        return count

    def pending(self, key: Hashable) -> int:
        return self._counts.get(key, 0)
