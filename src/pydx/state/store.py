"""Observable in-memory store primitive.

Every domain store is a :class:`Store` over a frozen pydantic snapshot.
Mutation swaps in a new snapshot instance, so a reader holding the old
snapshot never observes a partial update.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

_logger = logging.getLogger(__name__)

S = TypeVar("S", bound=BaseModel)

Listener = Callable[[S, S], None]
"""Called as ``listener(state, previous_state)`` after every update."""

StatePatch = Mapping[str, Any] | Callable[[S], Mapping[str, Any]]


class Store(Generic[S]):
    """Observable container holding exactly one snapshot at a time.

    Updates are applied synchronously: the new snapshot is in place
    before the first listener runs, and every call to :meth:`set_state`
    or :meth:`reset` notifies each current listener exactly once.
    Listener exceptions propagate to the caller.
    """

    def __init__(self, initial: S, *, name: str | None = None) -> None:
        self._initial = initial
        self._state = initial
        self._name = name or type(self).__name__
        self._listeners: list[Callable[[S, S], None]] = []

    @property
    def name(self) -> str:
        """Diagnostic name; only used in log lines."""
        return self._name

    def get_state(self) -> S:
        return self._state

    def set_state(self, patch: StatePatch[S]) -> None:
        """Shallow-merge *patch* into the current snapshot.

        *patch* is either a mapping of field names to new values or a
        callable receiving the current snapshot and returning one.
        Values replace fields wholesale; nested models and sequences are
        never merged.
        """
        previous = self._state
        values = dict(patch(previous) if callable(patch) else patch)
        unknown = set(values) - set(type(previous).model_fields)
        if unknown:
            raise ValueError(f"{self._name}: unknown state fields {sorted(unknown)}")
        self._replace(previous.model_copy(update=values), previous, sorted(values))

    def reset(self) -> None:
        """Restore the initial snapshot."""
        self._replace(self._initial, self._state, ["<reset>"])

    def subscribe(self, listener: Listener[S]) -> Callable[[], None]:
        """Register *listener*; return a callable that unregisters it."""
        self._listeners.append(listener)
        subscribed = True

        def unsubscribe() -> None:
            nonlocal subscribed
            if not subscribed:
                return
            subscribed = False
            self._listeners.remove(listener)

        return unsubscribe

    def _replace(self, state: S, previous: S, fields: list[str]) -> None:
        self._state = state
        _logger.debug("%s: set %s", self._name, ", ".join(fields))
        for listener in list(self._listeners):
            listener(state, previous)


class LoadableState(BaseModel):
    """Snapshot fields shared by every store fed from the API."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    is_loading: bool = False
    error: str | None = None


L = TypeVar("L", bound=LoadableState)


class LoadableStore(Store[L]):
    """Store carrying ``is_loading``/``error`` next to its payload.

    The store never sets these on its own; callers wrap each request
    with :meth:`set_loading` and, on failure, :meth:`set_error`.
    """

    def set_loading(self, loading: bool) -> None:
        self.set_state({"is_loading": loading})

    def set_error(self, error: str | None) -> None:
        self.set_state({"error": error})
