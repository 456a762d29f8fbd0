"""Event query store.

Holds the last submitted filter and the last page received for it.
Pages are never accumulated: each response replaces the previous one.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import Field

from pydx._constants import DEFAULT_EVENT_PAGE, DEFAULT_EVENT_PAGE_SIZE
from pydx.models.event import Event, EventFilter, EventPagination, EventResponse, EventStatistics
from pydx.state.store import LoadableState, LoadableStore

DEFAULT_FILTER = EventFilter(page=DEFAULT_EVENT_PAGE, page_size=DEFAULT_EVENT_PAGE_SIZE)


class EventState(LoadableState):
    events: tuple[Event, ...] = ()
    pagination: EventPagination | None = None
    statistics: EventStatistics | None = None
    filter: EventFilter = Field(default=DEFAULT_FILTER)


class EventStore(LoadableStore[EventState]):
    def __init__(self, initial: EventState | None = None, *, name: str = "event-store") -> None:
        super().__init__(initial if initial is not None else EventState(), name=name)

    def set_events(self, events: Sequence[Event]) -> None:
        self.set_state({"events": tuple(events)})

    def set_pagination(self, pagination: EventPagination | None) -> None:
        self.set_state({"pagination": pagination})

    def set_response(self, response: EventResponse) -> None:
        """Replace events and pagination in a single update."""
        self.set_state({"events": tuple(response.data), "pagination": response.pagination})

    def set_statistics(self, statistics: EventStatistics | None) -> None:
        self.set_state({"statistics": statistics})

    def set_filter(self, patch: EventFilter | Mapping[str, Any]) -> None:
        """Merge *patch* into the current filter.

        An :class:`EventFilter` contributes only the fields that were
        explicitly set on it. The merged filter is re-validated.
        """
        values = patch.model_dump(exclude_unset=True) if isinstance(patch, EventFilter) else dict(patch)
        self.set_state(lambda state: {"filter": EventFilter.model_validate({**state.filter.model_dump(), **values})})

    def reset_filter(self) -> None:
        self.set_state({"filter": DEFAULT_FILTER})
