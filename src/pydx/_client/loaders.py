"""Store loaders for :class:`pydx.client.DxClient`.

Each loader runs one Gateway call and applies the outcome to a store
following the store contract: ``set_loading(True)`` before the request,
then the data setter or ``set_error``, and ``set_loading(False)`` once
no other load for the same store is pending. A result whose request was
superseded by a newer one of the same kind is dropped without touching
the store.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from pydx.exceptions import DxError
from pydx.models.device import Dx, DxStatus, License
from pydx.models.event import EventFilter, EventResponse, EventStatistics
from pydx.models.metrics import DxMetrics
from pydx.state.store import LoadableStore

if TYPE_CHECKING:
    from pydx.client import DxClient

_logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_loader(
    client: DxClient,
    *,
    kind: str,
    store: LoadableStore[Any],
    fetch: Callable[[], Awaitable[T]],
    apply: Callable[[T], None],
) -> T | None:
    """Fetch and apply; return the result, or ``None`` if it failed or went stale.

    Loads sharing a store share its ``is_loading``/``error`` pair: the
    first one to start clears the error and raises the flag, the last one
    to finish lowers it, whatever way it finishes.
    """
    token = client.sequencer.begin(kind)
    first = client.in_flight.acquire(store) == 1
    try:
        if first:
            store.set_error(None)
            store.set_loading(True)
        try:
            result = await fetch()
        except DxError as exc:
            if not client.sequencer.is_current(kind, token):
                _logger.debug("Dropping stale %s failure: %s", kind, exc)
                return None
            _logger.warning("Loading %s failed: %s", kind, exc)
            store.set_error(str(exc))
            return None

        if not client.sequencer.is_current(kind, token):
            _logger.debug("Dropping stale %s response (token %d)", kind, token)
            return None
        apply(result)
        return result
    finally:
        if client.in_flight.release(store) == 0:
            store.set_loading(False)


async def load_dx(client: DxClient) -> Dx | None:
    store = client.stores.dx
    return await run_loader(client, kind="dx", store=store, fetch=client.get_dx, apply=store.set_dx)


async def load_dx_status(client: DxClient) -> DxStatus | None:
    store = client.stores.dx
    return await run_loader(client, kind="dx.status", store=store, fetch=client.get_dx_status, apply=store.set_status)


async def load_license(client: DxClient) -> License | None:
    store = client.stores.dx
    return await run_loader(client, kind="license", store=store, fetch=client.get_license, apply=store.set_license)


async def load_metrics(client: DxClient) -> DxMetrics | None:
    store = client.stores.metrics

    def _apply(metrics: DxMetrics) -> None:
        store.set_metrics(metrics)
        store.add_to_history(metrics)

    return await run_loader(client, kind="metrics", store=store, fetch=client.get_metrics, apply=_apply)


async def load_events(
    client: DxClient,
    patch: EventFilter | Mapping[str, Any] | None = None,
) -> EventResponse | None:
    """Merge *patch* into the stored filter, then fetch that page."""
    store = client.stores.events
    if patch is not None:
        store.set_filter(patch)
    event_filter = store.get_state().filter

    async def _fetch() -> EventResponse:
        return await client.get_events(event_filter)

    return await run_loader(client, kind="events", store=store, fetch=_fetch, apply=store.set_response)


async def load_event_statistics(client: DxClient) -> EventStatistics | None:
    """Fetch statistics for the stored filter, ignoring its paging fields."""
    store = client.stores.events
    event_filter = store.get_state().filter.model_copy(update={"page": None, "page_size": None})

    async def _fetch() -> EventStatistics:
        return await client.get_event_statistics(event_filter)

    return await run_loader(
        client,
        kind="events.statistics",
        store=store,
        fetch=_fetch,
        apply=store.set_statistics,
    )
