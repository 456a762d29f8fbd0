"""Event endpoints.

Filtering, pagination and export all happen server-side.

Endpoints:
  - GET {events}?{filter}                   one page of events
  - GET {events}/statistics?{filter}        aggregates
  - GET {events}/export?{filter,format}     csv/xlsx file (binary)
"""

from __future__ import annotations

import logging

from pydx._api._common import parse_model
from pydx._transport import Transport
from pydx.config import DxConfig
from pydx.exceptions import DxApiError
from pydx.models.event import EventFilter, EventResponse, EventStatistics
from pydx.models.requests import EventExportRequest

_logger = logging.getLogger(__name__)


async def fetch_events(config: DxConfig, transport: Transport, event_filter: EventFilter) -> EventResponse:
    endpoint = config.endpoints.events
    payload = await transport.get(endpoint, params=event_filter.to_params())
    return parse_model(endpoint, EventResponse, payload)


async def fetch_event_statistics(
    config: DxConfig,
    transport: Transport,
    event_filter: EventFilter | None = None,
) -> EventStatistics:
    endpoint = f"{config.endpoints.events}/statistics"
    params = event_filter.to_params() if event_filter is not None else None
    return parse_model(endpoint, EventStatistics, await transport.get(endpoint, params=params))


async def export_events(config: DxConfig, transport: Transport, request: EventExportRequest) -> bytes:
    """Return the exported file as raw bytes, unprocessed."""
    endpoint = f"{config.endpoints.events}/export"
    payload = await transport.get(endpoint, params=request.to_params(), response_type="blob")
    if not isinstance(payload, (bytes, bytearray)):
        raise DxApiError(f"{endpoint} did not return a binary payload", endpoint=endpoint)
    _logger.debug("Exported %d bytes as %s", len(payload), request.format.value)
    return bytes(payload)
