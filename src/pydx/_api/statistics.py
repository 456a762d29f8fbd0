"""Statistics endpoints.

Endpoints:
  - GET {statistics}/events         event log page
  - GET {statistics}/summary        counts per camera/event type for a period
  - GET {statistics}/trend          chart series for a period
  - GET {statistics}/event-types    known event types
"""

from __future__ import annotations

from pydx._api._common import parse_model
from pydx._transport import Transport
from pydx.config import DxConfig
from pydx.models.statistics import (
    EventLogRequest,
    EventLogResponse,
    EventTypesResponse,
    PeriodRequest,
    SummaryResponse,
    TrendResponse,
)


async def fetch_event_log(config: DxConfig, transport: Transport, request: EventLogRequest) -> EventLogResponse:
    endpoint = f"{config.endpoints.statistics}/events"
    return parse_model(endpoint, EventLogResponse, await transport.get(endpoint, params=request.to_params()))


async def fetch_summary(config: DxConfig, transport: Transport, request: PeriodRequest) -> SummaryResponse:
    endpoint = f"{config.endpoints.statistics}/summary"
    return parse_model(endpoint, SummaryResponse, await transport.get(endpoint, params=request.to_params()))


async def fetch_trend(config: DxConfig, transport: Transport, request: PeriodRequest) -> TrendResponse:
    endpoint = f"{config.endpoints.statistics}/trend"
    return parse_model(endpoint, TrendResponse, await transport.get(endpoint, params=request.to_params()))


async def fetch_event_types(config: DxConfig, transport: Transport) -> EventTypesResponse:
    endpoint = f"{config.endpoints.statistics}/event-types"
    return parse_model(endpoint, EventTypesResponse, await transport.get(endpoint))
