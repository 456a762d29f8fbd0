"""Telemetry endpoints.

Endpoint:
  - GET {metrics}                         current sample
  - GET {metrics}?startTime&endTime       stored samples in a window
"""

from __future__ import annotations

from pydx._api._common import parse_model, parse_model_list
from pydx._transport import Transport
from pydx.config import DxConfig
from pydx.models.metrics import DxMetrics
from pydx.models.requests import MetricsHistoryRequest


async def fetch_current_metrics(config: DxConfig, transport: Transport) -> DxMetrics:
    endpoint = config.endpoints.metrics
    return parse_model(endpoint, DxMetrics, await transport.get(endpoint))


async def fetch_metrics_history(
    config: DxConfig,
    transport: Transport,
    request: MetricsHistoryRequest,
) -> list[DxMetrics]:
    """Fetch server-side history; omitted bounds are not sent."""
    endpoint = config.endpoints.metrics
    payload = await transport.get(endpoint, params=request.to_params())
    return parse_model_list(endpoint, DxMetrics, payload)
