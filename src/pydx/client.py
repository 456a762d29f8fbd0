"""High-level async client for the DX device API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import aiohttp

from pydx._api import dx as _dx_api
from pydx._api import events as _events_api
from pydx._api import metrics as _metrics_api
from pydx._api import statistics as _statistics_api
from pydx._client import loaders as _loaders
from pydx._transport import HttpTransport, Transport
from pydx.config import DxConfig
from pydx.exceptions import DxError
from pydx.models.device import Dx, DxStatus, License
from pydx.models.event import EventFilter, EventResponse, EventStatistics, ExportFormat
from pydx.models.metrics import DxMetrics
from pydx.models.requests import (
    ActivateLicenseRequest,
    DxUpdateRequest,
    EventExportRequest,
    MetricsHistoryRequest,
)
from pydx.models.statistics import (
    EventLogRequest,
    EventLogResponse,
    EventTypesResponse,
    PeriodRequest,
    SummaryResponse,
    TrendResponse,
)
from pydx.state.dx import DxStore
from pydx.state.events import EventStore
from pydx.state.metrics import MetricsState, MetricsStore
from pydx.state.policy import InFlightCounter, RequestSequencer

_logger = logging.getLogger(__name__)


@dataclass
class DxStores:
    """One instance of every domain store."""

    dx: DxStore = field(default_factory=DxStore)
    metrics: MetricsStore = field(default_factory=MetricsStore)
    events: EventStore = field(default_factory=EventStore)

    @classmethod
    def from_config(cls, config: DxConfig) -> DxStores:
        metrics = MetricsStore(
            MetricsState(polling_interval=config.polling_interval_ms),
            max_history=config.max_history,
        )
        return cls(metrics=metrics)

    def reset(self) -> None:
        """Reset every store, e.g. on logout."""
        self.dx.reset()
        self.metrics.reset()
        self.events.reset()


class DxClient:
    """Async client for the DX device API.

    The client owns the application's stores; ``load_*`` methods fetch
    and apply results to them, the other methods just return the parsed
    payload.

    Usage::

        async with DxClient(DxConfig(base_url="http://dx.local")) as client:
            await client.load_dx()
            print(client.stores.dx.get_state().dx)
    """

    def __init__(
        self,
        config: DxConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        stores: DxStores | None = None,
    ) -> None:
        self._config = config if config is not None else DxConfig()
        self._external_session = session is not None
        self._http_session = session
        self._external_transport = transport is not None
        self._transport: Transport | None = transport
        self.stores = stores if stores is not None else DxStores.from_config(self._config)
        self.sequencer = RequestSequencer()
        self.in_flight = InFlightCounter()

    @property
    def config(self) -> DxConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> DxClient:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if self._external_transport:
            return
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise DxError("Client not initialized. Use 'async with DxClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Device & license
    # ------------------------------------------------------------------

    async def get_dx(self) -> Dx:
        return await _dx_api.fetch_dx(self._config, self._require_transport())

    async def get_dx_status(self) -> DxStatus:
        return await _dx_api.fetch_dx_status(self._config, self._require_transport())

    async def update_dx(self, **fields: Any) -> Dx:
        """Update device settings; only the given fields are sent.

        The device store is not touched; call :meth:`load_dx` (or
        ``stores.dx.set_dx``) with the result to refresh it.
        """
        request = DxUpdateRequest(**fields)
        return await _dx_api.update_dx(self._config, self._require_transport(), request)

    async def restart_dx(self) -> None:
        await _dx_api.restart_dx(self._config, self._require_transport())

    async def get_license(self) -> License:
        return await _dx_api.fetch_license(self._config, self._require_transport())

    async def activate_license(self, key: str) -> License:
        request = ActivateLicenseRequest(key=key)
        return await _dx_api.activate_license(self._config, self._require_transport(), request)

    async def deactivate_license(self) -> None:
        await _dx_api.deactivate_license(self._config, self._require_transport())

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    async def get_metrics(self) -> DxMetrics:
        return await _metrics_api.fetch_current_metrics(self._config, self._require_transport())

    async def get_metrics_history(
        self,
        start_time: int | None = None,
        end_time: int | None = None,
    ) -> list[DxMetrics]:
        """Fetch stored samples between two epoch-millisecond bounds."""
        request = MetricsHistoryRequest(start_time=start_time, end_time=end_time)
        return await _metrics_api.fetch_metrics_history(self._config, self._require_transport(), request)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    async def get_events(self, event_filter: EventFilter | None = None) -> EventResponse:
        return await _events_api.fetch_events(
            self._config,
            self._require_transport(),
            event_filter if event_filter is not None else EventFilter(),
        )

    async def get_event_statistics(self, event_filter: EventFilter | None = None) -> EventStatistics:
        return await _events_api.fetch_event_statistics(self._config, self._require_transport(), event_filter)

    async def export_events(
        self,
        event_filter: EventFilter | None = None,
        export_format: ExportFormat | str = ExportFormat.CSV,
    ) -> bytes:
        """Export matching events; the file content is returned as-is."""
        request = EventExportRequest(
            filter=event_filter if event_filter is not None else EventFilter(),
            format=export_format,
        )
        return await _events_api.export_events(self._config, self._require_transport(), request)

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    async def get_event_log(self, request: EventLogRequest | None = None) -> EventLogResponse:
        return await _statistics_api.fetch_event_log(
            self._config,
            self._require_transport(),
            request if request is not None else EventLogRequest(),
        )

    async def get_summary(self, request: PeriodRequest) -> SummaryResponse:
        return await _statistics_api.fetch_summary(self._config, self._require_transport(), request)

    async def get_trend(self, request: PeriodRequest) -> TrendResponse:
        return await _statistics_api.fetch_trend(self._config, self._require_transport(), request)

    async def get_event_types(self) -> EventTypesResponse:
        return await _statistics_api.fetch_event_types(self._config, self._require_transport())

    # ------------------------------------------------------------------
    # Store loaders
    # ------------------------------------------------------------------

    async def load_dx(self) -> Dx | None:
        return await _loaders.load_dx(self)

    async def load_dx_status(self) -> DxStatus | None:
        return await _loaders.load_dx_status(self)

    async def load_license(self) -> License | None:
        return await _loaders.load_license(self)

    async def load_metrics(self) -> DxMetrics | None:
        """Fetch one sample into ``metrics`` and append it to the history."""
        return await _loaders.load_metrics(self)

    async def load_events(self, patch: EventFilter | Mapping[str, Any] | None = None) -> EventResponse | None:
        return await _loaders.load_events(self, patch)

    async def load_event_statistics(self) -> EventStatistics | None:
        return await _loaders.load_event_statistics(self)
