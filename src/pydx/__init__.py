"""pydx - Async Python client and state stores for the DX device API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pydx")
except PackageNotFoundError:
    __version__ = "0+local"
from pydx.client import DxClient, DxStores
from pydx.config import DxConfig, Endpoints
from pydx.exceptions import (
    DxApiError,
    DxConfigError,
    DxError,
    DxTimeoutError,
    DxTransportError,
)
from pydx.models import (
    Dx,
    DxMetrics,
    DxStatus,
    Event,
    EventFilter,
    EventPagination,
    EventResponse,
    EventStatistics,
    ExportFormat,
    License,
    LicenseType,
    RunState,
    StatisticsUnit,
)
from pydx.polling import MetricsPoller
from pydx.state.dx import DxState, DxStore
from pydx.state.events import EventState, EventStore
from pydx.state.metrics import MetricsState, MetricsStore
from pydx.state.policy import InFlightCounter, RequestSequencer
from pydx.state.store import LoadableState, LoadableStore, Store

__all__ = [
    "__version__",
    "Dx",
    "DxApiError",
    "DxClient",
    "DxConfig",
    "DxConfigError",
    "DxError",
    "DxMetrics",
    "DxState",
    "DxStatus",
    "DxStore",
    "DxStores",
    "DxTimeoutError",
    "DxTransportError",
    "Endpoints",
    "Event",
    "EventFilter",
    "EventPagination",
    "EventResponse",
    "EventState",
    "EventStatistics",
    "EventStore",
    "ExportFormat",
    "InFlightCounter",
    "License",
    "LicenseType",
    "LoadableState",
    "LoadableStore",
    "MetricsPoller",
    "MetricsState",
    "MetricsStore",
    "RequestSequencer",
    "RunState",
    "StatisticsUnit",
    "Store",
]
