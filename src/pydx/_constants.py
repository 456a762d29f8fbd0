"""Internal constants shared across the library."""

BASE_URL = "http://localhost"
API_PREFIX = "/api"
USER_AGENT = "pydx/1"

#: Advisory request timeout; enforced by the transport, never by the stores.
DEFAULT_TIMEOUT_MS = 10_000

# ------------------------------------------------------------------
# Endpoint paths (relative to ``API_PREFIX``)
# ------------------------------------------------------------------

DX_ENDPOINT = "/v2/dx"
LICENSE_ENDPOINT = "/v2/license"
METRICS_ENDPOINT = "/v2/metrics"
EVENTS_ENDPOINT = "/v2/events"
STATISTICS_ENDPOINT = "/v2/statistics"

# ------------------------------------------------------------------
# Telemetry store defaults
# ------------------------------------------------------------------

#: Keep the last 60 samples (10 minutes at the default 10 s cadence).
MAX_HISTORY = 60
DEFAULT_POLLING_INTERVAL_MS = 10_000

# ------------------------------------------------------------------
# Event store defaults
# ------------------------------------------------------------------

DEFAULT_EVENT_PAGE = 1
DEFAULT_EVENT_PAGE_SIZE = 20
