from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

import pytest

from pydx.client import DxClient, DxStores
from pydx.config import DxConfig
from pydx.exceptions import DxApiError, DxError, DxTransportError
from pydx.models.event import EventFilter
from pydx.models.metrics import DxMetrics
from pydx.state.dx import DxState
from pydx.state.events import EventState

METRICS_PAYLOAD: dict[str, Any] = {
    "cpuPercent": 42.0,
    "cpuCount": 4,
    "memoryTotal": 8e9,
    "memoryUsed": 2e9,
    "memoryPercent": 25.0,
    "diskTotal": 1e11,
    "diskUsed": 5e10,
    "diskPercent": 50.0,
    "uptime": 120,
}


@dataclass
class FakeDxBackend:
    calls: list[tuple[str, str, Any]] = field(default_factory=list)
    fail_endpoints: dict[str, Exception] = field(default_factory=dict)
    gates: dict[str, asyncio.Event] = field(default_factory=dict)
    responses: dict[str, Any] = field(
        default_factory=lambda: {
            "/v2/dx": {"id": "1", "dx_id": "DX-1", "name": "Lobby"},
            "/v2/dx/status": {"id": "1", "status": "running", "uptime": 5},
            "/v2/license": {"id": "L1", "type": "trial", "key": "K", "isValid": True},
            "/v2/license/activate": {"id": "L1", "type": "standard", "key": "NEW", "isValid": True},
            "/v2/metrics": METRICS_PAYLOAD,
            "/v2/events": {
                "data": [{"id": "e1", "eventType": "intrusion"}],
                "pagination": {"total": 1, "page": 1, "pageSize": 20, "totalPages": 1},
            },
            "/v2/events/statistics": {"totalEvents": 1, "eventsByType": {"intrusion": 1}},
            "/v2/events/export": b"id,eventType\ne1,intrusion\n",
        }
    )

    async def _respond(self, method: str, endpoint: str, payload: Any) -> Any:
        self.calls.append((method, endpoint, payload))
        gate = self.gates.get(endpoint)
        if gate is not None:
            await gate.wait()
        error = self.fail_endpoints.get(endpoint)
        if error is not None:
            raise error
        return self.responses.get(endpoint)

    async def get(self, endpoint: str, *, params: Any = None, response_type: str = "json") -> Any:
        return await self._respond("GET", endpoint, {"params": params, "response_type": response_type})

    async def put(self, endpoint: str, body: Any = None) -> Any:
        return await self._respond("PUT", endpoint, body)

    async def post(self, endpoint: str, body: Any = None) -> Any:
        return await self._respond("POST", endpoint, body)


@pytest.fixture
def backend() -> FakeDxBackend:
    return FakeDxBackend()


@pytest.fixture
def client(backend: FakeDxBackend) -> DxClient:
    return DxClient(DxConfig(), transport=backend)


@pytest.mark.asyncio
async def test_client_requires_context_manager() -> None:
    client = DxClient(DxConfig())
    with pytest.raises(DxError, match="not initialized"):
        await client.get_dx()


@pytest.mark.asyncio
async def test_gateway_calls_hit_expected_endpoints(client: DxClient, backend: FakeDxBackend) -> None:
    backend.responses["/v2/metrics"] = []
    async with client:
        dx = await client.get_dx()
        status = await client.get_dx_status()
        await client.update_dx(name="Lobby 2")
        await client.restart_dx()
        lic = await client.activate_license("NEW")
        await client.deactivate_license()
        history = await client.get_metrics_history(start_time=1, end_time=2)

    assert dx.dx_id == "DX-1"
    assert status.is_running
    assert lic.key == "NEW"
    assert history == []
    assert [(method, endpoint) for method, endpoint, _ in backend.calls] == [
        ("GET", "/v2/dx"),
        ("GET", "/v2/dx/status"),
        ("PUT", "/v2/dx"),
        ("POST", "/v2/dx/restart"),
        ("POST", "/v2/license/activate"),
        ("POST", "/v2/license/deactivate"),
        ("GET", "/v2/metrics"),
    ]
    assert backend.calls[2][2] == {"name": "Lobby 2"}
    assert backend.calls[4][2] == {"key": "NEW"}
    assert backend.calls[6][2]["params"] == {"startTime": 1, "endTime": 2}


@pytest.mark.asyncio
async def test_export_returns_bytes_untouched(client: DxClient, backend: FakeDxBackend) -> None:
    async with client:
        payload = await client.export_events(EventFilter(event_types=("intrusion",)), "xlsx")

    assert payload == b"id,eventType\ne1,intrusion\n"
    _, endpoint, request = backend.calls[-1]
    assert endpoint == "/v2/events/export"
    assert request == {"params": {"eventTypes": ("intrusion",), "format": "xlsx"}, "response_type": "blob"}
    assert client.stores.events.get_state() == EventState()


@pytest.mark.asyncio
async def test_unexpected_payload_shape_raises_api_error(client: DxClient, backend: FakeDxBackend) -> None:
    backend.responses["/v2/dx"] = ["not", "an", "object"]
    async with client:
        with pytest.raises(DxApiError, match="expected an object"):
            await client.get_dx()


@pytest.mark.asyncio
async def test_load_dx_populates_store_and_clears_loading(client: DxClient) -> None:
    seen_loading: list[bool] = []
    client.stores.dx.subscribe(lambda state, _prev: seen_loading.append(state.is_loading))

    async with client:
        dx = await client.load_dx()
        await client.load_dx_status()
        await client.load_license()

    state = client.stores.dx.get_state()
    assert dx is not None
    assert state.dx == dx
    assert state.status is not None and state.status.is_running
    assert state.license is not None and state.license.is_valid
    assert state.is_loading is False
    assert state.error is None
    assert True in seen_loading


@pytest.mark.asyncio
async def test_failed_load_records_error_and_keeps_previous_data(client: DxClient, backend: FakeDxBackend) -> None:
    async with client:
        await client.load_dx()
        backend.fail_endpoints["/v2/dx"] = DxTransportError("HTTP 503 from /v2/dx: busy", status_code=503)
        result = await client.load_dx()

    state = client.stores.dx.get_state()
    assert result is None
    assert state.error == "HTTP 503 from /v2/dx: busy"
    assert state.is_loading is False
    assert state.dx is not None and state.dx.name == "Lobby"


@pytest.mark.asyncio
async def test_next_load_clears_previous_error(client: DxClient, backend: FakeDxBackend) -> None:
    async with client:
        backend.fail_endpoints["/v2/license"] = DxTransportError("down")
        await client.load_license()
        assert client.stores.dx.get_state().error == "down"

        del backend.fail_endpoints["/v2/license"]
        await client.load_license()

    assert client.stores.dx.get_state().error is None


@pytest.mark.asyncio
async def test_load_metrics_sets_current_and_appends_history(client: DxClient) -> None:
    async with client:
        for _ in range(3):
            await client.load_metrics()

    state = client.stores.metrics.get_state()
    expected = DxMetrics.model_validate(METRICS_PAYLOAD)
    assert state.metrics == expected
    assert state.metrics_history == (expected, expected, expected)


@pytest.mark.asyncio
async def test_stale_metrics_response_is_dropped(client: DxClient, backend: FakeDxBackend) -> None:
    gate = asyncio.Event()
    backend.gates["/v2/metrics"] = gate

    async with client:
        first = asyncio.create_task(client.load_metrics())
        await asyncio.sleep(0)
        # The newer request resolves first with different data.
        del backend.gates["/v2/metrics"]
        backend.responses["/v2/metrics"] = {**METRICS_PAYLOAD, "cpuPercent": 99.0}
        second = await client.load_metrics()
        backend.responses["/v2/metrics"] = {**METRICS_PAYLOAD, "cpuPercent": 1.0}
        gate.set()
        stale = await first

    state = client.stores.metrics.get_state()
    assert stale is None
    assert second is not None
    assert state.metrics is not None and state.metrics.cpu_percent == 99.0
    assert len(state.metrics_history) == 1
    assert state.is_loading is False


@pytest.mark.asyncio
async def test_load_events_merges_filter_and_replaces_page(client: DxClient, backend: FakeDxBackend) -> None:
    async with client:
        await client.load_events({"event_types": ["intrusion"]})
        backend.responses["/v2/events"] = {
            "data": [{"id": "e2"}],
            "pagination": {"total": 21, "page": 2, "pageSize": 20, "totalPages": 2},
        }
        await client.load_events(EventFilter(page=2))
        await client.load_event_statistics()

    state = client.stores.events.get_state()
    assert [event.id for event in state.events] == ["e2"]
    assert state.pagination is not None and state.pagination.page == 2
    assert state.filter.page == 2
    assert state.statistics is not None and state.statistics.total_events == 1

    events_calls = [payload for _, endpoint, payload in backend.calls if endpoint == "/v2/events"]
    assert events_calls[0]["params"] == {"eventTypes": ("intrusion",), "page": 1, "pageSize": 20}
    assert events_calls[1]["params"] == {"eventTypes": ("intrusion",), "page": 2, "pageSize": 20}
    stats_call = next(payload for _, endpoint, payload in backend.calls if endpoint == "/v2/events/statistics")
    assert stats_call["params"] == {"eventTypes": ("intrusion",)}


@pytest.mark.asyncio
async def test_loaders_do_not_leak_across_stores(client: DxClient) -> None:
    async with client:
        await client.load_metrics()

    assert client.stores.dx.get_state() == DxState()
    assert client.stores.events.get_state() == EventState()


def test_stores_from_config() -> None:
    stores = DxStores.from_config(DxConfig(polling_interval_ms=5000, max_history=10))

    assert stores.metrics.get_state().polling_interval == 5000
    assert stores.metrics.max_history == 10

    stores.metrics.set_polling_interval(1000)
    stores.reset()
    assert stores.metrics.get_state().polling_interval == 5000


@pytest.mark.asyncio
async def test_cancelled_load_clears_loading(client: DxClient, backend: FakeDxBackend) -> None:
    backend.gates["/v2/metrics"] = asyncio.Event()

    async with client:
        task = asyncio.create_task(client.load_metrics())
        await asyncio.sleep(0)
        assert client.stores.metrics.get_state().is_loading is True
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    state = client.stores.metrics.get_state()
    assert state.is_loading is False
    assert state.error is None


@pytest.mark.asyncio
async def test_unexpected_error_still_clears_loading(client: DxClient, backend: FakeDxBackend) -> None:
    backend.fail_endpoints["/v2/metrics"] = RuntimeError("decoder blew up")

    async with client:
        with pytest.raises(RuntimeError, match="decoder blew up"):
            await client.load_metrics()

    state = client.stores.metrics.get_state()
    assert state.is_loading is False
    assert client.in_flight.pending(client.stores.metrics) == 0


@pytest.mark.asyncio
async def test_concurrent_loads_share_loading_and_error(client: DxClient, backend: FakeDxBackend) -> None:
    gate = asyncio.Event()
    backend.gates["/v2/dx/status"] = gate
    backend.fail_endpoints["/v2/dx"] = DxTransportError("dx boom")
    store = client.stores.dx

    async with client:
        status_task = asyncio.create_task(client.load_dx_status())
        await asyncio.sleep(0)
        assert await client.load_dx() is None

        # The status load is still pending: the flag stays up and the
        # sibling's error is kept.
        state = store.get_state()
        assert state.is_loading is True
        assert state.error == "dx boom"

        gate.set()
        status = await status_task

    state = store.get_state()
    assert status is not None
    assert state.status == status
    assert state.is_loading is False
    assert state.error == "dx boom"


@pytest.mark.asyncio
async def test_new_round_of_loads_clears_error(client: DxClient, backend: FakeDxBackend) -> None:
    async with client:
        backend.fail_endpoints["/v2/dx"] = DxTransportError("dx boom")
        await client.load_dx()
        del backend.fail_endpoints["/v2/dx"]

        gate = asyncio.Event()
        backend.gates["/v2/license"] = gate
        license_task = asyncio.create_task(client.load_license())
        await asyncio.sleep(0)
        assert client.stores.dx.get_state().error is None
        assert client.stores.dx.get_state().is_loading is True

        await client.load_dx()
        assert client.stores.dx.get_state().is_loading is True
        gate.set()
        await license_task

    state = client.stores.dx.get_state()
    assert state.error is None
    assert state.is_loading is False
    assert state.license is not None
