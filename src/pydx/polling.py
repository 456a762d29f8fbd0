"""Background metrics polling.

The metrics store only holds the polling interval; this module is the
scheduler that reads it. The interval is re-read before every sleep, so
``set_polling_interval`` takes effect after the current cycle.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pydx.client import DxClient

_logger = logging.getLogger(__name__)


class MetricsPoller:
    """Periodically call :meth:`DxClient.load_metrics`.

    Usage::

        async with DxClient(config) as client, MetricsPoller(client):
            ...
    """

    def __init__(self, client: DxClient) -> None:
        self._client = client
        self._task: asyncio.Task[None] | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name="pydx-metrics-poller")

    async def stop(self) -> None:
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _run(self) -> None:
        store = self._client.stores.metrics
        while True:
            # DxError failures are recorded in the store by the loader.
            try:
                await self._client.load_metrics()
            except Exception:
                _logger.exception("Metrics poll failed")
            interval_ms = store.get_state().polling_interval
            _logger.debug("Next metrics poll in %d ms", interval_ms)
            await asyncio.sleep(max(interval_ms, 0) / 1000)

    async def __aenter__(self) -> MetricsPoller:
        self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()
