"""Telemetry store with a bounded sliding-window history."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import Field

from pydx._constants import DEFAULT_POLLING_INTERVAL_MS, MAX_HISTORY
from pydx.models.metrics import DxMetrics
from pydx.state.store import LoadableState, LoadableStore


def append_bounded(history: Sequence[DxMetrics], item: DxMetrics, capacity: int) -> tuple[DxMetrics, ...]:
    """Return a new tuple with *item* appended, keeping at most *capacity* entries.

    The oldest entries are dropped first. *history* is never mutated.
    """
    keep = max(capacity - 1, 0)
    start = max(len(history) - keep, 0)
    return (*history[start:], item)


class MetricsState(LoadableState):
    metrics: DxMetrics | None = None
    metrics_history: tuple[DxMetrics, ...] = ()
    polling_interval: int = Field(default=DEFAULT_POLLING_INTERVAL_MS)


class MetricsStore(LoadableStore[MetricsState]):
    """Holds the latest metrics sample, its history and the polling interval.

    The polling interval is only a setting: this store runs no timer. An
    external scheduler reads it and feeds new samples in through
    :meth:`set_metrics` and :meth:`add_to_history`.
    """

    def __init__(
        self,
        initial: MetricsState | None = None,
        *,
        name: str = "metrics-store",
        max_history: int = MAX_HISTORY,
    ) -> None:
        if max_history < 1:
            raise ValueError(f"max_history must be at least 1, got {max_history}")
        super().__init__(initial if initial is not None else MetricsState(), name=name)
        self._max_history = max_history

    @property
    def max_history(self) -> int:
        return self._max_history

    def set_metrics(self, metrics: DxMetrics | None) -> None:
        self.set_state({"metrics": metrics})

    def add_to_history(self, metrics: DxMetrics) -> None:
        self.set_state(
            lambda state: {
                "metrics_history": append_bounded(state.metrics_history, metrics, self._max_history),
            }
        )

    def set_polling_interval(self, interval: int) -> None:
        self.set_state({"polling_interval": interval})

    def clear_history(self) -> None:
        self.set_state({"metrics_history": ()})
