from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from pydx.models.metrics import DxMetrics


class Recorder:
    """Subscriber that records every notification."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, Any]] = []

    def __call__(self, state: Any, previous: Any) -> None:
        self.calls.append((state, previous))

    @property
    def count(self) -> int:
        return len(self.calls)


def _make_metrics(i: int) -> DxMetrics:
    return DxMetrics(
        cpu_percent=float(i % 100),
        cpu_count=8,
        memory_total=16_000.0,
        memory_used=float(i),
        memory_percent=float(i % 100),
        disk_total=512_000.0,
        disk_used=float(i * 10),
        disk_percent=float(i % 100),
        uptime=float(i),
    )


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def make_metrics() -> Callable[[int], DxMetrics]:
    return _make_metrics
