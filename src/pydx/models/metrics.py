"""Device telemetry snapshot."""

from __future__ import annotations

from pydx.models._base import DxBaseModel


class DxMetrics(DxBaseModel):
    """One telemetry sample.

    Percent fields are in ``[0, 100]`` as reported by the device; they
    are not range-checked here. Byte counts are raw bytes and ``uptime``
    is in seconds.
    """

    cpu_percent: float = 0.0
    cpu_count: int = 0
    memory_total: float = 0.0
    memory_used: float = 0.0
    memory_percent: float = 0.0
    disk_total: float = 0.0
    disk_used: float = 0.0
    disk_percent: float = 0.0
    uptime: float = 0.0
