"""Device, runtime status and license models."""

from __future__ import annotations

from pydantic import Field

from pydx.models._base import DxBaseModel, DxEnum


class LicenseType(DxEnum):
    TRIAL = "trial"
    STANDARD = "standard"
    ENTERPRISE = "enterprise"
    UNKNOWN = "unknown"


class RunState(DxEnum):
    RUNNING = "running"
    STOPPED = "stopped"
    ERROR = "error"
    UNKNOWN = "unknown"


class Dx(DxBaseModel):
    """Device identity and configuration.

    ``dx_id``, ``license_type``, ``license_key`` and ``end_date`` arrive
    snake_cased on the wire; the remaining keys are camelCase.
    """

    id: str = ""
    dx_id: str = ""
    name: str = ""
    address: str = ""
    version: str = ""
    framework: str = ""
    capacity: int = 0
    activated: bool = False
    nats_port: int | None = None
    launcher_port: int | None = None
    license_type: LicenseType = LicenseType.UNKNOWN
    license_key: str = ""
    end_date: str | None = None


class DxStatus(DxBaseModel):
    """Runtime status of the device."""

    id: str = ""
    status: RunState = RunState.UNKNOWN
    uptime: float = 0.0
    last_error: str | None = None

    @property
    def is_running(self) -> bool:
        return self.status == RunState.RUNNING


class License(DxBaseModel):
    """License record of the device."""

    id: str = ""
    type: LicenseType = LicenseType.UNKNOWN
    key: str = ""
    start_date: str | None = None
    end_date: str | None = None
    max_streams: int = 0
    max_inferences: int = 0
    features: list[str] = Field(default_factory=list)
    is_valid: bool = False
