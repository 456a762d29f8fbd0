"""Pydantic request models for client entrypoints.

These models provide a consistent "validate → normalize → execute" flow.
They are used internally by :class:`pydx.client.DxClient`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from pydx.models.device import LicenseType
from pydx.models.event import EventFilter, ExportFormat


class _Request(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
    )


class DxUpdateRequest(_Request):
    """Partial device update; only the fields that were set are sent."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str | None = None
    address: str | None = None
    capacity: int | None = Field(default=None, ge=0)
    activated: bool | None = None
    nats_port: int | None = Field(default=None, ge=1, le=65535)
    launcher_port: int | None = Field(default=None, ge=1, le=65535)
    license_type: LicenseType | None = Field(default=None, serialization_alias="license_type")
    license_key: str | None = Field(default=None, serialization_alias="license_key")
    end_date: str | None = Field(default=None, serialization_alias="end_date")

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class ActivateLicenseRequest(_Request):
    key: str

    @field_validator("key")
    @classmethod
    def _key_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("license key must be non-empty")
        return value


class MetricsHistoryRequest(_Request):
    """Time window of a metrics history query, in epoch milliseconds."""

    start_time: int | None = Field(default=None, ge=0)
    end_time: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _ordered(self) -> MetricsHistoryRequest:
        if self.start_time is not None and self.end_time is not None and self.end_time < self.start_time:
            raise ValueError("end_time must not be before start_time")
        return self

    def to_params(self) -> dict[str, Any]:
        return {"startTime": self.start_time, "endTime": self.end_time}


class EventExportRequest(_Request):
    filter: EventFilter = Field(default_factory=EventFilter)
    format: ExportFormat = ExportFormat.CSV

    @field_validator("format")
    @classmethod
    def _known_format(cls, value: ExportFormat) -> ExportFormat:
        if value == ExportFormat.UNKNOWN:
            raise ValueError("export format must be 'csv' or 'xlsx'")
        return value

    def to_params(self) -> dict[str, Any]:
        return {**self.filter.to_params(), "format": self.format.value}
