"""Event log, filter, pagination and statistics models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pydx.models._base import DxBaseModel, DxEnum


class ExportFormat(DxEnum):
    CSV = "csv"
    XLSX = "xlsx"
    UNKNOWN = "unknown"


class Event(DxBaseModel):
    """A single detection event emitted by a vision app on a stream."""

    id: str = ""
    event_type: str = ""
    event_name: str = ""
    stream_id: str = ""
    stream_name: str = ""
    app_id: str = ""
    app_name: str = ""
    timestamp: str = ""
    data: dict[str, Any] = Field(default_factory=dict)
    image_url: str | None = None


class EventFilter(BaseModel):
    """Query parameters of the event endpoints.

    Every field is optional; unset fields are not sent. Dates are
    ISO-8601 strings passed through verbatim.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    start_date: str | None = None
    end_date: str | None = None
    event_types: tuple[str, ...] | None = None
    stream_ids: tuple[str, ...] | None = None
    app_ids: tuple[str, ...] | None = None
    page: int | None = Field(default=None, ge=1)
    page_size: int | None = Field(default=None, ge=1)

    def to_params(self) -> dict[str, Any]:
        """Return the camelCase query mapping, without unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class EventPagination(DxBaseModel):
    total: int = 0
    page: int = 1
    page_size: int = 0
    total_pages: int = 0


class EventResponse(DxBaseModel):
    """One page of events."""

    data: list[Event] = Field(default_factory=list)
    pagination: EventPagination = Field(default_factory=EventPagination)


class HourCount(DxBaseModel):
    hour: int
    count: int = 0


class DayCount(DxBaseModel):
    date: str
    count: int = 0


class EventStatistics(DxBaseModel):
    """Aggregates computed server-side for a filter."""

    total_events: int = 0
    events_by_type: dict[str, int] = Field(default_factory=dict)
    events_by_stream: dict[str, int] = Field(default_factory=dict)
    events_by_hour: list[HourCount] = Field(default_factory=list)
    events_by_day: list[DayCount] = Field(default_factory=list)
