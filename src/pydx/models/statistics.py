"""Statistics endpoint models.

Unlike the rest of the API, the statistics endpoints use snake_case keys
on the wire, so these models switch the camelCase alias generator off.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pydx.models._base import DxBaseModel, DxEnum


class StatisticsUnit(DxEnum):
    DAY = "day"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    UNKNOWN = "unknown"


class _SnakeModel(DxBaseModel):
    model_config = ConfigDict(alias_generator=None)


class _SnakeRequest(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        str_strip_whitespace=True,
    )

    def to_params(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


# ------------------------------------------------------------------
# Event log
# ------------------------------------------------------------------


class EventLogItem(_SnakeModel):
    id: str = ""
    camera_id: str = ""
    camera_name: str = ""
    event_type: str = ""
    timestamp: str = ""
    video_url: str | None = None
    thumbnail_url: str | None = None


class EventLogResponse(_SnakeModel):
    items: list[EventLogItem] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 0


class EventLogRequest(_SnakeRequest):
    camera_id: str | None = None
    event_type: str | None = None
    from_date: str | None = Field(default=None, serialization_alias="from")
    to_date: str | None = Field(default=None, serialization_alias="to")
    page: int | None = Field(default=None, ge=1)
    page_size: int | None = Field(default=None, ge=1)

    def to_params(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ------------------------------------------------------------------
# Summary and trend
# ------------------------------------------------------------------


class SummaryItem(_SnakeModel):
    camera_id: str = ""
    camera_name: str = ""
    event_type: str = ""
    start_date: str = ""
    end_date: str = ""
    count: int = 0


class SummaryResponse(_SnakeModel):
    items: list[SummaryItem] = Field(default_factory=list)


class PeriodRequest(_SnakeRequest):
    """Summary/trend query.

    ``date`` is ``YYYY-MM-DD``, ``YYYY-MM``, ``YYYY-QN`` or ``YYYY``
    depending on ``unit``.
    """

    camera_id: str | None = None
    event_type: str | None = None
    unit: StatisticsUnit
    date: str


class TrendSeries(_SnakeModel):
    event_type: str = ""
    data: list[float] = Field(default_factory=list)


class TrendResponse(_SnakeModel):
    unit: StatisticsUnit = StatisticsUnit.UNKNOWN
    date: str = ""
    labels: list[str] = Field(default_factory=list)
    series: list[TrendSeries] = Field(default_factory=list)


class EventTypesResponse(_SnakeModel):
    event_types: list[str] = Field(default_factory=list)
