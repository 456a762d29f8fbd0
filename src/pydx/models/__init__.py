"""Data models for DX API payloads."""

from pydx.models._base import DxBaseModel, DxEnum
from pydx.models.device import Dx, DxStatus, License, LicenseType, RunState
from pydx.models.event import (
    DayCount,
    Event,
    EventFilter,
    EventPagination,
    EventResponse,
    EventStatistics,
    ExportFormat,
    HourCount,
)
from pydx.models.metrics import DxMetrics
from pydx.models.statistics import (
    EventLogItem,
    EventLogRequest,
    EventLogResponse,
    EventTypesResponse,
    PeriodRequest,
    StatisticsUnit,
    SummaryItem,
    SummaryResponse,
    TrendResponse,
    TrendSeries,
)

__all__ = [
    "DayCount",
    "Dx",
    "DxBaseModel",
    "DxEnum",
    "DxMetrics",
    "DxStatus",
    "Event",
    "EventFilter",
    "EventLogItem",
    "EventLogRequest",
    "EventLogResponse",
    "EventPagination",
    "EventResponse",
    "EventStatistics",
    "EventTypesResponse",
    "ExportFormat",
    "HourCount",
    "License",
    "LicenseType",
    "PeriodRequest",
    "RunState",
    "StatisticsUnit",
    "SummaryItem",
    "SummaryResponse",
    "TrendResponse",
    "TrendSeries",
]
