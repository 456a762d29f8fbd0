"""Base model and enum for DX API payloads.

Every camelCase DX response model inherits from :class:`DxBaseModel` which
provides:

* ``alias_generator=to_camel`` so camelCase API keys map
  automatically to snake_case fields (snake_case keys are accepted too).
* A ``raw`` dict that captures the original payload. It is excluded from
  serialization so models can be sent back to the API.

State enums inherit from :class:`DxEnum` which adds an ``UNKNOWN``
member and a ``_missing_`` hook that returns ``UNKNOWN`` for any value
without a mapped member.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class DxEnum(enum.StrEnum):
    """Base for DX API string enums.

    Every subclass **must** define ``UNKNOWN = "unknown"``.
    Values the API sends that have no mapped member automatically
    resolve to ``UNKNOWN`` instead of raising ``ValueError``.
    """

    @classmethod
    def _missing_(cls, value: object) -> DxEnum:
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().lower():
                    return member
        if hasattr(cls, "UNKNOWN"):
            unknown: DxEnum = cls.UNKNOWN  # type: ignore[attr-defined]
            return unknown
        return next(iter(cls))


class DxBaseModel(BaseModel):
    """Base for DX API response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        """Stash the raw payload unless the caller provided one."""
        if not isinstance(values, dict):
            return values
        if "raw" in values:
            return values
        merged = dict(values)
        merged["raw"] = dict(values)
        return merged
