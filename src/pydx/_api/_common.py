"""Shared helpers for DX API endpoint modules.

It is internal to pydx and may change at any time.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from pydx.exceptions import DxApiError

M = TypeVar("M", bound=BaseModel)


def parse_model(endpoint: str, model: type[M], payload: Any) -> M:
    """Validate *payload* as *model*, mapping failures to :class:`DxApiError`."""
    if not isinstance(payload, dict):
        raise DxApiError(
            f"{endpoint} returned {type(payload).__name__}, expected an object",
            endpoint=endpoint,
        )
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise DxApiError(f"{endpoint} returned an invalid payload: {exc}", endpoint=endpoint) from exc


def parse_model_list(endpoint: str, model: type[M], payload: Any) -> list[M]:
    """Validate a JSON array of *model* objects."""
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise DxApiError(
            f"{endpoint} returned {type(payload).__name__}, expected a list",
            endpoint=endpoint,
        )
    return [parse_model(endpoint, model, item) for item in payload]
