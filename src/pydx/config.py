"""Client configuration for pydx."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pydx._constants import (
    API_PREFIX,
    BASE_URL,
    DEFAULT_POLLING_INTERVAL_MS,
    DEFAULT_TIMEOUT_MS,
    DX_ENDPOINT,
    EVENTS_ENDPOINT,
    LICENSE_ENDPOINT,
    MAX_HISTORY,
    METRICS_ENDPOINT,
    STATISTICS_ENDPOINT,
    USER_AGENT,
)
from pydx.exceptions import DxConfigError


def _env_int(env_key: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise DxConfigError(f"{env_key} must be an integer, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class Endpoints:
    """Endpoint paths, relative to :attr:`DxConfig.api_prefix`."""

    dx: str = DX_ENDPOINT
    license: str = LICENSE_ENDPOINT
    metrics: str = METRICS_ENDPOINT
    events: str = EVENTS_ENDPOINT
    statistics: str = STATISTICS_ENDPOINT


@dataclasses.dataclass(frozen=True)
class DxConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Scheme and host of the DX backend (e.g. ``"http://192.168.0.10"``).
    api_prefix : str
        Path prefix prepended to every endpoint. Defaults to ``"/api"``.
    timeout_ms : int
        Total request timeout in milliseconds.
    access_token : str or None
        Bearer token sent as ``Authorization`` header. The library never
        refreshes it.
    user_agent : str
        ``User-Agent`` header value.
    polling_interval_ms : int
        Initial polling interval of the metrics store.
    max_history : int
        Capacity of the metrics history buffer.
    endpoints : Endpoints
        Endpoint paths.
    """

    base_url: str = BASE_URL
    api_prefix: str = API_PREFIX
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    access_token: str | None = None
    user_agent: str = USER_AGENT
    polling_interval_ms: int = DEFAULT_POLLING_INTERVAL_MS
    max_history: int = MAX_HISTORY
    endpoints: Endpoints = dataclasses.field(default_factory=Endpoints)

    def __post_init__(self) -> None:
        if self.timeout_ms <= 0:
            raise DxConfigError(f"timeout_ms must be positive, got {self.timeout_ms}")
        if self.max_history < 1:
            raise DxConfigError(f"max_history must be at least 1, got {self.max_history}")

    @property
    def api_url(self) -> str:
        """Base URL joined with the API prefix, without a trailing slash."""
        return f"{self.base_url.rstrip('/')}/{self.api_prefix.strip('/')}".rstrip("/")

    @classmethod
    def from_env(cls, **overrides: Any) -> DxConfig:
        """Create configuration from environment variables.

        Reads ``DX_BASE_URL``, ``DX_API_PREFIX``, ``DX_TIMEOUT_MS``,
        ``DX_ACCESS_TOKEN``, ``DX_POLLING_INTERVAL_MS``, ``DX_MAX_HISTORY``
        and ``DX_ENDPOINT_*``. Explicit keyword arguments override
        environment values.

        Raises
        ------
        DxConfigError
            When a numeric variable is not an integer.
        """
        env = os.environ

        endpoint_kwargs: dict[str, str] = {}
        _ENV_ENDPOINT_MAP = {
            "DX_ENDPOINT_DX": "dx",
            "DX_ENDPOINT_LICENSE": "license",
            "DX_ENDPOINT_METRICS": "metrics",
            "DX_ENDPOINT_EVENTS": "events",
            "DX_ENDPOINT_STATISTICS": "statistics",
        }
        for env_key, field_name in _ENV_ENDPOINT_MAP.items():
            val = env.get(env_key)
            if val is not None:
                endpoint_kwargs[field_name] = val

        endpoint_overrides = overrides.pop("endpoints", None)
        if isinstance(endpoint_overrides, dict):
            endpoint_kwargs.update(endpoint_overrides)
        elif isinstance(endpoint_overrides, Endpoints):
            endpoint_kwargs = dataclasses.asdict(endpoint_overrides)

        config_kwargs: dict[str, Any] = {"endpoints": Endpoints(**endpoint_kwargs)}

        _ENV_STR_MAP = {
            "DX_BASE_URL": "base_url",
            "DX_API_PREFIX": "api_prefix",
            "DX_ACCESS_TOKEN": "access_token",
            "DX_USER_AGENT": "user_agent",
        }
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        _ENV_INT_MAP = {
            "DX_TIMEOUT_MS": "timeout_ms",
            "DX_POLLING_INTERVAL_MS": "polling_interval_ms",
            "DX_MAX_HISTORY": "max_history",
        }
        for env_key, field_name in _ENV_INT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_int(env_key, val)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
