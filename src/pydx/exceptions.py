"""Custom exception hierarchy for pydx."""

from __future__ import annotations


class DxError(Exception):
    """Base exception for all pydx errors."""


class DxConfigError(DxError):
    """Invalid or missing configuration."""


class DxTransportError(DxError):
    """HTTP-level failure (network, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class DxTimeoutError(DxTransportError):
    """The request did not complete within the configured timeout."""


class DxApiError(DxError):
    """A 2xx response whose body does not have the expected shape."""

    def __init__(
        self,
        message: str,
        *,
        endpoint: str = "",
    ) -> None:
        self.endpoint = endpoint
        super().__init__(message)
