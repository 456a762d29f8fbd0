"""HTTP transport for the DX backend API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Literal, Protocol

import aiohttp

from pydx._redact import redact_for_log
from pydx.config import DxConfig
from pydx.exceptions import DxTimeoutError, DxTransportError

_logger = logging.getLogger(__name__)

ResponseType = Literal["json", "blob"]
QueryParams = Mapping[str, Any]


def encode_params(params: QueryParams | None) -> list[tuple[str, str]]:
    """Flatten query parameters into ``(key, value)`` pairs.

    ``None`` values and empty strings are omitted, sequences become
    repeated keys and booleans are sent as ``true``/``false``.
    """
    if not params:
        return []
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None or value == "":
            continue
        items = value if isinstance(value, (list, tuple, set, frozenset)) else [value]
        for item in items:
            if item is None:
                continue
            if isinstance(item, bool):
                pairs.append((key, "true" if item else "false"))
            else:
                pairs.append((key, str(item)))
    return pairs


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get(
        self,
        endpoint: str,
        *,
        params: QueryParams | None = None,
        response_type: ResponseType = "json",
    ) -> Any:
        ...

    async def put(self, endpoint: str, body: Any = None) -> Any:
        ...

    async def post(self, endpoint: str, body: Any = None) -> Any:
        ...


class HttpTransport:
    """aiohttp-backed transport with a per-request total timeout."""

    def __init__(self, config: DxConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.timeout_ms / 1000)

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": self._config.user_agent,
        }
        if self._config.access_token:
            headers["authorization"] = f"Bearer {self._config.access_token}"
        return headers

    async def get(
        self,
        endpoint: str,
        *,
        params: QueryParams | None = None,
        response_type: ResponseType = "json",
    ) -> Any:
        return await self._request("GET", endpoint, params=params, response_type=response_type)

    async def put(self, endpoint: str, body: Any = None) -> Any:
        return await self._request("PUT", endpoint, body=body)

    async def post(self, endpoint: str, body: Any = None) -> Any:
        return await self._request("POST", endpoint, body=body)

    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        params: QueryParams | None = None,
        body: Any = None,
        response_type: ResponseType = "json",
    ) -> Any:
        url = f"{self._config.api_url}{endpoint}"
        query = encode_params(params)
        headers = self._headers()
        data: str | None = None
        if body is not None:
            data = json.dumps(body, separators=(",", ":"))
            headers["content-type"] = "application/json"

        _logger.debug(
            "%s %s params=%s body=%s",
            method,
            url,
            redact_for_log(dict(query)),
            redact_for_log(body),
        )

        try:
            async with self._http.request(
                method,
                url,
                params=query,
                data=data,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                raw_body = await resp.read()
                if not 200 <= resp.status < 300:
                    text = raw_body.decode("utf-8", "replace")
                    raise DxTransportError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
                if response_type == "blob":
                    payload: bytes | str = raw_body
                else:
                    try:
                        payload = await resp.text()
                    except UnicodeDecodeError as exc:
                        raise DxTransportError(
                            f"Invalid encoding from {endpoint}: {exc.reason}",
                            endpoint=endpoint,
                        ) from exc
        except DxTransportError:
            raise
        except TimeoutError as exc:
            raise DxTimeoutError(
                f"Request to {endpoint} timed out after {self._config.timeout_ms} ms",
                endpoint=endpoint,
            ) from exc
        except aiohttp.ClientError as exc:
            raise DxTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        if response_type == "blob":
            _logger.debug("%s %s -> %s", method, url, redact_for_log(payload))
            return payload

        if not payload.strip():
            return None

        try:
            result = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise DxTransportError(
                f"Invalid JSON from {endpoint}: {payload[:200]}",
                endpoint=endpoint,
            ) from exc

        _logger.debug("%s %s -> %s", method, url, redact_for_log(result))
        return result
