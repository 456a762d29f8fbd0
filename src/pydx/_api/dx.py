"""Device and license endpoints.

Endpoints:
  - GET  {dx}                    device info
  - GET  {dx}/status             runtime status
  - PUT  {dx}                    partial update
  - POST {dx}/restart            restart
  - GET  {license}               license record
  - POST {license}/activate      activate with a key
  - POST {license}/deactivate    deactivate
"""

from __future__ import annotations

import logging

from pydx._api._common import parse_model
from pydx._transport import Transport
from pydx.config import DxConfig
from pydx.models.device import Dx, DxStatus, License
from pydx.models.requests import ActivateLicenseRequest, DxUpdateRequest

_logger = logging.getLogger(__name__)


async def fetch_dx(config: DxConfig, transport: Transport) -> Dx:
    endpoint = config.endpoints.dx
    return parse_model(endpoint, Dx, await transport.get(endpoint))


async def fetch_dx_status(config: DxConfig, transport: Transport) -> DxStatus:
    endpoint = f"{config.endpoints.dx}/status"
    return parse_model(endpoint, DxStatus, await transport.get(endpoint))


async def update_dx(config: DxConfig, transport: Transport, request: DxUpdateRequest) -> Dx:
    """Send the fields set on *request* and return the updated device."""
    endpoint = config.endpoints.dx
    return parse_model(endpoint, Dx, await transport.put(endpoint, request.to_body()))


async def restart_dx(config: DxConfig, transport: Transport) -> None:
    endpoint = f"{config.endpoints.dx}/restart"
    await transport.post(endpoint)
    _logger.info("Restart requested for DX device")


async def fetch_license(config: DxConfig, transport: Transport) -> License:
    endpoint = config.endpoints.license
    return parse_model(endpoint, License, await transport.get(endpoint))


async def activate_license(config: DxConfig, transport: Transport, request: ActivateLicenseRequest) -> License:
    endpoint = f"{config.endpoints.license}/activate"
    return parse_model(endpoint, License, await transport.post(endpoint, {"key": request.key}))


async def deactivate_license(config: DxConfig, transport: Transport) -> None:
    endpoint = f"{config.endpoints.license}/deactivate"
    await transport.post(endpoint)
    _logger.info("License deactivated")
