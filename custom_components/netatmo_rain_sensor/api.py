"""
Filename: api.py
Description: Thin asynchronous client for the Netatmo weather API. Logs in with the password grant,
             lists stations with their modules and fetches rain measures. Diagnostics are delivered
             through per-session error/warning handlers that callers attach and detach.
Author: netatmo_rain_sensor contributors
Date: 2026-10-19
Version: 0.1.0
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any

import aiohttp

from homeassistant.exceptions import HomeAssistantError

from .const import API_URL, OAUTH_SCOPE, OAUTH_URL, REQUEST_TIMEOUT
from .models import Credentials, Module, Station

_LOGGER = logging.getLogger(__name__)

ErrorHandler = Callable[[Exception], None]
WarningHandler = Callable[[str], None]


class NetatmoRainError(HomeAssistantError):
    """Base error for the netatmo_rain_sensor integration."""


class AuthError(NetatmoRainError):
    """Raised when Netatmo rejects the credentials or the login cannot be completed."""


class FetchError(NetatmoRainError):
    """Raised when a data request to Netatmo fails."""


class NetatmoClient:
    """Creates authenticated sessions against the Netatmo API."""

    def __init__(self, websession: aiohttp.ClientSession, credentials: Credentials) -> None:
        self._websession = websession
        self._credentials = credentials

    async def async_authenticate(self) -> NetatmoSession:
        creds = self._credentials
        form = {
            "grant_type": "password",
            "client_id": creds.client_id,
            "client_secret": creds.client_secret,
            "username": creds.username,
            "password": creds.password,
            "scope": OAUTH_SCOPE,
        }
        try:
            async with asyncio.timeout(REQUEST_TIMEOUT):
                resp = await self._websession.post(OAUTH_URL, data=form)
                payload = await resp.json(content_type=None)
        except (aiohttp.ClientError, TimeoutError, ValueError) as err:
            raise AuthError(f"Could not reach Netatmo to log in: {err}") from err

        if resp.status != 200 or not isinstance(payload, dict) or "access_token" not in payload:
            reason = payload.get("error") if isinstance(payload, dict) else None
            raise AuthError(f"Netatmo rejected the credentials (HTTP {resp.status}): {reason}")

        _LOGGER.debug("Authenticated against Netatmo as %s", creds.username)
        return NetatmoSession(self._websession, payload["access_token"])


class NetatmoSession:
    """One access token plus the diagnostic handlers attached to it."""

    def __init__(self, websession: aiohttp.ClientSession, access_token: str) -> None:
        self._websession = websession
        self._access_token = access_token
        self._error_handlers: list[ErrorHandler] = []
        self._warning_handlers: list[WarningHandler] = []

    # ---- diagnostics channel ---------------------------------------------

    def on_error(self, handler: ErrorHandler) -> Callable[[], None]:
        self._error_handlers.append(handler)
        return lambda: _discard(self._error_handlers, handler)

    def on_warning(self, handler: WarningHandler) -> Callable[[], None]:
        self._warning_handlers.append(handler)
        return lambda: _discard(self._warning_handlers, handler)

    def detach_all(self) -> None:
        """Drop every error and warning handler."""
        self._error_handlers.clear()
        self._warning_handlers.clear()

    def _emit_error(self, err: Exception) -> None:
        for handler in list(self._error_handlers):
            handler(err)

    def _emit_warning(self, message: str) -> None:
        for handler in list(self._warning_handlers):
            handler(message)

    # ---- requests ----------------------------------------------------------

    async def async_list_stations(self) -> list[Station]:
        body = await self._async_get("getstationsdata", {})
        devices = body.get("devices", []) if isinstance(body, dict) else []
        return [_parse_station(device) for device in devices]

    async def async_fetch_measures(
        self,
        station_id: str,
        module_id: str,
        begin: int,
        scale: str,
        types: Sequence[str],
        *,
        end: int | None = None,
        optimize: bool = True,
        real_time: bool = True,
    ) -> list[list[float]]:
        """Return the requested measures as one list of sample values per group."""
        params = {
            "device_id": station_id,
            "module_id": module_id,
            "scale": scale,
            "type": ",".join(types),
            "date_begin": str(begin),
            "optimize": _flag(optimize),
            "real_time": _flag(real_time),
        }
        if end is not None:
            params["date_end"] = str(end)

        body = await self._async_get("getmeasure", params)
        groups = _parse_measures(body)
        if not groups:
            self._emit_warning(f"No measures returned for module {module_id} since {begin}")
        return groups

    async def _async_get(self, endpoint: str, params: dict[str, str]) -> Any:
        headers = {"Authorization": f"Bearer {self._access_token}"}
        try:
            async with asyncio.timeout(REQUEST_TIMEOUT):
                resp = await self._websession.get(
                    f"{API_URL}/{endpoint}", params=params, headers=headers
                )
                payload = await resp.json(content_type=None)
        except (aiohttp.ClientError, TimeoutError, ValueError) as err:
            error = FetchError(f"Request to {endpoint} failed: {err}")
            self._emit_error(error)
            raise error from err

        if resp.status != 200 or not isinstance(payload, dict) or "error" in payload:
            detail = payload.get("error") if isinstance(payload, dict) else payload
            error = FetchError(f"{endpoint} returned HTTP {resp.status}: {detail}")
            self._emit_error(error)
            raise error

        status = payload.get("status")
        if status != "ok":
            self._emit_warning(f"{endpoint} answered with status {status!r}")
        return payload.get("body")


def _discard(handlers: list, handler: Callable) -> None:
    if handler in handlers:
        handlers.remove(handler)


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _parse_station(device: dict[str, Any]) -> Station:
    modules = tuple(
        Module(
            module_id=module["_id"],
            module_type=module.get("type", ""),
            name=module.get("module_name"),
        )
        for module in device.get("modules", [])
    )
    return Station(
        station_id=device["_id"],
        name=device.get("station_name"),
        modules=modules,
    )


def _parse_measures(body: Any) -> list[list[float]]:
    """Flatten each optimized measure group into its sample values.

    Optimized groups look like {"beg_time": ..., "step_time": ..., "value": [[0.0], [0.3]]};
    the non-optimized form is a {timestamp: [value]} mapping and becomes a single group.
    """
    if isinstance(body, dict):
        samples = [v for row in body.values() for v in row if v is not None]
        return [samples] if samples else []
    if not isinstance(body, list):
        return []

    groups: list[list[float]] = []
    for group in body:
        rows = group.get("value", []) if isinstance(group, dict) else []
        groups.append([v for row in rows for v in row if v is not None])
    return groups
