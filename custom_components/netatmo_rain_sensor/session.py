"""
Filename: session.py
Description: Owns the single live Netatmo session. Logs in, forwards the session's error/warning
             channel to the integration logger and re-authenticates on a fixed cadence so the
             access token never silently expires.
Author: netatmo_rain_sensor contributors
Date: 2026-10-19
Version: 0.1.0
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.event import async_track_time_interval

from .api import AuthError, NetatmoClient, NetatmoSession

_LOGGER = logging.getLogger(__name__)


class SessionManager:
    """Keeps exactly one authenticated session and refreshes it periodically."""

    def __init__(
        self, hass: HomeAssistant, client: NetatmoClient, reauth_interval: timedelta
    ) -> None:
        self.hass = hass
        self._client = client
        self._reauth_interval = reauth_interval
        self._session: NetatmoSession | None = None
        self._unsub_reauth: Callable[[], None] | None = None
        self._stopped = False
        self._tasks: set[asyncio.Task] = set()

    @property
    def session(self) -> NetatmoSession | None:
        return self._session

    async def async_authenticate(self) -> NetatmoSession:
        """Log in and store the new session. Raises AuthError."""
        session = await self._client.async_authenticate()
        self._attach(session)
        self._session = session
        return session

    async def async_reauthenticate(self) -> None:
        """Replace the current session; keep the stale one if the login fails."""
        stale = self._session
        if stale is not None:
            stale.detach_all()

        try:
            session = await self._client.async_authenticate()
        except AuthError as err:
            if self._stopped:
                return
            _LOGGER.warning("Re-authentication failed, keeping previous session: %s", err)
            if stale is not None:
                self._attach(stale)
            return

        if self._stopped:
            _LOGGER.debug("Session manager stopped during re-authentication, dropping new session")
            return

        self._attach(session)
        self._session = session
        _LOGGER.debug("Netatmo session renewed")

    def start(self) -> None:
        self._stopped = False
        if self._unsub_reauth is not None:
            return
        self._unsub_reauth = async_track_time_interval(
            self.hass, self._handle_reauth_tick, self._reauth_interval
        )

    def stop(self) -> None:
        self._stopped = True
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()
        if self._unsub_reauth is not None:
            self._unsub_reauth()
            self._unsub_reauth = None
        if self._session is not None:
            self._session.detach_all()

    @callback
    def _handle_reauth_tick(self, _now: datetime) -> None:
        task = self.hass.async_create_task(self.async_reauthenticate())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _attach(self, session: NetatmoSession) -> None:
        session.on_error(self._log_error)
        session.on_warning(self._log_warning)

    @staticmethod
    def _log_error(err: Exception) -> None:
        _LOGGER.error("Netatmo API error: %s", err)

    @staticmethod
    def _log_warning(message: str) -> None:
        _LOGGER.warning("Netatmo API warning: %s", message)
