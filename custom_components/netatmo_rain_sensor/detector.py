"""
Filename: detector.py
Description: Wires the rain-detection state machine together: authenticates, discovers the rain
             module, polls it on a timer over a trailing window and applies the aggregated result to
             the shared detection state. Polls are fire-and-forget; the last one to finish wins.
Author: netatmo_rain_sensor contributors
Date: 2026-10-19
Version: 0.1.0
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from datetime import datetime
from typing import Any

from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.event import async_track_time_interval
from homeassistant.util import dt as dt_util

from .api import FetchError, NetatmoClient
from .const import MEASURE_SCALE, MEASURE_TYPE
from .discovery import DiscoveryNotFound, discover
from .measures import PollWindow, aggregate
from .models import RainSensorConfig, SensorIdentity
from .projection import AccessoryInformation, Projection, build_projection
from .session import SessionManager
from .state import CooldownController, DetectionState

_LOGGER = logging.getLogger(__name__)


class RainDetector:
    """One virtual rain sensor bound to one Netatmo rain module."""

    def __init__(
        self, hass: HomeAssistant, config: RainSensorConfig, client: NetatmoClient
    ) -> None:
        self.hass = hass
        self.config = config
        self.cooldown = CooldownController(hass, on_expire=self._handle_cooldown_expired)
        self.state = DetectionState(self.cooldown)
        self.sessions = SessionManager(hass, client, config.reauth_interval)
        self.projection: Projection = build_projection(
            hass, config.device_type, self.state, config.cooldown
        )
        self.information = AccessoryInformation(name=config.name)
        self._unsub_poll: Callable[[], None] | None = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def polling(self) -> bool:
        return self._unsub_poll is not None

    def get_services(self) -> tuple[AccessoryInformation, Projection]:
        return self.information, self.projection

    async def async_start(self) -> None:
        """Authenticate, start the reauth cadence and discover the rain module.

        Raises AuthError if the first login fails; a missing rain module is only logged.
        """
        await self.sessions.async_authenticate()
        self.sessions.start()
        await self.async_discover()

    async def async_stop(self) -> None:
        if self._unsub_poll is not None:
            self._unsub_poll()
            self._unsub_poll = None
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()
        self.sessions.stop()
        self.cooldown.cancel()
        self.projection.cancel()

    async def async_discover(self) -> SensorIdentity | None:
        session = self.sessions.session
        if session is None:
            _LOGGER.error("Cannot discover the rain module without a Netatmo session")
            return None

        try:
            stations = await session.async_list_stations()
        except FetchError as err:
            _LOGGER.error("Could not list Netatmo stations: %s", err)
            return None

        try:
            identity = discover(stations)
        except DiscoveryNotFound as err:
            _LOGGER.error("%s; %s will stay idle", err, self.config.name)
            return None

        self.state.identity = identity
        _LOGGER.debug(
            "Tracking rain module %s on station %s", identity.module_id, identity.station_id
        )
        self._arm_poller()
        return identity

    def _arm_poller(self) -> None:
        if self._unsub_poll is not None:
            return
        self._unsub_poll = async_track_time_interval(
            self.hass, self._handle_poll_tick, self.config.polling_interval
        )
        _LOGGER.debug("Polling Netatmo every %s", self.config.polling_interval)
        self._spawn(self.async_poll())

    @callback
    def _handle_poll_tick(self, _now: datetime) -> None:
        # No de-duplication: a slow response may land after a newer one
        self._spawn(self.async_poll())

    @callback
    def _handle_cooldown_expired(self) -> None:
        # Refresh right away so the next read does not act on the pre-cooldown flag
        if self.polling:
            self._spawn(self.async_poll())

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = self.hass.async_create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def async_poll(self) -> None:
        if self.state.cooldown_active:
            _LOGGER.debug("Cooldown active, skipping poll")
            return

        identity = self.state.identity
        session = self.sessions.session
        if identity is None or session is None:
            return

        window = PollWindow.trailing(dt_util.utcnow().timestamp(), self.config.sliding_window)
        _LOGGER.debug("Polling rain module %s from %s to %s", identity.module_id, window.begin, window.end)
        try:
            measures = await session.async_fetch_measures(
                identity.station_id,
                identity.module_id,
                window.begin,
                MEASURE_SCALE,
                [MEASURE_TYPE],
                end=window.end,
                optimize=True,
                real_time=True,
            )
        except FetchError as err:
            _LOGGER.debug("Poll failed, keeping last rain state: %s", err)
            return

        self.state.apply(aggregate(measures))
