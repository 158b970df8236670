"""
Filename: state.py
Description: The shared detection state (last rain flag, tracked module identity) and the cooldown
             controller that holds a detection for a fixed time without ever extending it.
Author: netatmo_rain_sensor contributors
Date: 2026-10-19
Version: 0.1.0
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.event import async_call_later

from .models import SensorIdentity

_LOGGER = logging.getLogger(__name__)


class CooldownController:
    """One-shot suppression timer. Idle -> Cooling -> Idle, never restacked."""

    def __init__(
        self, hass: HomeAssistant, on_expire: Callable[[], None] | None = None
    ) -> None:
        self.hass = hass
        self._on_expire = on_expire
        self._active = False
        self._unsub: Callable[[], None] | None = None

    @property
    def active(self) -> bool:
        return self._active

    def arm(self, duration: timedelta) -> bool:
        """Start cooling down for `duration`. Returns False if nothing was armed."""
        if self._active:
            # A second detection while cooling must not push the expiry back
            _LOGGER.debug("Cooldown already active, not re-arming")
            return False
        if duration <= timedelta(0):
            return False

        self._active = True
        self._unsub = async_call_later(self.hass, duration, self._expire)
        _LOGGER.debug("Cooldown armed for %s", duration)
        return True

    def cancel(self) -> None:
        if self._unsub is not None:
            self._unsub()
            self._unsub = None
        self._active = False

    @callback
    def _expire(self, _now: datetime) -> None:
        self._unsub = None
        self._active = False
        _LOGGER.debug("Cooldown expired")
        if self._on_expire is not None:
            self._on_expire()


class DetectionState:
    """Single source of truth read by the host and written by polls."""

    def __init__(self, cooldown: CooldownController) -> None:
        self.cooldown = cooldown
        self.rain_detected = False
        # False from arming a cooldown until the next poll result lands
        self.fresh = True
        self.identity: SensorIdentity | None = None
        # entities append their async_write_ha_state here
        self.listeners: list[Callable[[], None]] = []

    @property
    def cooldown_active(self) -> bool:
        return self.cooldown.active

    def arm_cooldown(self, duration: timedelta) -> bool:
        """Arm the cooldown and mark the current rain flag as already reported."""
        armed = self.cooldown.arm(duration)
        if armed:
            self.fresh = False
        return armed

    def apply(self, detected: bool) -> None:
        """Overwrite the rain flag with a poll result and notify listeners."""
        if detected and self.cooldown_active:
            _LOGGER.debug("Ignoring rain result while cooling down")
            return
        if detected != self.rain_detected:
            _LOGGER.info("Rain %s", "detected" if detected else "no longer detected")
        self.rain_detected = detected
        self.fresh = True
        self.notify()

    def notify(self) -> None:
        for cb in list(self.listeners):
            cb()
