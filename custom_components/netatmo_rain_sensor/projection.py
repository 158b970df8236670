"""
Filename: projection.py
Description: The two host-facing shapes of the detection state. The leak projection is a pure read;
             the switch projection behaves like a momentary contact that arms the cooldown when it
             reports rain and pushes itself back off shortly afterwards.
Author: netatmo_rain_sensor contributors
Date: 2026-10-19
Version: 0.1.0
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.event import async_call_later

from .const import AUTO_RESET_DELAY, MANUFACTURER, MODEL
from .models import DeviceType, LeakState
from .state import DetectionState

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessoryInformation:
    name: str
    manufacturer: str = MANUFACTURER
    model: str = MODEL


class LeakProjection:
    """Leak-sensor view: DETECTED while the last poll saw rain."""

    def __init__(self, state: DetectionState) -> None:
        self._state = state

    def get_leak_detected(self) -> LeakState:
        if self._state.rain_detected:
            return LeakState.DETECTED
        return LeakState.NOT_DETECTED

    def get_status_active(self) -> bool:
        return True

    def cancel(self) -> None:
        """Nothing is scheduled by a leak projection."""


class SwitchProjection:
    """Switch view with momentary-contact semantics and cooldown gating."""

    def __init__(
        self,
        hass: HomeAssistant,
        state: DetectionState,
        cooldown_duration: timedelta,
        reset_delay: timedelta = AUTO_RESET_DELAY,
    ) -> None:
        self.hass = hass
        self._state = state
        self._cooldown_duration = cooldown_duration
        self._reset_delay = reset_delay
        self._pending_resets: list[Callable[[], None]] = []
        self.is_on = False  # value last pushed to the host

    def get_switch_on(self) -> bool:
        # A flag already reported before the last cooldown waits for a new poll
        if self._state.cooldown_active or not self._state.fresh:
            return False

        value = self._state.rain_detected
        if value:
            # Off is only ever reached through the auto-reset
            self.is_on = True
            self._state.arm_cooldown(self._cooldown_duration)
            self._schedule_reset()
        return value

    def set_switch_on(self, value: bool) -> None:
        self._push(value)
        if value:
            self._schedule_reset()

    def cancel(self) -> None:
        for unsub in self._pending_resets:
            unsub()
        self._pending_resets.clear()

    def _schedule_reset(self) -> None:
        unsub: Callable[[], None] | None = None

        @callback
        def _reset(_now: datetime) -> None:
            if unsub in self._pending_resets:
                self._pending_resets.remove(unsub)
            _LOGGER.debug("Auto-resetting switch")
            self._push(False)

        unsub = async_call_later(self.hass, self._reset_delay, _reset)
        self._pending_resets.append(unsub)

    def _push(self, value: bool) -> None:
        self.is_on = value
        self._state.notify()


Projection = LeakProjection | SwitchProjection


def build_projection(
    hass: HomeAssistant,
    device_type: DeviceType,
    state: DetectionState,
    cooldown_duration: timedelta,
) -> Projection:
    if device_type is DeviceType.SWITCH:
        return SwitchProjection(hass, state, cooldown_duration)
    return LeakProjection(state)
