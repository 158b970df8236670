"""
Filename: switch.py
Description: Momentary switch for the netatmo_rain_sensor integration. Home Assistant polls it; a poll
             that sees rain turns it on, arms the cooldown and lets it fall back off after a short delay.
Author: netatmo_rain_sensor contributors
Date: 2026-10-19
Version: 0.1.0
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from homeassistant.components.switch import SwitchEntity

from .const import DOMAIN
from .detector import RainDetector
from .projection import SwitchProjection

SCAN_INTERVAL = timedelta(seconds=30)


async def async_setup_entry(hass, entry, async_add_entities):
    detector: RainDetector = hass.data[DOMAIN][entry.entry_id]
    if not isinstance(detector.projection, SwitchProjection):
        return
    async_add_entities([RainSwitch(detector, entry)])


class RainSwitch(SwitchEntity):
    """Rain exposed as a switch that flips on and resets itself."""

    _attr_has_entity_name = True
    _attr_name = "Rain"
    _attr_should_poll = True  # reads go through get_switch_on()

    def __init__(self, detector: RainDetector, entry):
        self.detector = detector
        self.entry = entry
        self._attr_unique_id = f"{DOMAIN}:{entry.entry_id}:rain_switch"

    @property
    def projection(self) -> SwitchProjection:
        return self.detector.projection

    async def async_added_to_hass(self) -> None:
        listeners = self.detector.state.listeners
        if self.async_write_ha_state not in listeners:
            listeners.append(self.async_write_ha_state)

    async def async_will_remove_from_hass(self) -> None:
        listeners = self.detector.state.listeners
        if self.async_write_ha_state in listeners:
            listeners.remove(self.async_write_ha_state)

    async def async_update(self) -> None:
        self.projection.get_switch_on()

    @property
    def is_on(self) -> bool:
        # Last pushed value; the auto-reset pushes False without a new read
        return self.projection.is_on

    async def async_turn_on(self, **kwargs: Any) -> None:
        self.projection.set_switch_on(True)

    async def async_turn_off(self, **kwargs: Any) -> None:
        self.projection.set_switch_on(False)

    @property
    def device_info(self):
        info, _ = self.detector.get_services()
        return {
            "identifiers": {(DOMAIN, self.entry.entry_id)},
            "name": info.name,
            "manufacturer": info.manufacturer,
            "model": info.model,
        }
