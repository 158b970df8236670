"""
Filename: binary_sensor.py
Description: Leak-style binary sensor for the netatmo_rain_sensor integration. Reports moisture while
             the last Netatmo poll saw rain and is push-updated whenever a poll completes.
Author: netatmo_rain_sensor contributors
Date: 2026-10-19
Version: 0.1.0
"""

from __future__ import annotations
from homeassistant.components.binary_sensor import (
    BinarySensorEntity,
    BinarySensorDeviceClass,
)

from .const import DOMAIN
from .detector import RainDetector
from .models import LeakState
from .projection import LeakProjection


async def async_setup_entry(hass, entry, async_add_entities):
    detector: RainDetector = hass.data[DOMAIN][entry.entry_id]
    if not isinstance(detector.projection, LeakProjection):
        return
    # Don't append listeners here; do it in async_added_to_hass()
    async_add_entities([RainLeakBS(detector, entry)])


class RainLeakBS(BinarySensorEntity):
    """Rain exposed as a leak sensor; reading it has no side effects."""

    _attr_has_entity_name = True
    _attr_name = "Rain"
    _attr_device_class = BinarySensorDeviceClass.MOISTURE
    _attr_should_poll = False  # push-updated

    def __init__(self, detector: RainDetector, entry):
        self.detector = detector
        self.entry = entry
        self._attr_unique_id = f"{DOMAIN}:{entry.entry_id}:rain"

    async def async_added_to_hass(self) -> None:
        listeners = self.detector.state.listeners
        if self.async_write_ha_state not in listeners:
            listeners.append(self.async_write_ha_state)
        # write an initial state if already known
        self.async_write_ha_state()

    async def async_will_remove_from_hass(self) -> None:
        listeners = self.detector.state.listeners
        if self.async_write_ha_state in listeners:
            listeners.remove(self.async_write_ha_state)

    @property
    def is_on(self) -> bool | None:
        return self.detector.projection.get_leak_detected() is LeakState.DETECTED

    @property
    def available(self) -> bool:
        return self.detector.projection.get_status_active()

    @property
    def device_info(self):
        info, _ = self.detector.get_services()
        return {
            "identifiers": {(DOMAIN, self.entry.entry_id)},
            "name": info.name,
            "manufacturer": info.manufacturer,
            "model": info.model,
        }
