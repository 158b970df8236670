"""
Filename: __init__.py
Description: Entry point for the netatmo_rain_sensor integration. Builds the Netatmo client and the
             rain detector for a config entry, starts discovery/polling and forwards setup to the
             platform matching the configured device type (binary_sensor or switch).
Author: netatmo_rain_sensor contributors
Date: 2026-10-19
Version: 0.1.0
"""

from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import Platform
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryNotReady
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .api import AuthError, NetatmoClient
from .const import DOMAIN
from .detector import RainDetector
from .models import DeviceType, RainSensorConfig

_LOGGER = logging.getLogger(__name__)

PLATFORM_BY_DEVICE_TYPE = {
    DeviceType.LEAK: Platform.BINARY_SENSOR,
    DeviceType.SWITCH: Platform.SWITCH,
}


def _platforms(config: RainSensorConfig) -> list[Platform]:
    return [PLATFORM_BY_DEVICE_TYPE[config.device_type]]


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up the netatmo_rain_sensor integration from a config entry."""
    config = RainSensorConfig.from_entry_data(entry.data)
    client = NetatmoClient(async_get_clientsession(hass), config.credentials)
    detector = RainDetector(hass, config, client)

    try:
        await detector.async_start()
    except AuthError as err:
        await detector.async_stop()
        raise ConfigEntryNotReady(str(err)) from err

    hass.data.setdefault(DOMAIN, {})
    hass.data[DOMAIN][entry.entry_id] = detector
    _LOGGER.debug(
        "Set up %s as %s (identity: %s)",
        config.name,
        config.device_type.value,
        detector.state.identity,
    )

    # Entities self-register their listeners in async_added_to_hass
    await hass.config_entries.async_forward_entry_setups(entry, _platforms(config))
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    detector: RainDetector = hass.data[DOMAIN][entry.entry_id]
    unload_ok = await hass.config_entries.async_unload_platforms(
        entry, _platforms(detector.config)
    )
    if unload_ok:
        await detector.async_stop()
        hass.data[DOMAIN].pop(entry.entry_id, None)
    return unload_ok
