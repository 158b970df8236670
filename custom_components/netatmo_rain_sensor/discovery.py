"""
Filename: discovery.py
Description: Resolves which Netatmo station/module pair is the rain gauge to poll.
Author: netatmo_rain_sensor contributors
Date: 2026-10-19
Version: 0.1.0
"""

from __future__ import annotations

from collections.abc import Iterable

from .api import NetatmoRainError
from .const import RAIN_MODULE_TYPE
from .models import SensorIdentity, Station


class DiscoveryNotFound(NetatmoRainError):
    """Raised when no station carries a rain module."""


def discover(stations: Iterable[Station], module_type: str = RAIN_MODULE_TYPE) -> SensorIdentity:
    """Return the first module of the given type, walking stations then modules in order."""
    for station in stations:
        for module in station.modules:
            if module.module_type == module_type:
                return SensorIdentity(station_id=station.station_id, module_id=module.module_id)
    raise DiscoveryNotFound(f"No module of type {module_type} found on any station")
