"""
Filename: models.py
Description: Typed values shared across the netatmo_rain_sensor integration: the parsed configuration,
             upstream credentials, the station/module list returned by Netatmo and the identity of the
             tracked rain module.
Author: netatmo_rain_sensor contributors
Date: 2026-10-19
Version: 0.1.0
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any

from .const import (
    CONF_CLIENT_ID,
    CONF_CLIENT_SECRET,
    CONF_COOLDOWN_INTERVAL,
    CONF_DEVICE_TYPE,
    CONF_NAME,
    CONF_PASSWORD,
    CONF_POLLING_INTERVAL,
    CONF_REAUTH_INTERVAL,
    CONF_SLIDING_WINDOW_SIZE,
    CONF_USERNAME,
    DEFAULT_COOLDOWN_INTERVAL,
    DEFAULT_NAME,
    DEFAULT_POLLING_INTERVAL,
    DEFAULT_REAUTH_INTERVAL,
    DEFAULT_SLIDING_WINDOW_SIZE,
    DEVICE_TYPE_LEAK,
    DEVICE_TYPE_SWITCH,
)


class DeviceType(Enum):
    """Which projection of the detection state the host sees."""

    LEAK = DEVICE_TYPE_LEAK
    SWITCH = DEVICE_TYPE_SWITCH

    @classmethod
    def parse(cls, value: str | None) -> DeviceType:
        """Map a configured selector to a device type, falling back to LEAK."""
        if value == DEVICE_TYPE_SWITCH:
            return cls.SWITCH
        return cls.LEAK


class LeakState(Enum):
    DETECTED = 1
    NOT_DETECTED = 0


@dataclass(frozen=True)
class Credentials:
    client_id: str
    client_secret: str
    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class SensorIdentity:
    station_id: str
    module_id: str


@dataclass(frozen=True)
class Module:
    module_id: str
    module_type: str
    name: str | None = None


@dataclass(frozen=True)
class Station:
    station_id: str
    name: str | None = None
    modules: tuple[Module, ...] = ()


@dataclass(frozen=True)
class RainSensorConfig:
    """Read-only configuration of one virtual rain sensor."""

    name: str
    device_type: DeviceType
    polling_interval: timedelta
    sliding_window: timedelta
    cooldown: timedelta
    reauth_interval: timedelta
    credentials: Credentials

    @classmethod
    def from_entry_data(cls, data: Mapping[str, Any]) -> RainSensorConfig:
        """Build a config from config entry data, converting units to timedeltas."""
        return cls(
            name=data.get(CONF_NAME, DEFAULT_NAME),
            device_type=DeviceType.parse(data.get(CONF_DEVICE_TYPE)),
            polling_interval=timedelta(
                seconds=data.get(CONF_POLLING_INTERVAL, DEFAULT_POLLING_INTERVAL)
            ),
            sliding_window=timedelta(
                minutes=data.get(CONF_SLIDING_WINDOW_SIZE, DEFAULT_SLIDING_WINDOW_SIZE)
            ),
            cooldown=timedelta(
                minutes=data.get(CONF_COOLDOWN_INTERVAL, DEFAULT_COOLDOWN_INTERVAL)
            ),
            reauth_interval=timedelta(
                hours=data.get(CONF_REAUTH_INTERVAL, DEFAULT_REAUTH_INTERVAL)
            ),
            credentials=Credentials(
                client_id=data[CONF_CLIENT_ID],
                client_secret=data[CONF_CLIENT_SECRET],
                username=data[CONF_USERNAME],
                password=data[CONF_PASSWORD],
            ),
        )
