from __future__ import annotations

from typing import Any

from custom_components.netatmo_rain_sensor.api import NetatmoSession
from custom_components.netatmo_rain_sensor.const import (
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
    RAIN_MODULE_TYPE,
)
from custom_components.netatmo_rain_sensor.models import Module, RainSensorConfig, Station

ENTRY_DATA: dict[str, Any] = {
    CONF_NAME: "Garden",
    CONF_DEVICE_TYPE: "Leak",
    CONF_POLLING_INTERVAL: 60,
    CONF_SLIDING_WINDOW_SIZE: 30,
    CONF_COOLDOWN_INTERVAL: 10,
    CONF_REAUTH_INTERVAL: 24,
    CONF_CLIENT_ID: "client-id",
    CONF_CLIENT_SECRET: "client-secret",
    CONF_USERNAME: "user@example.com",
    CONF_PASSWORD: "hunter2",
}

RAIN_STATION = Station(
    station_id="70:ee:50:00:00:01",
    name="Home",
    modules=(
        Module(module_id="02:00:00:00:00:01", module_type="NAModule1", name="Outdoor"),
        Module(module_id="05:00:00:00:00:01", module_type=RAIN_MODULE_TYPE, name="Rain"),
    ),
)


def make_config(**overrides: Any) -> RainSensorConfig:
    return RainSensorConfig.from_entry_data({**ENTRY_DATA, **overrides})


class FakeSession(NetatmoSession):
    """Session answering from canned data; the last queued measure repeats."""

    def __init__(self, stations: list[Station] | None = None, measures: list | None = None) -> None:
        super().__init__(None, "token")
        self.stations = [RAIN_STATION] if stations is None else stations
        self.measures = list(measures) if measures is not None else [[[0.0]]]
        self.fetch_calls: list[dict[str, Any]] = []

    async def async_list_stations(self) -> list[Station]:
        return self.stations

    async def async_fetch_measures(self, station_id, module_id, begin, scale, types, *, end=None, optimize=True, real_time=True):
        self.fetch_calls.append(
            {
                "station_id": station_id,
                "module_id": module_id,
                "begin": begin,
                "end": end,
                "scale": scale,
                "types": list(types),
                "optimize": optimize,
                "real_time": real_time,
            }
        )
        result = self.measures.pop(0) if len(self.measures) > 1 else self.measures[0]
        if isinstance(result, Exception):
            self._emit_error(result)
            raise result
        return result


class FakeClient:
    """Client handing out the given sessions (or raising the given errors) in order."""

    def __init__(self, *results: FakeSession | Exception) -> None:
        self.results = list(results)
        self.calls = 0

    async def async_authenticate(self) -> FakeSession:
        self.calls += 1
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result
