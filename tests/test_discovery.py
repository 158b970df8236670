from __future__ import annotations

import pytest

from custom_components.netatmo_rain_sensor.discovery import DiscoveryNotFound, discover
from custom_components.netatmo_rain_sensor.models import Module, SensorIdentity, Station

from .common import RAIN_STATION


def test_discover_picks_rain_module() -> None:
    identity = discover([RAIN_STATION])

    assert identity == SensorIdentity(
        station_id="70:ee:50:00:00:01", module_id="05:00:00:00:00:01"
    )


def test_discover_first_match_wins_across_stations() -> None:
    first = Station(
        station_id="station-a",
        modules=(Module(module_id="wind", module_type="NAModule2"), Module(module_id="rain-a", module_type="NAModule3")),
    )
    second = Station(
        station_id="station-b",
        modules=(Module(module_id="rain-b", module_type="NAModule3"),),
    )

    assert discover([first, second]) == SensorIdentity("station-a", "rain-a")
    assert discover([second, first]) == SensorIdentity("station-b", "rain-b")


def test_discover_without_rain_module_raises() -> None:
    station = Station(
        station_id="station-a",
        modules=(Module(module_id="outdoor", module_type="NAModule1"),),
    )

    with pytest.raises(DiscoveryNotFound, match="NAModule3"):
        discover([station])


def test_discover_empty_station_list_raises() -> None:
    with pytest.raises(DiscoveryNotFound):
        discover([])
