from __future__ import annotations

import pytest

from homeassistant.core import HomeAssistant

from custom_components.netatmo_rain_sensor.detector import RainDetector


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations):
    yield


@pytest.fixture()
async def make_detector(hass: HomeAssistant):
    """Build detectors that are stopped (timers cancelled) after the test."""
    detectors: list[RainDetector] = []

    def _make(config, client) -> RainDetector:
        detector = RainDetector(hass, config, client)
        detectors.append(detector)
        return detector

    yield _make

    for detector in detectors:
        await detector.async_stop()
