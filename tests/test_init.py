from __future__ import annotations

from unittest.mock import patch

from pytest_homeassistant_custom_component.common import MockConfigEntry

from homeassistant.config_entries import ConfigEntryState
from homeassistant.const import STATE_OFF, STATE_ON
from homeassistant.core import HomeAssistant

from custom_components.netatmo_rain_sensor.api import AuthError
from custom_components.netatmo_rain_sensor.const import CONF_DEVICE_TYPE, DOMAIN

from .common import ENTRY_DATA, FakeClient, FakeSession

CLIENT_PATH = "custom_components.netatmo_rain_sensor.NetatmoClient"


async def test_setup_leak_entry_exposes_moisture_sensor(hass: HomeAssistant) -> None:
    entry = MockConfigEntry(domain=DOMAIN, data=ENTRY_DATA, title="Garden")
    entry.add_to_hass(hass)

    with patch(CLIENT_PATH, return_value=FakeClient(FakeSession(measures=[[[0.4]]]))):
        assert await hass.config_entries.async_setup(entry.entry_id)
        await hass.async_block_till_done()

    assert entry.state is ConfigEntryState.LOADED
    assert hass.states.async_entity_ids("switch") == []
    states = hass.states.async_all("binary_sensor")
    assert len(states) == 1
    assert states[0].state == STATE_ON
    assert states[0].attributes["device_class"] == "moisture"

    assert await hass.config_entries.async_unload(entry.entry_id)
    await hass.async_block_till_done()
    assert entry.state is ConfigEntryState.NOT_LOADED
    assert entry.entry_id not in hass.data[DOMAIN]


async def test_setup_switch_entry_exposes_switch(hass: HomeAssistant) -> None:
    entry = MockConfigEntry(
        domain=DOMAIN, data={**ENTRY_DATA, CONF_DEVICE_TYPE: "Switch"}, title="Garden"
    )
    entry.add_to_hass(hass)

    with patch(CLIENT_PATH, return_value=FakeClient(FakeSession(measures=[[[0]]]))):
        assert await hass.config_entries.async_setup(entry.entry_id)
        await hass.async_block_till_done()

    assert entry.state is ConfigEntryState.LOADED
    assert hass.states.async_entity_ids("binary_sensor") == []
    states = hass.states.async_all("switch")
    assert len(states) == 1
    assert states[0].state == STATE_OFF

    assert await hass.config_entries.async_unload(entry.entry_id)
    await hass.async_block_till_done()


async def test_setup_retries_when_login_fails(hass: HomeAssistant) -> None:
    entry = MockConfigEntry(domain=DOMAIN, data=ENTRY_DATA, title="Garden")
    entry.add_to_hass(hass)

    with patch(CLIENT_PATH, return_value=FakeClient(AuthError("rejected"))):
        await hass.config_entries.async_setup(entry.entry_id)
        await hass.async_block_till_done()

    assert entry.state is ConfigEntryState.SETUP_RETRY
