"""
Filename: config_flow.py
Description: Configuration flow for the netatmo_rain_sensor integration. Collects the display name,
             device type, polling/window/cooldown/reauth timings and the four Netatmo credentials, and
             checks the credentials by logging in once before creating the entry.
Author: netatmo_rain_sensor contributors
Date: 2026-10-19
Version: 0.1.0
"""

from __future__ import annotations
import logging
from typing import Any
import voluptuous as vol

from homeassistant import config_entries
from homeassistant.config_entries import ConfigFlowResult
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .api import AuthError, NetatmoClient
from .const import (
    DOMAIN,
    CONF_NAME,
    CONF_DEVICE_TYPE,
    CONF_POLLING_INTERVAL,
    CONF_SLIDING_WINDOW_SIZE,
    CONF_COOLDOWN_INTERVAL,
    CONF_REAUTH_INTERVAL,
    CONF_CLIENT_ID,
    CONF_CLIENT_SECRET,
    CONF_USERNAME,
    CONF_PASSWORD,
    DEFAULT_NAME,
    DEFAULT_DEVICE_TYPE,
    DEFAULT_POLLING_INTERVAL,
    DEFAULT_SLIDING_WINDOW_SIZE,
    DEFAULT_COOLDOWN_INTERVAL,
    DEFAULT_REAUTH_INTERVAL,
    DEVICE_TYPE_LEAK,
    DEVICE_TYPE_SWITCH,
)
from .models import Credentials

_LOGGER = logging.getLogger(__name__)

STEP_USER_DATA_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_NAME, default=DEFAULT_NAME): str,
        vol.Optional(CONF_DEVICE_TYPE, default=DEFAULT_DEVICE_TYPE): vol.In(
            [DEVICE_TYPE_LEAK, DEVICE_TYPE_SWITCH]
        ),
        vol.Optional(CONF_POLLING_INTERVAL, default=DEFAULT_POLLING_INTERVAL): vol.All(
            int, vol.Range(min=1, max=86400)
        ),
        vol.Optional(CONF_SLIDING_WINDOW_SIZE, default=DEFAULT_SLIDING_WINDOW_SIZE): vol.All(
            int, vol.Range(min=1, max=1440)
        ),
        vol.Optional(CONF_COOLDOWN_INTERVAL, default=DEFAULT_COOLDOWN_INTERVAL): vol.All(
            int, vol.Range(min=0, max=1440)
        ),
        vol.Optional(CONF_REAUTH_INTERVAL, default=DEFAULT_REAUTH_INTERVAL): vol.All(
            int, vol.Range(min=1, max=168)
        ),
        vol.Required(CONF_CLIENT_ID): str,
        vol.Required(CONF_CLIENT_SECRET): str,
        vol.Required(CONF_USERNAME): str,
        vol.Required(CONF_PASSWORD): str,
    }
)


class ConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        errors: dict[str, str] = {}

        if user_input is not None:
            # Enforce one config entry per display name
            await self.async_set_unique_id(f"{DOMAIN}:{user_input[CONF_NAME]}")
            self._abort_if_unique_id_configured()

            client = NetatmoClient(
                async_get_clientsession(self.hass),
                Credentials(
                    client_id=user_input[CONF_CLIENT_ID],
                    client_secret=user_input[CONF_CLIENT_SECRET],
                    username=user_input[CONF_USERNAME],
                    password=user_input[CONF_PASSWORD],
                ),
            )
            try:
                await client.async_authenticate()
            except AuthError as err:
                _LOGGER.debug("Credential check failed: %s", err)
                errors["base"] = "invalid_auth"
            else:
                return self.async_create_entry(
                    title=user_input[CONF_NAME],
                    data=user_input,
                )

        return self.async_show_form(
            step_id="user", data_schema=STEP_USER_DATA_SCHEMA, errors=errors
        )
