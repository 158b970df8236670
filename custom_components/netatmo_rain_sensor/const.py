"""
Filename: const.py
Description: Defines constants and default values used across the netatmo_rain_sensor integration,
             including config keys, polling/cooldown defaults and the Netatmo API constants.
Author: netatmo_rain_sensor contributors
Date: 2026-10-19
Version: 0.1.0
"""

from datetime import timedelta

DOMAIN = "netatmo_rain_sensor"

# Display / projection
CONF_NAME = "name"
CONF_DEVICE_TYPE = "device_type"  # "Leak" (binary sensor) or "Switch"

# Timing knobs
CONF_POLLING_INTERVAL = "polling_interval"  # seconds between two polls
CONF_SLIDING_WINDOW_SIZE = "sliding_window_size"  # minutes looked back per poll
CONF_COOLDOWN_INTERVAL = "cooldown_interval"  # minutes, 0 disables suppression
CONF_REAUTH_INTERVAL = "reauth_interval"  # hours between two logins

# Upstream credentials
CONF_CLIENT_ID = "client_id"
CONF_CLIENT_SECRET = "client_secret"
CONF_USERNAME = "username"
CONF_PASSWORD = "password"

DEVICE_TYPE_LEAK = "Leak"
DEVICE_TYPE_SWITCH = "Switch"

DEFAULT_NAME = "Rain Sensor"
DEFAULT_DEVICE_TYPE = DEVICE_TYPE_LEAK
DEFAULT_POLLING_INTERVAL = 300
DEFAULT_SLIDING_WINDOW_SIZE = 30
DEFAULT_COOLDOWN_INTERVAL = 60
DEFAULT_REAUTH_INTERVAL = 24

# Momentary contact: a switch that went on is pushed back off after this delay
AUTO_RESET_DELAY = timedelta(milliseconds=500)

MANUFACTURER = "Netatmo Rain Sensor"
MODEL = "Virtual Rain Sensor for Netatmo Rain Gauge"

# Netatmo API
OAUTH_URL = "https://api.netatmo.com/oauth2/token"
API_URL = "https://api.netatmo.com/api"
OAUTH_SCOPE = "read_station"
REQUEST_TIMEOUT = 15  # seconds

RAIN_MODULE_TYPE = "NAModule3"
MEASURE_SCALE = "30min"
MEASURE_TYPE = "sum_rain"
