"""Configuration schema for the Shelly HomeKit bridge."""

from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol

from .const import (
    CONF_COVER_TYPE,
    CONF_DEVICES,
    CONF_EXCLUDE,
    CONF_HOST,
    CONF_ID,
    CONF_NAME,
    CONF_PASSWORD,
    CONF_PORT,
    CONF_RPC_TIMEOUT,
    CONF_SWITCH_TYPE,
    CONF_USERNAME,
)
from .cover import CoverType
from .exceptions import InvalidConfig
from .sdk.const import DEFAULT_MQTT_PORT, DEFAULT_RPC_TIMEOUT
from .switch import SwitchType

_LOGGER = logging.getLogger(__name__)

DEVICE_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_ID): vol.All(str, vol.Length(min=1)),
        vol.Optional(CONF_NAME): str,
        vol.Optional(CONF_EXCLUDE, default=False): bool,
        vol.Optional(CONF_COVER_TYPE, default=CoverType.WINDOW.value): vol.All(
            vol.In([t.value for t in CoverType]), vol.Coerce(CoverType)
        ),
        vol.Optional(CONF_SWITCH_TYPE, default=SwitchType.SWITCH.value): vol.All(
            vol.In([t.value for t in SwitchType]), vol.Coerce(SwitchType)
        ),
    }
)

CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_HOST): vol.All(str, vol.Length(min=1)),
        vol.Optional(CONF_PORT, default=DEFAULT_MQTT_PORT): vol.All(
            vol.Coerce(int), vol.Range(min=1, max=65535)
        ),
        vol.Optional(CONF_USERNAME): str,
        vol.Optional(CONF_PASSWORD): str,
        vol.Optional(CONF_RPC_TIMEOUT, default=DEFAULT_RPC_TIMEOUT): vol.All(
            vol.Coerce(float), vol.Range(min=0, min_included=False)
        ),
        vol.Optional(CONF_DEVICES, default=list): [DEVICE_SCHEMA],
    }
)


def validate_config(data: dict[str, Any]) -> dict[str, Any]:
    """Validate bridge configuration and fill in defaults."""
    try:
        config = CONFIG_SCHEMA(data)
    except vol.Invalid as err:
        raise InvalidConfig(f"Invalid configuration: {err}") from err

    seen: set[str] = set()
    for device in config[CONF_DEVICES]:
        if device[CONF_ID] in seen:
            raise InvalidConfig(f"Device {device[CONF_ID]} is configured twice")
        seen.add(device[CONF_ID])

    _LOGGER.debug(
        "Loaded configuration for broker %s:%s with %d device(s)",
        config[CONF_HOST],
        config[CONF_PORT],
        len(config[CONF_DEVICES]),
    )
    return config


def device_options(config: dict[str, Any], device_id: str) -> dict[str, Any]:
    """Return the validated options for a device, defaults if unlisted."""
    for device in config.get(CONF_DEVICES, []):
        if device[CONF_ID] == device_id:
            return device
    return DEVICE_SCHEMA({CONF_ID: device_id})
