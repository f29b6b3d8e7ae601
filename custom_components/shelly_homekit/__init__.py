"""The Shelly HomeKit bridge.

Mirrors the components of Shelly Gen2 devices onto HomeKit services and
forwards HomeKit writes back to the devices.
"""

from __future__ import annotations

import logging
from typing import Any

from .ability import Ability
from .const import CONF_COVER_TYPE, CONF_EXCLUDE, CONF_SWITCH_TYPE
from .cover import CoverAbility, CoverType
from .light import LightAbility
from .sdk.device import ShellyDevice
from .switch import SwitchAbility, SwitchType

_LOGGER = logging.getLogger(__name__)


def create_abilities(
    device: ShellyDevice, options: dict[str, Any] | None = None
) -> list[Ability]:
    """Create one ability per cover, light and switch of a device."""
    options = options or {}
    if options.get(CONF_EXCLUDE):
        _LOGGER.debug("Device %s is excluded", device.device_id)
        return []

    cover_type = CoverType(options.get(CONF_COVER_TYPE, CoverType.WINDOW))
    switch_type = SwitchType(options.get(CONF_SWITCH_TYPE, SwitchType.SWITCH))

    covers, lights, switches = device.covers, device.lights, device.switches

    # The only component of its kind is named without an index
    abilities: list[Ability] = []
    abilities.extend(
        CoverAbility(cover, cover_type, single=len(covers) == 1) for cover in covers
    )
    abilities.extend(
        LightAbility(light, single=len(lights) == 1) for light in lights
    )
    abilities.extend(
        SwitchAbility(switch, switch_type, single=len(switches) == 1)
        for switch in switches
    )

    _LOGGER.debug(
        "Device %s (%s) provides abilities: %s",
        device.device_id,
        device.model,
        [ability.key for ability in abilities],
    )
    return abilities
