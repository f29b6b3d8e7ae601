"""Expose Shelly dimmer channels as HomeKit lightbulbs."""

from __future__ import annotations

from enum import Enum
import logging

from pyhap.const import CATEGORY_LIGHTBULB

from .ability import Ability, ability_name
from .const import CHAR_BRIGHTNESS, CHAR_ON
from .projection import LightState, project_light
from .sdk.const import EVENT_BRIGHTNESS_CHANGE, EVENT_OUTPUT_CHANGE
from .sdk.light import Light

_LOGGER = logging.getLogger(__name__)


class LightType(Enum):
    """HomeKit service a light is exposed as."""

    LIGHTBULB = "lightbulb"


LIGHT_LABELS = {LightType.LIGHTBULB: "Light"}

LIGHT_SERVICES = {LightType.LIGHTBULB: ("Lightbulb", CATEGORY_LIGHTBULB)}


class LightAbility(Ability):
    """Mirrors a dimmer channel onto On and Brightness."""

    optional_characteristics = (CHAR_BRIGHTNESS,)

    def __init__(
        self,
        component: Light,
        light_type: LightType = LightType.LIGHTBULB,
        single: bool = False,
    ) -> None:
        """Initialize the light ability."""
        super().__init__(
            component,
            ability_name(LIGHT_LABELS[light_type], component, single),
            f"{light_type.value}-{component.id}",
        )
        self.component: Light = component
        self.light_type = light_type
        self.service_name, self.category = LIGHT_SERVICES[light_type]

        self._handlers = {
            EVENT_OUTPUT_CHANGE: self._handle_change,
            EVENT_BRIGHTNESS_CHANGE: self._handle_change,
        }

    @property
    def state(self) -> LightState:
        """Return the HomeKit view of the light."""
        return project_light(self.component)

    def initialize(self) -> None:
        """Seed the service and start listening."""
        state = self.state
        self._seed({CHAR_ON: state.on, CHAR_BRIGHTNESS: state.brightness})

        self._on_command(
            CHAR_ON,
            "power",
            self._set_on,
            lambda: self.component.output,
        )
        self._on_command(
            CHAR_BRIGHTNESS,
            "brightness",
            self._set_brightness,
            lambda: self.component.brightness,
        )

        self._listen(self._handlers)

    async def _set_on(self, value: bool) -> None:
        await self.component.set(on=bool(value))

    async def _set_brightness(self, value: int) -> None:
        await self.component.set(brightness=int(value))

    def update_states(self) -> None:
        """Push power and brightness together."""
        state = self.state
        self._push({CHAR_ON: state.on, CHAR_BRIGHTNESS: state.brightness})

    def _handle_change(self, *_: object) -> None:
        _LOGGER.debug(
            "%s: output %s, brightness %s",
            self.name,
            self.component.output,
            self.component.brightness,
        )
        self.update_states()
