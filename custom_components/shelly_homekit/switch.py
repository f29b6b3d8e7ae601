"""Expose Shelly relays as HomeKit switches or outlets."""

from __future__ import annotations

from enum import Enum
import logging
from typing import Any

from pyhap.const import CATEGORY_OUTLET, CATEGORY_SWITCH

from .ability import Ability, ability_name
from .const import CHAR_ON, CHAR_OUTLET_IN_USE
from .projection import SwitchState, project_switch
from .sdk.const import EVENT_OUTPUT_CHANGE
from .sdk.switch import Switch

_LOGGER = logging.getLogger(__name__)


class SwitchType(Enum):
    """HomeKit service a relay is exposed as."""

    SWITCH = "switch"
    OUTLET = "outlet"


SWITCH_LABELS = {
    SwitchType.SWITCH: "Switch",
    SwitchType.OUTLET: "Outlet",
}

SWITCH_SERVICES = {
    SwitchType.SWITCH: ("Switch", CATEGORY_SWITCH),
    SwitchType.OUTLET: ("Outlet", CATEGORY_OUTLET),
}


class SwitchAbility(Ability):
    """Mirrors a relay onto On (and OutletInUse for outlets)."""

    def __init__(
        self,
        component: Switch,
        switch_type: SwitchType = SwitchType.SWITCH,
        single: bool = False,
    ) -> None:
        """Initialize the switch ability."""
        super().__init__(
            component,
            ability_name(SWITCH_LABELS[switch_type], component, single),
            f"{switch_type.value}-{component.id}",
        )
        self.component: Switch = component
        self.switch_type = switch_type
        self.service_name, self.category = SWITCH_SERVICES[switch_type]

        self._handlers = {EVENT_OUTPUT_CHANGE: self._handle_output_change}

    @property
    def state(self) -> SwitchState:
        """Return the HomeKit view of the relay."""
        return project_switch(self.component)

    def _values(self) -> dict[str, Any]:
        state = self.state
        values: dict[str, Any] = {CHAR_ON: state.on}
        if self.switch_type is SwitchType.OUTLET:
            values[CHAR_OUTLET_IN_USE] = state.on
        return values

    def initialize(self) -> None:
        """Seed the service and start listening."""
        self._seed(self._values())

        self._on_command(
            CHAR_ON,
            "power",
            self._set_on,
            lambda: self.component.output,
        )

        self._listen(self._handlers)

    async def _set_on(self, value: bool) -> None:
        await self.component.set(bool(value))

    def _handle_output_change(self, *_: object) -> None:
        _LOGGER.debug("%s: output changed to %s", self.name, self.component.output)
        self._push(self._values())
