"""Switch (relay) component for Shelly Gen2 devices."""

from __future__ import annotations

from typing import Any

from .component import Component
from .const import METHOD_SWITCH_SET, METHOD_SWITCH_TOGGLE, PREFIX_SWITCH


class Switch(Component):
    """Represents a relay output of a device."""

    prefix = PREFIX_SWITCH
    attributes = ("output", "source", "apower")

    output: bool | None
    source: str | None
    apower: float | None

    async def set(self, on: bool) -> dict[str, Any]:
        """Switch the relay on or off."""
        return await self._call(METHOD_SWITCH_SET, {"on": bool(on)})

    async def toggle(self) -> dict[str, Any]:
        """Toggle the relay."""
        return await self._call(METHOD_SWITCH_TOGGLE)
