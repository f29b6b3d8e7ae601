"""Light (dimmer) component for Shelly Gen2 devices."""

from __future__ import annotations

from typing import Any

from .component import Component
from .const import METHOD_LIGHT_SET, METHOD_LIGHT_TOGGLE, PREFIX_LIGHT


class Light(Component):
    """Represents a dimmable light output of a device."""

    prefix = PREFIX_LIGHT
    attributes = ("output", "source", "brightness", "apower")

    output: bool | None
    source: str | None
    brightness: int | None  # 0-100
    apower: float | None

    async def set(
        self, on: bool | None = None, brightness: int | None = None
    ) -> dict[str, Any]:
        """Switch the light and/or change its brightness."""
        params: dict[str, Any] = {}
        if on is not None:
            params["on"] = bool(on)
        if brightness is not None:
            params["brightness"] = max(0, min(100, int(brightness)))
        return await self._call(METHOD_LIGHT_SET, params)

    async def toggle(self) -> dict[str, Any]:
        """Toggle the light output."""
        return await self._call(METHOD_LIGHT_TOGGLE)
