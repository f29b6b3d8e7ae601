"""Cover component for Shelly Gen2 devices."""

from __future__ import annotations

from typing import Any

from .component import Component
from .const import (
    METHOD_COVER_CALIBRATE,
    METHOD_COVER_CLOSE,
    METHOD_COVER_GO_TO_POSITION,
    METHOD_COVER_OPEN,
    METHOD_COVER_STOP,
    PREFIX_COVER,
)


class Cover(Component):
    """Represents a cover (roller shutter) channel of a device."""

    prefix = PREFIX_COVER
    attributes = (
        "state",
        "source",
        "current_pos",
        "target_pos",
        "pos_control",
        "last_direction",
        "apower",
    )

    state: str | None
    source: str | None
    current_pos: int | None  # Only known once calibrated
    target_pos: int | None  # Only known while moving to a position
    pos_control: bool | None
    last_direction: str | None
    apower: float | None

    async def go_to_position(self, pos: int) -> dict[str, Any]:
        """Move the cover to a position between 0 (closed) and 100 (open)."""
        return await self._call(METHOD_COVER_GO_TO_POSITION, {"pos": int(pos)})

    async def open(self, duration: float | None = None) -> dict[str, Any]:
        """Open the cover, optionally for a limited time."""
        params = {"duration": duration} if duration is not None else None
        return await self._call(METHOD_COVER_OPEN, params)

    async def close(self, duration: float | None = None) -> dict[str, Any]:
        """Close the cover, optionally for a limited time."""
        params = {"duration": duration} if duration is not None else None
        return await self._call(METHOD_COVER_CLOSE, params)

    async def stop(self) -> dict[str, Any]:
        """Stop any ongoing movement."""
        return await self._call(METHOD_COVER_STOP)

    async def calibrate(self) -> dict[str, Any]:
        """Start the calibration procedure."""
        return await self._call(METHOD_COVER_CALIBRATE)
