"""Derive HomeKit-visible state from raw component attributes.

Everything here is a pure function of the values passed in. Missing
attributes are always resolved to a default, so HomeKit never sees an
absent or out-of-range value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING

from .sdk.const import COVER_STATE_CLOSING, COVER_STATE_OPENING

if TYPE_CHECKING:
    from .sdk.cover import Cover
    from .sdk.light import Light
    from .sdk.switch import Switch

POSITION_MIN = 0
POSITION_MAX = 100
DEFAULT_BRIGHTNESS = 100


class PositionState(IntEnum):
    """HAP PositionState values."""

    DECREASING = 0
    INCREASING = 1
    STOPPED = 2


@dataclass(frozen=True)
class CoverState:
    """HomeKit view of a cover."""

    position_state: PositionState
    current_position: int
    target_position: int


@dataclass(frozen=True)
class LightState:
    """HomeKit view of a dimmable light."""

    on: bool
    brightness: int


@dataclass(frozen=True)
class SwitchState:
    """HomeKit view of a relay."""

    on: bool


def _clamp(value: int | float) -> int:
    return max(POSITION_MIN, min(POSITION_MAX, int(round(value))))


def position_state(status: str | None) -> PositionState:
    """Map the raw cover state to a movement indicator."""
    if status == COVER_STATE_OPENING:
        return PositionState.INCREASING
    if status == COVER_STATE_CLOSING:
        return PositionState.DECREASING
    return PositionState.STOPPED


def current_position(current_pos: int | float | None) -> int:
    """Return the measured position, 0 while it is unknown."""
    if current_pos is None:
        return POSITION_MIN
    return _clamp(current_pos)


def target_position(
    target_pos: int | float | None, current_pos: int | float | None
) -> int:
    """Return the target position, or the current one when none is pending."""
    if target_pos is None:
        return current_position(current_pos)
    return _clamp(target_pos)


def brightness(value: int | float | None) -> int:
    """Return the brightness level, full brightness while it is unknown."""
    if value is None:
        return DEFAULT_BRIGHTNESS
    return _clamp(value)


def project_cover(cover: Cover) -> CoverState:
    """Compute the HomeKit state of a cover."""
    return CoverState(
        position_state=position_state(cover.state),
        current_position=current_position(cover.current_pos),
        target_position=target_position(cover.target_pos, cover.current_pos),
    )


def project_light(light: Light) -> LightState:
    """Compute the HomeKit state of a light."""
    return LightState(on=bool(light.output), brightness=brightness(light.brightness))


def project_switch(switch: Switch) -> SwitchState:
    """Compute the HomeKit state of a relay."""
    return SwitchState(on=bool(switch.output))
