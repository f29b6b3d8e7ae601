"""Tests for deriving HomeKit state from component attributes."""

import pytest

from custom_components.shelly_homekit.projection import (
    CoverState,
    LightState,
    PositionState,
    SwitchState,
    brightness,
    current_position,
    position_state,
    project_cover,
    project_light,
    project_switch,
    target_position,
)
from custom_components.shelly_homekit.sdk.cover import Cover
from custom_components.shelly_homekit.sdk.light import Light
from custom_components.shelly_homekit.sdk.switch import Switch


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        ("opening", PositionState.INCREASING),
        ("closing", PositionState.DECREASING),
        ("open", PositionState.STOPPED),
        ("closed", PositionState.STOPPED),
        ("stopped", PositionState.STOPPED),
        ("calibrating", PositionState.STOPPED),
        ("idle", PositionState.STOPPED),
        (None, PositionState.STOPPED),
    ],
)
def test_position_state_depends_on_status_only(status, expected):
    """Test the movement indicator mapping is total."""
    assert position_state(status) is expected


def test_position_state_ignores_positions():
    """Test positions never influence the movement indicator."""
    for current, target in ((None, None), (0, 100), (100, 0), (50, 50)):
        cover = Cover(0)
        cover.update({"state": "opening", "current_pos": current, "target_pos": target})
        assert project_cover(cover).position_state is PositionState.INCREASING


def test_current_position_defaults_to_zero():
    """Test an unknown position is reported as closed."""
    assert current_position(None) == 0
    assert current_position(35) == 35


def test_target_position_falls_back_to_current():
    """Test an uncommanded cover reports no pending motion."""
    assert target_position(None, 70) == 70
    assert target_position(None, None) == 0
    assert target_position(20, 70) == 20


def test_positions_are_clamped():
    """Test values outside 0-100 never reach HomeKit."""
    assert current_position(-5) == 0
    assert current_position(140) == 100
    assert target_position(101, 3) == 100
    assert current_position(49.6) == 50


def test_brightness_defaults_to_full():
    """Test an unknown brightness is reported as 100."""
    assert brightness(None) == 100
    assert brightness(25) == 25
    assert brightness(250) == 100


def test_project_cover_uncalibrated():
    """Test a cover without positions projects to safe defaults."""
    cover = Cover(0)
    cover.update({"state": "stopped", "pos_control": False})

    assert project_cover(cover) == CoverState(PositionState.STOPPED, 0, 0)


def test_project_cover_moving():
    """Test a cover moving towards a target."""
    cover = Cover(1)
    cover.update({"state": "closing", "current_pos": 60, "target_pos": 10})

    assert project_cover(cover) == CoverState(PositionState.DECREASING, 60, 10)


def test_project_light_and_switch():
    """Test the light and relay projections."""
    light = Light(0)
    assert project_light(light) == LightState(on=False, brightness=100)

    light.update({"output": True, "brightness": 30})
    assert project_light(light) == LightState(on=True, brightness=30)

    switch = Switch(0)
    assert project_switch(switch) == SwitchState(on=False)
    switch.update({"output": True})
    assert project_switch(switch) == SwitchState(on=True)
