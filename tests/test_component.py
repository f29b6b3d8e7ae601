"""Tests for the component change notifications."""

import pytest

from custom_components.shelly_homekit.sdk.cover import Cover
from custom_components.shelly_homekit.sdk.exceptions import ShellyError
from custom_components.shelly_homekit.sdk.light import Light
from custom_components.shelly_homekit.sdk.switch import Switch


def test_component_key():
    """Test components are keyed like the device status payload."""
    assert Cover(1).key == "cover:1"
    assert Light(0).key == "light:0"
    assert Switch(2).key == "switch:2"


def test_attributes_start_unknown():
    """Test attributes are None until the device reports them."""
    cover = Cover(0)
    assert cover.current_pos is None
    assert cover.target_pos is None
    assert cover.pos_control is None


def test_update_emits_one_notification_per_changed_attribute():
    """Test only changed attributes are notified."""
    cover = Cover(0)
    cover.update({"state": "stopped", "current_pos": 10})
    received = []

    cover.on("change:state", lambda value: received.append(("state", value)))
    cover.on("change:current_pos", lambda value: received.append(("pos", value)))

    cover.update({"state": "opening", "current_pos": 10, "unknown": 1})

    assert received == [("state", "opening")]


def test_handlers_see_complete_snapshot():
    """Test every attribute is applied before the first handler runs."""
    cover = Cover(0)
    seen = []

    cover.on("change:state", lambda _: seen.append((cover.state, cover.current_pos)))
    cover.update({"state": "stopped", "current_pos": 80})

    assert seen == [("stopped", 80)]


def test_on_and_off_chain():
    """Test subscribing returns the component and off removes the handler."""
    cover = Cover(0)
    received = []

    def handler(value):
        received.append(value)

    assert cover.on("change:state", handler) is cover
    assert cover.listener_count("change:state") == 1

    assert cover.off("change:state", handler) is cover
    assert cover.listener_count("change:state") == 0

    cover.update({"state": "closing"})
    assert received == []


def test_off_unknown_handler_is_noop():
    """Test removing a handler that was never added."""
    cover = Cover(0)
    assert cover.off("change:state", lambda _: None) is cover


def test_handler_may_unsubscribe_during_emit():
    """Test a handler removing itself does not skip the next one."""
    cover = Cover(0)
    received = []

    def first(_):
        received.append("first")
        cover.off("change:state", first)

    cover.on("change:state", first)
    cover.on("change:state", lambda _: received.append("second"))

    cover.update({"state": "opening"})
    cover.update({"state": "closing"})

    assert received == ["first", "second", "second"]


@pytest.mark.asyncio
async def test_actions_call_device_rpc(rpc):
    """Test actions are sent as RPC calls carrying the component id."""
    cover = Cover(1, rpc=rpc)
    light = Light(0, rpc=rpc)
    switch = Switch(2, rpc=rpc)

    await cover.go_to_position(75)
    await cover.stop()
    await light.set(on=True, brightness=120)
    await switch.set(True)

    assert rpc.calls == [
        ("Cover.GoToPosition", {"id": 1, "pos": 75}),
        ("Cover.Stop", {"id": 1}),
        ("Light.Set", {"id": 0, "on": True, "brightness": 100}),
        ("Switch.Set", {"id": 2, "on": True}),
    ]


@pytest.mark.asyncio
async def test_action_without_device_fails():
    """Test an unbound component cannot run actions."""
    with pytest.raises(ShellyError):
        await Cover(0).open()
