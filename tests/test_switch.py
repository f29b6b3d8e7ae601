"""Tests for keeping a HomeKit switch or outlet in sync with a relay."""

import pytest

from custom_components.shelly_homekit.switch import SwitchAbility, SwitchType


@pytest.mark.parametrize(
    ("switch_type", "name", "key", "service"),
    [
        (SwitchType.SWITCH, "Switch 2", "switch-1", "Switch"),
        (SwitchType.OUTLET, "Outlet 2", "outlet-1", "Outlet"),
    ],
)
def test_switch_naming(switch, switch_type, name, key, service):
    """Test the kind fixes the service and the name template."""
    ability = SwitchAbility(switch, switch_type)

    assert ability.name == name
    assert ability.key == key
    assert ability.service_name == service


def test_default_switch_type(switch):
    """Test relays are plain switches unless configured otherwise."""
    assert SwitchAbility(switch).switch_type is SwitchType.SWITCH


def test_switch_follows_device(switch, sink):
    """Test the relay state is mirrored onto On."""
    ability = SwitchAbility(switch)
    ability.setup(sink)

    assert sink.seeded == {"On": False}

    switch.update({"output": True})
    assert sink.value("On") is True
    assert "OutletInUse" not in sink.characteristics


def test_outlet_reports_in_use(switch, sink):
    """Test outlets push OutletInUse alongside On."""
    ability = SwitchAbility(switch, SwitchType.OUTLET)
    ability.setup(sink)

    assert sink.seeded == {"On": False, "OutletInUse": False}

    switch.update({"output": True})
    assert sink.value("On") is True
    assert sink.value("OutletInUse") is True


@pytest.mark.asyncio
async def test_switch_command(switch, sink, rpc):
    """Test HomeKit writes become Switch.Set calls."""
    ability = SwitchAbility(switch)
    ability.setup(sink)
    handler = sink.get_characteristic("On").handler

    await handler(False)
    await handler(True)

    assert rpc.calls == [("Switch.Set", {"id": 1, "on": True})]
