"""Tests for keeping a HomeKit lightbulb in sync with a dimmer channel."""

import pytest

from custom_components.shelly_homekit.exceptions import CommunicationFailure
from custom_components.shelly_homekit.light import LightAbility, LightType
from custom_components.shelly_homekit.sdk.exceptions import ShellyRpcError


def test_light_naming(light):
    """Test the light name and key templates."""
    ability = LightAbility(light)

    assert ability.light_type is LightType.LIGHTBULB
    assert ability.name == "Light 1"
    assert ability.key == "lightbulb-0"
    assert ability.service_name == "Lightbulb"
    assert ability.optional_characteristics == ("Brightness",)

    assert LightAbility(light, single=True).name == "Light"


def test_light_seeds_and_follows_device(light, sink):
    """Test power and brightness are pushed together on every change."""
    ability = LightAbility(light)
    ability.setup(sink)

    assert sink.seeded == {"On": False, "Brightness": 60}

    light.update({"brightness": 25})
    assert sink.get_characteristic("On").updates == [False]
    assert sink.get_characteristic("Brightness").updates == [25]

    light.update({"output": True})
    assert sink.value("On") is True
    assert sink.value("Brightness") == 25
    assert len(sink.get_characteristic("Brightness").updates) == 2


@pytest.mark.asyncio
async def test_light_commands(light, sink, rpc):
    """Test HomeKit writes become Light.Set calls, echoes are dropped."""
    ability = LightAbility(light)
    ability.setup(sink)

    await sink.get_characteristic("On").handler(False)
    await sink.get_characteristic("Brightness").handler(60)
    assert rpc.calls == []

    await sink.get_characteristic("On").handler(True)
    await sink.get_characteristic("Brightness").handler(30)

    assert rpc.calls == [
        ("Light.Set", {"id": 0, "on": True}),
        ("Light.Set", {"id": 0, "brightness": 30}),
    ]


@pytest.mark.asyncio
async def test_light_command_failure(light, sink, rpc):
    """Test a failing dimmer reports a communication failure."""
    ability = LightAbility(light)
    ability.setup(sink)
    rpc.error = ShellyRpcError("Device offline", light.device_id)

    with pytest.raises(CommunicationFailure):
        await sink.get_characteristic("On").handler(True)

    assert sink.value("On") is False


def test_light_detach(light, sink):
    """Test a detached light ignores the device."""
    ability = LightAbility(light)
    ability.setup(sink)
    ability.detach()

    light.update({"output": True, "brightness": 10})

    assert sink.push_count() == 0
    assert light.listener_count("change:output") == 0
    assert light.listener_count("change:brightness") == 0
