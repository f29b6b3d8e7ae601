"""Shared fixtures for the Shelly HomeKit bridge tests."""

from __future__ import annotations

from typing import Any, Self

import pytest

from custom_components.shelly_homekit.sdk.cover import Cover
from custom_components.shelly_homekit.sdk.light import Light
from custom_components.shelly_homekit.sdk.switch import Switch
from custom_components.shelly_homekit.types import SetHandler


class FakeCharacteristic:
    """Records every value pushed to it."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.value: Any = None
        self.updates: list[Any] = []
        self.handler: SetHandler | None = None

    def on_set(self, handler: SetHandler) -> Self:
        self.handler = handler
        return self

    def update_value(self, value: Any) -> None:
        self.value = value
        self.updates.append(value)


class FakeSink:
    """In-memory stand-in for a HomeKit service."""

    def __init__(self) -> None:
        self.characteristics: dict[str, FakeCharacteristic] = {}
        self.seeded: dict[str, Any] = {}

    def set_characteristic(self, name: str, value: Any) -> Self:
        self.seeded[name] = value
        self.get_characteristic(name).value = value
        return self

    def get_characteristic(self, name: str) -> FakeCharacteristic:
        if name not in self.characteristics:
            self.characteristics[name] = FakeCharacteristic(name)
        return self.characteristics[name]

    def value(self, name: str) -> Any:
        return self.get_characteristic(name).value

    def push_count(self) -> int:
        return sum(len(c.updates) for c in self.characteristics.values())


class FakeRpc:
    """Records RPC calls and answers them, or fails when told to."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any] | None]] = []
        self.error: Exception | None = None

    async def __call__(
        self, method: str, params: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        self.calls.append((method, params))
        if self.error is not None:
            raise self.error
        return {}


@pytest.fixture
def sink() -> FakeSink:
    return FakeSink()


@pytest.fixture
def rpc() -> FakeRpc:
    return FakeRpc()


@pytest.fixture
def cover(rpc: FakeRpc) -> Cover:
    """A calibrated, idle cover at 40%."""
    component = Cover(0, rpc=rpc, device_id="shellyprodualcoverpm-a8032ab12345")
    component.update(
        {
            "state": "stopped",
            "current_pos": 40,
            "target_pos": 40,
            "pos_control": True,
        }
    )
    return component


@pytest.fixture
def light(rpc: FakeRpc) -> Light:
    component = Light(0, rpc=rpc, device_id="shellyprodm1pm-a8032ab12345")
    component.update({"output": False, "brightness": 60})
    return component


@pytest.fixture
def switch(rpc: FakeRpc) -> Switch:
    component = Switch(1, rpc=rpc, device_id="shellypro2pm-a8032ab12345")
    component.update({"output": False})
    return component
