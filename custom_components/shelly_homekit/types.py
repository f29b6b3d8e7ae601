"""Type definitions for the Shelly HomeKit bridge."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, Self

SetHandler = Callable[[Any], Awaitable[None]]


class Characteristic(Protocol):
    """A single HomeKit characteristic as seen by an ability."""

    def on_set(self, handler: SetHandler) -> Self:
        """Register the handler for writes coming from HomeKit controllers."""
        ...

    def update_value(self, value: Any) -> None:
        """Publish a new value without invoking the set handler."""
        ...


class CharacteristicSink(Protocol):
    """The HomeKit service an ability projects its component onto."""

    def set_characteristic(self, name: str, value: Any) -> Self:
        """Seed the initial value of a characteristic."""
        ...

    def get_characteristic(self, name: str) -> Characteristic:
        """Return a characteristic of the service by HAP name."""
        ...
