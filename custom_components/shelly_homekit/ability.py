"""Base class binding one device component to one HomeKit service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
import logging
from typing import TYPE_CHECKING, Any

from .command import CommandTranslator

if TYPE_CHECKING:
    from .sdk.component import Component
    from .sdk.types import ChangeHandler
    from .types import CharacteristicSink

_LOGGER = logging.getLogger(__name__)


def ability_name(label: str, component: Component, single: bool = False) -> str:
    """Return the HomeKit name, numbered unless it is the only one of its kind."""
    if single:
        return label
    return f"{label} {component.id + 1}"


class Ability(ABC):
    """Keeps a HomeKit service in sync with a device component.

    The ability holds no state of its own besides its subscriptions: every
    value it shows is recomputed from the component whenever the component
    reports a change.

    Lifecycle:
        1. Construct with the component to mirror
        2. Call setup() with the service sink once the service exists
        3. Call detach() when the accessory goes away
    """

    service_name: str
    category: int
    optional_characteristics: tuple[str, ...] = ()

    def __init__(self, component: Component, name: str, key: str) -> None:
        """Initialize the ability."""
        self.component = component
        self.name = name
        self.key = key
        self._sink: CharacteristicSink | None = None
        self._subscriptions: list[tuple[str, ChangeHandler]] = []
        self._attached = False

    @property
    def sink(self) -> CharacteristicSink:
        """Return the service this ability writes to."""
        if self._sink is None:
            raise RuntimeError(f"{self.name} has not been set up")
        return self._sink

    @property
    def attached(self) -> bool:
        """Return True while the ability reacts to component changes."""
        return self._attached

    def setup(self, sink: CharacteristicSink) -> None:
        """Bind the ability to its service and start syncing."""
        self._sink = sink
        self.initialize()

    @abstractmethod
    def initialize(self) -> None:
        """Seed the service and subscribe to the component."""

    def detach(self) -> None:
        """Stop reacting to component changes.

        Removes exactly the handlers this ability registered. Safe to call
        more than once, and after an initialize() that bailed out.
        """
        for event, handler in self._subscriptions:
            self.component.off(event, handler)

        if self._subscriptions:
            _LOGGER.debug("%s: detached from %s", self.name, self.component.key)

        self._subscriptions.clear()
        self._attached = False

    def _listen(self, handlers: dict[str, ChangeHandler]) -> None:
        for event, handler in handlers.items():
            self.component.on(event, handler)
            self._subscriptions.append((event, handler))
        self._attached = True

    def _on_command(
        self,
        characteristic: str,
        description: str,
        action: Callable[[Any], Awaitable[Any]],
        current: Callable[[], Any],
    ) -> None:
        self.sink.get_characteristic(characteristic).on_set(
            CommandTranslator(
                self.name,
                description,
                action,
                current,
                active=lambda: self._attached,
            )
        )

    def _push(self, values: dict[str, Any]) -> None:
        for characteristic, value in values.items():
            self.sink.get_characteristic(characteristic).update_value(value)

    def _seed(self, values: dict[str, Any]) -> None:
        sink = self.sink
        for characteristic, value in values.items():
            sink = sink.set_characteristic(characteristic, value)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.key!r} on {self.component.key}>"
