"""Device model for Shelly Gen2 devices."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, TypeVar

from .component import Component
from .const import METHOD_SHELLY_GET_STATUS
from .cover import Cover
from .light import Light
from .switch import Switch
from .types import RpcCall

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T", bound=Component)

COMPONENT_CLASSES: dict[str, type[Component]] = {
    cls.prefix: cls for cls in (Cover, Light, Switch)
}


class ShellyDevice:
    """A Shelly device and the components it reports.

    Components are created lazily the first time their key (``cover:0``,
    ``light:0``, ...) appears in a status payload and are kept for the
    lifetime of the device, so listeners stay attached across updates.
    """

    def __init__(
        self,
        device_id: str,
        rpc: RpcCall,
        model: str | None = None,
        name: str | None = None,
    ) -> None:
        """Initialize the device."""
        self.device_id = device_id
        self.model = model
        self.name = name or device_id
        self.online = False
        self._rpc = rpc
        self._components: dict[str, Component] = {}

    @property
    def components(self) -> list[Component]:
        """Return all known components."""
        return list(self._components.values())

    @property
    def covers(self) -> list[Cover]:
        """Return the cover components ordered by id."""
        return self._of_type(Cover)

    @property
    def lights(self) -> list[Light]:
        """Return the light components ordered by id."""
        return self._of_type(Light)

    @property
    def switches(self) -> list[Switch]:
        """Return the switch components ordered by id."""
        return self._of_type(Switch)

    def _of_type(self, cls: type[T]) -> list[T]:
        found = [c for c in self._components.values() if isinstance(c, cls)]
        return sorted(found, key=lambda c: c.id)

    def get_component(self, key: str) -> Component | None:
        """Get a component by its status key."""
        return self._components.get(key)

    async def call(
        self, method: str, params: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Invoke an RPC method on this device."""
        return await self._rpc(method, params)

    async def refresh(self) -> None:
        """Fetch the full status of the device and apply it."""
        status = await self.call(METHOD_SHELLY_GET_STATUS)
        self.apply_status(status)

    def apply_status(self, status: Mapping[str, Any]) -> None:
        """Route a status payload to the components it mentions."""
        for key, value in status.items():
            if not isinstance(value, Mapping):
                continue

            component = self._components.get(key)
            if component is None:
                component = self._create_component(key)
                if component is None:
                    continue

            component.update(value)

    def _create_component(self, key: str) -> Component | None:
        prefix, _, index = key.partition(":")
        cls = COMPONENT_CLASSES.get(prefix)
        if cls is None or not index.isdigit():
            return None

        component = cls(int(index), rpc=self.call, device_id=self.device_id)
        self._components[key] = component

        _LOGGER.debug("Device %s reports component %s", self.device_id, key)
        return component
