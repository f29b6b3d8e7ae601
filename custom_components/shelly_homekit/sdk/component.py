"""Base component model for Shelly Gen2 devices."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, ClassVar, Self

from .const import change_event
from .exceptions import ShellyError
from .types import ChangeHandler, RpcCall

_LOGGER = logging.getLogger(__name__)


class Component:
    """One physical sub-unit of a device (a cover, a dimmer channel, a relay).

    Attribute values mirror the last status reported by the device. Every
    attribute emits a ``change:<attribute>`` notification when its value
    changes, so consumers can observe the component without polling.
    """

    prefix: ClassVar[str] = ""
    attributes: ClassVar[tuple[str, ...]] = ()

    def __init__(
        self,
        component_id: int,
        rpc: RpcCall | None = None,
        device_id: str | None = None,
    ) -> None:
        """Initialize the component."""
        self.id = component_id
        self.device_id = device_id
        self._rpc = rpc
        self._handlers: dict[str, list[ChangeHandler]] = {}

        for attribute in self.attributes:
            setattr(self, attribute, None)

    @property
    def key(self) -> str:
        """Return the component key used in device status payloads."""
        return f"{self.prefix}:{self.id}"

    def on(self, event: str, handler: ChangeHandler) -> Self:
        """Register a handler for a change notification."""
        self._handlers.setdefault(event, []).append(handler)
        return self

    def off(self, event: str, handler: ChangeHandler) -> Self:
        """Remove a handler previously passed to `on`."""
        handlers = self._handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)
        return self

    def listener_count(self, event: str) -> int:
        """Return the number of handlers registered for a notification."""
        return len(self._handlers.get(event, []))

    def update(self, status: Mapping[str, Any]) -> None:
        """Apply a (partial) status payload and emit change notifications.

        All attributes present in ``status`` are assigned before any handler
        runs, so a handler always reads the complete new snapshot.
        """
        changed: list[str] = []

        for attribute in self.attributes:
            if attribute not in status:
                continue
            value = status[attribute]
            if getattr(self, attribute) != value:
                setattr(self, attribute, value)
                changed.append(attribute)

        if changed:
            _LOGGER.debug(
                "Component %s of device %s changed: %s",
                self.key,
                self.device_id,
                {attribute: getattr(self, attribute) for attribute in changed},
            )

        for attribute in changed:
            self._emit(change_event(attribute), getattr(self, attribute))

    def _emit(self, event: str, *args: Any) -> None:
        # Copy so handlers may unsubscribe while being notified
        for handler in list(self._handlers.get(event, [])):
            handler(*args)

    async def _call(
        self, method: str, params: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Invoke an RPC method on the owning device."""
        if self._rpc is None:
            raise ShellyError(
                f"Component {self.key} is not bound to a device", self.device_id
            )

        request: dict[str, Any] = {"id": self.id}
        if params:
            request.update(params)

        _LOGGER.debug(
            "Calling %s on device %s with %s", method, self.device_id, request
        )
        return await self._rpc(method, request)
