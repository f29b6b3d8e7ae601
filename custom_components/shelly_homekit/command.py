"""Translate HomeKit writes into device actions."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
import logging
from typing import Any

from .exceptions import CommunicationFailure

_LOGGER = logging.getLogger(__name__)


class CommandTranslator:
    """Set handler forwarding a characteristic write to a component action.

    A write equal to the component's own pending value is dropped. On
    success nothing is pushed back; the component reports its new state
    through its change notifications. A failing action is logged and
    reported to HomeKit as a communication failure.
    """

    def __init__(
        self,
        name: str,
        description: str,
        action: Callable[[Any], Awaitable[Any]],
        current: Callable[[], Any],
        active: Callable[[], bool] = lambda: True,
    ) -> None:
        """Initialize the translator."""
        self.name = name
        self.description = description
        self._action = action
        self._current = current
        self._active = active

    async def __call__(self, value: Any) -> None:
        """Handle a write coming from HomeKit."""
        if not self._active():
            _LOGGER.warning(
                "%s: ignoring %s command, accessory is detached",
                self.name,
                self.description,
            )
            raise CommunicationFailure(f"{self.name} is detached")

        if value == self._current():
            _LOGGER.debug(
                "%s: %s is already %s, skipping", self.name, self.description, value
            )
            return

        _LOGGER.debug("%s: setting %s to %s", self.name, self.description, value)

        try:
            await self._action(value)
        except Exception as err:
            _LOGGER.error("%s: failed to set %s: %s", self.name, self.description, err)
            raise CommunicationFailure(
                f"Failed to set {self.description} of {self.name}"
            ) from err
