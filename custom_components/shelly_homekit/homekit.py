"""HAP-python backed characteristic sink."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
import logging
from typing import TYPE_CHECKING, Any, Self

from pyhap.accessory import Accessory

from .const import COMMAND_TIMEOUT, MANUFACTURER
from .exceptions import CommunicationFailure
from .types import SetHandler

if TYPE_CHECKING:
    from pyhap.accessory_driver import AccessoryDriver
    from pyhap.characteristic import Characteristic as HapChar
    from pyhap.service import Service

    from .ability import Ability

_LOGGER = logging.getLogger(__name__)


class HapCharacteristic:
    """Wraps a HAP-python characteristic for use by an ability.

    HAP-python stores a controller write before calling the setter, so a
    write the device rejects is rolled back to the last value published
    from the device side.
    """

    def __init__(
        self,
        char: HapChar,
        loop: asyncio.AbstractEventLoop,
        background_tasks: set[asyncio.Task[None]],
    ) -> None:
        """Initialize the wrapper."""
        self._char = char
        self._loop = loop
        self._background_tasks = background_tasks
        self._published: Any = None

    @property
    def value(self) -> Any:
        """Return the value HomeKit currently sees."""
        return self._char.value

    def on_set(self, handler: SetHandler) -> Self:
        """Run ``handler`` on the bridge loop for every HomeKit write."""

        def setter_callback(value: Any) -> None:
            self._dispatch(self._handle_write(handler, value))

        self._char.setter_callback = setter_callback
        return self

    def update_value(self, value: Any) -> None:
        """Publish a value to HomeKit without calling the setter."""
        self._published = value
        self._char.set_value(value)

    async def _handle_write(self, handler: SetHandler, value: Any) -> None:
        try:
            await handler(value)
        except CommunicationFailure:
            self._restore()
            raise

    def _restore(self) -> None:
        if self._published is None or self._char.value == self._published:
            return
        _LOGGER.debug(
            "Restoring %s to %s after a failed write",
            self._char.display_name,
            self._published,
        )
        self._char.set_value(self._published)

    def _dispatch(self, coro: Coroutine[Any, Any, None]) -> None:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is self._loop:
            # HAP has already answered by the time this task finishes
            task = self._loop.create_task(coro)
            self._background_tasks.add(task)
            task.add_done_callback(self._task_done)
            return

        future = asyncio.run_coroutine_threadsafe(coro, self._loop)
        try:
            future.result(timeout=COMMAND_TIMEOUT)
        except TimeoutError as err:
            self._loop.call_soon_threadsafe(self._restore)
            raise CommunicationFailure(
                f"No answer for {self._char.display_name} within {COMMAND_TIMEOUT}s"
            ) from err

    def _task_done(self, task: asyncio.Task[None]) -> None:
        self._background_tasks.discard(task)
        if task.cancelled():
            return
        err = task.exception()
        if err is None:
            return
        if isinstance(err, CommunicationFailure):
            _LOGGER.warning(
                "Write to %s failed after HomeKit was answered: %s",
                self._char.display_name,
                err,
            )
        else:
            _LOGGER.error(
                "Unexpected error setting %s: %s", self._char.display_name, err
            )


class HapServiceSink:
    """Characteristic sink writing to a HAP-python service."""

    def __init__(self, service: Service, loop: asyncio.AbstractEventLoop) -> None:
        """Initialize the sink."""
        self.service = service
        self._loop = loop
        self._characteristics: dict[str, HapCharacteristic] = {}
        self._background_tasks: set[asyncio.Task[None]] = set()

    def set_characteristic(self, name: str, value: Any) -> Self:
        """Seed the value of a characteristic."""
        self.get_characteristic(name).update_value(value)
        return self

    def get_characteristic(self, name: str) -> HapCharacteristic:
        """Return the wrapper for a characteristic of the service."""
        if name not in self._characteristics:
            self._characteristics[name] = HapCharacteristic(
                self.service.get_characteristic(name),
                self._loop,
                self._background_tasks,
            )
        return self._characteristics[name]


def create_accessory(
    driver: AccessoryDriver,
    ability: Ability,
    loop: asyncio.AbstractEventLoop,
    display_name: str | None = None,
) -> Accessory:
    """Build an accessory exposing ``ability`` and start syncing it.

    ``loop`` is the loop the devices are served on. The accessory driver must
    run its own loop in a separate thread, so HomeKit writes block until the
    device answers and a failure is reported back to the controller. Writes
    arriving on ``loop`` itself are only logged when they fail.
    """
    accessory = Accessory(driver, display_name or ability.name)
    accessory.category = ability.category
    accessory.set_info_service(
        manufacturer=MANUFACTURER,
        serial_number=f"{ability.component.device_id or 'shelly'}-{ability.key}",
    )

    service = accessory.add_preload_service(
        ability.service_name, chars=list(ability.optional_characteristics) or None
    )
    ability.setup(HapServiceSink(service, loop))

    _LOGGER.debug(
        "Created %s accessory %s for %r",
        ability.service_name,
        accessory.display_name,
        ability,
    )
    return accessory
