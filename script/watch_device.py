#!/usr/bin/env python3
"""Watch a Shelly device through the HomeKit sync engine.

Connects to the MQTT broker configured in the .env file, loads one device,
attaches an ability to each of its components and logs every value that
would be sent to HomeKit. Optionally moves the first cover to check the
command path.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from pathlib import Path
import sys
from typing import Any, Self

from dotenv import load_dotenv

# Add custom_components to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from custom_components.shelly_homekit import create_abilities  # noqa: E402
from custom_components.shelly_homekit.ability import Ability  # noqa: E402
from custom_components.shelly_homekit.config import (  # noqa: E402
    device_options,
    validate_config,
)
from custom_components.shelly_homekit.const import (  # noqa: E402
    CHAR_TARGET_POSITION,
    CONF_DEVICES,
    CONF_HOST,
    CONF_ID,
    CONF_PASSWORD,
    CONF_PORT,
    CONF_RPC_TIMEOUT,
    CONF_USERNAME,
)
from custom_components.shelly_homekit.cover import CoverAbility  # noqa: E402
from custom_components.shelly_homekit.exceptions import (  # noqa: E402
    CommunicationFailure,
    InvalidConfig,
)
from custom_components.shelly_homekit.sdk.client import ShellyMqttClient  # noqa: E402
from custom_components.shelly_homekit.sdk.const import CallbackEventType  # noqa: E402
from custom_components.shelly_homekit.sdk.exceptions import ShellyError  # noqa: E402
from custom_components.shelly_homekit.types import SetHandler  # noqa: E402

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

_LOGGER = logging.getLogger(__name__)

# Disable paho.mqtt.client debug logging
logging.getLogger("paho.mqtt.client").setLevel(logging.WARNING)


class LoggingCharacteristic:
    """Characteristic that logs the values HomeKit would receive."""

    def __init__(self, owner: str, name: str) -> None:
        """Initialize the characteristic."""
        self.owner = owner
        self.name = name
        self.value: Any = None
        self.handler: SetHandler | None = None

    def on_set(self, handler: SetHandler) -> Self:
        """Remember the write handler."""
        self.handler = handler
        return self

    def update_value(self, value: Any) -> None:
        """Log the pushed value."""
        if value != self.value:
            _LOGGER.info("[%s] %s: %s -> %s", self.owner, self.name, self.value, value)
        self.value = value


class LoggingSink:
    """Characteristic sink standing in for a HomeKit service."""

    def __init__(self, owner: str) -> None:
        """Initialize the sink."""
        self.owner = owner
        self.characteristics: dict[str, LoggingCharacteristic] = {}

    def set_characteristic(self, name: str, value: Any) -> Self:
        """Seed a characteristic."""
        self.get_characteristic(name).update_value(value)
        return self

    def get_characteristic(self, name: str) -> LoggingCharacteristic:
        """Return a characteristic, creating it on first use."""
        if name not in self.characteristics:
            self.characteristics[name] = LoggingCharacteristic(self.owner, name)
        return self.characteristics[name]


class DeviceWatcher:
    """Attach abilities to one device and log what HomeKit would see."""

    def __init__(self, config: dict[str, Any], device_id: str) -> None:
        """Initialize the watcher."""
        self.config = config
        self.device_id = device_id
        self.client = ShellyMqttClient(
            config[CONF_HOST],
            config.get(CONF_USERNAME),
            config.get(CONF_PASSWORD),
            port=config[CONF_PORT],
            rpc_timeout=config[CONF_RPC_TIMEOUT],
        )
        self.abilities: list[Ability] = []
        self.sinks: dict[str, LoggingSink] = {}

    def _on_online_status(self, dev_id: str, is_online: bool) -> None:
        status = "online" if is_online else "offline"
        _LOGGER.info("Device %s is now %s", dev_id, status)

    async def start(self) -> None:
        """Connect, load the device and attach its abilities."""
        self.client.register_listener(
            CallbackEventType.ONLINE_STATUS, self._on_online_status
        )
        await self.client.connect()

        device = self.client.add_device(self.device_id)
        await device.refresh()

        self.abilities = create_abilities(
            device, device_options(self.config, self.device_id)
        )
        for ability in self.abilities:
            sink = LoggingSink(ability.name)
            self.sinks[ability.key] = sink
            ability.setup(sink)
            _LOGGER.info("Attached %r", ability)

    async def move_first_cover(self, position: int) -> None:
        """Send a TargetPosition write to the first cover, as HomeKit would."""
        for ability in self.abilities:
            if not isinstance(ability, CoverAbility):
                continue

            handler = self.sinks[ability.key].get_characteristic(
                CHAR_TARGET_POSITION
            ).handler
            if handler is None:
                _LOGGER.warning("%s does not accept commands", ability.name)
                return

            try:
                await handler(position)
            except CommunicationFailure:
                _LOGGER.exception("Moving %s failed", ability.name)
            return

        _LOGGER.warning("Device %s has no covers", self.device_id)

    async def stop(self) -> None:
        """Detach all abilities and disconnect."""
        for ability in self.abilities:
            ability.detach()
        await self.client.disconnect()


async def run(
    config: dict[str, Any], device_id: str, position: int | None, duration: float
) -> None:
    """Watch the device for ``duration`` seconds."""
    watcher = DeviceWatcher(config, device_id)
    try:
        await watcher.start()
        if position is not None:
            await watcher.move_first_cover(position)
        await asyncio.sleep(duration)
    except ShellyError:
        _LOGGER.exception("Device %s is not reachable", device_id)
    finally:
        await watcher.stop()


def load_config_from_env() -> dict[str, Any]:
    """Load configuration from .env file."""
    env_path = project_root / ".env"
    if not env_path.exists():
        _LOGGER.warning(".env file not found at %s", env_path)
        _LOGGER.info("Please create .env with SHELLY_MQTT_HOST and SHELLY_DEVICE_ID")
        sys.exit(1)

    load_dotenv(env_path)

    data: dict[str, Any] = {CONF_HOST: os.getenv("SHELLY_MQTT_HOST", "")}
    for key, env_name in (
        (CONF_PORT, "SHELLY_MQTT_PORT"),
        (CONF_USERNAME, "SHELLY_MQTT_USERNAME"),
        (CONF_PASSWORD, "SHELLY_MQTT_PASSWORD"),
    ):
        value = os.getenv(env_name)
        if value:
            data[key] = value

    device_id = os.getenv("SHELLY_DEVICE_ID")
    if device_id:
        data[CONF_DEVICES] = [{CONF_ID: device_id}]

    return data


def main() -> None:
    """Run the watcher."""
    parser = argparse.ArgumentParser(
        description="Log the HomeKit view of a Shelly device"
    )
    parser.add_argument("--host", help="MQTT broker host (overrides .env)")
    parser.add_argument("--device-id", help="Shelly device id (overrides .env)")
    parser.add_argument(
        "--position", type=int, help="Move the first cover to this position"
    )
    parser.add_argument(
        "--duration", type=float, default=30.0, help="Seconds to keep watching"
    )

    args = parser.parse_args()

    data = load_config_from_env()
    if args.host:
        data[CONF_HOST] = args.host
    if args.device_id:
        data[CONF_DEVICES] = [{CONF_ID: args.device_id}]

    try:
        config = validate_config(data)
    except InvalidConfig:
        _LOGGER.exception("Please fix the values in the .env file")
        sys.exit(1)

    if not config[CONF_DEVICES]:
        _LOGGER.error("Missing required configuration: SHELLY_DEVICE_ID")
        sys.exit(1)

    device_id = config[CONF_DEVICES][0][CONF_ID]

    try:
        asyncio.run(run(config, device_id, args.position, args.duration))
    except KeyboardInterrupt:
        _LOGGER.info("Interrupted by user")
        sys.exit(130)


if __name__ == "__main__":
    main()
