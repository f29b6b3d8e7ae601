"""MQTT RPC client for Shelly Gen2 devices."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
import itertools
import json
import logging
from typing import Any
import uuid

import paho.mqtt.client as paho_mqtt
from paho.mqtt.enums import CallbackAPIVersion

from .const import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MQTT_PORT,
    DEFAULT_RPC_TIMEOUT,
    METHOD_NOTIFY_FULL_STATUS,
    METHOD_NOTIFY_STATUS,
    TOPIC_EVENTS_SUFFIX,
    TOPIC_ONLINE_SUFFIX,
    TOPIC_RPC_SUFFIX,
    CallbackEventType,
)
from .device import ShellyDevice
from .exceptions import ShellyConnectionError, ShellyRpcError
from .types import ListenerCallback, RpcFrame

_LOGGER = logging.getLogger(__name__)


class ShellyMqttClient:
    """JSON-RPC client talking to Shelly Gen2 devices through an MQTT broker.

    paho-mqtt delivers messages on its own network thread. Every message is
    handed over to the asyncio loop the client was connected from, so
    device notifications and RPC replies are only ever processed there.
    """

    def __init__(
        self,
        host: str,
        username: str | None = None,
        password: str | None = None,
        port: int = DEFAULT_MQTT_PORT,
        rpc_timeout: float = DEFAULT_RPC_TIMEOUT,
    ) -> None:
        """Initialize the client."""
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._rpc_timeout = rpc_timeout

        # Generate unique client_id to avoid conflicts
        self.client_id = f"shelly_homekit_{uuid.uuid4().hex[:8]}"
        self._reply_topic = f"{self.client_id}/{TOPIC_RPC_SUFFIX}"

        self._mqtt_client = paho_mqtt.Client(
            CallbackAPIVersion.VERSION2,
            client_id=self.client_id,
            protocol=paho_mqtt.MQTTv311,
        )
        self._mqtt_client.enable_logger()

        self._loop: asyncio.AbstractEventLoop | None = None
        self._connect_result: int | None = None
        self._connection_event = asyncio.Event()

        self._mqtt_client.on_connect = self._on_connect
        self._mqtt_client.on_disconnect = self._on_disconnect
        self._mqtt_client.on_message = self._on_message

        self._listeners: dict[CallbackEventType, list[Callable[..., None]]] = {
            CallbackEventType.ONLINE_STATUS: [],
        }
        self._devices: dict[str, ShellyDevice] = {}
        self._request_ids = itertools.count(1)
        self._pending: dict[int, asyncio.Future[dict[str, Any]]] = {}

    def register_listener(
        self,
        event_type: CallbackEventType,
        listener: ListenerCallback,
    ) -> Callable[[], None]:
        """Register a listener for a specific event type."""
        if event_type not in self._listeners:
            return lambda: None

        self._listeners[event_type].append(listener)

        return lambda: self._listeners[event_type].remove(listener)

    def _notify_listeners(
        self, event_type: CallbackEventType, dev_id: str, data: bool
    ) -> None:
        for listener in self._listeners.get(event_type, []):
            listener(dev_id, data)

    def add_device(
        self, device_id: str, model: str | None = None, name: str | None = None
    ) -> ShellyDevice:
        """Create a device bound to this client and start tracking it."""
        if device_id in self._devices:
            return self._devices[device_id]

        async def rpc(
            method: str, params: dict[str, Any] | None = None
        ) -> dict[str, Any]:
            return await self.call(device_id, method, params)

        device = ShellyDevice(device_id, rpc, model=model, name=name)
        self._devices[device_id] = device

        if self._mqtt_client.is_connected():
            self._subscribe_device(device_id)

        return device

    def get_device(self, device_id: str) -> ShellyDevice | None:
        """Get a tracked device by id."""
        return self._devices.get(device_id)

    async def connect(self) -> None:
        """Connect to the MQTT broker."""
        self._loop = asyncio.get_running_loop()
        self._connection_event.clear()
        self._connect_result = None

        if self._username:
            self._mqtt_client.username_pw_set(self._username, self._password)

        try:
            self._mqtt_client.connect(self._host, self._port)
            self._mqtt_client.loop_start()
            await asyncio.wait_for(
                self._connection_event.wait(), timeout=DEFAULT_CONNECT_TIMEOUT
            )
        except TimeoutError as err:
            raise ShellyConnectionError("Connection timeout") from err
        except (ConnectionRefusedError, OSError) as err:
            raise ShellyConnectionError(f"Network error: {err}") from err

        if self._connect_result == 0:
            _LOGGER.info("Connected to MQTT broker %s:%s", self._host, self._port)
            return

        # MQTT 3.1.1 codes 4/5, reported as 134/135 by paho-mqtt 2
        if self._connect_result in (4, 5, 134, 135):
            raise ShellyConnectionError("MQTT broker rejected the credentials")

        raise ShellyConnectionError(
            f"Connection failed with code {self._connect_result}"
        )

    async def disconnect(self) -> None:
        """Disconnect from the MQTT broker and fail pending requests."""
        self._mqtt_client.loop_stop()
        self._mqtt_client.disconnect()
        self._connection_event.clear()

        for request_id, future in list(self._pending.items()):
            if not future.done():
                future.set_exception(
                    ShellyRpcError(f"Client disconnected before reply {request_id}")
                )
        self._pending.clear()

    async def call(
        self,
        device_id: str,
        method: str,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """Invoke an RPC method on a device and wait for its result."""
        request_id = next(self._request_ids)
        request: RpcFrame = {
            "id": request_id,
            "src": self.client_id,
            "method": method,
        }
        if params is not None:
            request["params"] = params

        future: asyncio.Future[dict[str, Any]] = (
            asyncio.get_running_loop().create_future()
        )
        self._pending[request_id] = future

        try:
            self._mqtt_client.publish(
                f"{device_id}/{TOPIC_RPC_SUFFIX}", json.dumps(request)
            )

            _LOGGER.debug(
                "Sent %s (id %s) to device %s with params %s",
                method,
                request_id,
                device_id,
                params,
            )

            return await asyncio.wait_for(
                future, timeout=timeout or self._rpc_timeout
            )
        except TimeoutError as err:
            raise ShellyRpcError(
                f"Timeout waiting for reply to {method}", device_id
            ) from err
        finally:
            self._pending.pop(request_id, None)

    def _subscribe_device(self, device_id: str) -> None:
        self._mqtt_client.subscribe(f"{device_id}/{TOPIC_EVENTS_SUFFIX}")
        self._mqtt_client.subscribe(f"{device_id}/{TOPIC_ONLINE_SUFFIX}")

    def _on_connect(
        self,
        client: paho_mqtt.Client,
        userdata: Any,
        flags: Any,
        reason_code: Any,
        properties: Any = None,
    ) -> None:
        rc = getattr(reason_code, "value", reason_code)
        self._connect_result = rc
        if self._loop is not None:
            self._loop.call_soon_threadsafe(self._connection_event.set)

        if rc == 0:
            self._mqtt_client.subscribe(self._reply_topic)
            for device_id in self._devices:
                self._subscribe_device(device_id)
            _LOGGER.debug("Subscribed to topic %s", self._reply_topic)

    def _on_disconnect(
        self,
        client: paho_mqtt.Client,
        userdata: Any,
        flags: Any,
        reason_code: Any,
        properties: Any = None,
    ) -> None:
        rc = getattr(reason_code, "value", reason_code)
        if rc != 0:
            _LOGGER.warning("Unexpected MQTT disconnection (code %s)", rc)
        else:
            _LOGGER.debug("MQTT disconnected from %s", self._host)

    def _on_message(
        self, client: paho_mqtt.Client, userdata: Any, msg: paho_mqtt.MQTTMessage
    ) -> None:
        if self._loop is None:
            return
        self._loop.call_soon_threadsafe(self.handle_message, msg.topic, msg.payload)

    def handle_message(self, topic: str, payload: bytes) -> None:
        """Process one MQTT message on the event loop."""
        text = payload.decode("utf-8", errors="replace")

        if topic.endswith(f"/{TOPIC_ONLINE_SUFFIX}"):
            self._handle_online(topic.rsplit("/", 1)[0], text)
            return

        try:
            frame = json.loads(text)
        except json.JSONDecodeError:
            _LOGGER.warning("Invalid JSON on topic %s: %s", topic, payload)
            return

        if not isinstance(frame, dict):
            return

        _LOGGER.debug("Received message on topic %s: %s", topic, frame)

        if topic == self._reply_topic:
            self._handle_reply(frame)
            return

        method = frame.get("method")
        if method in (METHOD_NOTIFY_STATUS, METHOD_NOTIFY_FULL_STATUS):
            self._handle_notify_status(frame)
        else:
            _LOGGER.debug("Unhandled method %s from %s", method, frame.get("src"))

    def _handle_reply(self, frame: dict[str, Any]) -> None:
        request_id = frame.get("id")
        future = self._pending.get(request_id) if request_id is not None else None

        if future is None or future.done():
            _LOGGER.debug("Received reply for unknown request %s", request_id)
            return

        error = frame.get("error")
        if error:
            future.set_exception(
                ShellyRpcError(
                    error.get("message", "Unknown error"),
                    frame.get("src"),
                    code=error.get("code", 0),
                )
            )
            return

        future.set_result(frame.get("result") or {})

    def _handle_notify_status(self, frame: dict[str, Any]) -> None:
        device = self._devices.get(frame.get("src", ""))
        if device is None:
            return

        device.apply_status(frame.get("params", {}))

    def _handle_online(self, device_id: str, text: str) -> None:
        device = self._devices.get(device_id)
        if device is None:
            return

        online = text.strip().lower() == "true"
        if device.online == online:
            return

        device.online = online
        _LOGGER.info(
            "Device %s is now %s", device_id, "online" if online else "offline"
        )
        self._notify_listeners(CallbackEventType.ONLINE_STATUS, device_id, online)
