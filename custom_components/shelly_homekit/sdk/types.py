"""Type definitions for the Shelly Gen2 SDK."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, TypedDict


class RpcError(TypedDict):
    """Error object of a JSON-RPC reply."""

    code: int
    message: str


class RpcFrame(TypedDict, total=False):
    """JSON-RPC frame as exchanged over MQTT."""

    id: int
    src: str
    dst: str
    method: str
    params: dict[str, Any]
    result: dict[str, Any] | None
    error: RpcError


RpcCall = Callable[[str, dict[str, Any] | None], Awaitable[dict[str, Any]]]

ChangeHandler = Callable[..., None]

ListenerCallback = Callable[[str, bool], None]
