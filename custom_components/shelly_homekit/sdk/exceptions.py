"""Custom exceptions for Shelly device operations."""

from __future__ import annotations


class ShellyError(Exception):
    """Base exception for Shelly device operations."""

    def __init__(self, message: str, device_id: str | None = None):
        """Initialize the exception with an optional device id."""
        super().__init__(message)
        self.device_id = device_id


class ShellyConnectionError(ShellyError):
    """Raised when the MQTT broker cannot be reached."""


class ShellyRpcError(ShellyError):
    """Raised when a device rejects or does not answer an RPC request."""

    def __init__(self, message: str, device_id: str | None = None, code: int = 0):
        """Initialize the exception with the device error code."""
        super().__init__(message, device_id)
        self.code = code
