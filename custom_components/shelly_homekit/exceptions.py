"""Exceptions raised by the Shelly HomeKit bridge."""

from __future__ import annotations

from pyhap.const import HAP_SERVER_STATUS


class CommunicationFailure(Exception):
    """A HomeKit command could not be carried out by the device.

    Raised from characteristic setter handlers; HAP-python answers the
    controller with ``SERVICE_COMMUNICATION_FAILURE`` for it.
    """

    status = HAP_SERVER_STATUS.SERVICE_COMMUNICATION_FAILURE


class InvalidConfig(Exception):
    """The bridge configuration failed validation."""
