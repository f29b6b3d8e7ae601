"""Constants for the Shelly Gen2 SDK."""

from enum import Enum

# MQTT Topics
TOPIC_RPC_SUFFIX = "rpc"
TOPIC_EVENTS_SUFFIX = "events/rpc"
TOPIC_ONLINE_SUFFIX = "online"

# Default values
DEFAULT_MQTT_PORT = 1883
DEFAULT_RPC_TIMEOUT = 10.0  # seconds
DEFAULT_CONNECT_TIMEOUT = 10.0  # seconds

# JSON-RPC notification methods
METHOD_NOTIFY_STATUS = "NotifyStatus"
METHOD_NOTIFY_FULL_STATUS = "NotifyFullStatus"

# JSON-RPC service methods
METHOD_SHELLY_GET_STATUS = "Shelly.GetStatus"
METHOD_COVER_GO_TO_POSITION = "Cover.GoToPosition"
METHOD_COVER_OPEN = "Cover.Open"
METHOD_COVER_CLOSE = "Cover.Close"
METHOD_COVER_STOP = "Cover.Stop"
METHOD_COVER_CALIBRATE = "Cover.Calibrate"
METHOD_LIGHT_SET = "Light.Set"
METHOD_LIGHT_TOGGLE = "Light.Toggle"
METHOD_SWITCH_SET = "Switch.Set"
METHOD_SWITCH_TOGGLE = "Switch.Toggle"

# Component key prefixes ("cover:0", "light:0", "switch:1")
PREFIX_COVER = "cover"
PREFIX_LIGHT = "light"
PREFIX_SWITCH = "switch"

# Cover states that mean the cover is moving
COVER_STATE_OPENING = "opening"
COVER_STATE_CLOSING = "closing"

# Component change notifications
EVENT_STATE_CHANGE = "change:state"
EVENT_CURRENT_POS_CHANGE = "change:current_pos"
EVENT_TARGET_POS_CHANGE = "change:target_pos"
EVENT_OUTPUT_CHANGE = "change:output"
EVENT_BRIGHTNESS_CHANGE = "change:brightness"


def change_event(attribute: str) -> str:
    """Return the change notification name for a component attribute."""
    return f"change:{attribute}"


class CallbackEventType(Enum):
    """Client callback event types for listener registration."""

    ONLINE_STATUS = "online_status"
