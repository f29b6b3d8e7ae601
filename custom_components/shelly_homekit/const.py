"""Constants for the Shelly HomeKit bridge."""

MANUFACTURER = "Shelly"

# Configuration keys
CONF_HOST = "host"
CONF_PORT = "port"
CONF_USERNAME = "username"
CONF_PASSWORD = "password"
CONF_RPC_TIMEOUT = "rpc_timeout"
CONF_DEVICES = "devices"
CONF_ID = "id"
CONF_NAME = "name"
CONF_EXCLUDE = "exclude"
CONF_COVER_TYPE = "cover_type"
CONF_SWITCH_TYPE = "switch_type"

# HAP characteristics
CHAR_ON = "On"
CHAR_BRIGHTNESS = "Brightness"
CHAR_OUTLET_IN_USE = "OutletInUse"
CHAR_POSITION_STATE = "PositionState"
CHAR_CURRENT_POSITION = "CurrentPosition"
CHAR_TARGET_POSITION = "TargetPosition"

# Seconds a HAP write waits for the device before reporting a failure
COMMAND_TIMEOUT = 10.0
