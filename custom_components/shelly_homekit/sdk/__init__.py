"""SDK for Shelly Gen2 devices reachable through MQTT."""
