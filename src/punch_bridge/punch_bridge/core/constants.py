"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Command value devices use when uploading punch records.
SENDLOG_COMMAND = "sendlog"

DEFAULT_LATEST_LIMIT = 50
MAX_LATEST_LIMIT = 500

DEFAULT_PAGE_LIMIT = 200
MAX_PAGE_LIMIT = 1000

DEFAULT_OFFSET = 0

DEFAULT_MQTT_TOPIC = "aiface/+/sub"
MQTT_QOS = 1
MQTT_CONNECT_TIMEOUT_SECONDS = 20
MQTT_RECONNECT_MIN_DELAY_SECONDS = 2
MQTT_RECONNECT_MAX_DELAY_SECONDS = 60

MAX_CONTENT_LENGTH = 2 * 1024 * 1024

# Signed 64-bit range of the INTEGER/BIGINT columns.
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
