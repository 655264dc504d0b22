"""Constants for the room allocator."""

# Payload keys (top level)
KEY_QUERIES = "queries"
KEY_ROOMS = "rooms"
KEY_RANGE = "range"

# Query record keys
KEY_CHECK_IN = "checkIn"
KEY_CHECK_OUT = "checkOut"
KEY_ASSIGNED = "assigned"
KEY_ROOM_ID = "roomId"

# Range keys
KEY_RANGE_FROM = "from"
KEY_RANGE_TO = "to"

# Output formatting
JSON_INDENT = 2

# Reference files inside a config directory
ROOMS_CSV_FILENAME = "rooms.csv"
RANGE_JSON_FILENAME = "range.json"

# Stdin marker for CLI input paths
STDIN_MARKER = "-"
