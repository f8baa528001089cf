STORAGE_KEY = "pipeline-state"

EVENT_NODE_TYPE = "event"

EVENT_ID_PREFIX = "event-"

DEFAULT_EVENT_NAME = "New Event"

DEFAULT_EVENT_CODE = "# Write your Python code here\n"

#: Grid used to place events recovered from pointy text.
LAYOUT_ORIGIN_X = 100
LAYOUT_ORIGIN_Y = 100
LAYOUT_COLUMN_SPACING = 200
LAYOUT_ROW_SPACING = 150
LAYOUT_MAX_X = 700

IDENTIFIER_PATTERN = r"[a-zA-Z_][a-zA-Z0-9_]*"

POINTY_COMMENT = "//"

CODE_COMMENT = "#"
