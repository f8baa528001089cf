STORAGE_KEY = "pipeline-state"

PIPELINE_STORE_CONFIG = {
    "ENGINE": "pointy_studio.backends.stores.inmemory_store.InMemoryDocumentStoreBackend",
    "OPTIONS": {},
}

DEFAULT_EVENT_NAME = "New Event"
DEFAULT_EVENT_CODE = "# Write your Python code here\n"

LAYOUT_ORIGIN_X = 100
LAYOUT_ORIGIN_Y = 100
LAYOUT_COLUMN_SPACING = 200
LAYOUT_ROW_SPACING = 150
LAYOUT_MAX_X = 700
