"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

PIN_LENGTH = 4

LOW_ACTIVITY_HOURS = 30
LOW_ACTIVITY_ENTRIES = 3
LOW_ACTIVITY_LABEL = "Low activity"

ENTRY_ID_RANDOM_CHARS = 6

# entries.id is VARCHAR(191)
ENTRY_ID_MAX_LENGTH = 191
