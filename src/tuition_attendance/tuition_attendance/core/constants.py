"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

LOCK_AFTER_HOURS = 12
DEFAULT_HEATMAP_LIMIT = 50
LEADERBOARD_SIZE = 10
MIN_PASSWORD_LENGTH = 6
MIN_GUARDIAN_MOBILE_LENGTH = 10
