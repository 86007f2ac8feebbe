"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

AUTH_STORAGE_KEY = "auth-storage"
DASHBOARD_STORAGE_KEY = "dashboard-storage"

DEFAULT_RESET_TOKEN_TTL_MINUTES = 60
DEFAULT_MIN_PASSWORD_LENGTH = 8
TOKEN_BYTES = 32
