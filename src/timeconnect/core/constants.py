"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_ARRIVAL_TIME = "09:00"
DEFAULT_STANDARD_WORK_HOURS = 8
DEFAULT_COMMENT = "N/A"

DEFAULT_JWT_EXPIRES_SECONDS = 60000
DEFAULT_RESET_TOKEN_TTL_SECONDS = 3600

DEFAULT_NOTIFY_ATTEMPTS = 3
DEFAULT_NOTIFY_BACKOFF_SECONDS = 5.0
DEFAULT_NOTIFY_WORKERS = 2

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
