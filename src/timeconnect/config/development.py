from .base import *  # noqa: F401,F403
from .base import _flag

DEBUG = True
LOG_LEVEL = "DEBUG"

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = _flag("AUTO_INIT_DB", "1")
