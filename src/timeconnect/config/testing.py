from .base import *  # noqa: F401,F403

SECRET_KEY = "test-secret"
JWT_SECRET = "test-jwt-secret"

DEBUG = False
TESTING = True

NOTIFY_BACKOFF_SECONDS = 0.0
AUTO_INIT_DB = False
