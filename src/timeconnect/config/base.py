"""Settings shared by every environment; overridden per environment module."""
import os

from ..core import constants


def _flag(name: str, default: str) -> bool:
    return bool(int(os.getenv(name, default)))


SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
JWT_SECRET = os.getenv("JWT_SECRET", SECRET_KEY)
JWT_EXPIRES_SECONDS = int(os.getenv("JWT_EXPIRES_SECONDS", str(constants.DEFAULT_JWT_EXPIRES_SECONDS)))

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USERNAME", os.getenv("DB_USER", "root")),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_db"),
}

ARRIVAL_TIME = os.getenv("ARRIVAL_TIME", constants.DEFAULT_ARRIVAL_TIME)
STANDARD_WORK_HOURS = os.getenv("STANDARD_WORK_HOURS", str(constants.DEFAULT_STANDARD_WORK_HOURS))
RESET_TOKEN_TTL_SECONDS = int(
    os.getenv("RESET_TOKEN_TTL_SECONDS", str(constants.DEFAULT_RESET_TOKEN_TTL_SECONDS))
)

MAIL_CONFIG = {
    "host": os.getenv("MAIL_SERVER", "smtp.gmail.com"),
    "port": int(os.getenv("MAIL_PORT", "587")),
    "username": os.getenv("MAIL_USERNAME"),
    "password": os.getenv("MAIL_PASSWORD"),
    "from_email": os.getenv("MAIL_FROM_EMAIL", os.getenv("MAIL_USERNAME", "")),
    "from_name": os.getenv("MAIL_FROM_NAME", "TimeConnect"),
    "use_tls": _flag("MAIL_USE_TLS", "1"),
}

NOTIFY_ATTEMPTS = int(os.getenv("NOTIFY_ATTEMPTS", str(constants.DEFAULT_NOTIFY_ATTEMPTS)))
NOTIFY_BACKOFF_SECONDS = float(os.getenv("NOTIFY_BACKOFF_SECONDS", str(constants.DEFAULT_NOTIFY_BACKOFF_SECONDS)))
NOTIFY_WORKERS = int(os.getenv("NOTIFY_WORKERS", str(constants.DEFAULT_NOTIFY_WORKERS)))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEBUG = False
AUTO_INIT_DB = _flag("AUTO_INIT_DB", "0")
