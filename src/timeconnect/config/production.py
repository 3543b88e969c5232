import os

from .base import *  # noqa: F401,F403


def _required(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise RuntimeError(f"{name} must be set in production")
    return value


SECRET_KEY = _required("SECRET_KEY")
JWT_SECRET = _required("JWT_SECRET")

DEBUG = False
