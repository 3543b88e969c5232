from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable

import jwt

from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_JWT_EXPIRES_SECONDS
from ..core.exceptions import AuthenticationError
from ..employees.model import Employee


class TokenService:
    """Signed, time-limited bearer tokens (HS256) carrying the employee id and email.

    Verification is stateless: it only proves who the token was issued to; the
    caller is responsible for re-fetching the employee.
    """

    ALGORITHM = "HS256"

    def __init__(
        self,
        secret: str,
        *,
        expires_seconds: int = DEFAULT_JWT_EXPIRES_SECONDS,
        clock: Callable[[], datetime] = now_utc,
    ):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._expires = timedelta(seconds=int(expires_seconds))
        self._clock = clock

    def issue(self, employee: Employee) -> str:
        now = self._clock()
        payload = {
            "sub": employee.id,
            "email": employee.email,
            "iat": now,
            "exp": now + self._expires,
        }
        return jwt.encode(payload, self._secret, algorithm=self.ALGORITHM)

    def verify(self, token: str) -> str:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.ALGORITHM],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token expired") from None
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token") from None
        return str(payload["sub"])
