from __future__ import annotations

from dataclasses import dataclass

from ..common.validators import require_email, require_json_object, require_min_length, require_non_empty
from ..employees.dto import MIN_PASSWORD_LENGTH


@dataclass(frozen=True)
class LoginRequest:
    email: str
    password: str

    @classmethod
    def from_json(cls, payload) -> "LoginRequest":
        payload = require_json_object(payload)
        return cls(
            email=require_email(payload.get("email")),
            password=require_non_empty(payload.get("password"), "password"),
        )


@dataclass(frozen=True)
class ForgotPasswordRequest:
    email: str

    @classmethod
    def from_json(cls, payload) -> "ForgotPasswordRequest":
        payload = require_json_object(payload)
        return cls(email=require_email(payload.get("email")))


@dataclass(frozen=True)
class ResetPasswordRequest:
    token: str
    new_password: str

    @classmethod
    def from_json(cls, payload) -> "ResetPasswordRequest":
        payload = require_json_object(payload)
        return cls(
            token=require_non_empty(payload.get("token"), "token"),
            new_password=require_min_length(payload.get("newPassword"), "newPassword", MIN_PASSWORD_LENGTH),
        )
