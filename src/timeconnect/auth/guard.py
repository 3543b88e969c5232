from __future__ import annotations

from functools import wraps

from flask import current_app, g, request

from ..core.exceptions import AuthenticationError


def bearer_token() -> str:
    auth = request.headers.get("Authorization", "")
    scheme, _, token = auth.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Authentication required")
    return token.strip()


def jwt_required(view):
    """Verify the bearer token and load the acting employee into `g.employee`."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        container = current_app.extensions["timeconnect"]
        employee_id = container.tokens.verify(bearer_token())
        g.employee = container.auth_service.validate_employee(employee_id)
        return view(*args, **kwargs)

    return wrapper
