from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import g, request

from ..core.exceptions import AuthenticationError
from .policy import Identity
from .tokens import TokenService


def bearer_token(header: Optional[str]) -> str:
    if not header:
        raise AuthenticationError("Missing token")
    scheme, _, token = header.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Missing or invalid token")
    return token.strip()


def token_required(tokens: TokenService):
    """Build a view decorator that verifies the bearer token.

    The resolved caller is stored as ``g.identity`` for the view.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = bearer_token(request.headers.get("Authorization"))
            g.identity = Identity(user_id=tokens.verify(token))
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_identity() -> Optional[Identity]:
    return g.get("identity")
