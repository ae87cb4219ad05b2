from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

from jose import ExpiredSignatureError, JWTError, jwt

from ..core.constants import DEFAULT_TOKEN_TTL_DAYS
from ..core.exceptions import AuthenticationError


def _now() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issues and verifies HS256 session tokens whose ``sub`` is the user id."""

    def __init__(
        self,
        secret_key: str,
        *,
        ttl: timedelta = timedelta(days=DEFAULT_TOKEN_TTL_DAYS),
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _now,
    ):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self._secret_key = secret_key
        self._ttl = ttl
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, user_id: str) -> str:
        expire = self._clock() + self._ttl
        return jwt.encode({"sub": user_id, "exp": expire}, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> str:
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            raise AuthenticationError("Token expired")
        except JWTError:
            raise AuthenticationError("Invalid token")

        user_id = payload.get("sub")
        if not user_id or not isinstance(user_id, str):
            raise AuthenticationError("Invalid token")
        return user_id
