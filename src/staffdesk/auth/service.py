from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import utcnow
from ..common.validators import PayloadValidator
from ..core.constants import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from ..core.enums import AuthAction
from ..core.exceptions import AuthenticationError, NotFoundError
from ..users.repository import UserRepository
from .tokens import TokenService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    email: str
    token: str
    created: bool


class AuthService:
    """Use case: register a manager account or log in to an existing one."""

    def __init__(
        self,
        users: UserRepository,
        tokens: TokenService,
        *,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._users = users
        self._tokens = tokens
        self._clock = clock

    def authenticate(self, payload: Optional[Mapping[str, Any]]) -> AuthResult:
        v = PayloadValidator(payload)
        email = v.email("email")
        password = v.string("password", min_len=PASSWORD_MIN_LEN, max_len=PASSWORD_MAX_LEN)
        action = v.choice("action", AuthAction)
        v.done()

        if action == AuthAction.CREATE:
            return self.register(email, password)
        return self.login(email, password)

    def register(self, email: str, password: str) -> AuthResult:
        user = self._users.create_user(
            user_id=str(uuid.uuid4()),
            email=email,
            password_hash=generate_password_hash(password),
            now=self._clock(),
        )
        logger.info("Registered user %s", user.user_id)
        return AuthResult(email=user.email, token=self._tokens.issue(user.user_id), created=True)

    def login(self, email: str, password: str) -> AuthResult:
        user = self._users.get_by_email(email)
        if not user:
            raise NotFoundError("User not found")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # unknown hash method stored in the row
            ok = False

        if not ok:
            raise AuthenticationError("Invalid password")
        return AuthResult(email=user.email, token=self._tokens.issue(user.user_id), created=False)
