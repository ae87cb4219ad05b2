from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional, Protocol

from .model import User


class UserRepository(Protocol):
    """Credential store.

    Services depend on this interface, never on a concrete database.
    ``create_user`` raises ConflictError when the email is taken.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, *, user_id: str, email: str, password_hash: str, now: datetime) -> User:
        raise NotImplementedError

    def update_profile(self, user_id: str, changes: Mapping[str, Optional[str]], *, now: datetime) -> bool:
        raise NotImplementedError
