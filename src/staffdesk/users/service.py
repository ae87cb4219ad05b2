from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from ..auth.policy import Identity, authorize_personal
from ..common.datetime_utils import utcnow
from ..common.validators import PayloadValidator
from ..core.constants import NAME_MIN_LEN, PROFILE_TEXT_MAX_LEN
from ..core.exceptions import AuthenticationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

# payload key -> column
_PROFILE_FIELDS = {
    "name": "name",
    "userImageUri": "user_image_uri",
    "companyName": "company_name",
    "companyImageUri": "company_image_uri",
}


def parse_profile_patch(payload: Optional[Mapping[str, Any]]) -> dict[str, Optional[str]]:
    """Validate a PATCH /v1/user body into column changes.

    Keys sent as null clear the column; absent keys are left alone.
    """
    v = PayloadValidator(payload)
    v.forbid("email", "cannot be changed through profile update")
    changes: dict[str, Optional[str]] = {}

    for key in ("name", "companyName"):
        if v.has(key):
            if (payload or {}).get(key) is None:
                changes[_PROFILE_FIELDS[key]] = None
            else:
                changes[_PROFILE_FIELDS[key]] = v.string(key, min_len=NAME_MIN_LEN, max_len=PROFILE_TEXT_MAX_LEN)

    for key in ("userImageUri", "companyImageUri"):
        if v.has(key):
            changes[_PROFILE_FIELDS[key]] = v.uri(key)

    if not v.errors and not changes:
        v.fail("", "at least one profile field is required")
    v.done()
    return changes


class ProfileService:
    """Use case: a manager reads and edits their own profile."""

    def __init__(self, users: UserRepository, *, clock: Callable[[], datetime] = utcnow):
        self._users = users
        self._clock = clock

    def get_profile(self, *, identity: Optional[Identity], user_id: str) -> User:
        authorize_personal(identity, user_id)
        user = self._users.get_by_id(user_id)
        if not user:
            # token outlived its account
            raise AuthenticationError("User no longer exists")
        return user

    def update_profile(self, *, identity: Optional[Identity], user_id: str, payload: Optional[Mapping[str, Any]]) -> User:
        authorize_personal(identity, user_id)
        changes = parse_profile_patch(payload)
        if not self._users.update_profile(user_id, changes, now=self._clock()):
            raise AuthenticationError("User no longer exists")
        logger.info("Profile %s updated (%s)", user_id, ", ".join(sorted(changes)))
        return self.get_profile(identity=identity, user_id=user_id)
