"""Authorization predicates.

Two tenancy rules live side by side: the directory (departments and
employees) is shared by every authenticated manager, while profiles and
uploaded files belong to exactly one user.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.exceptions import AuthenticationError, AuthorizationError


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, as resolved from a verified token."""

    user_id: str


def authorize_directory(identity: Optional[Identity]) -> Identity:
    if identity is None:
        raise AuthenticationError("Missing token")
    return identity


def authorize_personal(identity: Optional[Identity], owner_id: str) -> Identity:
    if identity is None:
        raise AuthenticationError("Missing token")
    if identity.user_id != owner_id:
        raise AuthorizationError("You can only access your own resources")
    return identity
