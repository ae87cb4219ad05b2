from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class User:
    """Domain entity: a manager account.

    Plain data object; persistence lives in the repositories.
    """

    user_id: str
    email: str
    password_hash: str
    name: Optional[str]
    user_image_uri: Optional[str]
    company_name: Optional[str]
    company_image_uri: Optional[str]
    created_at: datetime
    updated_at: datetime


# columns a profile patch may touch; email is deliberately absent
PROFILE_COLUMNS = ("name", "user_image_uri", "company_name", "company_image_uri")
