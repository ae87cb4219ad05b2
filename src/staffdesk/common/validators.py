from __future__ import annotations

import re
import uuid
from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar
from urllib.parse import urlparse

from ..core.constants import EMAIL_MAX_LEN, URI_MAX_LEN
from ..core.exceptions import FieldError, ValidationError

E = TypeVar("E", bound=Enum)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_ALNUM_RE = re.compile(r"^[A-Za-z0-9]+$")


class PayloadValidator:
    """Collects field errors over a JSON payload or query mapping.

    Each accessor returns the normalised value (or None) and records a
    FieldError instead of raising, so a single ``done()`` call reports
    every problem at once.
    """

    def __init__(self, payload: Optional[Mapping[str, Any]]):
        self._payload = payload if payload is not None else {}
        self.errors: list[FieldError] = []

    def has(self, field: str) -> bool:
        return field in self._payload

    def fail(self, field: str, message: str) -> None:
        self.errors.append(FieldError(field, message))

    def forbid(self, field: str, message: str = "cannot be changed") -> None:
        if self.has(field):
            self.fail(field, message)

    def string(
        self,
        field: str,
        *,
        required: bool = True,
        min_len: int = 1,
        max_len: Optional[int] = None,
        pattern: Optional[re.Pattern] = None,
        pattern_message: str = "has an invalid format",
    ) -> Optional[str]:
        value = self._payload.get(field)
        if value is None:
            if required:
                self.fail(field, "is required")
            return None
        if not isinstance(value, str):
            self.fail(field, "must be a string")
            return None
        value = value.strip()
        if not value:
            if required:
                self.fail(field, "must not be empty")
            return None
        if len(value) < min_len or (max_len is not None and len(value) > max_len):
            if max_len is None:
                self.fail(field, f"must be at least {min_len} characters")
            else:
                self.fail(field, f"must be between {min_len} and {max_len} characters")
            return None
        if pattern is not None and not pattern.match(value):
            self.fail(field, pattern_message)
            return None
        return value

    def alphanumeric(self, field: str, *, required: bool = True, min_len: int = 1, max_len: Optional[int] = None) -> Optional[str]:
        return self.string(
            field,
            required=required,
            min_len=min_len,
            max_len=max_len,
            pattern=_ALNUM_RE,
            pattern_message="must contain only letters and digits",
        )

    def email(self, field: str = "email", *, required: bool = True) -> Optional[str]:
        value = self.string(
            field,
            required=required,
            max_len=EMAIL_MAX_LEN,
            pattern=_EMAIL_RE,
            pattern_message="must be a valid email address",
        )
        return value.lower() if value else value

    def choice(self, field: str, enum_cls: Type[E], *, required: bool = True, default: Optional[E] = None) -> Optional[E]:
        value = self._payload.get(field)
        if value is None or value == "":
            if required:
                self.fail(field, "is required")
            return default
        try:
            return enum_cls(value)
        except ValueError:
            allowed = ", ".join(repr(m.value) for m in enum_cls)
            self.fail(field, f"must be one of {allowed}")
            return default

    def uuid(self, field: str, *, required: bool = True) -> Optional[str]:
        value = self.string(field, required=required)
        if value is None:
            return None
        try:
            return str(uuid.UUID(value))
        except ValueError:
            self.fail(field, "must be a valid UUID")
            return None

    def uri(self, field: str, *, required: bool = False) -> Optional[str]:
        value = self.string(field, required=required, max_len=URI_MAX_LEN)
        if value is None:
            return None
        parsed = urlparse(value)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            self.fail(field, "must be an absolute http(s) URL")
            return None
        return value

    def integer(self, field: str, *, default: int) -> int:
        value = self._payload.get(field)
        if value is None or value == "":
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            self.fail(field, "must be an integer")
            return default

    def done(self) -> None:
        if self.errors:
            raise ValidationError(self.errors)
