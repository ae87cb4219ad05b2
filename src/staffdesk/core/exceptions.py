from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    Carries every offending field, not just the first one found.
    """

    status_code = 400

    def __init__(self, errors: Sequence[FieldError] | str):
        if isinstance(errors, str):
            errors = [FieldError(field="", message=errors)]
        self.errors = list(errors)
        super().__init__("; ".join(e.message if not e.field else f"{e.field}: {e.message}" for e in self.errors))


class AuthenticationError(DomainError):
    """Raised when credentials or bearer tokens are missing or invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user acts on a resource it does not own."""

    status_code = 403


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    status_code = 404


class ConflictError(DomainError):
    """Raised when a write violates a uniqueness or referential constraint."""

    status_code = 409


class StorageError(DomainError):
    """Raised when the database or object storage is unavailable."""

    status_code = 503
