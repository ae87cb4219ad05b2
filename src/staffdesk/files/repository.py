from __future__ import annotations

from typing import Protocol, Sequence

from ..common.pagination import PageRequest
from .model import StoredFile


class FileRepository(Protocol):
    def create(self, stored: StoredFile) -> StoredFile:
        raise NotImplementedError

    def list_for_user(self, user_id: str, page: PageRequest) -> Sequence[StoredFile]:
        raise NotImplementedError
