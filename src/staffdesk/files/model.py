from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class StoredFile:
    """An uploaded object. Immutable once recorded."""

    file_id: str
    user_id: str
    uri: str
    content_type: str
    size_bytes: int
    created_at: datetime
