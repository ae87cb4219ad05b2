from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

from ..core.constants import DEFAULT_PAGE_SIZE, MAX_OFFSET, MAX_PAGE_SIZE
from .validators import PayloadValidator

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0


@dataclass(frozen=True)
class Page(Generic[T]):
    items: Sequence[T]
    limit: int
    offset: int


def read_page_request(
    v: PayloadValidator,
    *,
    default_size: int = DEFAULT_PAGE_SIZE,
    max_size: int = MAX_PAGE_SIZE,
) -> PageRequest:
    """Read ``limit``/``offset`` query params.

    Oversized limits are clamped to ``max_size`` rather than rejected; a
    limit below 1 falls back to the default and the offset is kept within
    0..MAX_OFFSET, so a page past the end is simply empty.
    """
    limit = v.integer("limit", default=default_size)
    offset = v.integer("offset", default=0)
    if limit < 1:
        limit = default_size
    limit = min(limit, max_size)
    return PageRequest(limit=limit, offset=min(max(offset, 0), MAX_OFFSET))
