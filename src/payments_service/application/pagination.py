from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from payments_service.domain.exceptions import InvalidPaginationError

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


@dataclass(frozen=True, slots=True)
class Pagination:
    """Page request: 1-indexed page number and maximum page size."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        for name in ("page", "limit"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidPaginationError(f"{name} must be an integer, got {value!r}")
            if value < 1:
                raise InvalidPaginationError(f"{name} must be at least 1, got {value}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """One page of results.

    total counts every matching record regardless of page and limit. A page
    past the end has no items; it is not an error.
    """

    items: Sequence[T]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit)

    @property
    def has_next(self) -> bool:
        return self.page < self.pages
