"""
Pagination types for list queries.

Example:
    pagination = Pagination(offset=20, limit=10)
    items, total = repository.find_page(series_filter, pagination)
    return PaginatedResult(items=items, total=total, pagination=pagination)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from studyseries.domain.common.exceptions import ValidationError

T = TypeVar("T")

MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class Pagination:
    """
    Offset/limit window over a list query.

    Attributes:
        offset: Number of items to skip
        limit: Maximum number of items to return
    """

    offset: int = 0
    limit: int = 20
    max_limit: int = MAX_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValidationError("Offset cannot be negative")
        if self.limit < 1:
            raise ValidationError("Limit must be at least 1")
        if self.limit > self.max_limit:
            raise ValidationError(f"Limit cannot exceed {self.max_limit}")


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    """Paginated result containing items and metadata."""

    items: list[T]
    total: int
    pagination: Pagination
