"""Paging — page request and page result passed between service and store.

Invariants:
    - page_number >= 0, page_size >= 1 (InvalidInputError otherwise)
    - offset fits a BIGINT, so any accepted request can be sent to the database
    - Page n of size s covers rows [n * s, n * s + s) in the requested order
"""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from app.core.domain_types import MAX_PLAYER_ID, PlayerOrder
from app.core.errors import InvalidInputError

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    page_number: int = 0
    page_size: int = 3
    order: PlayerOrder = PlayerOrder.ID

    def __post_init__(self):
        if self.page_number < 0:
            raise InvalidInputError("Page number must be >= 0", "pageNumber")
        if self.page_size < 1:
            raise InvalidInputError("Page size must be >= 1", "pageSize")
        if self.offset > MAX_PLAYER_ID:
            raise InvalidInputError("Page number out of range", "pageNumber")

    @property
    def offset(self) -> int:
        return self.page_number * self.page_size


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T] = field(default_factory=list)
    total: int = 0
    page_number: int = 0
    page_size: int = 3
