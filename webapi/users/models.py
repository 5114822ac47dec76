"""
User domain models.

Pure data held by the repository; nothing here knows about HTTP.
"""
import math
import uuid
from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass
class UserEntity:
    """User record. ``id`` is assigned once, by the repository."""
    id: Optional[uuid.UUID] = None
    login: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


@dataclass(frozen=True)
class Page(Generic[T]):
    """A single page of items plus pagination metadata."""

    items: List[T] = field(default_factory=list)
    current_page: int = 1
    page_size: int = 10
    total_count: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
