from typing import Generic, List, TypeVar

from pydantic import computed_field

from app.models.base import CamelModel

T = TypeVar("T")


class Page(CamelModel, Generic[T]):
    """One page of a listing; ``page`` is zero-based."""

    content: List[T]
    page: int
    size: int
    total_elements: int

    @computed_field(alias="totalPages")
    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return -(-self.total_elements // self.size)

    @classmethod
    def empty(cls, page: int, size: int) -> "Page[T]":
        return cls(content=[], page=page, size=size, total_elements=0)
