from math import ceil
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# Required text that may not be empty once surrounding whitespace is removed
NonBlank = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class CamelModel(BaseModel):
    """Base schema: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(CamelModel):
    """Plain success/failure acknowledgement."""

    success: bool
    message: str


class Page(CamelModel, Generic[T]):
    """One page of a larger result set."""

    items: list[T]
    current_page: int
    page_size: int
    total_items: int
    total_pages: int

    @classmethod
    def build(cls, items: list, total: int, page: int, size: int) -> "Page[T]":
        return cls(
            items=items,
            current_page=page,
            page_size=size,
            total_items=total,
            total_pages=ceil(total / size) if size else 0,
        )
