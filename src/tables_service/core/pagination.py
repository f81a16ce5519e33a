"""Pagination descriptor and envelope shared by list endpoints."""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from tables_service.runtime.config.config_data import PaginationConfig

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page index and page size, already normalized."""

    page: int
    size: int

    @property
    def offset(self) -> int:
        return self.page * self.size


def create_page_request(
    page: int | None,
    size: int | None,
    config: PaginationConfig | None = None,
) -> PageRequest:
    """Normalize raw page/size inputs instead of rejecting them.

    A negative or missing page becomes the default page, a non-positive or
    missing size becomes the default size. Sizes above ``max_size`` are capped
    only when a cap is configured.
    """
    cfg = config or PaginationConfig()

    if page is None or page < 0:
        page = cfg.default_page
    if size is None or size < 1:
        size = cfg.default_size
    if cfg.max_size is not None:
        size = min(size, cfg.max_size)

    return PageRequest(page=page, size=size)


class Page(BaseModel, Generic[T]):
    """A slice of a listed resource together with total-count metadata."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    content: list[T] = Field(default_factory=list)
    page: int = Field(ge=0, description="Zero-based page index")
    size: int = Field(ge=1, description="Requested page size")
    total_elements: int = Field(ge=0)
    total_pages: int = Field(ge=0)

    @classmethod
    def of(cls, items: Sequence[T], request: PageRequest, total: int) -> "Page[T]":
        return cls(
            content=list(items),
            page=request.page,
            size=request.size,
            total_elements=total,
            total_pages=math.ceil(total / request.size) if total else 0,
        )
