# SPDX-License-Identifier: MIT

import math
from typing import Generic, TypedDict, TypeVar

T = TypeVar("T")


class Page(TypedDict, Generic[T]):
    items: list[T]
    page: int
    page_size: int
    total_items: int
    total_pages: int


def paginate(items: list[T], page: int, page_size: int) -> Page[T]:
    """
    Slice one page out of `items`.

    Pages are numbered from 1. A page number outside 1..total_pages is
    clamped into that range, and an empty list still has one (empty) page.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")

    total_items = len(items)
    total_pages = max(1, math.ceil(total_items / page_size))
    page = min(max(page, 1), total_pages)

    start = (page - 1) * page_size
    return {
        "items": items[start : start + page_size],
        "page": page,
        "page_size": page_size,
        "total_items": total_items,
        "total_pages": total_pages,
    }
