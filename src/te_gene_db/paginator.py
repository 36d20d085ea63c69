"""Fixed-size paging over search results."""

import math
from typing import List, Optional, Sequence

from .error_handler import InvalidInput
from .models import GeneRecord, Page

DEFAULT_PAGE_SIZE = 10


def total_pages(total_items: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """Number of pages needed for ``total_items``; never less than 1."""
    if page_size <= 0:
        raise InvalidInput(f"Page size must be positive, got {page_size}")
    return max(1, math.ceil(total_items / page_size))


def paginate(results: Sequence[GeneRecord], page_index: int,
             page_size: int = DEFAULT_PAGE_SIZE) -> Page:
    """
    Slice one page out of a result list.

    Page indexes are 1-based and are not clamped: callers only offer
    valid navigation targets, and an out-of-range index gives an empty page.

    Args:
        results: Ordered search results
        page_index: 1-based page number
        page_size: Items per page

    Returns:
        The requested Page
    """
    pages = total_pages(len(results), page_size)
    start = max(0, (page_index - 1) * page_size)
    end = max(0, page_index * page_size)
    return Page(
        items=tuple(results[start:end]),
        page_index=page_index,
        page_size=page_size,
        total_items=len(results),
        total_pages=pages,
    )


def page_window(current: int, total: int) -> List[Optional[int]]:
    """
    Page numbers to show in navigation controls.

    The first and last pages, the current page and its immediate
    neighbours are listed; each run of hidden pages in between is
    replaced by a single ``None`` (rendered as an ellipsis).

    >>> page_window(5, 9)
    [1, None, 4, 5, 6, None, 9]
    """
    window: List[Optional[int]] = []
    for page in range(1, total + 1):
        if page == 1 or page == total or abs(page - current) <= 1:
            window.append(page)
        elif window and window[-1] is not None:
            window.append(None)
    return window
