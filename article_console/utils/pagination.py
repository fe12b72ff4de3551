"""Pagination arithmetic shared by the listing views."""

import math
from typing import List, Optional


def compute_total_pages(total: Optional[int], limit: int, last_page: Optional[int] = None) -> int:
    """Work out how many pages a listing has.

    The backend sometimes reports ``last_page`` and sometimes only a total
    count; prefer the former.

    Example:
        >>> compute_total_pages(25, 10)
        3
        >>> compute_total_pages(None, 10, last_page=4)
        4
    """
    if last_page:
        return max(int(last_page), 1)
    if not total or limit <= 0:
        return 1
    return max(math.ceil(int(total) / limit), 1)


def clamp_page(page: int, total_pages: int) -> int:
    """Keep a page number inside [1, total_pages]."""
    return min(max(page, 1), max(total_pages, 1))


def page_numbers(total_pages: int) -> List[int]:
    """All page numbers for the pager, 1-indexed."""
    return list(range(1, max(total_pages, 1) + 1))


def row_number(page: int, limit: int, index: int) -> int:
    """Absolute 1-based row number of the index-th item on a page."""
    return (page - 1) * limit + index + 1


def page_after_delete(page: int, items_on_page: int) -> int:
    """Page to show after deleting one item from the current page.

    Deleting the only row of a page beyond the first steps back one page,
    otherwise the page stays put.
    """
    if items_on_page == 1 and page > 1:
        return page - 1
    return page
