"""
Paginated fetch — drains a page-numbered list endpoint.

Single-call operations return ApiResult and never raise. Draining is the
exception: a partial snapshot is worse than none (a tree built from half
the groups is silently wrong), so the first failed page raises ApiError
and everything fetched so far is discarded.
"""

from typing import Callable, TypeVar

from models import ApiError, ApiFailure, ApiResult

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 100


def fetch_all(
    list_page: Callable[[int, int], ApiResult[list[T]]],
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[T]:
    """
    Fetch every page and concatenate the items in page order.

    Args:
        list_page: Callable(page, limit) returning one page of items
        page_size: Items requested per page

    Returns:
        All items.

    Raises:
        ApiError: On the first failed page.
    """
    items: list[T] = []
    page = 1

    while True:
        result = list_page(page, page_size)
        if isinstance(result, ApiFailure):
            raise ApiError.from_failure(result)

        batch = list(result.data or [])
        items.extend(batch)

        pagination = result.meta.pagination if result.meta else None
        if pagination is not None:
            has_more = page < pagination.total_pages
        else:
            # No metadata: a full page means there may be more
            has_more = len(batch) == page_size

        if not has_more or not batch:
            return items
        page += 1
