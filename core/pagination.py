# =============================================================================
# core/pagination.py  -  Page-by-page walking of Apollo search results
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   PageCursor repeatedly calls one search function with page = 1, 2, 3 ...
#   and hands back each raw response, stopping when Apollo says there are no
#   more pages or when the caller's page cap is reached.
#
# THE STATE MACHINE:
#   current_page  the next page number to request (starts at 1)
#   max_pages     the caller's cap
#   done          set once no further page will be fetched
#
#   next_page():
#     done?                        -> return None
#     fetch current_page           (a failure ends the cursor and propagates)
#     current_page += 1
#     reported page >= total_pages  (missing or null totals count as 0)
#       or current_page > max_pages  -> done = True
#     return the response
#
# Pages are fetched strictly one at a time.  Dropping a cursor half-way is
# fine: it holds nothing between calls.
# =============================================================================

import logging
from typing import Any, Awaitable, Callable, Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_MAX_PAGES = 10
PAGE_SIZE = 100

SearchFunction = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]


class PageCursor:
    """Lazy, finite sequence of search result pages.

    Usage:
        cursor = PageCursor(client.search_people, {"person_titles": ["CTO"]})
        page = await cursor.next_page()
        while page is not None:
            ...
            page = await cursor.next_page()

    or simply ``async for page in cursor``.
    """

    def __init__(
        self,
        fetch: SearchFunction,
        params: Optional[Mapping[str, Any]] = None,
        max_pages: int = DEFAULT_MAX_PAGES,
        page_size: int = PAGE_SIZE,
    ):
        self._fetch = fetch
        self._params = dict(params or {})
        self._page_size = page_size
        self.max_pages = max_pages
        self.current_page = 1
        self.done = max_pages < 1

    async def next_page(self) -> Optional[dict[str, Any]]:
        """Fetch the next page, or return None once the cursor is exhausted."""
        if self.done:
            return None

        page = self.current_page
        request = {**self._params, "page": page, "per_page": self._page_size}
        try:
            response = await self._fetch(request)
        except Exception:
            self.done = True
            raise

        pagination = (response or {}).get("pagination") or {}
        reported_page = pagination.get("page") or page
        total_pages = pagination.get("total_pages") or 0

        self.current_page = page + 1
        if reported_page >= total_pages or self.current_page > self.max_pages:
            self.done = True

        logger.debug(
            "Fetched page %s of %s (cap %s, done=%s)",
            reported_page, total_pages, self.max_pages, self.done,
        )
        return response

    def __aiter__(self) -> "PageCursor":
        return self

    async def __anext__(self) -> dict[str, Any]:
        response = await self.next_page()
        if response is None:
            raise StopAsyncIteration
        return response
