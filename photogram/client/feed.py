from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any


class FeedPager:
    def __init__(self, fetch_page: Callable[[int], Awaitable[dict[str, Any]]]) -> None:
        self._fetch_page = fetch_page
        self.posts: list[dict[str, Any]] = []
        self.page = 0
        self.total = 0
        self.has_more = True
        self.loading = False

    async def load_more(self) -> bool:
        """Append the next page. Ignored while a load is in flight or once the feed is exhausted."""
        if self.loading or not self.has_more:
            return False

        self.loading = True
        try:
            payload = await self._fetch_page(self.page + 1)
        finally:
            self.loading = False

        pagination = payload.get("pagination") or {}
        self.posts.extend(payload.get("posts") or [])
        self.page = int(pagination.get("page", self.page + 1))
        self.total = int(pagination.get("total", 0))
        self.has_more = bool(pagination.get("hasMore", False))
        return True

    def reset(self) -> None:
        self.posts = []
        self.page = 0
        self.total = 0
        self.has_more = True
