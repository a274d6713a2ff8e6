from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
import logging
from typing import Any

logger = logging.getLogger(__name__)

DEBOUNCE_SECONDS = 0.3


def empty_results(search_type: str = "users") -> dict[str, Any]:
    return {
        "results": {"users": [], "total": 0, "posts": [], "posts_total": 0},
        "query": "",
        "type": search_type,
    }


class DebouncedSearch:
    """Search-as-you-type with a debounce timer and stale response guard.

    ``update`` is called on every keystroke. Only the newest request issued
    may write ``results``; older responses that arrive late are dropped.
    """

    def __init__(
        self,
        fetch: Callable[[str], Awaitable[dict[str, Any]]],
        *,
        delay: float = DEBOUNCE_SECONDS,
        search_type: str = "users",
        on_error: Callable[[Exception], None] | None = None,
    ) -> None:
        self._fetch = fetch
        self.delay = delay
        self.search_type = search_type
        self._on_error = on_error
        self.query = ""
        self.results: dict[str, Any] = empty_results(search_type)
        self.loading = False
        self._seq = 0
        self._timer: asyncio.Task | None = None
        self._requests: set[asyncio.Task] = set()

    def update(self, query: str) -> None:
        self.query = query
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        if not query.strip():
            # invalidate anything still in flight
            self._seq += 1
            self.results = empty_results(self.search_type)
            self.loading = False
            return

        self._timer = asyncio.create_task(self._debounce(query.strip()))

    async def wait(self) -> None:
        if self._timer is not None:
            try:
                await self._timer
            except asyncio.CancelledError:
                pass
        if self._requests:
            await asyncio.gather(*self._requests, return_exceptions=True)

    def close(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        for task in self._requests:
            task.cancel()

    async def _debounce(self, query: str) -> None:
        await asyncio.sleep(self.delay)
        self._timer = None
        self._seq += 1
        task = asyncio.create_task(self._run(query, self._seq))
        self._requests.add(task)
        task.add_done_callback(self._requests.discard)

    async def _run(self, query: str, seq: int) -> None:
        self.loading = True
        try:
            response = await self._fetch(query)
        except Exception as exc:
            if seq != self._seq:
                return
            self.loading = False
            logger.warning(
                "search request failed",
                extra={"query": query, "status_code": getattr(exc, "status_code", None)},
                exc_info=True,
            )
            if self._on_error is not None:
                self._on_error(exc)
            return

        if seq != self._seq:
            logger.debug("dropping stale search response", extra={"query": query, "seq": seq})
            return
        self.results = response
        self.loading = False
