import asyncio
import json

import httpx
import pytest

from photogram.client.api import ApiError, PhotogramClient
from photogram.client.feed import FeedPager


def _page(page: int, *, has_more: bool) -> dict:
    return {
        "posts": [{"post_id": f"p{page}"}],
        "pagination": {"page": page, "limit": 1, "total": 2, "hasMore": has_more},
    }


def test_pager_loads_until_exhausted() -> None:
    requested = []

    async def fetch_page(page):
        requested.append(page)
        return _page(page, has_more=page < 2)

    async def scenario():
        pager = FeedPager(fetch_page)
        results = [await pager.load_more() for _ in range(3)]
        return pager, results

    pager, results = asyncio.run(scenario())

    assert results == [True, True, False]
    assert requested == [1, 2]
    assert [post["post_id"] for post in pager.posts] == ["p1", "p2"]
    assert pager.has_more is False


def test_pager_ignores_load_while_in_flight() -> None:
    async def scenario():
        release = asyncio.Event()
        requested = []

        async def fetch_page(page):
            requested.append(page)
            await release.wait()
            return _page(page, has_more=True)

        pager = FeedPager(fetch_page)
        first = asyncio.create_task(pager.load_more())
        await asyncio.sleep(0)
        second = await pager.load_more()
        release.set()
        await first
        return requested, second

    requested, second = asyncio.run(scenario())

    assert requested == [1]
    assert second is False


def test_client_sends_bearer_token_and_body() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["auth"] = request.headers.get("authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"success": True, "message": "Post unliked", "active": False, "changed": True})

    client = PhotogramClient("https://photogram.test", token="tok", transport=httpx.MockTransport(handler))

    result = asyncio.run(client.unlike_post("post-1"))

    assert seen == {"method": "DELETE", "path": "/api/likes", "auth": "Bearer tok", "body": {"post_id": "post-1"}}
    assert result["active"] is False


def test_client_raises_api_error_with_detail() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"detail": "Post not found"})

    client = PhotogramClient("https://photogram.test", transport=httpx.MockTransport(handler))

    with pytest.raises(ApiError) as exc:
        asyncio.run(client.like_post("missing"))

    assert exc.value.status_code == 404
    assert exc.value.message == "Post not found"


def test_client_wraps_non_json_success_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>ok</html>")

    client = PhotogramClient("https://photogram.test", transport=httpx.MockTransport(handler))

    with pytest.raises(ApiError) as exc:
        asyncio.run(client.list_posts())

    assert exc.value.status_code == 200
