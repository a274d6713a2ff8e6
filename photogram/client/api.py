from __future__ import annotations

from typing import Any
from uuid import UUID

import httpx


class ApiError(Exception):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class PhotogramClient:
    """Async client for the HTTP API, used by the interactive helpers in this package."""

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.transport = transport

    async def list_posts(
        self,
        *,
        page: int = 1,
        limit: int | None = None,
        user_id: UUID | str | None = None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"page": page}
        if limit is not None:
            params["limit"] = limit
        if user_id is not None:
            params["userId"] = str(user_id)
        return await self._request("GET", "/api/posts", params=params)

    async def list_bookmarks(self, *, page: int = 1, limit: int | None = None) -> dict[str, Any]:
        params: dict[str, Any] = {"page": page}
        if limit is not None:
            params["limit"] = limit
        return await self._request("GET", "/api/bookmarks", params=params)

    async def like_post(self, post_id: UUID | str) -> dict[str, Any]:
        return await self._request("POST", "/api/likes", json={"post_id": str(post_id)})

    async def unlike_post(self, post_id: UUID | str) -> dict[str, Any]:
        return await self._request("DELETE", "/api/likes", json={"post_id": str(post_id)})

    async def bookmark_post(self, post_id: UUID | str) -> dict[str, Any]:
        return await self._request("POST", "/api/bookmarks", json={"post_id": str(post_id)})

    async def unbookmark_post(self, post_id: UUID | str) -> dict[str, Any]:
        return await self._request("DELETE", "/api/bookmarks", json={"post_id": str(post_id)})

    async def follow_user(self, user_id: UUID | str) -> dict[str, Any]:
        return await self._request("POST", "/api/follows", json={"following_id": str(user_id)})

    async def unfollow_user(self, user_id: UUID | str) -> dict[str, Any]:
        return await self._request("DELETE", "/api/follows", json={"following_id": str(user_id)})

    async def search(
        self,
        query: str,
        *,
        search_type: str = "users",
        limit: int | None = None,
        offset: int | None = None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"q": query, "type": search_type}
        if limit is not None:
            params["limit"] = limit
        if offset is not None:
            params["offset"] = offset
        return await self._request("GET", "/api/search", params=params)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        timeout = httpx.Timeout(self.timeout, connect=5.0)
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=timeout,
                transport=self.transport,
            ) as client:
                res = await client.request(method, path, params=params, json=json)
        except httpx.HTTPError as exc:
            raise ApiError(f"{method} {path} failed: {exc}") from exc

        if res.status_code >= 400:
            raise ApiError(self._error_message(res), status_code=res.status_code)
        try:
            return res.json()
        except ValueError as exc:
            raise ApiError(f"{method} {path} returned a non-JSON body", status_code=res.status_code) from exc

    @staticmethod
    def _error_message(res: httpx.Response) -> str:
        try:
            payload = res.json()
        except ValueError:
            return res.text[:200] or f"request failed with status {res.status_code}"
        if isinstance(payload, dict) and payload.get("detail"):
            return str(payload["detail"])
        return f"request failed with status {res.status_code}"
