from __future__ import annotations

from functools import lru_cache
import urllib.parse

import httpx

from photogram.core.config import settings


class StorageError(Exception):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ObjectStorage:
    """Client for the managed backend's storage REST API.

    Objects live under ``/storage/v1/object/{bucket}/{path}`` and are served
    publicly from ``/storage/v1/object/public/{bucket}/{path}``.
    """

    def __init__(
        self,
        *,
        base_url: str,
        bucket: str,
        service_key: str | None,
        timeout: float,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.bucket = bucket
        self.service_key = service_key
        self.timeout = timeout
        self.transport = transport

    def upload(self, *, path: str, content: bytes, content_type: str) -> str:
        headers = {"Content-Type": content_type, "x-upsert": "false"}
        try:
            with self._client() as client:
                res = client.post(self._object_path(path), content=content, headers=headers)
        except httpx.HTTPError as exc:
            raise StorageError(f"upload failed: {exc}") from exc
        if res.status_code >= 400:
            raise StorageError(
                f"upload failed with status {res.status_code}: {self._error_message(res)}",
                status_code=res.status_code,
            )
        return self.public_url(path)

    def remove(self, paths: list[str]) -> None:
        if not paths:
            return
        try:
            with self._client() as client:
                res = client.request(
                    "DELETE",
                    f"/storage/v1/object/{self.bucket}",
                    json={"prefixes": paths},
                )
        except httpx.HTTPError as exc:
            raise StorageError(f"remove failed: {exc}") from exc
        if res.status_code >= 400:
            raise StorageError(
                f"remove failed with status {res.status_code}: {self._error_message(res)}",
                status_code=res.status_code,
            )

    def public_url(self, path: str) -> str:
        quoted = urllib.parse.quote(path.lstrip("/"))
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{quoted}"

    def path_from_public_url(self, url: str | None) -> str | None:
        if not url:
            return None
        parts = url.split(f"/{self.bucket}/", 1)
        if len(parts) < 2 or not parts[1]:
            return None
        path = parts[1].split("?", 1)[0]
        return urllib.parse.unquote(path) or None

    def _object_path(self, path: str) -> str:
        return f"/storage/v1/object/{self.bucket}/{urllib.parse.quote(path.lstrip('/'))}"

    def _client(self) -> httpx.Client:
        headers = {}
        if self.service_key:
            headers["Authorization"] = f"Bearer {self.service_key}"
            headers["apikey"] = self.service_key
        return httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=httpx.Timeout(self.timeout, connect=5.0),
            transport=self.transport,
        )

    @staticmethod
    def _error_message(res: httpx.Response) -> str:
        try:
            payload = res.json()
        except ValueError:
            return res.text[:200]
        if isinstance(payload, dict):
            return str(payload.get("message") or payload.get("error") or payload)[:200]
        return str(payload)[:200]


@lru_cache(maxsize=1)
def get_storage() -> ObjectStorage:
    return ObjectStorage(
        base_url=settings.storage_url,
        bucket=settings.storage_bucket,
        service_key=settings.storage_service_key,
        timeout=settings.storage_timeout_seconds,
    )
