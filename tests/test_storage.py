import json

import httpx
import pytest

from photogram.infra.storage import ObjectStorage, StorageError


def _storage(handler) -> ObjectStorage:
    return ObjectStorage(
        base_url="https://project.example.com/",
        bucket="uploads",
        service_key="service-key",
        timeout=5.0,
        transport=httpx.MockTransport(handler),
    )


def test_upload_posts_object_and_returns_public_url() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["headers"] = request.headers
        seen["body"] = request.content
        return httpx.Response(200, json={"Key": "uploads/user_1/1-a.png"})

    url = _storage(handler).upload(path="user_1/1-a.png", content=b"img", content_type="image/png")

    assert seen["method"] == "POST"
    assert seen["path"] == "/storage/v1/object/uploads/user_1/1-a.png"
    assert seen["headers"]["authorization"] == "Bearer service-key"
    assert seen["headers"]["x-upsert"] == "false"
    assert seen["headers"]["content-type"] == "image/png"
    assert seen["body"] == b"img"
    assert url == "https://project.example.com/storage/v1/object/public/uploads/user_1/1-a.png"


def test_upload_error_carries_status_and_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(409, json={"message": "The resource already exists"})

    with pytest.raises(StorageError) as exc:
        _storage(handler).upload(path="a.png", content=b"img", content_type="image/png")

    assert exc.value.status_code == 409
    assert "already exists" in exc.value.message


def test_transport_failure_is_storage_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(StorageError) as exc:
        _storage(handler).upload(path="a.png", content=b"img", content_type="image/png")

    assert exc.value.status_code is None


def test_remove_sends_prefixes() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=[])

    _storage(handler).remove(["user_1/1-a.png"])

    assert seen == {
        "method": "DELETE",
        "path": "/storage/v1/object/uploads",
        "body": {"prefixes": ["user_1/1-a.png"]},
    }


def test_remove_nothing_skips_request() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    _storage(handler).remove([])


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://project.example.com/storage/v1/object/public/uploads/user_1/1-a.png", "user_1/1-a.png"),
        ("https://project.example.com/storage/v1/object/public/uploads/user_1/1-a.png?t=1", "user_1/1-a.png"),
        ("https://other.example.com/images/a.png", None),
        (None, None),
    ],
)
def test_path_from_public_url(url, expected) -> None:
    storage = _storage(lambda request: httpx.Response(200))

    assert storage.path_from_public_url(url) == expected
