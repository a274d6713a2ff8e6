import asyncio
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError

from photogram.api.deps import get_current_user, get_optional_user
from photogram.core.config import settings
from photogram.core.security import SessionClaims
from photogram.db.session import get_db
from photogram.main import app
from photogram.schemas.post import CreatePostResponse, Pagination, PostListResponse, PostPublic
from photogram.schemas.social import ToggleResponse
from photogram.schemas.user import SyncUserResponse, UserPublic
from photogram.services.feed_service import FeedService
from photogram.services.post_service import PostService
from photogram.services.social_service import SocialService
from photogram.services.user_service import UserService

NOW = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)


def _user() -> SimpleNamespace:
    return SimpleNamespace(id=uuid4(), external_id="user_1", name="alice", created_at=NOW)


@pytest.fixture
def client():
    app.dependency_overrides[get_db] = lambda: MagicMock()
    app.dependency_overrides[get_optional_user] = lambda: None
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def signed_in(client):
    user = _user()
    app.dependency_overrides[get_current_user] = lambda: user
    return user


def test_health(client) -> None:
    res = client.get("/health")

    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_like_requires_login(client) -> None:
    res = client.post("/api/likes", json={"post_id": str(uuid4())})

    assert res.status_code == 401
    assert res.json()["detail"] == "Login required"


def test_malformed_body_is_400(client, signed_in) -> None:
    res = client.post("/api/likes", json={"post_id": "not-a-uuid"})

    assert res.status_code == 400
    assert res.json()["detail"] == "Invalid request"


def test_unlike_without_post_id_is_400(client, signed_in) -> None:
    res = client.request("DELETE", "/api/likes", json={})

    assert res.status_code == 400
    assert res.json()["detail"] == "post_id is required"


def test_follow_status_reflects_whether_row_was_created(client, signed_in, monkeypatch) -> None:
    outcomes = iter([True, False])

    def fake_follow(self, *, user, following_id):
        changed = next(outcomes)
        return ToggleResponse(message="ok", active=True, changed=changed)

    monkeypatch.setattr(SocialService, "follow_user", fake_follow)
    target = str(uuid4())

    first = client.post("/api/follows", json={"following_id": target})
    second = client.post("/api/follows", json={"following_id": target})

    assert first.status_code == 201
    assert second.status_code == 200
    assert second.json() == {"success": True, "message": "ok", "active": True, "changed": False}


def test_feed_pagination_uses_camel_case_has_more(client, monkeypatch) -> None:
    seen = {}

    def fake_list_feed(self, *, viewer, user_id, page, limit):
        seen.update(viewer=viewer, user_id=user_id, page=page, limit=limit)
        return PostListResponse(posts=[], pagination=Pagination(page=2, limit=5, total=0, has_more=False))

    monkeypatch.setattr(FeedService, "list_feed", fake_list_feed)
    author = uuid4()

    res = client.get("/api/posts", params={"page": 2, "limit": 5, "userId": str(author)})

    assert res.status_code == 200
    assert res.json() == {"posts": [], "pagination": {"page": 2, "limit": 5, "total": 0, "hasMore": False}}
    assert seen == {"viewer": None, "user_id": author, "page": 2, "limit": 5}


def test_blank_search_returns_empty_results(client) -> None:
    res = client.get("/api/search", params={"q": "   "})

    assert res.status_code == 200
    assert res.json() == {
        "results": {"users": [], "total": 0, "posts": [], "posts_total": 0},
        "query": "",
        "type": "users",
    }


def test_unknown_search_type_is_400(client) -> None:
    res = client.get("/api/search", params={"q": "a", "type": "tags"})

    assert res.status_code == 400


def test_database_error_maps_to_500(client, monkeypatch) -> None:
    def broken(self, **kwargs):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(FeedService, "list_feed", broken)

    res = client.get("/api/posts")

    assert res.status_code == 500
    assert res.json()["detail"] == "Database error"


def test_unexpected_error_maps_to_500(client, monkeypatch) -> None:
    def broken(self, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(FeedService, "list_feed", broken)

    res = client.get("/api/posts")

    assert res.status_code == 500
    assert res.json()["detail"] == "Internal server error"


def test_sync_reads_session_cookie(client, monkeypatch) -> None:
    user = _user()
    seen = {}

    def fake_decode(token):
        seen["token"] = token
        return SessionClaims(subject="user_1", name="alice")

    def fake_sync(self, *, claims):
        seen["claims"] = claims
        return SyncUserResponse(user=UserPublic.model_validate(user))

    monkeypatch.setattr("photogram.api.deps.decode_session_token", fake_decode)
    monkeypatch.setattr(UserService, "sync_user", fake_sync)

    res = client.post("/api/users/sync", headers={"Cookie": "__session=cookie-token"})

    assert res.status_code == 200
    assert res.json()["user"]["external_id"] == "user_1"
    assert seen["token"] == "cookie-token"
    assert seen["claims"].subject == "user_1"


def test_create_post_runs_off_the_event_loop_and_reads_bounded(client, signed_in, monkeypatch) -> None:
    seen = {}

    def fake_create(self, *, user, content, content_type, caption):
        try:
            asyncio.get_running_loop()
            seen["on_loop"] = True
        except RuntimeError:
            seen["on_loop"] = False
        seen["size"] = len(content)
        seen["content_type"] = content_type
        return CreatePostResponse(
            post=PostPublic(
                id=uuid4(),
                user_id=user.id,
                image_url="https://cdn/p.png",
                caption=caption,
                created_at=NOW,
                updated_at=NOW,
            ),
            message="Post created successfully",
        )

    monkeypatch.setattr("photogram.services.post_service.get_redis", lambda: MagicMock())
    monkeypatch.setattr("photogram.services.post_service.get_storage", lambda: MagicMock())
    monkeypatch.setattr(PostService, "create_post", fake_create)
    monkeypatch.setattr(settings, "max_upload_bytes", 10)

    res = client.post(
        "/api/posts",
        files={"image": ("big.png", b"x" * 100, "image/png")},
        data={"caption": "hi"},
    )

    assert res.status_code == 201
    assert seen == {"on_loop": False, "size": 11, "content_type": "image/png"}
