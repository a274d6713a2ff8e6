from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from fastapi import HTTPException

from photogram.core.security import SessionClaims
from photogram.services.user_service import UserService

NOW = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)


def _build_service() -> UserService:
    service = UserService.__new__(UserService)
    service.db = MagicMock()
    service.repo = MagicMock()
    service.interactions = MagicMock()
    return service


def _user(name: str = "alice") -> SimpleNamespace:
    return SimpleNamespace(id=uuid4(), external_id=f"ext_{name}", name=name, created_at=NOW)


def _stats(user) -> SimpleNamespace:
    return SimpleNamespace(
        user_id=user.id,
        external_id=user.external_id,
        name=user.name,
        posts_count=4,
        followers_count=2,
        following_count=1,
    )


def test_own_profile_is_never_following() -> None:
    service = _build_service()
    alice = _user()
    service.repo.get_stats.return_value = _stats(alice)
    service.repo.get_by_id.return_value = alice

    result = service.get_profile(viewer=alice, user_id=alice.id)

    assert result.is_own_profile is True
    assert result.is_following is False
    assert result.user.posts_count == 4
    assert result.user.created_at == NOW
    service.interactions.is_following.assert_not_called()


def test_profile_reports_following_for_other_viewer() -> None:
    service = _build_service()
    alice, viewer = _user("alice"), _user("viewer")
    service.repo.get_stats.return_value = _stats(alice)
    service.repo.get_by_id.return_value = alice
    service.interactions.is_following.return_value = True

    result = service.get_profile(viewer=viewer, user_id=alice.id)

    assert result.is_own_profile is False
    assert result.is_following is True
    service.interactions.is_following.assert_called_once_with(follower_id=viewer.id, following_id=alice.id)


def test_anonymous_profile_view() -> None:
    service = _build_service()
    alice = _user()
    service.repo.get_stats.return_value = _stats(alice)
    service.repo.get_by_id.return_value = alice

    result = service.get_profile(viewer=None, user_id=alice.id)

    assert (result.is_own_profile, result.is_following) == (False, False)


def test_missing_profile_is_404() -> None:
    service = _build_service()
    service.repo.get_stats.return_value = None

    with pytest.raises(HTTPException) as exc:
        service.get_profile(viewer=None, user_id=uuid4())

    assert exc.value.status_code == 404


def test_follow_lists_are_owner_only() -> None:
    service = _build_service()

    with pytest.raises(HTTPException) as followers:
        service.list_followers(viewer=_user(), user_id=uuid4())
    with pytest.raises(HTTPException) as following:
        service.list_following(viewer=_user(), user_id=uuid4())

    assert followers.value.status_code == 403
    assert following.value.status_code == 403
    service.repo.list_followers.assert_not_called()


def test_list_followers_returns_users_and_total() -> None:
    service = _build_service()
    alice = _user()
    service.repo.list_followers.return_value = [_user("bob"), _user("carol")]

    result = service.list_followers(viewer=alice, user_id=alice.id)

    assert [user.name for user in result.users] == ["bob", "carol"]
    assert result.total == 2


def test_sync_user_falls_back_to_default_name() -> None:
    service = _build_service()
    synced = _user("Unknown")
    service.repo.upsert_from_identity.return_value = synced

    result = service.sync_user(claims=SessionClaims(subject="user_2abc"))

    service.repo.upsert_from_identity.assert_called_once_with(external_id="user_2abc", name="Unknown")
    service.db.commit.assert_called_once()
    assert result.user.id == synced.id
