from types import SimpleNamespace
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from fastapi import HTTPException

from photogram.services.social_service import SocialService


def _build_service() -> SocialService:
    service = SocialService.__new__(SocialService)
    service.db = MagicMock()
    service.interactions = MagicMock()
    service.post_repo = MagicMock()
    service.user_repo = MagicMock()
    service.post_repo.exists.return_value = True
    return service


def _user() -> SimpleNamespace:
    return SimpleNamespace(id=uuid4(), external_id="user_1", name="alice")


def test_like_requires_post_id() -> None:
    service = _build_service()

    with pytest.raises(HTTPException) as exc:
        service.like_post(user=_user(), post_id=None)

    assert exc.value.status_code == 400


def test_like_unknown_post_is_404() -> None:
    service = _build_service()
    service.post_repo.exists.return_value = False

    with pytest.raises(HTTPException) as exc:
        service.like_post(user=_user(), post_id=uuid4())

    assert exc.value.status_code == 404
    service.interactions.add_like.assert_not_called()


def test_like_twice_is_idempotent_success() -> None:
    service = _build_service()
    user, post_id = _user(), uuid4()
    service.interactions.add_like.side_effect = [True, False]

    first = service.like_post(user=user, post_id=post_id)
    second = service.like_post(user=user, post_id=post_id)

    assert (first.active, first.changed) == (True, True)
    assert (second.active, second.changed) == (True, False)
    assert second.success is True


def test_unlike_missing_relation_is_noop_success() -> None:
    service = _build_service()
    service.interactions.remove_like.return_value = False

    result = service.unlike_post(user=_user(), post_id=uuid4())

    assert result.success is True
    assert (result.active, result.changed) == (False, False)
    service.post_repo.exists.assert_not_called()
    service.db.commit.assert_called_once()


def test_bookmark_and_unbookmark() -> None:
    service = _build_service()
    user, post_id = _user(), uuid4()
    service.interactions.add_bookmark.return_value = True
    service.interactions.remove_bookmark.return_value = True

    added = service.bookmark_post(user=user, post_id=post_id)
    removed = service.unbookmark_post(user=user, post_id=post_id)

    assert (added.active, added.changed) == (True, True)
    assert (removed.active, removed.changed) == (False, True)
    service.interactions.add_bookmark.assert_called_once_with(post_id=post_id, user_id=user.id)


def test_follow_self_is_400() -> None:
    service = _build_service()
    user = _user()

    with pytest.raises(HTTPException) as exc:
        service.follow_user(user=user, following_id=user.id)

    assert exc.value.status_code == 400
    service.interactions.add_follow.assert_not_called()


def test_follow_unknown_user_is_404() -> None:
    service = _build_service()
    service.user_repo.get_by_id.return_value = None

    with pytest.raises(HTTPException) as exc:
        service.follow_user(user=_user(), following_id=uuid4())

    assert exc.value.status_code == 404


def test_follow_requires_target() -> None:
    service = _build_service()

    with pytest.raises(HTTPException) as exc:
        service.follow_user(user=_user(), following_id=None)

    assert exc.value.status_code == 400


def test_follow_existing_relation_reports_unchanged() -> None:
    service = _build_service()
    user, target = _user(), _user()
    service.user_repo.get_by_id.return_value = target
    service.interactions.add_follow.return_value = False

    result = service.follow_user(user=user, following_id=target.id)

    assert (result.active, result.changed) == (True, False)
    service.interactions.add_follow.assert_called_once_with(follower_id=user.id, following_id=target.id)


def test_unfollow_is_unconditional() -> None:
    service = _build_service()
    user, target_id = _user(), uuid4()
    service.interactions.remove_follow.return_value = False

    result = service.unfollow_user(user=user, following_id=target_id)

    assert (result.active, result.changed) == (False, False)
    service.user_repo.get_by_id.assert_not_called()
