import logging
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from photogram.models.user import User
from photogram.repositories.interaction_repo import InteractionRepository
from photogram.repositories.post_repo import PostRepository
from photogram.repositories.user_repo import UserRepository
from photogram.schemas.social import ToggleResponse

logger = logging.getLogger(__name__)


class SocialService:
    """Likes, bookmarks and follows.

    Every create is an idempotent upsert and every delete is unconditional on
    the (actor, target) pair, so repeating a call is always a success and the
    response reports the confirmed state rather than a conflict.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.interactions = InteractionRepository(db)
        self.post_repo = PostRepository(db)
        self.user_repo = UserRepository(db)

    def like_post(self, *, user: User, post_id: UUID | None) -> ToggleResponse:
        target = self._require_post(post_id)
        changed = self.interactions.add_like(post_id=target, user_id=user.id)
        self.db.commit()
        return ToggleResponse(message="Post liked" if changed else "Post already liked", active=True, changed=changed)

    def unlike_post(self, *, user: User, post_id: UUID | None) -> ToggleResponse:
        target = self._require_post_id(post_id)
        changed = self.interactions.remove_like(post_id=target, user_id=user.id)
        self.db.commit()
        return ToggleResponse(message="Post unliked", active=False, changed=changed)

    def bookmark_post(self, *, user: User, post_id: UUID | None) -> ToggleResponse:
        target = self._require_post(post_id)
        changed = self.interactions.add_bookmark(post_id=target, user_id=user.id)
        self.db.commit()
        return ToggleResponse(
            message="Post bookmarked" if changed else "Post already bookmarked",
            active=True,
            changed=changed,
        )

    def unbookmark_post(self, *, user: User, post_id: UUID | None) -> ToggleResponse:
        target = self._require_post_id(post_id)
        changed = self.interactions.remove_bookmark(post_id=target, user_id=user.id)
        self.db.commit()
        return ToggleResponse(message="Bookmark removed", active=False, changed=changed)

    def follow_user(self, *, user: User, following_id: UUID | None) -> ToggleResponse:
        if following_id is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="following_id is required")
        if following_id == user.id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot follow yourself")
        if not self.user_repo.get_by_id(following_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User to follow not found")

        changed = self.interactions.add_follow(follower_id=user.id, following_id=following_id)
        self.db.commit()
        if changed:
            logger.info("user followed", extra={"follower_id": str(user.id), "following_id": str(following_id)})
        return ToggleResponse(
            message="Successfully followed user" if changed else "Already following user",
            active=True,
            changed=changed,
        )

    def unfollow_user(self, *, user: User, following_id: UUID | None) -> ToggleResponse:
        if following_id is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="following_id is required")

        changed = self.interactions.remove_follow(follower_id=user.id, following_id=following_id)
        self.db.commit()
        return ToggleResponse(message="Successfully unfollowed user", active=False, changed=changed)

    @staticmethod
    def _require_post_id(post_id: UUID | None) -> UUID:
        if post_id is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="post_id is required")
        return post_id

    def _require_post(self, post_id: UUID | None) -> UUID:
        target = self._require_post_id(post_id)
        if not self.post_repo.exists(target):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
        return target
