import logging
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from photogram.core.security import SessionClaims
from photogram.models.user import User
from photogram.repositories.interaction_repo import InteractionRepository
from photogram.repositories.user_repo import UserRepository
from photogram.schemas.user import (
    FollowListResponse,
    ProfileInfo,
    SyncUserResponse,
    UserProfileResponse,
    UserPublic,
)

logger = logging.getLogger(__name__)

DEFAULT_DISPLAY_NAME = "Unknown"


class UserService:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.repo = UserRepository(db)
        self.interactions = InteractionRepository(db)

    def get_profile(self, *, viewer: User | None, user_id: UUID) -> UserProfileResponse:
        stats = self.repo.get_stats(user_id)
        if not stats:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        user = self.repo.get_by_id(user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

        is_own_profile = viewer is not None and viewer.id == user.id
        is_following = False
        if viewer is not None and not is_own_profile:
            is_following = self.interactions.is_following(follower_id=viewer.id, following_id=user.id)

        return UserProfileResponse(
            user=ProfileInfo(
                id=user.id,
                user_id=stats.user_id,
                external_id=stats.external_id,
                name=stats.name,
                posts_count=int(stats.posts_count or 0),
                followers_count=int(stats.followers_count or 0),
                following_count=int(stats.following_count or 0),
                created_at=user.created_at,
            ),
            is_own_profile=is_own_profile,
            is_following=is_following,
        )

    def list_followers(self, *, viewer: User, user_id: UUID) -> FollowListResponse:
        self._require_self(viewer, user_id)
        return self._to_follow_list(self.repo.list_followers(user_id))

    def list_following(self, *, viewer: User, user_id: UUID) -> FollowListResponse:
        self._require_self(viewer, user_id)
        return self._to_follow_list(self.repo.list_following(user_id))

    def sync_user(self, *, claims: SessionClaims) -> SyncUserResponse:
        name = claims.name or DEFAULT_DISPLAY_NAME
        user = self.repo.upsert_from_identity(external_id=claims.subject, name=name)
        self.db.commit()
        logger.info("user synced", extra={"user_id": str(user.id), "external_id": claims.subject})
        return SyncUserResponse(user=UserPublic.model_validate(user))

    @staticmethod
    def _require_self(viewer: User, user_id: UUID) -> None:
        if viewer.id != user_id:
            logger.warning(
                "follow list access denied",
                extra={"viewer_id": str(viewer.id), "user_id": str(user_id)},
            )
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    @staticmethod
    def _to_follow_list(users: list[User]) -> FollowListResponse:
        return FollowListResponse(users=[UserPublic.model_validate(user) for user in users], total=len(users))
