import logging
from uuid import UUID

from fastapi import HTTPException, status
from redis import Redis
from sqlalchemy.orm import Session

from photogram.core.config import settings
from photogram.core.pagination import clamp_offset_limit
from photogram.core.rate_limit import enforce_rate_limit, get_redis
from photogram.models.comment import Comment
from photogram.models.user import User
from photogram.repositories.comment_repo import CommentRepository
from photogram.repositories.post_repo import PostRepository
from photogram.repositories.user_repo import UserRepository
from photogram.schemas.comment import CommentListResponse, CommentResponse
from photogram.schemas.common import GenericMessageResponse
from photogram.schemas.post import CommentWithUser
from photogram.schemas.user import UserPublic

logger = logging.getLogger(__name__)


class CommentService:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.repo = CommentRepository(db)
        self.post_repo = PostRepository(db)
        self.user_repo = UserRepository(db)
        self.redis: Redis = get_redis()

    def list_comments(
        self,
        *,
        post_id: UUID | None,
        offset: int | None = None,
        limit: int | None = None,
    ) -> CommentListResponse:
        if post_id is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="post_id is required")
        if not self.post_repo.exists(post_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")

        offset_value, limit_value = clamp_offset_limit(
            offset,
            limit,
            default_limit=settings.feed_max_limit,
            max_limit=settings.feed_max_limit,
        )
        comments = self.repo.list_for_post(post_id, offset=offset_value, limit=limit_value)
        authors = self.user_repo.get_many([comment.user_id for comment in comments])
        items = [
            self._to_comment_with_user(comment, authors[comment.user_id])
            for comment in comments
            if comment.user_id in authors
        ]
        return CommentListResponse(comments=items, total=self.repo.count_for_post(post_id))

    def create_comment(self, *, user: User, post_id: UUID | None, content: object) -> CommentResponse:
        if post_id is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="post_id is required")
        normalized = self._normalize_content(content)
        if not self.post_repo.exists(post_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")

        self._enforce_create_limit(user.id)
        comment = self.repo.create(post_id=post_id, user_id=user.id, content=normalized)
        self.db.commit()
        self.db.refresh(comment)
        logger.info("comment created", extra={"comment_id": str(comment.id), "post_id": str(post_id)})
        return CommentResponse(
            comment=self._to_comment_with_user(comment, user),
            message="Comment created successfully",
        )

    def delete_comment(self, *, user: User, comment_id: UUID | None) -> GenericMessageResponse:
        if comment_id is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="comment_id is required")
        comment = self.repo.get_by_id(comment_id)
        if not comment:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
        if comment.user_id != user.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You can only delete your own comments",
            )

        self.repo.delete(comment_id)
        self.db.commit()
        return GenericMessageResponse(message="Comment deleted successfully")

    @staticmethod
    def _normalize_content(content: object) -> str:
        if not isinstance(content, str):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="content must be a string")
        normalized = content.strip()
        if not normalized:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Comment cannot be empty")
        if len(normalized) > settings.comment_max_length:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Comment must be at most {settings.comment_max_length} characters",
            )
        return normalized

    @staticmethod
    def _to_comment_with_user(comment: Comment, author: User) -> CommentWithUser:
        return CommentWithUser(
            id=comment.id,
            post_id=comment.post_id,
            user_id=comment.user_id,
            content=comment.content,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            user=UserPublic.model_validate(author),
        )

    def _enforce_create_limit(self, user_pk: UUID) -> None:
        enforce_rate_limit(
            self.redis,
            key=f"comment:create:user:{user_pk}",
            limit=settings.comment_create_limit_per_hour,
            ttl_seconds=3600,
            detail="Too many comments, please try again later",
        )
