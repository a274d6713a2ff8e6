import logging
import secrets
import time
from uuid import UUID

from fastapi import HTTPException, status
from redis import Redis
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from photogram.core.config import ALLOWED_IMAGE_TYPES, settings
from photogram.core.rate_limit import enforce_rate_limit, get_redis
from photogram.infra.storage import ObjectStorage, StorageError, get_storage
from photogram.models.user import User
from photogram.repositories.post_repo import PostRepository
from photogram.schemas.common import GenericMessageResponse
from photogram.schemas.post import CreatePostResponse, PostPublic

logger = logging.getLogger(__name__)


class PostService:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.repo = PostRepository(db)
        self.redis: Redis = get_redis()
        self.storage: ObjectStorage = get_storage()

    def create_post(
        self,
        *,
        user: User,
        content: bytes | None,
        content_type: str | None,
        caption: str | None,
    ) -> CreatePostResponse:
        extension = self._validate_image(content, content_type)
        caption_value = self._normalize_caption(caption)
        self._enforce_create_limit(user.id)

        path = self._build_object_path(user.external_id, extension)
        try:
            image_url = self.storage.upload(path=path, content=content, content_type=content_type)
        except StorageError as exc:
            logger.error(
                "image upload failed",
                extra={"user_id": str(user.id), "path": path, "status_code": exc.status_code},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to upload image",
            ) from exc

        try:
            post = self.repo.create(user_id=user.id, image_url=image_url, caption=caption_value)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("post insert failed, removing uploaded image", extra={"path": path})
            self._remove_object(path)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to create post",
            ) from exc

        self.db.refresh(post)
        logger.info("post created", extra={"post_id": str(post.id), "user_id": str(user.id)})
        return CreatePostResponse(post=PostPublic.model_validate(post), message="Post created successfully")

    def delete_post(self, *, user: User, post_id: UUID) -> GenericMessageResponse:
        post = self.repo.get_by_id(post_id)
        if not post:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
        if post.user_id != user.id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only delete your own posts")

        path = self.storage.path_from_public_url(post.image_url)
        if path:
            self._remove_object(path)

        self.repo.delete(post_id)
        self.db.commit()
        logger.info("post deleted", extra={"post_id": str(post_id), "user_id": str(user.id)})
        return GenericMessageResponse(message="Post deleted successfully")

    def _remove_object(self, path: str) -> None:
        try:
            self.storage.remove([path])
        except StorageError as exc:
            logger.warning(
                "image removal failed",
                extra={"path": path, "status_code": exc.status_code, "error": exc.message},
            )

    @staticmethod
    def _validate_image(content: bytes | None, content_type: str | None) -> str:
        if not content:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Image is required")
        extension = ALLOWED_IMAGE_TYPES.get((content_type or "").lower())
        if not extension:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid file type. Only JPEG, PNG, WebP, and GIF are allowed",
            )
        if len(content) > settings.max_upload_bytes:
            limit_mb = settings.max_upload_bytes // (1024 * 1024)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"File size must be less than {limit_mb}MB",
            )
        return extension

    @staticmethod
    def _normalize_caption(caption: str | None) -> str | None:
        if caption is None:
            return None
        if len(caption) > settings.caption_max_length:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Caption must be at most {settings.caption_max_length} characters",
            )
        return caption or None

    @staticmethod
    def _build_object_path(external_id: str, extension: str) -> str:
        timestamp_ms = int(time.time() * 1000)
        return f"{external_id}/{timestamp_ms}-{secrets.token_hex(4)}.{extension}"

    def _enforce_create_limit(self, user_pk: UUID) -> None:
        enforce_rate_limit(
            self.redis,
            key=f"post:create:user:{user_pk}",
            limit=settings.post_create_limit_per_hour,
            ttl_seconds=3600,
            detail="Too many posts created, please try again later",
        )
