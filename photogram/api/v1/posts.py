from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from photogram.api.deps import get_current_user, get_optional_user
from photogram.core.config import settings
from photogram.db.session import get_db
from photogram.models.user import User
from photogram.schemas.common import GenericMessageResponse
from photogram.schemas.post import CreatePostResponse, PostDetailResponse, PostListResponse
from photogram.services.feed_service import FeedService
from photogram.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=PostListResponse)
def list_posts(
    page: int | None = Query(default=None),
    limit: int | None = Query(default=None),
    user_id: UUID | None = Query(default=None, alias="userId"),
    viewer: User | None = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    return FeedService(db).list_feed(viewer=viewer, user_id=user_id, page=page, limit=limit)


@router.post("", response_model=CreatePostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    image: UploadFile | None = File(default=None),
    caption: str | None = Form(default=None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    # one byte past the limit is enough to reject an oversized upload
    content = image.file.read(settings.max_upload_bytes + 1) if image is not None else None
    content_type = image.content_type if image is not None else None
    return PostService(db).create_post(
        user=current_user,
        content=content,
        content_type=content_type,
        caption=caption,
    )


@router.get("/{post_id}", response_model=PostDetailResponse)
def get_post(
    post_id: UUID,
    viewer: User | None = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    return FeedService(db).get_post_detail(viewer=viewer, post_id=post_id)


@router.delete("/{post_id}", response_model=GenericMessageResponse)
def delete_post(
    post_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return PostService(db).delete_post(user=current_user, post_id=post_id)
