from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from photogram.api.deps import get_current_user
from photogram.db.session import get_db
from photogram.models.user import User
from photogram.schemas.post import PostListResponse
from photogram.schemas.social import PostTargetRequest, ToggleResponse
from photogram.services.feed_service import FeedService
from photogram.services.social_service import SocialService

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.get("", response_model=PostListResponse)
def list_bookmarks(
    page: int | None = Query(default=None),
    limit: int | None = Query(default=None),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return FeedService(db).list_bookmarks(viewer=current_user, page=page, limit=limit)


@router.post("", response_model=ToggleResponse)
def bookmark_post(
    payload: PostTargetRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return SocialService(db).bookmark_post(user=current_user, post_id=payload.post_id)


@router.delete("", response_model=ToggleResponse)
def unbookmark_post(
    payload: PostTargetRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return SocialService(db).unbookmark_post(user=current_user, post_id=payload.post_id)
