from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from photogram.api.deps import get_current_user
from photogram.db.session import get_db
from photogram.models.user import User
from photogram.schemas.comment import (
    CommentListResponse,
    CommentResponse,
    CreateCommentRequest,
    DeleteCommentRequest,
)
from photogram.schemas.common import GenericMessageResponse
from photogram.services.comment_service import CommentService

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("", response_model=CommentListResponse)
def list_comments(
    post_id: UUID | None = Query(default=None),
    offset: int | None = Query(default=None),
    limit: int | None = Query(default=None),
    db: Session = Depends(get_db),
):
    return CommentService(db).list_comments(post_id=post_id, offset=offset, limit=limit)


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def create_comment(
    payload: CreateCommentRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CommentService(db).create_comment(user=current_user, post_id=payload.post_id, content=payload.content)


@router.delete("", response_model=GenericMessageResponse)
def delete_comment(
    payload: DeleteCommentRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CommentService(db).delete_comment(user=current_user, comment_id=payload.comment_id)
