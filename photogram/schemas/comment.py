from uuid import UUID

from pydantic import BaseModel

from photogram.schemas.post import CommentWithUser


class CreateCommentRequest(BaseModel):
    post_id: UUID | None = None
    content: str | None = None


class DeleteCommentRequest(BaseModel):
    comment_id: UUID | None = None


class CommentResponse(BaseModel):
    success: bool = True
    comment: CommentWithUser
    message: str


class CommentListResponse(BaseModel):
    comments: list[CommentWithUser]
    total: int
