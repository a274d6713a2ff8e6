from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from photogram.schemas.user import UserPublic


class CommentPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    post_id: UUID
    user_id: UUID
    content: str
    created_at: datetime
    updated_at: datetime


class CommentWithUser(CommentPublic):
    user: UserPublic


class PostPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    image_url: str
    caption: str | None
    created_at: datetime
    updated_at: datetime


class PostWithDetails(BaseModel):
    post_id: UUID
    user_id: UUID
    image_url: str
    caption: str | None
    created_at: datetime
    updated_at: datetime
    likes_count: int
    comments_count: int
    user: UserPublic
    comments: list[CommentWithUser] = Field(default_factory=list)
    user_liked: bool = False
    user_bookmarked: bool = False


class Pagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    has_more: bool = Field(alias="hasMore")


class PostListResponse(BaseModel):
    posts: list[PostWithDetails]
    pagination: Pagination


class PostDetailResponse(BaseModel):
    post: PostWithDetails


class CreatePostResponse(BaseModel):
    success: bool = True
    post: PostPublic
    message: str
