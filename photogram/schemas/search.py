from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from photogram.schemas.user import UserPublic

SearchType = Literal["users", "posts", "all"]


class PostSearchResult(BaseModel):
    post_id: UUID
    user_id: UUID
    image_url: str
    caption: str | None
    created_at: datetime
    likes_count: int
    comments_count: int
    user: UserPublic


class SearchResults(BaseModel):
    users: list[UserPublic] = Field(default_factory=list)
    total: int = 0
    posts: list[PostSearchResult] = Field(default_factory=list)
    posts_total: int = 0


class SearchResponse(BaseModel):
    results: SearchResults
    query: str
    type: SearchType
