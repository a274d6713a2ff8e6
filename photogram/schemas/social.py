from uuid import UUID

from pydantic import BaseModel


class PostTargetRequest(BaseModel):
    post_id: UUID | None = None


class FollowRequest(BaseModel):
    following_id: UUID | None = None


class ToggleResponse(BaseModel):
    success: bool = True
    message: str
    active: bool
    changed: bool
