from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class UserPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    external_id: str
    name: str
    created_at: datetime


class ProfileInfo(BaseModel):
    id: UUID
    user_id: UUID
    external_id: str
    name: str
    posts_count: int
    followers_count: int
    following_count: int
    created_at: datetime


class UserProfileResponse(BaseModel):
    user: ProfileInfo
    is_own_profile: bool
    is_following: bool


class FollowListResponse(BaseModel):
    users: list[UserPublic]
    total: int


class SyncUserResponse(BaseModel):
    user: UserPublic
