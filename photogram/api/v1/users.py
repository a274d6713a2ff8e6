from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from photogram.api.deps import get_current_user, get_optional_user, get_session_claims
from photogram.core.security import SessionClaims
from photogram.db.session import get_db
from photogram.models.user import User
from photogram.schemas.user import FollowListResponse, SyncUserResponse, UserProfileResponse
from photogram.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/sync", response_model=SyncUserResponse)
def sync_user(
    claims: SessionClaims = Depends(get_session_claims),
    db: Session = Depends(get_db),
):
    return UserService(db).sync_user(claims=claims)


@router.get("/{user_id}", response_model=UserProfileResponse)
def get_profile(
    user_id: UUID,
    viewer: User | None = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    return UserService(db).get_profile(viewer=viewer, user_id=user_id)


@router.get("/{user_id}/followers", response_model=FollowListResponse)
def list_followers(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return UserService(db).list_followers(viewer=current_user, user_id=user_id)


@router.get("/{user_id}/following", response_model=FollowListResponse)
def list_following(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return UserService(db).list_following(viewer=current_user, user_id=user_id)
