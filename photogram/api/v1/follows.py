from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from photogram.api.deps import get_current_user
from photogram.db.session import get_db
from photogram.models.user import User
from photogram.schemas.social import FollowRequest, ToggleResponse
from photogram.services.social_service import SocialService

router = APIRouter(prefix="/follows", tags=["follows"])


@router.post("", response_model=ToggleResponse, status_code=status.HTTP_201_CREATED)
def follow_user(
    payload: FollowRequest,
    response: Response,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    result = SocialService(db).follow_user(user=current_user, following_id=payload.following_id)
    if not result.changed:
        response.status_code = status.HTTP_200_OK
    return result


@router.delete("", response_model=ToggleResponse)
def unfollow_user(
    payload: FollowRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return SocialService(db).unfollow_user(user=current_user, following_id=payload.following_id)
