from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from photogram.api.deps import get_current_user
from photogram.db.session import get_db
from photogram.models.user import User
from photogram.schemas.social import PostTargetRequest, ToggleResponse
from photogram.services.social_service import SocialService

router = APIRouter(prefix="/likes", tags=["likes"])


@router.post("", response_model=ToggleResponse)
def like_post(
    payload: PostTargetRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return SocialService(db).like_post(user=current_user, post_id=payload.post_id)


@router.delete("", response_model=ToggleResponse)
def unlike_post(
    payload: PostTargetRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return SocialService(db).unlike_post(user=current_user, post_id=payload.post_id)
