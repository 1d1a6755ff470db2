from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_current_user
from ..models.user import User
from ..schemas.user import BadgeProgressRead, UserCreate, UserRead, UserUpdate
from ..services.badges import progress_to_next
from ..services.users import create_user, update_user_profile

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(payload: UserCreate, response: Response, db: Session = Depends(get_db)) -> User:
    user, created = create_user(db, payload)
    if not created:
        response.status_code = status.HTTP_200_OK
    return user


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(get_current_user)) -> User:
    return current_user


@router.patch("/me", response_model=UserRead)
def update_me(
    payload: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> User:
    return update_user_profile(db, current_user, payload)


@router.get("/me/badge", response_model=BadgeProgressRead)
def my_badge_progress(current_user: User = Depends(get_current_user)) -> BadgeProgressRead:
    progress = progress_to_next(current_user.points)
    return BadgeProgressRead(
        points=current_user.points,
        badge=progress.tier,
        progress_percent=progress.progress_percent,
        next_tier=progress.next_tier,
        points_needed=progress.points_needed,
    )
