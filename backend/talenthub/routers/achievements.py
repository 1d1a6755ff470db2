from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_current_user
from ..models.achievement import Achievement, UserAchievement
from ..models.user import User
from ..schemas.achievement import AchievementRead, UserAchievementRead
from ..services.achievements import list_achievements, list_user_achievements

router = APIRouter(prefix="/achievements", tags=["achievements"])


@router.get("", response_model=list[AchievementRead])
def catalog(db: Session = Depends(get_db)) -> list[Achievement]:
    return list_achievements(db)


@router.get("/me", response_model=list[UserAchievementRead])
def my_achievements(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[UserAchievement]:
    return list_user_achievements(db, current_user.id)
