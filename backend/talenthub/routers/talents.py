from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..core.enums import UserRole
from ..database import get_db
from ..dependencies import ensure_athlete_access, get_current_user, require_role
from ..models.talent import Talent
from ..models.user import User
from ..schemas.achievement import UserAchievementRead
from ..schemas.talent import TalentCreate, TalentRead, TalentSubmissionRead
from ..services.talents import approve_talent, list_all_talents, list_talents, submit_talent
from ..services.users import require_user

router = APIRouter(prefix="/talents", tags=["talents"])


@router.post("", response_model=TalentSubmissionRead, status_code=status.HTTP_201_CREATED)
def create_talent(
    payload: TalentCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> TalentSubmissionRead:
    require_user(db, payload.user_id)
    ensure_athlete_access(payload.user_id, current_user=current_user, db=db)
    submission = submit_talent(db, payload)
    award = submission.award
    talent = TalentRead.model_validate(submission.talent).model_dump()
    talent["points_awarded"] = award.delta
    return TalentSubmissionRead(
        **talent,
        bonus_points=award.bonus_points,
        bonus_breakdown=award.bonus_breakdown,
        new_total=award.new_total,
        badge=award.badge,
        badge_changed=award.badge_changed,
        unlocked_achievements=[UserAchievementRead.model_validate(u) for u in submission.unlocked],
    )


@router.get("/user/{user_id}", response_model=list[TalentRead])
def user_talents(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[Talent]:
    ensure_athlete_access(user_id, current_user=current_user, db=db)
    return list_talents(db, user_id)


@router.get("", response_model=list[TalentRead])
def all_talents(
    current_user: User = Depends(require_role(UserRole.COACH, UserRole.ADMIN)),
    db: Session = Depends(get_db),
) -> list[Talent]:
    return list_all_talents(db)


@router.patch("/{talent_id}/approve", response_model=TalentRead)
def approve(
    talent_id: str,
    current_user: User = Depends(require_role(UserRole.COACH, UserRole.ADMIN)),
    db: Session = Depends(get_db),
) -> Talent:
    return approve_talent(db, talent_id, current_user)
