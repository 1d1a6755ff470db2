from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..core.enums import UserRole
from ..database import get_db
from ..dependencies import require_role
from ..models.user import CoachAthlete, User
from ..schemas.coach import CoachAnalytics, CoachAthleteCreate, CoachAthleteRead, CoachMetrics
from ..schemas.user import UserRead
from ..services.coach import get_coach_analytics, get_coach_athletes, get_coach_metrics, link_athlete

router = APIRouter(prefix="/coach", tags=["coach"])


@router.get("/athletes", response_model=list[UserRead])
def roster(
    current_user: User = Depends(require_role(UserRole.COACH)),
    db: Session = Depends(get_db),
) -> list[User]:
    return get_coach_athletes(db, current_user.id)


@router.post("/athletes", response_model=CoachAthleteRead, status_code=status.HTTP_201_CREATED)
def add_athlete(
    payload: CoachAthleteCreate,
    response: Response,
    current_user: User = Depends(require_role(UserRole.COACH)),
    db: Session = Depends(get_db),
) -> CoachAthlete:
    link, created = link_athlete(db, current_user, payload.athlete_id)
    if not created:
        response.status_code = status.HTTP_200_OK
    return link


@router.get("/metrics", response_model=CoachMetrics)
def metrics(
    current_user: User = Depends(require_role(UserRole.COACH)),
    db: Session = Depends(get_db),
) -> CoachMetrics:
    return get_coach_metrics(db, current_user.id)


@router.get("/analytics", response_model=CoachAnalytics)
def analytics(
    current_user: User = Depends(require_role(UserRole.COACH)),
    db: Session = Depends(get_db),
) -> CoachAnalytics:
    return get_coach_analytics(db, current_user.id)
