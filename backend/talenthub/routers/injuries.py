from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..core.enums import UserRole
from ..core.exceptions import ForbiddenError
from ..database import get_db
from ..dependencies import ensure_athlete_access, require_role
from ..models.injury import InjuryAlert
from ..models.user import User
from ..schemas.injury import InjuryAlertCreate, InjuryAlertRead
from ..services.injuries import create_injury_alert, list_injury_alerts, resolve_injury_alert
from ..services.users import require_user

router = APIRouter(prefix="/injury-alerts", tags=["injuries"])


@router.post("", response_model=InjuryAlertRead, status_code=status.HTTP_201_CREATED)
def raise_alert(
    payload: InjuryAlertCreate,
    current_user: User = Depends(require_role(UserRole.COACH, UserRole.ADMIN)),
    db: Session = Depends(get_db),
) -> InjuryAlert:
    require_user(db, payload.athlete_id)
    ensure_athlete_access(payload.athlete_id, current_user=current_user, db=db)
    if payload.coach_id is None and current_user.role == UserRole.COACH:
        payload = payload.model_copy(update={"coach_id": current_user.id})
    return create_injury_alert(db, payload)


@router.get("", response_model=list[InjuryAlertRead])
def my_alerts(
    current_user: User = Depends(require_role(UserRole.COACH)),
    db: Session = Depends(get_db),
) -> list[InjuryAlert]:
    return list_injury_alerts(db, current_user.id)


@router.patch("/{alert_id}/resolve", response_model=InjuryAlertRead)
def resolve(
    alert_id: str,
    current_user: User = Depends(require_role(UserRole.COACH, UserRole.ADMIN)),
    db: Session = Depends(get_db),
) -> InjuryAlert:
    alert = db.get(InjuryAlert, alert_id)
    if (
        alert is not None
        and current_user.role == UserRole.COACH
        and alert.coach_id not in (None, current_user.id)
    ):
        raise ForbiddenError("Alert belongs to another coach.")
    return resolve_injury_alert(db, alert_id)
