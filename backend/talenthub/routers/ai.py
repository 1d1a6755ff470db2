from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..core.enums import UserRole
from ..database import get_db
from ..dependencies import ensure_athlete_access, require_role
from ..models.user import User
from ..schemas.injury import InjuryAlertRead, InjuryAnalysisRead, InjuryAnalysisRequest
from ..services.ai import AIClient, analyze_injury_risk_or_fallback, get_ai_client
from ..services.injuries import create_alerts_from_analysis
from ..services.users import require_user

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/injury-analysis", response_model=InjuryAnalysisRead)
def injury_analysis(
    payload: InjuryAnalysisRequest,
    current_user: User = Depends(require_role(UserRole.COACH, UserRole.ADMIN)),
    db: Session = Depends(get_db),
    ai_client: AIClient = Depends(get_ai_client),
) -> InjuryAnalysisRead:
    if payload.athlete_id:
        require_user(db, payload.athlete_id)
        ensure_athlete_access(payload.athlete_id, current_user=current_user, db=db)

    analysis = analyze_injury_risk_or_fallback(ai_client, payload.athlete_data)

    alerts = []
    if payload.create_alerts and payload.athlete_id:
        coach_id = current_user.id if current_user.role == UserRole.COACH else None
        alerts = create_alerts_from_analysis(db, payload.athlete_id, coach_id, analysis)
    return InjuryAnalysisRead(
        **analysis.model_dump(),
        alerts=[InjuryAlertRead.model_validate(alert) for alert in alerts],
    )
