import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ..core.enums import RiskLevel
from ..core.exceptions import NotFoundError
from ..models.injury import InjuryAlert
from ..models.user import User
from ..schemas.injury import InjuryAlertCreate, InjuryRiskAnalysis

logger = logging.getLogger(__name__)

UNSPECIFIED_BODY_PART = "unspecified"


def _check_participants(db: Session, athlete_id: str, coach_id: Optional[str]) -> None:
    if not db.get(User, athlete_id):
        raise NotFoundError("User", athlete_id)
    if coach_id and not db.get(User, coach_id):
        raise NotFoundError("User", coach_id)


def _log_alert(alert: InjuryAlert) -> None:
    logger.info(
        "Injury alert %s (%s, %s) raised for athlete %s",
        alert.id,
        alert.risk_level.value,
        alert.body_part,
        alert.athlete_id,
    )


def create_injury_alert(db: Session, payload: InjuryAlertCreate) -> InjuryAlert:
    _check_participants(db, payload.athlete_id, payload.coach_id)
    alert = InjuryAlert(**payload.model_dump())
    db.add(alert)
    db.commit()
    db.refresh(alert)
    _log_alert(alert)
    return alert


def create_alerts_from_analysis(
    db: Session, athlete_id: str, coach_id: Optional[str], analysis: InjuryRiskAnalysis
) -> list[InjuryAlert]:
    """One alert per flagged body part, stored together; low-risk analyses raise nothing."""
    if analysis.risk_level == RiskLevel.LOW:
        return []
    _check_participants(db, athlete_id, coach_id)
    recommendations = "\n".join(analysis.recommendations) or None
    description = (
        f"AI analysis flagged {analysis.risk_level.value} injury risk "
        f"(confidence {analysis.confidence:.2f})."
    )
    alerts = [
        InjuryAlert(
            athlete_id=athlete_id,
            coach_id=coach_id,
            risk_level=analysis.risk_level,
            body_part=body_part,
            description=description,
            recommendations=recommendations,
        )
        for body_part in analysis.body_parts or [UNSPECIFIED_BODY_PART]
    ]
    db.add_all(alerts)
    db.commit()
    for alert in alerts:
        db.refresh(alert)
        _log_alert(alert)
    return alerts


def list_injury_alerts(db: Session, coach_id: str) -> list[InjuryAlert]:
    return (
        db.query(InjuryAlert)
        .filter(InjuryAlert.coach_id == coach_id)
        .order_by(InjuryAlert.created_at.desc())
        .all()
    )


def resolve_injury_alert(db: Session, alert_id: str) -> InjuryAlert:
    alert = db.get(InjuryAlert, alert_id)
    if not alert:
        raise NotFoundError("Injury alert", alert_id)
    if not alert.resolved:
        alert.resolved = True
        alert.resolved_at = datetime.utcnow()
        db.commit()
        db.refresh(alert)
    return alert
