from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundError
from ..models.performance import PerformanceRecord
from ..models.user import User
from ..schemas.performance import PerformanceRecordCreate


def create_performance_record(
    db: Session, payload: PerformanceRecordCreate, recorded_by: User | None = None
) -> PerformanceRecord:
    """Append a metrics snapshot and make it the athlete's current metrics."""
    athlete = db.get(User, payload.user_id)
    if not athlete:
        raise NotFoundError("User", payload.user_id)
    metrics = payload.metrics.model_dump()
    record = PerformanceRecord(
        user_id=athlete.id,
        sport=payload.sport,
        metrics=metrics,
        notes=payload.notes,
        recorded_by=recorded_by.id if recorded_by else None,
    )
    athlete.metrics = dict(metrics)
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def list_performance_records(db: Session, user_id: str) -> list[PerformanceRecord]:
    return (
        db.query(PerformanceRecord)
        .filter(PerformanceRecord.user_id == user_id)
        .order_by(PerformanceRecord.recorded_at.desc())
        .all()
    )
