from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import ensure_athlete_access, get_current_user
from ..models.performance import PerformanceRecord
from ..models.user import User
from ..schemas.performance import PerformanceRecordCreate, PerformanceRecordRead
from ..services.performance import create_performance_record, list_performance_records
from ..services.users import require_user

router = APIRouter(prefix="/performance-records", tags=["performance"])


@router.post("", response_model=PerformanceRecordRead, status_code=status.HTTP_201_CREATED)
def record_performance(
    payload: PerformanceRecordCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> PerformanceRecord:
    require_user(db, payload.user_id)
    ensure_athlete_access(payload.user_id, current_user=current_user, db=db)
    return create_performance_record(db, payload, recorded_by=current_user)


@router.get("/{user_id}", response_model=list[PerformanceRecordRead])
def performance_history(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[PerformanceRecord]:
    ensure_athlete_access(user_id, current_user=current_user, db=db)
    return list_performance_records(db, user_id)
