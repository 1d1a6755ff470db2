from datetime import datetime, time, timedelta
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..core.enums import UserRole
from ..core.exceptions import NotFoundError, ValidationError
from ..models.injury import InjuryAlert
from ..models.performance import PerformanceRecord
from ..models.task import DailyTask
from ..models.user import CoachAthlete, User
from ..schemas.coach import CoachAnalytics, CoachMetrics, TeamProgressPoint
from ..schemas.user import SkillMetrics


def _metrics_average(metrics: Optional[dict]) -> float:
    return SkillMetrics.model_validate(metrics or {}).average()


def get_coach_athletes(db: Session, coach_id: str) -> list[User]:
    return (
        db.query(User)
        .join(CoachAthlete, CoachAthlete.athlete_id == User.id)
        .filter(CoachAthlete.coach_id == coach_id)
        .order_by(User.display_name.asc())
        .all()
    )


def link_athlete(db: Session, coach: User, athlete_id: str) -> tuple[CoachAthlete, bool]:
    athlete = db.get(User, athlete_id)
    if not athlete:
        raise NotFoundError("User", athlete_id)
    if athlete.role != UserRole.ATHLETE:
        raise ValidationError("Only athletes can join a roster.", field="athlete_id")
    link = (
        db.query(CoachAthlete)
        .filter(CoachAthlete.coach_id == coach.id, CoachAthlete.athlete_id == athlete_id)
        .first()
    )
    if link:
        return link, False
    link = CoachAthlete(coach_id=coach.id, athlete_id=athlete_id)
    db.add(link)
    db.commit()
    db.refresh(link)
    return link, True


def _avg_improvement(db: Session, athlete_ids: list[str]) -> Optional[float]:
    """Mean percent change between each athlete's first and latest performance record."""
    records = (
        db.query(PerformanceRecord)
        .filter(PerformanceRecord.user_id.in_(athlete_ids))
        .order_by(PerformanceRecord.recorded_at.asc())
        .all()
    )
    by_athlete: dict[str, list[PerformanceRecord]] = {}
    for record in records:
        by_athlete.setdefault(record.user_id, []).append(record)

    changes = []
    for history in by_athlete.values():
        if len(history) < 2:
            continue
        first = _metrics_average(history[0].metrics)
        latest = _metrics_average(history[-1].metrics)
        if first > 0:
            changes.append((latest - first) / first * 100)
    if not changes:
        return None
    return round(sum(changes) / len(changes), 2)


def get_coach_metrics(db: Session, coach_id: str) -> CoachMetrics:
    athletes = get_coach_athletes(db, coach_id)
    athlete_ids = [athlete.id for athlete in athletes]
    active_alerts = (
        db.query(func.count(InjuryAlert.id))
        .filter(InjuryAlert.coach_id == coach_id, InjuryAlert.resolved.is_(False))
        .scalar()
        or 0
    )
    if not athletes:
        return CoachMetrics(
            athlete_count=0,
            avg_performance=None,
            avg_improvement=None,
            active_injury_alerts=active_alerts,
            completed_tasks_today=0,
        )

    avg_performance = sum(_metrics_average(a.metrics) for a in athletes) / len(athletes)
    today_start = datetime.combine(datetime.utcnow().date(), time.min)
    completed_today = (
        db.query(func.count(DailyTask.id))
        .filter(
            DailyTask.user_id.in_(athlete_ids),
            DailyTask.completed.is_(True),
            DailyTask.completed_at >= today_start,
        )
        .scalar()
        or 0
    )
    return CoachMetrics(
        athlete_count=len(athletes),
        avg_performance=round(avg_performance, 2),
        avg_improvement=_avg_improvement(db, athlete_ids),
        active_injury_alerts=active_alerts,
        completed_tasks_today=completed_today,
    )


def get_coach_analytics(db: Session, coach_id: str, weeks: int = 4) -> CoachAnalytics:
    athlete_ids = [athlete.id for athlete in get_coach_athletes(db, coach_id)]
    today = datetime.utcnow().date()
    points: list[TeamProgressPoint] = []
    for index, offset in enumerate(range(weeks - 1, -1, -1), start=1):
        period_end = today - timedelta(days=offset * 7)
        period_start = period_end - timedelta(days=6)
        records = []
        if athlete_ids:
            records = (
                db.query(PerformanceRecord)
                .filter(
                    PerformanceRecord.user_id.in_(athlete_ids),
                    PerformanceRecord.recorded_at >= datetime.combine(period_start, time.min),
                    PerformanceRecord.recorded_at < datetime.combine(period_end + timedelta(days=1), time.min),
                )
                .all()
            )
        scores = [_metrics_average(record.metrics) for record in records]
        points.append(
            TeamProgressPoint(
                week=f"Week {index}",
                week_start=period_start,
                week_end=period_end,
                records=len(scores),
                average=round(sum(scores) / len(scores), 2) if scores else None,
                top_performer=round(max(scores), 2) if scores else None,
            )
        )
    return CoachAnalytics(team_progress=points)
