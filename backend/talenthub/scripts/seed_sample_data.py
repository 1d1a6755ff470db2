from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from talenthub.core.enums import UserRole
from talenthub.database import SessionLocal
from talenthub.models.performance import PerformanceRecord
from talenthub.models.user import CoachAthlete, User
from talenthub.services.achievements import ensure_default_achievements
from talenthub.services.badges import tier_for

SAMPLE_ATHLETES = (
    {"external_id": "demo-athlete-1", "display_name": "Maya Ortiz", "sport": "Football", "points": 120},
    {"external_id": "demo-athlete-2", "display_name": "Leo Park", "sport": "Football", "points": 65},
    {"external_id": "demo-athlete-3", "display_name": "Ana Silva", "sport": "Athletics", "points": 230},
)


def ensure_user(
    db: Session,
    *,
    external_id: str,
    display_name: str,
    role: UserRole,
    sport: str | None = None,
    points: int = 0,
) -> User:
    user = db.query(User).filter_by(external_id=external_id).first()
    if user:
        return user
    user = User(
        external_id=external_id,
        display_name=display_name,
        role=role,
        sport=sport,
        skill_level="intermediate" if role == UserRole.ATHLETE else None,
        points=points,
        badge=tier_for(points),
    )
    db.add(user)
    db.flush()
    return user


def ensure_link(db: Session, *, coach: User, athlete: User) -> None:
    link = (
        db.query(CoachAthlete)
        .filter(
            CoachAthlete.coach_id == coach.id,
            CoachAthlete.athlete_id == athlete.id,
        )
        .first()
    )
    if not link:
        db.add(CoachAthlete(coach_id=coach.id, athlete_id=athlete.id))


def seed_performance_history(db: Session, *, athlete: User, coach: User) -> None:
    if db.query(PerformanceRecord).filter(PerformanceRecord.user_id == athlete.id).first():
        return
    now = datetime.utcnow()
    for weeks_ago, score in ((3, 5.0), (2, 5.5), (1, 6.0), (0, 6.5)):
        metrics = {"speed": score, "strength": score, "stamina": score, "technique": score}
        db.add(
            PerformanceRecord(
                user_id=athlete.id,
                sport=athlete.sport or "General",
                metrics=metrics,
                notes="Recorded by seed.",
                recorded_by=coach.id,
                recorded_at=now - timedelta(weeks=weeks_ago),
            )
        )
        athlete.metrics = dict(metrics)


def main() -> None:
    db = SessionLocal()
    try:
        ensure_default_achievements(db)
        coach = ensure_user(
            db,
            external_id="demo-coach",
            display_name="Coach Demo",
            role=UserRole.COACH,
        )
        for entry in SAMPLE_ATHLETES:
            athlete = ensure_user(db, role=UserRole.ATHLETE, **entry)
            ensure_link(db, coach=coach, athlete=athlete)
            seed_performance_history(db, athlete=athlete, coach=coach)
        db.commit()
        print("Seed data ready. Send X-External-Id: demo-coach or demo-athlete-1..3")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
