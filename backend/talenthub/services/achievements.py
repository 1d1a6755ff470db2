import logging

from sqlalchemy.orm import Session

from ..core.enums import AchievementType, BadgeTier
from ..models.achievement import Achievement, UserAchievement

logger = logging.getLogger(__name__)

DEFAULT_ACHIEVEMENTS: tuple[dict, ...] = (
    {
        "name": "First Steps",
        "description": "Added your first talent",
        "icon": "trophy",
        "points_required": 10,
        "badge": None,
        "type": AchievementType.MILESTONE,
    },
    {
        "name": "Bronze Athlete",
        "description": "Reached 50 points",
        "icon": "medal",
        "points_required": 50,
        "badge": BadgeTier.BRONZE,
        "type": AchievementType.MILESTONE,
    },
    {
        "name": "Silver Athlete",
        "description": "Reached 100 points",
        "icon": "medal",
        "points_required": 100,
        "badge": BadgeTier.SILVER,
        "type": AchievementType.MILESTONE,
    },
    {
        "name": "Gold Athlete",
        "description": "Reached 200 points",
        "icon": "medal",
        "points_required": 200,
        "badge": BadgeTier.GOLD,
        "type": AchievementType.MILESTONE,
    },
    {
        "name": "Platinum Athlete",
        "description": "Reached 500 points",
        "icon": "crown",
        "points_required": 500,
        "badge": BadgeTier.PLATINUM,
        "type": AchievementType.MILESTONE,
    },
)


def ensure_default_achievements(db: Session) -> list[Achievement]:
    existing = {name for (name,) in db.query(Achievement.name).all()}
    created = []
    for entry in DEFAULT_ACHIEVEMENTS:
        if entry["name"] in existing:
            continue
        achievement = Achievement(**entry)
        db.add(achievement)
        created.append(achievement)
    if created:
        db.flush()
    return created


def list_achievements(db: Session) -> list[Achievement]:
    return db.query(Achievement).order_by(Achievement.points_required.asc()).all()


def list_user_achievements(db: Session, user_id: str) -> list[UserAchievement]:
    return (
        db.query(UserAchievement)
        .filter(UserAchievement.user_id == user_id)
        .order_by(UserAchievement.unlocked_at.desc())
        .all()
    )


def unlock_reached_achievements(db: Session, user_id: str, points: int) -> list[UserAchievement]:
    """Record every catalog entry whose threshold ``points`` now meets.

    Runs after the user row was updated in the same transaction, so concurrent
    awards for one user reach this point one at a time.
    """
    unlocked_ids = {
        achievement_id
        for (achievement_id,) in db.query(UserAchievement.achievement_id)
        .filter(UserAchievement.user_id == user_id)
        .all()
    }
    reached = (
        db.query(Achievement)
        .filter(Achievement.points_required <= points)
        .order_by(Achievement.points_required.asc())
        .all()
    )
    unlocked: list[UserAchievement] = []
    for achievement in reached:
        if achievement.id in unlocked_ids:
            continue
        entry = UserAchievement(user_id=user_id, achievement_id=achievement.id, points_earned=points)
        db.add(entry)
        logger.info("User %s unlocked achievement %r at %s points", user_id, achievement.name, points)
        unlocked.append(entry)
    return unlocked
