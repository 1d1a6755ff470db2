"""
Persisting point awards.

All writes to a user's point total go through ``apply_award``. The new total
and its badge are written by a single compare-and-swap UPDATE guarded on the
total that was read, so two racing awards for the same user can never lose
an update and points/badge can never disagree. The caller owns the
transaction: nothing is committed here.
"""
import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from ..core.config import get_settings
from ..core.exceptions import ConflictError, NotFoundError
from ..models.achievement import UserAchievement
from ..models.user import User
from .achievements import unlock_reached_achievements
from .scoring import AwardResult, PointAward, award_points

logger = logging.getLogger(__name__)


def apply_award(
    db: Session, user_id: str, award: PointAward
) -> tuple[AwardResult, list[UserAchievement]]:
    settings = get_settings()
    attempts = max(settings.points_update_retries, 1)
    for attempt in range(1, attempts + 1):
        current = db.execute(select(User.points).where(User.id == user_id)).scalar_one_or_none()
        if current is None:
            raise NotFoundError("User", user_id)
        result = award_points(current, award)
        if result.delta == 0:
            return result, []

        updated = db.execute(
            update(User)
            .where(User.id == user_id, User.points == current)
            .values(points=result.new_total, badge=result.badge)
            .execution_options(synchronize_session=False)
        ).rowcount
        if updated == 1:
            _expire_cached_user(db, user_id)
            if result.badge_changed:
                logger.info(
                    "User %s moved from %s to %s (%s -> %s points)",
                    user_id,
                    result.previous_badge.value,
                    result.badge.value,
                    result.previous_total,
                    result.new_total,
                )
            unlocked = unlock_reached_achievements(db, user_id, result.new_total)
            return result, unlocked
        logger.warning(
            "Concurrent point update for user %s (attempt %s/%s), retrying", user_id, attempt, attempts
        )
    raise ConflictError("Could not update points, please retry.")


def _expire_cached_user(db: Session, user_id: str) -> None:
    for obj in db.identity_map.values():
        if isinstance(obj, User) and obj.id == user_id:
            db.expire(obj, ["points", "badge"])
