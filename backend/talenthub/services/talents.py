import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from ..core.enums import UserRole
from ..core.exceptions import ForbiddenError, NotFoundError
from ..models.achievement import UserAchievement
from ..models.talent import Talent
from ..models.user import User
from ..schemas.talent import TalentCreate
from .points import apply_award
from .scoring import AwardResult, score_talent_submission

logger = logging.getLogger(__name__)


@dataclass
class TalentSubmission:
    talent: Talent
    award: AwardResult
    unlocked: list[UserAchievement]


def submit_talent(db: Session, payload: TalentCreate) -> TalentSubmission:
    """Store a talent and credit the owner, in one transaction.

    The stored ``points_awarded`` stays at the base value; bonuses only go to
    the user's running total and are reported in the returned award.
    """
    # row lock: the talent count below must not interleave with another submission
    user = db.get(User, payload.user_id, with_for_update=True)
    if not user:
        raise NotFoundError("User", payload.user_id)

    talent = Talent(
        name=payload.name,
        sport=payload.sport,
        category=payload.category,
        description=payload.description,
        user_id=user.id,
    )
    db.add(talent)
    db.flush()

    talent_count = db.query(Talent).filter(Talent.user_id == user.id).count()
    award, unlocked = apply_award(db, user.id, score_talent_submission(talent_count))
    db.commit()
    db.refresh(talent)
    logger.info(
        "User %s submitted talent %s (#%s), awarded %s points",
        user.id,
        talent.id,
        talent_count,
        award.delta,
    )
    return TalentSubmission(talent=talent, award=award, unlocked=unlocked)


def list_talents(db: Session, user_id: str) -> list[Talent]:
    return (
        db.query(Talent)
        .filter(Talent.user_id == user_id)
        .order_by(Talent.created_at.desc())
        .all()
    )


def list_all_talents(db: Session) -> list[Talent]:
    return db.query(Talent).order_by(Talent.created_at.desc()).all()


def approve_talent(db: Session, talent_id: str, approver: User) -> Talent:
    """Mark a talent as reviewed. Approval does not change anyone's points."""
    if approver.role not in (UserRole.COACH, UserRole.ADMIN):
        raise ForbiddenError("Only coaches can approve talents.")
    talent = db.get(Talent, talent_id)
    if not talent:
        raise NotFoundError("Talent", talent_id)
    talent.approved = True
    talent.approved_by = approver.id
    db.commit()
    db.refresh(talent)
    return talent
