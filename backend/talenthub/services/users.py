import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.exceptions import NotFoundError
from ..models.user import DEFAULT_METRICS, User
from ..schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def get_user_by_external_id(db: Session, external_id: str) -> Optional[User]:
    return db.query(User).filter(User.external_id == external_id).first()


def require_user(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User", user_id)
    return user


def create_user(db: Session, payload: UserCreate) -> tuple[User, bool]:
    """Create a user, or return the existing one for the same external identity.

    Returns ``(user, created)``.
    """
    existing = get_user_by_external_id(db, payload.external_id)
    if existing:
        return existing, False

    user = User(
        external_id=payload.external_id,
        display_name=payload.display_name,
        email=payload.email,
        role=payload.role,
        sport=payload.sport,
        skill_level=payload.skill_level,
        location=payload.location,
        age=payload.age,
        photo_url=payload.photo_url,
        metrics=dict(DEFAULT_METRICS),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # another request registered the same identity first
        db.rollback()
        existing = get_user_by_external_id(db, payload.external_id)
        if existing is None:
            raise
        return existing, False
    db.refresh(user)
    logger.info("Created %s %s for external identity %s", user.role.value, user.id, user.external_id)
    return user, True


def update_user_profile(db: Session, user: User, payload: UserUpdate) -> User:
    updates = payload.model_dump(exclude_unset=True)
    if updates.get("metrics") is not None:
        # partial metric updates keep the scores that were not sent
        updates["metrics"] = {**(user.metrics or DEFAULT_METRICS), **updates["metrics"]}
    for field, value in updates.items():
        if value is None and field in ("display_name", "metrics"):
            continue
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return user
