from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from .core.enums import UserRole
from .core.exceptions import ForbiddenError, NotFoundError
from .core.security import get_external_identity, get_optional_external_identity
from .database import get_db
from .models.user import CoachAthlete, User
from .services.users import get_user_by_external_id


def get_current_user(
    external_id: str = Depends(get_external_identity), db: Session = Depends(get_db)
) -> User:
    user = get_user_by_external_id(db, external_id)
    if user is None:
        raise NotFoundError("User", external_id)
    return user


def get_optional_current_user(
    external_id: Optional[str] = Depends(get_optional_external_identity),
    db: Session = Depends(get_db),
) -> Optional[User]:
    if external_id is None:
        return None
    return get_user_by_external_id(db, external_id)


def require_role(*roles: UserRole):
    def _role_dependency(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise ForbiddenError("Insufficient role.")
        return current_user

    return _role_dependency


def ensure_athlete_access(athlete_id: str, current_user: User, db: Session) -> User:
    """Athletes see only themselves; coaches see the athletes on their roster."""
    if current_user.role == UserRole.ADMIN or current_user.id == athlete_id:
        return current_user
    if current_user.role == UserRole.COACH:
        link_exists = (
            db.query(CoachAthlete)
            .filter(
                CoachAthlete.coach_id == current_user.id,
                CoachAthlete.athlete_id == athlete_id,
            )
            .first()
        )
        if link_exists:
            return current_user
    raise ForbiddenError("Access denied.")
