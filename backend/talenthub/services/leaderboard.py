"""
Leaderboards and ranks.

Ranks are computed on demand from current point totals; nothing is cached.
``scope`` and ``timeframe`` are accepted and echoed back, but every scope
and timeframe currently ranks all athletes by their all-time total.
"""
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Query, Session

from ..core.config import get_settings
from ..core.enums import LeaderboardScope, LeaderboardTimeframe, UserRole
from ..models.user import User

ALL_SPORTS = "all"


@dataclass(frozen=True)
class RankResult:
    rank: int
    user: User


def _ranked_athletes(db: Session, sport: Optional[str]) -> Query:
    query = db.query(User).filter(User.role == UserRole.ATHLETE)
    if sport and sport != ALL_SPORTS:
        query = query.filter(User.sport == sport)
    # ties keep registration order
    return query.order_by(User.points.desc(), User.created_at.asc(), User.id.asc())


def get_leaderboard(
    db: Session,
    scope: LeaderboardScope = LeaderboardScope.GLOBAL,
    sport: Optional[str] = None,
    timeframe: Optional[LeaderboardTimeframe] = None,
    limit: Optional[int] = None,
) -> list[User]:
    limit = limit if limit is not None else get_settings().leaderboard_limit
    return _ranked_athletes(db, sport).limit(limit).all()


def get_user_rank(
    db: Session,
    user_id: str,
    scope: LeaderboardScope = LeaderboardScope.GLOBAL,
    sport: Optional[str] = None,
    timeframe: Optional[LeaderboardTimeframe] = None,
) -> Optional[RankResult]:
    for position, athlete in enumerate(_ranked_athletes(db, sport).all(), start=1):
        if athlete.id == user_id:
            return RankResult(rank=position, user=athlete)
    return None
