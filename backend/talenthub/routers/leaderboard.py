from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..core.enums import LeaderboardScope, LeaderboardTimeframe
from ..database import get_db
from ..dependencies import get_optional_current_user
from ..models.user import User
from ..schemas.leaderboard import LeaderboardRead, RankRead
from ..schemas.user import UserSummary
from ..services.leaderboard import ALL_SPORTS, get_leaderboard, get_user_rank

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("/{scope}", response_model=LeaderboardRead)
def leaderboard(
    scope: LeaderboardScope,
    sport: str = Query(default=ALL_SPORTS),
    timeframe: LeaderboardTimeframe = Query(default=LeaderboardTimeframe.MONTHLY),
    current_user: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db),
) -> LeaderboardRead:
    athletes = get_leaderboard(db, scope, sport=sport, timeframe=timeframe)
    current_rank = None
    if current_user is not None:
        rank = get_user_rank(db, current_user.id, scope, sport=sport, timeframe=timeframe)
        if rank is not None:
            current_rank = RankRead(rank=rank.rank, user=UserSummary.model_validate(rank.user))
    return LeaderboardRead(
        athletes=[UserSummary.model_validate(athlete) for athlete in athletes],
        current_user_rank=current_rank,
        scope=scope,
        sport=sport,
        timeframe=timeframe,
    )
