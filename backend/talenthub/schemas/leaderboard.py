from typing import Optional

from pydantic import BaseModel

from ..core.enums import LeaderboardScope, LeaderboardTimeframe
from .user import UserSummary


class RankRead(BaseModel):
    rank: int
    user: UserSummary


class LeaderboardRead(BaseModel):
    athletes: list[UserSummary]
    current_user_rank: Optional[RankRead] = None
    scope: LeaderboardScope
    sport: str
    timeframe: LeaderboardTimeframe
