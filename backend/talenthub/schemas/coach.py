from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel

from .user import UserSummary


class CoachAthleteCreate(BaseModel):
    athlete_id: str


class CoachAthleteRead(BaseModel):
    id: str
    coach_id: str
    athlete_id: str
    approved_at: datetime
    athlete: UserSummary

    model_config = {"from_attributes": True}


class CoachMetrics(BaseModel):
    athlete_count: int
    avg_performance: Optional[float] = None
    avg_improvement: Optional[float] = None
    active_injury_alerts: int
    completed_tasks_today: int


class TeamProgressPoint(BaseModel):
    week: str
    week_start: date
    week_end: date
    records: int
    average: Optional[float] = None
    top_performer: Optional[float] = None


class CoachAnalytics(BaseModel):
    team_progress: list[TeamProgressPoint]
