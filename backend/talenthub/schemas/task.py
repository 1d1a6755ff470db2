from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ..core.enums import BadgeTier, TaskCategory, TaskDifficulty
from .achievement import UserAchievementRead


class DailyTaskRead(BaseModel):
    id: str
    title: str
    description: str
    points: int
    category: TaskCategory
    difficulty: TaskDifficulty
    ai_recommended: bool
    user_id: Optional[str] = None
    completed: bool
    completed_at: Optional[datetime] = None
    due_date: datetime
    created_at: datetime

    model_config = {"from_attributes": True}


class TaskCompletionRead(DailyTaskRead):
    points_awarded: int
    new_total: int
    badge: BadgeTier
    badge_changed: bool
    unlocked_achievements: list[UserAchievementRead] = []
