from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ..core.enums import AchievementType, BadgeTier


class AchievementRead(BaseModel):
    id: str
    name: str
    description: str
    icon: str
    points_required: int
    badge: Optional[BadgeTier] = None
    type: AchievementType

    model_config = {"from_attributes": True}


class UserAchievementRead(BaseModel):
    id: str
    user_id: str
    achievement_id: str
    points_earned: int
    unlocked_at: Optional[datetime] = None
    achievement: Optional[AchievementRead] = None

    model_config = {"from_attributes": True}
