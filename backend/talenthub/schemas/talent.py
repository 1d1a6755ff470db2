from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..core.enums import BadgeTier
from .achievement import UserAchievementRead


class TalentBase(BaseModel):
    name: str = Field(min_length=1, max_length=150)
    sport: str = Field(min_length=1, max_length=80)
    category: Optional[str] = None
    description: Optional[str] = None

    @field_validator("name", "sport")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


class TalentCreate(TalentBase):
    user_id: str


class TalentRead(TalentBase):
    id: str
    user_id: str
    approved: bool
    approved_by: Optional[str] = None
    points_awarded: int
    created_at: datetime

    model_config = {"from_attributes": True}


class TalentSubmissionRead(TalentRead):
    """Submission response. ``points_awarded`` here is the full award (base plus bonuses)."""

    bonus_points: int
    bonus_breakdown: dict[str, int] = {}
    new_total: int
    badge: BadgeTier
    badge_changed: bool
    unlocked_achievements: list[UserAchievementRead] = []
