from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from ..core.enums import BadgeTier, UserRole


class SkillMetrics(BaseModel):
    speed: float = Field(default=5.0, ge=0, le=10)
    strength: float = Field(default=5.0, ge=0, le=10)
    stamina: float = Field(default=5.0, ge=0, le=10)
    technique: float = Field(default=5.0, ge=0, le=10)

    def average(self) -> float:
        return (self.speed + self.strength + self.stamina + self.technique) / 4


class UserProfileBase(BaseModel):
    sport: Optional[str] = None
    skill_level: Optional[str] = None
    location: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0, le=120)
    photo_url: Optional[str] = None


class UserCreate(UserProfileBase):
    external_id: str = Field(min_length=1, max_length=128)
    display_name: str = Field(min_length=1, max_length=150)
    email: Optional[EmailStr] = None
    role: UserRole = UserRole.ATHLETE

    @field_validator("external_id", "display_name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


class UserUpdate(UserProfileBase):
    """Profile fields a user may change. Points, badge and role are not among them."""

    display_name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    email: Optional[EmailStr] = None
    metrics: Optional[SkillMetrics] = None


class UserRead(UserProfileBase):
    id: str
    external_id: str
    display_name: str
    email: Optional[str] = None
    role: UserRole
    points: int
    badge: BadgeTier
    metrics: SkillMetrics
    created_at: datetime

    model_config = {"from_attributes": True}


class UserSummary(BaseModel):
    id: str
    display_name: str
    sport: Optional[str] = None
    location: Optional[str] = None
    points: int
    badge: BadgeTier

    model_config = {"from_attributes": True}


class BadgeProgressRead(BaseModel):
    points: int
    badge: BadgeTier
    progress_percent: float
    next_tier: Optional[BadgeTier] = None
    points_needed: int
