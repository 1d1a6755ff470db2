from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .user import SkillMetrics


class PerformanceRecordCreate(BaseModel):
    user_id: str
    sport: str = Field(min_length=1, max_length=80)
    metrics: SkillMetrics
    notes: Optional[str] = None


class PerformanceRecordRead(BaseModel):
    id: str
    user_id: str
    sport: str
    metrics: SkillMetrics
    notes: Optional[str] = None
    recorded_by: Optional[str] = None
    recorded_at: datetime

    model_config = {"from_attributes": True}
