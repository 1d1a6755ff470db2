from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from ..core.enums import RiskLevel


class InjuryAlertCreate(BaseModel):
    athlete_id: str
    coach_id: Optional[str] = None
    risk_level: RiskLevel
    body_part: str = Field(min_length=1, max_length=80)
    description: str = Field(min_length=1)
    recommendations: Optional[str] = None


class InjuryAlertRead(BaseModel):
    id: str
    athlete_id: str
    coach_id: Optional[str] = None
    risk_level: RiskLevel
    body_part: str
    description: str
    recommendations: Optional[str] = None
    resolved: bool
    resolved_at: Optional[datetime] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class AthleteRiskData(BaseModel):
    age: Optional[int] = Field(default=None, ge=0, le=120)
    sport: str
    recent_metrics: list[dict[str, Any]] = []
    training_load: str = "moderate"
    previous_injuries: list[str] = []


class InjuryRiskAnalysis(BaseModel):
    risk_level: RiskLevel = RiskLevel.LOW
    body_parts: list[str] = []
    recommendations: list[str] = []
    confidence: float = Field(default=0.5, ge=0, le=1)


class InjuryAnalysisRequest(BaseModel):
    athlete_data: AthleteRiskData
    athlete_id: Optional[str] = None
    create_alerts: bool = False


class InjuryAnalysisRead(InjuryRiskAnalysis):
    alerts: list[InjuryAlertRead] = []
