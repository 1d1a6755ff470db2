from .user import User, CoachAthlete
from .talent import Talent
from .task import DailyTask, DailyTaskBatch
from .achievement import Achievement, UserAchievement
from .performance import PerformanceRecord
from .injury import InjuryAlert

__all__ = [
    "User",
    "CoachAthlete",
    "Talent",
    "DailyTask",
    "DailyTaskBatch",
    "Achievement",
    "UserAchievement",
    "PerformanceRecord",
    "InjuryAlert",
]
