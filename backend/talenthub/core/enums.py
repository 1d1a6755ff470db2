import enum


class UserRole(str, enum.Enum):
    ATHLETE = "athlete"
    COACH = "coach"
    ADMIN = "admin"


class BadgeTier(str, enum.Enum):
    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"
    PLATINUM = "Platinum"


class TaskCategory(str, enum.Enum):
    TRAINING = "training"
    NUTRITION = "nutrition"
    RECOVERY = "recovery"
    ANALYSIS = "analysis"


class TaskDifficulty(str, enum.Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class TaskBatchSource(str, enum.Enum):
    AI = "ai"
    FALLBACK = "fallback"


class AchievementType(str, enum.Enum):
    MILESTONE = "milestone"
    STREAK = "streak"
    PERFORMANCE = "performance"
    SPECIAL = "special"


class RiskLevel(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class LeaderboardScope(str, enum.Enum):
    REGIONAL = "regional"
    STATE = "state"
    NATIONAL = "national"
    GLOBAL = "global"


class LeaderboardTimeframe(str, enum.Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    ALL_TIME = "all-time"
