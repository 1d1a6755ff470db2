from typing import Optional

from pydantic import AliasChoices, BaseModel, Field

from ..core.enums import TaskCategory, TaskDifficulty


class Recommendation(BaseModel):
    """A candidate daily task produced by the AI generator."""

    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    difficulty: TaskDifficulty = TaskDifficulty.MEDIUM
    category: TaskCategory
    points: int = Field(gt=0, le=100)
    estimated_duration: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("estimated_duration", "estimatedDuration"),
    )
