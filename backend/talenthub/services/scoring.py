"""
Scoring rules.

Pure functions converting a user action into a point award. Nothing here
touches the database; ``services.points`` persists the result.
"""
from dataclasses import dataclass, field

from ..core.enums import BadgeTier
from .badges import tier_for

TALENT_BASE_POINTS = 10
FIRST_TALENT_BONUS = 20
TALENT_MILESTONE_INTERVAL = 5
TALENT_MILESTONE_BONUS = 50


@dataclass(frozen=True)
class PointAward:
    base: int
    bonuses: dict[str, int] = field(default_factory=dict)

    @property
    def bonus_total(self) -> int:
        return sum(self.bonuses.values())

    @property
    def total(self) -> int:
        return self.base + self.bonus_total


@dataclass(frozen=True)
class AwardResult:
    previous_total: int
    new_total: int
    delta: int
    bonus_breakdown: dict[str, int]
    previous_badge: BadgeTier
    badge: BadgeTier

    @property
    def bonus_points(self) -> int:
        return sum(self.bonus_breakdown.values())

    @property
    def badge_changed(self) -> bool:
        return self.badge != self.previous_badge


NO_AWARD = PointAward(base=0)


def score_talent_submission(talent_count: int) -> PointAward:
    """Award for a talent, given the user's talent count *including* the new one."""
    if talent_count < 1:
        raise ValueError("talent_count must include the submitted talent")
    bonuses: dict[str, int] = {}
    if talent_count == 1:
        bonuses["first_talent"] = FIRST_TALENT_BONUS
    if talent_count % TALENT_MILESTONE_INTERVAL == 0:
        bonuses["milestone"] = TALENT_MILESTONE_BONUS
    return PointAward(base=TALENT_BASE_POINTS, bonuses=bonuses)


def score_task_completion(task_points: int) -> PointAward:
    if task_points <= 0:
        raise ValueError("task points must be positive")
    return PointAward(base=task_points)


def award_points(current_total: int, award: PointAward) -> AwardResult:
    new_total = current_total + award.total
    return AwardResult(
        previous_total=current_total,
        new_total=new_total,
        delta=award.total,
        bonus_breakdown=dict(award.bonuses),
        previous_badge=tier_for(current_total),
        badge=tier_for(new_total),
    )
