"""
Badge tier resolution.

A user's badge is a pure function of their cumulative points. Bronze is both
the zero-state default and the first tier, so there is no "no badge" state.

    points < 50          Bronze
    50  <= points < 100  Silver
    100 <= points < 200  Gold
    points >= 200        Platinum (maxed out at 500)
"""
from dataclasses import dataclass
from typing import Optional

from ..core.enums import BadgeTier

# (lower bound, tier) in ascending order; a tier covers [bound, next bound).
TIER_THRESHOLDS: tuple[tuple[int, BadgeTier], ...] = (
    (0, BadgeTier.BRONZE),
    (50, BadgeTier.SILVER),
    (100, BadgeTier.GOLD),
    (200, BadgeTier.PLATINUM),
)

# Progress milestones. Platinum keeps progressing until its maximum at 500.
PLATINUM_MAX_POINTS = 500
PROGRESS_MILESTONES: tuple[tuple[int, BadgeTier], ...] = TIER_THRESHOLDS + (
    (PLATINUM_MAX_POINTS, BadgeTier.PLATINUM),
)


@dataclass(frozen=True)
class BadgeProgress:
    tier: BadgeTier
    progress_percent: float
    next_tier: Optional[BadgeTier]
    points_needed: int


def _check_points(points: int) -> None:
    if points < 0:
        raise ValueError("points must be non-negative")


def tier_for(points: int) -> BadgeTier:
    _check_points(points)
    tier = BadgeTier.BRONZE
    for lower_bound, candidate in TIER_THRESHOLDS:
        if points >= lower_bound:
            tier = candidate
    return tier


def progress_to_next(points: int) -> BadgeProgress:
    _check_points(points)
    tier = tier_for(points)
    if points >= PLATINUM_MAX_POINTS:
        return BadgeProgress(tier=tier, progress_percent=100.0, next_tier=None, points_needed=0)

    for (lower, _), (upper, next_tier) in zip(PROGRESS_MILESTONES, PROGRESS_MILESTONES[1:]):
        if lower <= points < upper:
            percent = round((points - lower) * 100 / (upper - lower), 2)
            return BadgeProgress(
                tier=tier,
                progress_percent=percent,
                next_tier=next_tier,
                points_needed=upper - points,
            )
    raise AssertionError(f"no milestone covers {points} points")  # pragma: no cover
