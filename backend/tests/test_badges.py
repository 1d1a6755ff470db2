import pytest

from talenthub.core.enums import BadgeTier
from talenthub.services.badges import progress_to_next, tier_for

TIER_ORDER = [BadgeTier.BRONZE, BadgeTier.SILVER, BadgeTier.GOLD, BadgeTier.PLATINUM]


@pytest.mark.parametrize(
    ("points", "tier"),
    [
        (0, BadgeTier.BRONZE),
        (49, BadgeTier.BRONZE),
        (50, BadgeTier.SILVER),
        (99, BadgeTier.SILVER),
        (100, BadgeTier.GOLD),
        (199, BadgeTier.GOLD),
        (200, BadgeTier.PLATINUM),
        (10_000, BadgeTier.PLATINUM),
    ],
)
def test_tier_boundaries(points: int, tier: BadgeTier):
    assert tier_for(points) == tier


def test_tier_is_monotonic_in_points():
    previous = TIER_ORDER.index(tier_for(0))
    for points in range(1, 600):
        current = TIER_ORDER.index(tier_for(points))
        assert current >= previous, points
        previous = current


def test_negative_points_are_rejected():
    with pytest.raises(ValueError):
        tier_for(-1)
    with pytest.raises(ValueError):
        progress_to_next(-5)


def test_progress_within_bronze():
    progress = progress_to_next(25)
    assert progress.tier == BadgeTier.BRONZE
    assert progress.next_tier == BadgeTier.SILVER
    assert progress.progress_percent == 50.0
    assert progress.points_needed == 25


def test_progress_is_rounded_to_two_decimals():
    progress = progress_to_next(110)
    assert progress.tier == BadgeTier.GOLD
    assert progress.next_tier == BadgeTier.PLATINUM
    assert progress.progress_percent == 10.0
    assert progress_to_next(1).progress_percent == 2.0
    assert progress_to_next(201).progress_percent == 0.33


def test_platinum_keeps_progressing_until_its_maximum():
    progress = progress_to_next(350)
    assert progress.tier == BadgeTier.PLATINUM
    assert progress.next_tier == BadgeTier.PLATINUM
    assert progress.progress_percent == 50.0
    assert progress.points_needed == 150


@pytest.mark.parametrize("points", [500, 750])
def test_progress_is_complete_at_platinum_maximum(points: int):
    progress = progress_to_next(points)
    assert progress.tier == BadgeTier.PLATINUM
    assert progress.progress_percent == 100.0
    assert progress.next_tier is None
    assert progress.points_needed == 0
