import pytest

from talenthub.core.enums import BadgeTier
from talenthub.services.scoring import (
    NO_AWARD,
    award_points,
    score_talent_submission,
    score_task_completion,
)


def test_first_talent_earns_bonus():
    award = score_talent_submission(1)
    assert award.total == 30
    assert award.bonuses == {"first_talent": 20}


@pytest.mark.parametrize("count", [2, 3, 4, 6, 9])
def test_regular_talent_earns_base_points(count: int):
    award = score_talent_submission(count)
    assert award.total == 10
    assert award.bonuses == {}


@pytest.mark.parametrize("count", [5, 10, 15])
def test_every_fifth_talent_earns_milestone_bonus(count: int):
    award = score_talent_submission(count)
    assert award.total == 60
    assert award.bonuses == {"milestone": 50}


def test_talent_count_must_include_new_talent():
    with pytest.raises(ValueError):
        score_talent_submission(0)


def test_task_completion_awards_task_points():
    assert score_task_completion(20).total == 20
    with pytest.raises(ValueError):
        score_task_completion(0)


def test_award_crossing_tier_reports_badge_change():
    result = award_points(40, score_talent_submission(5))
    assert result.previous_total == 40
    assert result.new_total == 100
    assert result.delta == 60
    assert result.bonus_points == 50
    assert result.previous_badge == BadgeTier.BRONZE
    assert result.badge == BadgeTier.GOLD
    assert result.badge_changed


def test_empty_award_changes_nothing():
    result = award_points(75, NO_AWARD)
    assert result.delta == 0
    assert result.new_total == 75
    assert result.badge == BadgeTier.SILVER
    assert not result.badge_changed
