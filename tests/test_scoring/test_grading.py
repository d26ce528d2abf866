"""Tests for score ladders, weighted totals and tier selection."""

import pytest

from printscore.scoring.grading import (
    TIERS,
    WEIGHTS,
    ceiling_value,
    ladder_value,
    round_half_up,
    select_tier,
    weighted_total,
)


def test_ladder_first_match_wins():
    ladder = [(10, 3), (5, 2), (1, 1)]
    assert ladder_value(12, ladder, 0) == 3
    assert ladder_value(10, ladder, 0) == 3
    assert ladder_value(9.99, ladder, 0) == 2
    assert ladder_value(0.5, ladder, 0) == 0


def test_ceiling_inclusive_limits():
    ladder = [(1, 100), (2, 50)]
    assert ceiling_value(1, ladder, 0) == 100
    assert ceiling_value(1.0001, ladder, 0) == 50
    assert ceiling_value(2.5, ladder, 0) == 0


def test_weights_sum_to_one():
    assert sum(WEIGHTS.values()) == pytest.approx(1.0)


def test_weighted_total_reference():
    scores = {"resolution": 100, "size": 100, "color": 70, "format": 100}
    assert weighted_total(scores) == 94


def test_weighted_total_rounds_halves_up():
    assert weighted_total({"x": 1}, {"x": 0.5}) == 1
    assert weighted_total({"x": 5}, {"x": 0.5}) == 3


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4999) == 2
    assert round_half_up(0) == 0


@pytest.mark.parametrize("total,expected", [
    (100, "Print-Ready"),
    (90, "Print-Ready"),
    (89, "Great"),
    (75, "Great"),
    (74, "Needs Optimization"),
    (60, "Needs Optimization"),
    (59, "High Risk"),
    (40, "High Risk"),
    (39, "Print Failure Likely"),
    (0, "Print Failure Likely"),
])
def test_tier_bands(total, expected):
    assert select_tier(total).name == expected


def test_tiers_contiguous_and_exhaustive():
    floors = [t.floor for t in TIERS]
    assert floors == sorted(floors, reverse=True)
    assert floors[-1] == 0
    for total in range(101):
        matches = [t for t in TIERS if total >= t.floor]
        assert select_tier(total) is matches[0]


def test_tier_colors_and_summaries():
    by_name = {t.name: t for t in TIERS}
    assert by_name["Print-Ready"].color == "#00D1C7"
    assert by_name["Print Failure Likely"].color == "#6B7280"
    assert by_name["High Risk"].summary == "Your design has significant issues that may cause print problems."
