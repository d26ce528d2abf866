"""Score ladders, weights and tier bands.

Every threshold table is an ordered list evaluated first-match-wins, so each
boundary can be tested on its own and the ladders can be extended in place.
"""

from __future__ import annotations

import math

from printscore.models import Tier

REFERENCE_DPI = 300

# 8x10in at the reference DPI, checked per axis
MIN_WIDTH_8X10 = 2400
MIN_HEIGHT_8X10 = 3000
FULL_RESOLUTION_SCORE = 100

# (minimum megapixels, score), highest first
RESOLUTION_LADDER: list[tuple[float, int]] = [(4, 85), (2, 65), (1, 45)]
RESOLUTION_FLOOR = 20

# (maximum megabytes inclusive, score), smallest first
SIZE_LADDER: list[tuple[float, int]] = [(5, 100), (10, 85), (15, 60)]
SIZE_FLOOR = 30

COLOR_SCORES = {"pdf": 50}
COLOR_DEFAULT = 70  # assumed RGB, not yet converted for print

FORMAT_SCORES = {"png": 100, "jpg": 100, "jpeg": 100, "pdf": 90}
FORMAT_DEFAULT = 50

WEIGHTS = {
    "resolution": 0.40,
    "size": 0.30,
    "color": 0.20,
    "format": 0.10,
}

RESOLUTION_VALUES = frozenset({FULL_RESOLUTION_SCORE, RESOLUTION_FLOOR} | {s for _, s in RESOLUTION_LADDER})
SIZE_VALUES = frozenset({SIZE_FLOOR} | {s for _, s in SIZE_LADDER})
COLOR_VALUES = frozenset({COLOR_DEFAULT} | set(COLOR_SCORES.values()))
FORMAT_VALUES = frozenset({FORMAT_DEFAULT} | set(FORMAT_SCORES.values()))

TIERS: list[Tier] = [
    Tier(
        name="Print-Ready",
        color="#00D1C7",
        summary="Your design is print-ready! Sharp, properly sized, and formatted correctly.",
        floor=90,
    ),
    Tier(
        name="Great",
        color="#2DE2E6",
        summary="Your design looks good. Minor optimizations could help perfect it.",
        floor=75,
    ),
    Tier(
        name="Needs Optimization",
        color="#F5A623",
        summary="Your design needs some adjustments before printing for best results.",
        floor=60,
    ),
    Tier(
        name="High Risk",
        color="#FF008C",
        summary="Your design has significant issues that may cause print problems.",
        floor=40,
    ),
    Tier(
        name="Print Failure Likely",
        color="#6B7280",
        summary="Your design will likely fail to print properly. Consider recreating at higher quality.",
        floor=0,
    ),
]


def ladder_value(value: float, ladder: list[tuple[float, int]], default: int) -> int:
    """Return the score of the first rung whose threshold ``value`` reaches.

    Args:
        value: Measured quantity.
        ladder: (threshold, score) pairs, sorted high-to-low.
        default: Score when no rung matches.
    """
    for threshold, score in ladder:
        if value >= threshold:
            return score
    return default


def ceiling_value(value: float, ladder: list[tuple[float, int]], default: int) -> int:
    """Return the score of the first rung whose inclusive limit covers ``value``.

    Args:
        value: Measured quantity.
        ladder: (limit, score) pairs, sorted low-to-high.
        default: Score when ``value`` exceeds every limit.
    """
    for limit, score in ladder:
        if value <= limit:
            return score
    return default


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (values are non-negative)."""
    return int(math.floor(value + 0.5))


def weighted_total(scores: dict[str, int], weights: dict[str, float] = WEIGHTS) -> int:
    """Calculate the weighted composite score, rounded half-up.

    Args:
        scores: Dict of metric_name -> sub-score (0-100)
        weights: Dict of metric_name -> weight (should sum to 1.0)
    """
    total = 0.0
    for metric, weight in weights.items():
        total += scores.get(metric, 0) * weight
    return round_half_up(total)


def select_tier(total: int) -> Tier:
    """Map a 0-100 total onto its tier band."""
    for tier in TIERS:
        if total >= tier.floor:
            return tier
    return TIERS[-1]
