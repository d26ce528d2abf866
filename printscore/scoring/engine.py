"""Deterministic print-suitability scoring.

Pure functions over an Asset: four weighted sub-scores, a rounded total,
the tier it falls in, the safe print size at the reference DPI, and the
issue narratives. Missing or zero dimensions are not an error; they score
at the bottom of the resolution ladder and a 0.0 x 0.0 print size.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from printscore.models import Asset, IssueReport, PrintScoreResult, ScoreBreakdown, Tier
from printscore.scoring.grading import (
    COLOR_DEFAULT,
    COLOR_SCORES,
    FORMAT_DEFAULT,
    FORMAT_SCORES,
    FULL_RESOLUTION_SCORE,
    MIN_HEIGHT_8X10,
    MIN_WIDTH_8X10,
    REFERENCE_DPI,
    RESOLUTION_FLOOR,
    RESOLUTION_LADDER,
    SIZE_FLOOR,
    SIZE_LADDER,
    ceiling_value,
    ladder_value,
    select_tier,
    weighted_total,
)
from printscore.scoring.narratives import build_issue_report

logger = logging.getLogger(__name__)

BYTES_PER_MB = 1024 * 1024


def resolution_score(width_px: int, height_px: int) -> int:
    if width_px >= MIN_WIDTH_8X10 and height_px >= MIN_HEIGHT_8X10:
        return FULL_RESOLUTION_SCORE
    megapixels = width_px * height_px / 1_000_000
    return ladder_value(megapixels, RESOLUTION_LADDER, RESOLUTION_FLOOR)


def size_score(byte_size: int) -> int:
    return ceiling_value(byte_size / BYTES_PER_MB, SIZE_LADDER, SIZE_FLOOR)


def color_score(format_token: str) -> int:
    # No dedicated branch for non-raster, non-PDF content; it shares the RGB default
    return COLOR_SCORES.get(format_token, COLOR_DEFAULT)


def format_score(format_token: str) -> int:
    return FORMAT_SCORES.get(format_token, FORMAT_DEFAULT)


def safe_print_size(width_px: int, height_px: int) -> tuple[float, float]:
    """Largest print, in inches, that keeps the reference DPI."""
    return width_px / REFERENCE_DPI, height_px / REFERENCE_DPI


def breakdown(asset: Asset) -> ScoreBreakdown:
    """Compute the four sub-scores and their weighted total."""
    scores = {
        "resolution": resolution_score(asset.width_px, asset.height_px),
        "size": size_score(asset.byte_size),
        "color": color_score(asset.format_token),
        "format": format_score(asset.format_token),
    }
    return ScoreBreakdown(total=weighted_total(scores), **scores)


def score(asset: Asset) -> tuple[ScoreBreakdown, Tier, IssueReport, tuple[float, float]]:
    """Score an asset.

    Args:
        asset: Extracted features of the uploaded file.

    Returns:
        Tuple of (breakdown, tier, issues, (max_print_width_in, max_print_height_in)).
    """
    result = breakdown(asset)
    tier = select_tier(result.total)
    width_in, height_in = safe_print_size(asset.width_px, asset.height_px)
    issues = build_issue_report(asset, width_in, height_in)
    logger.debug(
        "Scored %s %dx%d (%d bytes): %s -> %d (%s)",
        asset.format_token, asset.width_px, asset.height_px, asset.byte_size,
        result.model_dump(exclude={"total"}), result.total, tier.name,
    )
    return result, tier, issues, (width_in, height_in)


def build_result(
    asset: Asset,
    result: ScoreBreakdown,
    tier: Tier,
    issues: IssueReport,
    print_size: tuple[float, float],
    strategy: str,
    total: Optional[int] = None,
) -> PrintScoreResult:
    """Flatten scoring output into the API response model."""
    return PrintScoreResult(
        width_px=asset.width_px,
        height_px=asset.height_px,
        file_size=asset.byte_size,
        format_type=asset.format_token,
        max_print_width_in=print_size[0],
        max_print_height_in=print_size[1],
        total_score=result.total if total is None else total,
        tier=tier.name,
        tier_color=tier.color,
        summary=tier.summary,
        issues=issues,
        breakdown=result,
        strategy=strategy,
    )


class Scorer(Protocol):
    """A scoring strategy selected by the caller.

    ``raw`` is the original upload, for strategies that look at the pixels
    themselves; metadata-only strategies ignore it.
    """

    name: str

    def evaluate(self, asset: Asset, raw: Optional[bytes] = None) -> PrintScoreResult: ...


class DeterministicScorer:
    """Default strategy: the weighted metadata heuristic."""

    name = "deterministic"

    def evaluate(self, asset: Asset, raw: Optional[bytes] = None) -> PrintScoreResult:
        result, tier, issues, print_size = score(asset)
        return build_result(asset, result, tier, issues, print_size, self.name)


class ResolutionOnlyScorer:
    """Fallback strategy that grades on the resolution sub-score alone.

    Used by the vision strategy for assets it cannot send to the model
    (PDFs have no pixels to look at).
    """

    name = "resolution_only"

    def evaluate(self, asset: Asset, raw: Optional[bytes] = None) -> PrintScoreResult:
        result, _, issues, print_size = score(asset)
        total = result.resolution
        return build_result(asset, result, select_tier(total), issues, print_size, self.name, total=total)
