"""Tests for the deterministic scoring engine."""

import pytest

from printscore.models import Asset
from printscore.scoring.engine import (
    DeterministicScorer,
    ResolutionOnlyScorer,
    resolution_score,
    safe_print_size,
    score,
    size_score,
)
from printscore.scoring.grading import (
    COLOR_VALUES,
    FORMAT_VALUES,
    RESOLUTION_VALUES,
    SIZE_VALUES,
)

MB = 1024 * 1024


def _raster(width=3000, height=4500, byte_size=3 * MB, token="png"):
    return Asset(
        format_token=token,
        content_is_raster=True,
        byte_size=byte_size,
        width_px=width,
        height_px=height,
    )


class TestReferenceCase:
    def test_breakdown(self):
        breakdown, tier, _, _ = score(_raster())
        assert breakdown.resolution == 100
        assert breakdown.size == 100
        assert breakdown.color == 70
        assert breakdown.format == 100
        assert breakdown.total == 94
        assert tier.name == "Print-Ready"

    def test_safe_print_size(self):
        _, _, issues, (w_in, h_in) = score(_raster())
        assert (w_in, h_in) == (10.0, 15.0)
        assert issues.resolution == "Sharp up to 10.0 × 15.0 inches at 300 DPI."

    def test_deterministic_scorer_result(self):
        result = DeterministicScorer().evaluate(_raster())
        assert result.total_score == 94
        assert result.tier == "Print-Ready"
        assert result.tier_color == "#00D1C7"
        assert result.summary.startswith("Your design is print-ready!")
        assert result.max_print_width_in == 10.0
        assert result.max_print_height_in == 15.0
        assert result.strategy == "deterministic"

    def test_repeatable(self):
        asset = _raster()
        assert DeterministicScorer().evaluate(asset) == DeterministicScorer().evaluate(asset)


class TestPdf:
    def test_pdf_proxy_scores(self):
        breakdown, tier, issues, size = score(Asset.pdf(byte_size=40 * MB))
        assert breakdown.resolution == 100
        assert breakdown.color == 50
        assert breakdown.format == 90
        assert breakdown.size == 30
        assert size == (8.5, 11.0)
        assert issues.color == "CMYK status unknown for PDFs. Confirm with print provider."
        assert issues.format == "PDF format. Vector quality preserved. Good for print."
        assert issues.layout == "Good margins detected. No bleed issues found."

    def test_small_pdf_total(self):
        breakdown, tier, _, _ = score(Asset.pdf(byte_size=200_000))
        assert breakdown.total == 89
        assert tier.name == "Great"


class TestResolution:
    @pytest.mark.parametrize("width,height,expected", [
        (2400, 3000, 100),
        (3000, 2400, 85),  # landscape misses the per-axis floor
        (2399, 3000, 85),
        (2000, 2000, 85),
        (1999, 2000, 65),
        (2000, 1000, 65),
        (1000, 1000, 45),
        (999, 1000, 20),
        (0, 0, 20),
    ])
    def test_ladder(self, width, height, expected):
        assert resolution_score(width, height) == expected

    def test_monotonic_in_megapixels(self):
        sides = [0, 500, 999, 1000, 1200, 1414, 1500, 2000, 2400, 3000, 4000]
        scores = [resolution_score(s, s) for s in sides]
        assert scores == sorted(scores)


class TestSize:
    @pytest.mark.parametrize("limit_mb,at_limit,over_limit", [
        (5, 100, 85),
        (10, 85, 60),
        (15, 60, 30),
    ])
    def test_boundaries_inclusive(self, limit_mb, at_limit, over_limit):
        assert size_score(limit_mb * MB) == at_limit
        assert size_score(limit_mb * MB + 1) == over_limit

    def test_empty_file(self):
        assert size_score(0) == 100

    def test_monotonic_in_bytes(self):
        sizes = [0, MB, 5 * MB, 7 * MB, 10 * MB, 12 * MB, 15 * MB, 16 * MB, 100 * MB]
        scores = [size_score(s) for s in sizes]
        assert scores == sorted(scores, reverse=True)


class TestColorAndFormat:
    @pytest.mark.parametrize("token,expected", [
        ("png", 100), ("jpg", 100), ("jpeg", 100),
        ("pdf", 90), ("tiff", 50), ("unknown", 50),
    ])
    def test_format_scores(self, token, expected):
        breakdown, _, _, _ = score(_raster(token=token) if token != "pdf" else Asset.pdf(1))
        assert breakdown.format == expected

    def test_non_raster_non_pdf_uses_rgb_default(self):
        asset = Asset(format_token="svg", content_is_raster=False, byte_size=1000)
        breakdown, _, issues, _ = score(asset)
        assert breakdown.color == 70
        assert issues.color == "RGB color mode detected. Convert to CMYK for accurate print colors."
        assert issues.format == "SVG format. Raster image format."


class TestDegradedInput:
    def test_zero_dimensions(self):
        result = DeterministicScorer().evaluate(_raster(width=0, height=0, byte_size=1000))
        assert result.breakdown.resolution == 20
        assert result.total_score == 62
        assert result.tier == "Needs Optimization"
        assert result.max_print_width_in == 0.0
        assert result.issues.resolution == "Sharp up to 0.0 × 0.0 inches at 300 DPI."

    def test_half_point_total_rounds_up(self):
        # 65*.4 + 85*.3 + 70*.2 + 50*.1 = 70.5
        breakdown, tier, _, _ = score(_raster(width=2000, height=1500, byte_size=6 * MB, token="tiff"))
        assert breakdown.total == 71
        assert tier.name == "Needs Optimization"


class TestInvariants:
    @pytest.mark.parametrize("asset", [
        _raster(),
        _raster(width=0, height=0, byte_size=0, token="unknown"),
        _raster(width=640, height=480, byte_size=20 * MB, token="bmp"),
        _raster(width=1800, height=1200, byte_size=9 * MB, token="jpg"),
        Asset.pdf(14 * MB),
        Asset(format_token="", byte_size=0),
    ])
    def test_scores_within_tables(self, asset):
        breakdown, _, _, _ = score(asset)
        assert 0 <= breakdown.total <= 100
        assert breakdown.resolution in RESOLUTION_VALUES
        assert breakdown.size in SIZE_VALUES
        assert breakdown.color in COLOR_VALUES
        assert breakdown.format in FORMAT_VALUES

    def test_safe_print_size_full_precision(self):
        w_in, h_in = safe_print_size(1000, 700)
        assert w_in == 1000 / 300
        assert h_in == 700 / 300


class TestResolutionOnlyScorer:
    def test_total_is_resolution_subscore(self):
        result = ResolutionOnlyScorer().evaluate(Asset.pdf(byte_size=40 * MB))
        assert result.total_score == 100
        assert result.tier == "Print-Ready"
        assert result.strategy == "resolution_only"
        assert result.breakdown.total == 68

    def test_low_resolution(self):
        result = ResolutionOnlyScorer().evaluate(_raster(width=1000, height=1000))
        assert result.total_score == 45
        assert result.tier == "High Risk"
