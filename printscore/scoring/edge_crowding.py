"""Edge-crowding detection on the downsampled pixel sample.

Flags probable missing margin or bleed by looking for non-near-white pixels
in a thin band along the four borders of the sample.
"""

from __future__ import annotations

from typing import Optional

from printscore.models import SAMPLE_MAX_PX, EdgeSample

EDGE_THRESHOLD_PCT = 3
# Band thickness is taken against the nominal 100px sample, not the real one
EDGE_BAND_PX = SAMPLE_MAX_PX * EDGE_THRESHOLD_PCT // 100
NEAR_WHITE = 250

EDGE_CROWDING_MSG = "Potential edge crowding detected. Consider adding safe margin or bleed area."
GOOD_MARGINS_MSG = "Good margins detected. No bleed issues found."


def _in_band(x: int, y: int, width: int, height: int, band: int) -> bool:
    return x < band or x >= width - band or y < band or y >= height - band


def first_hit(sample: EdgeSample, band: int = EDGE_BAND_PX) -> Optional[tuple[int, int]]:
    """Return the first (x, y) in the border band that is not near-white.

    Scans row-major, top-to-bottom and left-to-right, and stops at the
    first qualifying pixel. Returns None when the whole band is near-white.
    """
    w, h = sample.width, sample.height
    for y in range(h):
        for x in range(w):
            if not _in_band(x, y, w, h, band):
                continue
            r, g, b = sample.pixel(x, y)
            if r < NEAR_WHITE or g < NEAR_WHITE or b < NEAR_WHITE:
                return x, y
    return None


def detect(sample: EdgeSample) -> bool:
    """True when content reaches into the border band of the sample."""
    return first_hit(sample) is not None


def layout_narrative(sample: Optional[EdgeSample]) -> str:
    """Layout issue text; assets without a sample get the no-issue message."""
    if sample is not None and detect(sample):
        return EDGE_CROWDING_MSG
    return GOOD_MARGINS_MSG
