"""PrintScore Pydantic models.

Inputs and outputs of the scoring engine. Every model is frozen: an Asset
is immutable once constructed and derived results are never mutated after
the scoring call that produced them.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Nominal 8.5x11in page at the 300 reference DPI
PDF_WIDTH_PX = 2550
PDF_HEIGHT_PX = 3300

SAMPLE_MAX_PX = 100


class EdgeSample(BaseModel):
    """Downsampled raw pixel buffer used by the edge-crowding detector.

    Pixels are stored row-major, ``channels`` bytes per pixel, channel
    order R, G, B (any further channels are ignored).
    """

    model_config = ConfigDict(frozen=True)

    width: int = Field(..., ge=1)
    height: int = Field(..., ge=1)
    channels: int = Field(default=3, ge=3)
    data: bytes

    @model_validator(mode="after")
    def validate_buffer_length(self) -> EdgeSample:
        """Bound the short side and check the buffer holds width * height * channels bytes."""
        if min(self.width, self.height) > SAMPLE_MAX_PX:
            raise ValueError(
                f"short side must be at most {SAMPLE_MAX_PX}px, got {self.width}x{self.height}"
            )
        expected = self.width * self.height * self.channels
        if len(self.data) != expected:
            raise ValueError(
                f"data must hold {expected} bytes for a {self.width}x{self.height}x"
                f"{self.channels} sample, got {len(self.data)}"
            )
        return self

    def pixel(self, x: int, y: int) -> tuple[int, int, int]:
        """Return the (R, G, B) triple at column x, row y."""
        idx = (y * self.width + x) * self.channels
        return self.data[idx], self.data[idx + 1], self.data[idx + 2]


class Asset(BaseModel):
    """A single submitted file, reduced to the features the scorer needs."""

    model_config = ConfigDict(frozen=True)

    format_token: str = Field(default="unknown", description="Lower-cased file extension")
    content_is_raster: bool = Field(default=False, description="MIME type starts with image/")
    byte_size: int = Field(default=0, ge=0)
    width_px: int = Field(default=0, ge=0)
    height_px: int = Field(default=0, ge=0)
    edge_sample: Optional[EdgeSample] = None

    @model_validator(mode="before")
    @classmethod
    def normalize(cls, data: Any) -> Any:
        """Lower-case the format token and apply the PDF proxy dimensions."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        token = str(data.get("format_token") or "").strip().lower() or "unknown"
        data["format_token"] = token
        if token == "pdf":
            data["width_px"] = PDF_WIDTH_PX
            data["height_px"] = PDF_HEIGHT_PX
            data["edge_sample"] = None
        return data

    @model_validator(mode="after")
    def validate_sample_source(self) -> Asset:
        """Only decoded raster content can carry a pixel sample."""
        if self.edge_sample is not None and not self.content_is_raster:
            raise ValueError("edge_sample is only allowed for raster content")
        return self

    @classmethod
    def pdf(cls, byte_size: int) -> Asset:
        """Build the fixed-size proxy asset used for PDF uploads."""
        return cls(format_token="pdf", content_is_raster=False, byte_size=byte_size)

    @property
    def is_pdf(self) -> bool:
        return self.format_token == "pdf"

    @property
    def megapixels(self) -> float:
        return self.width_px * self.height_px / 1_000_000


class ScoreBreakdown(BaseModel):
    """The four weighted sub-scores and their rounded total."""

    model_config = ConfigDict(frozen=True)

    resolution: int
    size: int
    color: int
    format: int
    total: int = Field(..., ge=0, le=100)


class Tier(BaseModel):
    """One of the five print-readiness bands."""

    model_config = ConfigDict(frozen=True)

    name: str
    color: str
    summary: str
    floor: int = Field(..., ge=0, le=100, description="Inclusive lower bound of the band")


class IssueReport(BaseModel):
    """Human-readable explanation for each checked aspect."""

    model_config = ConfigDict(frozen=True)

    resolution: str
    color: str
    layout: str
    format: str


class PrintScoreResult(BaseModel):
    """Full analysis result, shaped like the /analyze JSON response."""

    model_config = ConfigDict(frozen=True)

    width_px: int
    height_px: int
    file_size: int
    format_type: str
    max_print_width_in: float
    max_print_height_in: float
    total_score: int = Field(..., ge=0, le=100)
    tier: str
    tier_color: str
    summary: str
    issues: IssueReport
    breakdown: Optional[ScoreBreakdown] = None
    strategy: str = "deterministic"

    def to_response(self) -> dict[str, Any]:
        """Serialize to the JSON body returned by the API."""
        return self.model_dump(mode="json")
