"""Issue narratives shown alongside the score.

Print sizes are always rendered with one decimal place, a multiplication
sign between width and height, and the reference DPI suffix, so the text
matches the structured figures.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from printscore.models import Asset, IssueReport
from printscore.scoring.edge_crowding import layout_narrative
from printscore.scoring.grading import REFERENCE_DPI

PDF_COLOR_MSG = "CMYK status unknown for PDFs. Confirm with print provider."
RGB_COLOR_MSG = "RGB color mode detected. Convert to CMYK for accurate print colors."

PDF_FORMAT_NOTE = "Vector quality preserved. Good for print."
RASTER_FORMAT_NOTE = "Raster image format."


def one_decimal(value: float) -> str:
    """Format with one decimal place, exact ties rounding up (0.25 -> "0.3")."""
    return str(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def format_dimensions(width_in: float, height_in: float) -> str:
    return f"{one_decimal(width_in)} × {one_decimal(height_in)} inches at {REFERENCE_DPI} DPI"


def resolution_issue(width_in: float, height_in: float) -> str:
    return f"Sharp up to {format_dimensions(width_in, height_in)}."


def print_size_line(width_in: float, height_in: float) -> str:
    return f"Print size safe range: {format_dimensions(width_in, height_in)}."


def color_issue(format_token: str) -> str:
    return PDF_COLOR_MSG if format_token == "pdf" else RGB_COLOR_MSG


def format_issue(format_token: str) -> str:
    note = PDF_FORMAT_NOTE if format_token == "pdf" else RASTER_FORMAT_NOTE
    return f"{format_token.upper()} format. {note}"


def build_issue_report(asset: Asset, width_in: float, height_in: float) -> IssueReport:
    """Assemble the four narratives for an asset and its safe print size."""
    return IssueReport(
        resolution=resolution_issue(width_in, height_in),
        color=color_issue(asset.format_token),
        layout=layout_narrative(asset.edge_sample),
        format=format_issue(asset.format_token),
    )
