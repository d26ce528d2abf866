"""One-page PDF report for an analysis result.

Draws the report onto a Letter-size Pillow canvas and saves it as PDF, so
the only rendering dependency is the imaging library already used for
feature extraction.
"""

from __future__ import annotations

import io
import logging
import re
from typing import Any, Optional

from PIL import Image, ImageDraw, ImageFont

from printscore.scoring.narratives import print_size_line

logger = logging.getLogger(__name__)

REPORT_FILENAME = "printscore-report.pdf"

# Letter at 72pt/in, drawn at 2x for sharper text
SCALE = 2
PAGE_W = 612 * SCALE
PAGE_H = 792 * SCALE
MARGIN = 50 * SCALE
PDF_RESOLUTION = 72.0 * SCALE

AQUA = "#14D8D4"
PINK = "#FF008C"
YELLOW = "#FFE600"
GREY = "#888888"
CHARCOAL = "#1F1F1F"
MUTED = "#666666"

BOLD_FONTS = (
    "/System/Library/Fonts/Helvetica.ttc",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
)
REGULAR_FONTS = (
    "/System/Library/Fonts/Helvetica.ttc",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
)

_EMOJI = re.compile("[\U0001F300-\U0001FAFF☀-➿]")


def _font(size: int, bold: bool = False) -> ImageFont.ImageFont:
    """Load a system font at ``size`` points, falling back to Pillow's default."""
    px = size * SCALE
    for path in BOLD_FONTS if bold else REGULAR_FONTS:
        try:
            return ImageFont.truetype(path, px)
        except (OSError, IOError):
            continue
    return ImageFont.load_default(size=px)


def _wrap(draw: ImageDraw.ImageDraw, text: str, font: ImageFont.ImageFont, width: int) -> list[str]:
    """Greedy word wrap to fit ``width`` pixels."""
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}".strip()
        if current and draw.textlength(candidate, font=font) > width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def _text_block(draw, xy, text, font, width, fill=CHARCOAL, align="left") -> None:
    x, y = xy
    line_h = int(font.size * 1.25) if hasattr(font, "size") else 14 * SCALE
    for line in _wrap(draw, text, font, width):
        if align == "center":
            lx = x + (width - draw.textlength(line, font=font)) / 2
        else:
            lx = x
        draw.text((lx, y), line, fill=fill, font=font)
        y += line_h


def _s(v: float) -> int:
    return int(v * SCALE)


def _print_size(result: dict[str, Any]) -> str:
    w = result.get("max_print_width_in")
    h = result.get("max_print_height_in")
    if isinstance(w, (int, float)) and isinstance(h, (int, float)):
        return print_size_line(float(w), float(h))
    return "Print size safe range: ? × ? inches at 300 DPI."


def render_report(result: dict[str, Any]) -> bytes:
    """Render an analysis result (the /analyze JSON body) as PDF bytes.

    Args:
        result: Dict with total_score, tier, tier_color, summary, issues
            and the max_print_* fields.

    Returns:
        PDF document bytes.

    Raises:
        KeyError: If a required field is missing from ``result``.
    """
    issues: dict[str, str] = result["issues"]
    tier_label = _EMOJI.sub("", str(result["tier"])).strip()
    tier_color: Optional[str] = result.get("tier_color") or AQUA

    page = Image.new("RGB", (PAGE_W, PAGE_H), "white")
    draw = ImageDraw.Draw(page)
    content_w = PAGE_W - 2 * MARGIN

    # Header band
    draw.rectangle((0, 0, PAGE_W, _s(120)), fill=AQUA)
    draw.text((MARGIN, _s(40)), "PrintScore™", fill=CHARCOAL, font=_font(28, bold=True))

    # Score
    draw.text((MARGIN, _s(150)), f"Score: {result['total_score']}", fill=CHARCOAL, font=_font(48, bold=True))

    # Tier badge
    draw.rounded_rectangle((MARGIN, _s(210), MARGIN + _s(200), _s(260)), radius=_s(25), fill=tier_color)
    _text_block(draw, (MARGIN, _s(225)), tier_label, _font(20, bold=True), _s(200), align="center")

    # Summary
    draw.text((MARGIN, _s(290)), "Summary", fill=CHARCOAL, font=_font(14, bold=True))
    _text_block(draw, (MARGIN, _s(310)), str(result["summary"]), _font(12), content_w)

    sections = [
        ("Resolution", issues["resolution"], AQUA),
        ("Color Mode", issues["color"], PINK),
        ("Layout", issues["layout"], YELLOW),
        ("Format", issues["format"], GREY),
    ]
    y = 380
    for title, body, color in sections:
        draw.rounded_rectangle((MARGIN, _s(y), PAGE_W - MARGIN, _s(y + 60)), radius=_s(10), fill=color)
        draw.text((MARGIN + _s(15), _s(y + 15)), title, fill=CHARCOAL, font=_font(14, bold=True))
        _text_block(draw, (MARGIN + _s(15), _s(y + 35)), str(body), _font(11), PAGE_W - 2 * MARGIN - _s(30))
        y += 75

    y += 10
    draw.text((MARGIN, _s(y)), _print_size(result), fill=MUTED, font=_font(10))

    # Footer
    footer_y = PAGE_H - _s(100)
    draw.rectangle((0, footer_y, PAGE_W, PAGE_H), fill=PINK)
    draw.text((MARGIN, footer_y + _s(30)), "Scanned with PrintScore™", fill="white", font=_font(11, bold=True))
    draw.text((MARGIN, footer_y + _s(50)), "Files are analyzed and automatically deleted.", fill="white", font=_font(11))

    buf = io.BytesIO()
    page.save(buf, "PDF", resolution=PDF_RESOLUTION)
    logger.debug("Rendered report for score %s (%d bytes)", result["total_score"], buf.tell())
    return buf.getvalue()
