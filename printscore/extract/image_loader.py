"""Feature extraction for uploaded files.

Turns raw upload bytes into an Asset: pixel dimensions, byte size, format
token and, for decodable raster images, a small pixel sample for the
edge-crowding check. Decode failures never propagate; they produce an
asset with zero dimensions and no sample.
"""

from __future__ import annotations

import io
import logging
from typing import Optional

from PIL import Image, UnidentifiedImageError

from printscore.models import SAMPLE_MAX_PX, Asset, EdgeSample

# Print files routinely exceed Pillow's default decompression-bomb limit
Image.MAX_IMAGE_PIXELS = 300_000_000

logger = logging.getLogger(__name__)

DECODE_ERRORS = (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError)


def format_token_from_filename(filename: Optional[str]) -> str:
    """Last dot-separated segment of ``filename``, lower-cased; "unknown" when empty."""
    if not filename:
        return "unknown"
    token = filename.rsplit(".", 1)[-1].strip().lower()
    return token or "unknown"


def is_raster_mime(content_type: Optional[str]) -> bool:
    return bool(content_type) and content_type.startswith("image/")


def make_edge_sample(img: Image.Image, max_side: int = SAMPLE_MAX_PX) -> EdgeSample:
    """Resize so the shortest side equals ``max_side``, preserving aspect ratio.

    "Fit outside" a max_side square: the long side scales proportionally and
    ends up at or above ``max_side``. Small images are scaled up.
    """
    if img.mode != "RGB":
        img = img.convert("RGB")
    w, h = img.size
    scale = max_side / min(w, h)
    new_w = max(max_side, round(w * scale))
    new_h = max(max_side, round(h * scale))
    small = img.resize((new_w, new_h), Image.LANCZOS)
    return EdgeSample(width=new_w, height=new_h, channels=3, data=small.tobytes())


def _decode_raster(raw: bytes) -> tuple[int, int, Optional[EdgeSample]]:
    with Image.open(io.BytesIO(raw)) as img:
        width, height = img.size
        try:
            sample = make_edge_sample(img)
        except DECODE_ERRORS as e:
            # Header parsed but pixel data is unreadable; keep the dimensions
            logger.warning("Layout sample failed: %s", e)
            sample = None
    return width, height, sample


def extract_asset(raw: bytes, filename: Optional[str], content_type: Optional[str]) -> Asset:
    """Build an Asset from an uploaded file.

    Args:
        raw: File contents.
        filename: Client-supplied name; its extension becomes the format token.
        content_type: Client-supplied MIME type.

    Returns:
        Asset ready for scoring.
    """
    token = format_token_from_filename(filename)
    raster = is_raster_mime(content_type)
    byte_size = len(raw)

    if raster:
        try:
            width, height, sample = _decode_raster(raw)
        except DECODE_ERRORS as e:
            logger.warning("Could not decode %s (%s, %d bytes): %s", filename, content_type, byte_size, e)
            width, height, sample = 0, 0, None
        return Asset(
            format_token=token,
            content_is_raster=True,
            byte_size=byte_size,
            width_px=width,
            height_px=height,
            edge_sample=sample,
        )

    if token == "pdf":
        return Asset.pdf(byte_size)

    logger.info("Unsupported content %s (%s); scoring without dimensions", filename, content_type)
    return Asset(format_token=token, content_is_raster=False, byte_size=byte_size)
