"""Vision scoring strategy for PrintScore.

Alternative, non-deterministic scorer: sends a preview of the upload to
Claude and asks for a print-readiness verdict. Anything the model cannot
answer for (no client, PDFs, API errors, unparseable replies) is scored by
a deterministic strategy instead, so callers always get a result.
"""

from __future__ import annotations

import base64
import io
import json
import logging
from typing import Any, Optional

from PIL import Image

from printscore.config import Settings
from printscore.models import Asset, IssueReport, PrintScoreResult
from printscore.scoring.engine import (
    DeterministicScorer,
    ResolutionOnlyScorer,
    Scorer,
    safe_print_size,
)
from printscore.scoring.grading import round_half_up, select_tier

logger = logging.getLogger(__name__)

VISION_PROMPT = """You are a print production specialist. Assess whether this design
will print well. Respond in JSON only:
{
    "total_score": 0-100,
    "summary": "one sentence overall verdict",
    "issues": {
        "resolution": "sharpness and pixel density at print size",
        "color": "color mode and gamut concerns for CMYK printing",
        "layout": "margins, bleed, and content near the trim edge",
        "format": "file format suitability for print"
    }
}"""

ASSET_DETAILS = "The image is {width}x{height} pixels, {size_mb:.1f} MB, {fmt} format."

MAX_IMAGE_BYTES = 4_500_000  # Stay under Claude's 5MB base64 limit
PREVIEW_SIDES = (1500, 1200, 1000, 800)


def _encode_preview(raw: bytes) -> str:
    """Base64-encode a JPEG preview of the upload that fits the size limit."""
    with Image.open(io.BytesIO(raw)) as src:
        img = src.convert("RGB") if src.mode not in ("RGB", "L") else src.copy()

    for max_dim in PREVIEW_SIDES:
        img_copy = img.copy()
        img_copy.thumbnail((max_dim, max_dim), Image.LANCZOS)
        buf = io.BytesIO()
        img_copy.save(buf, "JPEG", quality=85, optimize=True)
        if buf.tell() <= MAX_IMAGE_BYTES:
            return base64.b64encode(buf.getvalue()).decode("utf-8")

    # Last resort: very small
    img.thumbnail((600, 600), Image.LANCZOS)
    buf = io.BytesIO()
    img.save(buf, "JPEG", quality=70, optimize=True)
    return base64.b64encode(buf.getvalue()).decode("utf-8")


def _parse_vision_response(text: str) -> Optional[dict[str, Any]]:
    """Parse the JSON response from Claude Vision.

    Handles cases where response may include markdown code fences.
    Returns None when the reply is not usable.
    """
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        cleaned = "\n".join(lines[1:-1])

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError:
        logger.warning("Failed to parse vision response as JSON")
        return None

    if not isinstance(parsed, dict) or not isinstance(parsed.get("total_score"), (int, float)):
        logger.warning("Vision response missing total_score")
        return None
    return parsed


class VisionScorer:
    """Scores uploads with a Claude vision model.

    Args:
        client: Anthropic client instance (None = always fall back).
        model: Claude model to use for vision.
        fallback: Strategy for responses the model cannot provide.
    """

    name = "vision"

    def __init__(
        self,
        client: Optional[Any] = None,
        model: str = "claude-haiku-4-5-20251001",
        fallback: Optional[Scorer] = None,
    ) -> None:
        self.client = client
        self.model = model
        self.fallback = fallback or DeterministicScorer()
        self.pdf_fallback = ResolutionOnlyScorer()

    def evaluate(self, asset: Asset, raw: Optional[bytes] = None) -> PrintScoreResult:
        if asset.is_pdf:
            return self.pdf_fallback.evaluate(asset)

        if self.client is None or raw is None or not asset.content_is_raster:
            logger.debug("Vision scoring unavailable for %s, using %s", asset.format_token, self.fallback.name)
            return self.fallback.evaluate(asset)

        try:
            reply = self._ask(asset, raw)
        except Exception as e:
            logger.warning("Vision scoring failed, using %s: %s", self.fallback.name, e)
            return self.fallback.evaluate(asset)

        if reply is None:
            return self.fallback.evaluate(asset)
        return self._to_result(asset, reply)

    def _ask(self, asset: Asset, raw: bytes) -> Optional[dict[str, Any]]:
        prompt = VISION_PROMPT + "\n\n" + ASSET_DETAILS.format(
            width=asset.width_px,
            height=asset.height_px,
            size_mb=asset.byte_size / (1024 * 1024),
            fmt=asset.format_token.upper(),
        )

        response = self.client.messages.create(
            model=self.model,
            max_tokens=600,
            messages=[{
                "role": "user",
                "content": [
                    {
                        "type": "image",
                        "source": {
                            "type": "base64",
                            "media_type": "image/jpeg",
                            "data": _encode_preview(raw),
                        },
                    },
                    {
                        "type": "text",
                        "text": prompt,
                    },
                ],
            }],
        )
        return _parse_vision_response(response.content[0].text)

    def _to_result(self, asset: Asset, reply: dict[str, Any]) -> PrintScoreResult:
        # Tier always comes from the shared table, whatever label the model used
        total = max(0, min(100, round_half_up(reply["total_score"])))
        tier = select_tier(total)
        baseline = self.fallback.evaluate(asset)
        raw_issues = reply.get("issues") if isinstance(reply.get("issues"), dict) else {}
        issues = IssueReport(
            **{
                field: str(raw_issues.get(field) or getattr(baseline.issues, field))
                for field in ("resolution", "color", "layout", "format")
            }
        )
        width_in, height_in = safe_print_size(asset.width_px, asset.height_px)
        return PrintScoreResult(
            width_px=asset.width_px,
            height_px=asset.height_px,
            file_size=asset.byte_size,
            format_type=asset.format_token,
            max_print_width_in=width_in,
            max_print_height_in=height_in,
            total_score=total,
            tier=tier.name,
            tier_color=tier.color,
            summary=str(reply.get("summary") or tier.summary),
            issues=issues,
            breakdown=None,
            strategy=self.name,
        )


def get_anthropic_client(settings: Settings) -> Optional[Any]:
    """Create an Anthropic client when a key is configured."""
    if not settings.has_anthropic_key():
        return None
    import anthropic

    return anthropic.Anthropic(api_key=settings.anthropic_api_key)


def get_scorer(settings: Settings, client: Optional[Any] = None) -> Scorer:
    """Pick the scoring strategy named in settings.

    The deterministic scorer is the default, and also the answer when the
    vision strategy is requested without any way to reach the API.
    """
    if settings.scoring_strategy != "vision":
        return DeterministicScorer()

    if client is None:
        client = get_anthropic_client(settings)
    if client is None:
        logger.warning("scoring_strategy=vision but no Anthropic key configured; using deterministic scorer")
        return DeterministicScorer()
    return VisionScorer(client=client, model=settings.vision_model)
