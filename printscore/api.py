"""PrintScore REST API.

FastAPI server for the upload page: scores an uploaded design and renders
the downloadable PDF report. Uploads are held in memory for the duration
of the request only; nothing is written to disk.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from fastapi import Depends, FastAPI, File, Form, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from printscore import __version__
from printscore.agents.vision import get_scorer
from printscore.config import Settings, configure_logging, get_settings
from printscore.extract import extract_asset
from printscore.report import REPORT_FILENAME, render_report
from printscore.scoring.engine import Scorer

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, scorer: Optional[Scorer] = None) -> FastAPI:
    """Build the API app.

    Args:
        settings: Settings to use (default: loaded from env / .env).
        scorer: Scoring strategy (default: picked from settings).
    """
    settings = settings or get_settings()
    scorer = scorer or get_scorer(settings)

    app = FastAPI(title="PrintScore API", version=__version__)
    app.state.settings = settings
    app.state.scorer = scorer

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def get_app_settings() -> Settings:
        return app.state.settings

    def get_app_scorer() -> Scorer:
        return app.state.scorer

    # ── Health ──────────────────────────────────────────────────────

    @app.get("/health")
    def health():
        """Liveness probe with the active scoring strategy."""
        return {"status": "ok", "version": __version__, "strategy": app.state.scorer.name}

    # ── Analysis ────────────────────────────────────────────────────

    @app.post("/analyze")
    async def analyze(
        file: Optional[UploadFile] = File(default=None),
        settings: Settings = Depends(get_app_settings),
        scorer: Scorer = Depends(get_app_scorer),
    ):
        """Score an uploaded image or PDF for print suitability."""
        if file is None:
            return JSONResponse({"error": "No file provided"}, status_code=400)

        try:
            raw = await file.read()
            if len(raw) > settings.max_upload_bytes:
                return JSONResponse(
                    {"error": f"File exceeds {settings.max_upload_mb}MB limit"},
                    status_code=413,
                )

            asset = extract_asset(raw, file.filename, file.content_type)
            result = scorer.evaluate(asset, raw)
        except Exception:
            logger.exception("Analysis error for %s", file.filename)
            return JSONResponse({"error": "Failed to analyze file"}, status_code=500)
        finally:
            await file.close()

        logger.info(
            "Analyzed %s: %s %dx%d -> %d (%s) via %s",
            file.filename, result.format_type, result.width_px, result.height_px,
            result.total_score, result.tier, result.strategy,
        )
        return result.to_response()

    # ── Report ──────────────────────────────────────────────────────

    @app.post("/pdf")
    def pdf_report(result: Optional[str] = Form(default=None)):
        """Render a previously returned analysis result as a PDF report."""
        if not result:
            return JSONResponse({"error": "No result data provided"}, status_code=400)

        try:
            document = render_report(json.loads(result))
        except Exception:
            logger.exception("PDF generation error")
            return JSONResponse({"error": "Failed to generate PDF"}, status_code=500)

        return Response(
            content=document,
            media_type="application/pdf",
            headers={"Content-Disposition": f'attachment; filename="{REPORT_FILENAME}"'},
        )

    return app


# ── CLI Entry Point ─────────────────────────────────────────────


def main():
    """Start the API server."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
