"""FastAPI application exposing the tagger as a small JSON service."""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse, Response

from .config import TaggerSettings
from .observability import MetricsRecorder, ensure_logging
from .tagger import AutoTagger

logger = logging.getLogger(__name__)


class ApplicationState:
    """Container for runtime dependencies used by the FastAPI app."""

    def __init__(
        self,
        *,
        settings: TaggerSettings,
        tagger: AutoTagger,
        metrics: MetricsRecorder | None,
    ) -> None:
        self.settings = settings
        self.tagger = tagger
        self.metrics = metrics


def create_app(
    *,
    settings: TaggerSettings | None = None,
    tagger: AutoTagger | None = None,
    metrics: MetricsRecorder | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    ensure_logging()

    settings = settings or (tagger.settings if tagger is not None else TaggerSettings.from_env())
    metrics = metrics or settings.build_metrics_recorder()
    tagger = tagger or AutoTagger(settings, metrics=metrics)
    logger.info(
        "app.start vocabulary_white=%s vocabulary_black=%s stemming=%s",
        len(tagger.vocabulary.white_list),
        len(tagger.vocabulary.black_list),
        settings.apply_stemming,
    )

    app = FastAPI()
    app.state.services = ApplicationState(settings=settings, tagger=tagger, metrics=metrics)

    def get_state(request: Request) -> ApplicationState:
        return request.app.state.services

    def get_tagger(request: Request) -> AutoTagger:
        return get_state(request).tagger

    def get_settings_dependency(request: Request) -> TaggerSettings:
        return get_state(request).settings

    def get_metrics(request: Request) -> MetricsRecorder | None:
        return get_state(request).metrics

    def _parse_limit(value, default: int) -> int:
        if value is None:
            return default
        if isinstance(value, bool):
            raise HTTPException(status_code=400, detail="limit must be an integer")
        try:
            limit = int(value)
        except (TypeError, ValueError) as exc:
            raise HTTPException(status_code=400, detail="limit must be an integer") from exc
        if limit < 0:
            raise HTTPException(status_code=400, detail="limit must be zero or greater")
        return limit

    @app.get("/health", response_class=JSONResponse)
    async def health() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    @app.post("/tags", response_class=JSONResponse)
    async def suggest_tags(
        request: Request,
        tagger: AutoTagger = Depends(get_tagger),
        settings_inst: TaggerSettings = Depends(get_settings_dependency),
    ) -> JSONResponse:
        try:
            payload = await request.json()
        except ValueError as exc:
            raise HTTPException(status_code=400, detail="Request body must be JSON") from exc
        if not isinstance(payload, dict):
            raise HTTPException(status_code=400, detail="Request body must be a JSON object")
        text = payload.get("text")
        if not isinstance(text, str):
            raise HTTPException(status_code=400, detail="text is required and must be a string")
        limit = _parse_limit(payload.get("limit"), settings_inst.default_max_tags)

        tag_set = tagger.analyze(text, limit)
        tags = []
        for term in tag_set:
            entry = term.to_dict()
            entry["whiteListed"] = tagger.is_white_listed(term.value)
            tags.append(entry)
        logger.info(
            "tags.endpoint completed words=%s tags=%s duration_ms=%.2f",
            tagger.last_word_count,
            len(tags),
            tagger.last_analysis_duration_ms,
        )
        return JSONResponse(
            {
                "tags": tags,
                "durationMs": round(tagger.last_analysis_duration_ms, 3),
                "wordCount": tagger.last_word_count,
            }
        )

    @app.get("/vocabulary/lookup", response_class=JSONResponse)
    async def vocabulary_lookup(
        term: str = Query(..., min_length=1),
        tagger: AutoTagger = Depends(get_tagger),
    ) -> JSONResponse:
        return JSONResponse(
            {
                "term": term,
                "whiteListed": tagger.is_white_listed(term),
                "blackListed": tagger.is_black_listed(term),
            }
        )

    @app.get("/metrics")
    async def metrics_endpoint(metrics: MetricsRecorder | None = Depends(get_metrics)) -> Response:
        if metrics is None or not metrics.prometheus_enabled:
            raise HTTPException(status_code=404, detail="Metrics export disabled")
        return Response(content=metrics.render_prometheus(), media_type=metrics.prometheus_content_type)

    return app


__all__ = ["ApplicationState", "create_app"]
