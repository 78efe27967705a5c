"""Summarization endpoints: engine status, content classification and summaries."""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import APIRouter, HTTPException

from src.api.models import (
    ClassifyRequest,
    ClassifyResponse,
    EngineStatus,
    SummarizeRequest,
    SummarizeResponse,
)
from src.config import get_settings
from src.engines.factory import build_engine
from src.engines.unavailable import UnavailableEngine
from src.pipeline_config import EngineKind, PipelineConfig
from src.processing.cache import ResultCache
from src.processing.classifier import classify_content, score_content
from src.processing.errors import InvalidInput, ProcessingFailed, ServiceUnavailable
from src.processing.pipeline import summarize_transcript

logger = logging.getLogger(__name__)

router = APIRouter()


@lru_cache(maxsize=1)
def get_result_cache() -> ResultCache:
    """Process-wide result cache shared by all requests."""
    settings = get_settings()
    return ResultCache(
        max_entries=settings.cache_max_entries,
        max_total_cost=settings.cache_max_bytes,
    )


@router.get("/api/engines", response_model=list[EngineStatus])
async def list_engines() -> list[EngineStatus]:
    """Report which engines can be used with the current configuration."""
    settings = get_settings()
    statuses = []
    for kind in EngineKind:
        engine = build_engine(kind, settings)
        reason = engine.reason if isinstance(engine, UnavailableEngine) else None
        statuses.append(
            EngineStatus(
                kind=kind.value,
                name=engine.name,
                available=engine.is_available,
                reason=reason,
            )
        )
    return statuses


@router.post("/api/classify", response_model=ClassifyResponse)
async def classify(request: ClassifyRequest) -> ClassifyResponse:
    """Detect whether text reads like a meeting, a journal entry, technical or general content."""
    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Text must not be empty")

    config = PipelineConfig.from_settings(get_settings()).classifier
    scores = score_content(request.text, config)
    return ClassifyResponse(
        content_type=classify_content(request.text, config).value,
        scores={
            "meeting": scores.meeting,
            "personal_journal": scores.personal_journal,
            "technical": scores.technical,
        },
    )


@router.post("/api/summarize", response_model=SummarizeResponse)
async def summarize(request: SummarizeRequest) -> SummarizeResponse:
    """Summarize a transcript and extract its tasks and reminders.

    Long transcripts are chunked and processed in order; the first chunk that
    fails after all retries aborts the request with a 502.
    """
    settings = get_settings()
    engine = build_engine(request.engine or settings.default_engine, settings)

    overrides: dict[str, object] = {}
    if request.summary_policy is not None:
        overrides["summary_policy"] = request.summary_policy
    config = PipelineConfig.from_settings(settings, **overrides)

    try:
        result = await summarize_transcript(
            request.text, engine, config=config, cache=get_result_cache()
        )
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=exc.reason) from exc
    except ServiceUnavailable as exc:
        # Disabled or unconfigured engine, or the vendor rejected the call.
        raise HTTPException(status_code=503, detail=exc.reason) from exc
    except ProcessingFailed as exc:
        logger.error("Summarization failed with %s: %s", engine.name, exc.reason)
        raise HTTPException(status_code=502, detail=exc.reason) from exc

    return SummarizeResponse.from_result(engine.name, result)
