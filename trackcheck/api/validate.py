"""POST /api/validate plus preset, stats and cache management endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from trackcheck.dependencies import get_validator
from trackcheck.engine.errors import SourceLoadFailure, UnsupportedSourceKind
from trackcheck.engine.validator import TrackValidator
from trackcheck.models.requests import ValidateRequest
from trackcheck.models.responses import (
    CacheClearedResponse,
    PresetInfo,
    PresetsResponse,
    StatsResponse,
    ValidateResponse,
    ValidationSummary,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/validate", response_model=ValidateResponse)
async def validate(
    req: ValidateRequest,
    validator: TrackValidator = Depends(get_validator),
) -> ValidateResponse:
    try:
        source = req.source.to_source()
        report = await validator.validate(source, req.options)
    except UnsupportedSourceKind as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except SourceLoadFailure as e:
        logger.warning("Source load failed: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e

    return ValidateResponse(
        report=report.to_dict(),
        summary=ValidationSummary(**report.summary()),
    )


@router.get("/presets", response_model=PresetsResponse)
async def presets(validator: TrackValidator = Depends(get_validator)) -> PresetsResponse:
    return PresetsResponse(
        presets=[PresetInfo(**validator.get_preset(name)) for name in validator.preset_names()]
    )


@router.get("/stats", response_model=StatsResponse)
async def stats(validator: TrackValidator = Depends(get_validator)) -> StatsResponse:
    return StatsResponse(**validator.stats())


@router.delete("/cache", response_model=CacheClearedResponse)
async def clear_cache(validator: TrackValidator = Depends(get_validator)) -> CacheClearedResponse:
    cleared = len(validator.cache)
    validator.clear_cache()
    return CacheClearedResponse(cleared=cleared)
