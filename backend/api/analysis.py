"""Content Analysis API endpoints

Runs the analysis pipeline and exposes its intermediate stages:
- Full analysis (extraction, scoring, approaches, suggestions, smart analysis)
- Extraction only, scoring + approaches only
- Data-driven suggestion gallery
- Analysis cache stats / clear
"""
import logging
import traceback
from typing import List

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from models.content import (
    ContentAnalysis,
    ContentInput,
    ExtractedData,
    PresentationApproach,
    ScoringMetrics,
    VisualSuggestion,
)
from services.analysis_cache import analysis_cache
from services.analysis_service import analysis_service
from services.errors import AnalysisFailure, InputValidationError
from services.visual_suggestion_engine import visual_suggestion_engine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analysis", tags=["analysis"])


# =============================================================================
# Response Models
# =============================================================================

class ScoreResponse(BaseModel):
    extracted_data: ExtractedData
    scoring: ScoringMetrics
    approaches: List[PresentationApproach]


class GalleryResponse(BaseModel):
    suggestions: List[VisualSuggestion]


# =============================================================================
# API Endpoints
# =============================================================================

@router.post("", response_model=ContentAnalysis)
async def analyze_content(content: ContentInput):
    """Analyze content and return ranked visual suggestions."""
    try:
        return await analysis_service.analyze(content)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AnalysisFailure as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/extract", response_model=ExtractedData)
async def extract_content(content: ContentInput):
    try:
        analysis_service.validate(content)
        extracted, _ = await analysis_service.extract(content)
        return extracted
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"[Analysis] Extraction failed: {type(e).__name__}: {e}")
        logger.error(f"[Analysis] Traceback: {traceback.format_exc()}")
        raise HTTPException(status_code=500, detail=f"Extraction failed: {str(e)}")


@router.post("/score", response_model=ScoreResponse)
async def score_content(content: ContentInput):
    """Scoring metrics and ranked presentation approaches, without suggestions."""
    try:
        analysis_service.validate(content)
        extracted, _ = await analysis_service.extract(content)
        scoring, approaches = analysis_service.score(content, extracted)
        return ScoreResponse(extracted_data=extracted, scoring=scoring, approaches=approaches)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"[Analysis] Scoring failed: {type(e).__name__}: {e}")
        logger.error(f"[Analysis] Traceback: {traceback.format_exc()}")
        raise HTTPException(status_code=500, detail=f"Scoring failed: {str(e)}")


@router.post("/gallery", response_model=GalleryResponse)
async def suggestion_gallery(content: ContentInput):
    """Data-driven alternatives: charts, timeline, comparison and document layouts."""
    try:
        analysis_service.validate(content)
        extracted, _ = await analysis_service.extract(content)
        return GalleryResponse(suggestions=visual_suggestion_engine.generate_gallery(content, extracted))
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"[Analysis] Gallery failed: {type(e).__name__}: {e}")
        logger.error(f"[Analysis] Traceback: {traceback.format_exc()}")
        raise HTTPException(status_code=500, detail=f"Gallery generation failed: {str(e)}")


@router.get("/cache/stats")
async def cache_stats():
    return analysis_cache.stats()


@router.delete("/cache/expired")
async def cleanup_cache():
    removed = await analysis_cache.cleanup_expired()
    return {"removed": removed}


@router.delete("/cache")
async def clear_cache():
    cleared = await analysis_cache.clear()
    return {"cleared": cleared}
