"""Workflow session API endpoints

Each session walks input -> processing -> preview -> editing -> export.
"""
import logging
import traceback
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from models.content import ContentInput, VisualElement
from models.session import ExportResult, WorkflowSession
from models.theme import ExportOptions
from services.errors import (
    AnalysisFailure,
    ExportNotSupportedError,
    InputValidationError,
    SessionNotFoundError,
    SuggestionNotFoundError,
    ThemeNotFoundError,
    WorkflowStateError,
)
from services.workflow import workflow_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    content: Optional[ContentInput] = None


class AnalyzeSessionRequest(BaseModel):
    content: Optional[ContentInput] = None


class SelectSuggestionRequest(BaseModel):
    suggestion_id: str


class SetThemeRequest(BaseModel):
    theme_id: str


def _http_error(e: Exception) -> HTTPException:
    """Map workflow errors onto HTTP status codes."""
    if isinstance(e, (SessionNotFoundError, SuggestionNotFoundError, ThemeNotFoundError)):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, InputValidationError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, WorkflowStateError):
        return HTTPException(status_code=409, detail=str(e))
    if isinstance(e, ExportNotSupportedError):
        return HTTPException(status_code=501, detail=str(e))
    if isinstance(e, AnalysisFailure):
        return HTTPException(status_code=500, detail=str(e))

    logger.error(f"[Sessions] Error: {type(e).__name__}: {str(e)}")
    logger.error(f"[Sessions] Traceback: {traceback.format_exc()}")
    return HTTPException(status_code=500, detail=f"Session operation failed: {str(e)}")


# =============================================================================
# API Endpoints
# =============================================================================

@router.post("", response_model=WorkflowSession)
async def create_session(request: CreateSessionRequest):
    return await workflow_service.create(request.content)


@router.get("", response_model=List[WorkflowSession])
async def list_sessions():
    return await workflow_service.list()


@router.get("/stats")
async def session_stats():
    return await workflow_service.stats()


@router.get("/{session_id}", response_model=WorkflowSession)
async def get_session(session_id: str):
    try:
        return await workflow_service.get(session_id)
    except Exception as e:
        raise _http_error(e)


@router.post("/{session_id}/analyze", response_model=WorkflowSession)
async def analyze_session(session_id: str, request: AnalyzeSessionRequest):
    try:
        return await workflow_service.analyze(session_id, request.content)
    except Exception as e:
        raise _http_error(e)


@router.post("/{session_id}/select", response_model=WorkflowSession)
async def select_suggestion(session_id: str, request: SelectSuggestionRequest):
    try:
        return await workflow_service.select(session_id, request.suggestion_id)
    except Exception as e:
        raise _http_error(e)


@router.put("/{session_id}/theme", response_model=WorkflowSession)
async def set_theme(session_id: str, request: SetThemeRequest):
    try:
        return await workflow_service.set_theme(session_id, request.theme_id)
    except Exception as e:
        raise _http_error(e)


@router.get("/{session_id}/elements", response_model=List[VisualElement])
async def themed_elements(session_id: str):
    """Selected suggestion's elements with the session theme applied."""
    try:
        return await workflow_service.themed_elements(session_id)
    except Exception as e:
        raise _http_error(e)


@router.post("/{session_id}/export", response_model=ExportResult)
async def export_session(session_id: str, options: ExportOptions):
    try:
        return await workflow_service.export(session_id, options)
    except Exception as e:
        raise _http_error(e)


@router.post("/{session_id}/reset", response_model=WorkflowSession)
async def reset_session(session_id: str):
    try:
        return await workflow_service.reset(session_id)
    except Exception as e:
        raise _http_error(e)


@router.delete("/{session_id}")
async def delete_session(session_id: str):
    try:
        await workflow_service.delete(session_id)
        return {"deleted": session_id}
    except Exception as e:
        raise _http_error(e)
