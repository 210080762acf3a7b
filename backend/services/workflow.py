"""
Workflow Service - Drives a session through input -> processing -> preview ->
editing -> export.

A failed analysis returns the session to the input step with the error kept
on the session so the client can show it.
"""
import logging
from typing import Dict, List, Optional

from config import settings
from models.content import ContentInput, VisualElement, VisualSuggestion
from models.session import ExportResult, WorkflowSession, WorkflowStep
from models.theme import ExportFormat, ExportOptions
from services.analysis_service import analysis_service
from services.errors import (
    AnalysisFailure,
    ExportNotSupportedError,
    InputValidationError,
    SessionNotFoundError,
    SuggestionNotFoundError,
    WorkflowStateError,
)
from services.theme_renderer import apply_theme, get_theme, render_svg
from storage.session_store import SessionStore, session_store

logger = logging.getLogger(__name__)


class WorkflowService:
    def __init__(self, store: SessionStore = None):
        self.store = store or session_store

    async def create(self, content: Optional[ContentInput] = None) -> WorkflowSession:
        session = WorkflowSession(content=content, theme_id=settings.default_theme)
        await self.store.save(session)
        logger.info(f"[Workflow] Created session {session.id}")
        return session

    async def list(self) -> List[WorkflowSession]:
        return await self.store.list()

    async def stats(self) -> Dict[str, int]:
        """Session counts, total and per workflow step."""
        return await self.store.stats()

    async def get(self, session_id: str) -> WorkflowSession:
        session = await self.store.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    async def analyze(self, session_id: str, content: Optional[ContentInput] = None) -> WorkflowSession:
        session = await self.get(session_id)
        content = content or session.content
        if content is None:
            raise WorkflowStateError("Session has no content to analyze")

        session.content = content
        session.step = WorkflowStep.PROCESSING
        session.error = None
        await self.store.save(session)

        try:
            analysis = await analysis_service.analyze(content)
        except InputValidationError as e:
            await self._fail(session, str(e))
            raise
        except AnalysisFailure as e:
            await self._fail(session, str(e))
            raise

        session.analysis = analysis
        session.selected_suggestion_id = None
        session.step = WorkflowStep.PREVIEW
        await self.store.save(session)
        logger.info(f"[Workflow] Session {session.id} ready for preview ({len(analysis.suggestions)} suggestions)")
        return session

    async def _fail(self, session: WorkflowSession, message: str) -> None:
        logger.warning(f"[Workflow] Session {session.id} analysis failed: {message}")
        session.step = WorkflowStep.INPUT
        session.error = message
        await self.store.save(session)

    def _find_suggestion(self, session: WorkflowSession, suggestion_id: str) -> VisualSuggestion:
        if session.analysis is None:
            raise WorkflowStateError("Session has not been analyzed yet")
        for suggestion in session.analysis.suggestions:
            if suggestion.id == suggestion_id:
                return suggestion
        raise SuggestionNotFoundError(suggestion_id)

    async def select(self, session_id: str, suggestion_id: str) -> WorkflowSession:
        session = await self.get(session_id)
        self._find_suggestion(session, suggestion_id)

        session.selected_suggestion_id = suggestion_id
        session.step = WorkflowStep.EDITING
        await self.store.save(session)
        return session

    async def set_theme(self, session_id: str, theme_id: str) -> WorkflowSession:
        get_theme(theme_id)
        session = await self.get(session_id)
        session.theme_id = theme_id
        await self.store.save(session)
        return session

    def selected_elements(self, session: WorkflowSession) -> List[VisualElement]:
        if not session.selected_suggestion_id:
            raise WorkflowStateError("No suggestion selected")
        return self._find_suggestion(session, session.selected_suggestion_id).elements

    async def themed_elements(self, session_id: str) -> List[VisualElement]:
        session = await self.get(session_id)
        return apply_theme(self.selected_elements(session), session.theme_id)

    async def export(self, session_id: str, options: ExportOptions) -> ExportResult:
        session = await self.get(session_id)
        elements = self.selected_elements(session)

        if options.format != ExportFormat.SVG:
            raise ExportNotSupportedError(f"Export to {options.format.value} is not implemented")

        svg = render_svg(elements, session.theme_id)
        session.step = WorkflowStep.EXPORT
        await self.store.save(session)
        logger.info(f"[Workflow] Exported session {session.id} as {options.format.value}")

        return ExportResult(
            session_id=session.id,
            format=options.format.value,
            media_type="image/svg+xml",
            content=svg,
        )

    async def reset(self, session_id: str) -> WorkflowSession:
        """Back to a blank input step; the chosen theme is kept."""
        session = await self.get(session_id)
        session.step = WorkflowStep.INPUT
        session.content = None
        session.analysis = None
        session.selected_suggestion_id = None
        session.error = None
        await self.store.save(session)
        return session

    async def delete(self, session_id: str) -> None:
        if not await self.store.delete(session_id):
            raise SessionNotFoundError(session_id)


# Singleton instance
workflow_service = WorkflowService()
