"""
Analysis Service - Single entry point for content analysis.

Pipeline:
1. Validate input (empty / too short / too long -> InputValidationError)
2. Cache lookup by content hash
3. Extraction: LLM when configured, rule-based otherwise or on any LLM failure
4. Scoring, approach selection, approach-driven suggestions
5. Fallback "Standard Presentation" suggestion when no approach qualifies
6. Smart analysis (recommendations, best practices), cache write

Extraction and scoring are pure functions of the input, so the same content
always yields the same metrics and ranking.
"""
import asyncio
import logging
import uuid
from typing import List, Tuple

from config import settings
from models.content import (
    AnalysisSource,
    ContentAnalysis,
    ContentInput,
    ExtractedData,
    PresentationApproach,
    ScoringMetrics,
    VisualSuggestion,
)
from services.analysis_cache import analysis_cache
from services.content_analyzer import content_analyzer
from services.content_scorer import content_scorer
from services.errors import AnalysisFailure, InputValidationError, LLMUnavailableError
from services.llm_client import llm_client
from services.presentation_strategy import presentation_strategy
from services.smart_suggestions import smart_suggestion_engine
from services.visual_suggestion_engine import visual_suggestion_engine

logger = logging.getLogger(__name__)


class AnalysisService:
    """Runs the full analysis pipeline for one content input."""

    def validate(self, content: ContentInput) -> None:
        content_analyzer.validate(
            content,
            min_length=settings.min_content_length,
            max_length=settings.max_content_length,
        )

    async def extract(self, content: ContentInput) -> Tuple[ExtractedData, AnalysisSource]:
        """Extract features, preferring the LLM when one is configured."""
        if llm_client.is_configured:
            try:
                extracted = await llm_client.extract(content)
                logger.info("[Analysis] Using LLM extraction")
                return extracted, AnalysisSource.LLM
            except LLMUnavailableError as e:
                logger.warning(f"[Analysis] LLM extraction unavailable, falling back to rules: {e}")

        return content_analyzer.extract(content), AnalysisSource.RULES

    def score(
        self,
        content: ContentInput,
        extracted: ExtractedData,
    ) -> Tuple[ScoringMetrics, List[PresentationApproach]]:
        scoring = content_scorer.score(content, extracted)
        approaches = presentation_strategy.generate_approaches(scoring, extracted)
        return scoring, approaches

    def suggest(
        self,
        content: ContentInput,
        extracted: ExtractedData,
        approaches: List[PresentationApproach],
    ) -> List[VisualSuggestion]:
        suggestions = visual_suggestion_engine.suggestions_for_approaches(approaches, extracted, content)
        if not suggestions:
            logger.info("[Analysis] No approach qualified, using standard presentation")
            suggestions = [visual_suggestion_engine.default_suggestion(extracted, content)]
        return suggestions[:settings.max_suggestions]

    async def analyze(self, content: ContentInput) -> ContentAnalysis:
        self.validate(content)

        if settings.enable_response_caching:
            try:
                cached = await analysis_cache.get(content)
                if cached is not None:
                    logger.info(f"[Analysis] Cache hit: {cached.id}")
                    return cached
            except Exception as e:
                logger.warning(f"[Analysis] Cache read failed: {e}")

        try:
            extracted, source = await self.extract(content)

            if settings.analysis_delay_seconds > 0 and source == AnalysisSource.RULES:
                await asyncio.sleep(settings.analysis_delay_seconds)

            scoring, approaches = self.score(content, extracted)
            suggestions = self.suggest(content, extracted, approaches)
            smart = smart_suggestion_engine.build(content, extracted, scoring, approaches, suggestions)

            analysis = ContentAnalysis(
                id=f"analysis-{uuid.uuid4().hex[:12]}",
                original_content=content,
                extracted_data=extracted,
                suggestions=suggestions,
                smart_analysis=smart,
                source=source,
            )
        except InputValidationError:
            raise
        except Exception as e:
            logger.error(f"[Analysis] Pipeline failed: {e}", exc_info=True)
            raise AnalysisFailure(f"Analysis failed: {e}", cause=e) from e

        logger.info(
            f"[Analysis] {analysis.id}: {len(approaches)} approaches, "
            f"{len(suggestions)} suggestions (source={source.value})"
        )

        if settings.enable_response_caching:
            try:
                await analysis_cache.set(content, analysis)
            except Exception as e:
                logger.warning(f"[Analysis] Cache write failed: {e}")

        return analysis


# Singleton instance
analysis_service = AnalysisService()
