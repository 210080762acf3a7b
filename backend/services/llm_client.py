"""
LLM Client - Optional hosted-model extraction path

Talks to an OpenAI-compatible chat endpoint or a local Ollama server in JSON
mode and validates the reply into ExtractedData. Any failure raises
LLMUnavailableError; callers fall back to the rule-based extractor.
"""
import asyncio
import json
import logging
import math
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, Field, ValidationError

from config import settings
from models.content import (
    ComplexityLevel,
    ContentInput,
    DataCategory,
    DataPoint,
    ExtractedData,
    Relationship,
    RelationshipType,
    Sentiment,
)
from services.content_analyzer import KEY_POINT_RATIO, MAX_DATA_POINTS, MAX_KEY_POINTS, split_sentences
from services.errors import LLMUnavailableError

logger = logging.getLogger(__name__)


EXTRACTION_SYSTEM_PROMPT = """You are an expert content analyst specializing in extracting structured information from text for visualization purposes.

Output a valid JSON object with this structure:
{
    "key_points": ["main idea", "..."],
    "data_points": [{"value": 25, "label": "25%", "category": "percentage|currency|year|metric|rating"}],
    "relationships": [{"source": "cause", "target": "effect", "type": "causal|temporal|correlational", "strength": 0.8}],
    "sentiment": "positive|neutral|negative",
    "complexity": 1-10
}

Rules:
- At most 10 key points, most important first
- Only numbers that actually appear in the content
- Be thorough but concise"""

STRENGTHS = {
    RelationshipType.CAUSAL: 0.8,
    RelationshipType.TEMPORAL: 0.7,
    RelationshipType.CORRELATIONAL: 0.6,
}


# =============================================================================
# Output model for structured generation
# =============================================================================

class LLMDataPoint(BaseModel):
    value: float = Field(description="Numeric value")
    label: str = Field(description="Text as it appears in the content")
    category: DataCategory = Field(default=DataCategory.METRIC)


class LLMRelationship(BaseModel):
    source: str
    target: str
    type: RelationshipType = Field(default=RelationshipType.CORRELATIONAL)
    strength: Optional[float] = Field(default=None, ge=0.0, le=1.0)


class LLMExtraction(BaseModel):
    """Raw extraction reply before ids and caps are applied."""
    key_points: List[str] = Field(default_factory=list)
    data_points: List[LLMDataPoint] = Field(default_factory=list)
    relationships: List[LLMRelationship] = Field(default_factory=list)
    sentiment: Sentiment = Sentiment.NEUTRAL
    complexity: float = Field(default=5, description="1 (simple) to 10 (complex)")

    def to_extracted(self, text: str) -> ExtractedData:
        """Apply ids and the same caps as the rule-based extractor to a reply about ``text``."""
        key_point_limit = min(MAX_KEY_POINTS, math.ceil(len(split_sentences(text)) * KEY_POINT_RATIO))
        if self.complexity >= 7:
            level = ComplexityLevel.HIGH
        elif self.complexity >= 4:
            level = ComplexityLevel.MEDIUM
        else:
            level = ComplexityLevel.LOW

        return ExtractedData(
            key_points=[p.strip() for p in self.key_points if p.strip()][:key_point_limit],
            data_points=[
                DataPoint(id=f"{d.category.value}-{i}", value=d.value, label=d.label, category=d.category)
                for i, d in enumerate(self.data_points[:MAX_DATA_POINTS])
            ],
            relationships=[
                Relationship(
                    id=f"{r.type.value}-{i}",
                    source=r.source.strip()[:50],
                    target=r.target.strip()[:50],
                    type=r.type,
                    strength=r.strength if r.strength is not None else STRENGTHS[r.type],
                )
                for i, r in enumerate(self.relationships[:20])
            ],
            sentiment=self.sentiment,
            complexity=level,
        )


def build_extraction_prompt(content: ContentInput) -> str:
    metadata = content.metadata.model_dump(exclude_none=True)
    prompt = f"Content Type: {content.type.value}\nContent:\n{content.content[:8000]}"
    if metadata:
        prompt += f"\nMetadata: {json.dumps(metadata)}"
    return prompt


class LLMClient:
    """Async chat client for the configured provider."""

    def __init__(self):
        self.max_retries = 2

    @property
    def provider(self) -> str:
        return settings.llm_provider.lower()

    @property
    def is_configured(self) -> bool:
        if self.provider == "openai":
            return bool(settings.openai_api_key)
        return self.provider == "ollama"

    async def _call_openai(self, messages: List[Dict[str, str]], temperature: float) -> str:
        async with httpx.AsyncClient(timeout=httpx.Timeout(10.0, read=settings.llm_timeout)) as client:
            response = await client.post(
                f"{settings.openai_base_url.rstrip('/')}/chat/completions",
                headers={"Authorization": f"Bearer {settings.openai_api_key}"},
                json={
                    "model": settings.openai_model,
                    "messages": messages,
                    "temperature": temperature,
                    "response_format": {"type": "json_object"},
                },
            )
            response.raise_for_status()
            return response.json()["choices"][0]["message"]["content"]

    async def _call_ollama(self, messages: List[Dict[str, str]], temperature: float) -> str:
        async with httpx.AsyncClient(timeout=httpx.Timeout(10.0, read=settings.llm_timeout)) as client:
            response = await client.post(
                f"{settings.ollama_base_url.rstrip('/')}/api/chat",
                json={
                    "model": settings.ollama_model,
                    "messages": messages,
                    "stream": False,
                    "format": "json",
                    "options": {"temperature": temperature},
                },
            )
            response.raise_for_status()
            return response.json()["message"]["content"]

    async def chat_json(
        self,
        system: str,
        prompt: str,
        temperature: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Send one system+user exchange and parse the reply as a JSON object."""
        if not self.is_configured:
            raise LLMUnavailableError(f"LLM provider '{self.provider}' is not configured")

        temperature = settings.llm_temperature if temperature is None else temperature
        messages = [
            {"role": "system", "content": system},
            {"role": "user", "content": prompt},
        ]
        call = self._call_openai if self.provider == "openai" else self._call_ollama

        try:
            raw = await call(messages, temperature)
        except httpx.TimeoutException as e:
            raise LLMUnavailableError(f"LLM request timed out after {settings.llm_timeout}s") from e
        except (httpx.HTTPError, KeyError, IndexError) as e:
            raise LLMUnavailableError(f"LLM request failed: {e}") from e

        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as e:
            raise LLMUnavailableError("LLM reply was not valid JSON") from e
        if not isinstance(parsed, dict):
            raise LLMUnavailableError("LLM reply was not a JSON object")
        return parsed

    async def extract(self, content: ContentInput) -> ExtractedData:
        """LLM-backed feature extraction, retried on invalid replies."""
        prompt = build_extraction_prompt(content)
        last_error: Optional[Exception] = None

        for attempt in range(self.max_retries):
            try:
                result = await self.chat_json(EXTRACTION_SYSTEM_PROMPT, prompt)
                return LLMExtraction(**result).to_extracted(content.content)
            except ValidationError as e:
                last_error = e
                logger.warning(f"[LLM] Extraction reply failed validation (attempt {attempt + 1}): {e}")
                await asyncio.sleep(0.5)

        raise LLMUnavailableError(f"LLM extraction failed after {self.max_retries} attempts: {last_error}")


# Singleton instance
llm_client = LLMClient()
