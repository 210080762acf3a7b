"""Tests for the end-to-end analysis pipeline and the LLM extraction path."""
from unittest.mock import AsyncMock, patch

import pytest

from config import settings
from models.content import (
    AnalysisSource,
    ComplexityLevel,
    ContentInput,
    DataCategory,
    ExtractedData,
    RelationshipType,
)
from services.analysis_service import analysis_service
from services.content_scorer import content_scorer
from services.errors import AnalysisFailure, InputValidationError, LLMUnavailableError
from services.llm_client import LLMClient, LLMExtraction, build_extraction_prompt, llm_client


# ============ Pipeline ============


@pytest.mark.asyncio
async def test_actionable_text_gets_bullet_list(revenue_content):
    analysis = await analysis_service.analyze(revenue_content)

    assert analysis.id.startswith("analysis-")
    assert analysis.source == AnalysisSource.RULES
    assert analysis.suggestions[0].id == "bullet-icons"
    approaches = analysis.smart_analysis.approaches
    assert approaches and all(a.format.value == "short" for a in approaches)
    assert analysis.smart_analysis.recommendations[0].title == "Recommended: Bullet List with Icons"


@pytest.mark.asyncio
async def test_timeline_text_gets_timeline(timeline_content):
    analysis = await analysis_service.analyze(timeline_content)
    assert "timeline-short" in [s.id for s in analysis.suggestions]
    assert analysis.smart_analysis.scoring.temporal_elements > 0.5


@pytest.mark.asyncio
async def test_tiny_text_falls_back_to_standard_presentation(tiny_content):
    analysis = await analysis_service.analyze(tiny_content)

    assert analysis.smart_analysis.approaches == []
    assert [s.id for s in analysis.suggestions] == ["default"]
    assert analysis.suggestions[0].confidence == 0.7


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "    "])
async def test_blank_input_rejected(text):
    with pytest.raises(InputValidationError):
        await analysis_service.analyze(ContentInput(content=text))


@pytest.mark.asyncio
async def test_too_long_input_rejected(monkeypatch):
    monkeypatch.setattr(settings, "max_content_length", 10)
    with pytest.raises(InputValidationError, match="too long"):
        await analysis_service.analyze(ContentInput(content="x" * 11))


@pytest.mark.asyncio
async def test_unexpected_error_wrapped(revenue_content):
    with patch.object(content_scorer, "score", side_effect=RuntimeError("boom")):
        with pytest.raises(AnalysisFailure) as exc_info:
            await analysis_service.analyze(revenue_content)

    assert "boom" in str(exc_info.value)
    assert isinstance(exc_info.value.cause, RuntimeError)


@pytest.mark.asyncio
async def test_cache_returns_same_analysis(revenue_content):
    first = await analysis_service.analyze(revenue_content)
    second = await analysis_service.analyze(ContentInput(content=revenue_content.content))
    assert second.id == first.id


@pytest.mark.asyncio
async def test_caching_disabled(monkeypatch, revenue_content):
    monkeypatch.setattr(settings, "enable_response_caching", False)
    first = await analysis_service.analyze(revenue_content)
    second = await analysis_service.analyze(revenue_content)
    assert second.id != first.id
    # Same input, same ranking
    assert [s.id for s in second.suggestions] == [s.id for s in first.suggestions]


# ============ LLM Path ============


@pytest.mark.asyncio
async def test_llm_failure_falls_back_to_rules(monkeypatch, revenue_content):
    monkeypatch.setattr(settings, "llm_provider", "ollama")
    failing = AsyncMock(side_effect=LLMUnavailableError("connection refused"))

    with patch.object(llm_client, "extract", failing):
        analysis = await analysis_service.analyze(revenue_content)

    failing.assert_awaited_once()
    assert analysis.source == AnalysisSource.RULES
    assert analysis.suggestions[0].id == "bullet-icons"


@pytest.mark.asyncio
async def test_llm_extraction_used_when_available(monkeypatch, revenue_content):
    monkeypatch.setattr(settings, "llm_provider", "ollama")
    extracted = ExtractedData(key_points=["Revenue grew 25% in Q4"])

    with patch.object(llm_client, "extract", AsyncMock(return_value=extracted)):
        analysis = await analysis_service.analyze(revenue_content)

    assert analysis.source == AnalysisSource.LLM
    assert analysis.extracted_data == extracted


def test_llm_not_configured_by_default():
    assert not llm_client.is_configured


def test_openai_needs_api_key(monkeypatch):
    monkeypatch.setattr(settings, "llm_provider", "openai")
    monkeypatch.setattr(settings, "openai_api_key", "")
    assert not llm_client.is_configured
    monkeypatch.setattr(settings, "openai_api_key", "sk-test")
    assert llm_client.is_configured


@pytest.mark.asyncio
async def test_chat_json_unconfigured_raises():
    with pytest.raises(LLMUnavailableError, match="not configured"):
        await llm_client.chat_json("system", "prompt")


@pytest.mark.asyncio
async def test_chat_json_rejects_non_object_replies(monkeypatch):
    monkeypatch.setattr(settings, "llm_provider", "ollama")
    client = LLMClient()

    with patch.object(client, "_call_ollama", AsyncMock(return_value="not json")):
        with pytest.raises(LLMUnavailableError, match="not valid JSON"):
            await client.chat_json("system", "prompt")

    with patch.object(client, "_call_ollama", AsyncMock(return_value="[1, 2]")):
        with pytest.raises(LLMUnavailableError, match="not a JSON object"):
            await client.chat_json("system", "prompt")


@pytest.mark.asyncio
async def test_extract_gives_up_after_invalid_replies(monkeypatch):
    monkeypatch.setattr(settings, "llm_provider", "ollama")
    client = LLMClient()
    client.max_retries = 1

    with patch.object(client, "chat_json", AsyncMock(return_value={"sentiment": "ecstatic"})):
        with pytest.raises(LLMUnavailableError, match="after 1 attempts"):
            await client.extract(ContentInput(content="Some content"))


def test_llm_extraction_normalized():
    raw = LLMExtraction(
        key_points=["  First  ", "", "Second"],
        data_points=[{"value": 25, "label": "25%", "category": "percentage"}],
        relationships=[{"source": "a" * 80, "target": "b", "type": "causal"}],
        sentiment="positive",
        complexity=8,
    )
    extracted = raw.to_extracted("One. Two. Three. Four.")

    assert extracted.key_points == ["First", "Second"]
    assert extracted.data_points[0].id == "percentage-0"
    assert extracted.data_points[0].category == DataCategory.PERCENTAGE
    rel = extracted.relationships[0]
    assert rel.type == RelationshipType.CAUSAL
    assert rel.strength == 0.8
    assert len(rel.source) == 50
    assert extracted.complexity == ComplexityLevel.HIGH
    assert LLMExtraction(complexity=4).to_extracted("Some content").complexity == ComplexityLevel.MEDIUM


def test_llm_key_points_bounded_by_sentence_count():
    raw = LLMExtraction(key_points=[f"Point {i}" for i in range(8)])
    assert raw.to_extracted("Only one sentence here.").key_points == ["Point 0"]
    assert len(raw.to_extracted("A. " * 40).key_points) == 8
    assert len(LLMExtraction(key_points=["p"] * 15).to_extracted("A. " * 40).key_points) == 10


@pytest.mark.asyncio
async def test_extract_caps_key_points_against_content(monkeypatch):
    monkeypatch.setattr(settings, "llm_provider", "ollama")
    client = LLMClient()
    reply = {"key_points": ["First", "Second", "Third"]}

    with patch.object(client, "chat_json", AsyncMock(return_value=reply)):
        extracted = await client.extract(ContentInput(content="Revenue grew. Costs fell."))

    assert extracted.key_points == ["First"]


def test_extraction_prompt_includes_metadata(report_content):
    prompt = build_extraction_prompt(report_content)
    assert prompt.startswith("Content Type: document")
    assert '"title": "Annual Report"' in prompt
