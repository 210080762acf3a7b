"""Tests for the eight-metric content scorer."""
import pytest

from models.content import ContentInput, ExtractedData
from services.content_analyzer import content_analyzer
from services.content_scorer import (
    analyze_characteristics,
    calculate_temporal_elements,
    clamp,
    content_scorer,
)

SAMPLE_TEXTS = [
    "hi ok",
    "Revenue grew 25% in Q4. We should expand to Europe next year.",
    "First we designed the prototype. Then we tested it in 2023. Finally we shipped in 2024.",
    "The methodology leverages a regression framework; however, the statistical implementation "
    "requires optimization of every coefficient and hypothesis variable in the empirical analysis.",
    "What next? Why now? How much? Who decides? Where to?\n\nSecond paragraph.\n\nThird paragraph.",
    "1 2 3 4 5 6 7 8 9 10 11 12 13 14 15 16 17 18 19 20 $5 $6 7% 8% 2020 2021 2022",
]


def _score(text: str):
    content = ContentInput(content=text)
    return content_scorer.score(content, content_analyzer.extract(content))


def test_clamp():
    assert clamp(-0.4) == 0.0
    assert clamp(1.7) == 1.0
    assert clamp(0.25) == 0.25


@pytest.mark.parametrize("text", SAMPLE_TEXTS)
def test_all_metrics_in_unit_interval(text):
    metrics = _score(text)
    for name, value in metrics.model_dump().items():
        assert 0.0 <= value <= 1.0, name


@pytest.mark.parametrize("text", SAMPLE_TEXTS)
def test_scoring_is_deterministic(text):
    assert _score(text) == _score(text)


def test_characteristics_guard_empty_counts():
    chars = analyze_characteristics("")
    assert chars.word_count == 1
    assert chars.sentence_complexity == 0


def test_actionable_revenue_text(revenue_content):
    metrics = _score(revenue_content.content)
    assert metrics.actionability > 0.6
    assert metrics.complexity < 0.5


def test_temporal_sequence(timeline_content):
    metrics = _score(timeline_content.content)
    assert metrics.temporal_elements > 0.5


def test_tiny_text_scores_low(tiny_content):
    metrics = _score(tiny_content.content)
    assert metrics.complexity < 0.3
    assert metrics.data_richness == 0.0
    assert metrics.conceptual_depth == 0.0
    assert metrics.actionability == 0.0


def test_temporal_elements_saturate():
    extracted = content_analyzer.extract(
        ContentInput(content="In 2001, 2002, 2003, 2004, 2005, 2006 and 2007 we grew.")
    )
    assert calculate_temporal_elements(extracted) >= 0.5
    assert calculate_temporal_elements(ExtractedData()) == 0.0


def test_technical_text_reads_as_complex_and_expert():
    metrics = _score(SAMPLE_TEXTS[3])
    assert metrics.audience_level > 0.5
    assert metrics.conceptual_depth > 0.5


def test_questions_and_paragraphs_raise_narrative_flow():
    assert _score(SAMPLE_TEXTS[4]).narrative_flow > _score("A plain statement here.").narrative_flow
