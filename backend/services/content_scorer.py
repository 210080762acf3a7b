"""Content Scoring System

Maps raw text plus extracted features to eight normalized [0, 1] metrics.

Every metric is a saturating sum: each sub-signal is ``min(raw / norm, cap)``
and the total is clamped to [0, 1]. Weights and caps are fixed heuristic
constants, not tunable parameters.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import List

from models.content import (
    ContentInput,
    DataCategory,
    ExtractedData,
    RelationshipType,
    ScoringMetrics,
)
from services.content_analyzer import split_sentences, split_words

logger = logging.getLogger(__name__)


TECHNICAL_INDICATORS = [
    'algorithm', 'methodology', 'framework', 'implementation', 'optimization',
    'analysis', 'correlation', 'regression', 'hypothesis', 'variable',
    'coefficient', 'statistical', 'empirical', 'quantitative', 'qualitative',
]

TIME_INDICATORS = {
    'january', 'february', 'march', 'april', 'may', 'june',
    'july', 'august', 'september', 'october', 'november', 'december',
    'monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday',
    'yesterday', 'today', 'tomorrow', 'week', 'month', 'year',
    'before', 'after', 'during', 'since', 'until', 'timeline',
}

ACTION_WORDS = [
    'implement', 'execute', 'develop', 'create', 'build', 'design',
    'analyze', 'evaluate', 'assess', 'review', 'improve', 'optimize',
    'should', 'must', 'need', 'require', 'recommend', 'suggest',
]

CONCEPTUAL_INDICATORS = ['however', 'furthermore', 'consequently', 'nevertheless']

TRANSITION_WORDS = {
    'first', 'second', 'third', 'finally', 'then', 'next', 'after',
    'before', 'meanwhile', 'subsequently', 'therefore', 'thus', 'hence',
}

STAT_KEYWORDS = ['average', 'mean', 'median', 'percentage', 'ratio', 'correlation']

ABSTRACT_WORDS = [
    'concept', 'theory', 'principle', 'framework', 'paradigm',
    'philosophy', 'methodology', 'approach', 'strategy', 'model',
]

IMPERATIVES = [
    'implement', 'execute', 'develop', 'create', 'build', 'design',
    'analyze', 'evaluate', 'review', 'improve', 'optimize', 'consider',
    'should', 'must', 'need', 'require', 'recommend', 'suggest',
]

DECISION_WORDS = ['choose', 'decide', 'select', 'option', 'alternative']

# Future tense and forward-looking time phrases both signal planning
FUTURE_INDICATORS = [
    'will', 'shall', 'going to', 'plan to', 'intend to',
    'next year', 'next quarter', 'next month', 'next week',
]

JARGON_WORDS = [
    'leverage', 'synergy', 'paradigm', 'optimization', 'methodology',
    'implementation', 'infrastructure', 'scalability', 'architecture',
]

YEAR_TOKEN = re.compile(r'\b(19|20)\d{2}\b')
LIST_BULLET = re.compile(r'^\s*[-•*]\s', re.MULTILINE)
LIST_NUMBERED = re.compile(r'^\s*\d+\.\s', re.MULTILINE)
PARAGRAPH_BREAK = re.compile(r'\n\s*\n')


def clamp(value: float) -> float:
    return max(0.0, min(value, 1.0))


def _contains_any(word: str, needles: List[str]) -> bool:
    return any(needle in word for needle in needles)


@dataclass
class ContentCharacteristics:
    """Raw counts the metric formulas draw on."""
    word_count: int
    sentence_complexity: float          # Average words per sentence
    technical_terms: List[str] = field(default_factory=list)
    data_points: int = 0                # Digit runs anywhere in the text
    time_references: int = 0
    action_words: int = 0
    question_count: int = 0
    list_structures: int = 0


def analyze_characteristics(text: str) -> ContentCharacteristics:
    words = split_words(text)
    word_count = max(1, len(words))
    sentence_count = max(1, len(split_sentences(text)))
    lower_words = text.lower().split()

    technical_terms = [w for w in words if _contains_any(w.lower(), TECHNICAL_INDICATORS)]
    time_references = sum(
        1 for w in lower_words if w in TIME_INDICATORS or YEAR_TOKEN.search(w)
    )
    action_count = sum(1 for w in words if _contains_any(w.lower(), ACTION_WORDS))
    list_structures = len(LIST_BULLET.findall(text)) + len(LIST_NUMBERED.findall(text))

    return ContentCharacteristics(
        word_count=word_count,
        sentence_complexity=len(words) / sentence_count,
        technical_terms=technical_terms,
        data_points=len(re.findall(r'\d+', text)),
        time_references=time_references,
        action_words=action_count,
        question_count=text.count('?'),
        list_structures=list_structures,
    )


# =============================================================================
# Metrics
# =============================================================================

def calculate_complexity(chars: ContentCharacteristics, data: ExtractedData) -> float:
    complexity = 0.0
    complexity += min(chars.sentence_complexity / 25, 0.3)
    complexity += min(len(chars.technical_terms) / chars.word_count * 10, 0.3)
    complexity += min(len(data.relationships) / 10, 0.2)

    key_point_text = ' '.join(data.key_points).lower()
    conceptual = sum(1 for indicator in CONCEPTUAL_INDICATORS if indicator in key_point_text)
    complexity += min(conceptual / 5, 0.2)

    return clamp(complexity)


def calculate_data_richness(chars: ContentCharacteristics, data: ExtractedData) -> float:
    richness = 0.0
    richness += min(len(data.data_points) / 10, 0.4)
    richness += min(chars.data_points / chars.word_count * 20, 0.3)

    categories = {d.category for d in data.data_points}
    richness += min(len(categories) / 5, 0.3)

    return clamp(richness)


def calculate_narrative_flow(chars: ContentCharacteristics, text: str) -> float:
    flow = 0.0
    transitions = sum(1 for w in text.lower().split() if w in TRANSITION_WORDS)
    flow += min(transitions / chars.word_count * 50, 0.4)

    paragraphs = len(PARAGRAPH_BREAK.split(text))
    flow += min(paragraphs / 10, 0.3)

    flow += min(chars.question_count / 5, 0.3)

    return clamp(flow)


def calculate_temporal_elements(data: ExtractedData) -> float:
    temporal = 0.0
    years = [d for d in data.data_points if d.category == DataCategory.YEAR]
    temporal += min(len(years) / 5, 0.5)

    temporal_rels = [r for r in data.relationships if r.type == RelationshipType.TEMPORAL]
    temporal += min(len(temporal_rels) / 3, 0.5)

    return clamp(temporal)


def calculate_quantitative_data(data: ExtractedData) -> float:
    quantitative = 0.0
    numerical = [d for d in data.data_points if d.category != DataCategory.YEAR]
    quantitative += min(len(numerical) / 8, 0.6)

    key_point_words = ' '.join(data.key_points).lower().split()
    stat_count = sum(1 for w in key_point_words if _contains_any(w, STAT_KEYWORDS))
    quantitative += min(stat_count / 5, 0.4)

    return clamp(quantitative)


def calculate_conceptual_depth(chars: ContentCharacteristics, text: str) -> float:
    depth = 0.0
    lower_words = text.lower().split()
    abstract = sum(1 for w in lower_words if _contains_any(w, ABSTRACT_WORDS))
    depth += min(abstract / chars.word_count * 20, 0.4)

    depth += min(len(chars.technical_terms) / chars.word_count * 15, 0.3)

    # Longer words hint at denser vocabulary; short words pull the total down
    avg_word_length = sum(len(w) for w in text.split()) / chars.word_count
    depth += min((avg_word_length - 4) / 6, 0.3)

    return clamp(depth)


def calculate_actionability(chars: ContentCharacteristics, text: str) -> float:
    actionability = 0.0
    lower = text.lower()
    lower_words = lower.split()

    action_count = sum(1 for w in lower_words if _contains_any(w, IMPERATIVES))
    actionability += min(action_count / chars.word_count * 20, 0.5)

    decisions = sum(1 for w in lower_words if _contains_any(w, DECISION_WORDS))
    actionability += min(decisions / 10, 0.3)

    future = sum(1 for indicator in FUTURE_INDICATORS if indicator in lower)
    actionability += min(future / 5, 0.2)

    return clamp(actionability)


def calculate_audience_level(chars: ContentCharacteristics) -> float:
    level = 0.0
    level += min(len(chars.technical_terms) / chars.word_count * 10, 0.4)
    level += min((chars.sentence_complexity - 10) / 20, 0.3)

    jargon = sum(1 for term in chars.technical_terms if _contains_any(term.lower(), JARGON_WORDS))
    level += min(jargon / 5, 0.3)

    return clamp(level)


class ContentScorer:
    """Scores content across the eight presentation-relevant dimensions."""

    def score(self, content: ContentInput, extracted: ExtractedData) -> ScoringMetrics:
        text = content.content
        chars = analyze_characteristics(text)

        metrics = ScoringMetrics(
            complexity=calculate_complexity(chars, extracted),
            data_richness=calculate_data_richness(chars, extracted),
            narrative_flow=calculate_narrative_flow(chars, text),
            temporal_elements=calculate_temporal_elements(extracted),
            quantitative_data=calculate_quantitative_data(extracted),
            conceptual_depth=calculate_conceptual_depth(chars, text),
            actionability=calculate_actionability(chars, text),
            audience_level=calculate_audience_level(chars),
        )
        logger.debug(f"[Scorer] {metrics.model_dump()}")
        return metrics


# Singleton instance
content_scorer = ContentScorer()
