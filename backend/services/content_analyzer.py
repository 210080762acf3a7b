"""Content Analyzer

Pulls structure out of raw text with regex/keyword heuristics:
- Key points: the highest-scoring sentences (top 30%, max 10)
- Data points: percentages, currency, years, "word number" metrics, ratings
- Relationships: causal / temporal / comparison trigger phrases
- Sentiment and a coarse complexity level

Every regex family is a named rule in a table (DATA_POINT_RULES,
RELATIONSHIP_RULES) so each can be tested and audited on its own.
"""
import logging
import math
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Pattern, Tuple

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
from services.errors import InputValidationError

logger = logging.getLogger(__name__)


SENTENCE_SPLIT = re.compile(r'[.!?]+')

MAX_KEY_POINTS = 10
KEY_POINT_RATIO = 0.3
MAX_DATA_POINTS = 20


def split_sentences(text: str) -> List[str]:
    """Split on runs of sentence punctuation, dropping blank fragments."""
    return [s for s in SENTENCE_SPLIT.split(text) if s.strip()]


def split_words(text: str) -> List[str]:
    return text.split()


# =============================================================================
# Key points
# =============================================================================

IMPORTANT_KEYWORDS = [
    'important', 'key', 'main', 'primary', 'significant', 'crucial', 'essential',
    'increase', 'decrease', 'growth', 'decline', 'improve', 'reduce',
    'first', 'second', 'third', 'finally', 'conclusion', 'result',
    'because', 'therefore', 'however', 'furthermore', 'moreover',
    'analysis', 'data', 'research', 'study', 'findings', 'evidence',
]


def score_sentence(sentence: str) -> int:
    """Importance score: keyword hits, length bonus, digits, questions."""
    lower = sentence.lower()
    score = sum(1 for keyword in IMPORTANT_KEYWORDS if keyword in lower)

    if len(sentence) > 50:
        score += 1
    if len(sentence) > 100:
        score += 1
    if re.search(r'\d', sentence):
        score += 1
    if '?' in sentence:
        score += 1
    return score


def extract_key_points(text: str) -> List[str]:
    sentences = [s for s in SENTENCE_SPLIT.split(text) if len(s.strip()) > 10]
    limit = min(MAX_KEY_POINTS, math.ceil(len(sentences) * KEY_POINT_RATIO))

    # sorted() is stable, so equal scores keep document order
    ranked = sorted(sentences, key=score_sentence, reverse=True)
    key_points = [s.strip() for s in ranked[:limit]]

    logger.debug(f"[Analyzer] Selected {len(key_points)} key points from {len(sentences)} sentences")
    return key_points


# =============================================================================
# Data points
# =============================================================================

def _parse_number(raw: str) -> float:
    return float(raw.replace(',', ''))


def _percentage(match: re.Match) -> Optional[Tuple[float, str]]:
    return float(match.group(1)), f"{match.group(1)}%"


def _currency(match: re.Match) -> Optional[Tuple[float, str]]:
    return _parse_number(match.group(1)), f"${match.group(1)}"


def _year(match: re.Match) -> Optional[Tuple[float, str]]:
    return float(int(match.group(0))), match.group(0)


def _metric(match: re.Match) -> Optional[Tuple[float, str]]:
    value = _parse_number(match.group(2))
    if value <= 1:
        # Small numbers are rarely meaningful on their own
        return None
    return value, f"{match.group(1)}: {match.group(2)}"


def _rating(match: re.Match) -> Optional[Tuple[float, str]]:
    denominator = float(match.group(2))
    if denominator == 0:
        return None
    return float(match.group(1)) / denominator, f"{match.group(1)}/{match.group(2)}"


@dataclass(frozen=True)
class DataPointRule:
    """Named regex rule producing (value, label) pairs for one data category."""
    name: str
    category: DataCategory
    pattern: Pattern
    build: Callable[[re.Match], Optional[Tuple[float, str]]]

    def apply(self, text: str) -> List[Tuple[float, str]]:
        results = []
        for match in self.pattern.finditer(text):
            built = self.build(match)
            if built is not None:
                results.append(built)
        return results


DATA_POINT_RULES: List[DataPointRule] = [
    DataPointRule("percentage", DataCategory.PERCENTAGE,
                  re.compile(r'(\d+(?:\.\d+)?)\s*%'), _percentage),
    DataPointRule("currency", DataCategory.CURRENCY,
                  re.compile(r'\$(\d+(?:,\d{3})*(?:\.\d{2})?)'), _currency),
    DataPointRule("year", DataCategory.YEAR,
                  re.compile(r'\b(19|20)\d{2}\b'), _year),
    DataPointRule("metric", DataCategory.METRIC,
                  re.compile(r'(\w+)\s+(\d+(?:,\d{3})*(?:\.\d+)?)', re.ASCII), _metric),
    DataPointRule("rating", DataCategory.RATING,
                  re.compile(r'(\d+)\s*(?:out of|/)\s*(\d+)'), _rating),
]


def extract_data_points(text: str) -> List[DataPoint]:
    data_points: List[DataPoint] = []

    for rule in DATA_POINT_RULES:
        for value, label in rule.apply(text):
            data_points.append(DataPoint(
                id=f"{rule.category.value}-{len(data_points)}",
                value=value,
                label=label,
                category=rule.category,
            ))

    logger.debug(f"[Analyzer] Extracted {len(data_points)} data points")
    return data_points[:MAX_DATA_POINTS]


# =============================================================================
# Relationships
# =============================================================================

@dataclass(frozen=True)
class RelationshipRule:
    """Trigger phrases for one relationship type.

    ``total_cap`` bounds the running total of relationships collected so far,
    so rules applied later only fill the remaining room.
    """
    name: str
    type: RelationshipType
    triggers: Tuple[str, ...]
    strength: float
    total_cap: int

    def patterns(self) -> List[Pattern]:
        # Trigger must be whitespace-delimited; searched one sentence at a time
        return [
            re.compile(rf'\s{re.escape(trigger)}\s', re.IGNORECASE)
            for trigger in self.triggers
        ]


RELATIONSHIP_RULES: List[RelationshipRule] = [
    RelationshipRule(
        "causal", RelationshipType.CAUSAL,
        ('because', 'due to', 'caused by', 'results in', 'leads to', 'therefore',
         'consequently', 'as a result', 'thus', 'hence', 'so that'),
        strength=0.8, total_cap=10,
    ),
    RelationshipRule(
        "temporal", RelationshipType.TEMPORAL,
        ('before', 'after', 'then', 'next', 'following', 'previously',
         'subsequently', 'meanwhile', 'during', 'while', 'when'),
        strength=0.7, total_cap=15,
    ),
    RelationshipRule(
        "comparison", RelationshipType.CORRELATIONAL,
        ('compared to', 'versus', 'vs', 'higher than', 'lower than', 'better than',
         'worse than', 'similar to', 'different from', 'unlike', 'like'),
        strength=0.6, total_cap=20,
    ),
]


def extract_relationships(text: str) -> List[Relationship]:
    """First trigger occurrence per sentence: source is the text before it,
    target the rest of the sentence."""
    relationships: List[Relationship] = []
    sentences = SENTENCE_SPLIT.split(text)

    for rule in RELATIONSHIP_RULES:
        for pattern in rule.patterns():
            for sentence in sentences:
                if len(relationships) >= rule.total_cap:
                    break
                match = pattern.search(sentence)
                if match is None:
                    continue
                relationships.append(Relationship(
                    id=f"{rule.name}-{len(relationships)}",
                    source=sentence[:match.start()].strip()[:50],
                    target=sentence[match.end():].strip()[:50],
                    type=rule.type,
                    strength=rule.strength,
                ))

    logger.debug(f"[Analyzer] Found {len(relationships)} relationships")
    return relationships


# =============================================================================
# Sentiment & complexity
# =============================================================================

POSITIVE_WORDS = [
    'good', 'great', 'excellent', 'success', 'growth', 'increase', 'improve',
    'better', 'positive', 'advantage', 'benefit', 'effective', 'efficient',
    'outstanding', 'remarkable', 'impressive', 'valuable', 'useful',
]

NEGATIVE_WORDS = [
    'bad', 'poor', 'failure', 'decline', 'decrease', 'worse', 'negative',
    'problem', 'issue', 'challenge', 'difficult', 'ineffective', 'useless',
    'terrible', 'awful', 'disappointing', 'concerning', 'problematic',
]


def analyze_sentiment(text: str) -> Sentiment:
    words = text.lower().split()
    positive = sum(1 for word in words if any(p in word for p in POSITIVE_WORDS))
    negative = sum(1 for word in words if any(n in word for n in NEGATIVE_WORDS))

    # A one-word margin resolves near-ties to neutral
    if positive > negative + 1:
        return Sentiment.POSITIVE
    if negative > positive + 1:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


COMPLEX_INDICATORS = [
    'however', 'furthermore', 'nevertheless', 'consequently', 'therefore',
    'moreover', 'additionally', 'specifically', 'particularly', 'essentially',
    'methodology', 'analysis', 'implementation', 'optimization', 'framework',
]

TECHNICAL_TERMS = [
    'algorithm', 'data', 'analysis', 'research', 'study', 'methodology',
    'framework', 'implementation', 'optimization', 'correlation', 'regression',
]


def analyze_complexity(text: str) -> ComplexityLevel:
    word_count = len(split_words(text))
    sentence_count = max(1, len(split_sentences(text)))
    avg_words = word_count / sentence_count

    lower = text.lower()
    complex_score = sum(1 for term in COMPLEX_INDICATORS if term in lower)
    technical_score = sum(1 for term in TECHNICAL_TERMS if term in lower)

    if word_count > 1000 or avg_words > 25 or complex_score > 5 or technical_score > 5:
        return ComplexityLevel.HIGH
    if word_count > 300 or avg_words > 18 or complex_score > 2 or technical_score > 2:
        return ComplexityLevel.MEDIUM
    return ComplexityLevel.LOW


# =============================================================================
# Analyzer
# =============================================================================

class ContentAnalyzer:
    """Runs every extraction pass over one piece of content."""

    def validate(self, content: ContentInput, min_length: int = 1, max_length: Optional[int] = None) -> str:
        text = content.content or ""
        stripped = text.strip()
        if not stripped:
            raise InputValidationError("Content is empty or invalid")
        if len(stripped) < min_length:
            raise InputValidationError(
                f"Content is too short ({len(stripped)} characters, minimum {min_length})"
            )
        if max_length is not None and len(text) > max_length:
            raise InputValidationError(
                f"Content is too long ({len(text)} characters, maximum {max_length})"
            )
        return text

    def extract(self, content: ContentInput) -> ExtractedData:
        """Extract key points, data points, relationships, sentiment and complexity."""
        text = self.validate(content)
        logger.info(f"[Analyzer] Extracting from {len(text)} characters of {content.type.value} content")

        extracted = ExtractedData(
            key_points=extract_key_points(text),
            data_points=extract_data_points(text),
            relationships=extract_relationships(text),
            sentiment=analyze_sentiment(text),
            complexity=analyze_complexity(text),
        )

        logger.info(
            f"[Analyzer] Done: {len(extracted.key_points)} key points, "
            f"{len(extracted.data_points)} data points, "
            f"{len(extracted.relationships)} relationships, "
            f"sentiment={extracted.sentiment.value}, complexity={extracted.complexity.value}"
        )
        return extracted


# Singleton instance
content_analyzer = ContentAnalyzer()
