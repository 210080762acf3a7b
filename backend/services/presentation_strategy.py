"""Presentation Strategy Selection

Proposes candidate presentation approaches in three families (short, long,
hybrid) and ranks them.

Hard gate + soft score: a gate on the scoring metrics decides whether a
candidate is generated at all; its score only decides ranking among the
candidates that made it through.
"""
import logging
import math
from typing import Callable, List, Optional
from dataclasses import dataclass

from config import settings
from models.content import (
    ChartSpec,
    DataCategory,
    ExtractedData,
    FormatRequirements,
    ImagerySpec,
    InteractivitySpec,
    LayoutSpec,
    PresentationApproach,
    PresentationFormat,
    ScoringMetrics,
    VisualFormat,
    VisualType,
)
from services.content_scorer import clamp

logger = logging.getLogger(__name__)

MAX_APPROACHES = 5


def _year_count(data: ExtractedData) -> int:
    return sum(1 for d in data.data_points if d.category == DataCategory.YEAR)


# =============================================================================
# Scores
# =============================================================================

def bullet_score(m: ScoringMetrics, data: ExtractedData) -> float:
    score = 0.5
    score += m.actionability * 0.3
    score += (1 - m.complexity) * 0.2
    score += min(len(data.key_points) / 5, 0.2)
    score -= m.data_richness * 0.1      # Charts serve data-heavy content better
    return clamp(score)


def timeline_score(m: ScoringMetrics, data: ExtractedData) -> float:
    score = 0.3
    score += m.temporal_elements * 0.5
    score += m.narrative_flow * 0.2
    if 3 <= _year_count(data) <= 8:
        score += 0.2
    return clamp(score)


def chart_score(m: ScoringMetrics, data: ExtractedData) -> float:
    score = 0.4
    score += m.quantitative_data * 0.4
    score += m.data_richness * 0.3
    if 3 <= len(data.data_points) <= 10:
        score += 0.2
    score -= m.narrative_flow * 0.1     # Stories serve narrative content better
    return clamp(score)


def detailed_score(m: ScoringMetrics, data: ExtractedData) -> float:
    score = 0.4
    score += m.conceptual_depth * 0.4
    score += m.complexity * 0.3
    if len(data.key_points) >= 5:
        score += 0.2
    score += m.audience_level * 0.1
    return clamp(score)


def data_story_score(m: ScoringMetrics, data: ExtractedData) -> float:
    score = 0.3
    score += m.data_richness * 0.4
    score += m.narrative_flow * 0.4
    score += m.quantitative_data * 0.2
    return clamp(score)


def hybrid_score(m: ScoringMetrics, data: ExtractedData) -> float:
    score = 0.5
    balance = 1 - abs(m.actionability - m.conceptual_depth)
    score += balance * 0.3
    score += min(len(data.key_points) / 8, 0.2)
    return clamp(score)


# =============================================================================
# Requirements
# =============================================================================

def determine_chart_types(data: ExtractedData) -> List[str]:
    categories = {d.category for d in data.data_points}
    types = []

    if DataCategory.YEAR in categories:
        types.append('line')
    if DataCategory.PERCENTAGE in categories and len(data.data_points) <= 6:
        types.append('pie')
    if DataCategory.CURRENCY in categories or len(data.data_points) >= 3:
        types.append('bar')

    return types or ['bar']


def bullet_list_requirements(quantity: int = 5) -> FormatRequirements:
    return FormatRequirements(
        imagery=ImagerySpec(type='icons', style='minimal',
                            sources=['lucide-react', 'heroicons'], quantity=quantity),
        layout=LayoutSpec(structure='single-column', spacing='comfortable', hierarchy='flat',
                          breakpoints=['mobile', 'tablet', 'desktop']),
        interactivity=InteractivitySpec(level='hover', transitions=True, progressive=False),
    )


def timeline_requirements(data: ExtractedData) -> FormatRequirements:
    return FormatRequirements(
        imagery=ImagerySpec(type='icons', style='professional',
                            sources=['timeline-icons', 'date-markers'],
                            quantity=min(_year_count(data), 6)),
        layout=LayoutSpec(structure='timeline', spacing='spacious', hierarchy='progressive',
                          breakpoints=['mobile-vertical', 'tablet-horizontal', 'desktop-horizontal']),
        interactivity=InteractivitySpec(level='click', transitions=True, progressive=True),
    )


def simple_chart_requirements(data: ExtractedData) -> FormatRequirements:
    return FormatRequirements(
        imagery=ImagerySpec(type='diagrams', style='minimal', sources=['chart-elements'], quantity=1),
        layout=LayoutSpec(structure='single-column', spacing='comfortable', hierarchy='flat',
                          breakpoints=['responsive']),
        interactivity=InteractivitySpec(level='hover', transitions=True, progressive=False),
        data_visualization=ChartSpec(types=determine_chart_types(data), complexity='simple',
                                     interactivity=True, annotations=False),
    )


def infographic_requirements() -> FormatRequirements:
    return FormatRequirements(
        imagery=ImagerySpec(type='mixed', style='professional',
                            sources=['pexels', 'icons', 'illustrations'], quantity=8),
        layout=LayoutSpec(structure='grid', spacing='spacious', hierarchy='nested',
                          breakpoints=['mobile', 'tablet', 'desktop']),
        interactivity=InteractivitySpec(level='click', transitions=True, progressive=True),
    )


def process_flow_requirements() -> FormatRequirements:
    return FormatRequirements(
        imagery=ImagerySpec(type='diagrams', style='detailed',
                            sources=['flow-charts', 'process-icons'], quantity=6),
        layout=LayoutSpec(structure='timeline', spacing='comfortable', hierarchy='progressive',
                          breakpoints=['mobile-vertical', 'desktop-horizontal']),
        interactivity=InteractivitySpec(level='animated', transitions=True, progressive=True),
    )


def complex_chart_requirements(data: ExtractedData) -> FormatRequirements:
    return FormatRequirements(
        imagery=ImagerySpec(type='diagrams', style='detailed', sources=['chart-elements'], quantity=3),
        layout=LayoutSpec(structure='two-column', spacing='comfortable', hierarchy='nested',
                          breakpoints=['responsive']),
        interactivity=InteractivitySpec(level='click', transitions=True, progressive=False),
        data_visualization=ChartSpec(types=determine_chart_types(data), complexity='complex',
                                     interactivity=True, annotations=True),
    )


def data_story_requirements() -> FormatRequirements:
    return FormatRequirements(
        imagery=ImagerySpec(type='mixed', style='professional',
                            sources=['pexels', 'charts', 'infographics'], quantity=12),
        layout=LayoutSpec(structure='grid', spacing='spacious', hierarchy='progressive',
                          breakpoints=['mobile', 'tablet', 'desktop']),
        interactivity=InteractivitySpec(level='animated', transitions=True, progressive=True),
        data_visualization=ChartSpec(types=['line', 'bar', 'pie', 'scatter'], complexity='complex',
                                     interactivity=True, annotations=True),
    )


# =============================================================================
# Candidate table
# =============================================================================

@dataclass(frozen=True)
class ApproachCandidate:
    """One gated approach: ``gate`` decides membership, ``score`` decides rank."""
    id: str
    name: str
    format: PresentationFormat
    gate: Callable[[ScoringMetrics], bool]
    score: Callable[[ScoringMetrics, ExtractedData], float]
    reasoning: List[str]
    visual_types: Callable[[ExtractedData], List[VisualFormat]]
    pages: Callable[[ExtractedData], int]

    def build(self, metrics: ScoringMetrics, data: ExtractedData) -> Optional[PresentationApproach]:
        if not self.gate(metrics):
            return None
        return PresentationApproach(
            id=self.id,
            name=self.name,
            score=self.score(metrics, data),
            reasoning=list(self.reasoning),
            visual_types=self.visual_types(data),
            format=self.format,
            estimated_pages=self.pages(data),
        )


SHORT_CANDIDATES = [
    ApproachCandidate(
        id='bullet-icons',
        name='Bullet List with Icons',
        format=PresentationFormat.SHORT,
        gate=lambda m: m.actionability > 0.6 and m.complexity < 0.5,
        score=bullet_score,
        reasoning=[
            'High actionability suggests clear action items',
            'Low complexity allows for concise presentation',
            'Icons enhance visual appeal and comprehension',
        ],
        visual_types=lambda d: [VisualFormat(
            type=VisualType.BULLET_LIST, priority=1,
            reasoning='Optimal for scannable, actionable content',
            requirements=bullet_list_requirements(len(d.key_points)),
        )],
        pages=lambda d: 1,
    ),
    ApproachCandidate(
        id='timeline-short',
        name='Key Dates Timeline',
        format=PresentationFormat.SHORT,
        gate=lambda m: m.temporal_elements > 0.5,
        score=timeline_score,
        reasoning=[
            'Strong temporal elements detected',
            'Timeline format shows progression clearly',
            'Dates provide concrete anchors for understanding',
        ],
        visual_types=lambda d: [VisualFormat(
            type=VisualType.TIMELINE, priority=1,
            reasoning='Temporal data best presented chronologically',
            requirements=timeline_requirements(d),
        )],
        pages=lambda d: 1,
    ),
    ApproachCandidate(
        id='simple-chart',
        name='Key Metrics Chart',
        format=PresentationFormat.SHORT,
        gate=lambda m: m.quantitative_data > 0.6 and m.data_richness > 0.5,
        score=chart_score,
        reasoning=[
            'High quantitative data density',
            'Charts communicate numbers more effectively than text',
            'Single chart maintains focus and clarity',
        ],
        visual_types=lambda d: [VisualFormat(
            type=VisualType.CHART, priority=1,
            reasoning='Quantitative data requires visual representation',
            requirements=simple_chart_requirements(d),
        )],
        pages=lambda d: 1,
    ),
]

LONG_CANDIDATES = [
    ApproachCandidate(
        id='detailed-breakdown',
        name='Detailed Topic Breakdown',
        format=PresentationFormat.LONG,
        gate=lambda m: m.conceptual_depth > 0.6 or m.complexity > 0.7,
        score=detailed_score,
        reasoning=[
            'High conceptual depth requires thorough explanation',
            'Complex topics benefit from structured breakdown',
            'Multiple pages allow proper development of ideas',
        ],
        visual_types=lambda d: [
            VisualFormat(type=VisualType.INFOGRAPHIC, priority=1,
                         reasoning='Overview page with visual hierarchy',
                         requirements=infographic_requirements()),
            VisualFormat(type=VisualType.PROCESS_FLOW, priority=2,
                         reasoning='Break down complex processes',
                         requirements=process_flow_requirements()),
            VisualFormat(type=VisualType.CHART, priority=3,
                         reasoning='Supporting data visualization',
                         requirements=complex_chart_requirements(d)),
        ],
        pages=lambda d: math.ceil(len(d.key_points) / 2) + 2,
    ),
    ApproachCandidate(
        id='data-story',
        name='Comprehensive Data Story',
        format=PresentationFormat.LONG,
        gate=lambda m: m.data_richness > 0.7 and m.narrative_flow > 0.5,
        score=data_story_score,
        reasoning=[
            'Rich data set supports detailed analysis',
            'Strong narrative flow enables story structure',
            'Multiple visualizations reveal different insights',
        ],
        visual_types=lambda d: [VisualFormat(
            type=VisualType.DATA_STORY, priority=1,
            reasoning='Narrative structure with data integration',
            requirements=data_story_requirements(),
        )],
        pages=lambda d: 4 + len(d.data_points) // 3,
    ),
]

HYBRID_CANDIDATES = [
    ApproachCandidate(
        id='executive-hybrid',
        name='Executive Summary + Deep Dive',
        format=PresentationFormat.HYBRID,
        gate=lambda m: m.actionability > 0.5 and m.conceptual_depth > 0.5,
        score=hybrid_score,
        reasoning=[
            'Actionable content needs executive summary',
            'Conceptual depth requires detailed exploration',
            'Two-tier approach serves different audience needs',
        ],
        visual_types=lambda d: [
            VisualFormat(type=VisualType.BULLET_LIST, priority=1,
                         reasoning='Executive summary page',
                         requirements=bullet_list_requirements()),
            VisualFormat(type=VisualType.INFOGRAPHIC, priority=2,
                         reasoning='Detailed breakdown pages',
                         requirements=infographic_requirements()),
        ],
        pages=lambda d: 1 + math.ceil(len(d.key_points) / 3),
    ),
]

CANDIDATE_FAMILIES = {
    PresentationFormat.SHORT: SHORT_CANDIDATES,
    PresentationFormat.LONG: LONG_CANDIDATES,
    PresentationFormat.HYBRID: HYBRID_CANDIDATES,
}


def generate_family(
    family: PresentationFormat,
    metrics: ScoringMetrics,
    data: ExtractedData,
) -> List[PresentationApproach]:
    """Build every candidate in one family whose gate holds."""
    approaches = []
    for candidate in CANDIDATE_FAMILIES[family]:
        approach = candidate.build(metrics, data)
        if approach is not None:
            approaches.append(approach)
    return approaches


def rank_approaches(approaches: List[PresentationApproach], limit: int = MAX_APPROACHES) -> List[PresentationApproach]:
    # Stable sort keeps family order among equal scores
    return sorted(approaches, key=lambda a: a.score, reverse=True)[:limit]


class PresentationStrategy:
    """Selects and ranks presentation approaches for scored content."""

    def __init__(self, max_approaches: int = MAX_APPROACHES):
        self.max_approaches = max_approaches

    def generate_approaches(self, metrics: ScoringMetrics, data: ExtractedData) -> List[PresentationApproach]:
        approaches = []
        for family in (PresentationFormat.SHORT, PresentationFormat.LONG, PresentationFormat.HYBRID):
            generated = generate_family(family, metrics, data)
            if not generated:
                logger.debug(f"[Strategy] No {family.value} approach passed its gate")
            approaches.extend(generated)

        ranked = rank_approaches(approaches, self.max_approaches)
        logger.info(
            f"[Strategy] {len(ranked)} approaches: "
            f"{[(a.id, round(a.score, 2)) for a in ranked]}"
        )
        return ranked


# Singleton instance
presentation_strategy = PresentationStrategy(max_approaches=settings.max_approaches)
