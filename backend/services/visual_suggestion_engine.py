"""
Visual Suggestion Engine - Lays out concrete visual elements for a suggestion.

Two entry points:
- suggestion_for_approach(): one suggestion per ranked presentation approach,
  confidence equal to the approach score
- generate_gallery(): data-driven alternatives (charts, timeline, comparison,
  document layouts) ranked by how well they fit the extracted data

Geometry is deterministic for a given input. Styles carry typography and shape
hints only; colours come from the theme renderer.
"""
import logging
from typing import Callable, Dict, List

from config import settings
from models.content import (
    ApproachData,
    ContentInput,
    ContentType,
    DataCategory,
    DataPoint,
    ElementStyle,
    ElementType,
    ExtractedData,
    Position,
    PresentationApproach,
    RelationshipType,
    Size,
    VisualElement,
    VisualSuggestion,
    VisualType,
)
from services.chart_generator import (
    ChartConfig,
    chart_generator,
    determine_chart_types,
    validate_data_for_chart,
)

logger = logging.getLogger(__name__)


MAX_SUGGESTIONS = 6

ICONS = {
    VisualType.BULLET_LIST: 'List',
    VisualType.TIMELINE: 'Clock',
    VisualType.CHART: 'BarChart3',
    VisualType.DATA_STORY: 'BookOpen',
    VisualType.PROCESS_FLOW: 'GitBranch',
    VisualType.INFOGRAPHIC: 'Layout',
}
DEFAULT_ICON = 'FileText'


def _element(kind: ElementType, content: str, x: float, y: float, width: float, height: float,
             **style) -> VisualElement:
    return VisualElement(
        type=kind,
        content=content,
        position=Position(x=x, y=y),
        size=Size(width=width, height=height),
        style=ElementStyle(**style) if style else None,
    )


def _years(data: ExtractedData) -> List[DataPoint]:
    return sorted(
        (d for d in data.data_points if d.category == DataCategory.YEAR),
        key=lambda d: d.value,
    )


# =============================================================================
# Element layouts
# =============================================================================

def bullet_list_elements(data: ExtractedData, content: ContentInput) -> List[VisualElement]:
    return [
        _element(ElementType.TEXT, point, 100, 100 + i * 60, 600, 50, font_size=16)
        for i, point in enumerate(data.key_points[:5])
    ]


def timeline_elements(data: ExtractedData, content: ContentInput) -> List[VisualElement]:
    years = _years(data)[:6]
    if not years:
        return [_element(ElementType.TIMELINE, 'Timeline based on your content structure',
                         50, 200, 500, 200)]
    return [
        _element(ElementType.TIMELINE, year.label, 80 + i * 120, 200, 100, 80,
                 font_size=12, border_width=2, border_radius=8)
        for i, year in enumerate(years)
    ]


def chart_elements(data: ExtractedData, content: ContentInput, chart_type: str = None) -> List[VisualElement]:
    chart_type = chart_type or determine_chart_types(data.data_points)[0]
    return [chart_generator.generate_chart(data.data_points, ChartConfig.for_type(chart_type))]


def infographic_elements(data: ExtractedData, content: ContentInput) -> List[VisualElement]:
    title = content.metadata.title or 'Visual Story'
    elements = [_element(ElementType.TEXT, title, 50, 30, 700, 60, font_size=32, font_weight='bold')]

    for i, point in enumerate(data.data_points[:3]):
        elements.append(_element(ElementType.TEXT, point.label, 100 + i * 200, 120, 150, 100,
                                 font_size=24, font_weight='bold', border_radius=12))

    for i, point in enumerate(data.key_points[:4]):
        elements.append(_element(ElementType.TEXT, point, 50, 250 + i * 60, 650, 50,
                                 font_size=14, border_width=1, border_radius=6))
    return elements


def process_flow_elements(data: ExtractedData, content: ContentInput) -> List[VisualElement]:
    steps = [r.source or r.target for r in data.relationships] or data.key_points
    return [
        _element(ElementType.SHAPE, f"Step {i + 1}: {step}" if step else f"Step {i + 1}",
                 100 + i * 150, 200, 120, 80, border_radius=8)
        for i, step in enumerate(steps[:4])
    ]


LAYOUTS: Dict[VisualType, Callable[[ExtractedData, ContentInput], List[VisualElement]]] = {
    VisualType.BULLET_LIST: bullet_list_elements,
    VisualType.TIMELINE: timeline_elements,
    VisualType.CHART: chart_elements,
    VisualType.INFOGRAPHIC: infographic_elements,
    VisualType.DATA_STORY: infographic_elements,
    VisualType.PROCESS_FLOW: process_flow_elements,
}


def comparison_elements(data: ExtractedData) -> List[VisualElement]:
    elements = []
    for i, point in enumerate(data.key_points[:3]):
        elements.append(_element(ElementType.TEXT, point, 50, 100 + i * 80, 300, 60,
                                 font_size=14, border_radius=6))
    for i, point in enumerate(data.key_points[3:6]):
        elements.append(_element(ElementType.TEXT, point, 400, 100 + i * 80, 300, 60,
                                 font_size=14, border_radius=6))
    return elements


def document_header_elements(data: ExtractedData, content: ContentInput) -> List[VisualElement]:
    title = content.metadata.title or 'Document Title'
    return [
        _element(ElementType.TEXT, title, 50, 50, 700, 60, font_size=28, font_weight='bold'),
        _element(ElementType.TEXT, ' • '.join(data.key_points[:3]), 50, 120, 700, 80,
                 font_size=14, border_radius=6),
    ]


# =============================================================================
# Suggestion metadata
# =============================================================================

def icon_for(visual_type: VisualType) -> str:
    return ICONS.get(visual_type, DEFAULT_ICON)


def preview_for(approach: PresentationApproach) -> str:
    """e.g. ``Short format • 1 page • 85% match``"""
    pages = '1 page' if approach.estimated_pages == 1 else f"{approach.estimated_pages} pages"
    return f"{approach.format.value.capitalize()} format • {pages} • {round(approach.score * 100)}% match"


def primary_visual_type(approach: PresentationApproach) -> VisualType:
    if not approach.visual_types:
        return VisualType.INFOGRAPHIC
    return min(approach.visual_types, key=lambda v: v.priority).type


class VisualSuggestionEngine:
    """Produces element layouts for approaches and the data-driven gallery."""

    def __init__(self, max_suggestions: int = MAX_SUGGESTIONS):
        self.max_suggestions = max_suggestions

    def suggestion_for_approach(
        self,
        approach: PresentationApproach,
        data: ExtractedData,
        content: ContentInput,
    ) -> VisualSuggestion:
        visual_type = primary_visual_type(approach)
        layout = LAYOUTS.get(visual_type, infographic_elements)

        if visual_type == VisualType.CHART:
            chart_types = [
                t for v in approach.visual_types
                if v.requirements.data_visualization
                for t in v.requirements.data_visualization.types
            ]
            elements = chart_elements(data, content, chart_types[0] if chart_types else None)
        else:
            elements = layout(data, content)

        return VisualSuggestion(
            id=approach.id,
            title=approach.name,
            description=approach.reasoning[0] if approach.reasoning else approach.name,
            visual_type=visual_type,
            confidence=approach.score,
            elements=elements,
            approach_data=ApproachData(
                name=approach.name,
                reasoning=list(approach.reasoning),
                format=approach.format,
                estimated_pages=approach.estimated_pages,
            ),
            icon=icon_for(visual_type),
            preview=preview_for(approach),
        )

    def suggestions_for_approaches(
        self,
        approaches: List[PresentationApproach],
        data: ExtractedData,
        content: ContentInput,
    ) -> List[VisualSuggestion]:
        return [self.suggestion_for_approach(a, data, content) for a in approaches]

    def default_suggestion(self, data: ExtractedData, content: ContentInput) -> VisualSuggestion:
        """Fallback shown when no presentation approach passes its gate."""
        if data.key_points:
            headline = data.key_points[0]
        else:
            headline = content.content[:100] + '...'

        return VisualSuggestion(
            id='default',
            title='Standard Presentation',
            description='Balanced approach for general content',
            visual_type=VisualType.INFOGRAPHIC,
            confidence=0.7,
            elements=[
                _element(ElementType.TEXT, headline, 100, 100, 400, 150, font_size=18),
                _element(ElementType.SHAPE, 'Visual accent elements', 520, 100, 100, 150,
                         border_radius=8),
            ],
            approach_data=ApproachData(
                name='Standard Presentation',
                reasoning=['Balanced approach for general content'],
            ),
            icon=icon_for(VisualType.INFOGRAPHIC),
            preview='Standard format • 1 page • 70% match',
        )

    # -------------------------------------------------------------------------
    # Data-driven gallery
    # -------------------------------------------------------------------------

    def _chart_confidence(self, chart_type: str, points: List[DataPoint]) -> float:
        confidence = 0.6
        categories = {p.category for p in points}
        if chart_type == 'line' and DataCategory.YEAR in categories:
            confidence += 0.3
        elif chart_type == 'pie' and DataCategory.PERCENTAGE in categories and len(points) <= 6:
            confidence += 0.3
        elif chart_type == 'bar' and 3 <= len(points) <= 10:
            confidence += 0.2
        return min(confidence, 1.0)

    def _document_suggestions(self, data: ExtractedData, content: ContentInput) -> List[VisualSuggestion]:
        suggestions = [VisualSuggestion(
            id='document-header',
            title='Document Header',
            description='Professional document layout with sections',
            visual_type=VisualType.INFOGRAPHIC,
            confidence=0.8,
            elements=document_header_elements(data, content),
        )]
        if data.relationships:
            suggestions.append(VisualSuggestion(
                id='document-process',
                title='Process Flow',
                description='Step-by-step process visualization',
                visual_type=VisualType.PROCESS_FLOW,
                confidence=0.75,
                elements=process_flow_elements(data, content),
            ))
        return suggestions

    def _data_driven_suggestions(self, data: ExtractedData, content: ContentInput) -> List[VisualSuggestion]:
        suggestions = []

        if len(data.data_points) >= 2:
            chart_types = [
                t for t in determine_chart_types(data.data_points)
                if validate_data_for_chart(data.data_points, t)
            ]
            for i, chart_type in enumerate(chart_types):
                suggestions.append(VisualSuggestion(
                    id=f"chart-{chart_type}-{i}",
                    title=f"{chart_type.capitalize()} Chart",
                    description=f"Visualize your data with a {chart_type} chart",
                    visual_type=VisualType.CHART,
                    confidence=self._chart_confidence(chart_type, data.data_points),
                    elements=chart_elements(data, content, chart_type),
                    preview=chart_generator.chart_preview(data.data_points, chart_type),
                ))

        if len(_years(data)) >= 2:
            suggestions.append(VisualSuggestion(
                id='timeline-temporal',
                title='Timeline Visualization',
                description='Show chronological progression',
                visual_type=VisualType.TIMELINE,
                confidence=0.85,
                elements=timeline_elements(data, content),
            ))

        if any(r.type == RelationshipType.CORRELATIONAL for r in data.relationships):
            suggestions.append(VisualSuggestion(
                id='comparison-layout',
                title='Comparison View',
                description='Side-by-side comparison layout',
                visual_type=VisualType.COMPARISON,
                confidence=0.7,
                elements=comparison_elements(data),
            ))

        return suggestions

    def _adjust_confidence(self, suggestion: VisualSuggestion, data: ExtractedData) -> float:
        confidence = suggestion.confidence
        if suggestion.visual_type == VisualType.CHART and len(data.data_points) >= 3:
            confidence += 0.1
        if suggestion.visual_type == VisualType.TIMELINE and _years(data):
            confidence += 0.15
        if suggestion.visual_type == VisualType.INFOGRAPHIC and len(data.key_points) >= 4:
            confidence += 0.1
        if suggestion.visual_type == VisualType.COMPARISON and data.relationships:
            confidence += 0.1
        return min(confidence, 1.0)

    def generate_gallery(self, content: ContentInput, data: ExtractedData) -> List[VisualSuggestion]:
        suggestions = []
        if content.type == ContentType.DOCUMENT:
            suggestions.extend(self._document_suggestions(data, content))
        suggestions.extend(self._data_driven_suggestions(data, content))

        adjusted = [
            s.model_copy(update={"confidence": self._adjust_confidence(s, data)})
            for s in suggestions
        ]
        ranked = sorted(adjusted, key=lambda s: s.confidence, reverse=True)[:self.max_suggestions]
        logger.info(f"[Suggestions] Gallery: {[(s.id, round(s.confidence, 2)) for s in ranked]}")
        return ranked


# Singleton instance
visual_suggestion_engine = VisualSuggestionEngine(max_suggestions=settings.max_suggestions)
