"""
Smart Suggestions - Recommendations and design guidance for scored content.

Assembles the SmartAnalysis block: scoring, ranked approaches, prioritized
recommendations, approach-driven visual suggestions and best practices.
"""
import logging
from typing import List

from models.content import (
    AnalysisRecommendation,
    BestPractice,
    ContentInput,
    ExtractedData,
    PracticeCategory,
    PresentationApproach,
    RecommendationPriority,
    RecommendationType,
    ScoringMetrics,
    SmartAnalysis,
    VisualSuggestion,
)

logger = logging.getLogger(__name__)


PRIORITY_ORDER = {
    RecommendationPriority.HIGH: 0,
    RecommendationPriority.MEDIUM: 1,
    RecommendationPriority.LOW: 2,
}


def generate_recommendations(
    scoring: ScoringMetrics,
    data: ExtractedData,
    approaches: List[PresentationApproach],
) -> List[AnalysisRecommendation]:
    recommendations = []

    if approaches:
        top = approaches[0]
        recommendations.append(AnalysisRecommendation(
            type=RecommendationType.FORMAT,
            priority=RecommendationPriority.HIGH,
            title=f"Recommended: {top.name}",
            description=f"Based on your content analysis, {top.name.lower()} will be most effective",
            reasoning='. '.join(top.reasoning),
            impact=f"Expected to improve comprehension by {round(top.score * 100)}%",
        ))

    if scoring.complexity > 0.7:
        recommendations.append(AnalysisRecommendation(
            type=RecommendationType.STRUCTURE,
            priority=RecommendationPriority.HIGH,
            title='Break Down Complex Concepts',
            description='Your content has high complexity. Consider breaking it into smaller, digestible sections.',
            reasoning='Complex information overwhelms audiences and reduces retention',
            impact='Improves comprehension and reduces cognitive load',
        ))

    if scoring.data_richness > 0.6 and scoring.quantitative_data > 0.5:
        recommendations.append(AnalysisRecommendation(
            type=RecommendationType.DESIGN,
            priority=RecommendationPriority.HIGH,
            title='Prioritize Data Visualization',
            description='Your content is data-rich. Visual charts will communicate more effectively than text.',
            reasoning='Numerical data is processed faster visually than textually',
            impact='Increases data comprehension by up to 400%',
        ))

    if len(data.key_points) > 7:
        recommendations.append(AnalysisRecommendation(
            type=RecommendationType.CONTENT,
            priority=RecommendationPriority.MEDIUM,
            title='Reduce Information Density',
            description=(
                f"You have {len(data.key_points)} key points. Consider grouping or "
                f"prioritizing to stay within 5-7 items per view."
            ),
            reasoning="Miller's Rule: humans can only process 7±2 items simultaneously",
            impact='Improves focus and retention',
        ))

    if scoring.temporal_elements > 0.5:
        recommendations.append(AnalysisRecommendation(
            type=RecommendationType.DESIGN,
            priority=RecommendationPriority.MEDIUM,
            title='Use Timeline Visualization',
            description='Your content has strong temporal elements. A timeline will show progression clearly.',
            reasoning='Chronological presentation matches natural mental models',
            impact='Enhances understanding of cause-and-effect relationships',
        ))

    if scoring.audience_level > 0.7:
        recommendations.append(AnalysisRecommendation(
            type=RecommendationType.CONTENT,
            priority=RecommendationPriority.MEDIUM,
            title='Consider Technical Audience',
            description='Your content appears technical. Ensure visual design matches audience sophistication.',
            reasoning='Expert audiences prefer detailed, precise information',
            impact='Maintains credibility and engagement',
        ))
    elif scoring.audience_level < 0.3:
        recommendations.append(AnalysisRecommendation(
            type=RecommendationType.DESIGN,
            priority=RecommendationPriority.MEDIUM,
            title='Simplify for General Audience',
            description='Use more visual elements and less technical language.',
            reasoning='General audiences benefit from simplified, visual communication',
            impact='Increases accessibility and comprehension',
        ))

    return sorted(recommendations, key=lambda r: PRIORITY_ORDER[r.priority])


def generate_best_practices(scoring: ScoringMetrics) -> List[BestPractice]:
    practices = [
        BestPractice(
            category=PracticeCategory.COGNITIVE_LOAD,
            principle="Miller's Rule (7±2)",
            application='Limit information chunks to 5-7 items per view',
            example='Use bullet points, group related items, create multiple pages for long lists',
        ),
        BestPractice(
            category=PracticeCategory.COGNITIVE_LOAD,
            principle='Progressive Disclosure',
            application='Reveal information gradually based on user needs',
            example='Start with overview, then provide detailed breakdowns on subsequent pages',
        ),
        BestPractice(
            category=PracticeCategory.VISUAL_HIERARCHY,
            principle='F-Pattern Reading',
            application='Place important information in top-left, use headings to guide eye movement',
            example='Key message at top, supporting details below, call-to-action at bottom',
        ),
        BestPractice(
            category=PracticeCategory.VISUAL_HIERARCHY,
            principle='Contrast for Emphasis',
            application='Use size, color, and spacing to highlight important elements',
            example='Larger fonts for headings, bold colors for key metrics, white space for separation',
        ),
    ]

    if scoring.data_richness > 0.5:
        practices.append(BestPractice(
            category=PracticeCategory.INFORMATION_DESIGN,
            principle='Data-Ink Ratio',
            application='Maximize information, minimize decorative elements in charts',
            example='Remove unnecessary grid lines, use direct labels instead of legends',
        ))

    if scoring.temporal_elements > 0.5:
        practices.append(BestPractice(
            category=PracticeCategory.INFORMATION_DESIGN,
            principle='Chronological Flow',
            application='Present time-based information in natural sequence',
            example='Left-to-right timeline, past-to-future progression, clear date markers',
        ))

    practices.extend([
        BestPractice(
            category=PracticeCategory.ACCESSIBILITY,
            principle='Color Independence',
            application="Don't rely solely on color to convey information",
            example='Use icons, patterns, or text labels alongside color coding',
        ),
        BestPractice(
            category=PracticeCategory.ACCESSIBILITY,
            principle='Readable Typography',
            application='Ensure sufficient contrast and appropriate font sizes',
            example='Minimum 16px body text, 4.5:1 contrast ratio, clear font families',
        ),
    ])
    return practices


class SmartSuggestionEngine:
    def build(
        self,
        content: ContentInput,
        data: ExtractedData,
        scoring: ScoringMetrics,
        approaches: List[PresentationApproach],
        suggestions: List[VisualSuggestion],
    ) -> SmartAnalysis:
        recommendations = generate_recommendations(scoring, data, approaches)
        logger.debug(f"[SmartSuggestions] {len(recommendations)} recommendations")
        return SmartAnalysis(
            scoring=scoring,
            approaches=approaches,
            recommendations=recommendations,
            visual_suggestions=suggestions,
            best_practices=generate_best_practices(scoring),
        )


# Singleton instance
smart_suggestion_engine = SmartSuggestionEngine()
