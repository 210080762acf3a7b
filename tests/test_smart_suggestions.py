"""Tests for recommendations and best practices."""
from models.content import (
    ContentInput,
    ExtractedData,
    PresentationApproach,
    PresentationFormat,
    RecommendationPriority,
    ScoringMetrics,
)
from services.smart_suggestions import (
    generate_best_practices,
    generate_recommendations,
    smart_suggestion_engine,
)


def metrics(**overrides) -> ScoringMetrics:
    values = {name: 0.4 for name in ScoringMetrics.model_fields}
    values.update(overrides)
    return ScoringMetrics(**values)


TOP = PresentationApproach(
    id="timeline-short", name="Key Dates Timeline", score=0.83,
    reasoning=["Strong temporal elements detected", "Timeline format shows progression clearly"],
    format=PresentationFormat.SHORT,
)


def test_top_approach_recommended_first():
    recommendations = generate_recommendations(metrics(), ExtractedData(), [TOP])
    first = recommendations[0]
    assert first.title == "Recommended: Key Dates Timeline"
    assert first.description.endswith("key dates timeline will be most effective")
    assert first.reasoning == "Strong temporal elements detected. Timeline format shows progression clearly"
    assert first.impact == "Expected to improve comprehension by 83%"


def test_neutral_metrics_give_no_recommendations():
    assert generate_recommendations(metrics(), ExtractedData(), []) == []


def test_high_priority_sorted_before_medium():
    scoring = metrics(temporal_elements=0.9, complexity=0.8, audience_level=0.1)
    recommendations = generate_recommendations(scoring, ExtractedData(), [])

    priorities = [r.priority for r in recommendations]
    assert priorities == [
        RecommendationPriority.HIGH,
        RecommendationPriority.MEDIUM,
        RecommendationPriority.MEDIUM,
    ]
    assert recommendations[0].title == "Break Down Complex Concepts"
    # Equal priorities keep the order they were generated in
    assert [r.title for r in recommendations[1:]] == [
        "Use Timeline Visualization",
        "Simplify for General Audience",
    ]


def test_dense_key_points_flagged():
    data = ExtractedData(key_points=[f"Point {i}" for i in range(8)])
    titles = [r.title for r in generate_recommendations(metrics(), data, [])]
    assert titles == ["Reduce Information Density"]


def test_best_practices_conditional_entries():
    base = [p.principle for p in generate_best_practices(metrics())]
    assert len(base) == 6
    assert "Data-Ink Ratio" not in base

    rich = [p.principle for p in generate_best_practices(metrics(data_richness=0.8, temporal_elements=0.8))]
    assert rich[4:6] == ["Data-Ink Ratio", "Chronological Flow"]
    assert rich[-1] == "Readable Typography"


def test_build_smart_analysis():
    scoring = metrics()
    analysis = smart_suggestion_engine.build(
        ContentInput(content="text"), ExtractedData(), scoring, [TOP], []
    )
    assert analysis.scoring == scoring
    assert analysis.approaches == [TOP]
    assert len(analysis.recommendations) == 1
    assert analysis.visual_suggestions == []
