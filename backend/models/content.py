"""Content analysis models: input, extracted features, scoring, approaches and suggestions"""
from datetime import datetime
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field


class ContentType(str, Enum):
    """Where the submitted content came from"""
    TEXT = "text"
    DOCUMENT = "document"
    URL = "url"


class DataCategory(str, Enum):
    """Category of an extracted numeric fact"""
    PERCENTAGE = "percentage"
    CURRENCY = "currency"
    YEAR = "year"
    METRIC = "metric"
    RATING = "rating"      # value is the ratio n/m


class RelationshipType(str, Enum):
    CAUSAL = "causal"
    TEMPORAL = "temporal"
    CORRELATIONAL = "correlational"


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class ComplexityLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PresentationFormat(str, Enum):
    SHORT = "short"      # Single page
    LONG = "long"        # Multi-page
    HYBRID = "hybrid"    # Summary page + detail pages


class VisualType(str, Enum):
    """Visual types an approach or suggestion can present as"""
    BULLET_LIST = "bullet-list"
    TIMELINE = "timeline"
    CHART = "chart"
    INFOGRAPHIC = "infographic"
    COMPARISON = "comparison"
    PROCESS_FLOW = "process-flow"
    DATA_STORY = "data-story"
    TEXT = "text"


class ElementType(str, Enum):
    TEXT = "text"
    CHART = "chart"
    SHAPE = "shape"
    IMAGE = "image"
    TIMELINE = "timeline"


# =============================================================================
# Input
# =============================================================================

class ContentMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: Optional[str] = None
    source: Optional[str] = None
    date_created: Optional[str] = None
    context: Optional[str] = None


class ContentInput(BaseModel):
    """Submitted content. Frozen: it is never modified once handed to analysis."""
    model_config = ConfigDict(frozen=True)

    content: str
    type: ContentType = ContentType.TEXT
    metadata: ContentMetadata = Field(default_factory=ContentMetadata)


# =============================================================================
# Extraction
# =============================================================================

class DataPoint(BaseModel):
    id: str
    value: float
    label: str
    category: DataCategory


class Relationship(BaseModel):
    id: str
    source: str
    target: str
    type: RelationshipType
    strength: float = Field(ge=0.0, le=1.0)


class ExtractedData(BaseModel):
    key_points: List[str] = Field(default_factory=list)
    data_points: List[DataPoint] = Field(default_factory=list)
    relationships: List[Relationship] = Field(default_factory=list)
    sentiment: Sentiment = Sentiment.NEUTRAL
    complexity: ComplexityLevel = ComplexityLevel.LOW


# =============================================================================
# Scoring
# =============================================================================

class ScoringMetrics(BaseModel):
    """Eight normalized measures of content character, each in [0, 1]"""
    complexity: float = Field(ge=0.0, le=1.0)         # Simple concepts vs complex relationships
    data_richness: float = Field(ge=0.0, le=1.0)      # Text-heavy vs data/numbers heavy
    narrative_flow: float = Field(ge=0.0, le=1.0)     # Fragmented vs clear story progression
    temporal_elements: float = Field(ge=0.0, le=1.0)  # Static vs time-based information
    quantitative_data: float = Field(ge=0.0, le=1.0)  # Qualitative vs quantitative focus
    conceptual_depth: float = Field(ge=0.0, le=1.0)   # Surface-level vs deep analysis required
    actionability: float = Field(ge=0.0, le=1.0)      # Informational vs requires decisions/actions
    audience_level: float = Field(ge=0.0, le=1.0)     # General audience vs expert/technical


# =============================================================================
# Presentation approaches
# =============================================================================

class ImagerySpec(BaseModel):
    type: str           # icons, photos, illustrations, diagrams, mixed
    style: str          # minimal, detailed, professional, creative
    sources: List[str] = Field(default_factory=list)
    quantity: int = 0


class LayoutSpec(BaseModel):
    structure: str      # single-column, two-column, grid, timeline, radial
    spacing: str        # tight, comfortable, spacious
    hierarchy: str      # flat, nested, progressive
    breakpoints: List[str] = Field(default_factory=list)


class InteractivitySpec(BaseModel):
    level: str          # static, hover, click, animated
    transitions: bool = False
    progressive: bool = False


class ChartSpec(BaseModel):
    types: List[str] = Field(default_factory=list)
    complexity: str = "simple"   # simple, moderate, complex
    interactivity: bool = False
    annotations: bool = False


class FormatRequirements(BaseModel):
    imagery: ImagerySpec
    layout: LayoutSpec
    interactivity: InteractivitySpec
    data_visualization: Optional[ChartSpec] = None


class VisualFormat(BaseModel):
    type: VisualType
    priority: int
    reasoning: str
    requirements: FormatRequirements


class PresentationApproach(BaseModel):
    id: str
    name: str
    score: float = Field(ge=0.0, le=1.0)
    reasoning: List[str] = Field(default_factory=list)
    visual_types: List[VisualFormat] = Field(default_factory=list)
    format: PresentationFormat
    estimated_pages: int = 1


# =============================================================================
# Visual suggestions
# =============================================================================

class Position(BaseModel):
    x: float
    y: float


class Size(BaseModel):
    width: float
    height: float


class ElementStyle(BaseModel):
    """Rendering hints. Theme colours are filled in later by the theme renderer."""
    text_color: Optional[str] = None
    background_color: Optional[str] = None
    border_color: Optional[str] = None
    font_family: Optional[str] = None
    font_size: Optional[int] = None
    font_weight: Optional[str] = None
    border_radius: Optional[int] = None
    border_width: Optional[int] = None
    padding: Optional[int] = None
    box_shadow: Optional[str] = None
    chart_data: Optional[str] = None


class VisualElement(BaseModel):
    type: ElementType
    content: str
    position: Position
    size: Size
    style: Optional[ElementStyle] = None


class ApproachData(BaseModel):
    name: str
    reasoning: List[str] = Field(default_factory=list)
    format: Optional[PresentationFormat] = None
    estimated_pages: Optional[int] = None


class VisualSuggestion(BaseModel):
    id: str
    title: str
    description: str
    visual_type: VisualType
    confidence: float = Field(ge=0.0, le=1.0)
    elements: List[VisualElement] = Field(default_factory=list)
    approach_data: Optional[ApproachData] = None
    icon: Optional[str] = None
    preview: Optional[str] = None


# =============================================================================
# Smart analysis
# =============================================================================

class RecommendationType(str, Enum):
    FORMAT = "format"
    CONTENT = "content"
    DESIGN = "design"
    STRUCTURE = "structure"


class RecommendationPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class AnalysisRecommendation(BaseModel):
    type: RecommendationType
    priority: RecommendationPriority
    title: str
    description: str
    reasoning: str
    impact: str


class PracticeCategory(str, Enum):
    COGNITIVE_LOAD = "cognitive-load"
    VISUAL_HIERARCHY = "visual-hierarchy"
    INFORMATION_DESIGN = "information-design"
    ACCESSIBILITY = "accessibility"


class BestPractice(BaseModel):
    category: PracticeCategory
    principle: str
    application: str
    example: str


class SmartAnalysis(BaseModel):
    scoring: ScoringMetrics
    approaches: List[PresentationApproach] = Field(default_factory=list)
    recommendations: List[AnalysisRecommendation] = Field(default_factory=list)
    visual_suggestions: List[VisualSuggestion] = Field(default_factory=list)
    best_practices: List[BestPractice] = Field(default_factory=list)


class AnalysisSource(str, Enum):
    RULES = "rules"
    LLM = "llm"


class ContentAnalysis(BaseModel):
    id: str
    original_content: ContentInput
    extracted_data: ExtractedData
    suggestions: List[VisualSuggestion] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    smart_analysis: Optional[SmartAnalysis] = None
    source: AnalysisSource = AnalysisSource.RULES
