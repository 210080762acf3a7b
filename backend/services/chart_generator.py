"""
Chart Generator - Turns extracted data points into chart elements.

The chart element's content is a JSON payload ``{type, data, options}`` that a
front-end charting library can render as-is. Colours here are the neutral
default palette; the theme renderer swaps in a theme's chart colours.
"""
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from models.content import (
    DataCategory,
    DataPoint,
    ElementStyle,
    ElementType,
    Position,
    Size,
    VisualElement,
)

logger = logging.getLogger(__name__)


CHART_TYPES = ('bar', 'line', 'pie', 'doughnut', 'scatter', 'area')

DEFAULT_COLORS = [
    '#3b82f6', '#ef4444', '#10b981', '#f59e0b', '#8b5cf6',
    '#06b6d4', '#84cc16', '#f97316', '#ec4899', '#6366f1',
]

GRID_COLOR = '#f3f4f6'
MAX_CHART_TYPES = 3
CHART_SIZE = Size(width=500, height=350)


@dataclass
class ChartConfig:
    type: str = 'bar'
    title: Optional[str] = None
    colors: List[str] = field(default_factory=lambda: list(DEFAULT_COLORS))
    responsive: bool = True
    animation: bool = True

    @classmethod
    def for_type(cls, chart_type: str) -> "ChartConfig":
        return cls(type=chart_type, title=f"{chart_type.capitalize()} Chart")


def format_label(point: DataPoint) -> str:
    """Readable axis label: the word of a ``word: n`` metric, or the bare value."""
    if ':' in point.label:
        return point.label.split(':')[0].strip()

    label = point.label
    if label.startswith('$'):
        label = label[1:]
    if label.endswith('%'):
        label = label[:-1]

    if len(label) > 15:
        label = label[:12] + '...'
    return label


def sort_data_points(points: List[DataPoint], chart_type: str) -> List[DataPoint]:
    if chart_type == 'line':
        if any(p.category == DataCategory.YEAR for p in points):
            return sorted(points, key=lambda p: p.value)
    elif chart_type in ('bar', 'pie', 'doughnut'):
        return sorted(points, key=lambda p: p.value, reverse=True)
    return list(points)


def _background_colors(chart_type: str, colors: List[str], count: int):
    if chart_type in ('pie', 'doughnut'):
        return colors[:count]
    if chart_type in ('line', 'area'):
        return colors[0] + '20'     # 8-digit hex, translucent fill
    return colors[0]


def _border_colors(chart_type: str, colors: List[str], count: int):
    if chart_type in ('pie', 'doughnut'):
        return colors[:count]
    return colors[0]


def prepare_chart_data(points: List[DataPoint], config: ChartConfig) -> Dict[str, Any]:
    colors = config.colors or DEFAULT_COLORS
    ordered = sort_data_points(points, config.type)
    values = [p.value for p in ordered]

    return {
        "labels": [format_label(p) for p in ordered],
        "datasets": [{
            "label": "Data",
            "data": values,
            "backgroundColor": _background_colors(config.type, colors, len(values)),
            "borderColor": _border_colors(config.type, colors, len(values)),
            "borderWidth": 3 if config.type == 'line' else 1,
            "fill": config.type == 'area',
        }],
    }


def chart_options(config: ChartConfig) -> Dict[str, Any]:
    options: Dict[str, Any] = {
        "responsive": config.responsive,
        "maintainAspectRatio": False,
        "plugins": {
            "legend": {"position": "top", "display": True},
            "title": {
                "display": bool(config.title),
                "text": config.title or "",
                "font": {"size": 16, "weight": "bold"},
            },
        },
        "animation": {"duration": 1000, "easing": "easeInOutQuart"} if config.animation else False,
    }

    if config.type == 'bar':
        options["scales"] = {
            "y": {"beginAtZero": True, "grid": {"color": GRID_COLOR}},
            "x": {"grid": {"display": False}},
        }
    elif config.type in ('line', 'area'):
        options["scales"] = {
            "y": {"beginAtZero": True, "grid": {"color": GRID_COLOR}},
            "x": {"grid": {"color": GRID_COLOR}},
        }
        options["elements"] = {
            "point": {"radius": 4, "hoverRadius": 6},
            "line": {"tension": 0.4},
        }
    elif config.type in ('pie', 'doughnut'):
        options["plugins"]["legend"] = {"position": "right"}
    elif config.type == 'scatter':
        options["scales"] = {
            "y": {"beginAtZero": True, "grid": {"color": GRID_COLOR}},
            "x": {"beginAtZero": True, "grid": {"color": GRID_COLOR}},
        }
        options["elements"] = {"point": {"radius": 6, "hoverRadius": 8}}

    return options


def determine_chart_types(points: List[DataPoint]) -> List[str]:
    """Pick up to three chart types that suit the shape of the data."""
    categories = {p.category for p in points}
    count = len(points)
    has_years = DataCategory.YEAR in categories

    types = []
    if has_years and count >= 3:
        types.append('line')
    if DataCategory.PERCENTAGE in categories and count <= 6:
        types.append('pie')
    if DataCategory.CURRENCY in categories or DataCategory.RATING in categories or count >= 3:
        types.append('bar')
    if count >= 8:
        types.append('scatter')
    if has_years and count >= 4:
        types.append('area')

    return (types or ['bar'])[:MAX_CHART_TYPES]


def validate_data_for_chart(points: List[DataPoint], chart_type: str) -> bool:
    if not points:
        return False
    if chart_type in ('pie', 'doughnut'):
        return len(points) <= 8 and all(p.value > 0 for p in points)
    if chart_type in ('line', 'area'):
        return len(points) >= 2
    if chart_type == 'scatter':
        return len(points) >= 3
    return True


class ChartGenerator:
    """Builds chart VisualElements from data points."""

    def generate_chart(self, points: List[DataPoint], config: ChartConfig) -> VisualElement:
        if config.type not in CHART_TYPES:
            raise ValueError(f"Unsupported chart type: {config.type}")

        payload = {
            "type": config.type,
            "data": prepare_chart_data(points, config),
            "options": chart_options(config),
        }
        logger.debug(f"[Charts] Built {config.type} chart from {len(points)} data points")
        return VisualElement(
            type=ElementType.CHART,
            content=json.dumps(payload),
            position=Position(x=100, y=100),
            size=CHART_SIZE.model_copy(),
            style=ElementStyle(border_radius=8),
        )

    def chart_preview(self, points: List[DataPoint], chart_type: str) -> str:
        """Plain-text preview, e.g. ``BAR - Revenue: 120.0, Users: 45.0``."""
        ordered = sort_data_points(points, chart_type)
        preview = ', '.join(f"{format_label(p)}: {p.value}" for p in ordered[:5])
        suffix = '...' if len(ordered) > 5 else ''
        return f"{chart_type.upper()} - {preview}{suffix}"


# Singleton instance
chart_generator = ChartGenerator()
