"""
Theme Renderer - Applies a visual theme to suggestion elements and draws them.

Suggestion elements leave colours unset; apply_theme() fills them in from one
of the fixed themes, and render_svg() turns themed elements into standalone
SVG markup (used for previews and SVG export).
"""
import html
import json
import logging
from typing import Dict, List, Optional

from models.content import ElementStyle, ElementType, Position, Size, VisualElement
from models.theme import (
    ShadowLevel,
    Spacing,
    Theme,
    ThemeColors,
    ThemeFonts,
    ThemeStyles,
)
from services.errors import ThemeNotFoundError

logger = logging.getLogger(__name__)


THEMES: Dict[str, Theme] = {
    "professional": Theme(
        id="professional",
        name="Professional",
        description="Clean, corporate design with blue accents",
        colors=ThemeColors(primary="#1e40af", secondary="#64748b", accent="#3b82f6",
                           background="#ffffff", surface="#f8fafc", text="#1e293b"),
        fonts=ThemeFonts(heading="Inter", body="Inter"),
        styles=ThemeStyles(border_radius=8, border_width=1,
                           spacing=Spacing.COMFORTABLE, shadow_level=ShadowLevel.SUBTLE),
        chart_colors=("#1e40af", "#3b82f6", "#60a5fa", "#93c5fd", "#dbeafe"),
    ),
    "creative": Theme(
        id="creative",
        name="Creative",
        description="Vibrant, modern design with colorful elements",
        colors=ThemeColors(primary="#7c3aed", secondary="#ec4899", accent="#f59e0b",
                           background="#ffffff", surface="#faf5ff", text="#1f2937"),
        fonts=ThemeFonts(heading="Poppins", body="Inter"),
        styles=ThemeStyles(border_radius=12, border_width=2,
                           spacing=Spacing.SPACIOUS, shadow_level=ShadowLevel.MODERATE),
        chart_colors=("#7c3aed", "#ec4899", "#f59e0b", "#10b981", "#3b82f6"),
    ),
    "minimal": Theme(
        id="minimal",
        name="Minimal",
        description="Simple, elegant design with subtle colors",
        colors=ThemeColors(primary="#374151", secondary="#9ca3af", accent="#6b7280",
                           background="#ffffff", surface="#f9fafb", text="#111827"),
        fonts=ThemeFonts(heading="Inter", body="Inter"),
        styles=ThemeStyles(border_radius=4, border_width=1,
                           spacing=Spacing.MINIMAL, shadow_level=ShadowLevel.NONE),
        chart_colors=("#374151", "#6b7280", "#9ca3af", "#d1d5db", "#f3f4f6"),
    ),
    "bold": Theme(
        id="bold",
        name="Bold",
        description="High-contrast design with strong visual impact",
        colors=ThemeColors(primary="#dc2626", secondary="#1f2937", accent="#f59e0b",
                           background="#ffffff", surface="#fef2f2", text="#111827"),
        fonts=ThemeFonts(heading="Inter", body="Inter"),
        styles=ThemeStyles(border_radius=6, border_width=2,
                           spacing=Spacing.COMFORTABLE, shadow_level=ShadowLevel.ELEVATED),
        chart_colors=("#dc2626", "#f59e0b", "#1f2937", "#374151", "#6b7280"),
    ),
}

SHADOWS = {
    ShadowLevel.NONE: None,
    ShadowLevel.SUBTLE: "0 1px 2px 0 rgba(0, 0, 0, 0.05)",
    ShadowLevel.MODERATE: "0 4px 6px -1px rgba(0, 0, 0, 0.1)",
    ShadowLevel.ELEVATED: "0 10px 15px -3px rgba(0, 0, 0, 0.1)",
}

PADDING = {Spacing.MINIMAL: 8, Spacing.COMFORTABLE: 12, Spacing.SPACIOUS: 16}
FONT_SCALE = {Spacing.MINIMAL: 0.9, Spacing.COMFORTABLE: 1.0, Spacing.SPACIOUS: 1.1}

DARK_COLORS = {"#000000", "#1f2937", "#374151", "#1e3a8a", "#7c3aed", "#0f172a"}

DEFAULT_FONT_SIZE = 14


def get_theme(theme_id: str) -> Theme:
    theme = THEMES.get(theme_id)
    if theme is None:
        raise ThemeNotFoundError(theme_id)
    return theme


def list_themes() -> List[Theme]:
    return list(THEMES.values())


def contrast_color(background: str) -> str:
    return "#ffffff" if background.lower() in DARK_COLORS else "#000000"


def themed_font_size(original: Optional[int], theme: Theme) -> int:
    if not original:
        return DEFAULT_FONT_SIZE
    return round(original * FONT_SCALE[theme.styles.spacing])


def themed_chart_data(content: str, theme: Theme) -> Optional[str]:
    """Chart payload with dataset colours swapped for the theme's chart colours."""
    try:
        payload = json.loads(content)
    except (TypeError, ValueError) as e:
        logger.warning(f"[Theme] Failed to parse chart data for theming: {e}")
        return None

    data = payload.get("data") if isinstance(payload, dict) else None
    datasets = data.get("datasets") if isinstance(data, dict) else None
    if not datasets or not isinstance(datasets, list):
        return json.dumps(payload)

    colors = list(theme.chart_colors)
    for index, dataset in enumerate(datasets):
        if not isinstance(dataset, dict):
            continue
        if isinstance(dataset.get("backgroundColor"), list):
            dataset["backgroundColor"] = colors
        else:
            dataset["backgroundColor"] = colors[index % len(colors)]
        dataset["borderColor"] = theme.colors.primary
        dataset["borderWidth"] = theme.styles.border_width
    return json.dumps(payload)


def themed_style(element: VisualElement, theme: Theme) -> ElementStyle:
    original = element.style or ElementStyle()
    updates = {
        "border_radius": theme.styles.border_radius,
        "border_width": theme.styles.border_width,
    }

    if element.type == ElementType.TEXT:
        updates.update(
            font_family=theme.fonts.body,
            text_color=original.text_color or theme.colors.primary,
            background_color=original.background_color or theme.colors.surface,
            border_color=theme.colors.secondary,
            font_size=themed_font_size(original.font_size, theme),
            font_weight=original.font_weight or "normal",
            padding=PADDING[theme.styles.spacing],
        )
    elif element.type == ElementType.CHART:
        updates.update(
            background_color=theme.colors.background,
            border_color=theme.colors.secondary,
        )
        chart_data = themed_chart_data(element.content, theme)
        if chart_data is not None:
            updates["chart_data"] = chart_data
    elif element.type == ElementType.SHAPE:
        background = original.background_color or theme.colors.accent
        updates.update(
            background_color=background,
            text_color=contrast_color(background),
            border_color=theme.colors.primary,
            box_shadow=SHADOWS[theme.styles.shadow_level],
        )

    return original.model_copy(update=updates)


def apply_theme(elements: List[VisualElement], theme_id: str) -> List[VisualElement]:
    """Return themed copies of ``elements``; the inputs are left untouched."""
    theme = get_theme(theme_id)
    return [e.model_copy(update={"style": themed_style(e, theme)}) for e in elements]


def theme_preview(theme_id: str) -> List[VisualElement]:
    """Small swatch layout: title, sample card, accent chip and a bar chart."""
    theme = get_theme(theme_id)
    chart = {
        "type": "bar",
        "data": {
            "labels": ["A", "B", "C"],
            "datasets": [{"data": [30, 50, 20], "backgroundColor": list(theme.chart_colors[:3])}],
        },
    }
    return [
        VisualElement(
            type=ElementType.TEXT, content=theme.name,
            position=Position(x=20, y=20), size=Size(width=200, height=40),
            style=ElementStyle(font_size=24, font_weight="bold", font_family=theme.fonts.heading,
                               text_color=theme.colors.primary),
        ),
        VisualElement(
            type=ElementType.SHAPE, content="Sample Card",
            position=Position(x=20, y=80), size=Size(width=180, height=100),
            style=ElementStyle(background_color=theme.colors.surface, text_color=theme.colors.primary,
                               border_color=theme.colors.secondary),
        ),
        VisualElement(
            type=ElementType.SHAPE, content="Accent",
            position=Position(x=220, y=80), size=Size(width=80, height=40),
            style=ElementStyle(background_color=theme.colors.accent,
                               text_color=contrast_color(theme.colors.accent)),
        ),
        VisualElement(
            type=ElementType.CHART, content=json.dumps(chart),
            position=Position(x=20, y=200), size=Size(width=280, height=120),
            style=ElementStyle(background_color=theme.colors.background, chart_data=json.dumps(chart)),
        ),
    ]


# =============================================================================
# SVG rendering
# =============================================================================

def escape_svg_text(text: str) -> str:
    return html.escape(str(text)) if text else ""


def _attr(value) -> str:
    """Attribute-safe value; style fields arrive from clients unchecked."""
    return html.escape(str(value), quote=True)


def wrap_text(text: str, max_chars: int = 20, max_lines: int = 3) -> List[str]:
    """Wrap text into lines for a box. Never cuts mid-word."""
    words = str(text or "").split()
    if not words:
        return [""]

    lines: List[str] = []
    current = ""
    for word in words:
        candidate = f"{current} {word}" if current else word
        if len(candidate) <= max_chars:
            current = candidate
            continue
        if current:
            lines.append(current)
        current = word
        if len(lines) >= max_lines:
            break

    if current and len(lines) < max_lines:
        lines.append(current)
    return lines[:max_lines]


class SVGRenderer:
    """Draws themed VisualElements onto a single SVG canvas."""

    def __init__(self, theme: Theme, min_width: int = 800, min_height: int = 600):
        self.theme = theme
        self.min_width = min_width
        self.min_height = min_height

    def _canvas_size(self, elements: List[VisualElement]):
        width = max([e.position.x + e.size.width + 50 for e in elements] + [self.min_width])
        height = max([e.position.y + e.size.height + 50 for e in elements] + [self.min_height])
        return int(width), int(height)

    def _rect(self, element: VisualElement, fill: str, stroke: Optional[str]) -> str:
        style = element.style or ElementStyle()
        stroke_attr = ""
        if stroke and style.border_width:
            stroke_attr = f' stroke="{_attr(stroke)}" stroke-width="{_attr(style.border_width)}"'
        return (
            f'  <rect x="{element.position.x}" y="{element.position.y}" '
            f'width="{element.size.width}" height="{element.size.height}" '
            f'rx="{_attr(style.border_radius or 0)}" fill="{_attr(fill)}"{stroke_attr}/>\n'
        )

    def _text_block(self, element: VisualElement, color: str, anchor: str = "start") -> str:
        style = element.style or ElementStyle()
        font_size = style.font_size or DEFAULT_FONT_SIZE
        padding = style.padding or 8
        max_chars = max(4, int((element.size.width - 2 * padding) / (font_size * 0.55)))
        max_lines = max(1, int((element.size.height - padding) / (font_size * 1.4)))
        lines = wrap_text(element.content.replace("\n", " "), max_chars, max_lines)

        if anchor == "middle":
            x = element.position.x + element.size.width / 2
        else:
            x = element.position.x + padding
        y = element.position.y + padding + font_size
        family = style.font_family or self.theme.fonts.body
        weight = "600" if style.font_weight == "bold" else "400"

        out = ""
        for i, line in enumerate(lines):
            out += (
                f'  <text x="{x}" y="{y + i * font_size * 1.4:.1f}" font-family="{_attr(family)}" '
                f'font-size="{_attr(font_size)}" fill="{_attr(color)}" text-anchor="{anchor}" '
                f'font-weight="{weight}">{escape_svg_text(line)}</text>\n'
            )
        return out

    def _chart(self, element: VisualElement) -> str:
        style = element.style or ElementStyle()
        out = self._rect(element, style.background_color or self.theme.colors.background,
                         style.border_color)
        try:
            payload = json.loads(style.chart_data or element.content)
            dataset = payload["data"]["datasets"][0]
            if not isinstance(dataset, dict):
                return out
            values = [float(v) for v in dataset.get("data", [])]
            labels = payload["data"].get("labels", [])
        except (ValueError, KeyError, IndexError, TypeError):
            return out
        if not values:
            return out

        colors = dataset.get("backgroundColor") or list(self.theme.chart_colors)
        if isinstance(colors, str):
            colors = [colors]
        elif not isinstance(colors, list):
            colors = list(self.theme.chart_colors)
        peak = max(max(values), 1e-9)
        inner_x = element.position.x + 20
        inner_w = element.size.width - 40
        base_y = element.position.y + element.size.height - 30
        inner_h = element.size.height - 60
        slot = inner_w / len(values)

        for i, value in enumerate(values):
            bar_h = max(0.0, value / peak * inner_h)
            x = inner_x + i * slot + slot * 0.15
            out += (
                f'  <rect x="{x:.1f}" y="{base_y - bar_h:.1f}" width="{slot * 0.7:.1f}" '
                f'height="{bar_h:.1f}" fill="{_attr(colors[i % len(colors)])}"/>\n'
            )
            if i < len(labels):
                out += (
                    f'  <text x="{x + slot * 0.35:.1f}" y="{base_y + 16}" font-size="10" '
                    f'font-family="{_attr(self.theme.fonts.body)}" fill="{_attr(self.theme.colors.text)}" '
                    f'text-anchor="middle">{escape_svg_text(labels[i])}</text>\n'
                )
        return out

    def _element(self, element: VisualElement) -> str:
        style = element.style or ElementStyle()
        if element.type == ElementType.CHART:
            return self._chart(element)
        if element.type == ElementType.SHAPE:
            fill = style.background_color or self.theme.colors.accent
            return (self._rect(element, fill, style.border_color)
                    + self._text_block(element, style.text_color or contrast_color(fill), anchor="middle"))
        if element.type == ElementType.TIMELINE:
            fill = style.background_color or self.theme.colors.surface
            cx = element.position.x + element.size.width / 2
            return (
                self._rect(element, fill, style.border_color or self.theme.colors.accent)
                + f'  <circle cx="{cx}" cy="{element.position.y}" r="6" fill="{_attr(self.theme.colors.accent)}"/>\n'
                + self._text_block(element, style.text_color or self.theme.colors.text, anchor="middle")
            )
        if element.type == ElementType.IMAGE:
            return self._rect(element, style.background_color or self.theme.colors.surface,
                              self.theme.colors.secondary)

        fill = style.background_color or self.theme.colors.surface
        return (self._rect(element, fill, style.border_color)
                + self._text_block(element, style.text_color or self.theme.colors.text))

    def render(self, elements: List[VisualElement]) -> str:
        width, height = self._canvas_size(elements)
        body = "".join(self._element(e) for e in elements)
        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {width} {height}" '
            f'width="{width}" height="{height}">\n'
            f'  <rect width="100%" height="100%" fill="{_attr(self.theme.colors.background)}"/>\n'
            f'{body}</svg>'
        )


def render_svg(elements: List[VisualElement], theme_id: str) -> str:
    """Theme ``elements`` and draw them as SVG markup."""
    theme = get_theme(theme_id)
    themed = apply_theme(elements, theme_id)
    return SVGRenderer(theme).render(themed)
