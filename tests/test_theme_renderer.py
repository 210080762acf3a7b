"""Tests for theme application and SVG rendering."""
import json

import pytest

from models.content import (
    DataCategory,
    DataPoint,
    ElementStyle,
    ElementType,
    Position,
    Size,
    VisualElement,
)
from services.chart_generator import ChartConfig, chart_generator
from services.errors import ThemeNotFoundError
from services.theme_renderer import (
    THEMES,
    apply_theme,
    contrast_color,
    get_theme,
    list_themes,
    render_svg,
    theme_preview,
    wrap_text,
)


def text_element(content: str = "Hello", **style) -> VisualElement:
    return VisualElement(
        type=ElementType.TEXT,
        content=content,
        position=Position(x=100, y=100),
        size=Size(width=400, height=100),
        style=ElementStyle(**style) if style else None,
    )


def shape_element(**style) -> VisualElement:
    return VisualElement(
        type=ElementType.SHAPE,
        content="Accent",
        position=Position(x=520, y=100),
        size=Size(width=100, height=150),
        style=ElementStyle(**style) if style else None,
    )


def test_four_themes():
    assert [t.id for t in list_themes()] == ["professional", "creative", "minimal", "bold"]
    assert get_theme("bold").colors.primary == "#dc2626"


def test_unknown_theme():
    with pytest.raises(ThemeNotFoundError) as exc_info:
        get_theme("neon")
    assert str(exc_info.value) == "Theme not found: neon"
    with pytest.raises(ThemeNotFoundError):
        apply_theme([text_element()], "neon")


def test_apply_theme_does_not_mutate_input():
    original = text_element(font_size=20)
    themed = apply_theme([original], "professional")[0]

    assert original.style.text_color is None
    assert original.style.font_size == 20
    assert themed.style.text_color == "#1e40af"


def test_text_styling_scales_font():
    creative = get_theme("creative")
    sized, unsized = apply_theme([text_element(font_size=20), text_element()], "creative")

    assert sized.style.font_size == 22
    assert unsized.style.font_size == 14
    assert sized.style.font_family == creative.fonts.body
    assert sized.style.background_color == creative.colors.surface
    assert sized.style.padding == 16
    assert sized.style.font_weight == "normal"


def test_text_keeps_explicit_colours():
    themed = apply_theme([text_element(text_color="#123456", font_weight="bold")], "minimal")[0]
    assert themed.style.text_color == "#123456"
    assert themed.style.font_weight == "bold"
    assert themed.style.border_radius == 4


def test_shape_gets_accent_and_contrast_text():
    themed = apply_theme([shape_element()], "creative")[0]
    assert themed.style.background_color == "#f59e0b"
    assert themed.style.text_color == "#000000"
    assert themed.style.box_shadow == "0 4px 6px -1px rgba(0, 0, 0, 0.1)"

    dark = apply_theme([shape_element(background_color="#7c3aed")], "minimal")[0]
    assert dark.style.text_color == "#ffffff"
    assert dark.style.box_shadow is None


def test_contrast_color():
    assert contrast_color("#1F2937") == "#ffffff"
    assert contrast_color("#ffffff") == "#000000"


def test_chart_colours_replaced():
    points = [
        DataPoint(id="percentage-0", value=25, label="25%", category=DataCategory.PERCENTAGE),
        DataPoint(id="percentage-1", value=40, label="40%", category=DataCategory.PERCENTAGE),
    ]
    chart = chart_generator.generate_chart(points, ChartConfig.for_type("pie"))
    themed = apply_theme([chart], "bold")[0]

    dataset = json.loads(themed.style.chart_data)["data"]["datasets"][0]
    assert dataset["backgroundColor"] == list(THEMES["bold"].chart_colors)
    assert dataset["borderColor"] == "#dc2626"
    # Element content is left as generated
    assert json.loads(themed.content) == json.loads(chart.content)


def test_bad_chart_payload_is_left_alone():
    element = VisualElement(
        type=ElementType.CHART, content="not json",
        position=Position(x=0, y=0), size=Size(width=100, height=100),
    )
    themed = apply_theme([element], "professional")[0]
    assert themed.style.chart_data is None
    assert themed.style.background_color == "#ffffff"


@pytest.mark.parametrize("payload", [
    {"data": None},
    {"data": []},
    {"data": {"datasets": [1, "x"]}},
    {"data": {"datasets": "nope"}},
    [1, 2],
    "text",
])
def test_malformed_chart_payload_passes_through(payload):
    element = VisualElement(
        type=ElementType.CHART, content=json.dumps(payload),
        position=Position(x=0, y=0), size=Size(width=200, height=120),
    )
    themed = apply_theme([element], "creative")[0]
    assert json.loads(themed.style.chart_data) == payload
    assert render_svg([element], "creative").endswith("</svg>")


def test_chart_dataset_mix_only_themes_dicts():
    payload = {"data": {"datasets": [7, {"data": [1, 2]}]}}
    element = VisualElement(
        type=ElementType.CHART, content=json.dumps(payload),
        position=Position(x=0, y=0), size=Size(width=200, height=120),
    )
    datasets = json.loads(apply_theme([element], "minimal")[0].style.chart_data)["data"]["datasets"]
    assert datasets[0] == 7
    assert datasets[1]["backgroundColor"] == "#6b7280"


def test_wrap_text():
    assert wrap_text("one two three four", max_chars=9) == ["one two", "three", "four"]
    assert wrap_text("one two three four five six", max_chars=7, max_lines=2) == ["one two", "three"]
    assert wrap_text("") == [""]


def test_render_svg_escapes_content():
    svg = render_svg([text_element("<b>Tom & Jerry</b>")], "professional")
    assert svg.startswith("<svg")
    assert svg.endswith("</svg>")
    assert "&lt;b&gt;Tom" in svg
    assert "<b>" not in svg


def test_render_svg_escapes_style_attributes():
    hostile = 'red"/><script>alert(1)</script><x a="'
    svg = render_svg([
        text_element(text_color=hostile),
        shape_element(background_color=hostile),
    ], "professional")
    assert "<script>" not in svg
    assert "&quot;/&gt;&lt;script&gt;" in svg


def test_render_svg_grows_canvas():
    wide = VisualElement(
        type=ElementType.SHAPE, content="Wide",
        position=Position(x=900, y=0), size=Size(width=300, height=50),
    )
    svg = render_svg([wide], "bold")
    assert 'width="1250"' in svg
    assert 'height="600"' in svg


@pytest.mark.parametrize("theme_id", list(THEMES))
def test_theme_preview_renders(theme_id):
    elements = theme_preview(theme_id)
    assert len(elements) == 4
    assert render_svg(elements, theme_id).startswith("<svg")
