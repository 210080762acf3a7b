"""Theme and export configuration models"""
from enum import Enum
from typing import Tuple
from pydantic import BaseModel, ConfigDict


class Spacing(str, Enum):
    MINIMAL = "minimal"
    COMFORTABLE = "comfortable"
    SPACIOUS = "spacious"


class ShadowLevel(str, Enum):
    NONE = "none"
    SUBTLE = "subtle"
    MODERATE = "moderate"
    ELEVATED = "elevated"


class ThemeColors(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary: str
    secondary: str
    accent: str
    background: str
    surface: str
    text: str


class ThemeFonts(BaseModel):
    model_config = ConfigDict(frozen=True)

    heading: str
    body: str


class ThemeStyles(BaseModel):
    model_config = ConfigDict(frozen=True)

    border_radius: int
    border_width: int
    spacing: Spacing
    shadow_level: ShadowLevel


class Theme(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    colors: ThemeColors
    fonts: ThemeFonts
    styles: ThemeStyles
    chart_colors: Tuple[str, ...]


class ExportFormat(str, Enum):
    PPTX = "pptx"
    PDF = "pdf"
    PNG = "png"
    SVG = "svg"


class ExportQuality(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ExportOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    format: ExportFormat = ExportFormat.SVG
    quality: ExportQuality = ExportQuality.MEDIUM
    include_notes: bool = False
