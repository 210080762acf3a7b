"""Theme API endpoints"""
from typing import List

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from models.content import VisualElement
from models.theme import Theme
from services.errors import ThemeNotFoundError
from services import theme_renderer

router = APIRouter(prefix="/themes", tags=["themes"])


class ApplyThemeRequest(BaseModel):
    elements: List[VisualElement]


class ThemedElementsResponse(BaseModel):
    theme_id: str
    elements: List[VisualElement]
    svg: str


@router.get("", response_model=List[Theme])
async def list_themes():
    return theme_renderer.list_themes()


@router.get("/{theme_id}", response_model=Theme)
async def get_theme(theme_id: str):
    try:
        return theme_renderer.get_theme(theme_id)
    except ThemeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{theme_id}/preview", response_model=ThemedElementsResponse)
async def preview_theme(theme_id: str):
    """Swatch elements for a theme, plus their SVG rendering."""
    try:
        elements = theme_renderer.theme_preview(theme_id)
        return ThemedElementsResponse(
            theme_id=theme_id,
            elements=elements,
            svg=theme_renderer.render_svg(elements, theme_id),
        )
    except ThemeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{theme_id}/apply", response_model=ThemedElementsResponse)
async def apply_theme(theme_id: str, request: ApplyThemeRequest):
    try:
        return ThemedElementsResponse(
            theme_id=theme_id,
            elements=theme_renderer.apply_theme(request.elements, theme_id),
            svg=theme_renderer.render_svg(request.elements, theme_id),
        )
    except ThemeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
