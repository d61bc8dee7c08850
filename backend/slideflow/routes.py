"""
API routes for carousel text layout.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, Field

from slideflow.config import Settings, get_settings
from slideflow.services.layout import (
    ImageBounds,
    LayoutInvariantError,
    LayoutResult,
    StyleRange,
    WrapFlowOptions,
    content_rect_from_canvas,
    content_rect_from_region,
    wrap_flow_layout,
)
from slideflow.services.preview_renderer import render_preview_png
from slideflow.slide_templates import default_image_placement, get_slide_template, list_slide_templates

logger = logging.getLogger(__name__)

router = APIRouter()


# Request/Response Models

class Box(BaseModel):
    x: float
    y: float
    width: float = Field(ge=0)
    height: float = Field(ge=0)


class Size(BaseModel):
    width: float = Field(gt=0)
    height: float = Field(gt=0)


class StyleRangeIn(BaseModel):
    start: int
    end: int
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    underline: Optional[bool] = None


class FontMetrics(BaseModel):
    """Client-measured average character widths, in em."""
    headline_avg_char_width_em: Optional[float] = Field(None, gt=0)
    body_avg_char_width_em: Optional[float] = Field(None, gt=0)


class LayoutOverrides(BaseModel):
    clearance_px: Optional[float] = Field(None, ge=0)
    headline_font_size: Optional[float] = Field(None, gt=0)
    body_font_size: Optional[float] = Field(None, gt=0)
    headline_min_font_size: Optional[float] = Field(None, gt=0)
    body_min_font_size: Optional[float] = Field(None, gt=0)
    headline_line_height: Optional[float] = Field(None, gt=0)
    body_line_height: Optional[float] = Field(None, gt=0)
    block_gap_px: Optional[float] = Field(None, ge=0)
    lane_tie_break: Optional[str] = None
    body_prefer_side_lane: Optional[bool] = None
    min_usable_lane_width_px: Optional[float] = None
    skinny_lane_width_px: Optional[float] = None
    min_below_space_px: Optional[float] = None


class WrapFlowRequest(BaseModel):
    headline: str = ""
    body: str
    image: Optional[Box] = None  # placed image, canvas pixels
    image_size: Optional[Size] = None  # natural size of a new image without a position yet
    template_id: Optional[str] = None
    content_region: Optional[Box] = None  # overrides the template region
    content_padding: Optional[float] = Field(None, ge=0)
    headline_styles: list[StyleRangeIn] = []
    body_styles: list[StyleRangeIn] = []
    font_metrics: Optional[FontMetrics] = None
    options: Optional[LayoutOverrides] = None


def options_from_settings(settings: Settings, **overrides) -> WrapFlowOptions:
    """Engine options from app settings, with per-request overrides."""
    values = {
        "canvas_width": settings.canvas_width,
        "canvas_height": settings.canvas_height,
        "margin": settings.margin,
        "clearance_px": settings.clearance_px,
        "headline_font_size": settings.headline_font_size,
        "body_font_size": settings.body_font_size,
        "headline_min_font_size": settings.headline_min_font_size,
        "body_min_font_size": settings.body_min_font_size,
        "headline_line_height": settings.headline_line_height,
        "body_line_height": settings.body_line_height,
        "font_step": settings.font_step,
        "block_gap_px": settings.block_gap_px,
        "lane_tie_break": settings.lane_tie_break,
        "body_prefer_side_lane": settings.body_prefer_side_lane,
        "min_usable_lane_width_px": settings.min_usable_lane_width_px,
        "skinny_lane_width_px": settings.skinny_lane_width_px,
        "min_below_space_px": settings.min_below_space_px,
        "headline_avg_char_width_em": settings.avg_char_width_em,
        "body_avg_char_width_em": settings.avg_char_width_em,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return WrapFlowOptions(**values)


def _resolve_request(request: WrapFlowRequest, settings: Settings):
    """Work out canvas, content rect, image box and engine options for a request."""
    if not request.body.strip():
        raise HTTPException(status_code=400, detail="Body is required")

    template = None
    if request.template_id:
        template = get_slide_template(request.template_id)
        if template is None:
            raise HTTPException(status_code=404, detail=f"Template not found: {request.template_id}")

    if template:
        canvas = dict(template["canvas"])
    else:
        canvas = {"width": settings.canvas_width, "height": settings.canvas_height}

    if request.content_region is not None:
        padding = request.content_padding if request.content_padding is not None else settings.content_padding
        content_rect = content_rect_from_region(request.content_region.model_dump(), padding)
    elif template:
        padding = request.content_padding if request.content_padding is not None else template["padding"]
        content_rect = content_rect_from_region(template["content_region"], padding)
    else:
        content_rect = content_rect_from_canvas(canvas["width"], canvas["height"], settings.margin)

    if request.image is not None:
        image = ImageBounds(**request.image.model_dump())
    elif request.image_size is not None:
        placed = default_image_placement(template, request.image_size.width, request.image_size.height)
        image = ImageBounds(**placed)
    else:
        image = None

    overrides = request.options.model_dump() if request.options else {}
    if request.font_metrics:
        overrides.update(request.font_metrics.model_dump())
    try:
        opts = options_from_settings(
            settings,
            canvas_width=canvas["width"],
            canvas_height=canvas["height"],
            content_rect=content_rect,
            **overrides,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return canvas, image, opts


def _run_layout(request: WrapFlowRequest, image: Optional[ImageBounds], opts: WrapFlowOptions) -> LayoutResult:
    try:
        return wrap_flow_layout(
            request.headline,
            request.body,
            image,
            opts,
            headline_styles=[StyleRange.from_dict(s.model_dump()) for s in request.headline_styles],
            body_styles=[StyleRange.from_dict(s.model_dump()) for s in request.body_styles],
        )
    except LayoutInvariantError as e:
        logger.error(f"Wrap-flow invariant violated: {e}")
        raise HTTPException(status_code=500, detail=f"Layout failed: {e}")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# Routes

@router.get("/templates")
async def get_templates():
    """Get all slide templates."""
    return list_slide_templates()


@router.get("/layout/defaults")
async def get_layout_defaults():
    """Effective wrap-flow defaults for this deployment."""
    return options_from_settings(get_settings()).to_dict()


@router.post("/layout/wrap-flow")
def wrap_flow(request: WrapFlowRequest):
    """Flow headline and body around the image; returns positioned lines."""
    canvas, image, opts = _resolve_request(request, get_settings())
    logger.info(
        f"Wrap-flow request: headline={len(request.headline)} chars, body={len(request.body)} chars, "
        f"image={'yes' if image else 'no'}, template={request.template_id}"
    )
    result = _run_layout(request, image, opts)
    payload = result.to_dict()
    payload["canvas"] = canvas
    payload["image"] = (
        {"x": image.x, "y": image.y, "width": image.width, "height": image.height} if image else None
    )
    return payload


@router.post("/layout/preview")
def wrap_flow_preview(request: WrapFlowRequest):
    """Render the wrap-flow layout to a PNG."""
    canvas, image, opts = _resolve_request(request, get_settings())
    result = _run_layout(request, image, opts)
    png = render_preview_png(result, int(canvas["width"]), int(canvas["height"]), image)
    return Response(
        content=png,
        media_type="image/png",
        headers={"X-Layout-Truncated": "true" if result.truncated else "false"},
    )
