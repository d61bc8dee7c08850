"""Wrap-flow text layout: headline and body flowed around a single image."""

from .geometry import content_rect_from_canvas, content_rect_from_region, lane_for_band, line_rect
from .invariants import LayoutInvariantError, assert_layout_invariants
from .measure import AverageCharWidthMeasurer, Measurer, PillowFontMeasurer
from .models import ImageBounds, Lane, LayoutResult, LineSource, Rect, StyleRange, TextLine, Token
from .options import WrapFlowOptions
from .search import wrap_flow_layout
from .styles import merge_style_ranges, project_styles, remap_style_ranges
from .tokenizer import tokenize

__all__ = [
    "AverageCharWidthMeasurer",
    "ImageBounds",
    "Lane",
    "LayoutInvariantError",
    "LayoutResult",
    "LineSource",
    "Measurer",
    "PillowFontMeasurer",
    "Rect",
    "StyleRange",
    "TextLine",
    "Token",
    "WrapFlowOptions",
    "assert_layout_invariants",
    "content_rect_from_canvas",
    "content_rect_from_region",
    "lane_for_band",
    "line_rect",
    "merge_style_ranges",
    "project_styles",
    "remap_style_ranges",
    "tokenize",
    "wrap_flow_layout",
]
