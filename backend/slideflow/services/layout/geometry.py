"""Rectangle math and lane selection for wrap-flow layout."""

import math
from typing import Optional

from .models import ImageBounds, Lane, Rect, TextLine, TieBreak

COORD_LIMIT = 10000
SIZE_LIMIT = 20000

# Stand-in for "no image": far outside any canvas.
OFFSCREEN_IMAGE = ImageBounds(x=-9000, y=-9000, width=1, height=1)


def clamp(n: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, n))


def content_rect_from_canvas(canvas_width: float, canvas_height: float, margin: float) -> dict:
    """Content box for a plain canvas: full size minus a margin on every side."""
    return {
        "x": margin,
        "y": margin,
        "width": canvas_width - margin * 2,
        "height": canvas_height - margin * 2,
    }


def content_rect_from_region(region: dict, padding: float) -> dict:
    """Inset a template content region by padding (sizes floored at 1px)."""
    return {
        "x": region["x"] + padding,
        "y": region["y"] + padding,
        "width": max(1, region["width"] - padding * 2),
        "height": max(1, region["height"] - padding * 2),
    }


def snap_content(x: float, y: float, width: float, height: float) -> Rect:
    """Snap a (possibly fractional) content box outward to whole pixels."""
    left = clamp(x, -COORD_LIMIT, COORD_LIMIT)
    top = clamp(y, -COORD_LIMIT, COORD_LIMIT)
    right = left + clamp(width, 0, SIZE_LIMIT)
    bottom = top + clamp(height, 0, SIZE_LIMIT)
    rect = Rect(math.floor(left), math.floor(top), math.ceil(right), math.ceil(bottom))
    if rect.right <= rect.left or rect.bottom <= rect.top:
        raise ValueError(f"Content rect must have positive size, got {rect}")
    return rect


def blocked_rect(image: Optional[ImageBounds], clearance: float) -> Rect:
    """Image box grown by the clearance and snapped outward to whole pixels."""
    if image is None:
        image = OFFSCREEN_IMAGE
    left = clamp(image.x, -COORD_LIMIT, COORD_LIMIT)
    top = clamp(image.y, -COORD_LIMIT, COORD_LIMIT)
    right = left + max(0.0, image.width)
    bottom = top + max(0.0, image.height)
    return Rect(
        left=math.floor(left - clearance),
        top=math.floor(top - clearance),
        right=math.ceil(right + clearance),
        bottom=math.ceil(bottom + clearance),
    )


def intersects_band(y_top: float, y_bottom: float, rect: Rect) -> bool:
    return not (y_bottom <= rect.top or y_top >= rect.bottom)


def overlaps(a: Rect, b: Rect) -> bool:
    return not (a.right <= b.left or a.left >= b.right or a.bottom <= b.top or a.top >= b.bottom)


def contains(outer: Rect, inner: Rect) -> bool:
    return (
        inner.left >= outer.left
        and inner.right <= outer.right
        and inner.top >= outer.top
        and inner.bottom <= outer.bottom
    )


def lane_for_band(
    y_top: float,
    y_bottom: float,
    content: Rect,
    blocked: Rect,
    tie_break: TieBreak = "right",
) -> Optional[Lane]:
    """Usable horizontal span of the content rect for one vertical band.

    Returns None when the band is blocked and neither side of the image
    has positive width; the caller has to move below the image.
    """
    if not intersects_band(y_top, y_bottom, blocked):
        return Lane(x=content.left, width=content.right - content.left, kind="FULL")

    left_width = min(blocked.left, content.right) - content.left
    right_width = content.right - max(blocked.right, content.left)
    if left_width <= 0 and right_width <= 0:
        return None

    if left_width > right_width:
        side = "LEFT"
    elif right_width > left_width:
        side = "RIGHT"
    else:
        side = "LEFT" if tie_break == "left" else "RIGHT"

    if side == "LEFT":
        return Lane(x=content.left, width=left_width, kind="LEFT")
    return Lane(x=max(blocked.right, content.left), width=right_width, kind="RIGHT")


def line_rect(line: TextLine) -> Rect:
    """Whole-pixel box a rendered line occupies, rounded outward."""
    if line.text_align == "center":
        left_raw = line.x - line.max_width / 2
    elif line.text_align == "right":
        left_raw = line.x - line.max_width
    else:
        left_raw = line.x
    top_raw = line.y
    return Rect(
        left=math.floor(left_raw),
        top=math.floor(top_raw),
        right=math.ceil(left_raw + line.max_width),
        bottom=math.ceil(top_raw + line.base_size * line.line_height),
    )
