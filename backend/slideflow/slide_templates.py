"""
Slide templates for carousel layout.

Each template fixes the canvas size and the content region text must stay
inside. The region is inset by the template padding before layout runs.
"""

from typing import Optional

# Image dimensions
WIDTH = 1080
HEIGHT = 1440

DEFAULT_PADDING = 40


# ============================================
# SLIDE TEMPLATES
# ============================================
SLIDE_TEMPLATES = {
    "full_bleed": {
        "id": "full_bleed",
        "name": "Full Bleed",
        "description": "Whole canvas is available to text and image",
        "canvas": {"width": WIDTH, "height": HEIGHT},
        "content_region": {"x": 0, "y": 0, "width": WIDTH, "height": HEIGHT},
        "padding": DEFAULT_PADDING,
    },
    "framed": {
        "id": "framed",
        "name": "Framed Card",
        "description": "Text kept inside a card with a 60px frame",
        "canvas": {"width": WIDTH, "height": HEIGHT},
        "content_region": {"x": 60, "y": 60, "width": 960, "height": 1320},
        "padding": 0,
    },
    "brand_header": {
        "id": "brand_header",
        "name": "Brand Header",
        "description": "Logo strip across the top, content below it",
        "canvas": {"width": WIDTH, "height": HEIGHT},
        "content_region": {"x": 0, "y": 180, "width": WIDTH, "height": 1260},
        "padding": DEFAULT_PADDING,
    },
    "square": {
        "id": "square",
        "name": "Square Post",
        "description": "1080x1080 single-image post",
        "canvas": {"width": WIDTH, "height": WIDTH},
        "content_region": {"x": 0, "y": 0, "width": WIDTH, "height": WIDTH},
        "padding": DEFAULT_PADDING,
    },
}


def get_slide_template(template_id: str) -> Optional[dict]:
    """Get a slide template by ID (None if unknown)."""
    return SLIDE_TEMPLATES.get(template_id)


def list_slide_templates():
    """List all slide templates."""
    return [
        {
            "id": t["id"],
            "name": t["name"],
            "description": t["description"],
            "canvas": t["canvas"],
            "content_region": t["content_region"],
            "padding": t["padding"],
        }
        for t in SLIDE_TEMPLATES.values()
    ]


def default_image_placement(template: Optional[dict], image_width: float, image_height: float) -> dict:
    """Where a freshly uploaded image goes: centered in the padded region, at most 70% of it."""
    outer = template["content_region"] if template else {"x": 0, "y": 0, "width": WIDTH, "height": HEIGHT}
    pad = DEFAULT_PADDING
    inset_x = outer["x"] + pad
    inset_y = outer["y"] + pad
    inset_w = max(1, outer["width"] - pad * 2)
    inset_h = max(1, outer["height"] - pad * 2)

    iw = max(1, image_width or 1)
    ih = max(1, image_height or 1)
    scale = min(inset_w * 0.7 / iw, inset_h * 0.7 / ih, 1)
    w = max(1, round(iw * scale))
    h = max(1, round(ih * scale))
    return {
        "x": round(inset_x + (inset_w - w) / 2),
        "y": round(inset_y + (inset_h - h) / 2),
        "width": w,
        "height": h,
    }
