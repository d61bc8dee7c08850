"""
Preview renderer for wrap-flow layouts.

Draws a LayoutResult onto a flat canvas so a layout can be eyeballed
without the editor: content rect outline, image placeholder, and every
line with its bold/underline runs.
"""

import logging
from io import BytesIO
from pathlib import Path
from typing import Optional

from PIL import Image, ImageDraw, ImageFont

from slideflow.config import get_settings
from slideflow.services.layout.models import ImageBounds, LayoutResult, TextLine

logger = logging.getLogger(__name__)

# Colors
WHITE = (255, 255, 255)
BACKGROUND = (8, 8, 12)
ACCENT = (100, 100, 120)
IMAGE_FILL = (60, 60, 80)


class PreviewFonts:
    """Loads regular/bold faces per size, falling back to Pillow's default font."""

    def __init__(self, regular_path: str, bold_path: str):
        self.paths = {"regular": regular_path, "bold": bold_path}
        self._cache = {}

    def get_font(self, weight: str, size: int) -> ImageFont.FreeTypeFont:
        key = (weight, size)
        if key not in self._cache:
            path = self.paths.get(weight, self.paths["regular"])
            if path and Path(path).exists():
                self._cache[key] = ImageFont.truetype(path, size)
            else:
                self._cache[key] = ImageFont.load_default(size=size)
        return self._cache[key]


def _style_runs(line: TextLine) -> list[tuple[str, bool, bool]]:
    """Split a line into (text, bold, underline) runs, unioning overlapping ranges."""
    n = len(line.text)
    bold = [False] * n
    underline = [False] * n
    for r in line.styles:
        for i in range(max(0, r.start), min(n, r.end)):
            bold[i] = bold[i] or r.bold
            underline[i] = underline[i] or r.underline

    runs = []
    start = 0
    for i in range(1, n + 1):
        if i == n or bold[i] != bold[start] or underline[i] != underline[start]:
            runs.append((line.text[start:i], bold[start], underline[start]))
            start = i
    return runs


class PreviewRenderer:
    def __init__(self, fonts: Optional[PreviewFonts] = None):
        if fonts is None:
            settings = get_settings()
            fonts = PreviewFonts(settings.font_path, settings.bold_font_path)
        self.fonts = fonts

    def render(
        self,
        result: LayoutResult,
        canvas_width: int,
        canvas_height: int,
        image: Optional[ImageBounds] = None,
    ) -> Image.Image:
        img = Image.new("RGBA", (canvas_width, canvas_height), (*BACKGROUND, 255))
        draw = ImageDraw.Draw(img)

        if result.content is not None:
            c = result.content
            draw.rectangle([(c.left, c.top), (c.right - 1, c.bottom - 1)], outline=ACCENT, width=1)

        if image is not None:
            draw.rectangle(
                [(image.x, image.y), (image.x + image.width, image.y + image.height)],
                fill=IMAGE_FILL,
            )

        for line in result.text_lines:
            self._draw_line(draw, line)

        logger.debug(f"Rendered preview with {len(result.text_lines)} lines")
        return img

    def _draw_line(self, draw: ImageDraw.ImageDraw, line: TextLine):
        size = max(1, int(round(line.base_size)))
        runs = _style_runs(line)
        fonts = [self.fonts.get_font("bold" if b else "regular", size) for _, b, _ in runs]
        widths = [font.getlength(text) for (text, _, _), font in zip(runs, fonts)]
        total = sum(widths)

        if line.text_align == "center":
            x = line.x - total / 2
        elif line.text_align == "right":
            x = line.x - total
        else:
            x = line.x
        baseline_gap = (line.base_size * line.line_height - size) / 2
        y = line.y + baseline_gap

        for (text, _, underline), font, width in zip(runs, fonts, widths):
            draw.text((x, y), text, font=font, fill=WHITE)
            if underline:
                uy = y + size + 2
                draw.line([(x, uy), (x + width, uy)], fill=WHITE, width=max(1, size // 16))
            x += width


def render_preview_png(
    result: LayoutResult,
    canvas_width: int,
    canvas_height: int,
    image: Optional[ImageBounds] = None,
    renderer: Optional[PreviewRenderer] = None,
) -> bytes:
    """Render a preview and return PNG bytes."""
    renderer = renderer or PreviewRenderer()
    img = renderer.render(result, canvas_width, canvas_height, image)
    buffer = BytesIO()
    img.convert("RGB").save(buffer, format="PNG")
    return buffer.getvalue()
