"""Line width measurement strategies.

The flow only asks three questions of a measurer: how wide is this text,
how many characters fit a width (used to pre-split long words), and does
this text fit a width. The default answers with an average character
width; PillowFontMeasurer answers with real glyph advances.
"""

import math
from functools import lru_cache
from typing import Optional

from PIL import ImageFont

AVG_CHAR_WIDTH_EM = 0.56  # Arial-ish, conservative

# Mixed-case sample used to derive an average advance from a real font
_SAMPLE = "The quick brown fox jumps over the lazy dog 0123456789"


class Measurer:
    """Base strategy. Subclasses implement measure_line."""

    def measure_line(self, text: str, font_size: float) -> float:
        raise NotImplementedError

    def avg_char_width(self, font_size: float) -> float:
        return self.measure_line(_SAMPLE, font_size) / len(_SAMPLE)

    def max_chars(self, font_size: float, width_px: float) -> int:
        est = self.avg_char_width(font_size)
        if est <= 0:
            return 1
        return max(1, math.floor(width_px / est))

    def fits(self, text: str, font_size: float, width_px: float) -> bool:
        return self.measure_line(text, font_size) <= width_px


class AverageCharWidthMeasurer(Measurer):
    """Every character is avg_char_width_em * font_size wide."""

    def __init__(self, avg_char_width_em: float = AVG_CHAR_WIDTH_EM):
        if avg_char_width_em <= 0:
            raise ValueError("avg_char_width_em must be positive")
        self.avg_char_width_em = avg_char_width_em

    def measure_line(self, text: str, font_size: float) -> float:
        return len(text) * font_size * self.avg_char_width_em

    def avg_char_width(self, font_size: float) -> float:
        return font_size * self.avg_char_width_em

    def fits(self, text: str, font_size: float, width_px: float) -> bool:
        # Compare in characters so the greedy fill and max_chars agree exactly
        return len(text) <= self.max_chars(font_size, width_px)


class PillowFontMeasurer(Measurer):
    """Measures with a TrueType font through Pillow.

    With no font_path, Pillow's bundled default font is used.
    """

    def __init__(self, font_path: Optional[str] = None):
        self.font_path = font_path
        self._font = lru_cache(maxsize=64)(self._load_font)

    def _load_font(self, size: int):
        if self.font_path:
            return ImageFont.truetype(self.font_path, size)
        return ImageFont.load_default(size=size)

    def measure_line(self, text: str, font_size: float) -> float:
        if not text:
            return 0.0
        font = self._font(max(1, int(round(font_size))))
        return float(font.getlength(text))


def measurer_for(avg_char_width_em: Optional[float]) -> Measurer:
    return AverageCharWidthMeasurer(avg_char_width_em or AVG_CHAR_WIDTH_EM)
