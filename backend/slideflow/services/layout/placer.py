"""Place one line of tokens at the current y position.

place_line is pure: it takes the cursor (y, token index) and returns a
Placement telling the caller what happened and where the cursor goes
next. A "moved" placement keeps the token index and strictly increases y.
"""

import math
from dataclasses import dataclass, field
from typing import Optional

from .geometry import clamp, intersects_band, lane_for_band, line_rect, overlaps
from .measure import Measurer
from .models import ELLIPSIS, BlockKind, Lane, LinePart, Rect, TextLine, Token
from .options import WrapFlowOptions

PLACED = "placed"
MOVED = "moved"
OUT_OF_SPACE = "out_of_space"
HEADLINE_HIT_IMAGE = "headline_hit_image"


@dataclass(frozen=True)
class BlockStyle:
    kind: BlockKind
    font_size: float
    line_height: float
    measurer: Measurer

    @property
    def line_height_px(self) -> float:
        return self.font_size * self.line_height


@dataclass(frozen=True)
class Placement:
    status: str
    next_idx: int
    next_y: float
    line: Optional[TextLine] = None
    parts: list[LinePart] = field(default_factory=list)


def take_line(tokens: list[Token], idx: int, style: BlockStyle, lane_width: float):
    """Greedily join tokens while the line still fits the lane.

    Returns (text, parts, next_idx). A hard break reached after at least
    one word ends the line and is consumed. text is empty when the first
    token alone does not fit.
    """
    text = ""
    parts: list[LinePart] = []
    prev: Optional[Token] = None
    j = idx
    while j < len(tokens):
        tok = tokens[j]
        if tok.is_break:
            if text:
                j += 1
            break
        candidate = f"{text} {tok.text}" if text else tok.text
        if not style.measurer.fits(candidate, style.font_size, lane_width):
            break
        if prev is not None:
            gap = len(text)
            parts.append(LinePart(gap, gap + 1, prev.end, max(tok.start, prev.end + 1)))
        word_start = len(candidate) - len(tok.text)
        parts.extend(_word_parts(tok, word_start))
        text = candidate
        prev = tok
        j += 1
    return text, parts, j


def _word_parts(tok: Token, line_start: int) -> list[LinePart]:
    src_len = tok.end - tok.start
    parts = [LinePart(line_start, line_start + src_len, tok.start, tok.end)]
    if len(tok.text) > src_len:
        # inserted hyphen takes the style of the character before it
        h = line_start + src_len
        parts.append(LinePart(h, h + 1, tok.end - 1, tok.end))
    return parts


def clip_token(tok: Token, max_chars: int):
    """Cut a token that cannot fit an empty line, ending it with an ellipsis."""
    keep = max(1, max_chars - 1)
    src_len = tok.end - tok.start
    kept_src = min(keep, src_len)
    text = tok.text[:keep] + ELLIPSIS
    parts = [LinePart(0, kept_src, tok.start, tok.start + kept_src)]
    cut = len(text) - 1
    parts.append(LinePart(cut, cut + 1, tok.start + kept_src - 1, tok.start + kept_src))
    return text, parts


def _moved(idx: int, y: float) -> Placement:
    return Placement(MOVED, idx, y)


def place_line(
    y: float,
    tokens: list[Token],
    idx: int,
    style: BlockStyle,
    content: Rect,
    blocked: Rect,
    opts: WrapFlowOptions,
    headline_may_share_band: bool = False,
) -> Placement:
    """Place the line starting at tokens[idx] with its top at y.

    A first token too wide for a side lane is never clipped there: the
    line moves below the image and is retried at full width, so the font
    search can still find a size where the whole word fits. Clipping with
    an ellipsis happens only in a FULL lane, where moving down cannot help.
    """
    lh = style.line_height_px
    top = math.ceil(y)
    bottom = math.ceil(top + lh)
    if bottom > content.bottom:
        return Placement(OUT_OF_SPACE, idx, y)

    in_image_band = intersects_band(top, bottom, blocked)
    if style.kind == "HEADLINE" and in_image_band and not headline_may_share_band:
        return Placement(HEADLINE_HIT_IMAGE, idx, y)

    lane = lane_for_band(top, bottom, content, blocked, opts.lane_tie_break)
    if lane is None:
        return _moved(idx, max(y, blocked.bottom))

    # Skinny side lane with room below the image: continue full width below it
    if (
        style.kind == "BODY"
        and lane.kind != "FULL"
        and 0 < lane.width < opts.skinny_lane_width_px
        and content.bottom - blocked.bottom >= opts.min_below_space_px
    ):
        return _moved(idx, max(y, blocked.bottom))

    max_chars = style.measurer.max_chars(style.font_size, lane.width)
    if lane.width <= 0 or max_chars < opts.min_lane_chars:
        if in_image_band:
            return _moved(idx, max(y, blocked.bottom))
        return _moved(idx, y + lh)

    text, parts, next_idx = take_line(tokens, idx, style, lane.width)
    if not text:
        if lane.kind != "FULL":
            return _moved(idx, max(y, blocked.bottom))
        text, parts = clip_token(tokens[idx], max_chars)
        next_idx = idx + 1

    line = _position_line(text, style, lane, content, top)
    if overlaps(line_rect(line), blocked):
        if in_image_band:
            return _moved(idx, max(y, blocked.bottom))
        return _moved(idx, y + lh)

    return Placement(PLACED, next_idx, y + lh, line, parts)


def _position_line(text: str, style: BlockStyle, lane: Lane, content: Rect, top: int) -> TextLine:
    """Pick a whole-pixel width and x for the line, kept inside content."""
    align = "center" if style.kind == "BODY" and lane.kind != "FULL" else "left"
    content_width = max(1, content.right - content.left)
    max_width = max(1, min(math.floor(lane.width), content_width))
    if align == "center" and max_width % 2 == 1:
        max_width = max(1, max_width - 1)  # even width keeps the center on a whole pixel

    if align == "center":
        half = max_width / 2
        desired = math.floor(lane.x + lane.width / 2 + 0.5)
        x = int(clamp(desired, math.ceil(content.left + half), math.floor(content.right - half)))
    else:
        x = int(clamp(math.ceil(lane.x), content.left, content.right - max_width))

    return TextLine(
        text=text,
        base_size=style.font_size,
        x=x,
        y=top,
        text_align=align,
        line_height=style.line_height,
        max_width=max_width,
    )
