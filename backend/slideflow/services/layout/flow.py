"""Headline-then-body flow for one (headline font, body font) attempt."""

import math
from dataclasses import dataclass, field, replace

from .measure import Measurer
from .models import ELLIPSIS, LinePart, LineSource, Rect, TextLine
from .options import WrapFlowOptions
from .placer import HEADLINE_HIT_IMAGE, MOVED, OUT_OF_SPACE, BlockStyle, place_line
from .tokenizer import split_paragraphs, tokenize

DONE = "done"
TRUNCATED = "truncated"


@dataclass
class FlowState:
    """Cursor and output threaded through one attempt."""
    y: float
    lines: list[TextLine] = field(default_factory=list)
    sources: list[LineSource] = field(default_factory=list)
    truncated: bool = False
    headline_hit_image: bool = False


@dataclass
class FlowAttempt:
    headline_font: float
    body_font: float
    lines: list[TextLine]
    sources: list[LineSource]
    truncated: bool
    headline_hit_image: bool


def _place_tokens(state, tokens, style, content, blocked, opts, headline_may_share_band=False) -> str:
    idx = 0
    while idx < len(tokens):
        if tokens[idx].is_break:
            # hard break at the start of a line: nothing to end
            idx += 1
            continue
        p = place_line(state.y, tokens, idx, style, content, blocked, opts, headline_may_share_band)
        if p.status == OUT_OF_SPACE:
            return TRUNCATED
        if p.status == HEADLINE_HIT_IMAGE:
            return HEADLINE_HIT_IMAGE
        state.y = p.next_y
        if p.status == MOVED:
            continue
        state.lines.append(p.line)
        state.sources.append(LineSource(style.kind, p.parts))
        idx = p.next_idx
    return DONE


def _prefers_side_lane(content: Rect, blocked: Rect, opts: WrapFlowOptions) -> bool:
    if not (blocked.bottom > content.top and blocked.top < content.bottom):
        return False
    if blocked.right <= content.left or blocked.left >= content.right:
        return False
    right_width = content.right - blocked.right
    left_width = blocked.left - content.left
    return max(right_width, left_width) >= opts.min_usable_lane_width_px


def _headline_may_share_band(content: Rect, blocked: Rect, opts: WrapFlowOptions) -> bool:
    """True when not even one minimum-size headline line fits above the image."""
    room_above = blocked.top - content.top
    return room_above < math.ceil(opts.headline_min_font_size * opts.headline_line_height)


def run_flow(
    headline: str,
    body: str,
    content: Rect,
    blocked: Rect,
    opts: WrapFlowOptions,
    headline_font: float,
    body_font: float,
    headline_measurer: Measurer,
    body_measurer: Measurer,
) -> FlowAttempt:
    state = FlowState(y=content.top)
    content_width = content.right - content.left

    h_style = BlockStyle("HEADLINE", headline_font, opts.headline_line_height, headline_measurer)
    h_tokens = tokenize(headline, headline_measurer.max_chars(headline_font, content_width))
    outcome = _place_tokens(
        state, h_tokens, h_style, content, blocked, opts,
        _headline_may_share_band(content, blocked, opts),
    )
    if outcome == HEADLINE_HIT_IMAGE:
        state.headline_hit_image = True
        return _finish(state, headline_font, body_font)
    if outcome == TRUNCATED:
        state.truncated = True
    elif state.lines:
        state.y += opts.block_gap_px

    if not state.truncated:
        if opts.body_prefer_side_lane and _prefers_side_lane(content, blocked, opts):
            state.y = max(state.y, blocked.top)

        b_style = BlockStyle("BODY", body_font, opts.body_line_height, body_measurer)
        budget = body_measurer.max_chars(body_font, content_width)
        for i, (start, end) in enumerate(split_paragraphs(body)):
            if i > 0:
                state.y += opts.block_gap_px
            tokens = tokenize(body[start:end], budget, offset=start)
            if _place_tokens(state, tokens, b_style, content, blocked, opts) == TRUNCATED:
                state.truncated = True
                break

    if state.truncated and state.lines:
        last_measurer = headline_measurer if state.sources[-1].block == "HEADLINE" else body_measurer
        _ellipsize_last_line(state, last_measurer)
    return _finish(state, headline_font, body_font)


def _ellipsize_last_line(state: FlowState, measurer: Measurer) -> None:
    """End the last line with exactly one ellipsis, within its own width budget."""
    last = state.lines[-1]
    source = state.sources[-1]
    max_chars = max(1, measurer.max_chars(last.base_size, last.max_width))
    base = last.text.rstrip(ELLIPSIS).strip()
    if len(base) >= max_chars:
        base = base[:max(1, max_chars - 1)].rstrip()

    parts = []
    for part in source.parts:
        if part.line_start >= len(base):
            continue
        if part.line_end > len(base):
            if not part.is_linear:
                continue
            cut = len(base) - part.line_start
            part = LinePart(part.line_start, len(base), part.source_start, part.source_start + cut)
        parts.append(part)
    if parts:
        tail = parts[-1].source_end
        parts.append(LinePart(len(base), len(base) + 1, tail - 1, tail))

    state.lines[-1] = replace(last, text=base + ELLIPSIS)
    state.sources[-1] = LineSource(source.block, parts)


def _finish(state: FlowState, headline_font: float, body_font: float) -> FlowAttempt:
    return FlowAttempt(
        headline_font=headline_font,
        body_font=body_font,
        lines=state.lines,
        sources=state.sources,
        truncated=state.truncated,
        headline_hit_image=state.headline_hit_image,
    )
