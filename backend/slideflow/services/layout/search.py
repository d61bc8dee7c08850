"""Font-fit search: the public entry point of the wrap-flow engine."""

import logging
from dataclasses import replace
from typing import Optional

from .flow import FlowAttempt, run_flow
from .geometry import blocked_rect, content_rect_from_canvas, snap_content
from .invariants import assert_layout_invariants
from .measure import Measurer, measurer_for
from .models import ImageBounds, LayoutResult, StyleRange
from .options import WrapFlowOptions, font_steps
from .styles import merge_style_ranges, project_styles

logger = logging.getLogger(__name__)


def wrap_flow_layout(
    headline: str,
    body: str,
    image: Optional[ImageBounds] = None,
    opts: Optional[WrapFlowOptions] = None,
    headline_styles: Optional[list[StyleRange]] = None,
    body_styles: Optional[list[StyleRange]] = None,
    measurer: Optional[Measurer] = None,
) -> LayoutResult:
    """Lay out headline and body around an image.

    Tries (headline, body) font pairs from the largest down. The first
    pair that places every word wins; otherwise the attempt with the most
    lines is returned with truncated=True. Every selected attempt is
    checked against the no-overlap and in-bounds invariants.
    """
    o = opts or WrapFlowOptions()
    region = o.content_rect or content_rect_from_canvas(o.canvas_width, o.canvas_height, o.margin)
    content = snap_content(region["x"], region["y"], region["width"], region["height"])
    blocked = blocked_rect(image, o.clearance_px)

    headline_measurer = measurer or measurer_for(o.headline_avg_char_width_em)
    body_measurer = measurer or measurer_for(o.body_avg_char_width_em)

    best: Optional[FlowAttempt] = None
    last_fonts = (o.headline_font_size, o.body_font_size)
    attempts = 0
    for hf in font_steps(o.headline_font_size, o.headline_min_font_size, o.font_step):
        for bf in font_steps(o.body_font_size, o.body_min_font_size, o.font_step):
            attempts += 1
            last_fonts = (hf, bf)
            attempt = run_flow(
                headline, body, content, blocked, o, hf, bf,
                headline_measurer, body_measurer,
            )
            logger.debug(
                f"wrap-flow attempt h={hf} b={bf}: {len(attempt.lines)} lines, "
                f"truncated={attempt.truncated}, headline_hit_image={attempt.headline_hit_image}"
            )
            if attempt.headline_hit_image:
                # body size cannot help; go to the next headline size
                break
            if not attempt.truncated:
                assert_layout_invariants(attempt.lines, content, blocked)
                best = attempt
                break
            if best is None or len(attempt.lines) > len(best.lines):
                assert_layout_invariants(attempt.lines, content, blocked)
                best = attempt
        if best is not None and not best.truncated:
            break

    if best is None:
        logger.info(f"wrap-flow: headline never cleared the image after {attempts} attempts")
        return LayoutResult(
            text_lines=[],
            truncated=True,
            headline_font=last_fonts[0],
            body_font=last_fonts[1],
            content=content,
            blocked=blocked,
        )

    ranges = {
        "HEADLINE": merge_style_ranges(headline_styles or []),
        "BODY": merge_style_ranges(body_styles or []),
    }
    lines = [
        replace(line, styles=project_styles(ranges[src.block], src.parts))
        for line, src in zip(best.lines, best.sources)
    ]

    logger.info(
        f"wrap-flow: {len(lines)} lines at h={best.headline_font} b={best.body_font} "
        f"(truncated={best.truncated}, {attempts} attempts)"
    )
    return LayoutResult(
        text_lines=lines,
        truncated=best.truncated,
        headline_font=best.headline_font,
        body_font=best.body_font,
        line_sources=best.sources,
        content=content,
        blocked=blocked,
    )
