"""Tunable parameters for wrap-flow layout."""

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass
class WrapFlowOptions:
    canvas_width: int = 1080
    canvas_height: int = 1440
    margin: int = 40  # canvas margin, used when content_rect is not given
    # {x, y, width, height}; usually a template content region inset by padding
    content_rect: Optional[dict] = None
    clearance_px: float = 1  # gap kept around the image box
    headline_font_size: float = 76
    body_font_size: float = 48
    headline_min_font_size: float = 32
    body_min_font_size: float = 24
    headline_line_height: float = 1.15
    body_line_height: float = 1.25
    font_step: float = 2
    block_gap_px: float = 24  # between headline and body, and between paragraphs
    lane_tie_break: str = "right"
    # Start the body beside the image when a side lane is wide enough
    body_prefer_side_lane: bool = True
    min_usable_lane_width_px: float = 280
    # Side lanes narrower than this give way to full width below the image,
    # if at least min_below_space_px is left there
    skinny_lane_width_px: float = 360
    min_below_space_px: float = 240
    min_lane_chars: int = 4
    # Client-measured font metrics; None means the 0.56em default
    headline_avg_char_width_em: Optional[float] = None
    body_avg_char_width_em: Optional[float] = None

    def __post_init__(self):
        if self.lane_tie_break not in ("left", "right"):
            raise ValueError(f"lane_tie_break must be 'left' or 'right', got {self.lane_tie_break!r}")
        for name in ("headline_font_size", "body_font_size", "headline_min_font_size",
                     "body_min_font_size", "headline_line_height", "body_line_height", "font_step"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.clearance_px < 0 or self.block_gap_px < 0:
            raise ValueError("clearance_px and block_gap_px must not be negative")

    def to_dict(self) -> dict:
        return asdict(self)


def font_steps(start: float, minimum: float, step: float) -> list[float]:
    """Sizes from start down to minimum in fixed steps; minimum always last."""
    if start <= minimum:
        return [start]
    sizes = []
    f = start
    while f >= minimum:
        sizes.append(f)
        f -= step
    if sizes[-1] != minimum:
        sizes.append(minimum)
    return sizes
