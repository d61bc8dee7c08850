"""Hard no-overlap / in-bounds check for placed lines."""

import logging

from .geometry import contains, line_rect, overlaps
from .models import Rect, TextLine

logger = logging.getLogger(__name__)


class LayoutInvariantError(RuntimeError):
    """A placed line overlaps the image or leaves the content rect."""

    def __init__(self, kind: str, line_index: int, line_rect: Rect, other_rect: Rect):
        self.kind = kind
        self.line_index = line_index
        self.line_rect = line_rect
        self.other_rect = other_rect
        if kind == "overlap":
            message = (
                f"Wrap-flow overlap detected for line {line_index + 1} at "
                f"({line_rect.left},{line_rect.top})-({line_rect.right},{line_rect.bottom}) "
                f"intersects blocked rect "
                f"({other_rect.left},{other_rect.top})-({other_rect.right},{other_rect.bottom})"
            )
        else:
            message = (
                f"Wrap-flow margin violation for line {line_index + 1} at "
                f"({line_rect.left},{line_rect.top})-({line_rect.right},{line_rect.bottom}) "
                f"outside content rect "
                f"({other_rect.left},{other_rect.top})-({other_rect.right},{other_rect.bottom})"
            )
        super().__init__(message)


def assert_layout_invariants(lines: list[TextLine], content: Rect, blocked: Rect) -> None:
    for i, line in enumerate(lines):
        lr = line_rect(line)
        if overlaps(lr, blocked):
            error = LayoutInvariantError("overlap", i, lr, blocked)
            logger.error(str(error))
            raise error
        if not contains(content, lr):
            error = LayoutInvariantError("bounds", i, lr, content)
            logger.error(str(error))
            raise error
