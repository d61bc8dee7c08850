from dataclasses import replace

import pytest

from slideflow.services.layout import ImageBounds, LayoutInvariantError, WrapFlowOptions, wrap_flow_layout
from slideflow.services.layout.invariants import assert_layout_invariants
from slideflow.services.layout.models import Rect, TextLine

CONTENT = Rect(0, 0, 1000, 1000)
BLOCKED = Rect(500, 500, 800, 800)


def _line(x, y, width=200, align="left"):
    return TextLine(text="x", base_size=40, x=x, y=y, text_align=align, line_height=1.0, max_width=width)


def test_clean_lines_pass():
    assert_layout_invariants([_line(0, 0), _line(0, 40), _line(800, 500)], CONTENT, BLOCKED)


def test_line_overlapping_the_image_raises_overlap():
    lines = [_line(0, 0), _line(400, 480)]

    with pytest.raises(LayoutInvariantError) as exc:
        assert_layout_invariants(lines, CONTENT, BLOCKED)

    assert exc.value.kind == "overlap"
    assert exc.value.line_index == 1
    assert exc.value.other_rect == BLOCKED
    assert "line 2" in str(exc.value)


def test_line_outside_content_raises_bounds():
    with pytest.raises(LayoutInvariantError) as exc:
        assert_layout_invariants([_line(900, 0)], CONTENT, BLOCKED)

    assert exc.value.kind == "bounds"
    assert exc.value.line_rect == Rect(900, 0, 1100, 40)
    assert "margin violation" in str(exc.value)


def test_centered_line_box_is_measured_around_x():
    # centered at 400 with width 200 spans 300..500, touching but not entering the image
    assert_layout_invariants([_line(400, 600, align="center")], CONTENT, BLOCKED)

    with pytest.raises(LayoutInvariantError):
        assert_layout_invariants([_line(401, 600, align="center")], CONTENT, BLOCKED)


def test_moving_a_real_layout_line_onto_the_image_is_caught():
    image = ImageBounds(x=700, y=300, width=320, height=400)
    result = wrap_flow_layout(
        "Title", "Some body copy", image,
        WrapFlowOptions(content_rect={"x": 60, "y": 60, "width": 960, "height": 1320}),
    )
    corrupted = list(result.text_lines)
    corrupted[-1] = replace(corrupted[-1], x=result.blocked.left, y=result.blocked.top)

    with pytest.raises(LayoutInvariantError) as exc:
        assert_layout_invariants(corrupted, result.content, result.blocked)

    assert exc.value.line_index == len(corrupted) - 1
