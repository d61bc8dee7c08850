from slideflow.services.layout.geometry import blocked_rect, line_rect, overlaps
from slideflow.services.layout.measure import AverageCharWidthMeasurer
from slideflow.services.layout.models import LinePart, Rect
from slideflow.services.layout.options import WrapFlowOptions
from slideflow.services.layout.placer import (
    HEADLINE_HIT_IMAGE,
    MOVED,
    OUT_OF_SPACE,
    PLACED,
    BlockStyle,
    place_line,
)
from slideflow.services.layout.tokenizer import tokenize

CONTENT = Rect(0, 0, 1000, 1000)
NO_IMAGE = blocked_rect(None, 1)
MEASURER = AverageCharWidthMeasurer()
BODY = BlockStyle("BODY", 50, 1.0, MEASURER)
HEADLINE = BlockStyle("HEADLINE", 50, 1.0, MEASURER)


def test_places_words_greedily_on_a_full_width_line():
    tokens = tokenize("one two three", 35)

    p = place_line(0, tokens, 0, BODY, CONTENT, NO_IMAGE, WrapFlowOptions())

    assert p.status == PLACED
    assert p.line.text == "one two three"
    assert (p.line.x, p.line.y, p.line.max_width, p.line.text_align) == (0, 0, 1000, "left")
    assert p.next_idx == 3
    assert p.next_y == 50


def test_parts_map_words_and_gaps_back_to_source():
    tokens = tokenize("one  two", 35)

    p = place_line(0, tokens, 0, BODY, CONTENT, NO_IMAGE, WrapFlowOptions())

    assert p.line.text == "one two"
    assert p.parts == [
        LinePart(0, 3, 0, 3),
        LinePart(3, 4, 3, 5),
        LinePart(4, 7, 5, 8),
    ]


def test_wraps_when_lane_is_full():
    # 35 chars per line at 50px on 1000px
    tokens = tokenize("a" * 20 + " " + "b" * 20, 35)

    p = place_line(0, tokens, 0, BODY, CONTENT, NO_IMAGE, WrapFlowOptions())

    assert p.line.text == "a" * 20
    assert p.next_idx == 1


def test_rejects_line_past_content_bottom():
    tokens = tokenize("word", 35)

    p = place_line(960, tokens, 0, BODY, CONTENT, NO_IMAGE, WrapFlowOptions())

    assert p.status == OUT_OF_SPACE
    assert p.next_idx == 0


def test_hard_break_ends_the_line_and_is_consumed():
    tokens = tokenize("A\nB", 35)

    p = place_line(0, tokens, 0, BODY, CONTENT, NO_IMAGE, WrapFlowOptions())

    assert p.line.text == "A"
    assert p.next_idx == 2


def test_headline_may_not_share_a_band_with_the_image():
    blocked = Rect(0, 100, 500, 300)
    tokens = tokenize("Title", 35)

    p = place_line(80, tokens, 0, HEADLINE, CONTENT, blocked, WrapFlowOptions())

    assert p.status == HEADLINE_HIT_IMAGE


def test_headline_uses_side_lane_when_allowed():
    blocked = Rect(0, 100, 500, 300)
    tokens = tokenize("Title", 35)

    p = place_line(80, tokens, 0, HEADLINE, CONTENT, blocked, WrapFlowOptions(), headline_may_share_band=True)

    assert p.status == PLACED
    assert (p.line.x, p.line.max_width, p.line.text_align) == (500, 500, "left")


def test_body_beside_image_is_centered_in_the_lane():
    blocked = Rect(0, 100, 500, 300)
    tokens = tokenize("beside the image", 35)

    p = place_line(100, tokens, 0, BODY, CONTENT, blocked, WrapFlowOptions())

    assert p.status == PLACED
    assert p.line.text_align == "center"
    assert (p.line.x, p.line.max_width) == (750, 500)
    assert not overlaps(line_rect(p.line), blocked)


def test_centered_line_in_odd_lane_gets_even_width():
    blocked = Rect(0, 100, 499, 300)
    tokens = tokenize("odd lane", 35)

    p = place_line(100, tokens, 0, BODY, CONTENT, blocked, WrapFlowOptions())

    assert p.line.max_width == 500
    rect = line_rect(p.line)
    assert rect.left >= 499 and rect.right <= 1000


def test_skinny_lane_jumps_below_the_image():
    blocked = Rect(0, 100, 700, 300)
    tokens = tokenize("skinny lane text", 35)

    p = place_line(100, tokens, 0, BODY, CONTENT, blocked, WrapFlowOptions())

    assert p.status == MOVED
    assert p.next_y == 300
    assert p.next_idx == 0


def test_skinny_lane_is_used_without_room_below():
    blocked = Rect(0, 100, 700, 900)
    tokens = tokenize("skinny lane", 35)

    p = place_line(100, tokens, 0, BODY, CONTENT, blocked, WrapFlowOptions())

    assert p.status == PLACED
    assert p.line.max_width == 300


def test_too_narrow_lane_moves_below_image():
    blocked = Rect(0, 100, 920, 300)
    tokens = tokenize("narrow", 35)

    p = place_line(100, tokens, 0, BODY, CONTENT, blocked, WrapFlowOptions(skinny_lane_width_px=0))

    assert p.status == MOVED
    assert p.next_y == 300


def test_fully_blocked_band_moves_below_image():
    blocked = Rect(-5, 100, 1005, 300)
    tokens = tokenize("blocked", 35)

    p = place_line(120, tokens, 0, BODY, CONTENT, blocked, WrapFlowOptions())

    assert p.status == MOVED
    assert p.next_y == 300


def test_word_too_wide_for_side_lane_moves_below_image():
    blocked = Rect(0, 100, 600, 900)
    tokens = tokenize("extraordinarily", 35)

    p = place_line(100, tokens, 0, BODY, CONTENT, blocked, WrapFlowOptions())

    assert p.status == MOVED
    assert p.next_y == 900


def test_word_too_wide_for_full_lane_is_clipped():
    content = Rect(0, 0, 300, 1000)
    tokens = tokenize("abcdefghijklmnopqrstuvwxyz", 100)

    p = place_line(0, tokens, 0, BODY, content, NO_IMAGE, WrapFlowOptions())

    assert p.status == PLACED
    assert p.line.text == "abcdefghi…"
    assert p.next_idx == 1
