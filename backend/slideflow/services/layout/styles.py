"""Inline style ranges: merging, remapping after edits, and projection onto lines."""

from typing import Iterable

from .models import LinePart, StyleRange


def merge_style_ranges(ranges: Iterable[StyleRange]) -> list[StyleRange]:
    """Drop empty ranges, sort, and coalesce touching ranges with the same marks."""
    valid = sorted(
        (r for r in ranges if r.end > r.start),
        key=lambda r: (r.start, r.end),
    )
    out: list[StyleRange] = []
    for r in valid:
        prev = out[-1] if out else None
        if prev is not None and prev.same_marks(r) and r.start <= prev.end:
            prev.end = max(prev.end, r.end)
            continue
        out.append(StyleRange(r.start, r.end, r.bold, r.italic, r.underline))
    return out


def remap_style_ranges(old_text: str, new_text: str, ranges: list[StyleRange]) -> list[StyleRange]:
    """Carry ranges across a text edit using the common prefix and suffix.

    Styling inside the common prefix is kept as is, styling inside the
    common suffix is shifted by the length change, and anything in the
    edited middle is dropped.
    """
    if not ranges:
        return []
    if old_text == new_text:
        return merge_style_ranges(ranges)

    old_len = len(old_text)
    new_len = len(new_text)

    p = 0
    p_max = min(old_len, new_len)
    while p < p_max and old_text[p] == new_text[p]:
        p += 1

    s = 0
    s_max = min(old_len - p, new_len - p)
    while s < s_max and old_text[old_len - 1 - s] == new_text[new_len - 1 - s]:
        s += 1

    old_suffix_start = old_len - s
    delta = new_len - old_len

    out = []
    for r in ranges:
        start = max(0, min(old_len, r.start))
        end = max(0, min(old_len, r.end))
        if end <= start:
            continue
        if start < p:
            prefix_end = min(end, p)
            out.append(StyleRange(start, prefix_end, r.bold, r.italic, r.underline))
        if end > old_suffix_start:
            ns = max(0, min(new_len, max(start, old_suffix_start) + delta))
            ne = max(0, min(new_len, end + delta))
            if ne > ns:
                out.append(StyleRange(ns, ne, r.bold, r.italic, r.underline))
    return merge_style_ranges(out)


def project_styles(ranges: list[StyleRange], parts: list[LinePart]) -> list[StyleRange]:
    """Map source-text ranges onto one line's local character offsets.

    Fragments produced by the same source range that touch are joined;
    ranges from different sources are left overlapping.
    """
    out: list[StyleRange] = []
    for r in ranges:
        current = None
        for part in parts:
            lo = max(r.start, part.source_start)
            hi = min(r.end, part.source_end)
            if hi <= lo:
                continue
            if part.is_linear:
                local_start = part.line_start + (lo - part.source_start)
                local_end = part.line_start + (hi - part.source_start)
            else:
                local_start, local_end = part.line_start, part.line_end
            if current is not None and current.end == local_start:
                current.end = local_end
                continue
            current = StyleRange(local_start, local_end, r.bold, r.italic, r.underline)
            out.append(current)
    return out
