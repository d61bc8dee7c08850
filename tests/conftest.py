from slideflow.services.layout.models import LayoutResult


def covered_source_chars(result: LayoutResult, block: str, source: str) -> list[int]:
    """Source indices covered by word parts of one block, in emitted order.

    Glyph parts (joining spaces, inserted hyphens and ellipses) are skipped:
    their line text differs from the source text or is whitespace.
    """
    covered = []
    for line, src in zip(result.text_lines, result.line_sources):
        if src.block != block:
            continue
        for part in src.parts:
            if not part.is_linear:
                continue
            shown = line.text[part.line_start:part.line_end]
            if shown != source[part.source_start:part.source_end] or shown.isspace():
                continue
            covered.extend(range(part.source_start, part.source_end))
    return covered


def assert_word_integrity(result: LayoutResult, block: str, source: str, complete: bool):
    covered = covered_source_chars(result, block, source)
    assert covered == sorted(covered)
    assert len(covered) == len(set(covered))
    expected = [i for i in range(len(source)) if not source[i].isspace()]
    if complete:
        assert covered == expected
    else:
        # a prefix, possibly cut mid-word by the closing ellipsis
        assert covered == expected[:len(covered)]
