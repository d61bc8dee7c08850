from slideflow.services.layout.tokenizer import normalize_text, split_long_word, split_paragraphs, tokenize


def test_tokenize_words_keep_original_offsets():
    tokens = tokenize("Hello  world", 60)

    assert [(t.kind, t.text, t.start, t.end) for t in tokens] == [
        ("word", "Hello", 0, 5),
        ("word", "world", 7, 12),
    ]


def test_lone_newline_becomes_break_token():
    tokens = tokenize("A\nB", 60)

    assert [t.kind for t in tokens] == ["word", "break", "word"]
    assert (tokens[1].start, tokens[1].end) == (1, 2)


def test_offset_shifts_spans_into_the_full_string():
    text = "intro\n\nsecond part"
    start = text.index("second")
    tokens = tokenize(text[start:], 60, offset=start)

    for tok in tokens:
        assert text[tok.start:tok.end] == tok.text


def test_long_word_is_split_with_hyphens():
    tokens = tokenize("abcdefghij", 4)

    assert [t.text for t in tokens] == ["abc-", "def-", "ghij"]
    assert [(t.start, t.end) for t in tokens] == [(0, 3), (3, 6), (6, 10)]


def test_split_long_word_with_budget_of_one_still_progresses():
    pieces = split_long_word("ab", 0, 1)

    assert [p.text for p in pieces] == ["a-", "b"]


def test_token_spans_reconstruct_the_normalized_text():
    text = "  The quick\tbrown   fox-trotted\n over supercalifragilistic dogs "
    tokens = tokenize(text, 8)

    words = []
    for tok in tokens:
        if tok.is_break:
            continue
        assert 0 <= tok.start < tok.end <= len(text)
        source = text[tok.start:tok.end]
        assert tok.text in (source, source + "-")
        words.append(source)

    rebuilt = []
    for tok, source in zip([t for t in tokens if not t.is_break], words):
        if rebuilt and text[tok.start - 1].isspace():
            rebuilt.append(" ")
        rebuilt.append(source)
    assert "".join(rebuilt) == normalize_text(text)


def test_split_paragraphs_on_blank_lines():
    assert split_paragraphs("A\n\nB") == [(0, 1), (3, 4)]
    assert split_paragraphs("A \n \t\nB") == [(0, 2), (6, 7)]


def test_extra_blank_lines_make_empty_paragraphs():
    assert split_paragraphs("A\n\n\n\nB") == [(0, 1), (3, 3), (5, 6)]


def test_single_newline_is_not_a_paragraph_gap():
    assert split_paragraphs("A\nB") == [(0, 3)]
