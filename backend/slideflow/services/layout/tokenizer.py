"""Split headline/body text into word and hard-break tokens."""

import re

from .models import Token

# A lone newline is a hard break; any other whitespace just separates words
_TOKEN_RE = re.compile(r"\n|[^\s]+")
_PARAGRAPH_GAP_RE = re.compile(r"\n[ \t\r]*\n")


def split_long_word(word: str, start: int, budget: int) -> list[Token]:
    """Break a word longer than budget into hyphenated pieces.

    Every piece but the last holds budget - 1 source characters plus a
    trailing '-'. Offsets always point at the source characters.
    """
    if len(word) <= budget:
        return [Token("word", start, start + len(word), word)]
    take = max(1, budget - 1)
    pieces = []
    i = 0
    while i < len(word):
        if len(word) - i <= budget:
            pieces.append(Token("word", start + i, start + len(word), word[i:]))
            break
        pieces.append(Token("word", start + i, start + i + take, word[i:i + take] + "-"))
        i += take
    return pieces


def tokenize(text: str, max_chars: int, offset: int = 0) -> list[Token]:
    """Tokenize text; offsets are shifted by offset into the original string."""
    budget = max(1, max_chars)
    tokens: list[Token] = []
    for m in _TOKEN_RE.finditer(text):
        start = offset + m.start()
        if m.group() == "\n":
            tokens.append(Token("break", start, start + 1))
        else:
            tokens.extend(split_long_word(m.group(), start, budget))
    return tokens


def split_paragraphs(text: str) -> list[tuple[int, int]]:
    """Return (start, end) spans of paragraphs separated by blank lines."""
    spans = []
    pos = 0
    for m in _PARAGRAPH_GAP_RE.finditer(text):
        spans.append((pos, m.start()))
        pos = m.end()
    spans.append((pos, len(text)))
    return spans


def normalize_text(text: str) -> str:
    return " ".join(text.split())
