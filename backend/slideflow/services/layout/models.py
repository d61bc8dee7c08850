"""Data types shared by the wrap-flow layout engine."""

from dataclasses import dataclass, field
from typing import Literal, Optional

LaneKind = Literal["FULL", "LEFT", "RIGHT"]
BlockKind = Literal["HEADLINE", "BODY"]
TieBreak = Literal["left", "right"]

ELLIPSIS = "…"


@dataclass(frozen=True)
class Rect:
    """Axis-aligned box in canvas pixels (left/top inclusive, right/bottom exclusive)."""
    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    def to_dict(self) -> dict:
        return {"left": self.left, "top": self.top, "right": self.right, "bottom": self.bottom}


@dataclass(frozen=True)
class ImageBounds:
    """Image box as the editor reports it (may be fractional)."""
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Lane:
    x: int
    width: int
    kind: LaneKind


@dataclass(frozen=True)
class Token:
    """A word or hard break, with offsets into the original string."""
    kind: Literal["word", "break"]
    start: int
    end: int
    text: str = ""

    @property
    def is_break(self) -> bool:
        return self.kind == "break"


@dataclass
class StyleRange:
    """Half-open [start, end) range carrying inline emphasis marks."""
    start: int
    end: int
    bold: bool = False
    italic: bool = False
    underline: bool = False

    def same_marks(self, other: "StyleRange") -> bool:
        return (
            self.bold == other.bold
            and self.italic == other.italic
            and self.underline == other.underline
        )

    def to_dict(self) -> dict:
        out = {"start": self.start, "end": self.end}
        if self.bold:
            out["bold"] = True
        if self.italic:
            out["italic"] = True
        if self.underline:
            out["underline"] = True
        return out

    @classmethod
    def from_dict(cls, data: dict) -> "StyleRange":
        return cls(
            start=int(data["start"]),
            end=int(data["end"]),
            bold=bool(data.get("bold")),
            italic=bool(data.get("italic")),
            underline=bool(data.get("underline")),
        )


@dataclass(frozen=True)
class LinePart:
    """Maps a span of an emitted line back to a span of the source text.

    Word parts have equal-length spans. Glyph parts (the joining space,
    an inserted hyphen or ellipsis) cover one line character and the
    source characters it stands for.
    """
    line_start: int
    line_end: int
    source_start: int
    source_end: int

    @property
    def is_linear(self) -> bool:
        return (self.line_end - self.line_start) == (self.source_end - self.source_start)

    def to_dict(self) -> dict:
        return {
            "lineStart": self.line_start,
            "lineEnd": self.line_end,
            "sourceStart": self.source_start,
            "sourceEnd": self.source_end,
        }


@dataclass
class TextLine:
    text: str
    base_size: float
    x: int
    y: int
    text_align: Literal["left", "center", "right"]
    line_height: float
    max_width: int
    styles: list[StyleRange] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "baseSize": self.base_size,
            "position": {"x": self.x, "y": self.y},
            "textAlign": self.text_align,
            "lineHeight": self.line_height,
            "maxWidth": self.max_width,
            "styles": [s.to_dict() for s in self.styles],
        }


@dataclass
class LineSource:
    block: BlockKind
    parts: list[LinePart] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"block": self.block, "parts": [p.to_dict() for p in self.parts]}


@dataclass
class LayoutResult:
    text_lines: list[TextLine]
    truncated: bool
    headline_font: float
    body_font: float
    line_sources: list[LineSource] = field(default_factory=list)
    content: Optional[Rect] = None
    blocked: Optional[Rect] = None

    @property
    def used_fonts(self) -> dict:
        return {"headline": self.headline_font, "body": self.body_font}

    def lines_for(self, block: BlockKind) -> list[TextLine]:
        return [
            line for line, src in zip(self.text_lines, self.line_sources)
            if src.block == block
        ]

    def to_dict(self) -> dict:
        return {
            "textLines": [line.to_dict() for line in self.text_lines],
            "truncated": self.truncated,
            "usedFonts": self.used_fonts,
            "lineSources": [src.to_dict() for src in self.line_sources],
            "contentRect": self.content.to_dict() if self.content else None,
            "blockedRect": self.blocked.to_dict() if self.blocked else None,
        }
