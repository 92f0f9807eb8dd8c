"""Styled text primitives: styles, spans and lines."""

from __future__ import annotations

import enum
import unicodedata
from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Tuple

from .theme import Color


class Modifier(enum.Flag):
    """Text attributes that can be combined."""

    NONE = 0
    BOLD = enum.auto()
    DIM = enum.auto()
    ITALIC = enum.auto()
    UNDERLINED = enum.auto()
    REVERSED = enum.auto()


class Alignment(enum.Enum):
    """Horizontal placement of a line."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class Style:
    """Foreground, background and attributes; None colours inherit."""

    fg: Optional[Color] = None
    bg: Optional[Color] = None
    modifiers: Modifier = Modifier.NONE

    def bold(self) -> "Style":
        """A copy with bold added."""
        return self.add_modifier(Modifier.BOLD)

    def add_modifier(self, modifier: Modifier) -> "Style":
        """A copy with the given attributes added."""
        return replace(self, modifiers=self.modifiers | modifier)


def _char_width(ch: str) -> int:
    if unicodedata.combining(ch) or unicodedata.category(ch) in ("Mn", "Me", "Cf"):
        return 0
    if unicodedata.east_asian_width(ch) in ("W", "F"):
        return 2
    return 1


@dataclass(frozen=True)
class Span:
    """A run of text in a single style."""

    content: str
    style: Style = field(default_factory=Style)

    def width(self) -> int:
        """Display width in terminal cells."""
        return sum(_char_width(ch) for ch in self.content)


@dataclass(frozen=True)
class Line:
    """A row of styled spans."""

    spans: Tuple[Span, ...] = ()
    alignment: Optional[Alignment] = None

    def __post_init__(self) -> None:
        spans: Iterable[Span] = self.spans
        object.__setattr__(self, "spans", tuple(spans))

    def width(self) -> int:
        """Display width in terminal cells."""
        return sum(span.width() for span in self.spans)

    def plain(self) -> str:
        """The text without styling."""
        return "".join(span.content for span in self.spans)


def raw_line(text: str) -> Line:
    """An unstyled line holding the given text."""
    return Line((Span(text),) if text else ())