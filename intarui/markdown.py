"""A small Markdown subset rendered to styled lines."""

from __future__ import annotations

from typing import List

from .text import Line, Modifier, Span, Style, raw_line
from .theme import Theme

_MAX_BULLET_INDENT = 6


def _split_lines(text: str) -> List[str]:
    if not text:
        return []
    pieces = text.split("\n")
    if pieces[-1] == "":
        pieces.pop()
    return [piece[:-1] if piece.endswith("\r") else piece for piece in pieces]


def markdown_spans(theme: Theme, text: str, base: Style) -> List[Span]:
    """Split inline text into spans for bold, code and links.

    An opening marker with no matching close is dropped and the text
    after it continues in the base style.
    """
    spans: List[Span] = []
    code_style = Style(fg=theme.info)
    link_style = Style(fg=theme.info).add_modifier(Modifier.UNDERLINED)
    dim_style = Style(fg=theme.dim)

    idx = 0
    length = len(text)
    while idx < length:
        rest = text[idx:]

        if rest.startswith("**"):
            end = rest.find("**", 2)
            if end >= 0:
                spans.append(Span(rest[2:end], base.add_modifier(Modifier.BOLD)))
                idx += end + 2
                continue

        if rest.startswith("`"):
            end = rest.find("`", 1)
            if end >= 0:
                spans.append(Span(rest[1:end], code_style))
                idx += end + 1
                continue

        if rest.startswith("["):
            label_end = rest.find("](", 1)
            if label_end >= 0:
                url_start = label_end + 2
                url_end = rest.find(")", url_start)
                if url_end >= 0:
                    spans.append(Span(rest[1:label_end], link_style))
                    spans.append(Span(f" ({rest[url_start:url_end]})", dim_style))
                    idx += url_end + 1
                    continue

        candidates = [pos for pos in (rest.find("**"), rest.find("`"), rest.find("[")) if pos >= 0]
        nxt = min(candidates) if candidates else len(rest)
        segment = rest[:nxt]
        if segment:
            spans.append(Span(segment, base))
        idx += max(nxt, 1)

    return spans


def markdown_lines(theme: Theme, text: str) -> List[Line]:
    """Render headings, bullet items and inline markup line by line."""
    body_style = Style(fg=theme.fg)
    h1_style = Style(fg=theme.primary).bold()
    h2_style = Style(fg=theme.secondary).bold()
    bullet_style = Style(fg=theme.secondary)

    lines: List[Line] = []
    for raw in _split_lines(text):
        line = raw.rstrip()
        if not line.strip():
            lines.append(raw_line(""))
            continue

        heading = None
        for prefix, style in (("### ", h2_style), ("## ", h2_style), ("# ", h1_style)):
            if line.startswith(prefix):
                heading = Line(markdown_spans(theme, line[len(prefix):], style))
                break
        if heading is not None:
            lines.append(heading)
            continue

        trimmed = line.lstrip()
        indent = len(line) - len(trimmed)
        if trimmed.startswith("- ") or trimmed.startswith("* "):
            spans: List[Span] = []
            if indent > 0:
                spans.append(Span(" " * min(indent, _MAX_BULLET_INDENT)))
            spans.append(Span("• ", bullet_style))
            spans.extend(markdown_spans(theme, trimmed[2:], body_style))
            lines.append(Line(spans))
            continue

        lines.append(Line(markdown_spans(theme, line, body_style)))

    return lines