"""The text content of headers, panels and dialogs on each screen."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .markdown import markdown_lines
from .text import Alignment, Line, Modifier, Span, Style, raw_line
from .theme import Theme
from .widgets import (
    PLACEHOLDER,
    format_duration,
    format_duration_or_placeholder,
    key_style,
    spinner_char,
)

_NO_DESCRIPTION = "No description provided."
_HELP_ENTRIES = (
    ("TAB", "Switch view"),
    ("SHIFT+TAB", "Previous view"),
    ("PGUP/PGDN", "Scroll logs"),
    ("HOME/END", "Oldest / newest logs"),
    ("R", "Restart scenario"),
    ("T", "Toggle theme"),
    ("Q", "Quit"),
    ("?", "Close help"),
)
_CONFIRM_MESSAGE_LINES = 2


def _text_lines(text: str) -> List[str]:
    if not text:
        return []
    pieces = text.split("\n")
    if pieces[-1] == "":
        pieces.pop()
    return [piece[:-1] if piece.endswith("\r") else piece for piece in pieces]


def briefing_header_lines(
    theme: Theme,
    scenario_name: str,
    phase: str,
    boot_elapsed: Optional[float],
    run_elapsed: Optional[float],
    run_name: Optional[str],
    tick: int,
) -> List[Line]:
    """The two header lines of the briefing screen."""
    dim = Style(fg=theme.dim)
    primary = Style(fg=theme.primary)
    run_id = run_name if run_name is not None else PLACEHOLDER
    boot_timer = format_duration_or_placeholder(boot_elapsed)
    run_timer = format_duration_or_placeholder(run_elapsed)
    spinner = spinner_char(tick)

    return [
        Line(
            [
                Span("OPERATION ", Style(fg=theme.secondary)),
                Span(scenario_name.upper(), Style(fg=theme.fg).bold()),
            ],
            alignment=Alignment.LEFT,
        ),
        Line(
            [
                Span("STATUS ", dim),
                Span(phase.upper(), Style(fg=theme.warning).bold()),
                Span("  "),
                Span(f"{spinner} BOOT {boot_timer}", primary),
                Span("  "),
                Span("RUN ", dim),
                Span(run_timer, primary),
                Span("  "),
                Span("ID ", dim),
                Span(run_id, Style(fg=theme.info)),
            ],
            alignment=Alignment.LEFT,
        ),
    ]


def hud_header_lines(
    theme: Theme,
    scenario_name: str,
    phase: str,
    boot_elapsed: Optional[float],
    run_elapsed: Optional[float],
    run_name: Optional[str],
    tick: int,
) -> List[Line]:
    """The left and right halves of the running screen's header row."""
    dim = Style(fg=theme.dim)
    timer_style = Style(fg=theme.primary).bold()
    run_id = run_name if run_name is not None else PLACEHOLDER
    boot_timer = format_duration_or_placeholder(boot_elapsed)
    run_timer = format_duration_or_placeholder(run_elapsed)
    spinner = spinner_char(tick)

    if theme.is_monochrome():
        title_style = Style(modifiers=Modifier.REVERSED | Modifier.BOLD)
    else:
        title_style = Style(fg=theme.on_primary, bg=theme.primary).bold()

    left = Line(
        [
            Span(" INTAR CLI ", title_style),
            Span(" "),
            Span(scenario_name.upper(), Style(fg=theme.fg).bold()),
        ],
        alignment=Alignment.LEFT,
    )
    right = Line(
        [
            Span(f" {spinner} ", Style(fg=theme.secondary)),
            Span(phase.upper(), Style(fg=theme.warning).bold()),
            Span(" | ", dim),
            Span("BOOT ", dim),
            Span(boot_timer, timer_style),
            Span(" | ", dim),
            Span("RUN ", dim),
            Span(run_timer, timer_style),
            Span(" | ", dim),
            Span(f"[{run_id}] ", dim),
        ],
        alignment=Alignment.RIGHT,
    )
    return [left, right]


def completed_header_lines(
    theme: Theme, scenario_name: str, run_name: Optional[str], solve_duration: float
) -> List[Line]:
    """The execution summary shown once the scenario is solved."""
    label = Style(fg=theme.secondary)
    run = run_name if run_name is not None else PLACEHOLDER
    return [
        Line(
            [
                Span("SCENARIO: ", label),
                Span(scenario_name, Style(fg=theme.primary).bold()),
            ],
            alignment=Alignment.CENTER,
        ),
        Line(
            [
                Span("RUN-ID ", label),
                Span(run, Style(fg=theme.info).bold()),
                Span("  |  TIME ", label),
                Span(format_duration(solve_duration), Style(fg=theme.primary).bold()),
                Span("  |  STATUS ", label),
                Span("COMPLETE", Style(fg=theme.success).bold()),
            ],
            alignment=Alignment.CENTER,
        ),
    ]


def context_lines(theme: Theme, description: str) -> List[Line]:
    """The scenario description rendered as Markdown, or a placeholder."""
    text = description if description.strip() else _NO_DESCRIPTION
    return markdown_lines(theme, text)


def help_lines(theme: Theme) -> List[Line]:
    """The key bindings listed in the help overlay."""
    badge = key_style(theme)
    return [
        Line([Span(f" {key} ", badge), Span(f" {desc}")], alignment=Alignment.LEFT)
        for key, desc in _HELP_ENTRIES
    ]


def confirm_dialog_lines(theme: Theme, message: str) -> List[Line]:
    """Rows of a confirmation dialog: up to two message lines and the Yes/No buttons."""
    message_style = Style(fg=theme.primary)
    texts = _text_lines(message)[:_CONFIRM_MESSAGE_LINES]
    texts += [""] * (_CONFIRM_MESSAGE_LINES - len(texts))
    message_lines = [
        Line([Span(text, message_style)] if text else [], alignment=Alignment.CENTER)
        for text in texts
    ]
    buttons = Line(
        [
            Span("[Y]", Style(fg=theme.success).bold()),
            Span("es", message_style),
            Span("          "),
            Span("[N]", Style(fg=theme.error).bold()),
            Span("o", message_style),
        ],
        alignment=Alignment.CENTER,
    )
    return [raw_line(""), *message_lines, raw_line(""), buttons]


def shutdown_lines(theme: Theme, vm_names: Sequence[str]) -> List[Line]:
    """The shutdown notice followed by one line per VM being stopped."""
    warning = Style(fg=theme.warning)
    lines = [
        Line([Span("Shutting down…", warning.bold())], alignment=Alignment.CENTER),
        Line((), alignment=Alignment.CENTER),
    ]
    lines.extend(
        Line(
            [Span("· ", warning), Span(f"Stopping {name}", Style(fg=theme.secondary))],
            alignment=Alignment.CENTER,
        )
        for name in vm_names
    )
    return lines


def logs_header_lines(theme: Theme) -> List[Line]:
    """The title lines above the SSH transcript."""
    return [
        Line([Span("SSH session transcript", Style(fg=theme.secondary).bold())]),
        Line([Span("SSH input and output will appear here.", Style(fg=theme.dim))]),
    ]