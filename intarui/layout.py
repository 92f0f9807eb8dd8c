"""Geometry of the screens: rectangles and how areas are split up."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple, TypeVar

from .widgets import CREDITS_SCROLL_MS_PER_LINE

_U16_MAX = 0xFFFF
_BRIEFING_HEADER_HEIGHT = 4
_BRIEFING_LEFT_PERCENT = 60
_MIN_OBJECTIVES_HEIGHT = 6
_MIN_BOOT_HEIGHT = 3
_COMPLETED_HEADER_HEIGHT = 4
_COMPLETED_FOOTER_HEIGHT = 3

T = TypeVar("T")


@dataclass(frozen=True)
class Rect:
    """An area of the terminal in cells."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def __post_init__(self) -> None:
        for name in ("x", "y", "width", "height"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")

    @property
    def right(self) -> int:
        """The column just past the right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """The row just past the bottom edge."""
        return self.y + self.height

    @property
    def is_empty(self) -> bool:
        """True when the area holds no cells."""
        return self.width == 0 or self.height == 0


def centered_rect(area: Rect, width: int, height: int) -> Rect:
    """A box of the given size centred in area, shrunk to fit if needed."""
    x = area.x + max(0, area.width - width) // 2
    y = area.y + max(0, area.height - height) // 2
    return Rect(x, y, min(width, area.width), min(height, area.height))


def briefing_boot_height(vm_count: int, total_height: int) -> int:
    """Rows given to the boot status panel of the briefing screen."""
    if vm_count <= 0 or total_height < 5:
        return 0
    needed = min(vm_count, _U16_MAX) + 2
    min_boot = min(_MIN_BOOT_HEIGHT, total_height)
    return max(min(needed, total_height), min_boot)


def _percent_of(length: int, percent: int) -> int:
    return (length * percent + 50) // 100


def briefing_layout(area: Rect, vm_count: int) -> Tuple[Rect, Rect, Rect, Rect]:
    """Split the briefing screen into header, context, objectives and boot status."""
    header_height = min(_BRIEFING_HEADER_HEIGHT, area.height)
    header = Rect(area.x, area.y, area.width, header_height)
    body = Rect(area.x, area.y + header_height, area.width, area.height - header_height)

    left_width = _percent_of(body.width, _BRIEFING_LEFT_PERCENT)
    left = Rect(body.x, body.y, left_width, body.height)
    right = Rect(body.x + left_width, body.y, body.width - left_width, body.height)

    min_objectives = min(_MIN_OBJECTIVES_HEIGHT, right.height)
    boot_height = min(
        briefing_boot_height(vm_count, right.height),
        max(0, right.height - min_objectives),
    )
    objectives_height = right.height - boot_height

    objectives = Rect(right.x, right.y, right.width, objectives_height)
    boot = Rect(right.x, right.y + objectives_height, right.width, boot_height)
    return header, left, objectives, boot


def completed_layout(area: Rect) -> Tuple[Rect, Rect, Rect]:
    """Split the completion screen into header, credits and footer."""
    footer_height = min(_COMPLETED_FOOTER_HEIGHT, area.height)
    available = area.height - footer_height
    header_height = min(_COMPLETED_HEADER_HEIGHT, available)
    body_height = area.height - header_height - footer_height

    header = Rect(area.x, area.y, area.width, header_height)
    body = Rect(area.x, area.y + header_height, area.width, body_height)
    footer = Rect(area.x, body.bottom, area.width, footer_height)
    return header, body, footer


def logs_window(lines: Sequence[T], scroll: int, view_height: int) -> List[T]:
    """The lines visible in a log view scrolled up by scroll lines from the newest."""
    total = len(lines)
    view = max(0, view_height)
    max_scroll = min(max(0, total - view), _U16_MAX)
    scroll = min(max(0, scroll), max_scroll)
    start = max(0, max(0, total - view) - scroll)
    end = min(start + view, total)
    return list(lines[start:end])


def credits_offset(total: int, view_height: int, elapsed: float) -> int:
    """How far the completion credits have scrolled after elapsed seconds."""
    max_scroll = max(0, total - max(0, view_height))
    millis = max(0, int(elapsed * 1000))
    return min(millis // CREDITS_SCROLL_MS_PER_LINE, max_scroll)