"""Application state: progress handling, key bindings and the action log."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from .model import (
    AppPhase,
    MainTab,
    StageTimers,
    format_mm_ss,
)
from .model import is_briefing_phase as _is_briefing_phase
from .model import phase_label as _phase_label
from .text import Line, Span, Style
from .theme import ThemeMode, ThemeSettings, resolve_theme_settings, theme_for_mode

_U16_MAX = 0xFFFF
_SCROLL_STEP = 10


@dataclass(frozen=True)
class DownloadStart:
    """An image download has begun."""

    image: str
    total: int
    index: int


@dataclass(frozen=True)
class DownloadProgress:
    """Fraction of the current image downloaded."""

    progress: float


@dataclass(frozen=True)
class DownloadComplete:
    """The current image is available."""


@dataclass(frozen=True)
class VmStart:
    """Creation of a VM has begun."""

    name: str
    step: str
    total: int
    index: int


@dataclass(frozen=True)
class VmStep:
    """A VM being created has moved to another step."""

    step: str


@dataclass(frozen=True)
class VmComplete:
    """A VM has been created."""


@dataclass(frozen=True)
class BootingVms:
    """All VMs are created and are booting."""


@dataclass(frozen=True)
class Ready:
    """The scenario is up and running."""


@dataclass(frozen=True)
class ProgressError:
    """Initialisation reported an error."""

    message: str


ProgressUpdate = Union[
    DownloadStart,
    DownloadProgress,
    DownloadComplete,
    VmStart,
    VmStep,
    VmComplete,
    BootingVms,
    Ready,
    ProgressError,
]


class ActionLineKind(enum.Enum):
    """Whether a transcript line was typed or printed."""

    INPUT = "input"
    OUTPUT = "output"


@dataclass(frozen=True)
class ActionLine:
    """One line of an SSH session transcript."""

    vm: str
    line: str
    kind: ActionLineKind
    received_at: float


class KeyCode(enum.Enum):
    """The keys the interface responds to."""

    CHAR = "char"
    TAB = "tab"
    BACK_TAB = "back_tab"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"
    ESC = "esc"
    ENTER = "enter"
    OTHER = "other"


@dataclass(frozen=True)
class Key:
    """A key press with its modifiers; char is set for KeyCode.CHAR."""

    code: KeyCode
    char: Optional[str] = None
    ctrl: bool = False
    shift: bool = False

    def is_char(self, *chars: str) -> bool:
        return self.code is KeyCode.CHAR and self.char in chars


class Command(enum.Enum):
    """What the caller must do after a key press."""

    NONE = "none"
    QUIT = "quit"
    RESET = "reset"


class AppState:
    """Everything the interface shows, updated by progress messages and keys."""

    def __init__(
        self,
        settings: Optional[ThemeSettings] = None,
        now: Optional[float] = None,
    ) -> None:
        now = time.monotonic() if now is None else now
        settings = resolve_theme_settings() if settings is None else settings
        self.phase = AppPhase.INITIALIZING
        self.theme_mode = settings.mode
        self.color_level = settings.color_level
        self.theme = theme_for_mode(settings.mode, settings.color_level)
        self.tick = 0
        self.error_message: Optional[str] = None
        self.scroll = 0
        self.should_quit = False
        self.show_confirm_reset = False
        self.show_help = False
        self.stages = StageTimers()
        self.stages.init.start_if_needed(now)
        self.action_lines: List[ActionLine] = []
        self.actions_since = now
        self.active_tab = MainTab.BRIEFING
        self.download_image: Optional[str] = None
        self.download_total = 0
        self.download_index = 0
        self.download_progress = 0.0
        self.vm_progress_name: Optional[str] = None
        self.vm_progress_total = 0
        self.vm_progress_index = 0
        self.vm_progress_step: Optional[str] = None

    # -- progress -------------------------------------------------------

    def handle_progress(self, update: ProgressUpdate, now: Optional[float] = None) -> None:
        """Apply a progress message from scenario initialisation."""
        now = time.monotonic() if now is None else now
        stages = self.stages
        match update:
            case DownloadStart(image=image, total=total, index=index):
                self.download_image = image
                self.download_total = total
                self.download_index = index
                self.download_progress = 0.0
                stages.init.end_if_needed(now)
                stages.images.start_if_needed(now)
                self.phase = AppPhase.DOWNLOADING_IMAGES
            case DownloadProgress(progress=progress):
                self.download_progress = min(max(progress, 0.0), 1.0)
            case DownloadComplete():
                self.download_progress = 1.0
            case VmStep(step=step):
                self.vm_progress_step = step
            case VmComplete():
                pass
            case VmStart(name=name, step=step, total=total, index=index):
                self.vm_progress_name = name
                self.vm_progress_step = step
                self.vm_progress_total = total
                self.vm_progress_index = index
                stages.images.end_if_needed(now)
                stages.vms.start_if_needed(now)
                self.phase = AppPhase.CREATING_VMS
            case BootingVms():
                stages.vms.end_if_needed(now)
                stages.boot.start_if_needed(now)
                self.phase = AppPhase.BOOTING_VMS
                self.vm_progress_name = None
                self.vm_progress_step = None
            case Ready():
                stages.boot.end_if_needed(now)
                stages.run.start_if_needed(now)
                self.phase = AppPhase.RUNNING
                self.scroll = 0
                self.action_lines.clear()
                self.actions_since = now
            case ProgressError(message=message):
                self.error_message = message
            case _:
                raise TypeError(f"unknown progress update {update!r}")

    # -- keys -------------------------------------------------------------

    def handle_key(self, key: Key, has_runner: bool) -> Command:
        """React to a key press.

        Command.RESET means the caller should reset the scenario and then
        call complete_reset; Command.QUIT means it should shut down.
        """
        if self.show_confirm_reset:
            return self._handle_confirm_reset(key, has_runner)

        if self.is_briefing_phase():
            if self._is_quit(key):
                self.should_quit = True
                return Command.QUIT
            return Command.NONE

        if self._handle_overlay_toggles(key):
            return Command.NONE

        if self._is_quit(key):
            self.should_quit = True
            return Command.QUIT

        if self._is_reset(key, has_runner):
            self.show_confirm_reset = True
            return Command.NONE

        self._handle_navigation(key)
        return Command.NONE

    def _handle_confirm_reset(self, key: Key, has_runner: bool) -> Command:
        if key.is_char("y", "Y"):
            self.show_confirm_reset = False
            return Command.RESET if has_runner else Command.NONE
        if key.is_char("n", "N") or key.code is KeyCode.ESC:
            self.show_confirm_reset = False
        return Command.NONE

    def _handle_overlay_toggles(self, key: Key) -> bool:
        if key.is_char("?"):
            self.show_help = not self.show_help
            return True
        if key.is_char("t"):
            self.toggle_theme()
            return True
        return False

    @staticmethod
    def _is_quit(key: Key) -> bool:
        return (key.ctrl and key.is_char("c", "q")) or key.is_char("q")

    def _is_reset(self, key: Key, has_runner: bool) -> bool:
        return (
            key.is_char("r")
            and (key.ctrl or self.phase in (AppPhase.RUNNING, AppPhase.COMPLETED))
            and has_runner
        )

    def _handle_navigation(self, key: Key) -> None:
        code = key.code
        in_logs = self.active_tab is MainTab.LOGS
        if code is KeyCode.TAB:
            self.active_tab = self.active_tab.prev() if key.shift else self.active_tab.next()
            self.scroll = 0
        elif code is KeyCode.BACK_TAB:
            self.active_tab = self.active_tab.prev()
            self.scroll = 0
        elif code is KeyCode.PAGE_UP and in_logs:
            self.scroll = min(self.scroll + _SCROLL_STEP, _U16_MAX)
        elif code is KeyCode.PAGE_DOWN and in_logs:
            self.scroll = max(self.scroll - _SCROLL_STEP, 0)
        elif code is KeyCode.HOME and in_logs:
            self.scroll = _U16_MAX
        elif code is KeyCode.END and in_logs:
            self.scroll = 0

    # -- scenario life cycle ------------------------------------------------

    def complete_reset(self, now: Optional[float] = None) -> None:
        """Return to a fresh running state after the scenario was reset."""
        now = time.monotonic() if now is None else now
        self.phase = AppPhase.RUNNING
        self.error_message = None
        self.stages.run.reset_to_running(now)
        self.scroll = 0
        self.action_lines.clear()
        self.actions_since = now

    def mark_completed(self, now: Optional[float] = None) -> None:
        """Record that every scenario probe has passed."""
        now = time.monotonic() if now is None else now
        self.phase = AppPhase.COMPLETED
        self.scroll = 0
        self.stages.run.end_if_needed(now)

    # -- action transcript --------------------------------------------------

    def add_action_lines(self, lines: Iterable[ActionLine]) -> None:
        """Merge new transcript lines, dropping any from before the last reset."""
        new = list(lines)
        if not new:
            return
        merged = self.action_lines + new
        self.action_lines = sorted(
            (ev for ev in merged if ev.received_at >= self.actions_since),
            key=lambda ev: ev.received_at,
        )

    def action_lines_for_display(self, run_start: Optional[float] = None) -> List[Line]:
        """Styled transcript lines with timestamps relative to run_start."""
        if run_start is None:
            started = self.stages.run.started_at
            run_start = started if started is not None else self.actions_since
        theme = self.theme
        dim = Style(fg=theme.dim)
        lines: List[Line] = []
        for ev in self.action_lines:
            stamp = format_mm_ss(max(0.0, ev.received_at - run_start))
            if ev.kind is ActionLineKind.INPUT:
                prefix, line_style = "$ ", Style(fg=theme.primary)
            else:
                prefix, line_style = "  ", Style(fg=theme.fg)
            lines.append(
                Line(
                    [
                        Span(stamp, Style(fg=theme.secondary)),
                        Span("  "),
                        Span(ev.vm, Style(fg=theme.info).bold()),
                        Span(" │ ", dim),
                        Span(prefix, dim),
                        Span(ev.line, line_style),
                    ]
                )
            )
        return lines

    # -- theme and labels ----------------------------------------------------

    def toggle_theme(self) -> None:
        """Switch between light and dark."""
        self.theme_mode = self.theme_mode.toggle()
        self.theme = theme_for_mode(self.theme_mode, self.color_level)

    def apply_theme(self, settings: ThemeSettings) -> None:
        """Use the given mode and colour depth."""
        self.theme_mode = settings.mode
        self.color_level = settings.color_level
        self.theme = theme_for_mode(settings.mode, settings.color_level)

    def phase_label(self) -> str:
        """Short label of the current phase."""
        return _phase_label(self.phase)

    def is_briefing_phase(self) -> bool:
        """True while the scenario is still being brought up."""
        return _is_briefing_phase(self.phase)

    def boot_elapsed(self, now: float) -> Optional[float]:
        """Seconds spent booting, if booting has started."""
        return self.stages.boot.elapsed(now)

    def run_elapsed(self, now: float) -> Optional[float]:
        """Seconds spent running, if the run has started."""
        return self.stages.run.elapsed(now)


__all__ = [
    "ActionLine",
    "ActionLineKind",
    "AppState",
    "BootingVms",
    "Command",
    "DownloadComplete",
    "DownloadProgress",
    "DownloadStart",
    "Key",
    "KeyCode",
    "ProgressError",
    "ProgressUpdate",
    "Ready",
    "VmComplete",
    "VmStart",
    "VmStep",
    "ThemeMode",
]