"""Application phases, main tabs and per-stage timing."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional


class AppPhase(enum.Enum):
    """Where the application is in its life cycle."""

    INITIALIZING = "initializing"
    DOWNLOADING_IMAGES = "downloading_images"
    CREATING_VMS = "creating_vms"
    BOOTING_VMS = "booting_vms"
    RUNNING = "running"
    COMPLETED = "completed"
    SHUTTING_DOWN = "shutting_down"


_PHASE_LABELS = {
    AppPhase.INITIALIZING: "INIT",
    AppPhase.DOWNLOADING_IMAGES: "IMAGES",
    AppPhase.CREATING_VMS: "VMS",
    AppPhase.BOOTING_VMS: "BOOT",
    AppPhase.RUNNING: "RUN",
    AppPhase.COMPLETED: "DONE",
    AppPhase.SHUTTING_DOWN: "SHUTDOWN",
}

_BRIEFING_PHASES = frozenset(
    {
        AppPhase.INITIALIZING,
        AppPhase.DOWNLOADING_IMAGES,
        AppPhase.CREATING_VMS,
        AppPhase.BOOTING_VMS,
    }
)


class MainTab(enum.Enum):
    """The views of the running screen, in tab order."""

    BRIEFING = "briefing"
    LOGS = "logs"
    SYSTEM = "system"

    def next(self) -> "MainTab":
        """The tab after this one, wrapping around."""
        order = list(MainTab)
        return order[(order.index(self) + 1) % len(order)]

    def prev(self) -> "MainTab":
        """The tab before this one, wrapping around."""
        order = list(MainTab)
        return order[(order.index(self) - 1) % len(order)]


@dataclass
class StageTimer:
    """Start and end times of one stage, as monotonic seconds."""

    started_at: Optional[float] = None
    ended_at: Optional[float] = None

    def start_if_needed(self, now: float) -> None:
        """Record the start unless the stage has already started."""
        if self.started_at is None:
            self.started_at = now

    def end_if_needed(self, now: float) -> None:
        """Record the end if the stage has started and not yet ended."""
        if self.started_at is not None and self.ended_at is None:
            self.ended_at = now

    def reset_to_running(self, now: float) -> None:
        """Restart the stage from now, clearing any end time."""
        self.started_at = now
        self.ended_at = None

    def elapsed(self, now: float) -> Optional[float]:
        """Seconds spent in the stage so far; None if it never started."""
        if self.started_at is None:
            return None
        end = self.ended_at if self.ended_at is not None else now
        return max(0.0, end - self.started_at)


@dataclass
class StageTimers:
    """Timers for each stage of bringing a scenario up and running it."""

    init: StageTimer = field(default_factory=StageTimer)
    images: StageTimer = field(default_factory=StageTimer)
    vms: StageTimer = field(default_factory=StageTimer)
    boot: StageTimer = field(default_factory=StageTimer)
    run: StageTimer = field(default_factory=StageTimer)


def phase_label(phase: AppPhase) -> str:
    """The short upper-case label shown for a phase."""
    return _PHASE_LABELS[phase]


def is_briefing_phase(phase: AppPhase) -> bool:
    """True for the phases before the scenario is running."""
    return phase in _BRIEFING_PHASES


def format_mm_ss(seconds: float) -> str:
    """Format whole seconds as MM:SS; minutes are not capped at 59."""
    total = max(0, int(seconds))
    minutes, secs = divmod(total, 60)
    return f"{minutes:02}:{secs:02}"