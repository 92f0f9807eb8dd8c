"""Status types and the styled lines that make up the screen panels."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from .model import MainTab
from .text import Alignment, Line, Modifier, Span, Style, raw_line
from .theme import Color, Theme

SPINNER_FRAMES = ("◐", "◓", "◑", "◒")
CREDITS_SCROLL_MS_PER_LINE = 700
PLACEHOLDER = "—"


class ProbeStatus(enum.Enum):
    """Outcome of a scenario probe."""

    PENDING = "pending"
    PASSED = "passed"
    FAILED = "failed"


class VmStatus(enum.Enum):
    """Life-cycle state of a VM as shown in the interface."""

    STARTING = "starting"
    BOOTING = "booting"
    CLOUD_INIT = "cloud_init"
    READY = "ready"
    ERROR = "error"
    UNKNOWN = "unknown"


@dataclass
class VmTreeProbe:
    """A scenario probe attached to a VM."""

    name: str
    status: ProbeStatus = ProbeStatus.PENDING
    description: Optional[str] = None


@dataclass
class VmTreeNode:
    """A VM with its resources and probe progress."""

    name: str
    status: VmStatus = VmStatus.UNKNOWN
    cpu: int = 0
    memory: int = 0
    disk: int = 0
    ssh_port: Optional[int] = None
    boot_passing: int = 0
    boot_total: int = 0
    scenario_probes: List[VmTreeProbe] = field(default_factory=list)


def spinner_char(tick: int) -> str:
    """The spinner frame for a UI tick; each frame lasts three ticks."""
    return SPINNER_FRAMES[(tick // 3) % len(SPINNER_FRAMES)]


def format_duration(seconds: float) -> str:
    """Format seconds as MM:SS, or H:MM:SS once an hour has passed."""
    total = max(0, int(seconds))
    hours, rem = divmod(total, 3600)
    mins, secs = divmod(rem, 60)
    if hours > 0:
        return f"{hours}:{mins:02}:{secs:02}"
    return f"{mins:02}:{secs:02}"


def format_duration_or_placeholder(seconds: Optional[float]) -> str:
    """Like format_duration, with a placeholder when there is no value."""
    return "--:--" if seconds is None else format_duration(seconds)


def vm_status_label(theme: Theme, status: VmStatus) -> Tuple[str, Color]:
    """Short label and colour for a VM status."""
    if status is VmStatus.READY:
        return "READY", theme.success
    if status in (VmStatus.BOOTING, VmStatus.CLOUD_INIT):
        return "BOOT", theme.warning
    if status is VmStatus.STARTING:
        return "START", theme.warning
    if status is VmStatus.ERROR:
        return "ERROR", theme.error
    return "WAIT", theme.dim


def vm_status_icon(theme: Theme, status: VmStatus) -> Tuple[str, Color]:
    """Icon and colour for a VM status."""
    if status is VmStatus.READY:
        return "●", theme.success
    if status in (VmStatus.BOOTING, VmStatus.CLOUD_INIT, VmStatus.STARTING):
        return "●", theme.warning
    if status is VmStatus.ERROR:
        return "●", theme.error
    return "○", theme.dim


_PROBE_LOOK = {
    ProbeStatus.PASSED: ("✓", "success", "PASS"),
    ProbeStatus.FAILED: ("✗", "error", "FAIL"),
    ProbeStatus.PENDING: ("·", "dim", "WAIT"),
}


def objectives_lines(theme: Theme, vms: Sequence[VmTreeNode], area_width: int) -> List[Line]:
    """Lines listing each VM's scenario probes and their status."""
    dim = Style(fg=theme.dim)
    lines: List[Line] = []
    has_objectives = False

    for vm in vms:
        if not vm.scenario_probes:
            continue
        has_objectives = True
        total = len(vm.scenario_probes)
        passed = sum(1 for p in vm.scenario_probes if p.status is ProbeStatus.PASSED)

        lines.append(
            Line(
                [
                    Span("VM ", dim),
                    Span(vm.name, Style(fg=theme.primary).bold()),
                    Span("  "),
                    Span("[", dim),
                    Span(f"{passed}/{total}", Style(fg=theme.secondary).bold()),
                    Span("]", dim),
                ]
            )
        )

        sep_width = max(0, area_width - 2)
        if sep_width > 0:
            lines.append(Line([Span("-" * sep_width, dim)]))

        for probe in vm.scenario_probes:
            icon, colour_name, label = _PROBE_LOOK[probe.status]
            colour = getattr(theme, colour_name)
            text_style = dim if probe.status is ProbeStatus.PASSED else Style(fg=theme.fg)
            lines.append(
                Line(
                    [
                        Span("  "),
                        Span(icon, Style(fg=colour)),
                        Span(" "),
                        Span(f"{label:<4}", Style(fg=colour).bold()),
                        Span(" "),
                        Span(probe.name, text_style),
                    ]
                )
            )
            if probe.description is not None:
                lines.append(Line([Span("      "), Span(probe.description, dim)]))

        lines.append(raw_line(""))

    if not has_objectives:
        lines.append(Line([Span("No objectives configured.", dim)]))

    return lines


def boot_status_lines(theme: Theme, vms: Sequence[VmTreeNode], height: int) -> List[Line]:
    """One line per VM with its status and boot-probe progress, up to height lines."""
    if height <= 0:
        return []
    if not vms:
        return [
            Line([Span("No VMs defined.", Style(fg=theme.dim))], alignment=Alignment.CENTER)
        ]

    name_width = min(max(max(len(vm.name) for vm in vms), 6), 18)
    lines: List[Line] = []
    for vm in vms[:height]:
        label, label_colour = vm_status_label(theme, vm.status)
        icon, icon_colour = vm_status_icon(theme, vm.status)
        if vm.boot_total == 0:
            boot_label = f"boot {PLACEHOLDER}"
        else:
            boot_label = f"boot {vm.boot_passing}/{vm.boot_total}"
        lines.append(
            Line(
                [
                    Span(f"{icon} ", Style(fg=icon_colour)),
                    Span(f"{vm.name:<{name_width}}", Style(fg=theme.fg).bold()),
                    Span(" "),
                    Span(f"{label:<5}", Style(fg=label_colour).bold()),
                    Span("  "),
                    Span(boot_label, Style(fg=theme.secondary)),
                ]
            )
        )
    return lines


def system_tree_lines(theme: Theme, vms: Sequence[VmTreeNode]) -> List[Line]:
    """A tree of each VM's status, resources and SSH port."""
    if not vms:
        return [
            Line([Span("No VMs available", Style(fg=theme.dim))], alignment=Alignment.CENTER)
        ]

    leaf_style = Style(fg=theme.dim)
    value_style = Style(fg=theme.info)

    def leaf(connector: str, label: str, value: str) -> Line:
        return Line(
            [
                Span(f"  {connector} ", leaf_style),
                Span(f"{label:<4}", leaf_style),
                Span(" "),
                Span(value, value_style),
            ]
        )

    lines: List[Line] = []
    for vm in vms:
        label, label_colour = vm_status_label(theme, vm.status)
        icon, icon_colour = vm_status_icon(theme, vm.status)
        total = len(vm.scenario_probes)
        passed = sum(1 for p in vm.scenario_probes if p.status is ProbeStatus.PASSED)
        scen_label = f"scen {PLACEHOLDER}" if total == 0 else f"scen {passed}/{total}"

        lines.append(
            Line(
                [
                    Span(f"{icon} ", Style(fg=icon_colour)),
                    Span(vm.name, Style(fg=theme.fg).bold()),
                    Span(" "),
                    Span(label, Style(fg=label_colour)),
                    Span("  "),
                    Span(scen_label, Style(fg=theme.secondary)),
                ]
            )
        )
        lines.append(leaf("├─", "CPU", f"{vm.cpu} vCPU"))
        lines.append(leaf("├─", "MEM", f"{vm.memory} MB"))
        lines.append(leaf("├─", "DISK", f"{vm.disk} GB"))
        ssh = PLACEHOLDER if vm.ssh_port is None else str(vm.ssh_port)
        lines.append(leaf("└─", "SSH", ssh))
    return lines


def key_style(theme: Theme) -> Style:
    """Style of a key badge in footers and help."""
    if theme.is_monochrome():
        return Style(modifiers=Modifier.REVERSED | Modifier.BOLD)
    return Style(fg=theme.on_secondary, bg=theme.secondary).bold()


def key_hint_spans(theme: Theme, keys: Iterable[Tuple[str, str]]) -> List[Span]:
    """Spans showing key badges followed by their descriptions."""
    badge = key_style(theme)
    desc_style = Style(fg=theme.dim)
    spans: List[Span] = []
    for key, desc in keys:
        spans.append(Span(f" {key} ", badge))
        spans.append(Span(f" {desc} ", desc_style))
        spans.append(Span(" "))
    return spans


_TAB_LABELS = (
    (MainTab.BRIEFING, " BRIEFING "),
    (MainTab.LOGS, " LOGS "),
    (MainTab.SYSTEM, " SYSTEM "),
)


def tab_header_spans(theme: Theme, active_tab: MainTab) -> List[Span]:
    """The tab bar, with the active tab marked."""
    if theme.is_monochrome():
        active_style = Style(modifiers=Modifier.REVERSED | Modifier.BOLD)
    else:
        active_style = Style(fg=theme.on_primary, bg=theme.primary).bold()
    inactive_style = Style(fg=theme.dim)

    spans: List[Span] = []
    for tab, label in _TAB_LABELS:
        active = tab is active_tab
        prefix, suffix = ("▶ ", " ◀") if active else ("  ", "  ")
        if spans:
            spans.append(Span("  "))
        spans.append(Span(f"{prefix}{label}{suffix}", active_style if active else inactive_style))
    return spans