import pytest

from intarui.model import MainTab
from intarui.text import Alignment, Modifier
from intarui.theme import ColorLevel, ThemeMode, theme_for_mode
from intarui.widgets import (
    SPINNER_FRAMES,
    ProbeStatus,
    VmStatus,
    VmTreeNode,
    VmTreeProbe,
    boot_status_lines,
    format_duration,
    format_duration_or_placeholder,
    key_hint_spans,
    key_style,
    objectives_lines,
    spinner_char,
    system_tree_lines,
    tab_header_spans,
    vm_status_icon,
    vm_status_label,
)


@pytest.fixture
def theme():
    return theme_for_mode(ThemeMode.DARK, ColorLevel.ANSI256)


@pytest.fixture
def mono():
    return theme_for_mode(ThemeMode.DARK, ColorLevel.NONE)


def _vm(name="web", **kwargs):
    return VmTreeNode(name=name, **kwargs)


def test_spinner_frames_change_every_three_ticks():
    assert spinner_char(0) == spinner_char(1) == spinner_char(2) == SPINNER_FRAMES[0]
    assert spinner_char(3) == SPINNER_FRAMES[1]
    for tick in range(30):
        assert spinner_char(tick) == spinner_char(tick + 12)


def test_format_duration_forms():
    assert format_duration(0) == "00:00"
    assert format_duration(3600) == "1:00:00"
    assert format_duration(61.9) == format_duration(61)
    assert ":" in format_duration(3599) and format_duration(3599).count(":") == 1


def test_placeholder():
    assert format_duration_or_placeholder(None) == "--:--"
    assert format_duration_or_placeholder(125) == format_duration(125)


@pytest.mark.parametrize(
    "status, label, colour",
    [
        (VmStatus.READY, "READY", "success"),
        (VmStatus.BOOTING, "BOOT", "warning"),
        (VmStatus.CLOUD_INIT, "BOOT", "warning"),
        (VmStatus.STARTING, "START", "warning"),
        (VmStatus.ERROR, "ERROR", "error"),
        (VmStatus.UNKNOWN, "WAIT", "dim"),
    ],
)
def test_status_label(theme, status, label, colour):
    assert vm_status_label(theme, status) == (label, getattr(theme, colour))


def test_status_icon(theme):
    assert vm_status_icon(theme, VmStatus.UNKNOWN) == ("○", theme.dim)
    assert vm_status_icon(theme, VmStatus.STARTING) == ("●", theme.warning)
    assert vm_status_icon(theme, VmStatus.READY) == ("●", theme.success)


def test_objectives_without_probes(theme):
    lines = objectives_lines(theme, [_vm()], 20)
    assert [line.plain() for line in lines] == ["No objectives configured."]


def test_objectives_with_probes(theme):
    vm = _vm(
        scenario_probes=[
            VmTreeProbe("nginx", ProbeStatus.PASSED),
            VmTreeProbe("port", ProbeStatus.FAILED, description="listen on 80"),
            VmTreeProbe("user", ProbeStatus.PENDING),
        ]
    )
    lines = objectives_lines(theme, [vm], 12)
    header = lines[0]
    assert header.spans[1].content == "web"
    assert header.spans[4].content == "1/3"
    assert lines[1].plain() == "-" * (12 - 2)
    assert "PASS" in lines[2].plain() and lines[2].plain().endswith("nginx")
    assert "FAIL" in lines[3].plain()
    assert lines[4].plain().strip() == "listen on 80"
    assert "WAIT" in lines[5].plain()
    assert lines[-1].plain() == ""
    assert lines[2].spans[5].style.fg == theme.dim
    assert lines[3].spans[5].style.fg == theme.fg


def test_objectives_no_separator_when_narrow(theme):
    vm = _vm(scenario_probes=[VmTreeProbe("a")])
    lines = objectives_lines(theme, [vm], 2)
    assert not lines[1].plain().startswith("-")


def test_boot_status_empty_and_zero_height(theme):
    assert boot_status_lines(theme, [_vm()], 0) == []
    lines = boot_status_lines(theme, [], 5)
    assert lines[0].plain() == "No VMs defined."
    assert lines[0].alignment is Alignment.CENTER


def test_boot_status_lines(theme):
    vms = [
        _vm("a", status=VmStatus.READY, boot_passing=1, boot_total=2),
        _vm("b"),
        _vm("c"),
    ]
    lines = boot_status_lines(theme, vms, 2)
    assert len(lines) == 2
    assert lines[0].spans[1].content.rstrip() == "a"
    assert len(lines[0].spans[1].content) == 6
    assert lines[0].spans[5].content == "boot 1/2"
    assert lines[1].spans[5].content == "boot —"


def test_boot_status_long_names_not_truncated(theme):
    name = "x" * 30
    lines = boot_status_lines(theme, [_vm(name), _vm("y")], 5)
    assert lines[0].spans[1].content == name
    assert len(lines[1].spans[1].content) == 18


def test_system_tree(theme):
    vm = _vm(cpu=2, memory=2048, disk=20, ssh_port=2222,
             scenario_probes=[VmTreeProbe("p", ProbeStatus.PASSED)])
    lines = system_tree_lines(theme, [vm, _vm("db")])
    assert len(lines) == 10
    assert lines[0].plain().endswith("scen 1/1")
    assert lines[1].plain().endswith("2 vCPU")
    assert lines[2].plain().endswith("2048 MB")
    assert lines[3].plain().endswith("20 GB")
    assert lines[4].plain().endswith("2222")
    assert lines[5].plain().endswith("scen —")
    assert lines[9].plain().endswith("—")


def test_system_tree_empty(theme):
    assert system_tree_lines(theme, [])[0].plain() == "No VMs available"


def test_key_style(theme, mono):
    assert key_style(mono).modifiers == Modifier.REVERSED | Modifier.BOLD
    style = key_style(theme)
    assert style.bg == theme.secondary and style.fg == theme.on_secondary
    assert Modifier.BOLD in style.modifiers


def test_key_hint_spans(theme):
    spans = key_hint_spans(theme, [("Q", "Quit"), ("?", "Help")])
    assert len(spans) == 6
    assert spans[0].content == " Q "
    assert spans[1].content == " Quit "
    assert spans[0].style == key_style(theme)


def test_tab_header(theme):
    spans = tab_header_spans(theme, MainTab.LOGS)
    assert len(spans) == 5
    assert spans[2].content == "▶  LOGS  ◀"
    assert spans[0].style.fg == theme.dim
    assert spans[2].style.bg == theme.primary
    for tab in MainTab:
        marked = [s for s in tab_header_spans(theme, tab) if s.content.startswith("▶")]
        assert len(marked) == 1