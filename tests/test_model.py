import pytest

from intarui.model import (
    AppPhase,
    MainTab,
    StageTimer,
    StageTimers,
    format_mm_ss,
    is_briefing_phase,
    phase_label,
)

TAB_NAMES = ["BRIEFING", "LOGS", "SYSTEM"]


@pytest.mark.parametrize("name", TAB_NAMES)
def test_next_and_prev_are_inverse(name):
    tab = MainTab[name]
    assert MainTab.prev(MainTab.next(tab)) is tab
    assert MainTab.next(MainTab.prev(tab)) is tab


@pytest.mark.parametrize("name", TAB_NAMES)
def test_three_steps_cycle_back(name):
    tab = MainTab[name]
    assert MainTab.next(MainTab.next(MainTab.next(tab))) is tab
    assert MainTab.prev(MainTab.prev(MainTab.prev(tab))) is tab


def test_tab_order():
    assert MainTab.BRIEFING.next() is MainTab.LOGS
    assert MainTab.LOGS.next() is MainTab.SYSTEM
    assert MainTab.SYSTEM.next() is MainTab.BRIEFING
    assert MainTab.BRIEFING.prev() is MainTab.SYSTEM


@pytest.mark.parametrize(
    "phase, label",
    [
        (AppPhase.INITIALIZING, "INIT"),
        (AppPhase.DOWNLOADING_IMAGES, "IMAGES"),
        (AppPhase.CREATING_VMS, "VMS"),
        (AppPhase.BOOTING_VMS, "BOOT"),
        (AppPhase.RUNNING, "RUN"),
        (AppPhase.COMPLETED, "DONE"),
        (AppPhase.SHUTTING_DOWN, "SHUTDOWN"),
    ],
)
def test_phase_label(phase, label):
    assert phase_label(phase) == label


def test_briefing_phases():
    briefing = {p for p in AppPhase if is_briefing_phase(p)}
    assert briefing == {
        AppPhase.INITIALIZING,
        AppPhase.DOWNLOADING_IMAGES,
        AppPhase.CREATING_VMS,
        AppPhase.BOOTING_VMS,
    }


def test_timer_not_started_has_no_elapsed():
    timer = StageTimer()
    assert timer.elapsed(100.0) is None


def test_timer_end_without_start_is_ignored():
    timer = StageTimer()
    timer.end_if_needed(5.0)
    assert timer.ended_at is None
    assert timer.elapsed(5.0) is None


def test_timer_start_keeps_first_time():
    timer = StageTimer()
    timer.start_if_needed(4.0)
    timer.start_if_needed(9.0)
    assert timer.started_at == 4.0
    assert timer.elapsed(10.0) == 10.0 - 4.0


def test_timer_end_freezes_elapsed():
    timer = StageTimer()
    timer.start_if_needed(2.0)
    timer.end_if_needed(6.0)
    timer.end_if_needed(8.0)
    assert timer.ended_at == 6.0
    assert timer.elapsed(50.0) == timer.elapsed(1000.0) == 6.0 - 2.0


def test_timer_elapsed_never_negative():
    timer = StageTimer()
    timer.start_if_needed(10.0)
    assert timer.elapsed(3.0) == 0.0


def test_timer_reset_to_running():
    timer = StageTimer()
    timer.start_if_needed(1.0)
    timer.end_if_needed(3.0)
    timer.reset_to_running(20.0)
    assert timer.started_at == 20.0
    assert timer.ended_at is None
    assert timer.elapsed(25.0) == 25.0 - 20.0


def test_stage_timers_are_independent():
    timers = StageTimers()
    timers.init.start_if_needed(1.0)
    assert timers.images.started_at is None
    assert timers.run.elapsed(5.0) is None
    assert timers.init.elapsed(5.0) == 5.0 - 1.0


def test_format_mm_ss_zero():
    assert format_mm_ss(0) == "00:00"


def test_format_mm_ss_truncates_fractions():
    assert format_mm_ss(59.9) == format_mm_ss(59)


@pytest.mark.parametrize("seconds", [0, 1, 59, 60, 61, 599, 3600, 7322])
def test_format_mm_ss_round_trip(seconds):
    text = format_mm_ss(seconds)
    minutes, secs = text.split(":")
    assert len(secs) == 2
    assert len(minutes) >= 2
    assert int(secs) < 60
    assert int(minutes) * 60 + int(secs) == seconds