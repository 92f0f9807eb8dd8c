# intarui

`intarui` provides the building blocks for a terminal interface that follows
an interactive VM scenario from start to finish. It covers image downloads,
VM creation, boot, the running scenario, the completion summary and
shutdown.

The package produces application state, styled lines and layout
rectangles. A renderer of your choice then draws them. Everything is plain
Python, and nothing outside the standard library is needed.

## Modules

- `intarui.theme`: colour themes and terminal detection.
  - `Color` values are built with `rgb`, `indexed` and `named`.
  - `theme_for_mode(mode, color_level)` returns a `Theme`. It covers
    `ThemeMode.DARK` and `ThemeMode.LIGHT` at each `ColorLevel`: `NONE`,
    `ANSI16`, `ANSI256` and `TRUECOLOR`. At `NONE` every colour is
    `Color.RESET`, and `Theme.is_monochrome()` is true.
  - `detect_color_level(environ, stdout_is_tty)` reads `NO_COLOR`,
    `COLORTERM` and `TERM`.
  - `resolve_theme_settings(environ)` returns a `ThemeSettings`. It combines
    the colour level with a light/dark guess:
    - first, the terminal's OSC 11 background reply (`query_osc_11`,
      `parse_rgb_response`, `mode_from_rgb`);
    - failing that, `COLORFGBG` (`theme_from_colorfgbg`);
    - otherwise dark.
- `intarui.text`: `Style` (with `bold()` and `add_modifier()`), `Span`,
  `Line` (with `width()` and `plain()`), `Modifier`, `Alignment` and
  `raw_line`.
- `intarui.model`:
  - `AppPhase`, with `phase_label` and `is_briefing_phase`;
  - `MainTab`, with `next()` and `prev()`, which wrap around;
  - `StageTimer` and `StageTimers`, which take monotonic seconds;
  - `format_mm_ss`.
- `intarui.markdown`: `markdown_lines` and `markdown_spans` render headings,
  `-`/`*` bullets, `**bold**`, `` `code` `` and `[label](url)` links as
  styled lines.
- `intarui.widgets`:
  - `ProbeStatus`, `VmStatus`, `VmTreeProbe` and `VmTreeNode`;
  - line builders `objectives_lines`, `boot_status_lines` and
    `system_tree_lines`;
  - key-hint and tab-bar spans: `key_style`, `key_hint_spans` and
    `tab_header_spans`;
  - `spinner_char` and `format_duration`.
- `intarui.layout`:
  - `Rect` and `centered_rect`;
  - `briefing_layout` and `briefing_boot_height`;
  - `completed_layout`;
  - `logs_window`, which gives the visible slice of a scrolled log;
  - `credits_offset`, which gives auto-scroll of the completion credits.
- `intarui.screens`: the line content of the briefing and running-screen
  headers, the completion summary, the scenario context, the help overlay,
  the confirmation dialog, the shutdown notice and the logs header.
- `intarui.app`: `AppState`.
  - It applies progress updates through `handle_progress`. The updates are
    `DownloadStart`, `DownloadProgress`, `DownloadComplete`, `VmStart`,
    `VmStep`, `VmComplete`, `BootingVms`, `Ready` and `ProgressError`.
  - It handles key presses (`Key`, `KeyCode`) through `handle_key` and
    returns a `Command`: `NONE`, `QUIT` or `RESET`.
  - It keeps the SSH action transcript (`ActionLine`, `add_action_lines`,
    `action_lines_for_display`).

## Example

```python
from intarui.app import AppState, Command, DownloadStart, Key, KeyCode, Ready
from intarui.theme import ColorLevel, ThemeMode, ThemeSettings

state = AppState(ThemeSettings(ThemeMode.DARK, ColorLevel.ANSI256), now=0.0)

state.handle_progress(DownloadStart("base-image", total=1, index=0), now=1.0)
state.phase_label()            # "IMAGES"
state.handle_progress(Ready(), now=30.0)
state.phase_label()            # "RUN"

state.handle_key(Key(KeyCode.TAB), has_runner=True)        # Command.NONE; tab is now LOGS
state.handle_key(Key(KeyCode.CHAR, "r"), has_runner=True)  # opens the restart confirmation
cmd = state.handle_key(Key(KeyCode.CHAR, "y"), has_runner=True)
assert cmd is Command.RESET
# ... reset the scenario, then:
state.complete_reset(now=40.0)
```

When no `ThemeSettings` is passed, `AppState()` detects them from the
current terminal. That detection may write an OSC 11 query to standard
output.

## What this package does not do

- It does not draw to the terminal.
- It does not read key events.
- It does not run an event loop.
- It does not download images or create, boot, probe, reset or stop VMs.

`AppState.handle_key` returns a `Command` and leaves carrying it out to the
caller. Progress updates and transcript lines must likewise be fed in by
the caller. There is no command-line program.

## Tests

```
pip install -e .[test]
pytest
```