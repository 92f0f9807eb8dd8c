import io
import sys
from dataclasses import fields

import pytest

from intarui.theme import (
    Color,
    ColorLevel,
    Theme,
    ThemeMode,
    ThemeSettings,
    detect_color_level,
    detect_theme_mode,
    indexed,
    mode_from_rgb,
    named,
    parse_rgb_component,
    parse_rgb_response,
    query_osc_11,
    resolve_theme_mode,
    resolve_theme_settings,
    response_complete,
    rgb,
    theme_for_mode,
    theme_from_colorfgbg,
)


def _colors(theme):
    return [getattr(theme, f.name) for f in fields(Theme) if f.name != "color_level"]


def test_toggle_round_trip():
    assert ThemeMode.DARK.toggle() is ThemeMode.LIGHT
    assert ThemeMode.LIGHT.toggle() is ThemeMode.DARK
    for mode in ThemeMode:
        assert mode.toggle().toggle() is mode


def test_color_constructors():
    assert rgb(1, 2, 3).value == (1, 2, 3)
    assert rgb(1, 2, 3).kind == "rgb"
    assert indexed(235) == Color("indexed", 235)
    assert named("black") == Color("named", "black")


@pytest.mark.parametrize("args", [(256, 0, 0), (0, -1, 0), (0, 0, 1000)])
def test_rgb_rejects_out_of_range(args):
    with pytest.raises(ValueError):
        rgb(*args)


def test_indexed_and_named_reject_bad_values():
    with pytest.raises(ValueError):
        indexed(256)
    with pytest.raises(ValueError):
        named("chartreuse")


def test_dark_truecolor_palette_values():
    theme = theme_for_mode(ThemeMode.DARK, ColorLevel.TRUECOLOR)
    assert theme.bg == rgb(20, 20, 20)
    assert theme.primary == rgb(255, 184, 108)
    assert theme.surface == rgb(40, 42, 54)
    assert theme.color_level is ColorLevel.TRUECOLOR


def test_light_ansi256_palette_values():
    theme = theme_for_mode(ThemeMode.LIGHT, ColorLevel.ANSI256)
    assert theme.bg == indexed(231)
    assert theme.primary == indexed(166)


def test_ansi16_palettes_use_named_colors():
    dark = theme_for_mode(ThemeMode.DARK, ColorLevel.ANSI16)
    light = theme_for_mode(ThemeMode.LIGHT, ColorLevel.ANSI16)
    assert dark.bg == named("black")
    assert light.bg == named("white")
    assert all(c.kind == "named" for c in _colors(dark) + _colors(light))


@pytest.mark.parametrize("mode", list(ThemeMode))
def test_no_color_level_is_all_reset(mode):
    theme = theme_for_mode(mode, ColorLevel.NONE)
    assert all(c == Color.RESET for c in _colors(theme))
    assert theme.is_monochrome()


@pytest.mark.parametrize(
    "level", [ColorLevel.ANSI16, ColorLevel.ANSI256, ColorLevel.TRUECOLOR]
)
def test_colored_themes_not_monochrome(level):
    assert not theme_for_mode(ThemeMode.DARK, level).is_monochrome()


def test_detect_color_level():
    assert detect_color_level({"NO_COLOR": ""}, True) is ColorLevel.NONE
    assert detect_color_level({"COLORTERM": "truecolor"}, False) is ColorLevel.NONE
    assert detect_color_level({"COLORTERM": "TrueColor"}, True) is ColorLevel.TRUECOLOR
    assert detect_color_level({"COLORTERM": "24bit"}, True) is ColorLevel.TRUECOLOR
    assert detect_color_level({"TERM": "xterm-256color"}, True) is ColorLevel.ANSI256
    assert detect_color_level({"TERM": "xterm"}, True) is ColorLevel.ANSI16
    assert detect_color_level({}, True) is ColorLevel.ANSI16


@pytest.mark.parametrize(
    "value, expected",
    [
        ("15;0", ThemeMode.DARK),
        ("0;15", ThemeMode.LIGHT),
        ("0;8", ThemeMode.DARK),
        ("0;7", ThemeMode.LIGHT),
        ("6", ThemeMode.DARK),
        ("0;default;0", ThemeMode.DARK),
        ("0;256", None),
        ("0;x", None),
        ("", None),
        (None, None),
    ],
)
def test_theme_from_colorfgbg(value, expected):
    assert theme_from_colorfgbg(value) is expected


def test_parse_rgb_component():
    assert parse_rgb_component("ff") == 255
    assert parse_rgb_component("ffff") == 255
    assert parse_rgb_component("f") == 255
    assert parse_rgb_component("0") == 0
    assert parse_rgb_component("0000") == 0
    assert parse_rgb_component("8080") == 128


@pytest.mark.parametrize("bad", ["", "12345", "zz", "+"])
def test_parse_rgb_component_rejects(bad):
    assert parse_rgb_component(bad) is None


def test_parse_rgb_response():
    assert parse_rgb_response("\x1b]11;rgb:ffff/ffff/ffff\x07") == (255, 255, 255)
    assert parse_rgb_response("\x1b]11;rgb:0000/0000/0000\x1b\\") == (0, 0, 0)
    assert parse_rgb_response("rgb:ff/00/ff") == (255, 0, 255)


@pytest.mark.parametrize(
    "bad", ["", "no colour here", "rgb:ffff/ffff", "rgb:ffff//ffff", "rgb:12345/0/0"]
)
def test_parse_rgb_response_rejects(bad):
    assert parse_rgb_response(bad) is None


def test_mode_from_rgb():
    assert mode_from_rgb((255, 255, 255)) is ThemeMode.LIGHT
    assert mode_from_rgb((0, 0, 0)) is ThemeMode.DARK
    assert mode_from_rgb((20, 20, 20)) is ThemeMode.DARK
    assert mode_from_rgb((250, 250, 250)) is ThemeMode.LIGHT


def test_response_complete():
    assert response_complete(b"abc\x07")
    assert response_complete(b"abc\x1b\\")
    assert not response_complete(b"abc\x1b")
    assert not response_complete(b"")


def test_query_and_detect_without_terminal(monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO(""))
    monkeypatch.setattr(sys, "stdout", io.StringIO())
    assert query_osc_11(0.01) is None
    assert detect_theme_mode({"COLORFGBG": "0;15"}) is None


def test_resolve_theme_mode_no_color_is_dark():
    assert resolve_theme_mode(ColorLevel.NONE, {"COLORFGBG": "0;15"}) is ThemeMode.DARK


def test_resolve_theme_settings_no_color():
    settings = resolve_theme_settings({"NO_COLOR": "1"})
    assert settings == ThemeSettings(mode=ThemeMode.DARK, color_level=ColorLevel.NONE)