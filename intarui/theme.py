"""Colour themes and terminal colour/background detection."""

from __future__ import annotations

import enum
import io
import os
import sys
import time
from collections.abc import Mapping
from contextlib import suppress
from dataclasses import dataclass, fields
from typing import ClassVar, Optional, Tuple, Union

try:
    import fcntl
except ImportError:  # pragma: no cover - non-unix platforms
    fcntl = None  # type: ignore[assignment]


OSC_11_QUERY = b"\x1b]11;?\x07"
OSC_11_TIMEOUT = 0.12
_MAX_RESPONSE = 1024
_READ_CHUNK = 128
_POLL_INTERVAL = 0.005

NAMED_COLORS = frozenset(
    {
        "black",
        "red",
        "green",
        "yellow",
        "blue",
        "magenta",
        "cyan",
        "gray",
        "dark_gray",
        "light_red",
        "light_green",
        "light_yellow",
        "light_blue",
        "light_magenta",
        "light_cyan",
        "white",
    }
)

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_DEC_DIGITS = frozenset("0123456789")


class ThemeMode(enum.Enum):
    """Light or dark appearance."""

    DARK = "dark"
    LIGHT = "light"

    def toggle(self) -> "ThemeMode":
        """Return the opposite mode."""
        return ThemeMode.LIGHT if self is ThemeMode.DARK else ThemeMode.DARK


class ColorLevel(enum.Enum):
    """How many colours the terminal can show."""

    NONE = "none"
    ANSI16 = "ansi16"
    ANSI256 = "ansi256"
    TRUECOLOR = "truecolor"


@dataclass(frozen=True)
class Color:
    """A terminal colour: reset, named ANSI, 256-palette index or RGB."""

    kind: str
    value: Union[None, str, int, Tuple[int, int, int]] = None

    RESET: ClassVar["Color"]


Color.RESET = Color("reset")


def _check_byte(value: int, what: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 255:
        raise ValueError(f"{what} must be an integer in 0..255, got {value!r}")
    return value


def rgb(r: int, g: int, b: int) -> Color:
    """A true-colour value."""
    return Color("rgb", (_check_byte(r, "red"), _check_byte(g, "green"), _check_byte(b, "blue")))


def indexed(index: int) -> Color:
    """A colour from the 256-colour palette."""
    return Color("indexed", _check_byte(index, "palette index"))


def named(name: str) -> Color:
    """One of the 16 named ANSI colours."""
    if name not in NAMED_COLORS:
        raise ValueError(f"unknown colour name {name!r}")
    return Color("named", name)


@dataclass(frozen=True)
class ThemeSettings:
    """Resolved mode and colour depth."""

    mode: ThemeMode
    color_level: ColorLevel


@dataclass(frozen=True)
class Theme:
    """The set of colours used to draw the interface."""

    bg: Color
    fg: Color
    primary: Color
    on_primary: Color
    secondary: Color
    on_secondary: Color
    success: Color
    warning: Color
    error: Color
    info: Color
    dim: Color
    border: Color
    highlight: Color
    surface: Color
    color_level: ColorLevel

    def is_monochrome(self) -> bool:
        """True when colours are switched off."""
        return self.color_level is ColorLevel.NONE


_PALETTE_FIELDS = tuple(f.name for f in fields(Theme) if f.name != "color_level")


def _palette_none() -> dict:
    return {name: Color.RESET for name in _PALETTE_FIELDS}


def _palette_dark_truecolor() -> dict:
    return {
        "bg": rgb(20, 20, 20),
        "fg": rgb(230, 230, 230),
        "primary": rgb(255, 184, 108),
        "on_primary": rgb(20, 20, 20),
        "secondary": rgb(98, 114, 164),
        "on_secondary": rgb(230, 230, 230),
        "success": rgb(80, 250, 123),
        "warning": rgb(241, 250, 140),
        "error": rgb(255, 85, 85),
        "info": rgb(139, 233, 253),
        "dim": rgb(68, 71, 90),
        "border": rgb(98, 114, 164),
        "highlight": rgb(68, 71, 90),
        "surface": rgb(40, 42, 54),
    }


def _palette_dark_ansi256() -> dict:
    return {
        "bg": indexed(235),
        "fg": indexed(252),
        "primary": indexed(179),
        "on_primary": indexed(235),
        "secondary": indexed(103),
        "on_secondary": indexed(252),
        "success": indexed(78),
        "warning": indexed(220),
        "error": indexed(203),
        "info": indexed(81),
        "dim": indexed(241),
        "border": indexed(103),
        "highlight": indexed(237),
        "surface": indexed(236),
    }


def _palette_dark_ansi16() -> dict:
    return {
        "bg": named("black"),
        "fg": named("white"),
        "primary": named("yellow"),
        "on_primary": named("black"),
        "secondary": named("cyan"),
        "on_secondary": named("black"),
        "success": named("light_green"),
        "warning": named("yellow"),
        "error": named("light_red"),
        "info": named("light_cyan"),
        "dim": named("dark_gray"),
        "border": named("dark_gray"),
        "highlight": named("dark_gray"),
        "surface": named("black"),
    }


def _palette_light_truecolor() -> dict:
    return {
        "bg": rgb(250, 250, 250),
        "fg": rgb(30, 30, 30),
        "primary": rgb(200, 100, 0),
        "on_primary": rgb(250, 250, 250),
        "secondary": rgb(100, 100, 120),
        "on_secondary": rgb(250, 250, 250),
        "success": rgb(0, 120, 0),
        "warning": rgb(200, 150, 0),
        "error": rgb(200, 0, 0),
        "info": rgb(0, 100, 200),
        "dim": rgb(150, 150, 150),
        "border": rgb(210, 210, 210),
        "highlight": rgb(220, 220, 220),
        "surface": rgb(245, 245, 245),
    }


def _palette_light_ansi256() -> dict:
    return {
        "bg": indexed(231),
        "fg": indexed(235),
        "primary": indexed(166),
        "on_primary": indexed(231),
        "secondary": indexed(245),
        "on_secondary": indexed(231),
        "success": indexed(28),
        "warning": indexed(178),
        "error": indexed(160),
        "info": indexed(25),
        "dim": indexed(250),
        "border": indexed(252),
        "highlight": indexed(254),
        "surface": indexed(255),
    }


def _palette_light_ansi16() -> dict:
    return {
        "bg": named("white"),
        "fg": named("black"),
        "primary": named("blue"),
        "on_primary": named("white"),
        "secondary": named("magenta"),
        "on_secondary": named("white"),
        "success": named("green"),
        "warning": named("light_red"),
        "error": named("red"),
        "info": named("cyan"),
        "dim": named("dark_gray"),
        "border": named("gray"),
        "highlight": named("gray"),
        "surface": named("white"),
    }


_PALETTES = {
    (ThemeMode.DARK, ColorLevel.TRUECOLOR): _palette_dark_truecolor,
    (ThemeMode.DARK, ColorLevel.ANSI256): _palette_dark_ansi256,
    (ThemeMode.DARK, ColorLevel.ANSI16): _palette_dark_ansi16,
    (ThemeMode.LIGHT, ColorLevel.TRUECOLOR): _palette_light_truecolor,
    (ThemeMode.LIGHT, ColorLevel.ANSI256): _palette_light_ansi256,
    (ThemeMode.LIGHT, ColorLevel.ANSI16): _palette_light_ansi16,
}


def theme_for_mode(mode: ThemeMode, color_level: ColorLevel) -> Theme:
    """Build the theme for a mode at a given colour depth."""
    if color_level is ColorLevel.NONE:
        palette = _palette_none()
    else:
        palette = _PALETTES[(mode, color_level)]()
    return Theme(**palette, color_level=color_level)


def _environ(environ: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def _isatty(stream) -> bool:
    try:
        return bool(stream.isatty())
    except (AttributeError, ValueError, OSError):
        return False


def detect_color_level(
    environ: Optional[Mapping[str, str]] = None, stdout_is_tty: Optional[bool] = None
) -> ColorLevel:
    """Work out the colour depth from the environment and whether stdout is a terminal."""
    env = _environ(environ)
    if stdout_is_tty is None:
        stdout_is_tty = _isatty(sys.stdout)

    if "NO_COLOR" in env:
        return ColorLevel.NONE
    if not stdout_is_tty:
        return ColorLevel.NONE

    colorterm = env.get("COLORTERM", "").lower()
    if "truecolor" in colorterm or "24bit" in colorterm:
        return ColorLevel.TRUECOLOR

    if "256color" in env.get("TERM", ""):
        return ColorLevel.ANSI256

    return ColorLevel.ANSI16


def _parse_u8(text: str) -> Optional[int]:
    digits = text[1:] if text.startswith("+") else text
    if not digits or not set(digits) <= _DEC_DIGITS:
        return None
    value = int(digits)
    return value if value <= 255 else None


def theme_from_colorfgbg(value: Optional[str]) -> Optional[ThemeMode]:
    """Read the background colour index from a COLORFGBG value."""
    if value is None:
        return None
    bg = _parse_u8(value.split(";")[-1])
    if bg is None:
        return None
    return ThemeMode.DARK if bg <= 6 or bg == 8 else ThemeMode.LIGHT


def parse_rgb_component(hex_digits: str) -> Optional[int]:
    """Scale a 1-4 digit hexadecimal colour component to 0..255."""
    length = len(hex_digits)
    if length == 0 or length > 4:
        return None
    digits = hex_digits[1:] if hex_digits.startswith("+") else hex_digits
    if not digits or not set(digits) <= _HEX_DIGITS:
        return None
    value = int(digits, 16)
    maximum = (1 << (length * 4)) - 1
    scaled = (value * 255 + maximum // 2) // maximum
    return scaled if scaled <= 255 else None


def parse_rgb_response(response: str) -> Optional[Tuple[int, int, int]]:
    """Extract the RGB triple from an OSC 11 reply such as ``rgb:ffff/0000/8080``."""
    idx = response.find("rgb:")
    if idx < 0:
        return None
    rest = response[idx + 4 :]
    end = next(
        (i for i, ch in enumerate(rest) if not (ch in _HEX_DIGITS or ch == "/")),
        len(rest),
    )
    parts = rest[:end].split("/")
    if len(parts) < 3:
        return None
    components = [parse_rgb_component(part) for part in parts[:3]]
    if any(c is None for c in components):
        return None
    r, g, b = components
    return (r, g, b)  # type: ignore[return-value]


def mode_from_rgb(rgb: Tuple[int, int, int]) -> ThemeMode:
    """Pick light or dark from a background colour's luminance."""
    r, g, b = rgb
    luminance = (0.2126 * r + 0.7152 * g + 0.0722 * b) / 255.0
    return ThemeMode.LIGHT if luminance > 0.55 else ThemeMode.DARK


def response_complete(data: bytes) -> bool:
    """True once an OSC reply has its BEL or ST terminator."""
    return b"\x07" in data or b"\x1b\\" in data


def query_osc_11(timeout: float = OSC_11_TIMEOUT) -> Optional[str]:
    """Ask the terminal for its background colour; None if it does not answer."""
    if fcntl is None:
        return None
    try:
        out_fd = sys.stdout.fileno()
        in_fd = sys.stdin.fileno()
    except (AttributeError, ValueError, OSError, io.UnsupportedOperation):
        return None

    try:
        sys.stdout.flush()
        os.write(out_fd, OSC_11_QUERY)
    except (OSError, ValueError):
        return None

    try:
        old_flags = fcntl.fcntl(in_fd, fcntl.F_GETFL)
    except OSError:
        return None
    with suppress(OSError):
        fcntl.fcntl(in_fd, fcntl.F_SETFL, old_flags | os.O_NONBLOCK)

    buf = bytearray()
    deadline = time.monotonic() + timeout
    try:
        while time.monotonic() < deadline and len(buf) < _MAX_RESPONSE:
            try:
                chunk = os.read(in_fd, _READ_CHUNK)
            except OSError:
                chunk = b""
            if chunk:
                buf += chunk
                if response_complete(buf):
                    break
            time.sleep(_POLL_INTERVAL)
    finally:
        with suppress(OSError):
            fcntl.fcntl(in_fd, fcntl.F_SETFL, old_flags)

    if not buf:
        return None
    try:
        return bytes(buf).decode("utf-8")
    except UnicodeDecodeError:
        return None


def detect_theme_mode(environ: Optional[Mapping[str, str]] = None) -> Optional[ThemeMode]:
    """Guess the terminal background, first by OSC 11, then from COLORFGBG."""
    if not _isatty(sys.stdin) or not _isatty(sys.stdout):
        return None

    response = query_osc_11(OSC_11_TIMEOUT)
    parsed = parse_rgb_response(response) if response is not None else None
    if parsed is not None:
        return mode_from_rgb(parsed)

    return theme_from_colorfgbg(_environ(environ).get("COLORFGBG"))


def resolve_theme_mode(
    color_level: ColorLevel, environ: Optional[Mapping[str, str]] = None
) -> ThemeMode:
    """The mode to use; dark when colours are off or nothing can be detected."""
    if color_level is ColorLevel.NONE:
        return ThemeMode.DARK
    return detect_theme_mode(environ) or ThemeMode.DARK


def resolve_theme_settings(environ: Optional[Mapping[str, str]] = None) -> ThemeSettings:
    """Detect colour depth and mode for the current terminal."""
    color_level = detect_color_level(environ)
    mode = resolve_theme_mode(color_level, environ)
    return ThemeSettings(mode=mode, color_level=color_level)