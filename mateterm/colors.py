"""RGBA colours and terminal palettes, with their settings-string forms."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional

from PIL import ImageColor

PALETTE_SIZE = 16

# Squared-distance threshold under which two colours count as equal.
_EQUALITY_THRESHOLD = 1e-4


@dataclass(frozen=True)
class RGBA:
    """A colour with floating point channels in the range 0..1."""

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0
    alpha: float = 1.0


class BuiltinPalette(IntEnum):
    """The palettes shipped with the terminal."""

    TANGO = 0
    LINUX = 1
    XTERM = 2
    RXVT = 3
    SOLARIZED = 4


def _palette(rows: Iterable[tuple[float, float, float]]) -> tuple[RGBA, ...]:
    return tuple(RGBA(r, g, b, 1.0) for r, g, b in rows)


_BUILTIN_PALETTES: dict[BuiltinPalette, tuple[RGBA, ...]] = {
    BuiltinPalette.TANGO: _palette([
        (0, 0, 0),
        (0.8, 0, 0),
        (0.305882, 0.603922, 0.0235294),
        (0.768627, 0.627451, 0),
        (0.203922, 0.396078, 0.643137),
        (0.458824, 0.313725, 0.482353),
        (0.0235294, 0.596078, 0.603922),
        (0.827451, 0.843137, 0.811765),
        (0.333333, 0.341176, 0.32549),
        (0.937255, 0.160784, 0.160784),
        (0.541176, 0.886275, 0.203922),
        (0.988235, 0.913725, 0.309804),
        (0.447059, 0.623529, 0.811765),
        (0.678431, 0.498039, 0.658824),
        (0.203922, 0.886275, 0.886275),
        (0.933333, 0.933333, 0.92549),
    ]),
    BuiltinPalette.LINUX: _palette([
        (0, 0, 0),
        (0.666667, 0, 0),
        (0, 0.666667, 0),
        (0.666667, 0.333333, 0),
        (0, 0, 0.666667),
        (0.666667, 0, 0.666667),
        (0, 0.666667, 0.666667),
        (0.666667, 0.666667, 0.666667),
        (0.333333, 0.333333, 0.333333),
        (1, 0.333333, 0.333333),
        (0.333333, 1, 0.333333),
        (1, 1, 0.333333),
        (0.333333, 0.333333, 1),
        (1, 0.333333, 1),
        (0.333333, 1, 1),
        (1, 1, 1),
    ]),
    BuiltinPalette.XTERM: _palette([
        (0, 0, 0),
        (0.803922, 0, 0),
        (0, 0.803922, 0),
        (0.803922, 0.803922, 0),
        (0.117647, 0.564706, 1),
        (0.803922, 0, 0.803922),
        (0, 0.803922, 0.803922),
        (0.898039, 0.898039, 0.898039),
        (0.298039, 0.298039, 0.298039),
        (1, 0, 0),
        (0, 1, 0),
        (1, 1, 0),
        (0.27451, 0.509804, 0.705882),
        (1, 0, 1),
        (0, 1, 1),
        (1, 1, 1),
    ]),
    BuiltinPalette.RXVT: _palette([
        (0, 0, 0),
        (0.803922, 0, 0),
        (0, 0.803922, 0),
        (0.803922, 0.803922, 0),
        (0, 0, 0.803922),
        (0.803922, 0, 0.803922),
        (0, 0.803922, 0.803922),
        (0.980392, 0.921569, 0.843137),
        (0.25098, 0.25098, 0.25098),
        (1, 0, 0),
        (0, 1, 0),
        (1, 1, 0),
        (0, 0, 1),
        (1, 0, 1),
        (0, 1, 1),
        (1, 1, 1),
    ]),
    BuiltinPalette.SOLARIZED: _palette([
        (0.02745, 0.211764, 0.258823),
        (0.862745, 0.196078, 0.184313),
        (0.521568, 0.6, 0),
        (0.709803, 0.537254, 0),
        (0.149019, 0.545098, 0.823529),
        (0.82745, 0.211764, 0.509803),
        (0.164705, 0.631372, 0.596078),
        (0.933333, 0.909803, 0.835294),
        (0, 0.168627, 0.211764),
        (0.796078, 0.294117, 0.086274),
        (0.345098, 0.431372, 0.458823),
        (0.396078, 0.482352, 0.513725),
        (0.513725, 0.580392, 0.588235),
        (0.423529, 0.443137, 0.768627),
        (0.57647, 0.631372, 0.631372),
        (0.992156, 0.964705, 0.890196),
    ]),
}

_NUMBER = r"([-+]?(?:\d+(?:\.\d*)?|\.\d+))"
_CHANNEL = _NUMBER + r"\s*(%?)"
_RGB_RE = re.compile(
    rf"rgb\(\s*{_CHANNEL}\s*,\s*{_CHANNEL}\s*,\s*{_CHANNEL}\s*\)", re.IGNORECASE
)
_RGBA_RE = re.compile(
    rf"rgba\(\s*{_CHANNEL}\s*,\s*{_CHANNEL}\s*,\s*{_CHANNEL}\s*,\s*{_NUMBER}\s*\)",
    re.IGNORECASE,
)
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


def _hex_channel(digits: str) -> float:
    value = int(digits, 16)
    bits = len(digits) * 4
    value <<= 16 - bits
    while bits < 16:
        value |= value >> bits
        bits *= 2
    return value / 65535


def _parse_hex(digits: str, original: str) -> RGBA:
    if len(digits) not in (3, 6, 9, 12) or not set(digits) <= _HEX_DIGITS:
        raise ValueError(f"unrecognised colour {original!r}")
    width = len(digits) // 3
    red, green, blue = (
        _hex_channel(digits[start:start + width]) for start in range(0, len(digits), width)
    )
    return RGBA(red, green, blue, 1.0)


def _channel(number: str, percent: str) -> float:
    value = float(number)
    return _clamp(value / 100 if percent else value / 255)


def parse_color(text: str) -> RGBA:
    """Parse a colour given as #hex, rgb(), rgba() or a colour name."""
    spec = text.strip()
    if spec.startswith("#"):
        return _parse_hex(spec[1:], text)
    match = _RGB_RE.fullmatch(spec)
    if match:
        r, rp, g, gp, b, bp = match.groups()
        return RGBA(_channel(r, rp), _channel(g, gp), _channel(b, bp), 1.0)
    match = _RGBA_RE.fullmatch(spec)
    if match:
        r, rp, g, gp, b, bp, a = match.groups()
        return RGBA(_channel(r, rp), _channel(g, gp), _channel(b, bp), _clamp(float(a)))
    name = spec.replace(" ", "").lower()
    if not name or not name.isalpha():
        raise ValueError(f"unrecognised colour {text!r}")
    try:
        channels = ImageColor.getrgb(name)
    except ValueError:
        raise ValueError(f"unrecognised colour {text!r}") from None
    red, green, blue = (c / 255 for c in channels[:3])
    return RGBA(red, green, blue, 1.0)


def _to_16bit(value: float) -> int:
    return int(_clamp(value) * 65535 + 1e-7)


def format_color(color: RGBA) -> str:
    """Format a colour as #RRRRGGGGBBBB, the form stored in settings."""
    return "#{:04X}{:04X}{:04X}".format(
        _to_16bit(color.red), _to_16bit(color.green), _to_16bit(color.blue)
    )


def rgba_equal(a: RGBA, b: RGBA) -> bool:
    """Compare two colours with a small tolerance."""
    dr = a.red - b.red
    dg = a.green - b.green
    db = a.blue - b.blue
    da = a.alpha - b.alpha
    return dr * dr + dg * dg + db * db + da * da < _EQUALITY_THRESHOLD


def palette_equal(a: Iterable[RGBA], b: Iterable[RGBA]) -> bool:
    """Compare two palettes entry by entry with colour tolerance."""
    first, second = list(a), list(b)
    if len(first) != len(second):
        return False
    return all(rgba_equal(x, y) for x, y in zip(first, second))


def builtin_palette(which: int) -> tuple[RGBA, ...]:
    """Return one of the built-in palettes."""
    try:
        key = BuiltinPalette(which)
    except ValueError:
        raise ValueError(f"no built-in palette {which!r}") from None
    return _BUILTIN_PALETTES[key]


def fill_palette(colors: Iterable[RGBA]) -> tuple[RGBA, ...]:
    """Pad a palette to at least PALETTE_SIZE entries from the default palette."""
    entries = list(colors)
    default = _BUILTIN_PALETTES[BuiltinPalette.TANGO]
    return tuple(entries) + default[len(entries):]


def parse_palette(text: str) -> tuple[RGBA, ...]:
    """Parse a colon-separated palette; unparsable entries become transparent black."""
    entries = []
    for part in text.split(":") if text else []:
        try:
            entries.append(parse_color(part))
        except ValueError:
            entries.append(RGBA(0.0, 0.0, 0.0, 0.0))
    return fill_palette(entries)


def format_palette(colors: Iterable[Optional[RGBA]]) -> str:
    """Format a palette as colon-separated #RRRRGGGGBBBB entries."""
    return ":".join("" if color is None else format_color(color) for color in colors)