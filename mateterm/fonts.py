"""Font descriptions in the "Family Style-Options Size" string form."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Union


class Style(Enum):
    NORMAL = "Normal"
    OBLIQUE = "Oblique"
    ITALIC = "Italic"


class Variant(Enum):
    NORMAL = "Normal"
    SMALL_CAPS = "Small-Caps"


class Weight(IntEnum):
    THIN = 100
    ULTRA_LIGHT = 200
    LIGHT = 300
    SEMI_LIGHT = 350
    BOOK = 380
    NORMAL = 400
    MEDIUM = 500
    SEMI_BOLD = 600
    BOLD = 700
    ULTRA_BOLD = 800
    HEAVY = 900
    ULTRA_HEAVY = 1000


class Stretch(Enum):
    ULTRA_CONDENSED = "Ultra-Condensed"
    EXTRA_CONDENSED = "Extra-Condensed"
    CONDENSED = "Condensed"
    SEMI_CONDENSED = "Semi-Condensed"
    NORMAL = "Normal"
    SEMI_EXPANDED = "Semi-Expanded"
    EXPANDED = "Expanded"
    EXTRA_EXPANDED = "Extra-Expanded"
    ULTRA_EXPANDED = "Ultra-Expanded"


_WEIGHT_NAMES = {
    Weight.THIN: "Thin",
    Weight.ULTRA_LIGHT: "Ultra-Light",
    Weight.LIGHT: "Light",
    Weight.SEMI_LIGHT: "Semi-Light",
    Weight.BOOK: "Book",
    Weight.MEDIUM: "Medium",
    Weight.SEMI_BOLD: "Semi-Bold",
    Weight.BOLD: "Bold",
    Weight.ULTRA_BOLD: "Ultra-Bold",
    Weight.HEAVY: "Heavy",
    Weight.ULTRA_HEAVY: "Ultra-Heavy",
}

_WEIGHT_ALIASES = {
    "Extra-Light": Weight.ULTRA_LIGHT,
    "Demi-Light": Weight.SEMI_LIGHT,
    "Regular": Weight.NORMAL,
    "Demi-Bold": Weight.SEMI_BOLD,
    "Extra-Bold": Weight.ULTRA_BOLD,
    "Black": Weight.HEAVY,
    "Extra-Heavy": Weight.ULTRA_HEAVY,
}


def _key(word: str) -> str:
    return word.replace("-", "").lower()


FieldValue = Union[Style, Variant, Weight, Stretch, None]

_FIELDS: dict[str, tuple[str, FieldValue]] = {"normal": ("normal", None)}
for _weight, _name in _WEIGHT_NAMES.items():
    _FIELDS[_key(_name)] = ("weight", _weight)
for _name, _weight in _WEIGHT_ALIASES.items():
    _FIELDS[_key(_name)] = ("weight", _weight)
for _style in (Style.OBLIQUE, Style.ITALIC):
    _FIELDS[_key(_style.value)] = ("style", _style)
_FIELDS[_key(Variant.SMALL_CAPS.value)] = ("variant", Variant.SMALL_CAPS)
for _stretch in Stretch:
    if _stretch is not Stretch.NORMAL:
        _FIELDS[_key(_stretch.value)] = ("stretch", _stretch)

_SIZE_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(px)?", re.IGNORECASE)
_LAST_WORD_RE = re.compile(r"[^\s,]+$")
_MAX_SIZE = 1_000_000


def _last_word(text: str) -> tuple[str, str]:
    text = text.rstrip()
    match = _LAST_WORD_RE.search(text)
    if not match:
        return text, ""
    return text[:match.start()], match.group()


def _parse_size(word: str) -> Optional[tuple[float, bool]]:
    match = _SIZE_RE.fullmatch(word)
    if not match:
        return None
    size = float(match.group(1))
    if size > _MAX_SIZE:
        return None
    return size, match.group(2) is not None


def _format_size(size: float) -> str:
    text = repr(float(size))
    return text[:-2] if text.endswith(".0") else text


@dataclass(frozen=True)
class FontDescription:
    """A font family with style options and an optional size in points or pixels."""

    family: Optional[str] = None
    style: Style = Style.NORMAL
    variant: Variant = Variant.NORMAL
    weight: Weight = Weight.NORMAL
    stretch: Stretch = Stretch.NORMAL
    size: Optional[float] = None
    absolute_size: bool = False

    def to_string(self) -> str:
        """Render the description in the form parse_font reads back."""
        parts = []
        if self.family:
            _, last = _last_word(self.family)
            needs_comma = bool(last) and (
                _key(last) in _FIELDS or _parse_size(last) is not None
            )
            parts.append(self.family + ("," if needs_comma else ""))
        if self.weight is not Weight.NORMAL:
            parts.append(_WEIGHT_NAMES[self.weight])
        if self.style is not Style.NORMAL:
            parts.append(self.style.value)
        if self.stretch is not Stretch.NORMAL:
            parts.append(self.stretch.value)
        if self.variant is not Variant.NORMAL:
            parts.append(self.variant.value)
        if not parts:
            parts.append("Normal")
        if self.size is not None:
            parts.append(_format_size(self.size) + ("px" if self.absolute_size else ""))
        return " ".join(parts)

    def __str__(self) -> str:
        return self.to_string()


def parse_font(text: str) -> FontDescription:
    """Parse a description such as "Monospace 12" or "Sans Bold Italic 10"."""
    rest = text.strip()
    size: Optional[float] = None
    absolute = False

    head, word = _last_word(rest)
    if word:
        parsed = _parse_size(word)
        if parsed is not None:
            size, absolute = parsed
            rest = head

    fields: dict[str, FieldValue] = {}
    while True:
        head, word = _last_word(rest)
        if not word:
            break
        field = _FIELDS.get(_key(word))
        if field is None:
            break
        kind, value = field
        if kind != "normal":
            fields[kind] = value
        rest = head

    rest = rest.rstrip()
    if rest.endswith(","):
        rest = rest[:-1]
    family = rest.strip() or None

    return FontDescription(
        family=family,
        style=fields.get("style", Style.NORMAL),
        variant=fields.get("variant", Variant.NORMAL),
        weight=fields.get("weight", Weight.NORMAL),
        stretch=fields.get("stretch", Stretch.NORMAL),
        size=size,
        absolute_size=absolute,
    )