"""Profile property specifications: types, defaults, limits and settings keys."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Optional

from .colors import (
    RGBA,
    BuiltinPalette,
    builtin_palette,
    format_color,
    format_palette,
    palette_equal,
    parse_color,
    parse_palette,
    rgba_equal,
)
from .fonts import FontDescription, parse_font

INT_MAX = 2**31 - 1


class SettingsEnum(IntEnum):
    """An enumeration stored in settings under a short lower-case nick."""

    @property
    def nick(self) -> str:
        return self.name.lower().replace("_", "-")

    @classmethod
    def from_nick(cls, nick: str) -> "SettingsEnum":
        for member in cls:
            if member.nick == nick:
                return member
        raise ValueError(f"{nick!r} is not a valid {cls.__name__} value")


class TitleMode(SettingsEnum):
    REPLACE = 0
    BEFORE = 1
    AFTER = 2
    IGNORE = 3


class ScrollbarPosition(SettingsEnum):
    LEFT = 0
    RIGHT = 1
    HIDDEN = 2


class ExitAction(SettingsEnum):
    CLOSE = 0
    RESTART = 1
    HOLD = 2


class BackgroundType(SettingsEnum):
    SOLID = 0
    IMAGE = 1
    TRANSPARENT = 2


class EraseBinding(SettingsEnum):
    AUTO = 0
    ASCII_BACKSPACE = 1
    ASCII_DELETE = 2
    DELETE_SEQUENCE = 3
    TTY = 4

    @property
    def nick(self) -> str:
        special = {"ASCII_DELETE": "ascii-del", "DELETE_SEQUENCE": "escape-sequence"}
        return special.get(self.name, super().nick)


class CursorBlinkMode(SettingsEnum):
    SYSTEM = 0
    ON = 1
    OFF = 2


class CursorShape(SettingsEnum):
    BLOCK = 0
    IBEAM = 1
    UNDERLINE = 2


class PropertyKind(Enum):
    BOOLEAN = "boolean"
    STRING = "string"
    ENUM = "enum"
    COLOR = "color"
    FONT = "font"
    DOUBLE = "double"
    INT = "int"
    PALETTE = "palette"
    IMAGE = "image"


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class PropertySpec:
    """Describes one profile property and how it maps to a settings key."""

    name: str
    kind: PropertyKind
    key: Optional[str] = None
    default: Any = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    enum_type: Optional[type] = None
    writable: bool = True
    construct_only: bool = False

    def default_value(self) -> Any:
        """Return a fresh default value for the property."""
        if self.kind is PropertyKind.COLOR:
            return parse_color(self.default)
        if self.kind is PropertyKind.FONT:
            return parse_font(self.default)
        if self.kind is PropertyKind.PALETTE:
            return builtin_palette(BuiltinPalette.TANGO)
        if self.kind is PropertyKind.ENUM:
            return self.enum_type(self.default)
        return self.default

    def _type_error(self, value: Any) -> TypeError:
        return TypeError(
            f"invalid value {value!r} for {self.kind.value} property {self.name!r}"
        )

    def validate(self, value: Any) -> Any:
        """Return value brought within the property's limits.

        Numbers are clamped and unknown enum values fall back to the default;
        a value of the wrong type raises TypeError.
        """
        kind = self.kind
        if kind is PropertyKind.BOOLEAN:
            if not isinstance(value, bool):
                raise self._type_error(value)
            return value
        if kind is PropertyKind.STRING:
            if value is not None and not isinstance(value, str):
                raise self._type_error(value)
            return value
        if kind is PropertyKind.ENUM:
            if isinstance(value, self.enum_type):
                return value
            if not _is_int(value):
                raise self._type_error(value)
            try:
                return self.enum_type(int(value))
            except ValueError:
                return self.default_value()
        if kind is PropertyKind.INT:
            if not _is_int(value):
                raise self._type_error(value)
            return int(min(self.maximum, max(self.minimum, value)))
        if kind is PropertyKind.DOUBLE:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise self._type_error(value)
            return float(min(self.maximum, max(self.minimum, value)))
        if kind is PropertyKind.COLOR:
            if value is not None and not isinstance(value, RGBA):
                raise self._type_error(value)
            return value
        if kind is PropertyKind.FONT:
            if value is not None and not isinstance(value, FontDescription):
                raise self._type_error(value)
            return value
        if kind is PropertyKind.PALETTE:
            if value is None:
                return None
            try:
                colors = tuple(value)
            except TypeError:
                raise self._type_error(value) from None
            if not all(isinstance(color, RGBA) for color in colors):
                raise self._type_error(value)
            return colors
        return value

    def values_equal(self, a: Any, b: Any) -> bool:
        """Compare two values, with tolerance for colours and palettes."""
        if self.kind is PropertyKind.IMAGE:
            return a is b
        if a == b:
            return True
        if a is None or b is None:
            return False
        if self.kind is PropertyKind.COLOR:
            return rgba_equal(a, b)
        if self.kind is PropertyKind.PALETTE:
            return palette_equal(a, b)
        return False

    def _require_key(self) -> str:
        if self.key is None:
            raise ValueError(f"property {self.name!r} is not stored in settings")
        return self.key

    def to_settings(self, value: Any) -> Any:
        """Convert a property value to its stored form; None means nothing to store."""
        self._require_key()
        kind = self.kind
        if kind is PropertyKind.BOOLEAN:
            return bool(value)
        if kind is PropertyKind.STRING:
            return "" if value is None else value
        if kind is PropertyKind.ENUM:
            return self.enum_type(value).nick
        if kind is PropertyKind.COLOR:
            return None if value is None else format_color(value)
        if kind is PropertyKind.FONT:
            return None if value is None else value.to_string()
        if kind is PropertyKind.DOUBLE:
            return float(value)
        if kind is PropertyKind.INT:
            return int(value)
        if kind is PropertyKind.PALETTE:
            return None if value is None else format_palette(value)
        raise ValueError(f"property {self.name!r} has no settings form")

    def from_settings(self, raw: Any) -> Any:
        """Convert a stored value to a property value; raise ValueError if it does not fit."""
        self._require_key()
        kind = self.kind
        mismatch = ValueError(
            f"stored value {raw!r} does not fit {kind.value} property {self.name!r}"
        )
        if kind is PropertyKind.BOOLEAN:
            if not isinstance(raw, bool):
                raise mismatch
            return raw
        if kind is PropertyKind.DOUBLE:
            if not isinstance(raw, float):
                raise mismatch
            return raw
        if kind is PropertyKind.INT:
            if not _is_int(raw):
                raise mismatch
            return raw
        if not isinstance(raw, str):
            raise mismatch
        if kind is PropertyKind.STRING:
            return raw
        if kind is PropertyKind.ENUM:
            return self.enum_type.from_nick(raw)
        if kind is PropertyKind.COLOR:
            return parse_color(raw)
        if kind is PropertyKind.FONT:
            return parse_font(raw)
        if kind is PropertyKind.PALETTE:
            return parse_palette(raw)
        raise mismatch


def _boolean(name: str, default: bool) -> PropertySpec:
    return PropertySpec(name, PropertyKind.BOOLEAN, key=name, default=default)


def _color(name: str, default: str) -> PropertySpec:
    return PropertySpec(name, PropertyKind.COLOR, key=name, default=default)


def _enum(name: str, enum_type: type, default: SettingsEnum) -> PropertySpec:
    return PropertySpec(name, PropertyKind.ENUM, key=name, default=default, enum_type=enum_type)


def _int(name: str, minimum: int, maximum: int, default: int) -> PropertySpec:
    return PropertySpec(
        name, PropertyKind.INT, key=name, default=default, minimum=minimum, maximum=maximum
    )


def _string(name: str, default: Optional[str], key: Optional[str] = None) -> PropertySpec:
    return PropertySpec(name, PropertyKind.STRING, key=key or name, default=default)


_FOREGROUND = "#000000"

_SPECS: tuple[PropertySpec, ...] = (
    _boolean("allow-bold", True),
    _boolean("bold-color-same-as-fg", True),
    _boolean("default-show-menubar", True),
    _boolean("login-shell", False),
    _boolean("scroll-background", True),
    _boolean("scrollback-unlimited", False),
    _boolean("scroll-on-keystroke", True),
    _boolean("scroll-on-output", False),
    _boolean("silent-bell", False),
    _boolean("copy-selection", False),
    _boolean("use-custom-command", False),
    _boolean("use-custom-default-size", False),
    _boolean("use-skey", True),
    _boolean("use-urls", True),
    _boolean("use-system-font", True),
    _boolean("use-theme-colors", True),
    _color("background-color", "#FFFFDD"),
    _color("bold-color", _FOREGROUND),
    PropertySpec("font", PropertyKind.FONT, key="font", default="Monospace 12"),
    _color("foreground-color", _FOREGROUND),
    PropertySpec(
        "background-darkness", PropertyKind.DOUBLE, key="background-darkness",
        default=0.5, minimum=0.0, maximum=1.0,
    ),
    _enum("background-type", BackgroundType, BackgroundType.SOLID),
    _enum("backspace-binding", EraseBinding, EraseBinding.ASCII_DELETE),
    _enum("cursor-blink-mode", CursorBlinkMode, CursorBlinkMode.SYSTEM),
    _enum("cursor-shape", CursorShape, CursorShape.BLOCK),
    _enum("delete-binding", EraseBinding, EraseBinding.DELETE_SEQUENCE),
    _enum("exit-action", ExitAction, ExitAction.CLOSE),
    _enum("scrollbar-position", ScrollbarPosition, ScrollbarPosition.RIGHT),
    _enum("title-mode", TitleMode, TitleMode.REPLACE),
    _int("default-size-columns", 1, 1024, 80),
    _int("default-size-rows", 1, 1024, 24),
    _int("scrollback-lines", 1, INT_MAX, 512),
    PropertySpec("background-image", PropertyKind.IMAGE, writable=False),
    PropertySpec("name", PropertyKind.STRING, default=None, construct_only=True),
    _string("background-image-file", "", key="background-image"),
    _string("custom-command", ""),
    _string("title", "Terminal"),
    _string("visible-name", "Unnamed"),
    _string("word-chars", "-A-Za-z0-9,./?%&#:_=+@~"),
    PropertySpec("palette", PropertyKind.PALETTE, key="palette"),
)

_BY_NAME = {spec.name: spec for spec in _SPECS}
_BY_KEY = {spec.key: spec for spec in _SPECS if spec.key is not None}


def find_spec(name: str) -> PropertySpec:
    """Return the spec of a profile property; raise KeyError for unknown names."""
    try:
        return _BY_NAME[name]
    except KeyError:
        raise KeyError(f"unknown profile property {name!r}") from None


def spec_for_key(key: str) -> Optional[PropertySpec]:
    """Return the spec stored under a settings key, or None for unknown keys."""
    return _BY_KEY.get(key)


def all_specs() -> tuple[PropertySpec, ...]:
    """Return every property spec in declaration order."""
    return _SPECS