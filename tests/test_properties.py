import pytest

from mateterm.colors import RGBA, BuiltinPalette, builtin_palette, palette_equal, parse_color
from mateterm.fonts import parse_font
from mateterm.properties import (
    BackgroundType,
    CursorBlinkMode,
    EraseBinding,
    PropertyKind,
    TitleMode,
    all_specs,
    find_spec,
    spec_for_key,
)


def test_find_spec_unknown_raises():
    with pytest.raises(KeyError):
        find_spec("no-such-property")


def test_background_image_file_uses_background_image_key():
    spec = find_spec("background-image-file")
    assert spec.key == "background-image"
    assert spec_for_key("background-image") is spec


def test_spec_for_unknown_key_is_none():
    assert spec_for_key("future-key") is None


def test_names_and_keys_unique():
    specs = all_specs()
    names = [spec.name for spec in specs]
    keys = [spec.key for spec in specs if spec.key is not None]
    assert len(names) == len(set(names))
    assert len(keys) == len(set(keys))
    assert all(find_spec(name) is spec for name, spec in zip(names, specs))


def test_unsaved_properties():
    name = find_spec("name")
    image = find_spec("background-image")
    assert name.key is None and name.construct_only
    assert image.key is None and not image.writable


@pytest.mark.parametrize(
    "name, expected",
    [
        ("default-size-columns", 80),
        ("default-size-rows", 24),
        ("scrollback-lines", 512),
        ("title", "Terminal"),
        ("visible-name", "Unnamed"),
        ("word-chars", "-A-Za-z0-9,./?%&#:_=+@~"),
        ("background-darkness", 0.5),
        ("background-type", BackgroundType.SOLID),
        ("backspace-binding", EraseBinding.ASCII_DELETE),
        ("delete-binding", EraseBinding.DELETE_SEQUENCE),
        ("cursor-blink-mode", CursorBlinkMode.SYSTEM),
        ("allow-bold", True),
        ("login-shell", False),
    ],
)
def test_simple_defaults(name, expected):
    assert find_spec(name).default_value() == expected


def test_boxed_defaults():
    assert find_spec("background-color").default_value() == parse_color("#FFFFDD")
    assert find_spec("foreground-color").default_value() == parse_color("#000000")
    assert find_spec("font").default_value() == parse_font("Monospace 12")
    assert palette_equal(
        find_spec("palette").default_value(), builtin_palette(BuiltinPalette.TANGO)
    )


def test_int_validation_clamps():
    spec = find_spec("default-size-columns")
    assert spec.validate(5000) == 1024
    assert spec.validate(0) == 1
    assert spec.validate(100) == 100


def test_double_validation_clamps():
    spec = find_spec("background-darkness")
    assert spec.validate(2.0) == 1.0
    assert spec.validate(-1) == 0.0


def test_enum_validation_falls_back_to_default():
    spec = find_spec("title-mode")
    assert spec.validate(99) == TitleMode.REPLACE
    assert spec.validate(TitleMode.AFTER) is TitleMode.AFTER


@pytest.mark.parametrize(
    "name, value",
    [("allow-bold", 1), ("title", 3), ("default-size-rows", "10"), ("font", "Sans 10")],
)
def test_wrong_type_rejected(name, value):
    with pytest.raises(TypeError):
        find_spec(name).validate(value)


def test_palette_validation_makes_tuple():
    colors = [RGBA(0.1, 0.2, 0.3)]
    assert find_spec("palette").validate(colors) == (RGBA(0.1, 0.2, 0.3),)
    with pytest.raises(TypeError):
        find_spec("palette").validate(["#000000"])


def test_color_values_equal_with_tolerance():
    spec = find_spec("foreground-color")
    assert spec.values_equal(RGBA(0.5, 0.5, 0.5), RGBA(0.501, 0.5, 0.5))
    assert not spec.values_equal(RGBA(0.5, 0.5, 0.5), RGBA(0.6, 0.5, 0.5))
    assert not spec.values_equal(RGBA(0.5, 0.5, 0.5), None)


def test_color_to_settings_format():
    spec = find_spec("background-color")
    assert spec.to_settings(spec.default_value()) == "#FFFFFFFFDDDD"
    assert spec.to_settings(None) is None


def test_string_none_stored_empty():
    assert find_spec("custom-command").to_settings(None) == ""


@pytest.mark.parametrize(
    "name, value",
    [
        ("allow-bold", False),
        ("title", "Work"),
        ("default-size-rows", 40),
        ("background-darkness", 0.25),
        ("title-mode", TitleMode.AFTER),
        ("backspace-binding", EraseBinding.ASCII_DELETE),
        ("delete-binding", EraseBinding.DELETE_SEQUENCE),
    ],
)
def test_round_trip(name, value):
    spec = find_spec(name)
    assert spec.from_settings(spec.to_settings(value)) == value


def test_color_round_trip():
    spec = find_spec("bold-color")
    color = RGBA(0.2, 0.4, 0.6)
    assert spec.values_equal(spec.from_settings(spec.to_settings(color)), color)


def test_font_round_trip():
    spec = find_spec("font")
    font = parse_font("Sans Bold 10")
    assert spec.from_settings(spec.to_settings(font)) == font


def test_palette_round_trip():
    spec = find_spec("palette")
    palette = builtin_palette(BuiltinPalette.XTERM)
    assert palette_equal(spec.from_settings(spec.to_settings(palette)), palette)


def test_short_palette_filled_from_default():
    spec = find_spec("palette")
    palette = spec.from_settings("#000000")
    tango = builtin_palette(BuiltinPalette.TANGO)
    assert len(palette) == len(tango)
    assert palette_equal(palette[1:], tango[1:])


@pytest.mark.parametrize(
    "name, raw",
    [
        ("allow-bold", "true"),
        ("default-size-rows", 4.0),
        ("background-darkness", 1),
        ("title", 5),
        ("title-mode", "sideways"),
        ("foreground-color", "#12"),
    ],
)
def test_from_settings_mismatch(name, raw):
    with pytest.raises(ValueError):
        find_spec(name).from_settings(raw)


def test_unsaved_property_has_no_settings_form():
    with pytest.raises(ValueError):
        find_spec("name").to_settings("x")


def test_every_saved_spec_has_kind():
    kinds = {spec.kind for spec in all_specs() if spec.key is not None}
    assert PropertyKind.IMAGE not in kinds