import pytest
from PIL import Image

from mateterm.colors import (
    RGBA,
    BuiltinPalette,
    builtin_palette,
    parse_color,
    rgba_equal,
)
from mateterm.fonts import parse_font
from mateterm.profile import PROFILE_PATH_PREFIX, Profile
from mateterm.properties import CursorShape, EraseBinding
from mateterm.settings import SettingsStore

PATH = PROFILE_PATH_PREFIX + "p/"


def make(values=None, locked=None, **kwargs):
    store = SettingsStore({PATH: values or {}}, locked)
    return Profile("p", store, **kwargs), store


def test_defaults():
    profile, _ = make()
    assert profile.path == PATH
    assert profile.get("scrollback-lines") == 512
    assert profile.get("title") == "Terminal"
    assert profile.get("visible-name") == "Unnamed"
    assert profile.get("font") == parse_font("Monospace 12")
    assert profile.get("foreground-color") == parse_color("#000000")
    assert profile.get("background-color") == parse_color("#FFFFDD")
    assert profile.get("backspace-binding") is EraseBinding.ASCII_DELETE
    assert profile.get("name") == "p"
    assert profile.builtin_palette_index() is BuiltinPalette.TANGO
    assert profile.save_pending is False


def test_loads_values_from_store():
    profile, _ = make({
        "allow-bold": False,
        "cursor-shape": "ibeam",
        "background-image": "/tmp/none.png",
        "scrollback-lines": 1000,
    })
    assert profile.get("allow-bold") is False
    assert profile.get("cursor-shape") is CursorShape.IBEAM
    assert profile.get("background-image-file") == "/tmp/none.png"
    assert profile.get("scrollback-lines") == 1000
    assert profile.save_pending is False


def test_stored_value_is_clamped():
    profile, _ = make({"default-size-columns": 5000})
    assert profile.get("default-size-columns") == 1024


def test_stored_value_of_wrong_type_is_ignored():
    profile, _ = make({"allow-bold": "yes", "cursor-shape": "triangle"})
    assert profile.get("allow-bold") is True
    assert profile.get("cursor-shape") is CursorShape.BLOCK


def test_short_stored_palette_is_padded():
    profile, _ = make({"palette": "#FFFF00000000"})
    colors = profile.palette()
    assert len(colors) == 16
    assert rgba_equal(colors[0], RGBA(1.0, 0.0, 0.0, 1.0))
    assert colors[1:] == builtin_palette(BuiltinPalette.TANGO)[1:]


def test_set_schedules_save_and_flush_writes():
    profile, store = make()
    profile.set("scrollback-lines", 2000)
    assert profile.save_pending is True
    assert profile.flush() is True
    assert store.get_value(PATH, "scrollback-lines") == 2000
    assert profile.flush() is False


def test_save_round_trips_colors_and_fonts():
    profile, store = make()
    profile.set("foreground-color", RGBA(1.0, 0.0, 0.0, 1.0))
    profile.set("font", parse_font("Sans Bold 10"))
    profile.flush()
    other = Profile("p", store)
    assert rgba_equal(other.get("foreground-color"), RGBA(1.0, 0.0, 0.0, 1.0))
    assert other.get("font") == parse_font("Sans Bold 10")


def test_external_change_is_applied_without_saving():
    profile, store = make()
    store.set_value(PATH, "title", "Hello")
    assert profile.get("title") == "Hello"
    assert profile.save_pending is False


def test_locked_keys():
    profile, store = make(locked=[(PATH, "font")])
    assert profile.is_locked("font") is True
    assert profile.is_locked("title") is False
    store.lock(PATH, "title")
    assert profile.is_locked("title") is True


def test_save_skips_locked_keys():
    profile, store = make(locked=[(PATH, "title")])
    profile.set("title", "X")
    profile.set("word-chars", "abc")
    written = profile.save()
    assert written == ("word-chars",)
    assert store.get_value(PATH, "title") is None


def test_set_errors():
    profile, _ = make()
    with pytest.raises(KeyError):
        profile.set("no-such-property", 1)
    with pytest.raises(AttributeError):
        profile.set("name", "other")
    with pytest.raises(AttributeError):
        profile.set("background-image", None)
    with pytest.raises(TypeError):
        profile.set("allow-bold", "x")


def test_set_enum_from_int_and_clamp():
    profile, _ = make()
    profile.set("cursor-shape", 1)
    profile.set("background-darkness", 3.0)
    assert profile.get("cursor-shape") is CursorShape.IBEAM
    assert profile.get("background-darkness") == 1.0


def test_reset_restores_default():
    profile, _ = make()
    profile.set("title", "Changed")
    profile.reset("title")
    assert profile.get("title") == "Terminal"
    profile.set("palette", builtin_palette(BuiltinPalette.LINUX))
    profile.reset("palette")
    assert profile.builtin_palette_index() is BuiltinPalette.TANGO


def test_notify_listeners():
    profile, _ = make()
    seen = []
    profile.connect("notify", lambda p, name: seen.append(name))
    profile.set("background-image-file", "")
    assert seen == ["background-image", "background-image-file"]
    with pytest.raises(ValueError):
        profile.connect("bogus", lambda p: None)


def test_forget_emits_once():
    profile, _ = make()
    calls = []
    profile.connect("forgotten", lambda p: calls.append(p))
    profile.forget()
    profile.forget()
    assert calls == [profile]
    assert profile.forgotten is True


def test_close_saves_and_stops_following_store():
    profile, store = make()
    profile.set("title", "Kept")
    profile.close()
    assert store.get_value(PATH, "title") == "Kept"
    assert profile.forgotten is True
    store.set_value(PATH, "title", "Later")
    assert profile.get("title") == "Kept"


def test_context_manager_closes():
    store = SettingsStore()
    with Profile("p", store) as profile:
        profile.set("word-chars", "xyz")
    assert store.get_value(PATH, "word-chars") == "xyz"
    assert profile.forgotten is True


def test_construct_kwargs():
    profile, store = make(scrollback_lines=100)
    assert profile.get("scrollback-lines") == 100
    assert profile.save_pending is True
    profile.flush()
    assert store.get_value(PATH, "scrollback-lines") == 100


def test_construct_kwargs_take_precedence_over_store():
    profile, _ = make({"title": "Stored"}, title="Given")
    assert profile.get("title") == "Given"


def test_construct_errors():
    with pytest.raises(TypeError):
        Profile(None, SettingsStore())
    with pytest.raises(KeyError):
        Profile("p", SettingsStore(), no_such_thing=1)


def test_clone():
    profile, store = make()
    profile.set("title", "Custom")
    copy = profile.clone("Copy", lambda name: name in {"profile0"})
    assert copy.name == "profile1"
    assert copy.get("visible-name") == "Copy"
    assert copy.get("title") == "Custom"
    assert copy.save_pending is False
    assert store.get_value(copy.path, "visible-name") == "Copy"
    assert store.get_value(copy.path, "title") == "Custom"
    assert profile.get("visible-name") == "Unnamed"


def test_palette_slice():
    profile, _ = make()
    assert profile.palette(4) == builtin_palette(BuiltinPalette.TANGO)[:4]


def test_set_palette_builtin():
    profile, _ = make()
    profile.set_palette_builtin(BuiltinPalette.XTERM)
    assert profile.builtin_palette_index() is BuiltinPalette.XTERM
    assert profile.palette() == builtin_palette(BuiltinPalette.XTERM)
    with pytest.raises(ValueError):
        profile.set_palette_builtin(5)


def test_modify_palette_entry():
    profile, _ = make()
    seen = []
    profile.connect("notify", lambda p, name: seen.append(name))
    red = RGBA(1.0, 0.0, 0.0, 1.0)
    assert profile.modify_palette_entry(0, red) is True
    assert profile.palette()[0] == red
    assert profile.builtin_palette_index() is None
    assert seen == ["palette"]
    assert profile.save_pending is True
    assert profile.modify_palette_entry(16, red) is False
    assert profile.modify_palette_entry(-1, red) is False


def test_modify_palette_entry_same_color_does_not_notify():
    profile, _ = make()
    seen = []
    profile.connect("notify", lambda p, name: seen.append(name))
    first = builtin_palette(BuiltinPalette.TANGO)[0]
    assert profile.modify_palette_entry(0, first) is True
    assert seen == []


def test_background_image(tmp_path):
    image_path = tmp_path / "bg.png"
    Image.new("RGB", (2, 3)).save(image_path)
    profile, _ = make()
    assert profile.background_image() is None
    profile.set("background-image-file", str(image_path))
    loaded = profile.get("background-image")
    assert loaded.size == (2, 3)
    assert profile.background_image() is loaded


def test_background_image_missing_file(tmp_path):
    profile, _ = make()
    profile.set("background-image-file", str(tmp_path / "missing.png"))
    assert profile.background_image() is None
    image_path = tmp_path / "ok.png"
    Image.new("RGB", (4, 1)).save(image_path)
    profile.set("background-image-file", str(image_path))
    assert profile.background_image().size == (4, 1)