"""Terminal profiles: typed properties backed by a settings store."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from PIL import Image

from .colors import (
    PALETTE_SIZE,
    RGBA,
    BuiltinPalette,
    builtin_palette,
    fill_palette,
    palette_equal,
    rgba_equal,
)
from .properties import PropertySpec, all_specs, find_spec, spec_for_key
from .settings import SettingsStore

PROFILE_PATH_PREFIX = "/profiles/"

_log = logging.getLogger(__name__)

_SIGNALS = ("notify", "forgotten")


class Profile:
    """A named set of terminal settings kept in sync with a SettingsStore.

    Changes made through ``set`` are scheduled for saving and written by
    ``flush`` (or ``save``); changes made in the store are picked up at once.
    Listeners connected to "notify" are called as ``callback(profile, name)``,
    listeners connected to "forgotten" as ``callback(profile)``.
    """

    def __init__(self, name: str, store: SettingsStore, **kwargs: Any) -> None:
        if not isinstance(name, str):
            raise TypeError("profile name must be a string")
        self._store = store
        self._name = name
        self._path = f"{PROFILE_PATH_PREFIX}{name}/"
        self._values: dict[str, Any] = {spec.name: spec.default_value() for spec in all_specs()}
        self._values["name"] = name
        self._locked: dict[str, bool] = {}
        self._dirty: list[PropertySpec] = []
        self._save_pending = False
        self._settings_spec: Optional[PropertySpec] = None
        self._image: Optional[Image.Image] = None
        self._image_failed = False
        self._forgotten = False
        self._closed = False
        self._handlers: dict[str, list[Callable[..., None]]] = {s: [] for s in _SIGNALS}

        constructed = set()
        for argument, value in kwargs.items():
            spec = find_spec(argument.replace("_", "-"))
            if not spec.writable or spec.construct_only:
                raise AttributeError(f"property {spec.name!r} cannot be given here")
            constructed.add(spec.name)
            self._set_internal(spec, value)

        self._store.connect(self._path, self._on_settings_changed)
        for spec in all_specs():
            if (
                spec.key is None
                or not spec.writable
                or spec.construct_only
                or spec.name in constructed
            ):
                continue
            self._on_settings_changed(spec.key)

    @property
    def name(self) -> str:
        return self._name

    @property
    def path(self) -> str:
        """The settings path the profile is stored under."""
        return self._path

    @property
    def save_pending(self) -> bool:
        return self._save_pending

    @property
    def forgotten(self) -> bool:
        return self._forgotten

    def get(self, prop_name: str) -> Any:
        """Return a property value; raise KeyError for unknown properties."""
        spec = find_spec(prop_name)
        if spec.name == "background-image":
            return self.background_image()
        return self._values[spec.name]

    def set(self, prop_name: str, value: Any) -> None:
        """Set a property, notify listeners and schedule a save."""
        spec = find_spec(prop_name)
        if not spec.writable:
            raise AttributeError(f"property {spec.name!r} is read-only")
        if spec.construct_only:
            raise AttributeError(f"property {spec.name!r} can only be set at construction")
        self._set_internal(spec, value)

    def is_locked(self, prop_name: str) -> bool:
        """Whether the settings key behind a property is read-only."""
        spec = find_spec(prop_name)
        return self._locked.get(spec.name, False)

    def reset(self, prop_name: str) -> None:
        """Restore a property to its default value."""
        spec = find_spec(prop_name)
        if not spec.writable or spec.construct_only:
            return
        self._set_internal(spec, spec.default_value())

    def background_image(self) -> Optional[Image.Image]:
        """Load the background image file once; None if unset or unreadable."""
        if self._image is not None:
            return self._image
        if self._image_failed:
            return None
        path = self._values["background-image-file"]
        if not path:
            self._image_failed = True
            return None
        try:
            with Image.open(path) as opened:
                self._image = opened.copy()
        except (OSError, ValueError) as error:
            _log.debug("Failed to load image %r: %s", path, error)
            self._image_failed = True
            return None
        return self._image

    def connect(self, signal: str, callback: Callable[..., None]) -> None:
        """Register a listener for "notify" or "forgotten"."""
        if signal not in self._handlers:
            raise ValueError(f"unknown signal {signal!r}")
        self._handlers[signal].append(callback)

    def forget(self) -> None:
        """Mark the profile as forgotten, telling listeners the first time."""
        if self._forgotten:
            return
        self._forgotten = True
        for callback in list(self._handlers["forgotten"]):
            callback(self)

    def save(self) -> tuple[str, ...]:
        """Write every changed property to the store; return the keys written."""
        self._save_pending = False
        dirty, self._dirty = self._dirty, []
        changes = self._store.changeset(self._path)
        for spec in dirty:
            if not spec.writable or spec.key is None:
                continue
            stored = spec.to_settings(self._values[spec.name])
            if stored is None:
                continue
            changes.set(spec.key, stored)
        return changes.apply()

    def flush(self) -> bool:
        """Run a scheduled save, if any; return whether one ran."""
        if not self._save_pending:
            return False
        self.save()
        return True

    def close(self) -> None:
        """Stop following the store, write pending changes and forget the profile."""
        if self._closed:
            return
        self._closed = True
        self._store.disconnect(self._path, self._on_settings_changed)
        if self._save_pending:
            self.save()
        self.forget()

    def __enter__(self) -> "Profile":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def clone(self, visible_name: Optional[str], name_taken: Callable[[str], bool]) -> "Profile":
        """Copy this profile under the first free "profileN" name and store it."""
        number = 0
        while name_taken(f"profile{number}"):
            number += 1
        new_name = f"profile{number}"

        values = {}
        for spec in all_specs():
            if not spec.writable or spec.construct_only:
                continue
            value = visible_name if spec.name == "visible-name" else self._values[spec.name]
            values[spec.name.replace("-", "_")] = value

        copy = Profile(new_name, self._store, **values)
        copy._dirty = [spec for spec in all_specs() if spec.writable]
        copy._save_pending = False
        copy.save()
        return copy

    def palette(self, max_colors: Optional[int] = None) -> Optional[tuple[RGBA, ...]]:
        """Return up to max_colors palette entries, or None if there is no palette."""
        colors = self._values["palette"]
        if colors is None:
            return None
        if max_colors is None:
            return tuple(colors)
        return tuple(colors[:max_colors])

    def builtin_palette_index(self) -> Optional[BuiltinPalette]:
        """Return the built-in palette the current palette matches, if any."""
        colors = self.palette(PALETTE_SIZE)
        if colors is None or len(colors) != PALETTE_SIZE:
            return None
        for which in BuiltinPalette:
            if palette_equal(colors, builtin_palette(which)):
                return which
        return None

    def set_palette_builtin(self, which: int) -> None:
        """Replace the palette with one of the built-in palettes."""
        self.set("palette", fill_palette(builtin_palette(which)))

    def modify_palette_entry(self, index: int, color: RGBA) -> bool:
        """Change one palette entry; return False if there is no such entry."""
        if not isinstance(color, RGBA):
            raise TypeError(f"invalid palette colour {color!r}")
        colors = self._values["palette"]
        if colors is None or index < 0 or index >= len(colors):
            return False
        if not rgba_equal(colors[index], color):
            self._values["palette"] = colors[:index] + (color,) + colors[index + 1:]
            self._notify(find_spec("palette"))
        return True

    def _set_internal(self, spec: PropertySpec, value: Any) -> None:
        self._values[spec.name] = spec.validate(value)
        if spec.name == "background-image-file":
            self._image = None
            self._image_failed = False
            self._notify(find_spec("background-image"))
        self._notify(spec)

    def _notify(self, spec: PropertySpec) -> None:
        for callback in list(self._handlers["notify"]):
            callback(self, spec.name)
        if spec.writable and spec.key is not None and spec is not self._settings_spec:
            self._schedule_save(spec)

    def _schedule_save(self, spec: PropertySpec) -> None:
        if spec not in self._dirty:
            self._dirty.append(spec)
        self._save_pending = True

    def _on_settings_changed(self, key: str) -> None:
        spec = spec_for_key(key)
        if spec is None:
            return
        self._locked[spec.name] = not self._store.is_writable(self._path, key)
        raw = self._store.get_value(self._path, key)
        if raw is None:
            return
        try:
            value = spec.from_settings(raw)
            validated = spec.validate(value)
        except (ValueError, TypeError) as error:
            _log.debug("Ignoring stored value for %s: %s", key, error)
            return
        force_set = validated != value
        if force_set:
            _log.debug("Stored value for %s adjusted to fit %s", key, spec.name)
        if force_set or not spec.values_equal(validated, self._values[spec.name]):
            self._settings_spec = spec
            try:
                self._set_internal(spec, validated)
            finally:
                self._settings_spec = None