# mateterm

A self-contained model of terminal emulator profiles. Every profile
setting is a typed property with a default, limits and a settings form.
The package also has the built-in colour palettes, font descriptions, and
an in-memory settings store that profiles load from and save to.

## Install

```
pip install mateterm
```

## Modules

- `mateterm.colors`
  - `RGBA`: a frozen colour with channels from 0 to 1.
  - `parse_color` reads `#rgb`, `#rrggbb`, `#rrrgggbbb` and `#rrrrggggbbbb`
    forms, `rgb(...)` and `rgba(...)`, and colour names. It raises
    `ValueError` for anything else.
  - `format_color` writes the `#RRRRGGGGBBBB` form.
  - `rgba_equal` and `palette_equal` compare with a small tolerance.
  - `BuiltinPalette` lists the built-in palettes: Tango, Linux, XTerm,
    RXVT and Solarized. `builtin_palette` returns one of them.
  - `fill_palette` pads a palette to 16 entries from Tango.
  - `parse_palette` and `format_palette` convert the colon-separated
    settings string. In `parse_palette`, an entry that cannot be parsed
    becomes transparent black.
- `mateterm.fonts`
  - `FontDescription` holds a family, style, variant, weight, stretch and
    size. `to_string()` writes a description back in the form that
    `parse_font` reads.
  - `parse_font` reads strings such as `"Monospace 12"` or
    `"Sans Bold Italic 10px"`.
- `mateterm.properties`
  - The enums `TitleMode`, `ScrollbarPosition`, `ExitAction`,
    `BackgroundType`, `EraseBinding`, `CursorBlinkMode` and `CursorShape`.
    In settings they are stored as lower-case nicks.
  - `PropertyKind` and `PropertySpec`. Each spec has `default_value()`,
    `validate()`, `values_equal()`, `to_settings()` and `from_settings()`.
    `validate()` clamps numbers, sends unknown enum values back to the
    default, and raises `TypeError` for a value of the wrong type.
  - Look specs up with `find_spec` (by property name), `spec_for_key` (by
    settings key) or `all_specs`.
- `mateterm.settings`
  - `SettingsStore` keeps values by path and key. Keys can be locked.
    Callbacks are connected per path and receive the changed key.
  - `Changeset` collects writes and applies them together. It skips locked
    keys and can be used as a context manager.
- `mateterm.profile`
  - `Profile` ties the other modules together.

## Example

```python
from mateterm.colors import BuiltinPalette, parse_color
from mateterm.profile import Profile
from mateterm.settings import SettingsStore

store = SettingsStore()
profile = Profile("default", store)

profile.get("scrollback-lines")          # 512
profile.set("scrollback-lines", 2000)
profile.flush()                          # write pending changes to the store
store.get_value(profile.path, "scrollback-lines")   # 2000

profile.set_palette_builtin(BuiltinPalette.SOLARIZED)
profile.builtin_palette_index()          # BuiltinPalette.SOLARIZED
profile.modify_palette_entry(0, parse_color("#ff0000"))   # True

copy = profile.clone("My copy", name_taken=lambda name: name == "profile0")
copy.get("name")                         # "profile1"
```

## How a profile behaves

### Storage

A profile is stored under the path `/profiles/<name>/`. When it is
created, it loads every stored key that was not given as a keyword
argument. After that, it follows changes made in the store:

- A stored value that does not fit the property is ignored.
- A stored value outside the property's limits is clamped.
- A key locked in the store makes `is_locked()` return true for its
  property.

### Saving changes

- Changes made with `set`, `reset` or `modify_palette_entry` are
  remembered.
- `flush()` writes them together, but only if a save is pending.
- `save()` writes them unconditionally.
- `close()` stops following the store, writes anything still pending and
  forgets the profile.

### Signals

`connect("notify", callback)` registers `callback(profile, name)`, which
is called for every property change. `connect("forgotten", callback)`
registers `callback(profile)`, which is called once, when the profile is
forgotten.

### Cloning

`clone(visible_name, name_taken)` does three things:

- picks the first `profileN` name for which `name_taken` returns false;
- copies every writable property;
- writes the new profile to the same store.

### Background image

`background_image()` loads the file named by the `background-image-file`
property with Pillow. That property is stored under the settings key
`background-image`. The loaded image is cached, and a failed load is
remembered until the file name changes.

## What it does not do

- It draws nothing and runs no terminal. It has no windows, screens,
  scrollbars or shell processes.
- `SettingsStore` keeps everything in memory. Nothing is read from or
  written to disk or a system settings service.
- There is no command-line program.