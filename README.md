# fluentkit

The non-visual parts of a Fluent-style desktop UI toolkit, in plain Python
with no third-party dependencies. It can sit under any GUI framework, or
none.

## Modules

- `fluentkit.colors`: `Color`, an immutable 8-bit RGBA value with `rgba()`
  (packed `0xAARRGGBB`) and `Color.from_rgba()`. `AccentColor` holds seven
  shades, `darkest` to `lightest`. `Colors` is the standard palette:
  `transparent`, `black`, `white`, `grey10` to `grey220`, and the accent ramps
  `yellow`, `orange`, `red`, `magenta`, `purple`, `blue`, `teal` and `green`.
  `Colors.create_accent_color` derives a ramp from one colour by lowering its
  opacity step by step; `with_opacity` returns a colour with a new alpha.
- `fluentkit.theme`: `Theme` with `dark_mode` (`DarkMode.SYSTEM`, `LIGHT`,
  `DARK`), `accent_color` and a read-only `dark` flag. Setting either
  recomputes the derived colours (`primary_color`, `background_color`,
  `divider_color`, `font_primary_color`, `item_hover_color` and the rest)
  through `refresh_colors`. `handle_palette_change` takes the system window
  colour and decides, with `is_dark_color`, whether the system is dark.
  When `blur_behind_window_enabled` is on, `update_desktop_image` refreshes
  `desktop_image_path` from a wallpaper provider.
- `fluentkit.textstyle`: `TextStyle` holds the fonts `caption`, `body`,
  `body_strong`, `subtitle`, `title`, `title_large` and `display`, each a
  `Font` (family, pixel size, `FontWeight`) sharing one family.
- `fluentkit.tablemodel`: `TableModel`, rows as dicts and columns described by
  `column_source`. It has `get_row`, `set_row`, `insert_row`, `remove_row`,
  `append_row`, `clear`, `data` with `Role`, and `subscribe` for change
  notifications `("reset" | "inserted" | "removed" | "changed", first, last)`.
  Bad indices raise `IndexError`.
- `fluentkit.sortproxy`: `SortProxyModel`, a filtered and sorted view over a
  `TableModel`. `set_filter` takes a function of a source row index,
  `set_comparator` a function of two source row indices; each call to
  `set_comparator` flips the `SortOrder`. `map_to_source`, `get_row`,
  `set_row`, `insert_row` and `remove_row` work through the view.
- `fluentkit.treemodel`: `TreeModel` builds a tree of `TreeNode`s from nested
  dicts (`set_data_source`, children under `"children"`) and keeps the list of
  visible rows, with `expand`, `collapse`, `all_expand`, `all_collapse`,
  `check_row` and `selection_model`.
- `fluentkit.captcha`: `Captcha`, a random four-character code of digits and
  letters, with `refresh`, `verify` and optional `ignore_case`.
- `fluentkit.hotkey`: `KeySequence.parse` ("Ctrl+Shift+A", "Ctrl+A, Ctrl+B"),
  `Modifier`, `NativeShortcut`, a `HotkeyBackend` to translate and grab
  shortcuts, a `HotkeyManager` that tracks registrations and dispatches
  `activate_shortcut` / `release_shortcut` to them, and `Hotkey` and
  `SequenceHotkey` objects with `on_activated`, `on_released` and
  `on_registered_changed` callbacks.
- `fluentkit.tools`: `md5`, `sha256`, `to_base64`, `from_base64`, `uuid`,
  `read_file`, `remove_file`, `remove_dir`, `to_local_path`,
  `get_file_name_by_url`, `get_url_by_file_path`, `html_to_plain_text`,
  `current_timestamp`, `get_application_dir_path`, `is_win`, `is_linux`,
  `is_macos`, `window_build_number`, `is_windows10_or_greater`,
  `is_windows11_or_greater`, `show_file_in_folder`, `get_wallpaper_file_path`
  and `image_main_color`.

## Example

```python
from fluentkit.colors import Colors, with_opacity
from fluentkit.theme import DarkMode, Theme
from fluentkit.tablemodel import TableModel
from fluentkit.captcha import Captcha

palette = Colors()
accent = palette.create_accent_color(palette.blue.normal)
faded = with_opacity(accent.normal, 0.5)

theme = Theme()
theme.dark_mode = DarkMode.DARK
print(theme.dark, theme.primary_color)

model = TableModel()
model.append_row({"name": "alpha"})
model.insert_row(0, {"name": "beta"})
print(model.get_row(0))

captcha = Captcha(ignore_case=True)
print(captcha.verify(captcha.code.lower()))
```

## What it does not do

- It draws nothing: there are no widgets, windows or painting. Colours, fonts
  and models are data for a GUI framework to render.
- The default `HotkeyBackend` works in-process only: it records grabs and maps
  keys to codes, but does not hook the operating system's keyboard. To receive
  real key presses, subclass it for your platform and feed events to
  `HotkeyManager.activate_shortcut` and `release_shortcut`.

## Running the tests

```
pip install ".[test]"
pytest
```