# ludo

This package holds the parts of a retro game launcher that need no window, GPU or sound device.

## Modules

- **`ludo.notifications`** handles toast messages that expire on their own.
  - A `Notification` has a `Severity` (`INFO`, `SUCCESS`, `WARNING`, `ERROR`), a message and a duration.
  - `Notifications.display` adds a notification.
  - `Notifications.display_and_log` formats the message with `%`-style arguments. It also prints `[prefix]: message` to stderr when the collection was created with `verbose=True`.
  - `process(dt)` counts every notification down and drops the ones that have run out.
  - `Notification.update` replaces a message and restarts its lifetime.
- **`ludo.patching`** applies patches to ROM bytes.
  - `apply_ips` and `apply_ups` apply IPS and UPS patches. UPS patches are checked against their CRC32 checksums.
  - `try_patch(game_path, data)` looks for a `.ups` file, then an `.ips` file, next to the game and applies the first one it finds.
  - `try_patch` returns `None` when there is no patch file.
  - A bad patch raises `PatchError`, a `ValueError`.
- **`ludo.playlists`** reads playlists.
  - `Playlists(directory).load()` reads every tab-separated `*.csv` file (path, name, hex CRC32) in the directory. Each playlist is sorted by game name.
  - `contains` finds a game by path or by non-zero CRC32.
  - `count`, `paths` and `remove_game` work on playlists in memory.
  - `save` overwrites an existing playlist file.
  - `short_name` shortens system names, for example `"Sega - 32X"` to `"32X"`.
- **`ludo.options`** handles the options of a core.
  - A `Variable` has a fixed list of `choices`. `value()` returns the current one, and `cycle(direction)` moves through them, wrapping around.
  - `Options(variables, path)` loads saved values from a TOML file if it exists. `save()` writes them back.
  - `config_path(core_path, config_home)` gives the options file of a core, `<config_home>/ludo/<core>.toml`. `config_home` defaults to `$XDG_CONFIG_HOME` or `~/.config`.
- **`ludo.menu`** is the menu model:
  - `tweens`: `Tween`, `Tweens` and the `out_sine` easing animate attributes of objects. `Tweens.fast_forward()` finishes every animation at once.
  - `scene`: `Entry`, `Scene` and `ListScene` make up the scenes. The generic mount, animate and segue-next transitions live here too, along with `extract_tags` (which splits `"Game (Europe) (Fr,De)"` into a name and tags) and the first-letter indexes for jumping through lists.
  - `input`:
    - `Button` and `Controls` describe joypad state.
    - `Repeater` fires an action while a button is held, faster the longer it is held (see `scroll_speed`).
    - `InputHandler.generic_input` scrolls lists and handles OK, X, left/right, cancel and L/R letter jumps.
  - `menu`:
    - `Menu` holds the scene stack and the tweens, and plays effects through an optional callback.
    - `DialogScene` and `ask_confirmation` give yes/no dialogs.
  - `keyboard`: `KeyboardScene` is an on-screen keyboard with three layouts.
  - `explorer`: `build_explorer` builds a file browser scene with extension filtering, a prettifier for names, hidden-file handling and an optional "directory action" entry.
  - `screens`: `build_tabs`, `refresh_tabs`, `build_main_menu`, `build_quick_menu` and `warp_to_quick_menu` build the top-level screens.
    - An `Actions` object carries the state these screens read and change, and the hooks they call.
    - A hook that raises has its message shown as a notification.
    - In LudOS mode the Reboot and Shutdown entries run `/usr/sbin/shutdown`.

## What it does not do

The package draws nothing and plays no sound: scenes only hold positions, alphas and callbacks. It does not load or run emulation cores, take screenshots, handle savestates or scan game collections. `Actions` takes these as hooks (`load_core`, `load_game`, `reset_core`, `take_screenshot`, `scan_dir`, ...). The Settings, History, playlist, savestate, core option, disk control and updater scenes are also not part of the package. You supply them as scene factories through `Actions`. There is no command-line program.

## Installing

```
pip install .
```

## Examples

Patch a ROM:

```python
from pathlib import Path
from ludo.patching import try_patch, PatchError

rom = Path("game.sfc")
try:
    patched = try_patch(str(rom), rom.read_bytes())
except PatchError as err:
    print("bad patch:", err)
else:
    data = patched if patched is not None else rom.read_bytes()
```

Read playlists:

```python
import os
from ludo.playlists import Playlists, short_name

playlists = Playlists("playlists")
playlists.load()
for path in playlists.paths():
    system = os.path.splitext(os.path.basename(path))[0]
    print(short_name(system), playlists.count(path))
```

Notifications:

```python
from ludo.notifications import Notifications, Severity

toasts = Notifications(verbose=True)
toasts.display_and_log(Severity.INFO, "Menu", "Joypad #%d loaded with name %s.", 3, "Foo")
toasts.process(0.5)
```

## Running the tests

```
pip install .[test]
pytest
```