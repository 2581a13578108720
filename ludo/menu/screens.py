"""The top-level screens: the tabs, the main menu and the quick menu."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass, field
from typing import Callable, Optional

from ludo.menu.explorer import build_explorer
from ludo.menu.input import Button, Controls
from ludo.menu.menu import Menu, ask_confirmation
from ludo.menu.scene import Entry, ListScene, Scene
from ludo.notifications import Notifications, Severity
from ludo.playlists import Playlists, short_name

SceneFactory = Callable[[Menu], Scene]

_DURATION = 0.15
_TAB_STEP = 128
_SLIDE = 680
_MARGIN = 1360
_CORE_EXTENSIONS = [".dll", ".dylib", ".so"]

_PRETTY_CORE_NAMES = {
    "atari800_libretro": "Atari 800 (Atari 5200)",
    "bluemsx_libretro": "BlueMSX (MSX)",
    "fbneo_libretro": "FBNeo (Arcade)",
    "fceumm_libretro": "Fceumm (NES)",
    "gambatte_libretro": "Gambatte (Game Boy)",
    "genesis_plus_gx_libretro": "Genesis Plus GX (Genesis, Master System, Sega CD)",
    "handy_libretro": "Handy (Atari Lynx)",
    "lutro_libretro": "Lutro (LÖVE)",
    "mednafen_ngp_libretro": "Beetle NeoGeo Pocket",
    "mednafen_pce_fast_libretro": "Beetle PC-Engine Fast",
    "mednafen_pce_libretro": "Beetle PC-Engine",
    "mednafen_pcfx_libretro": "Beetle PC-FX",
    "mednafen_psx_libretro": "Beetle PlayStation",
    "mednafen_saturn_libretro": "Beetle Saturn",
    "mednafen_supergrafx_libretro": "Beetle SuperGrafx",
    "mednafen_vb_libretro": "Beetle VirtualBoy",
    "mednafen_wswan_libretro": "Beetle WonderSwan",
    "melonds_libretro": "MelonDS (Nintendo DS)",
    "mgba_libretro": "mGBA (Game Boy Advance)",
    "np2kai_libretro": "NP2Kai (PC-98)",
    "o2em_libretro": "O2EM (Odyssey²)",
    "pcsx_rearmed_libretro": "PCSX Rearmed (PLayStation)",
    "picodrive_libretro": "PicoDrive (Genesis, 32X)",
    "pokemini_libretro": "PokeMini (Pokemon Mini)",
    "prosystem_libretro": "Prosystem (Atari 7800)",
    "sameboy_libretro": "SameBoy (Game Boy)",
    "snes9x_libretro": "Snes9x (SNES)",
    "stella2014_libretro": "Stella 2014 (Atari 2600)",
    "swanstation_libretro": "SwanStation (PlayStation)",
    "vecx_libretro": "VecX (Vectrex)",
    "virtualjaguar_libretro": "Virtual Jaguar (Atari Jaguar)",
}


def prettify_core_name(name: str) -> str:
    """Return a human readable name for a core file name."""
    return _PRETTY_CORE_NAMES.get(name, name)


@dataclass
class Actions:
    """Application state read and changed by the screens, and the hooks they call.

    Hooks report failure by raising; the message is shown as a notification.
    """

    core_running: bool = False
    core_loaded: bool = False
    disk_control: bool = False
    ludos: bool = False
    menu_active: bool = True
    fast_forward: bool = False
    should_close: bool = False
    show_hidden_files: bool = False
    home_dir: str = field(default_factory=lambda: os.path.expanduser("~"))
    cores_dir: str = "cores"
    notifications: Notifications = field(default_factory=Notifications)
    load_core: Optional[Callable[[str], None]] = None
    load_game: Optional[Callable[[str], None]] = None
    unload_game: Optional[Callable[[], None]] = None
    reset_core: Optional[Callable[[], None]] = None
    take_screenshot: Optional[Callable[[], None]] = None
    scan_dir: Optional[Callable[[str, Callable[[], None]], None]] = None
    settings_scene: Optional[SceneFactory] = None
    history_scene: Optional[SceneFactory] = None
    playlist_scene: Optional[Callable[[Menu, str], Scene]] = None
    savestates_scene: Optional[SceneFactory] = None
    options_scene: Optional[SceneFactory] = None
    disk_control_scene: Optional[SceneFactory] = None
    updater_scene: Optional[SceneFactory] = None


def _file_name(path: str) -> str:
    return os.path.splitext(os.path.basename(path))[0]


def _tab_size(active: bool) -> tuple[float, float]:
    """Scale and width of a tab."""
    return (0.75, 500.0) if active else (0.25, 128.0)


def _pusher(menu: Menu, factory: Optional[SceneFactory]) -> Optional[Callable[[], None]]:
    if factory is None:
        return None
    return lambda: menu.push(factory(menu))


def _opener(
    scene: Scene, menu: Menu, factory: Optional[SceneFactory]
) -> Optional[Callable[[], None]]:
    if factory is None:
        return None

    def open_scene() -> None:
        scene.segue_next()
        menu.push(factory(menu))

    return open_scene


class _TabsScene(Scene):
    """The horizontal row of tabs at the root of the menu."""

    def segue_mount(self) -> None:
        for index, child in enumerate(self.entry.children):
            active = index == self.entry.ptr
            child.label_alpha = 1.0 if active else 0.0
            child.icon_alpha = 1.0
            child.scale, child.width = _tab_size(active)
        self._animate()

    def segue_back(self) -> None:
        self._animate()

    def segue_next(self) -> None:
        tweens = self.menu.tweens
        current = self.entry.children[self.entry.ptr]
        tweens.set(current, "margin", _MARGIN, _DURATION)
        tweens.set(self.menu, "scroll", self.menu.scroll + _SLIDE, _DURATION)
        for index, child in enumerate(self.entry.children):
            if index != self.entry.ptr:
                tweens.set(child, "icon_alpha", 0.0, _DURATION)

    def _animate(self) -> None:
        tweens = self.menu.tweens
        for index, child in enumerate(self.entry.children):
            active = index == self.entry.ptr
            scale, width = _tab_size(active)
            tweens.set(child, "label_alpha", 1.0 if active else 0.0, _DURATION)
            tweens.set(child, "icon_alpha", 1.0, _DURATION)
            tweens.set(child, "scale", scale, _DURATION)
            tweens.set(child, "width", width, _DURATION)
            tweens.set(child, "margin", 0.0, _DURATION)
        tweens.set(self.menu, "scroll", float(self.entry.ptr * _TAB_STEP), _DURATION)

    def _move(self, step: int, effect: str) -> None:
        if not self.entry.children:
            return
        self.entry.ptr = (self.entry.ptr + step) % len(self.entry.children)
        self.menu.play_effect(effect)
        self._animate()

    def update(self, dt: float, controls: Controls) -> None:
        repeat = self.menu.input
        repeat.right(dt, controls.is_held(Button.RIGHT), lambda: self._move(1, "down"))
        repeat.left(dt, controls.is_held(Button.LEFT), lambda: self._move(-1, "up"))

        if not self.entry.children:
            return

        if controls.is_released(Button.A):
            current = self.entry.children[self.entry.ptr]
            if current.callback_ok is not None:
                self.menu.play_effect("ok")
                self.segue_next()
                current.callback_ok()

        if controls.is_released(Button.X):
            current = self.entry.children[self.entry.ptr]
            if current.callback_x is not None:
                current.callback_x()


def _delete_playlist(
    menu: Menu, actions: Actions, playlists: Playlists, path: str
) -> None:
    try:
        os.remove(path)
    except OSError as exc:
        actions.notifications.display_and_log(
            Severity.ERROR, "Menu", "Could not delete playlist: %s", exc
        )
        return
    menu.stack[0].entry.ptr += 1
    if path in playlists:
        del playlists[path]
    refresh_tabs(menu, actions, playlists)


def _playlist_tab(
    menu: Menu, actions: Actions, playlists: Playlists, path: str
) -> Entry:
    filename = _file_name(path)

    def open_playlist() -> None:
        if actions.playlist_scene is not None:
            menu.push(actions.playlist_scene(menu, path))

    def ask_delete() -> None:
        ask_confirmation(
            menu,
            "Confirm before deleting",
            "You are about to delete a playlist.",
            "Games and game data won't be removed.",
            lambda: _delete_playlist(menu, actions, playlists, path),
        )

    return Entry(
        label=short_name(filename),
        sub_label=f"{playlists.count(path)} Games",
        icon=filename,
        callback_ok=open_playlist,
        callback_x=ask_delete,
    )


def _playlist_tabs(menu: Menu, actions: Actions, playlists: Playlists) -> list[Entry]:
    playlists.load()
    return [_playlist_tab(menu, actions, playlists, path) for path in playlists.paths()]


def build_tabs(menu: Menu, actions: Actions, playlists: Playlists) -> Scene:
    """Build the root scene: fixed tabs, one tab per playlist, and the scanner."""
    scene = _TabsScene(menu, "Ludo")

    def scan(path: str) -> None:
        if actions.scan_dir is not None:
            actions.scan_dir(path, lambda: refresh_tabs(menu, actions, playlists))

    def add_games() -> None:
        menu.push(
            build_explorer(
                menu,
                actions.home_dir,
                None,
                scan,
                Entry(label="<Scan this directory>", icon="scan"),
                None,
                actions.show_hidden_files,
            )
        )

    scene.entry.children = [
        Entry(
            label="Main Menu",
            sub_label="Load cores and games manually",
            icon="main",
            callback_ok=lambda: menu.push(build_main_menu(menu, actions)),
        ),
        Entry(
            label="Settings",
            sub_label="Configure Ludo",
            icon="setting",
            callback_ok=_pusher(menu, actions.settings_scene),
        ),
        Entry(
            label="History",
            sub_label="Play again",
            icon="history",
            callback_ok=_pusher(menu, actions.history_scene),
        ),
        *_playlist_tabs(menu, actions, playlists),
        Entry(
            label="Add games",
            sub_label="Scan your collection",
            icon="add",
            callback_ok=add_games,
        ),
    ]
    scene.segue_mount()
    return scene


def refresh_tabs(menu: Menu, actions: Actions, playlists: Playlists) -> None:
    """Reload the playlist tabs, keeping the active tab and layout consistent."""
    root = menu.stack[0].entry
    count = len(root.children)
    tabs = _playlist_tabs(menu, actions, playlists)

    # The first three tabs are fixed and the last one is the scanner.
    root.children = root.children[:3] + tabs + root.children[count - 1:]

    if root.ptr >= 3:
        root.ptr += len(tabs) - (count - 4)

    for index, child in enumerate(root.children):
        child.icon_alpha = 1.0
        child.scale, child.width = _tab_size(index == root.ptr)

    if len(menu.stack) == 1:
        menu.scroll = float(root.ptr * _TAB_STEP)
    else:
        root.children[root.ptr].margin = _MARGIN
        menu.scroll = float(root.ptr * _TAB_STEP + _SLIDE)


def _ask_quit_confirmation(
    menu: Menu, actions: Actions, then: Callable[[], None]
) -> None:
    if actions.core_running:
        actions.menu_active = True
        ask_confirmation(
            menu,
            "Confirm before quitting",
            "If you have not saved yet, your progress will be lost.",
            "Do you want to exit Ludo anyway?",
            then,
        )
    else:
        then()


def _power(actions: Actions, flag: str) -> None:
    """Unload the game, then shut down or reboot the machine."""
    if actions.unload_game is not None:
        actions.unload_game()
    try:
        subprocess.run(["/usr/sbin/shutdown", flag, "now"], check=True)
    except (OSError, subprocess.CalledProcessError) as exc:
        actions.notifications.display_and_log(Severity.ERROR, "Menu", "%s", exc)


def _core_selected(actions: Actions, path: str) -> None:
    if actions.load_core is not None:
        try:
            actions.load_core(path)
        except Exception as exc:  # hooks report failure by raising
            actions.notifications.display_and_log(Severity.ERROR, "Core", "%s", exc)
            return
    actions.core_loaded = True
    actions.notifications.display_and_log(
        Severity.SUCCESS, "Core", "Core loaded: %s", os.path.basename(path)
    )


def _game_selected(menu: Menu, actions: Actions, path: str) -> None:
    if actions.load_game is not None:
        try:
            actions.load_game(path)
        except Exception as exc:  # hooks report failure by raising
            actions.notifications.display_and_log(Severity.ERROR, "Core", "%s", exc)
            return
    actions.core_running = True
    root = menu.stack[0]
    root.entry.ptr = 0
    root.segue_mount()
    _warp(menu, actions, root)
    actions.menu_active = False


def build_main_menu(menu: Menu, actions: Actions) -> Scene:
    """Build the main menu: load cores and games, quit or power off."""
    scene = ListScene(menu, "Main Menu")
    children = scene.entry.children

    def open_quick_menu() -> None:
        scene.segue_next()
        menu.push(build_quick_menu(menu, actions))

    def load_core() -> None:
        scene.segue_next()
        menu.push(
            build_explorer(
                menu,
                actions.cores_dir,
                _CORE_EXTENSIONS,
                lambda path: _core_selected(actions, path),
                None,
                prettify_core_name,
                actions.show_hidden_files,
            )
        )

    def load_game() -> None:
        if not actions.core_loaded:
            actions.notifications.display_and_log(
                Severity.WARNING, "Menu", "Please load a core first."
            )
            return
        scene.segue_next()
        menu.push(
            build_explorer(
                menu,
                actions.home_dir,
                None,
                lambda path: _game_selected(menu, actions, path),
                None,
                None,
                actions.show_hidden_files,
            )
        )

    def close() -> None:
        actions.should_close = True

    if actions.core_running:
        children.append(
            Entry(label="Quick Menu", icon="subsetting", callback_ok=open_quick_menu)
        )
    children.append(Entry(label="Load Core", icon="subsetting", callback_ok=load_core))
    children.append(Entry(label="Load Game", icon="subsetting", callback_ok=load_game))

    if actions.ludos:
        children.append(
            Entry(
                label="Updater",
                icon="subsetting",
                callback_ok=_opener(scene, menu, actions.updater_scene),
            )
        )
        children.append(
            Entry(
                label="Reboot",
                icon="subsetting",
                callback_ok=lambda: _ask_quit_confirmation(
                    menu, actions, lambda: _power(actions, "-r")
                ),
            )
        )
        children.append(
            Entry(
                label="Shutdown",
                icon="subsetting",
                callback_ok=lambda: _ask_quit_confirmation(
                    menu, actions, lambda: _power(actions, "-P")
                ),
            )
        )
    else:
        children.append(
            Entry(
                label="Quit",
                icon="subsetting",
                callback_ok=lambda: _ask_quit_confirmation(menu, actions, close),
            )
        )

    scene.segue_mount()
    return scene


def build_quick_menu(menu: Menu, actions: Actions) -> Scene:
    """Build the contextual menu of the running game."""
    scene = ListScene(menu, "Quick Menu")
    children = scene.entry.children

    def resume() -> None:
        actions.menu_active = False
        actions.fast_forward = False

    def reset() -> None:
        if actions.reset_core is not None:
            actions.reset_core()
        resume()

    def screenshot() -> None:
        try:
            actions.take_screenshot()
        except Exception as exc:  # hooks report failure by raising
            actions.notifications.display_and_log(Severity.ERROR, "Menu", "%s", exc)
            return
        actions.notifications.display_and_log(
            Severity.SUCCESS, "Menu", "Took a screenshot."
        )

    children.append(Entry(label="Resume", icon="resume", callback_ok=resume))
    children.append(Entry(label="Reset", icon="reset", callback_ok=reset))
    children.append(
        Entry(
            label="Savestates",
            icon="states",
            callback_ok=_opener(scene, menu, actions.savestates_scene),
        )
    )
    children.append(
        Entry(
            label="Take Screenshot",
            icon="screenshot",
            callback_ok=screenshot if actions.take_screenshot is not None else None,
        )
    )
    children.append(
        Entry(
            label="Options",
            icon="subsetting",
            callback_ok=_opener(scene, menu, actions.options_scene),
        )
    )
    if actions.core_loaded and actions.disk_control:
        children.append(
            Entry(
                label="Disk Control",
                icon="core-disk-options",
                callback_ok=_opener(scene, menu, actions.disk_control_scene),
            )
        )

    scene.segue_mount()
    return scene


def _warp(menu: Menu, actions: Actions, root: Scene) -> None:
    menu.reset(root)
    root.segue_next()
    main = build_main_menu(menu, actions)
    menu.push(main)
    main.segue_next()
    menu.push(build_quick_menu(menu, actions))
    menu.tweens.fast_forward()


def warp_to_quick_menu(menu: Menu, actions: Actions, playlists: Playlists) -> None:
    """Jump straight to the quick menu, with the tabs and main menu below it."""
    _warp(menu, actions, build_tabs(menu, actions, playlists))