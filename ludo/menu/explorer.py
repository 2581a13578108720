"""A file explorer scene for picking files and directories."""

from __future__ import annotations

import logging
import os
import re
import stat
import string
from dataclasses import replace
from typing import Any, Callable, Optional, Sequence

from ludo.menu.scene import Cursor, Entry, ListScene, build_indexes

log = logging.getLogger(__name__)

Prettifier = Callable[[str], str]
_WINDOWS_DRIVE = re.compile(r"^[A-Z]:\\$")


def _extension(name: str) -> str:
    """Return the extension of name, dot included, or an empty string."""
    dot = name.rfind(".")
    return name[dot:] if dot > name.rfind(os.sep) else ""


def _file_name(path: str) -> str:
    return os.path.splitext(os.path.basename(path))[0]


def matches_extensions(name: str, extensions: Optional[Sequence[str]]) -> bool:
    """Tell whether the file name ends with one of the extensions."""
    return bool(extensions) and _extension(name) in extensions


def is_windows_drive(path: str) -> bool:
    """Tell whether path is the root of a Windows drive, such as C:\\."""
    return _WINDOWS_DRIVE.match(os.path.abspath(path)) is not None


def windows_drives() -> list[str]:
    """Return the letters of the drives that can be opened."""
    return [
        letter for letter in string.ascii_uppercase if os.path.exists(f"{letter}:\\")
    ]


def build_explorer(
    menu: Any,
    path: str,
    extensions: Optional[Sequence[str]] = None,
    callback: Optional[Callable[[str], None]] = None,
    dir_action: Optional[Entry] = None,
    prettifier: Optional[Prettifier] = None,
    show_hidden: bool = False,
) -> ListScene:
    """Build a scene listing the content of a directory.

    Files are filtered by extension when extensions is given; selecting a
    matching file hands its path to callback. dir_action, when it has a
    label, is shown first and hands the browsed directory to callback.
    """
    scene = ListScene(menu, "Explorer")
    children = scene.entry.children

    def open_folder(new_path: str) -> None:
        scene.segue_next()
        menu.push(
            build_explorer(
                menu, new_path, extensions, callback, dir_action, prettifier, show_hidden
            )
        )

    def append_folder(label: str, new_path: str) -> None:
        children.append(
            Entry(label=label, icon="folder", callback_ok=lambda: open_folder(new_path))
        )

    def append_node(full_path: str, name: str, is_dir: bool) -> None:
        if name.startswith(".") and not show_hidden:
            return
        if extensions is not None and not is_dir and not matches_extensions(name, extensions):
            return

        label = prettifier(_file_name(name)) if prettifier is not None else name
        target = os.path.normpath(full_path)

        def select() -> None:
            if is_dir:
                open_folder(target)
            elif callback is not None and (
                extensions is None or _extension(name) in extensions
            ):
                callback(target)

        children.append(
            Entry(label=label, icon="folder" if is_dir else "file", callback_ok=select)
        )

    if dir_action is not None and dir_action.label:
        children.append(
            replace(
                dir_action,
                callback_ok=(lambda: callback(path)) if callback is not None else None,
                cursor=Cursor(),
                children=[],
                indexes=[],
                tags=list(dir_action.tags),
            )
        )

    if path == "/":
        if os.name == "nt":
            for drive in windows_drives():
                append_folder(f"{drive}:\\", f"{drive}:\\")
            scene.segue_mount()
            return scene
    elif is_windows_drive(path):
        append_folder("..", "/")
    else:
        append_folder("..", os.path.normpath(os.path.join(path, "..")))

    try:
        names = sorted(os.listdir(path))
    except OSError as exc:
        log.error("%s", exc)
        names = []

    for name in names:
        full_path = os.path.realpath(os.path.join(path, name))
        try:
            mode = os.stat(full_path).st_mode
        except OSError as exc:
            log.warning("%s", exc)
            continue
        append_node(full_path, name, stat.S_ISDIR(mode))

    build_indexes(scene.entry)

    if not names:
        children.append(Entry(label="Empty", icon="subsetting"))

    scene.segue_mount()
    return scene