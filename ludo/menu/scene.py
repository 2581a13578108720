"""Menu entries, scenes and their generic transitions."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ludo.menu.tweens import Tweens

_DURATION = 0.15
_TAG_PATTERN = re.compile(r"\(.*?\)")


@dataclass(eq=False)
class Cursor:
    """The highlight behind the active entry of a list."""

    alpha: float = 0.0
    yp: float = 0.0


@dataclass(eq=False)
class Entry:
    """A node of the menu tree; a scene is an entry showing its children."""

    label: str = ""
    sub_label: str = ""
    icon: str = ""
    path: str = ""
    system: str = ""
    game_name: str = ""
    tags: list[str] = field(default_factory=list)
    yp: float = 0.0
    scale: float = 0.0
    width: float = 0.0
    margin: float = 0.0
    label_alpha: float = 0.0
    icon_alpha: float = 0.0
    tag_alpha: float = 0.0
    sub_label_alpha: float = 0.0
    callback_ok: Optional[Callable[[], None]] = None
    callback_x: Optional[Callable[[], None]] = None
    value: Optional[Callable[[], Any]] = None
    string_value: Optional[Callable[[], str]] = None
    incr: Optional[Callable[[int], None]] = None
    cursor: Cursor = field(default_factory=Cursor)
    children: list["Entry"] = field(default_factory=list)
    ptr: int = 0
    indexes: list[tuple[str, int]] = field(default_factory=list)


class Scene:
    """A page of the menu. The base class has no transitions and no input."""

    def __init__(self, menu: Any, label: str) -> None:
        self.menu = menu
        self.entry = Entry(label=label)

    @property
    def label(self) -> str:
        return self.entry.label

    def segue_mount(self) -> None:
        """Transition played when the scene first appears."""

    def segue_next(self) -> None:
        """Transition played when another scene is pushed over this one."""

    def segue_back(self) -> None:
        """Transition played when the scene above this one is closed."""

    def update(self, dt: float, controls: Any) -> None:
        """React to input for one frame."""


class ListScene(Scene):
    """A scene showing a vertical list of entries with generic navigation."""

    def segue_mount(self) -> None:
        generic_segue_mount(self.entry, self.menu.tweens)

    def segue_next(self) -> None:
        generic_segue_next(self.entry, self.menu.tweens)

    def segue_back(self) -> None:
        generic_animate(self.entry, self.menu.tweens)

    def update(self, dt: float, controls: Any) -> None:
        self.menu.input.generic_input(self.menu, self.entry, dt, controls)


def _layout(index: int, ptr: int, shift: float) -> tuple[float, float]:
    """Vertical position and scale of a child relative to the active one."""
    if index == ptr:
        return 0.5 + shift, 1.5
    if index < ptr:
        return 0.4 + shift + 0.08 * (index - ptr), 0.5
    return 0.6 + shift + 0.08 * (index - ptr), 0.5


def generic_segue_mount(entry: Entry, tweens: Tweens) -> None:
    """Place the children below their spot, hidden, then animate them in."""
    for index, child in enumerate(entry.children):
        child.yp, child.scale = _layout(index, entry.ptr, 0.3)
        child.label_alpha = 0.0
        child.icon_alpha = 0.0
        child.tag_alpha = 0.0
        child.sub_label_alpha = 0.0
    entry.cursor.alpha = 0.0
    entry.cursor.yp = 0.5 + 0.3
    generic_animate(entry, tweens)


def generic_animate(entry: Entry, tweens: Tweens) -> None:
    """Animate the children to their place around the active entry."""
    for index, child in enumerate(entry.children):
        yp, scale = _layout(index, entry.ptr, 0.0)
        active = 1.0 if index == entry.ptr else 0.0
        tweens.set(child, "yp", yp, _DURATION)
        tweens.set(child, "label_alpha", 1.0, _DURATION)
        tweens.set(child, "icon_alpha", 1.0, _DURATION)
        tweens.set(child, "tag_alpha", active, _DURATION)
        tweens.set(child, "sub_label_alpha", active, _DURATION)
        tweens.set(child, "scale", scale, _DURATION)
    tweens.set(entry.cursor, "alpha", 1.0, _DURATION)
    tweens.set(entry.cursor, "yp", 0.5, _DURATION)


def generic_segue_next(entry: Entry, tweens: Tweens) -> None:
    """Fade the list out upwards to make room for the next one."""
    for index, child in enumerate(entry.children):
        yp, scale = _layout(index, entry.ptr, -0.3)
        tweens.set(child, "yp", yp, _DURATION)
        tweens.set(child, "label_alpha", 0.0, _DURATION)
        tweens.set(child, "icon_alpha", 0.0, _DURATION)
        tweens.set(child, "tag_alpha", 0.0, _DURATION)
        tweens.set(child, "sub_label_alpha", 0.0, _DURATION)
        tweens.set(child, "scale", scale, _DURATION)
    tweens.set(entry.cursor, "alpha", 0.0, _DURATION)
    tweens.set(entry.cursor, "yp", 0.5 - 0.3, _DURATION)


def extract_tags(name: str) -> tuple[str, list[str]]:
    """Split a game title into its bare name and its parenthesised tags."""
    tags: list[str] = []
    for group in _TAG_PATTERN.findall(name):
        name = name.replace(group, "")
        inner = group.replace("(", "").replace(")", "")
        tags.extend(part.strip() for part in inner.split(","))
    return name.strip(), tags


def build_indexes(entry: Entry) -> None:
    """Record where each new first letter starts among the children."""
    entry.indexes = []
    last: str | None = None
    for index, child in enumerate(entry.children):
        char = child.label[:1]
        if char != last:
            entry.indexes.append((char, index))
            last = char


def indexed(entry: Entry, offset: int) -> int:
    """Return the child position of the next or previous first letter."""
    current = entry.children[entry.ptr].label[:1]
    for position, (char, _) in enumerate(entry.indexes):
        if char == current:
            target = position + offset
            if target < 0:
                return len(entry.children) - 1
            if target > len(entry.indexes) - 1:
                return 0
            return entry.indexes[target][1]
    return 0