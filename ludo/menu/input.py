"""Joypad state and the generic list navigation of the menu."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable

from ludo.menu.scene import Entry, generic_animate, indexed


class Button(IntEnum):
    """Joypad buttons, numbered as the emulation cores number them."""

    B = 0
    Y = 1
    SELECT = 2
    START = 3
    UP = 4
    DOWN = 5
    LEFT = 6
    RIGHT = 7
    A = 8
    X = 9
    L = 10
    R = 11
    L2 = 12
    R2 = 13
    L3 = 14
    R3 = 15


@dataclass(frozen=True)
class Controls:
    """The buttons held down and the buttons just released this frame."""

    held: frozenset[Button] = frozenset()
    released: frozenset[Button] = frozenset()

    def is_held(self, button: Button) -> bool:
        return button in self.held

    def is_released(self, button: Button) -> bool:
        return button in self.released


def scroll_speed(length: float) -> float:
    """Delay between repeats after a button has been held for length seconds."""
    if length > 4:
        return 0.005
    if length > 3:
        return 0.01
    if length > 2:
        return 0.02
    if length > 1:
        return 0.04
    if length > 0.1:
        return 0.08
    return 0.15


class Repeater:
    """Fires an action repeatedly while a button is held, faster over time."""

    def __init__(self) -> None:
        self.cooldown = 0.0
        self.length = 0.0
        self.delay = 0.0

    def __call__(self, dt: float, pressed: bool, action: Callable[[], None]) -> None:
        self.cooldown -= dt
        if pressed:
            if self.cooldown <= 0:
                action()
                self.cooldown = self.delay
            self.length += dt
        else:
            self.length = 0.0
        self.delay = scroll_speed(self.length)


class InputHandler:
    """Holds one repeater per direction so each key repeats independently."""

    def __init__(self) -> None:
        self.right = Repeater()
        self.left = Repeater()
        self.up = Repeater()
        self.down = Repeater()
        self.y = Repeater()

    def generic_input(
        self, menu: Any, entry: Entry, dt: float, controls: Controls
    ) -> None:
        """Scroll through a list and react to OK, X, left, right and cancel."""

        def move(step: int, effect: str) -> None:
            if not entry.children:
                return
            entry.ptr = (entry.ptr + step) % len(entry.children)
            menu.play_effect(effect)
            generic_animate(entry, menu.tweens)

        self.down(dt, controls.is_held(Button.DOWN), lambda: move(1, "down"))
        self.up(dt, controls.is_held(Button.UP), lambda: move(-1, "up"))

        def current() -> Entry | None:
            return entry.children[entry.ptr] if entry.children else None

        if controls.is_released(Button.A):
            child = current()
            if child is not None and child.callback_ok is not None:
                menu.play_effect("ok")
                child.callback_ok()

        if controls.is_released(Button.X):
            child = current()
            if child is not None and child.callback_x is not None:
                menu.play_effect("ok")
                child.callback_x()

        if controls.is_released(Button.RIGHT):
            child = current()
            if child is not None and child.incr is not None:
                menu.play_effect("up")
                child.incr(1)

        if controls.is_released(Button.LEFT):
            child = current()
            if child is not None and child.incr is not None:
                menu.play_effect("down")
                child.incr(-1)

        if controls.is_released(Button.B) and len(menu.stack) > 1:
            menu.play_effect("cancel")
            menu.stack[-2].segue_back()
            del menu.stack[-1]

        if controls.is_released(Button.R) and entry.indexes:
            entry.ptr = indexed(entry, 1)
            menu.play_effect("down")
            generic_animate(entry, menu.tweens)

        if controls.is_released(Button.L) and entry.indexes:
            entry.ptr = indexed(entry, -1)
            menu.play_effect("up")
            generic_animate(entry, menu.tweens)