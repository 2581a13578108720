"""An on-screen keyboard scene for typing text with a joypad."""

from __future__ import annotations

from typing import Callable

from ludo.menu.input import Button, Controls
from ludo.menu.scene import Scene

_DURATION = 0.15
_COLUMNS = 10

LAYOUTS: tuple[tuple[str, ...], ...] = (
    (
        "1", "2", "3", "4", "5", "6", "7", "8", "9", "0",
        "q", "w", "e", "r", "t", "y", "u", "i", "o", "p",
        "a", "s", "d", "f", "g", "h", "j", "k", "l", "@",
        "z", "x", "c", "v", "b", "n", "m", " ", "-", ".",
    ),
    (
        "1", "2", "3", "4", "5", "6", "7", "8", "9", "0",
        "Q", "W", "E", "R", "T", "Y", "U", "I", "O", "P",
        "A", "S", "D", "F", "G", "H", "J", "K", "L", "+",
        "Z", "X", "C", "V", "B", "N", "M", " ", "_", "/",
    ),
    (
        "1", "2", "3", "4", "5", "6", "7", "8", "9", "0",
        "!", "\"", "#", "$", "%", "&", "'", "*", "(", ")",
        "+", ",", "-", "~", "/", ":", ";", "=", "<", ">",
        "?", "@", "[", "\\", "]", "^", "_", "|", "{", "}",
    ),
)


class KeyboardScene(Scene):
    """Lets the user compose a string key by key, then hands it to on_done."""

    def __init__(self, menu, label: str, on_done: Callable[[str], None]) -> None:
        super().__init__(menu, label)
        self.index = 0
        self.layout = 0
        self.value = ""
        self.y = 1.0
        self.alpha = 0.0
        self.on_done = on_done
        self.segue_mount()

    def segue_mount(self) -> None:
        """Slide the keyboard up from the bottom while fading it in."""
        self.y = 1.0
        self.alpha = 0.0
        self.menu.tweens.set(self, "y", 0.0, _DURATION)
        self.menu.tweens.set(self, "alpha", 1.0, _DURATION)

    def key(self) -> str:
        """Return the character under the cursor."""
        return LAYOUTS[self.layout][self.index]

    def _keys(self) -> int:
        return len(LAYOUTS[self.layout])

    def _right(self) -> None:
        self.menu.play_effect("up")
        if (self.index + 1) % _COLUMNS == 0:
            self.index -= _COLUMNS - 1
        else:
            self.index += 1

    def _left(self) -> None:
        self.menu.play_effect("down")
        if self.index % _COLUMNS == 0:
            self.index += _COLUMNS - 1
        else:
            self.index -= 1

    def _up(self) -> None:
        self.menu.play_effect("up")
        if self.index < _COLUMNS:
            self.index += self._keys() - _COLUMNS
        else:
            self.index -= _COLUMNS

    def _down(self) -> None:
        self.menu.play_effect("down")
        if self.index >= self._keys() - _COLUMNS:
            self.index -= self._keys() - _COLUMNS
        else:
            self.index += _COLUMNS

    def _delete(self) -> None:
        if self.value:
            self.menu.play_effect("cancel")
            self.value = self.value[:-1]

    def update(self, dt: float, controls: Controls) -> None:
        repeat = self.menu.input
        repeat.right(dt, controls.is_held(Button.RIGHT), self._right)
        repeat.left(dt, controls.is_held(Button.LEFT), self._left)
        repeat.up(dt, controls.is_held(Button.UP), self._up)
        repeat.down(dt, controls.is_held(Button.DOWN), self._down)

        if controls.is_released(Button.A):
            self.menu.play_effect("ok")
            self.value += self.key()

        if controls.is_released(Button.X):
            self.menu.play_effect("ok")
            self.layout = (self.layout + 1) % len(LAYOUTS)

        repeat.y(dt, controls.is_held(Button.Y), self._delete)

        if controls.is_released(Button.B) and len(self.menu.stack) > 1:
            self.menu.play_effect("cancel")
            self.menu.pop()

        if controls.is_released(Button.START) and self.value:
            self.menu.play_effect("notice")
            self.on_done(self.value)
            self.menu.pop()