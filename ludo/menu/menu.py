"""The menu state: the stack of scenes, animations and confirmation dialogs."""

from __future__ import annotations

from typing import Callable, Optional

from ludo.menu.input import Button, Controls, InputHandler
from ludo.menu.scene import Scene
from ludo.menu.tweens import Tweens

EffectPlayer = Callable[[str], None]


class Menu:
    """Holds the stack of scenes, the running animations and input repeaters."""

    def __init__(self, play_effect: Optional[EffectPlayer] = None) -> None:
        self.stack: list[Scene] = []
        self.tweens = Tweens()
        self.input = InputHandler()
        self.scroll = 0.0
        self._effect_player = play_effect

    def play_effect(self, effect: str) -> None:
        """Play a sound effect through the configured player, if there is one."""
        if self._effect_player is not None:
            self._effect_player(effect)

    def current(self) -> Scene:
        """Return the scene on top of the stack."""
        if not self.stack:
            raise IndexError("the menu has no scene")
        return self.stack[-1]

    def push(self, scene: Scene) -> None:
        """Navigate to a new scene."""
        self.stack.append(scene)

    def pop(self) -> Scene:
        """Close the top scene, animating back the one below it."""
        if not self.stack:
            raise IndexError("the menu has no scene")
        if len(self.stack) > 1:
            self.stack[-2].segue_back()
        return self.stack.pop()

    def reset(self, root: Scene) -> None:
        """Replace the whole stack with a single root scene."""
        self.scroll = 0.0
        self.stack = [root]

    def update(self, dt: float, controls: Controls) -> None:
        """Let the current scene react to input for one frame."""
        self.current().update(dt, controls)


class DialogScene(Scene):
    """A yes/no dialog that runs a callback when confirmed."""

    def __init__(
        self,
        menu: Menu,
        title: str,
        line1: str,
        line2: str,
        on_confirm: Callable[[], None],
    ) -> None:
        super().__init__(menu, "Confirm Dialog")
        self.title = title
        self.line1 = line1
        self.line2 = line2
        self.on_confirm = on_confirm
        self.entry.callback_ok = on_confirm
        menu.play_effect("notice")

    def update(self, dt: float, controls: Controls) -> None:
        if controls.is_released(Button.A):
            self.menu.play_effect("ok")
            self.menu.pop()
            self.on_confirm()

        if controls.is_released(Button.B):
            self.menu.play_effect("cancel")
            self.menu.pop()


def ask_confirmation(
    menu: Menu,
    title: str,
    line1: str,
    line2: str,
    on_confirm: Callable[[], None],
) -> DialogScene:
    """Push a confirmation dialog and return it."""
    dialog = DialogScene(menu, title, line1, line2, on_confirm)
    menu.push(dialog)
    return dialog