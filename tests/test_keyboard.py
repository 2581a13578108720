from ludo.menu.input import Button, Controls
from ludo.menu.keyboard import LAYOUTS, KeyboardScene
from ludo.menu.menu import Menu
from ludo.menu.scene import Entry, ListScene


def make_keyboard(on_done=None):
    effects = []
    menu = Menu(effects.append)
    root = ListScene(menu, "WiFi Menu")
    root.entry.children = [Entry(label="net")]
    menu.push(root)
    done = []
    keyboard = KeyboardScene(menu, "Passphrase", on_done or done.append)
    menu.push(keyboard)
    return menu, keyboard, done, effects


def held(button):
    return Controls(held=frozenset({button}))


def released(button):
    return Controls(released=frozenset({button}))


def test_mount_animation_finishes_in_place():
    menu, keyboard, _, _ = make_keyboard()
    menu.tweens.fast_forward()
    assert keyboard.y == 0.0
    assert keyboard.alpha == 1.0
    assert len(menu.tweens) == 0


def test_starts_on_first_key():
    _, keyboard, _, _ = make_keyboard()
    assert keyboard.key() == "1"


def test_right_and_row_wrap():
    menu, keyboard, _, _ = make_keyboard()
    menu.update(1.0, held(Button.RIGHT))
    assert keyboard.key() == "2"
    keyboard.index = 9
    menu.update(1.0, held(Button.RIGHT))
    assert keyboard.index == 0


def test_left_wraps_to_end_of_row():
    menu, keyboard, _, _ = make_keyboard()
    menu.update(1.0, held(Button.LEFT))
    assert keyboard.key() == "0"


def test_up_wraps_to_last_row_and_down_back():
    menu, keyboard, _, _ = make_keyboard()
    menu.update(1.0, held(Button.UP))
    assert keyboard.key() == "z"
    menu.update(1.0, held(Button.DOWN))
    assert keyboard.key() == "1"


def test_down_then_up_is_identity():
    menu, keyboard, _, _ = make_keyboard()
    keyboard.index = 13
    menu.update(1.0, held(Button.DOWN))
    menu.update(1.0, held(Button.UP))
    assert keyboard.index == 13


def test_insert_and_delete():
    menu, keyboard, _, _ = make_keyboard()
    menu.update(0.016, released(Button.A))
    menu.update(0.016, released(Button.A))
    assert keyboard.value == "11"
    menu.update(1.0, held(Button.Y))
    assert keyboard.value == "1"


def test_delete_on_empty_value_does_nothing():
    menu, keyboard, _, effects = make_keyboard()
    menu.update(1.0, held(Button.Y))
    assert keyboard.value == ""
    assert "cancel" not in effects


def test_switch_layout_cycles():
    menu, keyboard, _, _ = make_keyboard()
    keyboard.index = 10
    menu.update(0.016, released(Button.X))
    assert keyboard.key() == "Q"
    for _ in range(len(LAYOUTS) - 1):
        menu.update(0.016, released(Button.X))
    assert keyboard.layout == 0
    assert keyboard.key() == "q"


def test_done_hands_value_and_closes():
    menu, keyboard, done, effects = make_keyboard()
    menu.update(0.016, released(Button.A))
    menu.update(0.016, released(Button.START))
    assert done == ["1"]
    assert len(menu.stack) == 1
    assert effects[-1] == "notice"


def test_done_with_empty_value_is_ignored():
    menu, keyboard, done, _ = make_keyboard()
    menu.update(0.016, released(Button.START))
    assert done == []
    assert menu.current() is keyboard


def test_cancel_closes_without_callback():
    menu, keyboard, done, _ = make_keyboard()
    menu.update(0.016, released(Button.A))
    menu.update(0.016, released(Button.B))
    assert done == []
    assert len(menu.stack) == 1


def test_down_from_last_key_wraps_to_top_row_in_every_layout():
    menu, keyboard, _, _ = make_keyboard()
    for number, layout in enumerate(LAYOUTS):
        keyboard.layout = number
        keyboard.index = len(layout) - 1
        menu.update(1.0, held(Button.DOWN))
        assert keyboard.index == 9
        assert keyboard.key() == layout[9]