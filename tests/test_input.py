import pytest

from ludo.menu.input import Button, Controls, InputHandler, Repeater, scroll_speed
from ludo.menu.scene import Entry, build_indexes
from ludo.menu.tweens import Tweens


class FakeMenu:
    def __init__(self):
        self.stack = []
        self.tweens = Tweens()
        self.effects = []

    def play_effect(self, name):
        self.effects.append(name)


class RecordingScene:
    def __init__(self):
        self.backs = 0

    def segue_back(self):
        self.backs += 1


def make_list(labels, ptr=0):
    entry = Entry(label="List")
    entry.children = [Entry(label=label) for label in labels]
    entry.ptr = ptr
    return entry


def held(*buttons):
    return Controls(held=frozenset(buttons))


def released(*buttons):
    return Controls(released=frozenset(buttons))


def test_controls_queries():
    controls = Controls(held=frozenset({Button.UP}), released=frozenset({Button.A}))
    assert controls.is_held(Button.UP)
    assert not controls.is_held(Button.A)
    assert controls.is_released(Button.A)
    assert not controls.is_released(Button.UP)


def test_scroll_speed_bounds():
    assert scroll_speed(0) == 0.15
    assert scroll_speed(5) == 0.005


def test_scroll_speed_never_slows_down():
    samples = [scroll_speed(t / 10) for t in range(0, 60)]
    assert all(a >= b for a, b in zip(samples, samples[1:]))


def test_repeater_idle_never_fires():
    repeat = Repeater()
    fired = []
    for _ in range(50):
        repeat(0.01, False, lambda: fired.append(1))
    assert fired == []


def test_repeater_fires_on_first_press():
    repeat = Repeater()
    fired = []
    repeat(0.01, True, lambda: fired.append(1))
    assert len(fired) == 1


def test_repeater_speeds_up_with_long_press():
    repeat = Repeater()
    fired = []
    for _ in range(100):
        repeat(0.01, True, lambda: fired.append(1))
    early = len(fired)
    for _ in range(500):
        repeat(0.01, True, lambda: None)
    fired.clear()
    for _ in range(100):
        repeat(0.01, True, lambda: fired.append(1))
    assert len(fired) > early
    assert len(fired) == 100


def test_down_wraps_to_first():
    menu = FakeMenu()
    entry = make_list(["a", "b", "c"], ptr=2)
    InputHandler().generic_input(menu, entry, 0.016, held(Button.DOWN))
    assert entry.ptr == 0
    assert menu.effects == ["down"]
    assert len(menu.tweens) > 0


def test_up_wraps_to_last():
    menu = FakeMenu()
    entry = make_list(["a", "b", "c"], ptr=0)
    InputHandler().generic_input(menu, entry, 0.016, held(Button.UP))
    assert entry.ptr == 2
    assert menu.effects == ["up"]


def test_ok_runs_callback():
    menu = FakeMenu()
    entry = make_list(["a", "b"])
    calls = []
    entry.children[0].callback_ok = lambda: calls.append("ok")
    InputHandler().generic_input(menu, entry, 0.016, released(Button.A))
    assert calls == ["ok"]
    assert menu.effects == ["ok"]


def test_ok_without_callback_is_silent():
    menu = FakeMenu()
    entry = make_list(["a"])
    InputHandler().generic_input(menu, entry, 0.016, released(Button.A))
    assert menu.effects == []


def test_x_runs_callback():
    menu = FakeMenu()
    entry = make_list(["a"])
    calls = []
    entry.children[0].callback_x = lambda: calls.append("x")
    InputHandler().generic_input(menu, entry, 0.016, released(Button.X))
    assert calls == ["x"]


def test_left_and_right_increment():
    menu = FakeMenu()
    entry = make_list(["a"])
    steps = []
    entry.children[0].incr = steps.append
    handler = InputHandler()
    handler.generic_input(menu, entry, 0.016, released(Button.RIGHT))
    handler.generic_input(menu, entry, 0.016, released(Button.LEFT))
    assert steps == [1, -1]
    assert menu.effects == ["up", "down"]


def test_cancel_pops_scene():
    menu = FakeMenu()
    previous = RecordingScene()
    menu.stack = [previous, RecordingScene()]
    InputHandler().generic_input(menu, make_list(["a"]), 0.016, released(Button.B))
    assert menu.stack == [previous]
    assert previous.backs == 1
    assert menu.effects == ["cancel"]


def test_cancel_keeps_root_scene():
    menu = FakeMenu()
    root = RecordingScene()
    menu.stack = [root]
    InputHandler().generic_input(menu, make_list(["a"]), 0.016, released(Button.B))
    assert menu.stack == [root]
    assert root.backs == 0


@pytest.mark.parametrize("button, start, want", [(Button.R, 0, 2), (Button.L, 2, 0)])
def test_shoulder_buttons_jump_letters(button, start, want):
    menu = FakeMenu()
    entry = make_list(["Alpha", "Apple", "Beta"], ptr=start)
    build_indexes(entry)
    InputHandler().generic_input(menu, entry, 0.016, released(button))
    assert entry.ptr == want


def test_shoulder_buttons_ignored_without_indexes():
    menu = FakeMenu()
    entry = make_list(["Alpha", "Beta"], ptr=1)
    InputHandler().generic_input(menu, entry, 0.016, released(Button.R))
    assert entry.ptr == 1
    assert menu.effects == []