from types import SimpleNamespace

import pytest

from ludo.menu.input import Button, Controls, InputHandler
from ludo.menu.scene import (
    Entry,
    ListScene,
    Scene,
    build_indexes,
    extract_tags,
    generic_animate,
    generic_segue_mount,
    generic_segue_next,
    indexed,
)
from ludo.menu.tweens import Tweens


def make_list(labels, ptr=0):
    entry = Entry(label="List")
    entry.children = [Entry(label=label) for label in labels]
    entry.ptr = ptr
    return entry


def make_menu():
    effects = []
    return SimpleNamespace(
        stack=[],
        tweens=Tweens(),
        input=InputHandler(),
        effects=effects,
        play_effect=effects.append,
    )


@pytest.mark.parametrize(
    "name, want_name, want_tags",
    [
        ("My Awesome Game", "My Awesome Game", []),
        ("My Awesome Game (France)", "My Awesome Game", ["France"]),
        ("My Awesome Game (France) (v1.0)", "My Awesome Game", ["France", "v1.0"]),
        (
            "My Awesome Game (Europe) (Fr,De,En)",
            "My Awesome Game",
            ["Europe", "Fr", "De", "En"],
        ),
    ],
)
def test_extract_tags(name, want_name, want_tags):
    assert extract_tags(name) == (want_name, want_tags)


def test_build_indexes_records_first_letters():
    entry = make_list(["Alpha", "Apple", "Beta", "Carrot", "Cat"])
    build_indexes(entry)
    assert entry.indexes == [("A", 0), ("B", 2), ("C", 3)]


def test_build_indexes_does_not_accumulate():
    entry = make_list(["Alpha", "Beta"])
    build_indexes(entry)
    build_indexes(entry)
    assert entry.indexes == [("A", 0), ("B", 1)]


def test_indexed_jumps_to_next_letter():
    entry = make_list(["Alpha", "Apple", "Beta", "Carrot", "Cat"])
    build_indexes(entry)
    assert indexed(entry, 1) == 2
    entry.ptr = 2
    assert indexed(entry, 1) == 3
    assert indexed(entry, -1) == 0


def test_indexed_wraps_around():
    entry = make_list(["Alpha", "Apple", "Beta", "Carrot", "Cat"], ptr=4)
    build_indexes(entry)
    assert indexed(entry, 1) == 0
    entry.ptr = 0
    assert indexed(entry, -1) == 4


def test_segue_mount_then_settle_places_active_entry():
    tweens = Tweens()
    entry = make_list(["a", "b", "c"], ptr=1)
    generic_segue_mount(entry, tweens)
    assert entry.children[1].label_alpha == 0.0
    tweens.fast_forward()
    active = entry.children[1]
    assert active.yp == pytest.approx(0.5)
    assert active.scale == pytest.approx(1.5)
    assert active.tag_alpha == 1.0
    assert entry.children[0].yp < 0.5 < entry.children[2].yp
    assert all(child.label_alpha == 1.0 for child in entry.children)
    assert entry.children[0].tag_alpha == 0.0
    assert entry.cursor.alpha == 1.0
    assert entry.cursor.yp == pytest.approx(0.5)


def test_segue_next_fades_out():
    tweens = Tweens()
    entry = make_list(["a", "b"])
    generic_animate(entry, tweens)
    tweens.fast_forward()
    generic_segue_next(entry, tweens)
    tweens.fast_forward()
    assert all(child.label_alpha == 0.0 for child in entry.children)
    assert entry.cursor.alpha == 0.0
    assert entry.cursor.yp == pytest.approx(0.5 - 0.3)


def test_scene_keeps_its_label():
    scene = Scene(make_menu(), "Ludo")
    assert scene.label == "Ludo"
    assert scene.entry.children == []


def test_list_scene_segue_mount_queues_tweens():
    menu = make_menu()
    scene = ListScene(menu, "Main Menu")
    scene.entry.children = [Entry(label="Quit")]
    scene.segue_mount()
    assert len(menu.tweens) > 0
    menu.tweens.fast_forward()
    assert len(menu.tweens) == 0
    assert scene.entry.children[0].label_alpha == 1.0


def test_list_scene_update_navigates():
    menu = make_menu()
    scene = ListScene(menu, "Main Menu")
    scene.entry.children = [Entry(label="One"), Entry(label="Two")]
    scene.update(0.016, Controls(held=frozenset({Button.DOWN})))
    assert scene.entry.ptr == 1
    assert menu.effects == ["down"]