"""Playlists of scanned games, stored as tab separated files."""

from __future__ import annotations

import csv
import glob
import logging
import os
from dataclasses import dataclass
from typing import Iterator, TextIO

log = logging.getLogger(__name__)


def _build_short_names() -> dict[str, str]:
    # Systems whose short name keeps the vendor in front of the model.
    keep_vendor = {
        "Atari": ("2600", "5200", "7800", "Jaguar", "Lynx", "ST"),
        "Commodore": ("64",),
    }
    # Systems whose short name is simply the part after the vendor.
    drop_vendor = {
        "Bandai": ("WonderSwan Color", "WonderSwan"),
        "Coleco": ("ColecoVision",),
        "GCE": ("Vectrex",),
        "Microsoft": ("MSX", "MSX2"),
        "NEC": ("PC-FX",),
        "Nintendo": (
            "Game Boy Advance",
            "Game Boy Color",
            "Game Boy",
            "Pokemon Mini",
            "Virtual Boy",
        ),
        "Sega": ("32X", "Game Gear", "Saturn", "SG-1000"),
        "Sharp": ("X68000",),
        "Sinclair": ("ZX Spectrum +3", "ZX Spectrum"),
        "SNK": ("Neo Geo CD", "Neo Geo Pocket Color", "Neo Geo Pocket"),
        "Sony": ("PlayStation",),
        "The 3DO Company": ("3DO",),
    }
    # Systems known under another name altogether: (vendor, model, short).
    renamed = (
        ("FBNeo", "Arcade Games", "Arcade (FBNeo)"),
        ("Magnavox", "Odyssey2", "Magnavox Odyssey²"),
        ("NEC", "PC Engine - TurboGrafx 16", "TurboGrafx-16"),
        ("NEC", "PC Engine CD - TurboGrafx-CD", "TurboGrafx-CD"),
        ("NEC", "PC Engine SuperGrafx", "SuperGrafx"),
        ("Nintendo", "Family Computer Disk System", "Famicom Disk System"),
        ("Nintendo", "Nintendo Entertainment System", "NES / Famicom"),
        ("Nintendo", "Super Nintendo Entertainment System", "Super Nintendo"),
        ("Sega", "Master System - Mark III", "Master System"),
        ("Sega", "Mega Drive - Genesis", "Mega Drive / Genesis"),
        ("Sega", "PICO", "Pico"),
        ("Sinclair", "ZX 81", "ZX81"),
    )

    table: dict[str, str] = {}
    for vendor, models in keep_vendor.items():
        table.update({f"{vendor} - {model}": f"{vendor} {model}" for model in models})
    for vendor, models in drop_vendor.items():
        table.update({f"{vendor} - {model}": model for model in models})
    table.update({f"{vendor} - {model}": short for vendor, model, short in renamed})
    return table


_SHORT_NAMES = _build_short_names()


def short_name(name: str) -> str:
    """Return a shorter display name for a game system, if one is known."""
    return _SHORT_NAMES.get(name, name)


@dataclass(frozen=True)
class Game:
    """A game in a playlist."""

    path: str
    name: str
    crc32: int = 0


def _key(path: str) -> str:
    return os.path.normpath(path)


def _rows(handle: TextIO) -> Iterator[list[str]]:
    reader = csv.reader(handle, delimiter="\t")
    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except csv.Error as exc:
            log.warning("%s", exc)
            continue
        yield row


def _parse_row(row: list[str]) -> Game | None:
    if len(row) < 3:
        if row:
            log.warning("malformed playlist line: %r", row)
        return None
    crc = 0
    if row[2]:
        try:
            crc = int(row[2], 16) & 0xFFFFFFFF
        except ValueError as exc:
            log.warning("%s", exc)
    return Game(os.path.normpath(row[0]), row[1], crc)


class Playlists:
    """In-memory playlists, one per system, keyed by their file path."""

    def __init__(self, directory: str) -> None:
        self.directory = directory
        self._playlists: dict[str, list[Game]] = {}

    def __getitem__(self, path: str) -> list[Game]:
        return list(self._playlists.get(_key(path), []))

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and _key(path) in self._playlists

    def __delitem__(self, path: str) -> None:
        del self._playlists[_key(path)]

    def paths(self) -> list[str]:
        """Return the paths of the loaded playlists, sorted."""
        return sorted(self._playlists)

    def load(self) -> None:
        """Read every .csv playlist of the directory into memory."""
        pattern = os.path.join(glob.escape(self.directory), "*.csv")
        for path in sorted(glob.glob(pattern)):
            try:
                handle = open(path, newline="", encoding="utf-8")
            except OSError as exc:
                log.warning("%s", exc)
                continue
            with handle:
                games = [g for g in map(_parse_row, _rows(handle)) if g is not None]
            games.sort(key=lambda game: game.name)
            self._playlists[_key(path)] = games

    def contains(self, csv_path: str, path: str, crc32: int) -> bool:
        """Tell whether a game is already in a playlist, by path or checksum."""
        wanted = os.path.normpath(path)
        return any(
            os.path.normpath(game.path) == wanted or (crc32 != 0 and game.crc32 == crc32)
            for game in self._playlists.get(_key(csv_path), [])
        )

    def count(self, path: str) -> int:
        """Return the number of games in a playlist."""
        return len(self._playlists.get(_key(path), []))

    def save(self, path: str) -> None:
        """Overwrite an existing playlist file with its in-memory content."""
        fd = os.open(path, os.O_WRONLY | os.O_TRUNC)
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.writelines(
                f"{game.path}\t{game.name}\t{game.crc32:x}\n" for game in self[path]
            )

    def remove_game(self, path: str, game: Game) -> None:
        """Drop from a playlist every entry sharing the game's path."""
        key = _key(path)
        self._playlists[key] = [
            g for g in self._playlists.get(key, []) if g.path != game.path
        ]