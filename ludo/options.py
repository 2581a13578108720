"""Per-core configuration options, persisted as TOML files."""

from __future__ import annotations

import os
import threading
import tomllib
from dataclasses import dataclass, field
from typing import Iterable

import tomli_w


def config_path(core_path: str, config_home: str | None = None) -> str:
    """Return the options file of a core inside the configuration directory."""
    if config_home is None:
        config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(
            os.path.expanduser("~"), ".config"
        )
    name = os.path.splitext(os.path.basename(core_path))[0]
    return os.path.join(config_home, "ludo", name + ".toml")


@dataclass
class Variable:
    """A core option that takes one of a fixed list of values."""

    key: str
    desc: str
    choices: list[str]
    default: str = ""
    choice: int | None = field(default=None)

    def __post_init__(self) -> None:
        if self.choice is None:
            self.choice = (
                self.choices.index(self.default) if self.default in self.choices else 0
            )

    def value(self) -> str:
        """Return the current value."""
        return self.choices[self.choice]

    def cycle(self, direction: int) -> None:
        """Move to the next or previous value, wrapping around."""
        choice = self.choice + direction
        if choice < 0:
            choice = len(self.choices) - 1
        elif choice > len(self.choices) - 1:
            choice = 0
        self.choice = choice


class Options:
    """The options exposed by a core, with their saved values."""

    def __init__(self, variables: Iterable[Variable], path: str) -> None:
        self.variables: list[Variable] = list(variables)
        self.path = path
        self.updated = True
        self._lock = threading.Lock()
        if os.path.exists(path):
            self.load()

    def load(self) -> None:
        """Apply the values saved in the options file."""
        with self._lock:
            with open(self.path, "rb") as handle:
                saved = tomllib.load(handle)
            for key, value in saved.items():
                if not isinstance(value, str):
                    raise ValueError(f"option {key!r} is not a string")
                real_key = key.replace("___", ".", 1)
                for variable in self.variables:
                    if variable.key != real_key:
                        continue
                    for index, choice in enumerate(variable.choices):
                        if choice == value:
                            variable.choice = index

    def save(self) -> None:
        """Write the current values to the options file."""
        with self._lock:
            values = {
                variable.key.replace(".", "___", 1): variable.value()
                for variable in self.variables
            }
            with open(self.path, "wb") as handle:
                tomli_w.dump(values, handle)
                handle.flush()
                os.fsync(handle.fileno())