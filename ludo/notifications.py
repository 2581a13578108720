"""On-screen toast notifications with a limited lifetime."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator

MEDIUM: float = 4.0
"""Standard lifetime of a notification, in seconds."""


class Severity(IntEnum):
    """How serious a notification is; drives its colour in the UI."""

    INFO = 0
    SUCCESS = 1
    WARNING = 2
    ERROR = 3


def _format(message: str, args: tuple) -> str:
    return message % args if args else message


@dataclass
class Notification:
    """A message shown on screen for a certain time."""

    severity: Severity
    message: str
    duration: float

    def update(self, severity: Severity, message: str, *args: object) -> None:
        """Replace the message and severity and restart the lifetime."""
        self.message = _format(message, args)
        self.severity = severity
        self.duration = MEDIUM


class Notifications:
    """The ordered collection of notifications currently on screen."""

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose
        self._items: list[Notification] = []

    def __iter__(self) -> Iterator[Notification]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def display(self, severity: Severity, message: str, duration: float) -> Notification:
        """Add a notification and return it so it can be updated later."""
        notification = Notification(severity, message, duration)
        self._items.append(notification)
        return notification

    def display_and_log(
        self, severity: Severity, prefix: str, message: str, *args: object
    ) -> Notification:
        """Format and display a message, also logging it when verbose."""
        text = _format(message, args)
        if self.verbose:
            print(f"[{prefix}]: {text}", file=sys.stderr)
        return self.display(severity, text, MEDIUM)

    def process(self, dt: float) -> None:
        """Age every notification by dt and drop the expired ones."""
        for notification in self._items:
            notification.duration -= dt
        self._items = [n for n in self._items if n.duration > 0]

    def clear(self) -> None:
        """Remove every notification."""
        self._items.clear()