"""Property animations used to move and fade menu elements."""

from __future__ import annotations

import math
from typing import Any, Callable

Easing = Callable[[float, float, float, float], float]


def out_sine(t: float, b: float, c: float, d: float) -> float:
    """Sinusoidal ease-out: start fast, slow down towards the end."""
    return c * math.sin(t / d * (math.pi / 2)) + b


class Tween:
    """Interpolates a value from begin to end over a duration."""

    def __init__(
        self, begin: float, end: float, duration: float, easing: Easing = out_sine
    ) -> None:
        self.begin = begin
        self.end = end
        self.duration = duration
        self.easing = easing
        self.time = 0.0

    def update(self, dt: float) -> tuple[float, bool]:
        """Advance by dt; return the current value and whether it is finished."""
        time = self.time + dt
        if time <= 0:
            self.time = 0.0
            current = self.begin
        elif time >= self.duration:
            self.time = self.duration
            current = self.end
        else:
            self.time = time
            current = self.easing(time, self.begin, self.end - self.begin, self.duration)
        return current, self.time >= self.duration


class Tweens:
    """The running animations, at most one per attribute of an object."""

    def __init__(self) -> None:
        self._tweens: dict[tuple[int, str], tuple[Any, Tween]] = {}

    def __len__(self) -> int:
        return len(self._tweens)

    def set(self, target: Any, attr: str, end: float, duration: float) -> None:
        """Animate target.attr from its current value to end."""
        tween = Tween(getattr(target, attr), end, duration)
        self._tweens[(id(target), attr)] = (target, tween)

    def update(self, dt: float) -> None:
        """Advance every animation, dropping the finished ones."""
        for key, (target, tween) in list(self._tweens.items()):
            value, finished = tween.update(dt)
            setattr(target, key[1], value)
            if finished:
                del self._tweens[key]

    def fast_forward(self) -> None:
        """Finish every running animation at once."""
        self.update(10)