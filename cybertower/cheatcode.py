"""Detection of a key sequence typed during play."""

from __future__ import annotations

from collections import deque
from typing import Iterable

from cybertower.keys import Key

CHEAT_CODE: tuple[Key, ...] = (
    Key.UP, Key.UP, Key.DOWN, Key.DOWN,
    Key.LEFT, Key.RIGHT, Key.LEFT, Key.RIGHT,
    Key.B, Key.A, Key.LSHIFT, Key.ENTER,
)


class KeySequenceDetector:
    """Keeps the most recent keys and reports when they equal the code."""

    def __init__(self, code: Iterable[int] = CHEAT_CODE) -> None:
        self.code = tuple(code)
        if not self.code:
            raise ValueError("key sequence must not be empty")
        self._strokes: deque[int] = deque(maxlen=len(self.code))

    @property
    def matched(self) -> bool:
        """Whether the last keys fed spell out the code."""
        return tuple(self._strokes) == self.code

    def feed(self, key: int) -> bool:
        """Record a key and report whether the code is now complete."""
        self._strokes.append(key)
        return self.matched

    def reset(self) -> None:
        """Forget every recorded key."""
        self._strokes.clear()