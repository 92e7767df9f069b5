"""Enemy wave schedules and the timer that releases them."""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable


@dataclass(frozen=True)
class Wave:
    """One enemy to spawn after waiting `wait` seconds."""

    enemy_type: int
    wait: float


def parse_waves(text: str) -> list[Wave]:
    """Parse 'type wait repeat' triples; reading stops at the first bad or partial triple."""
    tokens = text.split()
    waves: list[Wave] = []
    for start in range(0, len(tokens) - 2, 3):
        try:
            enemy_type, wait, repeat = (float(t) for t in tokens[start:start + 3])
        except ValueError:
            break
        count = math.ceil(repeat) if repeat > 0 else 0
        waves.extend(Wave(int(enemy_type), wait) for _ in range(count))
    return waves


def load_waves(path: str | Path) -> list[Wave]:
    """Read a wave file; a missing file gives an empty schedule."""
    try:
        text = Path(path).read_text()
    except FileNotFoundError:
        return []
    return parse_waves(text)


class WaveSpawner:
    """Releases queued waves one at a time as game time passes."""

    def __init__(self, waves: Iterable[Wave]) -> None:
        self._queue: deque[Wave] = deque(waves)
        self.ticks = 0.0

    def __len__(self) -> int:
        return len(self._queue)

    def advance(self, delta_time: float) -> tuple[int, float] | None:
        """Advance the clock; return (enemy_type, time already elapsed) when one spawns."""
        self.ticks += delta_time
        if not self._queue:
            return None
        current = self._queue[0]
        if self.ticks < current.wait:
            return None
        self.ticks -= current.wait
        self._queue.popleft()
        return current.enemy_type, self.ticks

    def exhausted(self) -> bool:
        """Whether every wave has been released."""
        return not self._queue