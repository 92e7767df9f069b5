"""Short-lived visual effects: ground marks, explosions and the plane strike."""

from __future__ import annotations

import math
import random
from enum import IntEnum
from typing import Protocol, Sequence


class Hittable(Protocol):
    """An enemy the plane's shockwave can hit."""

    x: float
    y: float
    collision_radius: float

    def hit(self, damage: float) -> None: ...


class DirtyEffect:
    """A mark on the ground that fades out over `time_span` seconds."""

    def __init__(
        self,
        time_span: float,
        x: float,
        y: float,
        rng: random.Random | None = None,
    ) -> None:
        rng = rng if rng is not None else random.Random()
        self.time_span = float(time_span)
        self.x = float(x)
        self.y = float(y)
        self.alpha = 1.0
        self.tint = (255, 255, 255, 255)
        self.rotation = rng.uniform(-math.pi, math.pi)

    def update(self, delta_time: float) -> bool:
        """Fade the mark; return False once it has vanished."""
        self.alpha -= delta_time / self.time_span
        if self.alpha <= 0:
            return False
        r, g, b, _ = self.tint
        self.tint = (r, g, b, int(self.alpha * 255))
        return True


class ExplosionEffect:
    """A five-frame explosion animation lasting half a second."""

    time_span = 0.5

    def __init__(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)
        self.time_ticks = 0.0
        self.frames = [f"play/explosion-{i}.png" for i in range(1, 6)]
        self.image = self.frames[0]

    def update(self, delta_time: float) -> bool:
        """Advance the animation; return False once it has finished."""
        self.time_ticks += delta_time
        if self.time_ticks >= self.time_span:
            return False
        phase = math.floor(self.time_ticks / self.time_span * len(self.frames))
        self.image = self.frames[phase]
        return True


class PlaneStage(IntEnum):
    """Phases of the plane strike."""

    FLYING = 0
    LIGHT = 1
    SHOCKWAVE = 2
    DONE = 3


def _rects_overlap(
    min1: tuple[float, float],
    max1: tuple[float, float],
    min2: tuple[float, float],
    max2: tuple[float, float],
) -> bool:
    return not (
        max1[0] < min2[0] or min1[0] > max2[0] or max1[1] < min2[1] or min1[1] > max2[1]
    )


class Plane:
    """A plane that crosses the screen, then flashes and sends out a killing shockwave."""

    time_span_light = 1.0
    time_span_shockwave = 1.0
    shock_wave_radius = 180.0
    min_scale = 1.0 / 8
    max_scale = 8.0
    speed = 800.0

    def __init__(
        self,
        screen_height: float,
        client_width: float,
        client_height: float,
        width: float,
        height: float,
    ) -> None:
        self.client_width = float(client_width)
        self.client_height = float(client_height)
        self.bitmap_width = float(width)
        self.bitmap_height = float(height)
        self.x = -100.0
        self.y = float(screen_height) / 2
        self.velocity = (self.speed, 0.0)
        self.size = (self.bitmap_width, self.bitmap_height)
        self.scale = 1.0
        self.collision_radius = 0.0
        self.stage = PlaneStage.FLYING
        self.time_ticks = 0.0
        self.frames = [f"play/light-{i}.png" for i in range(1, 11)]
        self.shockwave = "play/shockwave.png"
        self.image = "play/plane.png"

    def _grow(self) -> None:
        total = self.time_span_light + self.time_span_shockwave
        exponent = (
            (total - self.time_ticks) * math.log2(self.min_scale)
            + self.time_ticks * math.log2(self.max_scale)
        ) / total
        self.scale = 2.0 ** exponent
        self.size = (self.bitmap_width * self.scale, self.bitmap_height * self.scale)
        self.collision_radius = self.shock_wave_radius * self.scale

    def update(self, delta_time: float, targets: Sequence[Hittable] = ()) -> bool:
        """Advance the strike; return False once the effect is over."""
        if self.stage is PlaneStage.FLYING:
            half_w, half_h = self.size[0] / 2, self.size[1] / 2
            visible = _rects_overlap(
                (self.x - half_w, self.y - half_h),
                (self.x + half_w, self.y + half_h),
                (-100.0, 0.0),
                (self.client_width, self.client_height),
            )
            if not visible:
                self.x = self.client_width / 2
                self.y = self.client_height / 2
                self.velocity = (0.0, 0.0)
                self.image = self.frames[0]
                self.scale = self.min_scale
                self.size = (
                    self.bitmap_width * self.min_scale,
                    self.bitmap_height * self.min_scale,
                )
                self.stage = PlaneStage.LIGHT
        elif self.stage is PlaneStage.LIGHT:
            self.time_ticks += delta_time
            if self.time_ticks >= self.time_span_light:
                self.image = self.shockwave
                self.stage = PlaneStage.SHOCKWAVE
            else:
                self._grow()
                phase = math.floor(self.time_ticks / self.time_span_light * len(self.frames))
                self.image = self.frames[phase]
        elif self.stage is PlaneStage.SHOCKWAVE:
            self.time_ticks += delta_time
            if self.time_ticks >= self.time_span_light + self.time_span_shockwave:
                self.time_ticks = 0.0
                self.stage = PlaneStage.DONE
            else:
                self._grow()
                for target in list(targets):
                    reach = self.collision_radius + target.collision_radius
                    if math.hypot(target.x - self.x, target.y - self.y) <= reach:
                        target.hit(math.inf)
        else:
            return False
        self.x += self.velocity[0] * delta_time
        self.y += self.velocity[1] * delta_time
        return True