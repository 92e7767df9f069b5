"""Turrets: target acquisition, turning toward the target, and firing."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Sequence

BARREL_LENGTH = 36.0
LASER_SPREAD = 6.0


class Positioned(Protocol):
    """Anything a turret can aim at."""

    x: float
    y: float


class TurretKind(Enum):
    """The turrets a player can build."""

    MACHINE_GUN = "machine-gun"
    LASER = "laser"
    OMEN = "omen"


@dataclass(frozen=True)
class TurretSpec:
    """Fixed properties of one kind of turret."""

    base_image: str
    turret_image: str
    radius: float
    price: int
    cool_down: float
    bullet: str
    sound: str


_SPECS: dict[TurretKind, TurretSpec] = {
    TurretKind.MACHINE_GUN: TurretSpec(
        "play/tower-base.png", "play/turret-1.png", 200.0, 50, 0.5, "fire", "gun.wav"
    ),
    TurretKind.LASER: TurretSpec(
        "play/tower-base.png", "play/turret-2.png", 300.0, 200, 0.5, "laser", "laser.wav"
    ),
    TurretKind.OMEN: TurretSpec(
        "play/tool-base.png", "play/omen.png", 150.0, 1000, 0.05, "fire", "gun.wav"
    ),
}


def spec_for(kind: TurretKind | str) -> TurretSpec:
    """Return the specification of a turret kind."""
    return _SPECS[TurretKind(kind)]


@dataclass(frozen=True)
class Shot:
    """A bullet fired by a turret."""

    x: float
    y: float
    dx: float
    dy: float
    rotation: float
    bullet: str


def _normalize(x: float, y: float) -> tuple[float, float]:
    length = math.hypot(x, y)
    if length == 0:
        return 0.0, 0.0
    return x / length, y / length


def _facing(rotation: float) -> tuple[float, float]:
    # Rotation 0 points the sprite upward.
    return math.cos(rotation - math.pi / 2), math.sin(rotation - math.pi / 2)


def step_rotation(rotation: float, direction: tuple[float, float], max_radian: float) -> float:
    """Turn from `rotation` toward a unit `direction` by at most about `max_radian`."""
    tx, ty = direction
    if tx == 0 and ty == 0:
        return rotation
    ox, oy = _facing(rotation)
    cos_theta = min(max(ox * tx + oy * ty, -1.0), 1.0)
    radian = math.acos(cos_theta)
    if abs(radian) <= max_radian:
        rx, ry = tx, ty
    else:
        keep = abs(radian) - max_radian
        rx = (keep * ox + max_radian * tx) / radian
        ry = (keep * oy + max_radian * ty) / radian
    return math.atan2(ry, rx) + math.pi / 2


class Turret:
    """A placed turret that locks onto the first enemy in range and shoots it."""

    def __init__(self, kind: TurretKind | str, x: float, y: float) -> None:
        self.kind = TurretKind(kind)
        self.spec = spec_for(self.kind)
        self.x = float(x)
        self.y = float(y)
        self.rotation = 0.0
        self.reload = 0.0
        self.rotate_radian = 2 * math.pi
        self.enabled = True
        self.preview = False
        self.target: Positioned | None = None

    @property
    def price(self) -> int:
        return self.spec.price

    @property
    def radius(self) -> float:
        return self.spec.radius

    @property
    def cool_down(self) -> float:
        return self.spec.cool_down

    def _distance_to(self, target: Positioned) -> float:
        return math.hypot(target.x - self.x, target.y - self.y)

    def _acquire(self, targets: Sequence[Positioned]) -> None:
        if self.target is not None:
            still_present = any(t is self.target for t in targets)
            if not still_present or self._distance_to(self.target) > self.radius:
                self.target = None
        if self.target is None:
            self.target = next(
                (t for t in targets if self._distance_to(t) <= self.radius), None
            )

    def update(self, delta_time: float, targets: Sequence[Positioned]) -> list[Shot]:
        """Advance the turret by `delta_time` and return the shots it fired."""
        fired: list[Shot] = []
        if self.enabled:
            self._acquire(list(targets))
            if self.target is not None:
                direction = _normalize(self.target.x - self.x, self.target.y - self.y)
                self.rotation = step_rotation(
                    self.rotation, direction, self.rotate_radian * delta_time
                )
                self.reload -= delta_time
                if self.reload <= 0:
                    self.reload = self.cool_down
                    fired = self.shots()
        if self.kind is TurretKind.OMEN:
            self.rotation = 0.0
        return fired

    def shots(self) -> list[Shot]:
        """The bullets one volley from the barrel would produce right now."""
        bullet = self.spec.bullet
        if self.kind is TurretKind.OMEN:
            if self.target is None:
                return []
            dx, dy = _normalize(self.target.x - self.x, self.target.y - self.y)
            return [
                Shot(
                    self.x + dx * BARREL_LENGTH,
                    self.y + dy * BARREL_LENGTH,
                    dx,
                    dy,
                    math.atan2(dy, dx),
                    bullet,
                )
            ]
        diff_x, diff_y = _facing(self.rotation)
        rotation = math.atan2(diff_y, diff_x)
        nx, ny = _normalize(diff_x, diff_y)
        front_x = self.x + nx * BARREL_LENGTH
        front_y = self.y + ny * BARREL_LENGTH
        if self.kind is TurretKind.LASER:
            perp_x, perp_y = -ny, nx
            return [
                Shot(
                    front_x + side * perp_x * LASER_SPREAD,
                    front_y + side * perp_y * LASER_SPREAD,
                    diff_x,
                    diff_y,
                    rotation,
                    bullet,
                )
                for side in (-1, 1)
            ]
        return [Shot(front_x, front_y, diff_x, diff_y, rotation, bullet)]