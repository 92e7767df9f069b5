"""The state of a stage in play: money, lives, waves, turrets and skills."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from cybertower.cheatcode import KeySequenceDetector
from cybertower.effects import DirtyEffect, Plane
from cybertower.keys import Key, digit_value
from cybertower.tilemap import TileMap, TileType, grid_to_center
from cybertower.turrets import Shot, Turret, TurretKind, spec_for
from cybertower.waves import Wave, WaveSpawner

DANGER_TIME = 7.61
START_LIVES = 10
START_MONEY = 150
SCREEN_HEIGHT = 832
SPAWN_GRID_POINT = (-1, 0)
KEY_REPEAT_DELAY = 0.5
CHEAT_BONUS = 10000
CHAMBER_COST = 50
CHAMBER_MAX_USES = 5
CHAMBER_DAMAGE = 99999
TELEPORT_COST = 20
PLANE_SIZE = (64.0, 64.0)
ENEMY_TYPES = frozenset({1, 2, 3, 4})

_BUTTON_KINDS = {0: TurretKind.MACHINE_GUN, 1: TurretKind.LASER, 2: TurretKind.OMEN}


@dataclass(frozen=True)
class SpawnRequest:
    """An enemy the stage wants spawned, and the time it has already lived."""

    enemy_type: int
    x: float
    y: float
    elapsed: float


def danger_countdown(
    reach_end_times: Iterable[float], lives: int, danger_time: float = DANGER_TIME
) -> tuple[float, int]:
    """Return (reach time of the enemy that would end the game, warning alpha), or (-1, 0)."""
    danger = lives
    for reach in sorted(reach_end_times):
        if reach <= danger_time:
            danger -= 1
            if danger <= 0:
                ratio = (danger_time - reach) / danger_time
                alpha = max(0, min(255, int(ratio * ratio * 255)))
                return reach, alpha
    return -1.0, 0


class PlayState:
    """Everything that changes while a stage is played, independent of drawing."""

    def __init__(self, tilemap: TileMap, waves: Iterable[Wave], map_id: int = 1) -> None:
        self.tilemap = tilemap
        self.spawner = WaveSpawner(waves)
        self.map_id = map_id
        self.lives = START_LIVES
        self.money = START_MONEY
        self.speed_mult = 1
        self.kill_count = 0
        self.death_countdown = -1.0
        self.danger_alpha = 0
        self.debug_mode = False
        self.next_scene: str | None = None
        self.preview: Turret | None = None
        self.towers: list[Turret] = []
        self.enemies: list[Any] = []
        self.shots: list[Shot] = []
        self.planes: list[Plane] = []
        self.ground_effects: list[DirtyEffect] = []
        self.omen_placed = False
        self.chamber_active = False
        self.chamber_used = 0
        self.omen_teleport_pending = False
        self.omen_to_teleport: Turret | None = None
        self.last_key_time = 0.0
        self.cheat = KeySequenceDetector()

    def hit(self) -> int:
        """Lose a life; the stage is lost when none remain. Return the lives left."""
        self.lives -= 1
        if self.lives <= 0:
            self.next_scene = "lose"
        return self.lives

    def earn_money(self, amount: int) -> int:
        """Add (or with a negative amount, spend) money and return the new total."""
        self.money += amount
        return self.money

    def select_turret(self, button_id: int) -> Turret | None:
        """Start previewing the turret behind a build button, if it can be afforded."""
        self.preview = None
        kind = _BUTTON_KINDS.get(button_id)
        if kind is None or self.money < spec_for(kind).price:
            return None
        if kind is TurretKind.OMEN and self.omen_placed:
            return None
        turret = Turret(kind, 0.0, 0.0)
        turret.enabled = False
        turret.preview = True
        self.preview = turret
        return turret

    def place_turret(
        self, x: int, y: int, enemy_positions: Iterable[tuple[float, float]] = ()
    ) -> Turret | None:
        """Build the previewed turret on grid cell (x, y); return it, or None if refused."""
        if self.preview is None or not self.tilemap.in_bounds(x, y):
            return None
        if self.tilemap[x, y] == TileType.OCCUPIED:
            return None
        if not self.tilemap.check_space_valid(x, y, enemy_positions):
            cx, cy = grid_to_center(x, y, self.tilemap.block_size)
            mark = DirtyEffect(1.0, cx, cy)
            mark.rotation = 0.0
            self.ground_effects.append(mark)
            return None
        turret = self.preview
        self.earn_money(-turret.price)
        turret.x, turret.y = grid_to_center(x, y, self.tilemap.block_size)
        turret.enabled = True
        turret.preview = False
        self.towers.append(turret)
        if turret.kind is TurretKind.OMEN:
            self.omen_placed = True
        turret.update(0.0, self.enemies)
        self.preview = None
        return turret

    def _spawn_plane(self) -> Plane:
        width, height = PLANE_SIZE
        plane = Plane(
            SCREEN_HEIGHT,
            self.tilemap.width * self.tilemap.block_size,
            self.tilemap.height * self.tilemap.block_size,
            width,
            height,
        )
        self.planes.append(plane)
        return plane

    def key_down(self, key: int, now: float) -> bool:
        """Handle a key press at time `now`; presses too close together are ignored."""
        if now - self.last_key_time < KEY_REPEAT_DELAY:
            return False
        self.last_key_time = now
        if key == Key.TAB:
            self.debug_mode = not self.debug_mode
            matched = self.cheat.matched
        else:
            matched = self.cheat.feed(key)
        if matched:
            self._spawn_plane()
            self.earn_money(CHEAT_BONUS)
        digit = digit_value(key)
        if key == Key.Q:
            self.select_turret(0)
        elif key == Key.W:
            self.select_turret(1)
        elif digit is not None:
            self.speed_mult = digit
        return True

    def activate_chamber(self) -> bool:
        """Spend energy to arm the one-shot kill skill; report whether it was armed."""
        if self.kill_count >= CHAMBER_COST and not self.chamber_active:
            self.kill_count -= CHAMBER_COST
            self.chamber_active = True
            self.chamber_used = 0
            return True
        return False

    def chamber_shot(self, mx: float, my: float, enemies: Sequence[Any]) -> Any | None:
        """Kill the first visible enemy under the cursor while the skill is armed."""
        if not self.chamber_active or self.chamber_used >= CHAMBER_MAX_USES:
            return None
        for enemy in enemies:
            if not getattr(enemy, "visible", True):
                continue
            if math.hypot(mx - enemy.x, my - enemy.y) <= enemy.collision_radius:
                enemy.hit(CHAMBER_DAMAGE)
                self.chamber_used += 1
                if self.chamber_used >= CHAMBER_MAX_USES:
                    self.chamber_active = False
                return enemy
        return None

    def activate_teleport(self) -> bool:
        """Arm the placed omen turret's teleport if enough energy is stored."""
        omen = next((t for t in self.towers if t.kind is TurretKind.OMEN), None)
        if omen is None or self.kill_count < TELEPORT_COST:
            return False
        self.omen_teleport_pending = True
        self.omen_to_teleport = omen
        ghost = Turret(TurretKind.OMEN, omen.x, omen.y)
        ghost.enabled = False
        ghost.preview = True
        self.preview = ghost
        return True

    def teleport(self, mx: float, my: float) -> bool:
        """Move the armed omen turret to the cell under the cursor; report success."""
        omen = self.omen_to_teleport
        if not self.omen_teleport_pending or omen is None:
            return False
        size = self.tilemap.block_size
        x, y = int(mx // size), int(my // size)
        if not self.tilemap.in_bounds(x, y) or self.tilemap[x, y] == TileType.OCCUPIED:
            return False
        omen.x, omen.y = grid_to_center(x, y, size)
        self.kill_count -= TELEPORT_COST
        self.omen_teleport_pending = False
        self.omen_to_teleport = None
        self.preview = None
        return True

    def _update_danger(self) -> None:
        if self.speed_mult == 0:
            self.death_countdown = -1.0
        elif self.death_countdown != -1:
            self.speed_mult = 1
        reach_times = [getattr(e, "reach_end_time", math.inf) for e in self.enemies]
        countdown, alpha = danger_countdown(reach_times, self.lives)
        if countdown != -1:
            self.danger_alpha = alpha
        self.death_countdown = countdown
        if self.death_countdown == -1 and self.lives > 0:
            self.danger_alpha = 0
        if self.speed_mult == 0:
            self.death_countdown = -1.0

    def _update_objects(self, delta_time: float) -> None:
        for tower in self.towers:
            self.shots.extend(tower.update(delta_time, self.enemies))
        self.planes = [p for p in self.planes if p.update(delta_time, self.enemies)]
        self.ground_effects = [g for g in self.ground_effects if g.update(delta_time)]

    def _spawn_point(self, rng: random.Random) -> tuple[float, float]:
        cells = list(self.tilemap.walkable_cells())
        gx, gy = rng.choice(cells) if cells else SPAWN_GRID_POINT
        return grid_to_center(gx, gy, self.tilemap.block_size)

    def tick(self, delta_time: float, rng: random.Random | None = None) -> list[SpawnRequest]:
        """Advance the stage by one frame and return the enemies to spawn."""
        rng = rng if rng is not None else random.Random()
        self._update_danger()
        spawned: list[SpawnRequest] = []
        for _ in range(self.speed_mult):
            self._update_objects(delta_time)
            released = self.spawner.advance(delta_time)
            if released is None:
                if self.spawner.exhausted() and not self.enemies:
                    self.next_scene = "win"
                continue
            enemy_type, elapsed = released
            x, y = self._spawn_point(rng)
            if enemy_type not in ENEMY_TYPES:
                continue
            spawned.append(SpawnRequest(enemy_type, x, y, elapsed))
        return spawned