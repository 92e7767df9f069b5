import random
from dataclasses import dataclass

import pytest

from cybertower.game import (
    CHEAT_BONUS,
    DANGER_TIME,
    START_LIVES,
    START_MONEY,
    PlayState,
    danger_countdown,
)
from cybertower.cheatcode import CHEAT_CODE
from cybertower.keys import Key
from cybertower.tilemap import TileType, parse_map
from cybertower.turrets import TurretKind
from cybertower.waves import Wave

FLOOR_CELL = (5, 0)


def make_map(floor_cells=(FLOOR_CELL,)):
    rows = [["0"] * 20 for _ in range(13)]
    for x, y in floor_cells:
        rows[y][x] = "1"
    return parse_map("\n".join("".join(r) for r in rows))


def make_state(waves=(), floor_cells=(FLOOR_CELL,)):
    return PlayState(make_map(floor_cells), list(waves), 1)


@dataclass
class FakeEnemy:
    x: float
    y: float
    collision_radius: float = 10.0
    reach_end_time: float = 100.0
    hp: float = 10.0
    visible: bool = True

    def hit(self, damage):
        self.hp -= damage


def test_danger_countdown_none():
    assert danger_countdown([], 10) == (-1.0, 0)
    assert danger_countdown([DANGER_TIME + 1], 1) == (-1.0, 0)


def test_danger_countdown_picks_lives_th_enemy():
    countdown, alpha = danger_countdown([2.0, 1.0, 5.0], 2)
    assert countdown == 2.0
    assert 0 <= alpha <= 255


def test_danger_countdown_full_alpha_at_zero():
    assert danger_countdown([0.0], 1) == (0.0, 255)


def test_hit_and_lose():
    state = make_state()
    assert state.hit() == START_LIVES - 1
    assert state.next_scene is None
    for _ in range(START_LIVES - 1):
        state.hit()
    assert state.lives == 0
    assert state.next_scene == "lose"


def test_earn_money():
    state = make_state()
    assert state.earn_money(25) == START_MONEY + 25
    assert state.earn_money(-25) == START_MONEY


def test_select_turret_respects_price():
    state = make_state()
    preview = state.select_turret(0)
    assert preview.kind is TurretKind.MACHINE_GUN
    assert preview.preview and not preview.enabled
    assert state.select_turret(1) is None
    assert state.preview is None
    state.earn_money(1000)
    assert state.select_turret(1).kind is TurretKind.LASER
    assert state.select_turret(7) is None


def test_place_turret_on_floor():
    state = make_state()
    state.select_turret(0)
    turret = state.place_turret(*FLOOR_CELL)
    assert turret in state.towers
    assert state.money == START_MONEY - turret.price
    assert state.tilemap[FLOOR_CELL] == TileType.OCCUPIED
    assert (turret.x, turret.y) == (5 * 64 + 32, 32)
    assert turret.enabled and not turret.preview
    assert state.preview is None


def test_place_turret_on_dirt_is_refused():
    state = make_state()
    state.select_turret(0)
    assert state.place_turret(0, 5) is None
    assert len(state.ground_effects) == 1
    assert state.money == START_MONEY
    assert state.towers == []


def test_place_without_preview():
    state = make_state()
    assert state.place_turret(*FLOOR_CELL) is None


def test_only_one_omen():
    state = make_state()
    state.earn_money(5000)
    state.select_turret(2)
    state.place_turret(*FLOOR_CELL)
    assert state.omen_placed
    assert state.select_turret(2) is None


def test_cheat_code_spawns_plane_and_pays():
    state = make_state()
    for i, key in enumerate(CHEAT_CODE, start=1):
        assert state.key_down(key, float(i))
    assert state.money == START_MONEY + CHEAT_BONUS
    assert len(state.planes) == 1


def test_keys_too_close_are_ignored():
    state = make_state()
    assert state.key_down(Key.DIGIT_3, 1.0)
    assert not state.key_down(Key.DIGIT_5, 1.2)
    assert state.speed_mult == 3


def test_tab_toggles_debug_and_q_selects():
    state = make_state()
    state.key_down(Key.TAB, 1.0)
    assert state.debug_mode
    state.key_down(Key.Q, 2.0)
    assert state.preview.kind is TurretKind.MACHINE_GUN


def test_chamber_skill():
    state = make_state()
    assert not state.activate_chamber()
    state.kill_count = 60
    assert state.activate_chamber()
    assert state.kill_count == 10
    enemies = [FakeEnemy(100, 100) for _ in range(6)]
    assert state.chamber_shot(500, 500, enemies) is None
    for _ in range(5):
        assert state.chamber_shot(100, 100, enemies) is not None
    assert not state.chamber_active
    assert state.chamber_shot(100, 100, enemies) is None
    assert all(e.hp < 0 for e in enemies[:1])


def test_teleport_moves_omen():
    state = make_state()
    state.earn_money(5000)
    state.select_turret(2)
    omen = state.place_turret(*FLOOR_CELL)
    assert not state.activate_teleport()
    state.kill_count = 30
    assert state.activate_teleport()
    assert state.preview.kind is TurretKind.OMEN
    assert state.teleport(2 * 64 + 10, 3 * 64 + 10)
    assert (omen.x, omen.y) == (2 * 64 + 32, 3 * 64 + 32)
    assert state.kill_count == 10
    assert not state.omen_teleport_pending
    assert state.preview is None


def test_teleport_onto_occupied_refused():
    state = make_state()
    state.earn_money(5000)
    state.select_turret(2)
    state.place_turret(*FLOOR_CELL)
    state.kill_count = 30
    state.activate_teleport()
    assert not state.teleport(5 * 64 + 1, 1)
    assert state.kill_count == 30


def test_tick_spawns_then_wins():
    state = make_state([Wave(1, 1.0)])
    rng = random.Random(0)
    assert state.tick(0.5, rng) == []
    spawned = state.tick(0.6, rng)
    assert len(spawned) == 1
    request = spawned[0]
    assert request.enemy_type == 1
    assert request.elapsed == pytest.approx(0.1)
    assert (request.x - 32) % 64 == 0 and (request.y - 32) % 64 == 0
    gx, gy = int(request.x // 64), int(request.y // 64)
    assert state.tilemap[gx, gy] == TileType.DIRT
    state.enemies.append(FakeEnemy(request.x, request.y))
    state.tick(0.1, rng)
    assert state.next_scene is None
    state.enemies.clear()
    state.tick(0.1, rng)
    assert state.next_scene == "win"


def test_tick_unknown_enemy_type_skipped():
    state = make_state([Wave(9, 0.0)])
    assert state.tick(0.1, random.Random(1)) == []
    assert state.spawner.exhausted()


def test_tick_paused_does_nothing():
    state = make_state([Wave(1, 0.0)])
    state.speed_mult = 0
    assert state.tick(1.0, random.Random(2)) == []
    assert len(state.spawner) == 1
    assert state.death_countdown == -1


def test_tick_danger_sets_countdown():
    state = make_state([Wave(1, 100.0)])
    state.lives = 1
    state.enemies.append(FakeEnemy(0, 0, reach_end_time=0.0))
    state.tick(0.01, random.Random(3))
    assert state.death_countdown == 0.0
    assert state.danger_alpha == 255