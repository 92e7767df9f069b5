# cybertower

The rules of a grid-based tower defense game, with no rendering or audio:
a 20×13 tile map with reverse-BFS pathing, timed enemy waves, three turret
kinds, timelines for the visual effects, a cheat-code detector, buttons and
sliders as plain hit-test objects, a paged scoreboard and the flow between the
game's scenes.

It is plain Python with no third-party dependencies.

## Maps and paths

A map is a grid of `0` (dirt, walkable) and `1` (floor, buildable) characters;
whitespace is ignored and any other character raises `MapCorruptedError`, as
does a cell count other than `width * height`. Distances are counted backwards
from the bottom-right tile, which is where enemies head; unreachable cells
hold `-1`.

```python
from cybertower.tilemap import parse_map

tilemap = parse_map("\n".join(["0" * 20] * 13), 20, 13)

print(tilemap.distance[12][19])       # 0: the exit itself
print(tilemap.in_bounds(25, 3))       # False
print(next(tilemap.walkable_cells())) # (0, 0)
```

`TileMap.check_space_valid(x, y, enemy_positions)` accepts only a floor tile
that, once occupied, still leaves the top-left tile and every enemy's tile
(enemy positions are in pixels) connected to the exit. On success the tile
becomes `TileType.OCCUPIED` and `distance` is refreshed. `load_map(path,
width, height)` reads the same format from a file, and
`grid_to_center(x, y, block_size)` gives a tile's pixel centre.

## Waves

Wave text holds triples of numbers: enemy type, wait time and repeat count.
Reading stops at the first malformed or incomplete triple. `load_waves(path)`
returns an empty schedule when the file is missing.

```python
from cybertower.waves import parse_waves, WaveSpawner

spawner = WaveSpawner(parse_waves("1 2.0 3\n3 1.5 1\n"))
print(len(spawner))                   # 4
print(spawner.advance(2.5))           # (1, 0.5): type and time already elapsed
print(spawner.advance(0.1))           # None: the next wait has not passed
print(spawner.exhausted())            # False
```

`advance` releases at most one enemy per call.

## Turrets

`cybertower.turrets` defines `TurretKind` (`MACHINE_GUN`, `LASER`, `OMEN`),
`spec_for(kind)` returning each kind's `TurretSpec` (images, range, price,
cool-down, bullet and sound) and `Turret`.

`Turret(kind, x, y).update(delta_time, targets)` keeps or drops its current
target, locks onto the first target in range (anything with `x` and `y`),
turns towards it at a bounded rate (`step_rotation`) and returns the `Shot`s
fired when its reload runs out. The laser fires two parallel shots; the omen
turret never rotates and fires straight at its target.

## Effects

`cybertower.effects` holds the timelines of three effects. Each `update`
returns `False` once the effect is over.

- `DirtyEffect(time_span, x, y, rng)` fades its alpha to zero.
- `ExplosionEffect(x, y)` steps through five frames in half a second.
- `Plane(screen_height, client_width, client_height, width, height)` flies
  right until it leaves the play area, then flashes at the centre and sends
  out a growing shockwave that calls `hit(math.inf)` on every target it
  touches (targets need `x`, `y`, `collision_radius` and `hit`).

## Keys and the cheat code

`cybertower.keys.Key` lists the key codes the game uses; `digit_value(key)`
and `key_to_char(key)` map number, letter and space keys.

```python
from cybertower.keys import Key
from cybertower.cheatcode import KeySequenceDetector

detector = KeySequenceDetector([Key.UP, Key.UP, Key.DOWN, Key.DOWN])
for key in (Key.UP, Key.UP, Key.DOWN, Key.DOWN):
    matched = detector.feed(key)
print(matched)                        # True
```

With no argument the detector waits for the built-in `CHEAT_CODE`.

## Playing a stage

`cybertower.game.PlayState(tilemap, waves, map_id)` holds a stage's lives
(10), money (150), energy (`kill_count`), towers and skills.

- `tick(delta_time, rng)` updates danger, towers, planes and ground marks,
  runs the wave timer `speed_mult` times and returns `SpawnRequest`s placed
  on random walkable tiles; `next_scene` becomes `"win"` when the waves are
  spent and `enemies` is empty.
- `hit()` removes a life and sets `next_scene` to `"lose"` at zero.
- `earn_money(amount)` adds or spends money.
- `select_turret(button_id)` (0 machine gun, 1 laser, 2 omen, only one omen
  per stage) starts a preview if affordable; `place_turret(x, y,
  enemy_positions)` builds it, or drops a `DirtyEffect` on an invalid tile.
- `key_down(key, now)` ignores presses less than 0.5 s apart, toggles
  `debug_mode` on Tab, feeds the cheat code (which spawns a `Plane` and adds
  10000 money), selects turrets on Q and W, and sets `speed_mult` from digit
  keys.
- `activate_chamber()` spends 50 energy to allow up to five
  `chamber_shot(mx, my, enemies)` instant kills.
- `activate_teleport()` and `teleport(mx, my)` move the placed omen turret
  to another free tile for 20 energy.

`danger_countdown(reach_end_times, lives, danger_time)` returns the reach time
of the enemy that would end the game and the warning alpha, or `(-1.0, 0)`.

## Buttons and sliders

`cybertower.ui` has `Button` (calls `on_click` on a left click while hovered
and enabled), `PriceButton` (`refresh(money)` enables it only when affordable)
and `Slider` (a knob dragged along a bar, reporting values clamped to [0, 1]
through `on_value_changed`).

## Scores

```python
from cybertower.scoreboard import NameEntry, Scoreboard, ScoreEntry, append_score, compute_score

score = compute_score(kills=40, money=310, lives=7)     # 1050
append_score("scoreboard.txt", ScoreEntry("ALICE", score, "2025-01-31"))

board = Scoreboard.load("scoreboard.txt", 5)            # highest score first
for entry in board.current_entries():
    print(entry.name, entry.score, entry.datetime)
board.next_page()
```

`NameEntry.press(key)` types digits, letters and spaces up to twelve
characters and handles backspace; `final_name()` falls back to `anonymous`.

## Scenes

`build_game()` returns a `SceneManager` with the start, stage-select, play,
settings, scoreboard, win and lose scenes registered and the start scene
active. `change_scene(name)` terminates the active scene and initializes the
named one. The play scene reads `map<N>.txt` and `enemy<N>.txt` from the
manager's `resource_dir` (`Resource` by default); the win scene appends to
`scoreboard.txt` there. `AudioSettings` keeps the music and effect volumes
the settings scene's sliders change.

## What it does not do

There is no window, drawing, sound playback or input loop, and no command to
start a game: a front end must feed mouse and key events and frame times in.
Enemies are not modelled — `PlayState` returns spawn requests and works with
whatever enemy objects the caller places in `enemies` — and fired `Shot`s are
collected in `PlayState.shots` but not moved or collided.