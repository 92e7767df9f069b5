import pytest

from cybertower.tilemap import (
    BLOCK_SIZE,
    MAP_HEIGHT,
    MAP_WIDTH,
    MapCorruptedError,
    TileMap,
    TileType,
    grid_to_center,
    load_map,
    parse_map,
)

OPEN_3X3 = "000\n010\n000\n"


def test_parse_map_tiles():
    tm = parse_map("01\n10\n", 2, 2)
    assert tm.tiles == [
        [TileType.DIRT, TileType.FLOOR],
        [TileType.FLOOR, TileType.DIRT],
    ]
    assert (tm.width, tm.height) == (2, 2)


def test_parse_map_default_size():
    text = ("0" * MAP_WIDTH + "\n") * MAP_HEIGHT
    tm = parse_map(text)
    assert (tm.width, tm.height) == (MAP_WIDTH, MAP_HEIGHT)


def test_parse_map_rejects_bad_character():
    with pytest.raises(MapCorruptedError):
        parse_map("0x\n00\n", 2, 2)


def test_parse_map_rejects_wrong_count():
    with pytest.raises(MapCorruptedError):
        parse_map("000\n", 2, 2)


def test_load_map_reads_file(tmp_path):
    path = tmp_path / "map1.txt"
    path.write_text(OPEN_3X3)
    tm = load_map(path, 3, 3)
    assert tm[1, 1] == TileType.FLOOR
    assert tm[0, 0] == TileType.DIRT


def test_bfs_end_is_zero_and_neighbours_step_by_one():
    tm = parse_map(OPEN_3X3, 3, 3)
    dist = tm.bfs_distance()
    assert dist[2][2] == 0
    assert dist[1][1] == -1
    for y in range(3):
        for x in range(3):
            if dist[y][x] > 0:
                around = [
                    dist[y + dy][x + dx]
                    for dx, dy in ((0, 1), (0, -1), (1, 0), (-1, 0))
                    if tm.in_bounds(x + dx, y + dy) and dist[y + dy][x + dx] >= 0
                ]
                assert min(around) == dist[y][x] - 1


def test_bfs_unreachable_when_exit_blocked():
    tm = parse_map("00\n01\n", 2, 2)
    assert tm.bfs_distance() == [[-1, -1], [-1, -1]]


def test_distance_cached_on_construction():
    tm = parse_map(OPEN_3X3, 3, 3)
    assert tm.distance == tm.bfs_distance()


def test_walkable_cells_are_dirt_in_row_order():
    tm = parse_map(OPEN_3X3, 3, 3)
    cells = list(tm.walkable_cells())
    assert (1, 1) not in cells
    assert len(cells) == 8
    assert cells == sorted(cells, key=lambda c: (c[1], c[0]))
    assert all(tm[c] == TileType.DIRT for c in cells)


def test_in_bounds():
    tm = parse_map(OPEN_3X3, 3, 3)
    assert tm.in_bounds(0, 0)
    assert tm.in_bounds(2, 2)
    assert not tm.in_bounds(3, 0)
    assert not tm.in_bounds(0, -1)


def test_check_space_valid_places_on_floor():
    tm = parse_map(OPEN_3X3, 3, 3)
    assert tm.check_space_valid(1, 1)
    assert tm[1, 1] == TileType.OCCUPIED
    assert not tm.check_space_valid(1, 1)


def test_check_space_valid_rejects_dirt_and_out_of_bounds():
    tm = parse_map(OPEN_3X3, 3, 3)
    assert not tm.check_space_valid(0, 0)
    assert not tm.check_space_valid(5, 5)
    assert tm[0, 0] == TileType.DIRT


def test_check_space_valid_rejects_when_start_unreachable():
    tm = parse_map("00\n01\n", 2, 2)
    tm[0, 1] = TileType.FLOOR
    assert not tm.check_space_valid(0, 1)
    assert tm[0, 1] == TileType.FLOOR


def test_check_space_valid_rejects_stranded_enemy():
    tm = parse_map("001\n010\n000\n", 3, 3)
    enemy_on_floor = grid_to_center(2, 0)
    assert not tm.check_space_valid(1, 1, [enemy_on_floor])
    assert tm[1, 1] == TileType.FLOOR


def test_check_space_valid_clamps_enemy_positions():
    tm = parse_map(OPEN_3X3, 3, 3)
    assert tm.check_space_valid(1, 1, [(-500.0, -500.0), (10_000.0, 10_000.0)])


def test_grid_to_center_round_trip():
    for x, y in [(0, 0), (3, 7), (19, 12)]:
        cx, cy = grid_to_center(x, y)
        assert (int(cx // BLOCK_SIZE), int(cy // BLOCK_SIZE)) == (x, y)
        assert cx - x * BLOCK_SIZE == BLOCK_SIZE / 2


def test_ragged_rows_rejected():
    with pytest.raises(MapCorruptedError):
        TileMap([[TileType.DIRT, TileType.DIRT], [TileType.DIRT]])