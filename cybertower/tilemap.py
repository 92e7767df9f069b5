"""The tile grid of a stage and the path distances enemies follow on it."""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Iterable, Iterator

MAP_WIDTH = 20
MAP_HEIGHT = 13
BLOCK_SIZE = 64

_NEIGHBOURS = ((0, 1), (0, -1), (1, 0), (-1, 0))


class TileType(IntEnum):
    """What occupies one cell of the map."""

    DIRT = 0
    FLOOR = 1
    OCCUPIED = 2


class MapCorruptedError(ValueError):
    """Raised when map data cannot be read as a grid of the expected size."""

    def __init__(self, message: str = "Map data is corrupted.") -> None:
        super().__init__(message)


def grid_to_center(x: int, y: int, block_size: int = BLOCK_SIZE) -> tuple[float, float]:
    """Return the pixel centre of grid cell (x, y)."""
    half = block_size // 2
    return float(x * block_size + half), float(y * block_size + half)


@dataclass
class TileMap:
    """A rectangular grid of tiles with the reverse-BFS distance to the exit."""

    tiles: list[list[TileType]]
    block_size: int = BLOCK_SIZE
    distance: list[list[int]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.tiles or not self.tiles[0]:
            raise MapCorruptedError()
        width = len(self.tiles[0])
        if any(len(row) != width for row in self.tiles):
            raise MapCorruptedError()
        self.tiles = [[TileType(t) for t in row] for row in self.tiles]
        self.distance = self.bfs_distance()

    @property
    def width(self) -> int:
        return len(self.tiles[0])

    @property
    def height(self) -> int:
        return len(self.tiles)

    def __getitem__(self, pos: tuple[int, int]) -> TileType:
        x, y = pos
        return self.tiles[y][x]

    def __setitem__(self, pos: tuple[int, int], tile: TileType) -> None:
        x, y = pos
        self.tiles[y][x] = TileType(tile)

    def in_bounds(self, x: int, y: int) -> bool:
        """Whether (x, y) lies inside the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def bfs_distance(self) -> list[list[int]]:
        """Steps from each dirt cell to the bottom-right cell; -1 if unreachable."""
        dist = [[-1] * self.width for _ in range(self.height)]
        end_x, end_y = self.width - 1, self.height - 1
        if self.tiles[end_y][end_x] != TileType.DIRT:
            return dist
        dist[end_y][end_x] = 0
        queue = deque([(end_x, end_y)])
        while queue:
            px, py = queue.popleft()
            for dx, dy in _NEIGHBOURS:
                nx, ny = px + dx, py + dy
                if (
                    self.in_bounds(nx, ny)
                    and self.tiles[ny][nx] == TileType.DIRT
                    and dist[ny][nx] == -1
                ):
                    dist[ny][nx] = dist[py][px] + 1
                    queue.append((nx, ny))
        return dist

    def walkable_cells(self) -> Iterator[tuple[int, int]]:
        """Yield the (x, y) of every dirt cell, row by row."""
        for y, row in enumerate(self.tiles):
            for x, tile in enumerate(row):
                if tile == TileType.DIRT:
                    yield x, y

    def _clamped_cell(self, px: float, py: float) -> tuple[int, int]:
        gx = min(max(math.floor(px / self.block_size), 0), self.width - 1)
        gy = min(max(math.floor(py / self.block_size), 0), self.height - 1)
        return gx, gy

    def check_space_valid(
        self, x: int, y: int, enemy_positions: Iterable[tuple[float, float]] = ()
    ) -> bool:
        """Try to occupy floor cell (x, y) without cutting any enemy off the exit.

        On success the cell becomes occupied and the distances are refreshed.
        """
        if not self.in_bounds(x, y) or self.tiles[y][x] != TileType.FLOOR:
            return False
        original = self.tiles[y][x]
        self.tiles[y][x] = TileType.OCCUPIED
        try:
            candidate = self.bfs_distance()
        finally:
            self.tiles[y][x] = original
        if candidate[0][0] == -1:
            return False
        for px, py in enemy_positions:
            gx, gy = self._clamped_cell(px, py)
            if candidate[gy][gx] == -1:
                return False
        self.tiles[y][x] = TileType.OCCUPIED
        self.distance = candidate
        return True


def parse_map(text: str, width: int = MAP_WIDTH, height: int = MAP_HEIGHT) -> TileMap:
    """Build a map from '0' (dirt) and '1' (floor) characters; whitespace is ignored."""
    cells: list[TileType] = []
    for ch in text:
        if ch.isspace():
            continue
        if ch == "0":
            cells.append(TileType.DIRT)
        elif ch == "1":
            cells.append(TileType.FLOOR)
        else:
            raise MapCorruptedError()
    if len(cells) != width * height:
        raise MapCorruptedError()
    rows = [cells[r * width:(r + 1) * width] for r in range(height)]
    return TileMap(rows)


def load_map(path: str | Path, width: int = MAP_WIDTH, height: int = MAP_HEIGHT) -> TileMap:
    """Read and parse a map file."""
    return parse_map(Path(path).read_text(), width, height)