"""Game state: player movement, scoring and the visible part of the map."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from enum import Enum
from typing import TextIO

__all__ = [
    "TILE_SIZE",
    "MAX_WINDOW_WIDTH",
    "MAX_WINDOW_HEIGHT",
    "Direction",
    "Game",
    "window_height",
    "window_width",
    "find_player",
    "count_collectables",
    "centered_view",
]

TILE_SIZE = 100
MAX_WINDOW_WIDTH = 1900
MAX_WINDOW_HEIGHT = 1100

WALL = "1"
FLOOR = "0"
COLLECTABLE = "C"
EXIT = "E"
PLAYER = "P"
PLAYER_ON_EXIT = "e"

# Margins kept around the player when the map is larger than the window.
_VIEW_MARGIN_Y = 5
_VIEW_MARGIN_X = 9


class Direction(Enum):
    """A step on the grid, as (dx, dy)."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


def window_height(grid: Sequence[str]) -> int:
    """Window height in pixels for ``grid``, capped at 1100."""
    return min(len(grid) * TILE_SIZE, MAX_WINDOW_HEIGHT)


def window_width(grid: Sequence[str]) -> int:
    """Window width in pixels for ``grid``, capped at 1900."""
    return min(len(grid[0]) * TILE_SIZE, MAX_WINDOW_WIDTH)


def find_player(grid: Sequence[str]) -> tuple[int, int]:
    """Return (x, y) of the first player tile, or (0, 0) when there is none."""
    for y, row in enumerate(grid):
        x = row.find(PLAYER)
        if x != -1:
            return x, y
    return 0, 0


def count_collectables(grid: Sequence[str]) -> int:
    """Number of collectable tiles in ``grid``."""
    return sum(row.count(COLLECTABLE) for row in grid)


def _view_start(player: int, last: int, threshold: int, margin: int) -> int:
    if last < threshold or player <= margin:
        return 0
    if player < last - margin:
        return player - margin
    return last - 2 * margin


def centered_view(
    grid: Sequence[str], player_x: int, player_y: int, width: int, height: int
) -> list[str]:
    """Return the ``width`` x ``height`` tiles of ``grid`` shown around the player.

    The view follows the player but never scrolls past the edges of the map.
    Raises ValueError when the view does not fit inside the map.
    """
    last_y = len(grid) - 1
    last_x = len(grid[0]) - 1
    start_y = _view_start(player_y, last_y, 11, _VIEW_MARGIN_Y)
    start_x = _view_start(player_x, last_x, 19, _VIEW_MARGIN_X)
    rows = grid[start_y:start_y + height]
    view = [row[start_x:start_x + width] for row in rows]
    if len(view) != height or any(len(row) != width for row in view):
        raise ValueError(f"a {width}x{height} view does not fit the map")
    return view


class Game:
    """A running level: the map, the player's position and the score."""

    def __init__(self, grid: Sequence[str], out: TextIO | None = None) -> None:
        self._tiles = [list(row) for row in grid]
        self.player_x, self.player_y = find_player(grid)
        self.moves = 0
        self.collected = 0
        self.collectable_total = count_collectables(grid)
        self._out = out if out is not None else sys.stdout

    @property
    def grid(self) -> list[str]:
        """The current map as a list of rows."""
        return ["".join(row) for row in self._tiles]

    @property
    def finished(self) -> bool:
        """True once the player stands on the exit."""
        return self._tiles[self.player_y][self.player_x] == PLAYER_ON_EXIT

    @property
    def window_size(self) -> tuple[int, int]:
        """Window (width, height) in pixels."""
        grid = self.grid
        return window_width(grid), window_height(grid)

    def move(self, direction: Direction) -> bool:
        """Try to step the player one tile; return True if the player moved."""
        if self.finished:
            return False
        x, y = self.player_x + direction.dx, self.player_y + direction.dy
        if not (0 <= y < len(self._tiles) and 0 <= x < len(self._tiles[y])):
            return False
        target = self._tiles[y][x]
        exit_open = target == EXIT and self.collected == self.collectable_total
        if target not in (FLOOR, COLLECTABLE) and not exit_open:
            return False
        if target == COLLECTABLE:
            self.collected += 1
        self._tiles[y][x] = PLAYER_ON_EXIT if target == EXIT else PLAYER
        self._tiles[self.player_y][self.player_x] = FLOOR
        self.player_x, self.player_y = x, y
        self.moves += 1
        print(self.moves, file=self._out)
        if target == EXIT:
            print(f"LEVEL COMPLETE\nSCORE : {self.moves}", file=self._out)
        return True

    def view(self) -> list[str]:
        """The rows of tiles to draw in the window."""
        width, height = self.window_size
        grid = self.grid
        if height < MAX_WINDOW_HEIGHT and width < MAX_WINDOW_WIDTH:
            return grid
        return centered_view(
            grid, self.player_x, self.player_y, width // TILE_SIZE, height // TILE_SIZE
        )