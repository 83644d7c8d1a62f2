"""Reading and validating ``.ber`` map files."""

from __future__ import annotations

import os
from collections import Counter, deque
from collections.abc import Sequence
from os import PathLike

__all__ = [
    "MapError",
    "read_map",
    "check_path",
    "check_char",
    "check_char_counts",
    "reachable_map",
    "check_reachability",
    "validate_map",
    "load_map",
]

WALL = "1"
FLOOR = "0"
COLLECTABLE = "C"
EXIT = "E"
PLAYER = "P"

_ALLOWED_CHARS = frozenset({FLOOR, WALL, COLLECTABLE, EXIT, PLAYER, "\n"})

# Marks used in the grid returned by reachable_map().
UNREACHED = "0"
REACHED = "1"
REACHED_EXIT = "2"


class MapError(ValueError):
    """Raised when a map file is missing, malformed or unplayable."""


def read_map(path: str | PathLike[str]) -> list[str]:
    """Read a map file and return its lines without their newlines.

    The file must be non-empty and end with a newline.
    """
    try:
        with open(path, "rb") as handle:
            content = handle.read().decode("latin-1")
    except OSError as exc:
        raise MapError(f"cannot read map file {os.fspath(path)!s}: {exc.strerror or exc}") from exc
    if not content:
        raise MapError("empty map")
    if not content.endswith("\n"):
        raise MapError("no newline at EOF")
    return content[:-1].split("\n")


def check_path(path: str | PathLike[str]) -> None:
    """Check that ``path`` names a readable ``.ber`` file that is not a directory."""
    name = os.fspath(path)
    if len(name) < 4 or not name.endswith(".ber") or os.path.isdir(name):
        raise MapError(_invalid_path_message(name))
    try:
        with open(name, "rb"):
            pass
    except OSError:
        raise MapError(_invalid_path_message(name)) from None


def _invalid_path_message(name: str) -> str:
    return f"Invalid map path, wrong access rights or is a directory: '{name}'"


def check_char(char: str) -> bool:
    """Return True when ``char`` may appear in a map."""
    return char in _ALLOWED_CHARS


def check_char_counts(grid: Sequence[str]) -> None:
    """Require exactly one player, exactly one exit and at least one collectable."""
    counts = Counter(char for row in grid for char in row)
    if counts[PLAYER] != 1:
        raise MapError("no player or more than 1 player in map")
    if counts[EXIT] != 1:
        raise MapError("no exit or more than 1 exit in map")
    if not counts[COLLECTABLE]:
        raise MapError("no collectables in map")


def _find_player(grid: Sequence[str]) -> tuple[int, int]:
    for y, row in enumerate(grid):
        x = row.find(PLAYER)
        if x != -1:
            return x, y
    raise MapError("no player or more than 1 player in map")


def reachable_map(grid: Sequence[str]) -> list[str]:
    """Return a grid marking which tiles the player can reach.

    Reachable floor, collectable and player tiles are marked ``"1"``, a
    reachable exit ``"2"`` and everything else ``"0"``. The exit is reached
    but not walked through.
    """
    start_x, start_y = _find_player(grid)
    marks = [[UNREACHED] * len(row) for row in grid]
    seen = {(start_x, start_y)}
    queue = deque([(start_x, start_y)])
    while queue:
        x, y = queue.popleft()
        tile = grid[y][x]
        if tile == EXIT:
            marks[y][x] = REACHED_EXIT
            continue
        if tile not in (PLAYER, FLOOR, COLLECTABLE):
            continue
        marks[y][x] = REACHED
        for nx, ny in ((x, y + 1), (x, y - 1), (x + 1, y), (x - 1, y)):
            if (nx, ny) in seen or not (0 <= ny < len(grid) and 0 <= nx < len(grid[ny])):
                continue
            seen.add((nx, ny))
            queue.append((nx, ny))
    return ["".join(row) for row in marks]


def check_reachability(grid: Sequence[str]) -> None:
    """Require every collectable and the exit to be reachable by the player."""
    marks = reachable_map(grid)
    for row, mark_row in zip(grid, marks):
        for tile, mark in zip(row, mark_row):
            if tile in (EXIT, COLLECTABLE) and mark == UNREACHED:
                raise MapError("impossible map")


def _check_shape_and_content(grid: Sequence[str]) -> None:
    if not grid:
        raise MapError("empty newline(s) in map or map is empty")
    line_len = len(grid[0])
    for row in grid:
        if not row:
            raise MapError("empty newline(s) in map or map is empty")
        if len(row) != line_len:
            raise MapError("map is not a rectangle")
        if not all(check_char(char) for char in row):
            raise MapError("invalids char(s) in map")
    if line_len <= 2 or len(grid) <= 2:
        raise MapError("map is not wide and/or high enough")


def _check_walls(grid: Sequence[str]) -> None:
    last = len(grid) - 1
    for y, row in enumerate(grid):
        if y in (0, last):
            enclosed = all(char == WALL for char in row)
        else:
            enclosed = row[0] == WALL and row[-1] == WALL
        if not enclosed:
            raise MapError("map is not surrounded by walls")


def validate_map(grid: Sequence[str]) -> None:
    """Check shape, characters, walls, piece counts and reachability of a map."""
    _check_shape_and_content(grid)
    _check_walls(grid)
    check_char_counts(grid)
    check_reachability(grid)


def load_map(args: Sequence[str]) -> list[str]:
    """Load and validate the map named by the single command-line argument."""
    if len(args) != 1:
        raise MapError("wrong number of args")
    path = args[0]
    check_path(path)
    grid = read_map(path)
    validate_map(grid)
    return grid