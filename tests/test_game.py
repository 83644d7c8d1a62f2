import io

import pytest

from solong.game import (
    MAX_WINDOW_HEIGHT,
    MAX_WINDOW_WIDTH,
    Direction,
    Game,
    centered_view,
    count_collectables,
    find_player,
    window_height,
    window_width,
)

SMALL = [
    "1111111",
    "1P0C0E1",
    "1111111",
]


def _big_grid(px, py, cols=30, rows=20):
    grid = []
    for y in range(rows):
        if y in (0, rows - 1):
            grid.append("1" * cols)
        else:
            grid.append("1" + "0" * (cols - 2) + "1")
    row = list(grid[py])
    row[px] = "P"
    grid[py] = "".join(row)
    return grid


def _game(grid):
    out = io.StringIO()
    return Game(grid, out=out), out


def test_window_size_is_capped():
    grid = _big_grid(5, 5)
    assert window_height(grid) == MAX_WINDOW_HEIGHT == 1100
    assert window_width(grid) == MAX_WINDOW_WIDTH == 1900


def test_window_size_small_map():
    assert window_height(SMALL) == 300
    assert window_width(SMALL) < MAX_WINDOW_WIDTH


def test_find_player_locates_tile():
    x, y = find_player(SMALL)
    assert SMALL[y][x] == "P"


def test_find_player_absent():
    assert find_player(["111", "101", "111"]) == (0, 0)


def test_count_collectables():
    assert count_collectables(["1C1", "CPC", "111"]) == 3


def test_move_into_wall_does_nothing():
    game, out = _game(SMALL)
    assert game.move(Direction.UP) is False
    assert game.grid == SMALL
    assert game.moves == 0
    assert out.getvalue() == ""


def test_move_to_floor():
    game, out = _game(SMALL)
    start = (game.player_x, game.player_y)
    assert game.move(Direction.RIGHT) is True
    assert (game.player_x, game.player_y) == (start[0] + 1, start[1])
    assert game.grid[1][start[0]] == "0"
    assert game.grid[1][game.player_x] == "P"
    assert game.moves == 1
    assert out.getvalue() == "1\n"


def test_collect_and_finish():
    game, out = _game(SMALL)
    for _ in range(4):
        game.move(Direction.RIGHT)
    assert game.collected == game.collectable_total
    assert game.finished
    assert game.grid[1][game.player_x] == "e"
    assert out.getvalue().endswith("LEVEL COMPLETE\nSCORE : 4\n")


def test_no_moves_after_finish():
    game, _ = _game(SMALL)
    for _ in range(4):
        game.move(Direction.RIGHT)
    grid = game.grid
    assert game.move(Direction.LEFT) is False
    assert game.grid == grid
    assert game.moves == 4


def test_exit_locked_until_all_collected():
    grid = ["11111", "1PEC1", "11111"]
    game, _ = _game(grid)
    assert game.move(Direction.RIGHT) is False
    assert game.grid == grid
    assert not game.finished


def test_small_map_view_is_whole_map():
    game, _ = _game(SMALL)
    assert game.view() == SMALL


def test_big_map_view_follows_player():
    grid = _big_grid(15, 10)
    game, _ = _game(grid)
    view = game.view()
    assert len(view) == MAX_WINDOW_HEIGHT // 100
    assert all(len(row) == MAX_WINDOW_WIDTH // 100 for row in view)
    assert view[5][9] == "P"


def test_view_at_top_left_corner():
    grid = _big_grid(1, 1)
    assert centered_view(grid, 1, 1, 19, 11) == [row[:19] for row in grid[:11]]


def test_view_at_bottom_right_corner():
    grid = _big_grid(28, 18)
    assert centered_view(grid, 28, 18, 19, 11) == [row[-19:] for row in grid[-11:]]


def test_view_scrolls_with_moves():
    grid = _big_grid(15, 10)
    game, _ = _game(grid)
    before = game.view()
    game.move(Direction.RIGHT)
    after = game.view()
    assert after[5][9] == "P"
    assert before != after or game.player_x == 15


def test_view_too_large_raises():
    with pytest.raises(ValueError):
        centered_view(SMALL, 1, 1, 20, 3)


def test_direction_steps():
    assert (Direction.LEFT.dx, Direction.LEFT.dy) == (-1, 0)
    assert (Direction.DOWN.dx, Direction.DOWN.dy) == (0, 1)
    grid = _big_grid(10, 10)
    game, _ = _game(grid)
    for direction in Direction:
        x, y = game.player_x, game.player_y
        assert game.move(direction) is True
        assert (game.player_x, game.player_y) == (x + direction.dx, y + direction.dy)
        assert game.grid[game.player_y][game.player_x] == "P"