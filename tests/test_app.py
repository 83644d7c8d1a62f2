import io

import pygame
import pytest

from solong.app import (
    ALTERNATE_PLAYER_SPRITE,
    COLLECTABLE_SPRITE,
    EXIT_SPRITE,
    FLOOR_SPRITE,
    PLAYER_SPRITE,
    WALL_SPRITE,
    App,
    main,
    tile_path,
)
from solong.game import TILE_SIZE, Game
from solong.xpm import XpmError

GRID = [
    "11111",
    "1P0C1",
    "1E001",
    "11111",
]


def make_app(screen=None):
    return App(Game(GRID, out=io.StringIO()), screen=screen)


@pytest.mark.parametrize(
    "tile, expected",
    [
        ("1", "./assets/sprites/objects/wall.xpm"),
        ("0", "./assets/sprites/tilesets/grass.xpm"),
        ("E", "./assets/sprites/objects/door.xpm"),
        ("e", "assets/sprites/objects/doorwin.xpm"),
        ("C", "assets/sprites/objects/collectable.xpm"),
    ],
)
def test_tile_path(tile, expected):
    assert tile_path(tile, PLAYER_SPRITE) == expected


def test_tile_path_player_uses_given_sprite():
    assert tile_path("P", "custom.xpm") == "custom.xpm"


def test_escape_stops_the_app():
    app = make_app()
    assert app.handle_key(pygame.K_ESCAPE) is False
    assert app.running is False


def test_unknown_key_changes_nothing():
    app = make_app()
    assert app.handle_key(pygame.K_q) is True
    assert app.game.grid == GRID
    assert app.game.moves == 0


def test_right_key_moves_player():
    app = make_app()
    assert app.handle_key(pygame.K_RIGHT) is True
    assert (app.game.player_x, app.game.player_y) == (2, 1)
    assert app.game.moves == 1


def test_letter_keys_match_arrow_keys():
    for arrow, letter in [
        (pygame.K_RIGHT, pygame.K_d),
        (pygame.K_DOWN, pygame.K_s),
        (pygame.K_UP, pygame.K_w),
        (pygame.K_LEFT, pygame.K_a),
    ]:
        by_arrow, by_letter = make_app(), make_app()
        by_arrow.handle_key(arrow)
        by_letter.handle_key(letter)
        assert by_arrow.game.grid == by_letter.game.grid


def test_wall_blocks_move():
    app = make_app()
    app.handle_key(pygame.K_UP)
    assert app.game.grid == GRID
    assert app.game.moves == 0


def test_b_key_switches_player_sprite():
    app = make_app()
    app.handle_key(pygame.K_b)
    assert app.player_sprite == ALTERNATE_PLAYER_SPRITE
    paths = {placement.path for placement in app.render()}
    assert ALTERNATE_PLAYER_SPRITE in paths
    assert PLAYER_SPRITE not in paths


def test_render_places_every_tile_on_the_grid():
    app = make_app()
    placements = app.render()
    assert len(placements) == sum(len(row) for row in GRID)
    assert all(p.x % TILE_SIZE == 0 and p.y % TILE_SIZE == 0 for p in placements)
    by_position = {(p.x // TILE_SIZE, p.y // TILE_SIZE): p.path for p in placements}
    assert by_position[(1, 1)] == PLAYER_SPRITE
    assert by_position[(0, 0)] == WALL_SPRITE
    assert by_position[(3, 1)] == COLLECTABLE_SPRITE
    assert by_position[(1, 2)] == EXIT_SPRITE
    assert by_position[(2, 1)] == FLOOR_SPRITE


def _write_sprite(root, path, color):
    target = root / path
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(
        '/* XPM */\nstatic char *sprite[] = {\n"1 1 1 1",\n'
        f'"a c {color}",\n"a"\n}};\n'
    )


def test_render_draws_sprites_on_screen(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_sprite(tmp_path, WALL_SPRITE, "#FF0000")
    _write_sprite(tmp_path, FLOOR_SPRITE, "#00FF00")
    _write_sprite(tmp_path, EXIT_SPRITE, "#0000FF")
    _write_sprite(tmp_path, COLLECTABLE_SPRITE, "#FFFF00")
    _write_sprite(tmp_path, PLAYER_SPRITE, "#FFFFFF")
    game = Game(GRID, out=io.StringIO())
    screen = pygame.Surface(game.window_size)
    app = App(game, screen=screen)
    app.render()
    assert tuple(screen.get_at((0, 0)))[:3] == (255, 0, 0)
    assert tuple(screen.get_at((TILE_SIZE, TILE_SIZE)))[:3] == (255, 255, 255)
    assert tuple(screen.get_at((2 * TILE_SIZE, TILE_SIZE)))[:3] == (0, 255, 0)
    assert tuple(screen.get_at((TILE_SIZE, 2 * TILE_SIZE)))[:3] == (0, 0, 255)


def test_render_missing_sprite_raises(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    game = Game(GRID, out=io.StringIO())
    app = App(game, screen=pygame.Surface(game.window_size))
    with pytest.raises(XpmError, match="failed to load image"):
        app.render()


def test_main_wrong_number_of_args(capsys):
    assert main([]) == 1
    assert capsys.readouterr().out == "Error\nwrong number of args\n"


def test_main_invalid_path(tmp_path, capsys):
    path = tmp_path / "map.txt"
    path.write_text("111\n")
    assert main([str(path)]) == 1
    out = capsys.readouterr().out
    assert out.startswith("Error\nInvalid map path")
    assert str(path) in out