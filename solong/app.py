"""The game window: drawing the map and turning key presses into moves."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from solong.game import TILE_SIZE, Direction, Game  # noqa: E402
from solong.mapfile import MapError, load_map  # noqa: E402
from solong.xpm import Image, XpmError, xpm_file_to_image  # noqa: E402

__all__ = [
    "WALL_SPRITE",
    "FLOOR_SPRITE",
    "EXIT_SPRITE",
    "EXIT_REACHED_SPRITE",
    "COLLECTABLE_SPRITE",
    "PLAYER_SPRITE",
    "ALTERNATE_PLAYER_SPRITE",
    "WINDOW_TITLE",
    "Placement",
    "App",
    "tile_path",
    "main",
]

WALL_SPRITE = "./assets/sprites/objects/wall.xpm"
FLOOR_SPRITE = "./assets/sprites/tilesets/grass.xpm"
EXIT_SPRITE = "./assets/sprites/objects/door.xpm"
EXIT_REACHED_SPRITE = "assets/sprites/objects/doorwin.xpm"
COLLECTABLE_SPRITE = "assets/sprites/objects/collectable.xpm"
PLAYER_SPRITE = "./assets/sprites/characters/player.xpm"
ALTERNATE_PLAYER_SPRITE = "assets/sprites/characters/bajeanno.xpm"

WINDOW_TITLE = "./so_long"

_MOVE_KEYS: dict[int, Direction] = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}


def tile_path(tile: str, player_sprite: str) -> str:
    """Return the sprite file drawn for a map tile."""
    if tile == "1":
        return WALL_SPRITE
    if tile == "0":
        return FLOOR_SPRITE
    if tile == "E":
        return EXIT_SPRITE
    if tile == "P":
        return player_sprite
    if tile == "e":
        return EXIT_REACHED_SPRITE
    return COLLECTABLE_SPRITE


@dataclass(frozen=True)
class Placement:
    """A sprite drawn with its top-left corner at (x, y) in window pixels."""

    path: str
    x: int
    y: int


def _image_to_surface(image: Image) -> pygame.Surface:
    buffer = bytearray()
    for y in range(image.height):
        for x in range(image.width):
            buffer += (image.get_pixel(x, y) & 0xFFFFFF).to_bytes(3, "big")
    return pygame.image.frombuffer(bytes(buffer), (image.width, image.height), "RGB")


def _load_sprite(path: str) -> pygame.Surface:
    return _image_to_surface(xpm_file_to_image(path))


class App:
    """Draws a :class:`Game` and feeds it the player's key presses."""

    def __init__(
        self,
        game: Game,
        screen: pygame.Surface | None = None,
        loader: Callable[[str], pygame.Surface] | None = None,
    ) -> None:
        self.game = game
        self.screen = screen
        self.player_sprite = PLAYER_SPRITE
        self.running = True
        self._loader = loader if loader is not None else _load_sprite
        self._sprites: dict[str, pygame.Surface] = {}

    def _sprite(self, path: str) -> pygame.Surface:
        sprite = self._sprites.get(path)
        if sprite is None:
            try:
                sprite = self._loader(path)
            except XpmError as exc:
                raise XpmError(f"failed to load image : '{path}'") from exc
            self._sprites[path] = sprite
        return sprite

    def handle_key(self, key: int) -> bool:
        """React to a released key; return False once the game should close."""
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key in _MOVE_KEYS:
            if self.game.move(_MOVE_KEYS[key]):
                self.render()
        elif key == pygame.K_b:
            self.player_sprite = ALTERNATE_PLAYER_SPRITE
            self.render()
        return self.running

    def render(self) -> list[Placement]:
        """Draw the visible tiles on the screen, if any; return what was placed."""
        placements = [
            Placement(tile_path(tile, self.player_sprite), x * TILE_SIZE, y * TILE_SIZE)
            for y, row in enumerate(self.game.view())
            for x, tile in enumerate(row)
        ]
        if self.screen is not None:
            for placement in placements:
                self.screen.blit(self._sprite(placement.path), (placement.x, placement.y))
        return placements

    def run(self) -> None:
        """Open the window and play until it is closed or Escape is released."""
        pygame.init()
        try:
            self.screen = pygame.display.set_mode(self.game.window_size)
            pygame.display.set_caption(WINDOW_TITLE)
            self.render()
            pygame.display.flip()
            clock = pygame.time.Clock()
            while self.running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    elif event.type == pygame.KEYUP:
                        self.handle_key(event.key)
                pygame.display.flip()
                clock.tick(60)
        finally:
            pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Load the map named on the command line and play it."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        grid = load_map(args)
    except MapError as exc:
        print(f"Error\n{exc}")
        return 1
    try:
        App(Game(grid)).run()
    except XpmError as exc:
        print(f"Error\n{exc}")
    except pygame.error as exc:
        print(f"Error\n{exc}")
        return 1
    return 0