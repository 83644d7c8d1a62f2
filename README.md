# solong

A small top-down puzzle game. You walk a character around a walled map,
pick up every collectable, and then step onto the exit. Each move is
counted and printed; when the exit is reached, `LEVEL COMPLETE` and the
final score (the number of moves) are printed.

## Installing

```
pip install .
```

The game window uses pygame.

## Playing

```
solong path/to/level.ber
```

Controls (acted on when the key is released):

- `W` / `Up` — move up
- `S` / `Down` — move down
- `A` / `Left` — move left
- `D` / `Right` — move right
- `B` — switch to the alternate player sprite
- `Esc` or closing the window — quit

The exit only opens once every collectable has been picked up; after
reaching it the player can no longer move. Maps too large for the window
(wider than 18 or taller than 10 tiles) are shown through a view that
follows the player without scrolling past the edges of the map.

If the map is invalid, `solong` prints `Error` followed by the reason and
exits with status 1.

## Map files

A map is a plain-text file with the `.ber` extension. Every line,
including the last, ends with a newline, and all lines have the same
length. The characters are:

| Char | Meaning      |
|------|--------------|
| `1`  | wall         |
| `0`  | floor        |
| `C`  | collectable  |
| `E`  | exit         |
| `P`  | player start |

A valid map:

- is a rectangle at least 3×3,
- is fully enclosed by walls,
- has exactly one `P`, exactly one `E` and at least one `C`,
- lets the player reach the exit and every collectable.

Example:

```
1111111
1P0C0E1
1111111
```

## Sprites

Tiles are drawn from XPM images read from `assets/sprites/` relative to
the working directory:

- `assets/sprites/objects/wall.xpm`, `door.xpm`, `doorwin.xpm`,
  `collectable.xpm`
- `assets/sprites/tilesets/grass.xpm`
- `assets/sprites/characters/player.xpm`, `bajeanno.xpm`

## Using the library

```python
from solong.mapfile import load_map, MapError
from solong.game import Game, Direction

grid = load_map(["level.ber"])   # raises MapError on a bad map
game = Game(grid)
game.move(Direction.RIGHT)       # True if the player moved
print(game.moves, game.collected, game.finished)
print(game.view())               # rows of tiles shown in the window
```

Modules:

- `solong.mapfile` — `read_map`, `check_path`, `validate_map`,
  `reachable_map`, `check_reachability`, `load_map`, `MapError`.
- `solong.game` — `Game`, `Direction`, `centered_view`, `find_player`,
  `count_collectables`, `window_width`, `window_height`.
- `solong.xpm` — `xpm_file_to_image`, `xpm_to_image`, `Image`
  (`put_pixel`, `get_pixel`), `XpmError`, and helpers such as
  `strip_comments`, `split_words`, `rgb_shifts`, `convert_color`.
- `solong.colors` — `lookup_color` for X11 colour names and
  `text_to_rgb` for XPM colour specifications (`#rrggbb` or a name).
- `solong.app` — `App` (`handle_key`, `render`, `run`), `tile_path`
  and `main`, the entry point of the `solong` command.

## Limitations

- No sprite images are included; the `assets/` directory must be
  supplied alongside the map.
- The XPM reader covers the colour (`c`) keys, named colours and
  `#rrggbb` values only. Transparent (`None`) pixels are drawn black.