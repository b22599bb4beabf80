# solong

A small top-down puzzle game. You walk a player around a walled map,
pick up every collectible, and then step onto the exit to win.

## Installing

```
pip install .
```

This pulls in `pygame`, which draws the window.

## Playing

```
solong path/to/level.ber
```

The command takes exactly one argument: a map file whose name ends in
`.ber`. With any other number of arguments it prints
`{+} Please, provide the correct number of arguments!` and exits with
status 1.

Every tile is drawn 60 pixels square. Textures are XPM images named
`wall.xpm`, `coin.xpm`, `door.xpm`, `floor.xpm` and `player.xpm`, read
from `src/img/` under the current directory. If any of them is missing
or cannot be read, the window closes straight away with status 0.

Controls:

- `W` / up arrow: move up
- `A` / left arrow: move left
- `S` / down arrow: move down
- `D` / right arrow: move right
- `Esc`, or closing the window: quit

Walls block you, and the exit stays closed until all collectibles are
gone. Each move onto a floor or collectible tile prints
`N moves so far!`; stepping onto the open exit prints
`Congrats! You won!` and ends the game.

## Map format

A map is a plain text file made up of these characters:

| Char | Meaning      |
|------|--------------|
| `1`  | wall         |
| `0`  | empty floor  |
| `C`  | collectible  |
| `E`  | exit         |
| `P`  | player start |

For example:

```
1111111
1P0C0E1
1111111
```

A map is rejected, with a message starting `{-}` and exit status 1,
when any of these hold:

- the file name does not end in `.ber`, or the file cannot be opened;
- the file is empty;
- the rows are not all the same length;
- it holds a character outside the table above;
- it is not closed in by walls on every side;
- it does not have exactly one player and one exit, or it has no collectible;
- a collectible cannot be reached from the player without crossing the
  exit, or the exit cannot be reached at all.

## Using it as a library

```python
from solong.mapcheck import parse_map, MapError
from solong.game import Game, MoveResult

try:
    game_map = parse_map("level.ber")
except MapError as err:
    print(err)
else:
    game = Game(game_map)
    result = game.step(1, 0)  # move right
    if result is MoveResult.MOVED:
        print(game.moves, game.player, game.collectibles)
```

- `solong.mapcheck` reads and validates maps. `parse_map` returns a
  `GameMap` (with `rows`, `width`, `height`, `player` and
  `collectibles`); the single checks (`check_shape`,
  `check_characters`, `check_walls`, `check_counts`, `validate_paths`,
  `flood_fill`, ...) can also be called on a list of row strings. All of
  them raise `MapError`.
- `solong.game.Game` holds the play state. `move_to(x, y)`,
  `step(dx, dy)` and `handle_key(keycode)` (X keysyms, such as
  `solong.game.KEY_W` or `ESC`) return a `MoveResult`: `BLOCKED`,
  `MOVED`, `WON`, `QUIT` or `IGNORED`. `tile(x, y)` and `rows` show the
  current board.
- `solong.display` has `load_textures(directory)`,
  `render(surface, game, textures)`, `run(game_map, texture_dir)` and
  `main(argv)`, the function behind the `solong` command.
- `solong.xpm` reads XPM images: `load_xpm(path)`,
  `parse_xpm_text(text)` and `parse_xpm(lines)` return an `XpmImage`
  with `width`, `height`, `rows`, `pixel(x, y)` and `to_argb_bytes()`.
  Colours may be `#RRGGBB`, X11 colour names, or `None` for transparent
  pixels. Malformed data raises `XpmError`.
- `solong.colors.find_color(name)` looks up an X11 colour name, ignoring
  case.

## What it does not include

No texture images ship with the package, and the `solong` command has no
option for choosing another texture directory; supply the five XPM files
under `src/img/` yourself, or call `solong.display.run` with a
`texture_dir`.

## Running the tests

```
pip install .[test]
pytest
```