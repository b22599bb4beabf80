"""Game state: the player's moves over a validated map."""

from __future__ import annotations

from enum import Enum

from solong.mapcheck import COLLECTIBLE, EXIT, FLOOR, PLAYER, WALL, GameMap

TILE_SIZE = 60

ESC = 65307
KEY_W = 119
KEY_A = 97
KEY_S = 115
KEY_D = 100
ARROW_UP = 65362
ARROW_DOWN = 65364
ARROW_LEFT = 65361
ARROW_RIGHT = 65363

_DIRECTIONS: dict[int, tuple[int, int]] = {
    KEY_W: (0, -1),
    ARROW_UP: (0, -1),
    KEY_A: (-1, 0),
    ARROW_LEFT: (-1, 0),
    KEY_S: (0, 1),
    ARROW_DOWN: (0, 1),
    KEY_D: (1, 0),
    ARROW_RIGHT: (1, 0),
}


class MoveResult(Enum):
    """What a move or a key press led to."""

    BLOCKED = "blocked"
    MOVED = "moved"
    WON = "won"
    QUIT = "quit"
    IGNORED = "ignored"


class Game:
    """A running game: the tiles, the player, what is left to collect and the move count."""

    def __init__(self, game_map: GameMap) -> None:
        self._grid = [list(row) for row in game_map.rows]
        self.player: tuple[int, int] = game_map.player
        self.collectibles: int = game_map.collectibles
        self.moves: int = 0
        self.won: bool = False

    @property
    def width(self) -> int:
        """Number of tiles in a row."""
        return len(self._grid[0]) if self._grid else 0

    @property
    def height(self) -> int:
        """Number of rows."""
        return len(self._grid)

    @property
    def rows(self) -> tuple[str, ...]:
        """The current tiles, one string per row."""
        return tuple("".join(row) for row in self._grid)

    def tile(self, x: int, y: int) -> str:
        """Return the tile at column x, row y."""
        if not (0 <= y < self.height and 0 <= x < len(self._grid[y])):
            raise IndexError(f"tile ({x}, {y}) outside the map")
        return self._grid[y][x]

    def move_to(self, x: int, y: int) -> MoveResult:
        """Move the player onto (x, y) if the tile allows it."""
        if self.won:
            raise RuntimeError("the game is already won")
        target = self.tile(x, y)
        if target == WALL:
            return MoveResult.BLOCKED
        if target == EXIT:
            if self.collectibles:
                return MoveResult.BLOCKED
            self.won = True
            return MoveResult.WON
        if target == COLLECTIBLE:
            self.collectibles -= 1
        old_x, old_y = self.player
        self._grid[y][x] = PLAYER
        self._grid[old_y][old_x] = FLOOR
        self.player = (x, y)
        self.moves += 1
        return MoveResult.MOVED

    def step(self, dx: int, dy: int) -> MoveResult:
        """Move the player by (dx, dy) from where it stands."""
        x, y = self.player
        return self.move_to(x + dx, y + dy)

    def handle_key(self, keycode: int) -> MoveResult:
        """React to a key given as an X keysym: WASD and arrows move, Escape quits."""
        if keycode == ESC:
            return MoveResult.QUIT
        direction = _DIRECTIONS.get(keycode)
        if direction is None:
            return MoveResult.IGNORED
        return self.step(*direction)