"""Loading and validation of ``.ber`` map files.

A map is a rectangle of tiles: ``1`` wall, ``0`` floor, ``C`` collectible,
``P`` player start and ``E`` exit. It must be closed by walls, hold exactly
one player and one exit and at least one collectible, and every collectible
and the exit must be reachable from the player.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from os import PathLike, fspath
from typing import Sequence

MAP_EXTENSION = ".ber"
VALID_TILES = frozenset("01CPE")

WALL = "1"
FLOOR = "0"
COLLECTIBLE = "C"
PLAYER = "P"
EXIT = "E"
_VISITED = "X"

Rows = Sequence[str]


class MapError(ValueError):
    """Raised when a map file cannot be read or is not a valid map."""


@dataclass(frozen=True)
class GameMap:
    """A validated map, one string per row."""

    rows: tuple[str, ...]

    @property
    def width(self) -> int:
        """Number of tiles in a row."""
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        """Number of rows."""
        return len(self.rows)

    @property
    def player(self) -> tuple[int, int]:
        """The player's start as (x, y)."""
        return find_player(self.rows)

    @property
    def collectibles(self) -> int:
        """Number of collectibles on the map."""
        return count_tiles(self.rows)[COLLECTIBLE]


def has_map_extension(path: str | PathLike[str]) -> bool:
    """Tell whether a path names a ``.ber`` file with a non-empty stem or a bare name."""
    text = fspath(path)
    if not text.endswith(MAP_EXTENSION):
        return False
    return not text[: -len(MAP_EXTENSION)].endswith("/")


def check_extension(path: str | PathLike[str]) -> None:
    """Raise MapError unless the path has the map extension."""
    if not has_map_extension(path):
        raise MapError("Invalid map file!")


def read_rows(path: str | PathLike[str]) -> list[str]:
    """Read a map file and return its lines without their newlines."""
    try:
        with open(path, encoding="utf-8", errors="replace", newline="") as handle:
            text = handle.read()
    except OSError as error:
        raise MapError("Invalid map file!") from error
    if not text:
        return []
    rows = text.split("\n")
    if text.endswith("\n"):
        rows.pop()
    return rows


def check_shape(rows: Rows) -> int:
    """Check that every row is as long as the first; return that width."""
    if not rows:
        raise MapError("Empty map!")
    width = len(rows[0])
    if any(len(row) != width for row in rows):
        raise MapError("Map not valid!")
    return width


def check_characters(rows: Rows) -> None:
    """Raise MapError if a row holds a character that is not a tile."""
    if any(char not in VALID_TILES for row in rows for char in row):
        raise MapError("Map isn't valid")


def check_walls(rows: Rows) -> None:
    """Raise MapError unless the map is surrounded by walls."""
    if not rows:
        raise MapError("Empty map!")
    for edge in (rows[0], rows[-1]):
        if any(char != WALL for char in edge):
            raise MapError("Invalid map: wall problems!")
    for row in rows:
        if not row or row[0] != WALL or row[-1] != WALL:
            raise MapError("Invalid map: wall problems!")


def count_tiles(rows: Rows) -> Counter[str]:
    """Count every tile kind on the map."""
    return Counter(char for row in rows for char in row)


def check_counts(rows: Rows) -> None:
    """Require one player, one exit and at least one collectible."""
    counts = count_tiles(rows)
    if counts[PLAYER] != 1:
        raise MapError("A single player is required!")
    if counts[EXIT] != 1:
        raise MapError("A single exit is required!")
    if counts[COLLECTIBLE] == 0:
        raise MapError("At least one collectible is needed!")


def find_player(rows: Rows) -> tuple[int, int]:
    """Return (x, y) of the player; the last one in reading order if several."""
    found: tuple[int, int] | None = None
    for y, row in enumerate(rows):
        x = row.rfind(PLAYER)
        if x != -1:
            found = (x, y)
    if found is None:
        raise MapError("The map has no player")
    return found


def flood_fill(grid: list[list[str]], x: int, y: int, blocker: str) -> int:
    """Mark with ``X`` every cell reachable from (x, y) in place.

    Walls, already marked cells and cells holding ``blocker`` stop the fill.
    Returns the number of cells marked.
    """
    filled = 0
    stack = [(x, y)]
    while stack:
        cx, cy = stack.pop()
        if cy < 0 or cy >= len(grid) or cx < 0 or cx >= len(grid[cy]):
            continue
        if grid[cy][cx] in (WALL, _VISITED, blocker):
            continue
        grid[cy][cx] = _VISITED
        filled += 1
        stack.extend(((cx + 1, cy), (cx - 1, cy), (cx, cy - 1), (cx, cy + 1)))
    return filled


def _remains(grid: list[list[str]], tile: str) -> bool:
    return any(tile in row for row in grid)


def validate_paths(rows: Rows) -> None:
    """Require every collectible reachable without crossing the exit, and the exit reachable."""
    x, y = find_player(rows)
    grid = [list(row) for row in rows]
    flood_fill(grid, x, y, EXIT)
    if _remains(grid, COLLECTIBLE):
        raise MapError("Invalid map... Can't reach collectible")
    grid = [list(row) for row in rows]
    flood_fill(grid, x, y, "9")
    if _remains(grid, EXIT):
        raise MapError("Invalid map... Can't reach Exit")


def _validate(rows: Rows) -> None:
    if not rows:
        raise MapError("Empty map!")
    check_shape(rows)
    check_characters(rows)
    check_walls(rows)
    check_counts(rows)
    validate_paths(rows)


def parse_map(path: str | PathLike[str]) -> GameMap:
    """Read and validate a map file."""
    check_extension(path)
    rows = read_rows(path)
    _validate(rows)
    return GameMap(tuple(rows))