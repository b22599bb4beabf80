"""Window, textures and the event loop of the game."""

from __future__ import annotations

import os
import sys
from os import PathLike
from pathlib import Path
from typing import Mapping, Sequence

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from solong.game import (  # noqa: E402
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    ESC,
    KEY_A,
    KEY_D,
    KEY_S,
    KEY_W,
    TILE_SIZE,
    Game,
    MoveResult,
)
from solong.mapcheck import (  # noqa: E402
    COLLECTIBLE,
    EXIT,
    FLOOR,
    PLAYER,
    WALL,
    GameMap,
    MapError,
    parse_map,
)
from solong.xpm import XpmError, load_xpm  # noqa: E402

DEFAULT_TEXTURE_DIR = Path("src/img")
WINDOW_TITLE = "So_Long!"

TEXTURE_FILES: dict[str, str] = {
    WALL: "wall.xpm",
    COLLECTIBLE: "coin.xpm",
    EXIT: "door.xpm",
    FLOOR: "floor.xpm",
    PLAYER: "player.xpm",
}

_KEYSYMS: dict[int, int] = {
    pygame.K_w: KEY_W,
    pygame.K_a: KEY_A,
    pygame.K_s: KEY_S,
    pygame.K_d: KEY_D,
    pygame.K_UP: ARROW_UP,
    pygame.K_DOWN: ARROW_DOWN,
    pygame.K_LEFT: ARROW_LEFT,
    pygame.K_RIGHT: ARROW_RIGHT,
    pygame.K_ESCAPE: ESC,
}


def load_textures(directory: str | PathLike[str]) -> dict[str, pygame.Surface]:
    """Load the tile images from a directory; raise XpmError if one is missing or bad."""
    base = Path(directory)
    textures: dict[str, pygame.Surface] = {}
    for tile, filename in TEXTURE_FILES.items():
        image = load_xpm(base / filename)
        pixels = bytearray(image.to_argb_bytes())
        surface = pygame.image.frombuffer(pixels, (image.width, image.height), "ARGB")
        textures[tile] = surface.copy()
    return textures


def render(surface: pygame.Surface, game: Game, textures: Mapping[str, pygame.Surface]) -> None:
    """Draw every tile of the game onto the surface."""
    for y, row in enumerate(game.rows):
        for x, tile in enumerate(row):
            texture = textures.get(tile)
            if texture is not None:
                surface.blit(texture, (TILE_SIZE * x, TILE_SIZE * y))


def run(game_map: GameMap, texture_dir: str | PathLike[str] = DEFAULT_TEXTURE_DIR) -> int:
    """Open the window and play until the player wins or quits; return the exit status."""
    pygame.init()
    try:
        screen = pygame.display.set_mode(
            (game_map.width * TILE_SIZE, game_map.height * TILE_SIZE)
        )
        pygame.display.set_caption(WINDOW_TITLE)
        try:
            textures = load_textures(texture_dir)
        except XpmError:
            return 0
        game = Game(game_map)
        render(screen, game, textures)
        pygame.display.flip()
        clock = pygame.time.Clock()
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return 0
                if event.type != pygame.KEYDOWN:
                    continue
                keycode = _KEYSYMS.get(event.key)
                if keycode is None:
                    continue
                result = game.handle_key(keycode)
                if result is MoveResult.MOVED:
                    print(f"{game.moves} moves so far!")
                    render(screen, game, textures)
                    pygame.display.flip()
                elif result is MoveResult.WON:
                    print("Congrats! You won!")
                    return 0
                elif result is MoveResult.QUIT:
                    return 0
            clock.tick(60)
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Start the game on the map file named on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print("{+} Please, provide the correct number of arguments!")
        return 1
    try:
        game_map = parse_map(args[0])
    except MapError as error:
        print(f"{{-}} {error}")
        return 1
    return run(game_map)


if __name__ == "__main__":
    sys.exit(main())