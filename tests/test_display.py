import pygame
import pytest

from solong.display import TEXTURE_FILES, load_textures, main, render
from solong.game import TILE_SIZE, Game
from solong.mapcheck import GameMap
from solong.xpm import XpmError

XPM_TEMPLATE = """/* XPM */
static char *img[] = {{
"2 1 2 1",
"a c {color}",
"b c None",
"ab"
}};
"""

COLORS = {
    "1": (10, 20, 30),
    "0": (200, 200, 200),
    "C": (250, 200, 0),
    "P": (0, 0, 255),
    "E": (0, 128, 0),
}


def write_textures(directory, color="#FF0000"):
    for filename in TEXTURE_FILES.values():
        (directory / filename).write_text(XPM_TEMPLATE.format(color=color))


def test_load_textures_decodes_every_tile(tmp_path):
    write_textures(tmp_path)
    textures = load_textures(tmp_path)
    assert set(textures) == set("01CPE")
    for surface in textures.values():
        assert surface.get_size() == (2, 1)
        assert tuple(surface.get_at((0, 0))) == (255, 0, 0, 255)
        assert surface.get_at((1, 0)).a == 0


def test_load_textures_missing_file_raises(tmp_path):
    write_textures(tmp_path)
    (tmp_path / TEXTURE_FILES["P"]).unlink()
    with pytest.raises(XpmError):
        load_textures(tmp_path)


def test_render_places_each_tile():
    rows = ("11111", "1PCE1", "11111")
    game = Game(GameMap(rows))
    textures = {}
    for tile, color in COLORS.items():
        surface = pygame.Surface((TILE_SIZE, TILE_SIZE))
        surface.fill(color)
        textures[tile] = surface
    screen = pygame.Surface((game.width * TILE_SIZE, game.height * TILE_SIZE))
    render(screen, game, textures)
    for y, row in enumerate(rows):
        for x, tile in enumerate(row):
            corner = (x * TILE_SIZE, y * TILE_SIZE)
            far = (x * TILE_SIZE + TILE_SIZE - 1, y * TILE_SIZE + TILE_SIZE - 1)
            assert screen.get_at(corner) == pygame.Color(*COLORS[tile])
            assert screen.get_at(far) == pygame.Color(*COLORS[tile])


def test_render_follows_moves():
    game = Game(GameMap(("11111", "1PCE1", "11111")))
    textures = {}
    for tile, color in COLORS.items():
        surface = pygame.Surface((TILE_SIZE, TILE_SIZE))
        surface.fill(color)
        textures[tile] = surface
    screen = pygame.Surface((game.width * TILE_SIZE, game.height * TILE_SIZE))
    game.step(1, 0)
    render(screen, game, textures)
    assert screen.get_at((TILE_SIZE, TILE_SIZE)) == pygame.Color(*COLORS["0"])
    assert screen.get_at((2 * TILE_SIZE, TILE_SIZE)) == pygame.Color(*COLORS["P"])


def test_main_requires_one_argument(capsys):
    assert main([]) == 1
    assert "Please, provide the correct number of arguments!" in capsys.readouterr().out
    assert main(["a.ber", "b.ber"]) == 1


def test_main_rejects_wrong_extension(capsys):
    assert main(["map.txt"]) == 1
    assert "Invalid map file!" in capsys.readouterr().out


def test_main_rejects_invalid_map(tmp_path, capsys):
    path = tmp_path / "bad.ber"
    path.write_text("111\n")
    assert main([str(path)]) == 1
    assert "A single player is required!" in capsys.readouterr().out