import pytest

from solong.game import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    ESC,
    KEY_A,
    KEY_D,
    KEY_S,
    KEY_W,
    Game,
    MoveResult,
)
from solong.mapcheck import GameMap


def make_game(*rows):
    return Game(GameMap(tuple(rows)))


def test_initial_state():
    game = make_game("11111", "1PCE1", "11111")
    assert game.player == (1, 1)
    assert game.collectibles == 1
    assert game.moves == 0
    assert game.rows == ("11111", "1PCE1", "11111")
    assert (game.width, game.height) == (5, 3)


def test_collect_then_win():
    game = make_game("11111", "1PCE1", "11111")
    assert game.step(1, 0) is MoveResult.MOVED
    assert game.player == (2, 1)
    assert game.collectibles == 0
    assert game.moves == 1
    assert game.tile(1, 1) == "0"
    assert game.tile(2, 1) == "P"
    assert game.step(1, 0) is MoveResult.WON
    assert game.won
    assert game.moves == 1


def test_exit_blocked_while_collectibles_remain():
    game = make_game("11111", "1PEC1", "11111")
    assert game.step(1, 0) is MoveResult.BLOCKED
    assert game.player == (1, 1)
    assert game.moves == 0
    assert game.rows == ("11111", "1PEC1", "11111")


def test_wall_blocks():
    game = make_game("11111", "1PCE1", "11111")
    assert game.step(0, -1) is MoveResult.BLOCKED
    assert game.step(-1, 0) is MoveResult.BLOCKED
    assert game.player == (1, 1)
    assert game.moves == 0


def test_moves_accumulate_over_floor():
    game = make_game("111111", "1P00C1", "1E0001", "111111")
    assert game.step(1, 0) is MoveResult.MOVED
    assert game.step(0, 1) is MoveResult.MOVED
    assert game.step(0, -1) is MoveResult.MOVED
    assert game.moves == 3
    assert game.rows.count("1P00C1") == 0
    assert sum(row.count("P") for row in game.rows) == 1


@pytest.mark.parametrize(
    "key, expected",
    [
        (KEY_D, (2, 2)),
        (ARROW_RIGHT, (2, 2)),
        (KEY_A, (0, 2)),
        (ARROW_LEFT, (0, 2)),
        (KEY_W, (1, 1)),
        (ARROW_UP, (1, 1)),
        (KEY_S, (1, 3)),
        (ARROW_DOWN, (1, 3)),
    ],
)
def test_keys_move_player(key, expected):
    game = make_game("11111", "10001", "00P0C", "10E01", "11111")
    assert game.handle_key(key) is MoveResult.MOVED
    assert game.player == tuple(a - 1 for a in expected) or game.player == expected
    assert game.player == (expected[0] + 1, expected[1]) or game.player == expected


def test_escape_quits_without_moving():
    game = make_game("11111", "1PCE1", "11111")
    assert game.handle_key(ESC) is MoveResult.QUIT
    assert game.player == (1, 1)


def test_unknown_key_is_ignored():
    game = make_game("11111", "1PCE1", "11111")
    assert game.handle_key(ESC + 1) is MoveResult.IGNORED
    assert game.moves == 0


def test_tile_outside_map_raises():
    game = make_game("11111", "1PCE1", "11111")
    with pytest.raises(IndexError):
        game.tile(-1, 0)
    with pytest.raises(IndexError):
        game.tile(5, 1)


def test_moving_after_win_raises():
    game = make_game("1111", "1PE1", "1111")
    game.collectibles = 0
    assert game.step(1, 0) is MoveResult.WON
    with pytest.raises(RuntimeError):
        game.step(-1, 0)