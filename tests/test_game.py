import random

import pytest

from tetris import Game, GameInfo, GameState, UserAction, RUNNING, PAUSED, TERMINAL
from tetris_board import rotate
from tetris_piece import COLS, ROWS, Piece


def start(game):
    game.handle_input(UserAction.START)
    return game.tick()  # SPAWN -> MOVING


def piece_cells_free(game):
    p = game.current
    return all(0 <= x < COLS and 0 <= y < ROWS and not game.field[y][x] for x, y in p.cells())


def test_initialize_prepares_next_piece_only(game):
    assert game.state == GameState.START_WAIT
    assert game.current is None
    assert game.next_piece is not None
    nxt = game.next_piece
    assert game.next_grid.to_lists() == [[nxt.type + 1 if v else 0 for v in row] for row in nxt.shape]
    assert (game.score, game.level, game.speed) == (0, 1, 1000)


def test_ticks_before_start_are_frozen(game, clock):
    first = game.tick()
    clock.advance(5000)
    second = game.tick()
    assert game.state == GameState.START_WAIT
    assert second.field == first.field
    assert second.pause == RUNNING


def test_fresh_game_spawns_at_top_center(game):
    expected_type = game.next_piece.type
    info = start(game)
    assert game.state == GameState.MOVING
    p = game.current
    assert (p.x, p.y, p.rotation, p.type) == (3, 0, 0, expected_type)
    overlaid = sorted((x, y) for y in range(ROWS) for x in range(COLS) if info.field[y][x])
    assert overlaid == sorted(p.cells())
    assert all(info.field[y][x] == p.type + 1 for x, y in p.cells())
    # the authoritative field stays empty
    assert not any(any(row) for row in game.field)


def test_gravity_follows_speed(game, clock):
    start(game)
    clock.advance(999)
    game.tick()
    assert game.state == GameState.MOVING
    clock.advance(1)
    game.tick()
    assert game.state == GameState.SHIFTING
    game.tick()
    assert game.state == GameState.MOVING
    assert game.current.y == 1


def test_blocked_piece_attaches_and_next_spawns(game, clock):
    start(game)
    first_type = game.current.type
    game.handle_input(UserAction.DOWN, hold=True)
    clock.advance(1000)
    game.tick()                      # MOVING -> SHIFTING
    game.tick()                      # blocked -> ATTACHING
    assert game.state == GameState.ATTACHING
    game.tick()                      # fix -> SPAWN
    assert game.state == GameState.SPAWN
    assert sum(1 for row in game.field for v in row if v == first_type + 1) == 4
    game.tick()
    assert game.state == GameState.MOVING
    assert game.current.y == 0


def test_line_clear_through_the_state_machine(game, clock):
    game.next_piece = Piece.from_type(0)
    start(game)
    game.field[ROWS - 1][:] = [2] * COLS
    game.field[ROWS - 1][4] = 0
    game.handle_input(UserAction.ACTION)
    game.handle_input(UserAction.DOWN, hold=True)
    clock.advance(1000)
    for _ in range(3):
        info = game.tick()
    assert game.state == GameState.SPAWN
    assert info.score == 100
    assert game.field[ROWS - 1] == [0, 0, 0, 0, 1, 0, 0, 0, 0, 0]
    assert game.field[0] == [0] * COLS


def test_down_tap_and_up_do_nothing(game):
    start(game)
    before = (game.current.x, game.current.y, [r[:] for r in game.current.shape])
    game.handle_input(UserAction.DOWN)
    game.handle_input(UserAction.UP)
    assert (game.current.x, game.current.y, game.current.shape) == before


def test_left_right_and_rotate_only_while_moving(game):
    game.next_piece = Piece.from_type(2)
    game.handle_input(UserAction.LEFT)
    assert game.current is None
    start(game)
    game.handle_input(UserAction.LEFT)
    assert game.current.x == 2
    game.handle_input(UserAction.RIGHT)
    game.handle_input(UserAction.RIGHT)
    assert game.current.x == 4
    game.handle_input(UserAction.ACTION)
    assert game.current.rotation == 1
    assert piece_cells_free(game)


def test_pause_freezes_and_resumes(game, clock):
    start(game)
    game.handle_input(UserAction.PAUSE)
    assert game.state == GameState.PAUSED
    info = game.tick()
    assert info.pause == PAUSED
    x = game.current.x
    game.handle_input(UserAction.LEFT)
    assert game.current.x == x
    clock.advance(10000)
    game.tick()
    assert game.state == GameState.PAUSED

    game.handle_input(UserAction.PAUSE)
    assert game.state == GameState.MOVING
    assert game.tick().pause == RUNNING
    # time spent paused does not count toward the next drop
    assert game.state == GameState.MOVING


def test_pause_ignored_outside_moving(game):
    game.handle_input(UserAction.PAUSE)
    assert game.pause == RUNNING
    assert game.state == GameState.START_WAIT


def test_terminate_while_paused_saves_high_score(game, store):
    store.write(500)
    start(game)
    game.score = 900
    game.handle_input(UserAction.PAUSE)
    game.handle_input(UserAction.TERMINATE)
    info = game.tick()
    assert info.pause == TERMINAL
    assert info.high_score == 900
    assert store.read() == 900
    assert game.state == GameState.GAME_OVER


def test_terminate_before_start_is_terminal(game):
    game.handle_input(UserAction.TERMINATE)
    assert game.tick().pause == TERMINAL


def test_topped_out_field_ends_the_game(game, store):
    store.write(100)
    start(game)
    game.field[0][:] = [3] * COLS
    game.field[1][:] = [3] * COLS
    game.score = 300
    next_before = game.next_piece
    game.state = GameState.SPAWN
    game.tick()
    assert game.state == GameState.GAME_OVER
    assert game.next_piece is next_before
    info = game.tick()
    assert info.pause == TERMINAL
    assert store.read() == 300
    assert info.high_score == 300


def test_lower_score_does_not_overwrite_high_score(game, store):
    store.write(5000)
    game.initialize()
    start(game)
    game.score = 200
    game.handle_input(UserAction.TERMINATE)
    game.tick()
    assert store.read() == 5000


def test_start_after_game_over_begins_new_game(game):
    start(game)
    game.score = 700
    game.field[10][:] = [1] * (COLS - 1) + [0]
    game.handle_input(UserAction.TERMINATE)
    game.tick()
    game.handle_input(UserAction.START)
    assert game.state == GameState.SPAWN
    assert (game.score, game.level, game.speed, game.pause) == (0, 1, 1000, RUNNING)
    assert not any(any(row) for row in game.field)
    game.tick()
    assert game.state == GameState.MOVING


def test_snapshot_does_not_alias_session(game):
    info = start(game)
    assert isinstance(info, GameInfo)
    info.field[ROWS - 1][0] = 7
    info.next[0][0] = 7
    assert game.field[ROWS - 1][0] == 0
    assert game.tick().field[ROWS - 1][0] == 0


def test_unrecognized_input_is_ignored(game):
    game.handle_input(None)
    game.handle_input(99)
    game.handle_input("left")
    assert game.state == GameState.START_WAIT


def test_shutdown_is_idempotent_and_context_managed(store, clock):
    with Game(store, seed=5, clock=clock) as g:
        assert g.active
        start(g)
    assert not g.active
    g.shutdown()
    g.handle_input(UserAction.LEFT)
    assert g.tick() is not None


def test_same_seed_gives_same_pieces(store, clock):
    a = Game(store, seed=42, clock=clock)
    b = Game(store, seed=42, clock=clock)
    a.initialize(); b.initialize()
    assert a.next_piece.type == b.next_piece.type


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_piece_never_overlaps_field_during_play(store, clock, seed):
    game = Game(store, seed=seed, clock=clock)
    game.initialize()
    actions = random.Random(seed)
    choices = [UserAction.LEFT, UserAction.RIGHT, UserAction.ACTION, None, None]
    game.handle_input(UserAction.START)
    for _ in range(3000):
        if game.state == GameState.GAME_OVER:
            game.handle_input(UserAction.START)
        a = actions.choice(choices + [UserAction.DOWN])
        game.handle_input(a, hold=(a == UserAction.DOWN))
        clock.advance(150)
        info = game.tick()
        if game.state in (GameState.MOVING, GameState.SHIFTING, GameState.ATTACHING):
            assert piece_cells_free(game)
        assert all(0 <= v <= 7 for row in info.field for v in row)
        assert 1 <= info.level <= 10 and 100 <= info.speed <= 1000
    game.shutdown()


def test_rotating_o_piece_in_session(game):
    game.next_piece = Piece.from_type(1)
    start(game)
    before = (game.current.x, game.current.y, [r[:] for r in game.current.shape])
    for _ in range(4):
        assert rotate(game.field, game.current)
    assert (game.current.x, game.current.y, game.current.shape) == before
