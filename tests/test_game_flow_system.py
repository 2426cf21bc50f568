import pytest

from chainfall.components.active_piece import MoveDirection, RotateDirection
from chainfall.components.cell import Cell
from chainfall.components.game_state import GameOverReason, GamePhase
from chainfall.events.bus import (
    EVENT_CHAIN_COMPLETE,
    EVENT_CHAIN_STEP,
    EVENT_GAME_OVER,
    EVENT_GAME_PHASE_CHANGED,
    EVENT_PIECE_SPAWNED,
    EVENT_SESSION_STARTED,
)
from chainfall.utils.singletons import get_board, get_session

from tests.helpers import capture, setup_session


def test_world_starts_not_started():
    _, world, flow = setup_session()
    assert flow.phase == GamePhase.NOT_STARTED
    assert not flow.move(MoveDirection.LEFT)
    assert flow.hold() is None
    assert flow.lock() is None


def test_new_session_spawns_first_piece():
    bus, world, flow = setup_session()
    started = capture(bus, EVENT_SESSION_STARTED)
    phases = capture(bus, EVENT_GAME_PHASE_CHANGED)
    piece = flow.new_session()
    assert piece is not None
    assert flow.phase == GamePhase.RUNNING
    assert started == [{"rows": 12, "cols": 6}]
    assert phases[0]["new_phase"] == GamePhase.RUNNING
    assert len(flow.queue_system.upcoming()) == 4


def test_end_to_end_no_match_then_four_group():
    # One color only: the second pair always completes a vertical 4-group.
    bus, world, flow = setup_session(palette=(Cell.RED,))
    steps = capture(bus, EVENT_CHAIN_STEP)
    complete = capture(bus, EVENT_CHAIN_COMPLETE)
    flow.new_session()
    session = get_session(world)

    falls = 0
    while flow.tick():
        falls += 1
    assert falls == 10
    # The rejected fall locked the pair; nothing popped.
    assert session.score == 0 and session.chain_count == 0
    assert complete[-1]["depth"] == 0
    assert get_board(world).filled_count() == 2
    assert flow.piece_system.active is not None

    result = flow.drop()
    assert result is not None
    assert steps == [{"chain_count": 1, "cleared": 4, "points": 40}]
    assert session.score == 40
    assert session.chain_count == 0
    assert session.last_chain == 1
    assert session.pieces_locked == 2
    assert get_board(world).filled_count() == 0
    assert flow.piece_system.active is not None


def test_pause_blocks_operations():
    bus, world, flow = setup_session()
    flow.new_session()
    assert flow.pause()
    assert flow.phase == GamePhase.PAUSED
    assert not flow.move(MoveDirection.LEFT)
    assert not flow.rotate(RotateDirection.RIGHT)
    assert flow.drop() is None
    assert flow.resume()
    assert flow.move(MoveDirection.LEFT)


def test_toggle_pause():
    _, _, flow = setup_session()
    flow.new_session()
    assert flow.toggle_pause() is True
    assert flow.toggle_pause() is False
    assert flow.phase == GamePhase.RUNNING


def test_hold_through_flow_once_per_drop():
    bus, world, flow = setup_session(seed=5)
    spawned = capture(bus, EVENT_PIECE_SPAWNED)
    first = flow.new_session()
    next_up = flow.queue_system.peek_next()

    replacement = flow.hold()
    assert replacement is not None
    assert (replacement.primary, replacement.secondary) == (next_up.primary, next_up.secondary)
    assert flow.piece_system.active == replacement
    assert spawned[-1]["source"] == "queue"

    active = flow.piece_system.active
    held = flow.queue_system.held
    assert flow.hold() is None
    assert flow.piece_system.active == active
    assert flow.queue_system.held == held

    flow.drop()
    swapped_in = flow.hold()
    assert (swapped_in.primary, swapped_in.secondary) == (first.primary, first.secondary)
    assert spawned[-1]["source"] == "hold"


def test_spawn_blocked_after_stack_reaches_top():
    bus, world, flow = setup_session(palette=(Cell.BLUE,))
    over = capture(bus, EVENT_GAME_OVER)
    flow.new_session()
    board = get_board(world)
    for row in range(2, 12):
        board.set(row, 2, Cell.RED if row % 2 else Cell.GREEN)

    flow.drop()

    assert flow.phase == GamePhase.ENDED
    assert over and over[0]["reason"] == GameOverReason.SPAWN_BLOCKED
    assert flow.piece_system.active is None
    assert not flow.move(MoveDirection.LEFT)
    assert flow.hold() is None


def test_new_session_resets_but_keeps_high_score():
    _, world, flow = setup_session(palette=(Cell.RED,))
    flow.new_session()
    flow.drop()
    flow.drop()
    session = get_session(world)
    assert session.score == 40

    flow.new_session()
    assert session.score == 0
    assert session.high_score == 40
    assert session.last_chain == 0
    assert get_board(world).filled_count() == 0
    assert flow.phase == GamePhase.RUNNING


def test_manual_resolution_defers_next_spawn():
    bus, world, flow = setup_session(palette=(Cell.RED,), auto_resolve=False)
    flow.new_session()
    flow.drop()
    # Nothing can match yet, but the chain still needs one settling step.
    assert flow.chain_system.resolving
    assert flow.piece_system.active is None
    assert not flow.accepting_input
    assert flow.chain_system.step() is None
    assert flow.piece_system.active is not None

    flow.drop()
    chain_pass = flow.chain_system.step()
    assert chain_pass is not None and chain_pass.points == 40
    assert get_session(world).chain_count == 1
    assert flow.piece_system.active is None
    assert flow.chain_system.step() is None
    assert get_session(world).chain_count == 0
    assert flow.piece_system.active is not None


def test_view_reflects_session():
    _, world, flow = setup_session(seed=2)
    piece = flow.new_session()
    view = flow.view()
    assert view.phase == GamePhase.RUNNING
    assert view.active == piece.cells()
    assert view.held is None and view.can_hold
    assert len(view.upcoming) == 4
    assert view.score == 0 and view.chain_count == 0
    assert view.board == get_board(world).snapshot()
    with pytest.raises(AttributeError):
        view.score = 10
