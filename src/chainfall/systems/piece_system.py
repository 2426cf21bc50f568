from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from esper import World

from chainfall.components.active_piece import ActivePiece, MoveDirection, RotateDirection
from chainfall.components.board import BoardSnapshot, Position
from chainfall.components.game_state import GameOverReason
from chainfall.events.bus import (
    EVENT_PIECE_LOCKED,
    EVENT_PIECE_MOVED,
    EVENT_PIECE_ROTATED,
    EVENT_PIECE_SPAWNED,
    EventBus,
)
from chainfall.systems.board_ops import apply_gravity
from chainfall.systems.queue_system import QueueSystem
from chainfall.utils.game_state import end_session
from chainfall.utils.singletons import get_active_slot, get_board, get_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LockResult:
    """Board after a lock (cells written, gravity applied once) and the two written positions."""
    board: BoardSnapshot
    positions: Tuple[Position, Position]


class PieceControlSystem:
    """Owns the active pair: spawn, move, rotate and lock.

    Moves and rotations are validated against the board before they commit; a
    rejected request changes nothing and returns False. There is no wall kick,
    so a rotation into a wall or a token is simply refused.
    """

    def __init__(self, world: World, event_bus: EventBus, *, queue_system: QueueSystem | None = None):
        self.world = world
        self.event_bus = event_bus
        self.queue_system = queue_system or QueueSystem(world, event_bus)

    @property
    def active(self) -> Optional[ActivePiece]:
        return get_active_slot(self.world).piece

    def fits(self, piece: ActivePiece) -> bool:
        board = get_board(self.world)
        return all(board.is_open(row, col) for row, col in piece.positions())

    def spawn(self) -> Optional[ActivePiece]:
        """Take the front of the queue and put it into play at the spawn point.

        Returns None and ends the session when the spawn cells are occupied.
        """
        row, col = get_config(self.world).spawn_position
        piece = self.queue_system.advance().placed_at(row, col)
        return self.enter_play(piece, source="queue")

    def enter_play(self, piece: ActivePiece, *, source: str) -> Optional[ActivePiece]:
        if not self.fits(piece):
            end_session(self.world, self.event_bus, GameOverReason.SPAWN_BLOCKED)
            return None
        get_active_slot(self.world).piece = piece
        self.event_bus.emit(EVENT_PIECE_SPAWNED, piece=piece, source=source)
        return piece

    def move(self, direction: MoveDirection) -> bool:
        """Shift the pair one cell.

        A False result for ``MoveDirection.DOWN`` means the pair has landed and
        must be locked by the caller.
        """
        slot = get_active_slot(self.world)
        if slot.piece is None:
            return False
        candidate = slot.piece.shifted(*direction.delta)
        if not self.fits(candidate):
            return False
        slot.piece = candidate
        self.event_bus.emit(EVENT_PIECE_MOVED, piece=candidate, direction=direction)
        return True

    def rotate(self, direction: RotateDirection) -> bool:
        slot = get_active_slot(self.world)
        if slot.piece is None:
            return False
        candidate = slot.piece.turned(direction.value)
        if not self.fits(candidate):
            return False
        slot.piece = candidate
        self.event_bus.emit(EVENT_PIECE_ROTATED, piece=candidate, direction=direction)
        return True

    def lock(self) -> Optional[LockResult]:
        """Write the pair into the board, settle it, and hand off to chain resolution.

        Positions are re-validated first; an off-board or overlapping pair ends
        the session instead of being written.
        """
        slot = get_active_slot(self.world)
        piece = slot.piece
        if piece is None:
            return None
        board = get_board(self.world)
        if not self.fits(piece):
            end_session(self.world, self.event_bus, GameOverReason.OUT_OF_BOUNDS_LOCK)
            return None
        for (row, col), color in piece.cells():
            board.set(row, col, color)
        board.load(apply_gravity(board))
        slot.piece = None
        positions = piece.positions()
        snapshot = board.snapshot()
        logger.debug("locked pair at %s", positions)
        self.event_bus.emit(EVENT_PIECE_LOCKED, positions=list(positions), board=snapshot)
        return LockResult(board=snapshot, positions=positions)

    def drop(self) -> Optional[LockResult]:
        """Fall until blocked, then lock."""
        if self.active is None:
            return None
        while self.move(MoveDirection.DOWN):
            pass
        return self.lock()
