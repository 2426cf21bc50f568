"""High-level coordinator for a game session."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from esper import World

from chainfall.components.active_piece import ActivePiece, MoveDirection, RotateDirection
from chainfall.components.board import BoardSnapshot, Position
from chainfall.components.cell import Cell
from chainfall.components.game_state import GamePhase
from chainfall.events.bus import (
    EVENT_CHAIN_COMPLETE,
    EVENT_PIECE_LOCKED,
    EVENT_SESSION_STARTED,
    EventBus,
)
from chainfall.systems.chain_resolution import ChainResolutionSystem
from chainfall.systems.piece_system import LockResult, PieceControlSystem
from chainfall.systems.queue_system import QueueSystem
from chainfall.utils.game_state import set_game_phase
from chainfall.utils.singletons import (
    get_active_slot,
    get_board,
    get_hold_slot,
    get_or_create_chain_state,
    get_session,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SessionView:
    """Read-only picture of a session for presentation layers."""
    phase: GamePhase
    board: BoardSnapshot
    active: Tuple[Tuple[Position, Cell], ...]
    held: Optional[ActivePiece]
    can_hold: bool
    upcoming: Tuple[ActivePiece, ...]
    score: int
    high_score: int
    chain_count: int
    last_chain: int


class GameFlowSystem:
    """Session lifecycle plus the player-facing operations.

    Every request is ignored unless the phase is RUNNING and no chain is
    mid-resolution. A Down move that cannot be applied locks the pair; the next
    pair spawns from the queue once the resulting chain has settled.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        queue_system: QueueSystem | None = None,
        piece_system: PieceControlSystem | None = None,
        chain_system: ChainResolutionSystem | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.queue_system = queue_system or QueueSystem(world, event_bus)
        self.piece_system = piece_system or PieceControlSystem(
            world, event_bus, queue_system=self.queue_system
        )
        self.chain_system = chain_system or ChainResolutionSystem(world, event_bus)
        self.event_bus.subscribe(EVENT_PIECE_LOCKED, self._on_piece_locked)
        self.event_bus.subscribe(EVENT_CHAIN_COMPLETE, self._on_chain_complete)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def new_session(self) -> Optional[ActivePiece]:
        """Reset every session counter, the board and the queue, then spawn."""
        board = get_board(self.world)
        board.clear()
        get_session(self.world).reset()
        get_or_create_chain_state(self.world).reset()
        get_active_slot(self.world).piece = None
        self.queue_system.reset()
        set_game_phase(self.world, self.event_bus, GamePhase.RUNNING)
        logger.info("new session on %dx%d board", board.rows, board.cols)
        self.event_bus.emit(EVENT_SESSION_STARTED, rows=board.rows, cols=board.cols)
        return self.piece_system.spawn()

    def pause(self) -> bool:
        if self.phase != GamePhase.RUNNING:
            return False
        return set_game_phase(self.world, self.event_bus, GamePhase.PAUSED)

    def resume(self) -> bool:
        if self.phase != GamePhase.PAUSED:
            return False
        return set_game_phase(self.world, self.event_bus, GamePhase.RUNNING)

    def toggle_pause(self) -> bool:
        """Flip between RUNNING and PAUSED; returns True when now paused."""
        if self.phase == GamePhase.RUNNING:
            self.pause()
        elif self.phase == GamePhase.PAUSED:
            self.resume()
        return self.phase == GamePhase.PAUSED

    @property
    def phase(self) -> GamePhase:
        return get_session(self.world).phase

    @property
    def accepting_input(self) -> bool:
        return self.phase == GamePhase.RUNNING and not self.chain_system.resolving

    # ------------------------------------------------------------------
    # Player operations
    # ------------------------------------------------------------------

    def move(self, direction: MoveDirection) -> bool:
        if not self.accepting_input:
            return False
        if self.piece_system.move(direction):
            return True
        if direction == MoveDirection.DOWN:
            self.piece_system.lock()
        return False

    def tick(self) -> bool:
        """One gravity step from the caller's fall timer."""
        return self.move(MoveDirection.DOWN)

    def rotate(self, direction: RotateDirection) -> bool:
        if not self.accepting_input:
            return False
        return self.piece_system.rotate(direction)

    def lock(self) -> Optional[LockResult]:
        if not self.accepting_input:
            return None
        return self.piece_system.lock()

    def drop(self) -> Optional[LockResult]:
        if not self.accepting_input:
            return None
        return self.piece_system.drop()

    def hold(self) -> Optional[ActivePiece]:
        """Swap the active pair with the hold slot; None when not permitted."""
        if not self.accepting_input:
            return None
        slot = get_active_slot(self.world)
        current = slot.piece
        if current is None:
            return None
        swapping = self.queue_system.held is not None
        incoming = self.queue_system.hold(current)
        if incoming is None:
            return None
        slot.piece = None
        return self.piece_system.enter_play(incoming, source="hold" if swapping else "queue")

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------

    def view(self) -> SessionView:
        session = get_session(self.world)
        hold = get_hold_slot(self.world)
        active = self.piece_system.active
        return SessionView(
            phase=session.phase,
            board=get_board(self.world).snapshot(),
            active=active.cells() if active is not None else (),
            held=hold.piece,
            can_hold=hold.can_hold,
            upcoming=self.queue_system.upcoming(),
            score=session.score,
            high_score=session.high_score,
            chain_count=session.chain_count,
            last_chain=session.last_chain,
        )

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_piece_locked(self, sender, **payload) -> None:
        get_session(self.world).pieces_locked += 1

    def _on_chain_complete(self, sender, **payload) -> None:
        if self.phase == GamePhase.ENDED:
            return
        if get_active_slot(self.world).piece is not None:
            return
        self.piece_system.spawn()
