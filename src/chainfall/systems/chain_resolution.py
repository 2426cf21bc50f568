from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from esper import World

from chainfall.components.board import BoardSnapshot, Position
from chainfall.components.chain_state import ChainPhase
from chainfall.constants import POINTS_PER_CELL
from chainfall.events.bus import (
    EVENT_CHAIN_COMPLETE,
    EVENT_CHAIN_STEP,
    EVENT_GRAVITY_APPLIED,
    EVENT_MATCH_CLEARED,
    EVENT_MATCH_FOUND,
    EVENT_PIECE_LOCKED,
    EVENT_SCORE_CHANGED,
    EventBus,
)
from chainfall.systems.board_ops import apply_gravity, find_matches, remove_matches
from chainfall.utils.singletons import (
    get_board,
    get_config,
    get_or_create_chain_state,
    get_session,
)

logger = logging.getLogger(__name__)


def chain_points(cleared: int, chain_index: int, points_per_cell: int = POINTS_PER_CELL) -> int:
    """Score for one pass: every popped cell is worth more the deeper the chain."""
    return cleared * points_per_cell * (chain_index + 1)


@dataclass(frozen=True, slots=True)
class ChainPass:
    """One committed resolution pass."""
    chain_count: int
    positions: Tuple[Position, ...]
    points: int
    cleared: BoardSnapshot
    settled: BoardSnapshot


@dataclass(frozen=True, slots=True)
class ChainResult:
    passes: Tuple[ChainPass, ...] = ()

    @property
    def depth(self) -> int:
        return len(self.passes)

    @property
    def points(self) -> int:
        return sum(p.points for p in self.passes)


class ChainResolutionSystem:
    """Resolves matches after a lock, one atomic pass at a time.

    Flow:
      - EVENT_PIECE_LOCKED starts a sequence at chain index 0 (and runs it to
        completion when ``auto_resolve`` is set).
      - Each ``step`` finds every matched cell, scores them, removes them and
        applies gravity before anything is emitted, then advances the index.
      - The first pass that finds nothing resets the live chain count and
        emits EVENT_CHAIN_COMPLETE.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_PIECE_LOCKED, self.on_piece_locked)

    @property
    def resolving(self) -> bool:
        return get_or_create_chain_state(self.world).phase == ChainPhase.RESOLVING

    def on_piece_locked(self, sender, **payload) -> None:
        self.begin()
        if get_config(self.world).auto_resolve:
            self.run()

    def begin(self) -> None:
        get_or_create_chain_state(self.world).begin()

    def step(self) -> Optional[ChainPass]:
        state = get_or_create_chain_state(self.world)
        if state.phase != ChainPhase.RESOLVING:
            return None
        config = get_config(self.world)
        board = get_board(self.world)
        matches = find_matches(board, config.min_group_size)
        if not matches:
            self._settle()
            return None

        chain_index = state.chain_index
        positions = tuple(sorted(matches))
        points = chain_points(len(positions), chain_index, config.points_per_cell)
        cleared = remove_matches(board, positions)
        settled = apply_gravity(cleared)
        board.load(settled)

        chain_count = chain_index + 1
        state.chain_index = chain_count
        state.points += points
        session = get_session(self.world)
        session.chain_count = chain_count
        session.last_chain = chain_count
        session.add_score(points)
        logger.debug("chain %d: cleared %d cells for %d points", chain_count, len(positions), points)

        result = ChainPass(
            chain_count=chain_count,
            positions=positions,
            points=points,
            cleared=cleared.snapshot(),
            settled=settled.snapshot(),
        )
        self.event_bus.emit(EVENT_MATCH_FOUND, positions=list(positions), size=len(positions), chain_index=chain_index)
        self.event_bus.emit(
            EVENT_MATCH_CLEARED,
            positions=list(positions),
            board=result.cleared,
            settle_delay=config.settle_delay,
        )
        self.event_bus.emit(EVENT_GRAVITY_APPLIED, board=result.settled, settle_delay=config.settle_delay)
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=session.score, delta=points, high_score=session.high_score)
        self.event_bus.emit(EVENT_CHAIN_STEP, chain_count=chain_count, cleared=len(positions), points=points)
        return result

    def run(self) -> ChainResult:
        """Step until a pass finds nothing."""
        passes = []
        while True:
            chain_pass = self.step()
            if chain_pass is None:
                break
            passes.append(chain_pass)
        return ChainResult(passes=tuple(passes))

    def _settle(self) -> None:
        state = get_or_create_chain_state(self.world)
        state.phase = ChainPhase.SETTLED
        get_session(self.world).chain_count = 0
        if state.chain_index:
            logger.debug("chain settled at depth %d (+%d)", state.chain_index, state.points)
        self.event_bus.emit(EVENT_CHAIN_COMPLETE, depth=state.chain_index, points=state.points)
