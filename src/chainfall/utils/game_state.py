from __future__ import annotations

import logging

from esper import World

from chainfall.components.active_piece import ActivePieceSlot
from chainfall.components.game_state import GameOverReason, GamePhase
from chainfall.events.bus import EVENT_GAME_OVER, EVENT_GAME_PHASE_CHANGED, EventBus
from chainfall.utils.singletons import get_session, get_singleton

logger = logging.getLogger(__name__)


def set_game_phase(world: World, event_bus: EventBus, phase: GamePhase) -> bool:
    """Update the session phase and emit a change event when it differs."""

    session = get_session(world)
    previous_phase = session.phase
    if previous_phase == phase:
        return False
    session.phase = phase
    logger.info("game phase %s -> %s", previous_phase.name, phase.name)
    event_bus.emit(
        EVENT_GAME_PHASE_CHANGED,
        previous_phase=previous_phase,
        new_phase=phase,
    )
    return True


def end_session(world: World, event_bus: EventBus, reason: GameOverReason) -> None:
    """Terminate the session: drop the active pair, move to ENDED, announce why."""

    session = get_session(world)
    if session.phase == GamePhase.ENDED:
        return
    get_singleton(world, ActivePieceSlot).piece = None
    session.game_over_reason = reason
    logger.warning("game over (%s) with score %d", reason.name, session.score)
    set_game_phase(world, event_bus, GamePhase.ENDED)
    event_bus.emit(
        EVENT_GAME_OVER,
        reason=reason,
        score=session.score,
        high_score=session.high_score,
    )
