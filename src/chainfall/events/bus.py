from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so systems that are not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SESSION & FLOW
# ============================================================================
EVENT_SESSION_STARTED = "session_started"          # payload: rows=int, cols=int
EVENT_GAME_PHASE_CHANGED = "game_phase_changed"    # payload: previous_phase=GamePhase|None, new_phase=GamePhase
EVENT_GAME_OVER = "game_over"                      # payload: reason=GameOverReason, score=int, high_score=int


# ============================================================================
# ACTIVE PIECE
# ============================================================================
EVENT_PIECE_SPAWNED = "piece_spawned"      # payload: piece=ActivePiece, source=str ("queue"|"hold")
EVENT_PIECE_MOVED = "piece_moved"          # payload: piece=ActivePiece, direction=MoveDirection
EVENT_PIECE_ROTATED = "piece_rotated"      # payload: piece=ActivePiece, direction=RotateDirection
EVENT_PIECE_LOCKED = "piece_locked"        # payload: positions=[(r,c),(r,c)], board=BoardSnapshot
EVENT_PIECE_HELD = "piece_held"            # payload: held=ActivePiece, current=ActivePiece, swapped=bool


# ============================================================================
# QUEUE
# ============================================================================
EVENT_QUEUE_ADVANCED = "queue_advanced"    # payload: taken=ActivePiece, upcoming=tuple[ActivePiece,...]


# ============================================================================
# MATCH & CHAIN RESOLUTION
# ============================================================================
EVENT_MATCH_FOUND = "match_found"          # payload: positions=[(r,c),...], size=int, chain_index=int
EVENT_MATCH_CLEARED = "match_cleared"      # payload: positions=[(r,c),...], board=BoardSnapshot, settle_delay=float
EVENT_GRAVITY_APPLIED = "gravity_applied"  # payload: board=BoardSnapshot, settle_delay=float
EVENT_CHAIN_STEP = "chain_step"            # payload: chain_count=int, cleared=int, points=int
EVENT_CHAIN_COMPLETE = "chain_complete"    # payload: depth=int, points=int
EVENT_SCORE_CHANGED = "score_changed"      # payload: score=int, delta=int, high_score=int
