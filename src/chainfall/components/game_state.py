"""Session-wide state: phase, score and chain counters."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class GamePhase(Enum):
    NOT_STARTED = auto()
    RUNNING = auto()
    PAUSED = auto()
    ENDED = auto()


class GameOverReason(Enum):
    SPAWN_BLOCKED = auto()
    OUT_OF_BOUNDS_LOCK = auto()


@dataclass(slots=True)
class SessionState:
    """Singleton component with the counters of one game session.

    chain_count is the live chain length and drops to 0 as soon as a resolution
    pass finds nothing; last_chain keeps the length of the most recent chain for
    display. high_score survives ``reset`` so it spans sessions of one world.
    """
    phase: GamePhase = GamePhase.NOT_STARTED
    score: int = 0
    chain_count: int = 0
    last_chain: int = 0
    high_score: int = 0
    pieces_locked: int = 0
    game_over_reason: Optional[GameOverReason] = None

    def add_score(self, points: int) -> int:
        if points <= 0:
            return self.score
        self.score += points
        if self.score > self.high_score:
            self.high_score = self.score
        return self.score

    def reset(self) -> None:
        self.phase = GamePhase.NOT_STARTED
        self.score = 0
        self.chain_count = 0
        self.last_chain = 0
        self.pieces_locked = 0
        self.game_over_reason = None
