from dataclasses import dataclass
from enum import Enum, auto


class ChainPhase(Enum):
    IDLE = auto()
    RESOLVING = auto()
    SETTLED = auto()


@dataclass(slots=True)
class ChainState:
    """Progress of the resolution sequence started by the last lock."""

    phase: ChainPhase = ChainPhase.IDLE
    chain_index: int = 0
    points: int = 0

    def begin(self) -> None:
        self.phase = ChainPhase.RESOLVING
        self.chain_index = 0
        self.points = 0

    def reset(self) -> None:
        self.phase = ChainPhase.IDLE
        self.chain_index = 0
        self.points = 0
