from dataclasses import dataclass
from typing import Optional

from chainfall.components.active_piece import ActivePiece


@dataclass(slots=True)
class HoldSlot:
    """Held pair plus the once-per-drop gate.

    can_hold: re-armed when a piece locks, cleared by a successful hold.
    """
    piece: Optional[ActivePiece] = None
    can_hold: bool = True

    def reset(self) -> None:
        self.piece = None
        self.can_hold = True
