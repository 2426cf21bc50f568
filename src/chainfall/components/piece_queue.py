from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Tuple

from chainfall.components.active_piece import ActivePiece


@dataclass(slots=True)
class PieceQueue:
    """FIFO of upcoming pairs kept at a constant lookahead ``depth``."""
    depth: int
    pieces: Deque[ActivePiece] = field(default_factory=deque)

    def __len__(self) -> int:
        return len(self.pieces)

    @property
    def is_full(self) -> bool:
        return len(self.pieces) >= self.depth

    def peek(self) -> ActivePiece:
        if not self.pieces:
            raise IndexError("piece queue is empty")
        return self.pieces[0]

    def pop_front(self) -> ActivePiece:
        if not self.pieces:
            raise IndexError("piece queue is empty")
        return self.pieces.popleft()

    def push(self, piece: ActivePiece) -> None:
        self.pieces.append(piece)

    def upcoming(self) -> Tuple[ActivePiece, ...]:
        return tuple(self.pieces)

    def clear(self) -> None:
        self.pieces.clear()
