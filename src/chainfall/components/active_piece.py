from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Optional, Tuple

from chainfall.components.board import Position
from chainfall.components.cell import Cell


class Orientation(IntEnum):
    """Where the secondary cell sits relative to the primary (anchor) cell."""
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @property
    def offset(self) -> Tuple[int, int]:
        """(column delta, row delta) of the secondary cell."""
        return _ORIENTATION_OFFSETS[self]

    def turned(self, steps: int) -> "Orientation":
        return Orientation((self.value + steps) % 4)


_ORIENTATION_OFFSETS = {
    Orientation.UP: (0, -1),
    Orientation.RIGHT: (1, 0),
    Orientation.DOWN: (0, 1),
    Orientation.LEFT: (-1, 0),
}


class MoveDirection(Enum):
    LEFT = (-1, 0)
    RIGHT = (1, 0)
    DOWN = (0, 1)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value


class RotateDirection(Enum):
    LEFT = -1
    RIGHT = 1


@dataclass(frozen=True, slots=True)
class ActivePiece:
    """A falling pair. ``col``/``row`` locate the primary cell."""
    primary: Cell
    secondary: Cell
    col: int = 0
    row: int = 0
    orientation: Orientation = Orientation.UP

    @property
    def anchor(self) -> Position:
        return self.row, self.col

    def secondary_position(self) -> Position:
        dcol, drow = self.orientation.offset
        return self.row + drow, self.col + dcol

    def positions(self) -> Tuple[Position, Position]:
        return self.anchor, self.secondary_position()

    def cells(self) -> Tuple[Tuple[Position, Cell], Tuple[Position, Cell]]:
        return (self.anchor, self.primary), (self.secondary_position(), self.secondary)

    def shifted(self, dcol: int, drow: int) -> "ActivePiece":
        return replace(self, col=self.col + dcol, row=self.row + drow)

    def turned(self, steps: int) -> "ActivePiece":
        return replace(self, orientation=self.orientation.turned(steps))

    def placed_at(self, row: int, col: int) -> "ActivePiece":
        """Copy of this pair at (row, col) in spawn orientation."""
        return replace(self, row=row, col=col, orientation=Orientation.UP)


@dataclass(slots=True)
class ActivePieceSlot:
    """Singleton holder for the pair currently under player control."""
    piece: Optional[ActivePiece] = None
