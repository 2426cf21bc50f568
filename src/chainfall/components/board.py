from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple

from chainfall.components.cell import Cell
from chainfall.errors import BoardBoundsError

Position = Tuple[int, int]
BoardSnapshot = Tuple[Tuple[Cell, ...], ...]


@dataclass(slots=True)
class Board:
    """Fixed rows x cols grid of cells, row 0 at the top.

    Gravity pulls toward increasing row index. The component holds data only;
    matching and compaction live in ``chainfall.systems.board_ops``.
    """
    rows: int
    cols: int
    cells: List[List[Cell]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[Cell.EMPTY] * self.cols for _ in range(self.rows)]
        elif len(self.cells) != self.rows or any(len(row) != self.cols for row in self.cells):
            raise ValueError(f"cells do not form a {self.rows}x{self.cols} grid")

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Cell]]) -> "Board":
        grid = [list(row) for row in rows]
        return cls(rows=len(grid), cols=len(grid[0]) if grid else 0, cells=grid)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get(self, row: int, col: int) -> Cell:
        if not self.in_bounds(row, col):
            raise BoardBoundsError(row, col, self.rows, self.cols)
        return self.cells[row][col]

    def set(self, row: int, col: int, cell: Cell) -> None:
        if not self.in_bounds(row, col):
            raise BoardBoundsError(row, col, self.rows, self.cols)
        self.cells[row][col] = cell

    def is_empty(self, row: int, col: int) -> bool:
        return self.get(row, col).is_empty

    def is_open(self, row: int, col: int) -> bool:
        """True when (row, col) is on the board and unoccupied."""
        return self.in_bounds(row, col) and self.cells[row][col].is_empty

    def positions(self) -> Iterator[Position]:
        for row in range(self.rows):
            for col in range(self.cols):
                yield row, col

    def filled_count(self) -> int:
        return sum(1 for row in self.cells for cell in row if not cell.is_empty)

    def clear(self) -> None:
        for row in self.cells:
            for col in range(self.cols):
                row[col] = Cell.EMPTY

    def copy(self) -> "Board":
        return Board(rows=self.rows, cols=self.cols, cells=[list(row) for row in self.cells])

    def load(self, other: "Board") -> None:
        """Replace this board's contents with ``other``'s in place."""
        if (other.rows, other.cols) != (self.rows, self.cols):
            raise ValueError("board dimensions differ")
        self.cells = [list(row) for row in other.cells]

    def snapshot(self) -> BoardSnapshot:
        return tuple(tuple(row) for row in self.cells)
