from dataclasses import dataclass
from typing import Tuple

from chainfall.components.board import Position
from chainfall.components.cell import Cell, PALETTE
from chainfall.constants import (
    CHAIN_SETTLE_DELAY,
    GRID_COLS,
    GRID_ROWS,
    MIN_GROUP_SIZE,
    POINTS_PER_CELL,
    QUEUE_DEPTH,
)
from chainfall.errors import ConfigError


@dataclass(slots=True)
class EngineConfig:
    """Rules configuration stored on its own entity.

    auto_resolve: resolve the whole chain inside the lock call; when False the
    caller steps ChainResolutionSystem one pass at a time.
    """
    rows: int = GRID_ROWS
    cols: int = GRID_COLS
    queue_depth: int = QUEUE_DEPTH
    min_group_size: int = MIN_GROUP_SIZE
    points_per_cell: int = POINTS_PER_CELL
    settle_delay: float = CHAIN_SETTLE_DELAY
    palette: Tuple[Cell, ...] = PALETTE
    auto_resolve: bool = True

    def __post_init__(self) -> None:
        self.palette = tuple(self.palette)
        if self.rows < 2:
            raise ConfigError(f"rows must be >= 2 to fit a vertical pair, got {self.rows}")
        if self.cols < 1:
            raise ConfigError(f"cols must be >= 1, got {self.cols}")
        if self.queue_depth < 1:
            raise ConfigError(f"queue_depth must be >= 1, got {self.queue_depth}")
        if self.min_group_size < 2:
            raise ConfigError(f"min_group_size must be >= 2, got {self.min_group_size}")
        if self.points_per_cell <= 0:
            raise ConfigError(f"points_per_cell must be positive, got {self.points_per_cell}")
        if self.settle_delay < 0:
            raise ConfigError(f"settle_delay must be >= 0, got {self.settle_delay}")
        if not self.palette:
            raise ConfigError("palette must contain at least one color")
        if Cell.EMPTY in self.palette:
            raise ConfigError("palette cannot contain Cell.EMPTY")
        if len(set(self.palette)) != len(self.palette):
            raise ConfigError("palette colors must be distinct")

    @property
    def spawn_position(self) -> Position:
        # Primary on row 1 so the UP secondary occupies row 0.
        return 1, (self.cols - 1) // 2
