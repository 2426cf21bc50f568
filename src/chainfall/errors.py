"""Exception types raised by the engine.

Rejected moves, rotations and holds are not errors; those operations report
failure through their return value. Exceptions are reserved for misuse of the
API (bad configuration, coordinates outside the grid).
"""


class ChainfallError(Exception):
    """Base class for engine errors."""


class ConfigError(ChainfallError, ValueError):
    """Raised when an EngineConfig carries values the engine cannot run with."""


class BoardBoundsError(ChainfallError, IndexError):
    """Raised when a board cell is addressed outside the declared grid."""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(f"cell ({row}, {col}) outside {rows}x{cols} board")
        self.row = row
        self.col = col
