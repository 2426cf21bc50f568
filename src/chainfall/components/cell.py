from enum import Enum


class Cell(Enum):
    """Contents of one board square: EMPTY or one of the token colors."""
    EMPTY = "empty"
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"
    PURPLE = "purple"

    @property
    def is_empty(self) -> bool:
        return self is Cell.EMPTY


# Colors a freshly generated piece may carry, in draw order.
PALETTE = (Cell.RED, Cell.GREEN, Cell.BLUE, Cell.YELLOW, Cell.PURPLE)
