from __future__ import annotations

from collections import deque
from typing import Iterable, List, Set

from chainfall.components.board import Board, Position
from chainfall.components.cell import Cell
from chainfall.constants import MIN_GROUP_SIZE

# Up, down, left, right. Diagonal neighbours never join a group.
NEIGHBOUR_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def find_groups(board: Board) -> List[List[Position]]:
    """Partition all filled cells into 4-connected same-colour groups.

    One visited set is shared across the scan, so every cell is examined once
    and belongs to exactly one group. Groups come back in row-major discovery
    order, each sorted.
    """
    visited: Set[Position] = set()
    groups: List[List[Position]] = []
    for start in board.positions():
        if start in visited:
            continue
        color = board.get(*start)
        if color.is_empty:
            continue
        visited.add(start)
        group = [start]
        frontier = deque([start])
        while frontier:
            row, col = frontier.popleft()
            for drow, dcol in NEIGHBOUR_OFFSETS:
                nxt = (row + drow, col + dcol)
                if nxt in visited or not board.in_bounds(*nxt):
                    continue
                if board.get(*nxt) is color:
                    visited.add(nxt)
                    group.append(nxt)
                    frontier.append(nxt)
        groups.append(sorted(group))
    return groups


def find_matching_groups(board: Board, min_size: int = MIN_GROUP_SIZE) -> List[List[Position]]:
    return [group for group in find_groups(board) if len(group) >= min_size]


def find_matches(board: Board, min_size: int = MIN_GROUP_SIZE) -> Set[Position]:
    """Positions of every cell in a group of at least ``min_size``."""
    matched: Set[Position] = set()
    for group in find_matching_groups(board, min_size):
        matched.update(group)
    return matched


def remove_matches(board: Board, positions: Iterable[Position]) -> Board:
    """Return a copy of ``board`` with ``positions`` emptied."""
    cleared = board.copy()
    for row, col in positions:
        cleared.set(row, col, Cell.EMPTY)
    return cleared


def apply_gravity(board: Board) -> Board:
    """Return a copy with each column's tokens compacted to the bottom.

    Stable per column: tokens keep their relative vertical order.
    """
    settled = Board(rows=board.rows, cols=board.cols)
    for col in range(board.cols):
        target = board.rows - 1
        for row in range(board.rows - 1, -1, -1):
            cell = board.cells[row][col]
            if cell.is_empty:
                continue
            settled.cells[target][col] = cell
            target -= 1
    return settled


def is_settled(board: Board) -> bool:
    """True when no token has an empty cell directly beneath it."""
    for col in range(board.cols):
        seen_empty = False
        for row in range(board.rows - 1, -1, -1):
            if board.cells[row][col].is_empty:
                seen_empty = True
            elif seen_empty:
                return False
    return True
