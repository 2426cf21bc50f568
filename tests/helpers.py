from __future__ import annotations

import random
from typing import Sequence

from esper import World

from chainfall.components.board import Board
from chainfall.components.cell import Cell
from chainfall.components.engine_config import EngineConfig
from chainfall.events.bus import EventBus
from chainfall.systems.game_flow_system import GameFlowSystem
from chainfall.utils.singletons import get_board
from chainfall.world import create_world

CELL_CODES = {
    '.': Cell.EMPTY,
    'R': Cell.RED,
    'G': Cell.GREEN,
    'B': Cell.BLUE,
    'Y': Cell.YELLOW,
    'P': Cell.PURPLE,
}


def board_from_strings(lines: Sequence[str], rows: int | None = None, cols: int | None = None) -> Board:
    """Build a board from text rows, bottom-aligned.

    Missing rows are added as empty rows on top and short rows are padded with
    empty cells on the right, so a test only spells out the interesting bottom.
    """
    width = cols if cols is not None else max(len(line) for line in lines)
    height = rows if rows is not None else len(lines)
    padded = ['.' * width] * (height - len(lines)) + [line.ljust(width, '.') for line in lines]
    return Board.from_rows([[CELL_CODES[ch] for ch in line] for line in padded])


def load_board(world: World, lines: Sequence[str]) -> Board:
    board = get_board(world)
    board.load(board_from_strings(lines, rows=board.rows, cols=board.cols))
    return board


def capture(bus: EventBus, event: str) -> list[dict]:
    """Record every payload emitted for ``event``."""
    received: list[dict] = []
    bus.subscribe(event, lambda s, **k: received.append(k))
    return received


def setup_session(seed: int = 0, **config_overrides) -> tuple[EventBus, World, GameFlowSystem]:
    bus = EventBus()
    world = create_world(EngineConfig(**config_overrides), rng=random.Random(seed))
    flow = GameFlowSystem(world, bus)
    return bus, world, flow
