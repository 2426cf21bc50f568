import random

from esper import World

from chainfall.components.active_piece import ActivePieceSlot
from chainfall.components.board import Board
from chainfall.components.chain_state import ChainState
from chainfall.components.engine_config import EngineConfig
from chainfall.components.game_state import SessionState
from chainfall.components.hold_slot import HoldSlot
from chainfall.components.piece_queue import PieceQueue


def create_world(
    config: EngineConfig | None = None,
    *,
    rng: random.Random | None = None,
) -> World:
    """Build a world holding one game session's singleton components.

    The injected ``rng`` is exposed as ``world.random`` and drives piece
    generation; pass a seeded ``random.Random`` for reproducible sessions.
    """
    config = config or EngineConfig()
    world = World()
    setattr(world, "random", rng or random.Random())

    world.create_entity(config)
    world.create_entity(Board(rows=config.rows, cols=config.cols))
    world.create_entity(SessionState(), ChainState())
    world.create_entity(
        ActivePieceSlot(),
        PieceQueue(depth=config.queue_depth),
        HoldSlot(),
    )
    return world
