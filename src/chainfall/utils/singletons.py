from typing import Type, TypeVar

from esper import World

from chainfall.components.active_piece import ActivePieceSlot
from chainfall.components.board import Board
from chainfall.components.chain_state import ChainState
from chainfall.components.engine_config import EngineConfig
from chainfall.components.game_state import SessionState
from chainfall.components.hold_slot import HoldSlot
from chainfall.components.piece_queue import PieceQueue

C = TypeVar("C")


def get_singleton(world: World, component_type: Type[C]) -> C:
    """Return the only instance of ``component_type`` in the world."""
    for _, component in world.get_component(component_type):
        return component
    raise RuntimeError(f"{component_type.__name__} component not found; build the world with create_world")


def get_board(world: World) -> Board:
    return get_singleton(world, Board)


def get_config(world: World) -> EngineConfig:
    return get_singleton(world, EngineConfig)


def get_session(world: World) -> SessionState:
    return get_singleton(world, SessionState)


def get_active_slot(world: World) -> ActivePieceSlot:
    return get_singleton(world, ActivePieceSlot)


def get_queue(world: World) -> PieceQueue:
    return get_singleton(world, PieceQueue)


def get_hold_slot(world: World) -> HoldSlot:
    return get_singleton(world, HoldSlot)


def get_or_create_chain_state(world: World) -> ChainState:
    """Return the shared ChainState component, creating it if absent."""
    existing = list(world.get_component(ChainState))
    if existing:
        return existing[0][1]
    world.create_entity(ChainState())
    return list(world.get_component(ChainState))[0][1]
