from __future__ import annotations

import logging
import random
from typing import Optional, Tuple

from esper import World

from chainfall.components.active_piece import ActivePiece
from chainfall.events.bus import (
    EVENT_PIECE_HELD,
    EVENT_PIECE_LOCKED,
    EVENT_QUEUE_ADVANCED,
    EventBus,
)
from chainfall.utils.singletons import get_config, get_hold_slot, get_queue

logger = logging.getLogger(__name__)


class QueueSystem:
    """Generates upcoming pairs and runs the hold slot.

    The queue always holds ``queue_depth`` pairs: every ``advance`` pops the
    front and appends one fresh pair. Colors are drawn independently and
    uniformly from the palette for each cell, so repeats are allowed.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self.event_bus.subscribe(EVENT_PIECE_LOCKED, self._on_piece_locked)

    def generate(self) -> ActivePiece:
        config = get_config(self.world)
        primary = self._rng.choice(config.palette)
        secondary = self._rng.choice(config.palette)
        row, col = config.spawn_position
        return ActivePiece(primary=primary, secondary=secondary, col=col, row=row)

    def fill(self) -> None:
        queue = get_queue(self.world)
        while not queue.is_full:
            queue.push(self.generate())

    def reset(self) -> None:
        """Empty the hold slot and refill the queue with fresh pairs."""
        get_queue(self.world).clear()
        get_hold_slot(self.world).reset()
        self.fill()

    def peek_next(self) -> ActivePiece:
        queue = get_queue(self.world)
        if not len(queue):
            self.fill()
        return queue.peek()

    def upcoming(self) -> Tuple[ActivePiece, ...]:
        return get_queue(self.world).upcoming()

    def advance(self) -> ActivePiece:
        queue = get_queue(self.world)
        if not len(queue):
            self.fill()
        taken = queue.pop_front()
        queue.push(self.generate())
        self.event_bus.emit(EVENT_QUEUE_ADVANCED, taken=taken, upcoming=queue.upcoming())
        return taken

    @property
    def can_hold(self) -> bool:
        return get_hold_slot(self.world).can_hold

    @property
    def held(self) -> Optional[ActivePiece]:
        return get_hold_slot(self.world).piece

    def hold(self, current: ActivePiece) -> Optional[ActivePiece]:
        """Stash ``current`` and return the pair that should take its place.

        Returns None without touching any state when a hold was already used
        since the last lock. With an empty slot the replacement comes from the
        queue; otherwise the held pair is swapped back in at spawn.
        """
        slot = get_hold_slot(self.world)
        if not slot.can_hold:
            return None
        row, col = get_config(self.world).spawn_position
        previous = slot.piece
        if previous is None:
            incoming = self.advance()
        else:
            incoming = previous
        slot.piece = current.placed_at(row, col)
        slot.can_hold = False
        incoming = incoming.placed_at(row, col)
        logger.debug("hold: stored %s, released %s", slot.piece, incoming)
        self.event_bus.emit(
            EVENT_PIECE_HELD,
            held=slot.piece,
            current=incoming,
            swapped=previous is not None,
        )
        return incoming

    def _on_piece_locked(self, sender, **payload) -> None:
        get_hold_slot(self.world).can_hold = True
