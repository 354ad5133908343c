from __future__ import annotations

import logging
import random

from esper import World

from slotbingo.events.bus import EVENT_CARD_GENERATED, EVENT_CELL_MARKED, EventBus
from slotbingo.systems.card_ops import generate_card, mark_cells, read_card, validate_card, write_card
from slotbingo.utils.snapshot import CardGrid, Position

logger = logging.getLogger(__name__)


class CardSystem:
    """Owns the cell entities of the bingo card."""

    def __init__(self, world: World, event_bus: EventBus, rng: random.Random | None = None):
        self.world = world
        self.event_bus = event_bus
        self.random = rng or getattr(world, "random", None) or random.Random()

    def new_card(self) -> CardGrid:
        card = generate_card(self.random)
        validate_card(card)
        write_card(self.world, card)
        logger.debug("Generated card %s", [[cell.number for cell in row] for row in card])
        self.event_bus.emit(EVENT_CARD_GENERATED, numbers=[[cell.number for cell in row] for row in card])
        return card

    def load_card(self, card: CardGrid) -> None:
        """Install a prepared card, e.g. a fixed layout for a scripted game."""
        validate_card(card)
        write_card(self.world, card)
        self.event_bus.emit(EVENT_CARD_GENERATED, numbers=[[cell.number for cell in row] for row in card])

    def snapshot(self) -> CardGrid:
        return read_card(self.world)

    def mark(self, positions: list[Position], *, source: str) -> list[Position]:
        marked = mark_cells(self.world, positions)
        card = read_card(self.world)
        for row, col in marked:
            self.event_bus.emit(EVENT_CELL_MARKED, row=row, col=col, number=card[row][col].number, source=source)
        return marked
