import random

from esper import World

from .events.bus import EventBus
from slotbingo.components.card import Card
from slotbingo.components.game_state import GameState
from slotbingo.components.rules import BingoRules
from slotbingo.constants import GRID_COLS, GRID_ROWS


def create_world(
    event_bus: EventBus,
    *,
    rng: random.Random | None = None,
    rules: BingoRules | None = None,
) -> World:
    world = World()
    setattr(world, "random", rng or random.Random())

    # Singleton resources: game state with its rules, and the card definition.
    world.create_entity(GameState(), rules or BingoRules())
    world.create_entity(Card(rows=GRID_ROWS, cols=GRID_COLS))
    return world
