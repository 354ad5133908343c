"""In-process collaborator surface for presentation code.

Wires the event bus, ECS world and systems together the way a window would,
and exposes the four operations a view needs: start a game, spin, pick a cell
after a bullseye, and read the current state.
"""
from __future__ import annotations

import logging
import random

from esper import World

from slotbingo.components.rules import BingoRules
from slotbingo.events.bus import EventBus
from slotbingo.outcomes import ClickOutcome, Rejected, SpinOutcome
from slotbingo.systems.card_system import CardSystem
from slotbingo.systems.game_flow_system import GameFlowSystem
from slotbingo.systems.symbol_generator import SymbolGenerator
from slotbingo.utils.game_state import build_snapshot
from slotbingo.utils.snapshot import GameSnapshot
from slotbingo.world import create_world

logger = logging.getLogger(__name__)


class BingoEngine:
    def __init__(
        self,
        event_bus: EventBus | None = None,
        *,
        rng: random.Random | None = None,
        rules: BingoRules | None = None,
        generator: SymbolGenerator | None = None,
    ) -> None:
        self.event_bus = event_bus or EventBus()
        self.world: World = create_world(self.event_bus, rng=rng, rules=rules)
        self.card_system = CardSystem(self.world, self.event_bus)
        self.game_flow_system = GameFlowSystem(
            self.world,
            self.event_bus,
            self.card_system,
            generator=generator,
        )
        self.new_game()

    def new_game(self) -> GameSnapshot:
        return self.game_flow_system.new_game()

    def request_spin(self) -> SpinOutcome | Rejected:
        return self.game_flow_system.request_spin()

    def click_cell(self, row: int, col: int) -> ClickOutcome | Rejected:
        return self.game_flow_system.click_cell(row, col)

    def get_state(self) -> GameSnapshot:
        return build_snapshot(self.world)
