from __future__ import annotations

import random
from typing import Tuple

from slotbingo.components.column import Column
from slotbingo.components.slot_result import BONUS_SYMBOLS, ReelValue, SlotResult, Symbol
from slotbingo.constants import BULLSEYE_CHANCE, COLUMN_RANGES, GOLD_BULLSEYE_CHANCE, SPECIAL_SYMBOL_CHANCE


class SymbolGenerator:
    """Draws reel values for the five slot columns from an injected random source."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.random = rng or random.Random()

    def generate(self, column: Column) -> ReelValue:
        roll = self.random.random()
        if roll < GOLD_BULLSEYE_CHANCE:
            return Symbol.GOLD_BULLSEYE
        if roll < BULLSEYE_CHANCE:
            return Symbol.BULLSEYE
        if roll < SPECIAL_SYMBOL_CHANCE:
            return self.random.choice(BONUS_SYMBOLS)
        low, high = COLUMN_RANGES[column]
        return self.random.randint(low, high)

    def spin(self) -> Tuple[SlotResult, ...]:
        return tuple(SlotResult.of(column, self.generate(column)) for column in Column)
