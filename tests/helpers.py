from __future__ import annotations

import random
from typing import Iterable, Sequence, Tuple

from slotbingo.components.column import Column
from slotbingo.components.rules import BingoRules
from slotbingo.components.slot_result import ReelValue, SlotResult
from slotbingo.engine import BingoEngine
from slotbingo.events.bus import EventBus
from slotbingo.systems.symbol_generator import SymbolGenerator
from slotbingo.utils.snapshot import CardGrid, CellView

# Row 0 is the textbook scenario row; 0 marks the FREE centre.
FIXED_NUMBERS = [
    [3, 22, 38, 55, 70],
    [1, 16, 31, 46, 61],
    [2, 17, 0, 47, 62],
    [4, 18, 32, 48, 63],
    [5, 19, 33, 49, 64],
]

# Reel values that appear nowhere on FIXED_NUMBERS.
MISS = (15, 30, 45, 60, 75)


def make_card(numbers: Sequence[Sequence[int]] = FIXED_NUMBERS, marked: Iterable[Tuple[int, int]] = ()) -> CardGrid:
    marked = set(marked)
    return tuple(
        tuple(
            CellView(number=n, column=Column.at(c), marked=(n == 0 or (r, c) in marked))
            for c, n in enumerate(row)
        )
        for r, row in enumerate(numbers)
    )


def results_for(values: Sequence[ReelValue]) -> Tuple[SlotResult, ...]:
    return tuple(SlotResult.of(Column.at(i), value) for i, value in enumerate(values))


class ScriptedGenerator(SymbolGenerator):
    """Plays back prepared reel values; falls back to MISS once exhausted."""

    def __init__(self, spins: Iterable[Sequence[ReelValue]] = ()) -> None:
        super().__init__(random.Random(0))
        self.spins = [list(spin) for spin in spins]
        self.calls = 0

    def spin(self) -> Tuple[SlotResult, ...]:
        self.calls += 1
        values = self.spins.pop(0) if self.spins else MISS
        return results_for(values)


class StubRandom:
    """Minimal random source returning queued values."""

    def __init__(self, rolls: Iterable[float] = (), ints: dict | None = None, choice_index: int = 0) -> None:
        self.rolls = list(rolls)
        self.ints = {key: iter(values) for key, values in (ints or {}).items()}
        self.choice_index = choice_index

    def random(self) -> float:
        return self.rolls.pop(0)

    def randint(self, low: int, high: int) -> int:
        source = self.ints.get((low, high))
        if source is None:
            return low
        return next(source)

    def choice(self, seq):
        return seq[self.choice_index]


def make_engine(
    spins: Iterable[Sequence[ReelValue]] = (),
    *,
    card: CardGrid | None = None,
    rules: BingoRules | None = None,
    event_bus: EventBus | None = None,
) -> BingoEngine:
    engine = BingoEngine(
        event_bus,
        rng=random.Random(1234),
        rules=rules,
        generator=ScriptedGenerator(spins),
    )
    engine.card_system.load_card(card if card is not None else make_card())
    return engine
