"""Immutable views of the card and game state handed to presentation code."""
from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Tuple

from slotbingo.components.column import Column
from slotbingo.components.game_state import GamePhase
from slotbingo.components.selection_mode import ManualSelectionMode

Position = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class CellView:
    number: int
    column: Column
    marked: bool

    @property
    def is_free(self) -> bool:
        return self.number == 0


CardGrid = Tuple[Tuple[CellView, ...], ...]


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    card: CardGrid
    phase: GamePhase
    score: int
    spins: int
    max_spins: int
    matches: int
    completed_lines: int
    winning_cells: FrozenSet[Position]
    full_card_bonus_awarded: bool
    selection: ManualSelectionMode

    @property
    def spins_remaining(self) -> int:
        return self.max_spins - self.spins

    @property
    def is_game_over(self) -> bool:
        return self.phase is GamePhase.GAME_OVER
