"""Game state resource describing the active phase and running totals."""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Set, Tuple

from slotbingo.components.selection_mode import ManualSelectionMode


class GamePhase(Enum):
    """Phases of a single game; only IDLE accepts a spin."""
    IDLE = auto()
    SPIN_IN_FLIGHT = auto()
    AWAITING_MANUAL_SELECTION = auto()
    GAME_OVER = auto()


@dataclass
class GameState:
    """Singleton component holding score, counters and the pending selection."""
    phase: GamePhase = GamePhase.IDLE
    score: int = 0
    spins: int = 0
    matches: int = 0
    completed_lines: int = 0
    winning_cells: Set[Tuple[int, int]] = field(default_factory=set)
    full_card_bonus_awarded: bool = False
    selection: ManualSelectionMode = field(default_factory=ManualSelectionMode.inactive)

    def reset(self) -> None:
        """Zero the counters; the phase is moved by the flow system."""
        self.score = 0
        self.spins = 0
        self.matches = 0
        self.completed_lines = 0
        self.winning_cells = set()
        self.full_card_bonus_awarded = False
        self.selection = ManualSelectionMode.inactive()
