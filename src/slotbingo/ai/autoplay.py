from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional

from slotbingo.engine import BingoEngine
from slotbingo.systems.card_ops import selectable_cells
from slotbingo.utils.snapshot import Position


@dataclass(slots=True)
class GameSummary:
    score: int
    spins: int
    matches: int
    completed_lines: int
    blackout: bool
    manual_picks: List[Position] = field(default_factory=list)


class AutoPlayer:
    """Plays a game to the end, answering every bullseye with a random allowed cell."""

    def __init__(self, engine: BingoEngine, rng: Optional[random.Random] = None) -> None:
        self.engine = engine
        self.random = rng or random.Random()

    def choose_cell(self) -> Optional[Position]:
        state = self.engine.get_state()
        if not state.selection.active:
            return None
        candidates = selectable_cells(state.card, state.selection)
        if not candidates:
            return None
        return self.random.choice(candidates)

    def play(self, *, new_game: bool = True) -> GameSummary:
        if new_game:
            self.engine.new_game()
        picks: List[Position] = []
        while True:
            state = self.engine.get_state()
            if state.selection.active:
                target = self.choose_cell()
                if target is None:
                    break
                outcome = self.engine.click_cell(*target)
                if outcome.ok:
                    picks.append(target)
                continue
            if state.is_game_over:
                break
            self.engine.request_spin()
        final = self.engine.get_state()
        return GameSummary(
            score=final.score,
            spins=final.spins,
            matches=final.matches,
            completed_lines=final.completed_lines,
            blackout=final.full_card_bonus_awarded,
            manual_picks=picks,
        )
