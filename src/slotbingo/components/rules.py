from dataclasses import dataclass

from slotbingo.constants import (
    DEFAULT_MAX_SPINS,
    FULL_CARD_POINTS,
    LINE_POINTS,
    MANUAL_MARK_POINTS,
    MATCH_POINTS,
    SPECIAL_SYMBOL_POINTS,
)


@dataclass(frozen=True, slots=True)
class BingoRules:
    """Per-game scoring and spin limits stored on the game-state entity."""

    max_spins: int = DEFAULT_MAX_SPINS
    match_points: int = MATCH_POINTS
    special_points: int = SPECIAL_SYMBOL_POINTS
    manual_mark_points: int = MANUAL_MARK_POINTS
    line_points: int = LINE_POINTS
    full_card_points: int = FULL_CARD_POINTS

    def __post_init__(self) -> None:
        if self.max_spins < 1:
            raise ValueError(f"max_spins must be positive, got {self.max_spins}")
        for name in ("match_points", "special_points", "manual_mark_points", "line_points", "full_card_points"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
