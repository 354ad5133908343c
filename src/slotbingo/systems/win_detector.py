"""Line and blackout detection over a card snapshot."""
from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, List, Tuple

from slotbingo.constants import GRID_COLS, GRID_ROWS, TOTAL_LINES
from slotbingo.errors import InvariantViolation
from slotbingo.utils.snapshot import CardGrid, Position

Line = Tuple[Position, ...]


def _all_lines() -> Tuple[Tuple[str, Line], ...]:
    lines: List[Tuple[str, Line]] = []
    for r in range(GRID_ROWS):
        lines.append((f"row{r}", tuple((r, c) for c in range(GRID_COLS))))
    for c in range(GRID_COLS):
        lines.append((f"col{c}", tuple((r, c) for r in range(GRID_ROWS))))
    lines.append(("diag", tuple((i, i) for i in range(GRID_ROWS))))
    lines.append(("anti_diag", tuple((i, GRID_COLS - 1 - i) for i in range(GRID_ROWS))))
    return tuple(lines)


LINES = _all_lines()


@dataclass(frozen=True, slots=True)
class WinReport:
    winning_cells: FrozenSet[Position]
    completed_lines: int
    newly_completed: int
    lines: Tuple[str, ...]
    blackout: bool


def is_blackout(card: CardGrid) -> bool:
    return all(cell.marked for row in card for cell in row)


def detect_wins(card: CardGrid, prior_completed_lines: int = 0) -> WinReport:
    """Recompute every satisfied line from scratch.

    Cells never unmark, so the completed count can only grow; a drop below
    ``prior_completed_lines`` means the caller fed a stale or foreign card.
    """
    if not 0 <= prior_completed_lines <= TOTAL_LINES:
        raise InvariantViolation(f"prior completed lines {prior_completed_lines} outside 0-{TOTAL_LINES}")
    winning: set[Position] = set()
    names: List[str] = []
    for name, line in LINES:
        if all(card[r][c].marked for r, c in line):
            names.append(name)
            winning.update(line)
    completed = len(names)
    newly = completed - prior_completed_lines
    if newly < 0:
        raise InvariantViolation(
            f"completed lines dropped from {prior_completed_lines} to {completed}"
        )
    return WinReport(
        winning_cells=frozenset(winning),
        completed_lines=completed,
        newly_completed=newly,
        lines=tuple(names),
        blackout=is_blackout(card),
    )
