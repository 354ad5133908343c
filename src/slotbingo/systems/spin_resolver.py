"""Pure resolution of one five-reel spin against a card."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from slotbingo.components.column import Column
from slotbingo.components.notification import NotificationEvent, NotificationKind
from slotbingo.components.rules import BingoRules
from slotbingo.components.selection_mode import ManualSelectionMode
from slotbingo.components.slot_result import SlotResult, Symbol
from slotbingo.errors import InvariantViolation
from slotbingo.systems.card_ops import with_marks
from slotbingo.utils.snapshot import CardGrid, Position


@dataclass(frozen=True, slots=True)
class SpinResolution:
    updated_card: CardGrid
    marked: Tuple[Position, ...]
    new_matches: int
    score_delta: int
    triggered_mode: Optional[ManualSelectionMode]
    events: Tuple[NotificationEvent, ...]


def resolve_spin(card: CardGrid, results: Sequence[SlotResult], rules: BingoRules | None = None) -> SpinResolution:
    rules = rules or BingoRules()
    if len(results) != len(Column) or any(result.column is not Column.at(i) for i, result in enumerate(results)):
        raise InvariantViolation("a spin must carry exactly one result per column in B,I,N,G,O order")

    marked: List[Position] = []
    events: List[NotificationEvent] = []
    score_delta = 0
    triggered: Optional[ManualSelectionMode] = None

    for col, result in enumerate(results):
        value = result.value
        if not result.is_special:
            if not isinstance(value, int):
                raise InvariantViolation(f"non-special result in column {result.column.value} has value {value!r}")
            # Numbers are unique per column, but every equal unmarked cell is marked.
            for row, line in enumerate(card):
                cell = line[col]
                if not cell.marked and cell.number == value:
                    marked.append((row, col))
                    events.append(NotificationEvent(
                        NotificationKind.MATCH,
                        {"row": row, "col": col, "label": result.label},
                    ))
            continue
        if value is Symbol.BULLSEYE:
            triggered = ManualSelectionMode.for_column(result.column)
        elif value is Symbol.GOLD_BULLSEYE:
            triggered = ManualSelectionMode.anywhere()
        else:
            score_delta += rules.special_points
            events.append(NotificationEvent(
                NotificationKind.SPECIAL_SYMBOL,
                {"column": result.column.value, "symbol": result.label, "points": rules.special_points},
            ))

    if marked:
        score_delta += len(marked) * rules.match_points
    return SpinResolution(
        updated_card=with_marks(card, marked),
        marked=tuple(marked),
        new_matches=len(marked),
        score_delta=score_delta,
        triggered_mode=triggered,
        events=tuple(events),
    )
