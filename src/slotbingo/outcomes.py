"""Result values returned by the public engine operations."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from slotbingo.components.notification import NotificationEvent
from slotbingo.components.slot_result import SlotResult
from slotbingo.utils.snapshot import GameSnapshot, Position


class RejectionReason(Enum):
    NO_SPINS_REMAINING = "no spins remaining"
    SPIN_IN_FLIGHT = "spin already in flight"
    SELECTION_PENDING = "manual selection pending"
    NO_SELECTION_PENDING = "no selection pending"
    CELL_ALREADY_MARKED = "cell already marked"
    WRONG_COLUMN = "wrong column for active bullseye"
    INVALID_CELL = "cell out of bounds"


@dataclass(frozen=True, slots=True)
class Rejected:
    """An action the engine refused; state is unchanged."""
    reason: RejectionReason

    ok = False

    @property
    def message(self) -> str:
        return self.reason.value


@dataclass(frozen=True, slots=True)
class SpinOutcome:
    results: Tuple[SlotResult, ...]
    state: GameSnapshot
    events: Tuple[NotificationEvent, ...]

    ok = True


@dataclass(frozen=True, slots=True)
class ClickOutcome:
    position: Position
    state: GameSnapshot
    events: Tuple[NotificationEvent, ...]

    ok = True
