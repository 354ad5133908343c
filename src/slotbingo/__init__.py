"""Core game-state engine for a slot machine driven bingo card."""
from slotbingo.components.column import Column
from slotbingo.components.game_state import GamePhase
from slotbingo.components.notification import NotificationEvent, NotificationKind
from slotbingo.components.rules import BingoRules
from slotbingo.components.selection_mode import ManualSelectionMode, SelectionScope
from slotbingo.components.slot_result import SlotResult, Symbol
from slotbingo.engine import BingoEngine
from slotbingo.errors import InvariantViolation
from slotbingo.outcomes import ClickOutcome, Rejected, RejectionReason, SpinOutcome
from slotbingo.utils.snapshot import CellView, GameSnapshot

__all__ = [
    "BingoEngine",
    "BingoRules",
    "CellView",
    "ClickOutcome",
    "Column",
    "GamePhase",
    "GameSnapshot",
    "InvariantViolation",
    "ManualSelectionMode",
    "NotificationEvent",
    "NotificationKind",
    "Rejected",
    "RejectionReason",
    "SelectionScope",
    "SlotResult",
    "SpinOutcome",
    "Symbol",
]
