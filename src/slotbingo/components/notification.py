from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict


class NotificationKind(Enum):
    NEW_CARD = auto()
    MATCH = auto()
    SPECIAL_SYMBOL = auto()
    BULLSEYE = auto()
    MANUAL_MARK = auto()
    LINES_COMPLETED = auto()
    BLACKOUT = auto()
    GAME_OVER = auto()


@dataclass(frozen=True, slots=True)
class NotificationEvent:
    """Toast-style payload for the view layer. The engine never renders these."""

    kind: NotificationKind
    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def message(self) -> str:
        p = self.params
        if self.kind is NotificationKind.NEW_CARD:
            return "New bingo card generated! 🎯"
        if self.kind is NotificationKind.MATCH:
            return f"Match found! {p['label']} 🎯"
        if self.kind is NotificationKind.SPECIAL_SYMBOL:
            return f"Special symbol! {p['symbol']} +{p['points']} points! ✨"
        if self.kind is NotificationKind.BULLSEYE:
            if p.get("column") is None:
                return "GOLD BULLSEYE! Mark any number on your card! 🟡🎯"
            return f"BULLSEYE! Mark any number in column {p['column']}! 🎯"
        if self.kind is NotificationKind.MANUAL_MARK:
            return f"Marked {p['label']}! +{p['points']} points"
        if self.kind is NotificationKind.LINES_COMPLETED:
            count = p["count"]
            return f"BINGO! {count} line{'s' if count > 1 else ''} completed! 🎉"
        if self.kind is NotificationKind.BLACKOUT:
            return "FULL CARD! BLACKOUT BINGO! 🎊"
        return f"Game over! Final score: {p['score']}"
