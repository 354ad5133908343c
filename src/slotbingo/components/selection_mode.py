from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from slotbingo.components.column import Column


class SelectionScope(Enum):
    NONE = auto()
    COLUMN = auto()
    ANY = auto()


@dataclass(frozen=True, slots=True)
class ManualSelectionMode:
    """Which cells accept a free manual mark after a bullseye.

    A Bullseye scopes the pick to the column it landed on; a Gold Bullseye
    allows any unmarked cell.
    """

    active: bool = False
    scope: SelectionScope = SelectionScope.NONE
    column: Optional[Column] = None

    def __post_init__(self) -> None:
        if self.active != (self.scope is not SelectionScope.NONE):
            raise ValueError("active selection needs a scope and inactive selection must have none")
        if (self.scope is SelectionScope.COLUMN) != (self.column is not None):
            raise ValueError("column is required exactly for column-scoped selection")

    @classmethod
    def inactive(cls) -> ManualSelectionMode:
        return cls()

    @classmethod
    def for_column(cls, column: Column) -> ManualSelectionMode:
        return cls(active=True, scope=SelectionScope.COLUMN, column=column)

    @classmethod
    def anywhere(cls) -> ManualSelectionMode:
        return cls(active=True, scope=SelectionScope.ANY)

    def allows(self, column: Column) -> bool:
        if not self.active:
            return False
        if self.scope is SelectionScope.ANY:
            return True
        return self.column == column
