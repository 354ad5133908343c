from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from slotbingo.components.column import Column


class Symbol(Enum):
    """Special reel symbols; values are the glyphs shown on the reel."""
    GOLD_BULLSEYE = "🟡🎯"
    BULLSEYE = "🎯"
    WILD = "🃏"
    STAR = "⭐"
    GEM = "💎"
    FIRE = "🔥"

    @property
    def is_bullseye(self) -> bool:
        return self in (Symbol.BULLSEYE, Symbol.GOLD_BULLSEYE)


# Drawn uniformly when a reel lands on a plain bonus symbol.
BONUS_SYMBOLS = (Symbol.WILD, Symbol.STAR, Symbol.GEM, Symbol.FIRE)

ReelValue = Union[int, Symbol]


@dataclass(frozen=True, slots=True)
class SlotResult:
    column: Column
    value: ReelValue
    is_special: bool

    @classmethod
    def of(cls, column: Column, value: ReelValue) -> SlotResult:
        return cls(column=column, value=value, is_special=isinstance(value, Symbol))

    @property
    def label(self) -> str:
        if isinstance(self.value, Symbol):
            return self.value.value
        return f"{self.column.value}{self.value}"
