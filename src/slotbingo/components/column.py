from enum import Enum


class Column(Enum):
    """Bingo card columns in left-to-right order."""
    B = "B"
    I = "I"
    N = "N"
    G = "G"
    O = "O"

    @property
    def index(self) -> int:
        return _ORDER.index(self)

    @classmethod
    def at(cls, index: int) -> "Column":
        return _ORDER[index]


_ORDER = (Column.B, Column.I, Column.N, Column.G, Column.O)
