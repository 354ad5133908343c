from dataclasses import dataclass

@dataclass(slots=True)
class Card:
    rows: int
    cols: int
