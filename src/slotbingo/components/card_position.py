from dataclasses import dataclass

@dataclass(slots=True)
class CardPosition:
    row: int
    col: int
