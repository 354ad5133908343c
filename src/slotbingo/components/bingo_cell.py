from dataclasses import dataclass

from slotbingo.components.column import Column


@dataclass(slots=True)
class BingoCell:
    """Per-cell number assignment on the card.

    ``number`` is 0 for the FREE centre cell. ``marked`` only ever flips from
    False to True; the card is replaced wholesale on a new game.
    """
    number: int
    column: Column
    marked: bool = False
