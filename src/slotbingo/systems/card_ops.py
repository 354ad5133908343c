from __future__ import annotations

import random
from typing import Iterable, List, Tuple

from esper import World

from slotbingo.components.bingo_cell import BingoCell
from slotbingo.components.card import Card
from slotbingo.components.card_position import CardPosition
from slotbingo.components.column import Column
from slotbingo.components.selection_mode import ManualSelectionMode
from slotbingo.constants import COLUMN_RANGES, FREE_COL, FREE_NUMBER, FREE_ROW, GRID_COLS, GRID_ROWS
from slotbingo.errors import InvariantViolation
from slotbingo.utils.snapshot import CardGrid, CellView, Position


def generate_card(rng: random.Random) -> CardGrid:
    """Build a fresh 5x5 card with a marked FREE centre.

    Numbers are rejection-sampled from each column's range until they are not
    already used in that column.
    """
    rows: List[Tuple[CellView, ...]] = []
    used: dict[Column, set[int]] = {column: set() for column in Column}
    for row in range(GRID_ROWS):
        cells: List[CellView] = []
        for col in range(GRID_COLS):
            column = Column.at(col)
            if (row, col) == (FREE_ROW, FREE_COL):
                cells.append(CellView(number=FREE_NUMBER, column=column, marked=True))
                continue
            low, high = COLUMN_RANGES[column]
            number = rng.randint(low, high)
            while number in used[column]:
                number = rng.randint(low, high)
            used[column].add(number)
            cells.append(CellView(number=number, column=column, marked=False))
        rows.append(tuple(cells))
    return tuple(rows)


def validate_card(card: CardGrid) -> None:
    """Raise InvariantViolation if the card breaks shape, range or uniqueness rules."""
    if len(card) != GRID_ROWS or any(len(row) != GRID_COLS for row in card):
        raise InvariantViolation(f"card must be {GRID_ROWS}x{GRID_COLS}")
    for col in range(GRID_COLS):
        column = Column.at(col)
        low, high = COLUMN_RANGES[column]
        seen: set[int] = set()
        for row in range(GRID_ROWS):
            cell = card[row][col]
            if cell.column is not column:
                raise InvariantViolation(f"cell ({row},{col}) belongs to column {cell.column.value}, expected {column.value}")
            if (row, col) == (FREE_ROW, FREE_COL):
                if cell.number != FREE_NUMBER or not cell.marked:
                    raise InvariantViolation("centre cell must be a marked FREE cell")
                continue
            if not low <= cell.number <= high:
                raise InvariantViolation(f"{column.value}{cell.number} outside range {low}-{high}")
            if cell.number in seen:
                raise InvariantViolation(f"duplicate number {cell.number} in column {column.value}")
            seen.add(cell.number)


def with_marks(card: CardGrid, positions: Iterable[Position]) -> CardGrid:
    """Return a copy of ``card`` with the given cells marked."""
    targets = set(positions)
    if not targets:
        return card
    return tuple(
        tuple(
            CellView(cell.number, cell.column, True) if (r, c) in targets else cell
            for c, cell in enumerate(row)
        )
        for r, row in enumerate(card)
    )


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < GRID_ROWS and 0 <= col < GRID_COLS


def selectable_cells(card: CardGrid, mode: ManualSelectionMode) -> List[Position]:
    """Unmarked cells a manual pick under ``mode`` may land on."""
    return [
        (r, c)
        for r, row in enumerate(card)
        for c, cell in enumerate(row)
        if not cell.marked and mode.allows(cell.column)
    ]


def card_dimensions(world: World) -> Tuple[int, int] | None:
    for _, card in world.get_component(Card):
        return card.rows, card.cols
    return None


def get_entity_at(world: World, row: int, col: int) -> int | None:
    for entity, position in world.get_component(CardPosition):
        if position.row == row and position.col == col:
            return entity
    return None


def read_card(world: World) -> CardGrid:
    """Snapshot the cell entities of the world into an immutable grid."""
    dims = card_dimensions(world)
    if dims is None:
        raise RuntimeError("Card definition not found")
    rows, cols = dims
    grid: List[List[CellView | None]] = [[None] * cols for _ in range(rows)]
    for _, (position, cell) in world.get_components(CardPosition, BingoCell):
        grid[position.row][position.col] = CellView(cell.number, cell.column, cell.marked)
    if any(view is None for row in grid for view in row):
        raise RuntimeError("Card cells have not been generated")
    return tuple(tuple(row) for row in grid)  # type: ignore[arg-type]


def write_card(world: World, card: CardGrid) -> List[int]:
    """Replace all cell entities with the contents of ``card``."""
    for entity, _ in list(world.get_component(CardPosition)):
        world.delete_entity(entity, immediate=True)
    created: List[int] = []
    for r, row in enumerate(card):
        for c, view in enumerate(row):
            created.append(
                world.create_entity(
                    CardPosition(row=r, col=c),
                    BingoCell(number=view.number, column=view.column, marked=view.marked),
                )
            )
    return created


def mark_cells(world: World, positions: Iterable[Position]) -> List[Position]:
    """Mark the given cells on the world's card; every target must be unmarked."""
    marked: List[Position] = []
    for row, col in positions:
        entity = get_entity_at(world, row, col)
        if entity is None:
            raise InvariantViolation(f"no card cell at ({row},{col})")
        cell: BingoCell = world.component_for_entity(entity, BingoCell)
        if cell.marked:
            raise InvariantViolation(f"cell ({row},{col}) is already marked")
        cell.marked = True
        marked.append((row, col))
    return marked
