from slotbingo.components.column import Column

GRID_ROWS = 5
GRID_COLS = 5
FREE_ROW = 2
FREE_COL = 2
FREE_NUMBER = 0

# Inclusive numeric range per bingo column.
COLUMN_RANGES = {
    Column.B: (1, 15),
    Column.I: (16, 30),
    Column.N: (31, 45),
    Column.G: (46, 60),
    Column.O: (61, 75),
}

# Cumulative thresholds on a uniform draw in [0, 1) for each reel.
GOLD_BULLSEYE_CHANCE = 0.02
BULLSEYE_CHANCE = 0.05
SPECIAL_SYMBOL_CHANCE = 0.10

# Rule defaults; overridable per game through BingoRules.
DEFAULT_MAX_SPINS = 12
MATCH_POINTS = 100
SPECIAL_SYMBOL_POINTS = 500
MANUAL_MARK_POINTS = 100
LINE_POINTS = 1000
FULL_CARD_POINTS = 5000

# 5 rows + 5 columns + 2 diagonals
TOTAL_LINES = GRID_ROWS + GRID_COLS + 2
