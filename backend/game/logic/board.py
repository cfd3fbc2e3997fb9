"""Tic-tac-toe board evaluation.

A board is a 9-character string read row by row; ``EMPTY_CELL`` marks a free
cell. Positions exposed to players are 1-based.
"""

from shared.dal.models import BOARD_CELLS

EMPTY_CELL = "_"
EMPTY_BOARD = EMPTY_CELL * BOARD_CELLS

X_MARK = "X"
O_MARK = "O"
MARKS = (X_MARK, O_MARK)

# Zero-based cell indices: 3 rows, 3 columns, 2 diagonals.
WINNING_LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


def evaluate_win(board: str) -> bool:
    """Return True if any line holds three identical non-empty marks."""
    return any(board[a] != EMPTY_CELL and board[a] == board[b] == board[c] for a, b, c in WINNING_LINES)


def is_full(board: str) -> bool:
    return EMPTY_CELL not in board


def is_valid_position(position: int) -> bool:
    return 1 <= position <= BOARD_CELLS


def is_free(board: str, position: int) -> bool:
    return board[position - 1] == EMPTY_CELL


def place_mark(board: str, position: int, mark: str) -> str:
    """Return a new board with ``mark`` written at the 1-based ``position``."""
    index = position - 1
    return board[:index] + mark + board[index + 1 :]
