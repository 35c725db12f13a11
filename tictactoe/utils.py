"""
utils.py - Constants, enumerations and helpers for the Tic-Tac-Toe engine

Everything here is static configuration or a pure function shared by the
board, the session and the terminal interface.
"""

from enum import Enum, auto
from typing import List, Sequence, Tuple

import numpy as np

# Game constants
BOARD_SIZE = 3
CELL_COUNT = BOARD_SIZE * BOARD_SIZE

# Rows, columns, diagonals
WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

EMPTY_SYMBOL = "."


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    FIRST = 1    # X, always opens the game
    SECOND = 2   # O

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.FIRST:
            return Player.SECOND
        elif self == Player.SECOND:
            return Player.FIRST
        return Player.EMPTY

    @property
    def label(self) -> str:
        if self == Player.FIRST:
            return "X"
        elif self == Player.SECOND:
            return "O"
        return ""

    def __str__(self):
        return self.label or " "


class LifecycleState(Enum):
    """Lifecycle of a game session."""
    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"


class MoveResult(Enum):
    """Outcome of placing a mark on the board."""
    OK = auto()
    INVALID_INDEX = auto()
    CELL_OCCUPIED = auto()

    @property
    def ok(self) -> bool:
        return self == MoveResult.OK

    @property
    def message(self) -> str:
        return MOVE_RESULT_MESSAGES[self]


MOVE_RESULT_MESSAGES = {
    MoveResult.OK: "",
    MoveResult.INVALID_INDEX: "Invalid cell index",
    MoveResult.CELL_OCCUPIED: "Cell already occupied",
}


def is_valid_index(index) -> bool:
    """
    Check if a value addresses a cell of the board.

    Booleans and non-integral numbers are rejected even though Python would
    accept some of them as sequence indices.
    """
    if isinstance(index, (bool, np.bool_)):
        return False
    if not isinstance(index, (int, np.integer)):
        return False
    return 0 <= index < CELL_COUNT


def position_to_index(row: int, col: int) -> int:
    """Map a (row, col) pair to its cell index."""
    return row * BOARD_SIZE + col


def parse_position(text: str) -> List[Player]:
    """
    Parse a board position written as nine symbols.

    `X` and `O` mark cells (case-insensitive), `.` or `-` leave them empty.
    Whitespace and commas are ignored so "XO. .X. ..O" is accepted.

    Raises:
        ValueError: on unknown symbols or a wrong number of cells
    """
    symbols = [c for c in text if not c.isspace() and c != ","]
    if len(symbols) != CELL_COUNT:
        raise ValueError(f"Position must have {CELL_COUNT} cells, got {len(symbols)}")

    cells = []
    for symbol in symbols:
        symbol = symbol.upper()
        if symbol == "X":
            cells.append(Player.FIRST)
        elif symbol == "O":
            cells.append(Player.SECOND)
        elif symbol in (EMPTY_SYMBOL, "-"):
            cells.append(Player.EMPTY)
        else:
            raise ValueError(f"Unknown cell symbol: {symbol!r}")
    return cells


def render_board_ascii(cells: Sequence[Player]) -> str:
    """
    Render the board as ASCII art with cell numbers for empty cells.

    Args:
        cells: The nine cell marks in index order

    Returns:
        ASCII representation of the board
    """
    rows = []
    for row in range(BOARD_SIZE):
        line = []
        for col in range(BOARD_SIZE):
            index = position_to_index(row, col)
            mark = cells[index]
            line.append(mark.label if mark != Player.EMPTY else str(index))
        rows.append(" " + " | ".join(line))
    return "\n---+---+---\n".join(rows)
