"""
board.py - Board representation and rules for Tic-Tac-Toe

This module implements the Board class which holds the nine cells of the
grid, validates and applies moves, and answers whether the position is won
or full. It knows nothing about turns or the game lifecycle.
"""

import numpy as np
from typing import Tuple

from tictactoe.debug import debug
from tictactoe.utils import (CELL_COUNT, WINNING_LINES, Player, MoveResult,
                             is_valid_index, render_board_ascii)


class Board:
    """
    Represents a Tic-Tac-Toe board.

    Cells are stored as a flat array of Player values, index 0 being the
    top-left corner and index 8 the bottom-right one.
    """

    def __init__(self):
        """Initialize an empty board."""
        debug.trace("Initializing new Board", "board")
        self.reset()

    def reset(self):
        """Reset the board to an empty state."""
        debug.debug("Resetting board", "board")
        self.grid = np.full(CELL_COUNT, Player.EMPTY.value, dtype=np.int8)

    def make_move(self, index: int, player: Player) -> MoveResult:
        """
        Place a player's mark on a cell.

        Args:
            index: The cell to mark (0-8)
            player: The player making the move

        Returns:
            MoveResult.OK if the cell was marked, otherwise the reason the
            move was rejected. A rejected move leaves the board untouched.

        Raises:
            ValueError: if player is Player.EMPTY
        """
        if player not in (Player.FIRST, Player.SECOND):
            raise ValueError(f"Cannot place a mark for {player!r}")

        if not is_valid_index(index):
            debug.debug(f"Invalid move: index {index!r} out of range", "board")
            return MoveResult.INVALID_INDEX

        if self.grid[index] != Player.EMPTY.value:
            debug.debug(f"Invalid move: cell {index} already holds {self.get_cell(index)}", "board")
            return MoveResult.CELL_OCCUPIED

        self.grid[index] = player.value
        debug.trace(f"Placed {player} at cell {index}", "board")
        return MoveResult.OK

    def check_winner(self) -> bool:
        """
        Check if any row, column or diagonal holds three equal marks.

        Returns:
            True if there is a winning line, False otherwise
        """
        for a, b, c in WINNING_LINES:
            if self.grid[a] != Player.EMPTY.value and self.grid[a] == self.grid[b] == self.grid[c]:
                return True
        return False

    def is_full(self) -> bool:
        """Check if every cell is marked."""
        return bool(np.all(self.grid != Player.EMPTY.value))

    def get_cell(self, index: int) -> Player:
        """Get the mark at a cell."""
        return Player(int(self.grid[index]))

    @property
    def cells(self) -> Tuple[Player, ...]:
        """The nine cell marks in index order."""
        return tuple(Player(int(value)) for value in self.grid)

    def empty_count(self) -> int:
        return int(np.sum(self.grid == Player.EMPTY.value))

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            1D numpy array of Player values
        """
        return self.grid.copy()

    def render(self) -> str:
        """Render the board as a string."""
        return render_board_ascii(self.cells)

    def __str__(self) -> str:
        return self.render()
