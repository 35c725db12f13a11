"""
tictactoe.game - Core game mechanics for Tic-Tac-Toe

This package contains the board representation and rules, and the game
session that drives turns and the start/pause/quit lifecycle.
"""

from tictactoe.game.board import Board
from tictactoe.game.session import GameSession

__all__ = ['Board', 'GameSession']
