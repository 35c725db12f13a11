"""
tictactoe - Two-player Tic-Tac-Toe game engine

This package provides the board and rules of the game, a session object
that runs turns and the start/pause/quit lifecycle, and a terminal
interface for playing it.
"""

# Version number
__version__ = '0.1.0'
