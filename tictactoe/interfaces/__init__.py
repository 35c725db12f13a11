"""
tictactoe.interfaces - User interfaces for Tic-Tac-Toe

This package binds the game session to ways of playing it. The core game
package never imports from here.
"""

# Don't import anything here to avoid circular imports
__all__ = []
