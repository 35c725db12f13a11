"""
session.py - Game session management for Tic-Tac-Toe

This module provides the GameSession class, the only entry point for player
commands. It owns the board, decides whose turn it is, runs the
start/pause/quit lifecycle and turns every outcome into a status message
for whatever interface is listening.
"""

import threading
from functools import wraps
from typing import Callable, List, Tuple

from tictactoe.debug import debug
from tictactoe.game.board import Board
from tictactoe.utils import Player, LifecycleState

StatusListener = Callable[[str], None]

INITIAL_STATUS = "Press start to play"
UNEXPECTED_ERROR_STATUS = "An unexpected error occurred"


def command(method):
    """
    Run a session command under the session lock.

    Unexpected exceptions are logged with their traceback and reported as a
    generic status. Board, player and lifecycle state are rolled back to what
    they were before the command started.
    """
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            snapshot = (self.board.get_state(), self._current_player, self._state)
            try:
                method(self, *args, **kwargs)
            except Exception:
                debug.exception(f"Unexpected error while handling {method.__name__}", "session")
                self.board.grid, self._current_player, self._state = snapshot
                self._set_status(UNEXPECTED_ERROR_STATUS)
    return wrapper


class GameSession:
    """
    A single game of Tic-Tac-Toe between two local players.

    The session starts stopped. Cell clicks are only honoured while the game
    is running; a win or a draw stops the game and leaves the final position
    on the board until the next start.
    """

    def __init__(self):
        """Initialize a stopped session with an empty board."""
        debug.debug("Initializing GameSession", "session")
        self.board = Board()
        self._current_player = Player.FIRST
        self._state = LifecycleState.STOPPED
        self._status = INITIAL_STATUS
        self._listeners: List[StatusListener] = []
        self._lock = threading.RLock()

    # --- Queries ---

    @property
    def cells(self) -> Tuple[Player, ...]:
        return self.board.cells

    @property
    def current_player(self) -> Player:
        return self._current_player

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def status(self) -> str:
        return self._status

    @property
    def is_running(self) -> bool:
        return self._state == LifecycleState.RUNNING

    # --- Notifications ---

    def add_status_listener(self, listener: StatusListener) -> None:
        """Register a callback receiving every new status message."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_status_listener(self, listener: StatusListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _set_status(self, message: str) -> None:
        self._status = message
        debug.info(f"Game Status: {message}", "session")
        for listener in list(self._listeners):
            try:
                listener(message)
            except Exception:
                debug.exception(f"Status listener {listener!r} failed", "session")

    # --- Commands ---

    @command
    def start(self) -> None:
        """Start a new game, or resume a paused one."""
        if self._state == LifecycleState.STOPPED:
            self.board.reset()
            self._current_player = Player.FIRST
            self._state = LifecycleState.RUNNING
            self._set_status(f"Game started. Player {self._current_player}'s turn")
        elif self._state == LifecycleState.PAUSED:
            self._state = LifecycleState.RUNNING
            self._set_status(f"Game resumed. Player {self._current_player}'s turn")
        else:
            debug.debug("Start ignored: game already running", "session")

    @command
    def pause(self) -> None:
        """Pause a running game."""
        if self._state != LifecycleState.RUNNING:
            debug.debug(f"Pause ignored: game is {self._state.value}", "session")
            return
        self._state = LifecycleState.PAUSED
        self._set_status("Game paused")

    @command
    def quit(self, confirmed: bool) -> None:
        """
        Abandon the current game.

        Args:
            confirmed: Whether the user agreed to quit. Nothing happens
                unless this is exactly True.
        """
        if confirmed is not True:
            debug.debug("Quit not confirmed", "session")
            return
        self.board.reset()
        self._state = LifecycleState.STOPPED
        self._set_status("Game quit")

    @command
    def cell_click(self, index: int) -> None:
        """
        Place the current player's mark on a cell.

        Args:
            index: The cell to mark (0-8)
        """
        if self._state != LifecycleState.RUNNING:
            debug.debug(f"Cell {index!r} click ignored: game is {self._state.value}", "session")
            return

        player = self._current_player
        result = self.board.make_move(index, player)
        if not result.ok:
            self._set_status(result.message)
            return

        if self.board.check_winner():
            self._end_game(f"Player {player} wins!")
        elif self.board.is_full():
            self._end_game("It's a draw!")
        else:
            self._current_player = player.other()
            self._set_status(f"Player {self._current_player}'s turn")

    def _end_game(self, message: str) -> None:
        self._state = LifecycleState.STOPPED
        self._set_status(message)
