"""
cli.py - Command-line interface for playing Tic-Tac-Toe

This module binds a GameSession to the terminal: it reads commands from
stdin, forwards them to the session, prints every status message the
session emits and redraws the board. It also offers a `check` command that
loads a board position and reports what the rules make of it.
"""

import argparse
import sys
from typing import List, Optional

from tictactoe.debug import debug, DebugLevel
from tictactoe.game.board import Board
from tictactoe.game.session import GameSession
from tictactoe.utils import CELL_COUNT, Player, parse_position

HELP_TEXT = """Commands:
  s, start   start a new game or resume a paused one
  p, pause   pause the running game
  q, quit    quit the current game (asks for confirmation)
  0-8        place your mark on a cell
  h, help    show this help
  x, exit    leave the program"""


class SimpleCLI:
    """Simple command-line interface for Tic-Tac-Toe."""

    def __init__(self, session: Optional[GameSession] = None):
        """Initialize the CLI."""
        self.session = session or GameSession()
        self.args = None

    def parse_args(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments and apply the logging settings."""
        parser = argparse.ArgumentParser(
            description='Two-player Tic-Tac-Toe',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
    Examples:

    # Play a game with two players at the same terminal
    python run.py play

    # Show every board and session decision while playing
    python run.py play --debug

    # Check a board position (X, O and . for empty, row by row)
    python run.py check --position "XXX.O.O.."
    """)
        parser.add_argument('command',
                            choices=['play', 'check'],
                            help='play (interactive game), check (evaluate a board position)')
        parser.add_argument('--position',
                            type=str,
                            help='Board position for the check command, nine symbols from X, O and .')
        parser.add_argument('--debug',
                            action='store_true',
                            help='Enable debug mode (equivalent to --debug_level debug)')
        parser.add_argument('--debug_level',
                            choices=[level.name.lower() for level in DebugLevel],
                            default='warning',
                            help='Set debug level: none (silent), error, warning, info, debug, trace')
        parser.add_argument('--log_file',
                            type=str,
                            help='Also write log messages to this file')
        parser.add_argument('--log_components',
                            type=str,
                            help='Comma-separated components to log (board, session, cli); default all')

        self.args = parser.parse_args(argv)
        self.configure_debug()
        return self.args

    def configure_debug(self) -> None:
        """Configure debug level based on args.debug or args.debug_level."""
        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)

        components = None
        if self.args.log_components:
            components = [c.strip() for c in self.args.log_components.split(',') if c.strip()]
        debug.configure(log_file=self.args.log_file, components=components)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI based on the parsed arguments and return an exit code."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            self.play_game()
            return 0
        elif self.args.command == 'check':
            return 0 if self.check_position(self.args.position) else 1

        print("Please specify a command. Use --help for options.")
        return 1

    # --- Interactive play ---

    def play_game(self) -> None:
        """Play Tic-Tac-Toe interactively until the user exits."""
        print("Welcome to Tic-Tac-Toe!")
        print(HELP_TEXT)
        print()
        print(self.session.board.render())
        self.show_status(self.session.status)

        self.session.add_status_listener(self.show_status)
        try:
            while True:
                try:
                    line = input("> ")
                except EOFError:
                    print()
                    break
                if not self.handle_input(line):
                    break
        finally:
            self.session.remove_status_listener(self.show_status)
        print("Goodbye!")

    def handle_input(self, line: str) -> bool:
        """
        Forward one line of user input to the session.

        Returns:
            False when the user asked to leave, True otherwise
        """
        command = line.strip().lower()
        debug.trace(f"Input: {command!r}", "cli")

        if not command:
            return True
        if command in ('x', 'exit'):
            return False
        if command in ('h', 'help'):
            print(HELP_TEXT)
        elif command in ('s', 'start'):
            self.session.start()
            self.show_board()
        elif command in ('p', 'pause'):
            self.session.pause()
        elif command in ('q', 'quit'):
            self.session.quit(self.confirm_quit())
            self.show_board()
        else:
            try:
                index = int(command)
            except ValueError:
                print(f"Unknown command: {line.strip()}. Type 'h' for help.")
                return True
            self.click_cell(index)
        return True

    def click_cell(self, index: int) -> None:
        if not self.session.is_running:
            print(f"The game is {self.session.state.value}. Type 's' to start.")
            return
        self.session.cell_click(index)
        self.show_board()

    def confirm_quit(self) -> bool:
        """Ask the user to confirm quitting the game."""
        try:
            answer = input("Are you sure you want to quit the game? [y/N] ")
        except EOFError:
            return False
        return answer.strip().lower() in ('y', 'yes')

    def show_board(self) -> None:
        print(self.session.board.render())

    def show_status(self, message: str) -> None:
        print(f"Status: {message}")

    # --- Position checks ---

    def check_position(self, position: Optional[str]) -> bool:
        """
        Load a board position and report its state.

        Returns:
            True if the position could be loaded, False otherwise
        """
        if not position:
            print("Please provide a position string with --position")
            return False

        try:
            cells = parse_position(position)
        except ValueError as e:
            print(f"Error parsing position: {e}")
            return False

        board = Board()
        for index in range(CELL_COUNT):
            if cells[index] != Player.EMPTY:
                board.make_move(index, cells[index])

        print("Loaded position:")
        print(board.render())

        x_count = cells.count(Player.FIRST)
        o_count = cells.count(Player.SECOND)
        if not 0 <= x_count - o_count <= 1:
            print(f"Warning: {x_count} X marks and {o_count} O marks cannot occur in a real game")

        if board.check_winner():
            print("Winning line detected")
        else:
            print("No winning line")

        if board.is_full():
            print("Board is full")
        else:
            print(f"Empty cells: {board.empty_count()}")
        return True


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the Tic-Tac-Toe command-line interface."""
    return SimpleCLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
