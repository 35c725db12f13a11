import pytest

from tictactoe.debug import debug, DebugLevel
from tictactoe.game.board import Board
from tictactoe.game.session import GameSession


@pytest.fixture(autouse=True)
def reset_debug():
    debug.configure(level=DebugLevel.INFO, enabled=True, components=[])
    yield
    debug.configure(level=DebugLevel.INFO, enabled=True, log_file="", components=[])


@pytest.fixture
def board():
    return Board()


@pytest.fixture
def session():
    return GameSession()


@pytest.fixture
def statuses(session):
    """Status messages emitted by the session, in order."""
    received = []
    session.add_status_listener(received.append)
    return received
