import logging
import threading

import pytest

from tictactoe.game.session import GameSession, INITIAL_STATUS, UNEXPECTED_ERROR_STATUS
from tictactoe.utils import CELL_COUNT, Player, LifecycleState

DRAW_MOVES = (0, 1, 2, 4, 3, 5, 7, 6, 8)


def play(session, *indices):
    for index in indices:
        session.cell_click(index)


def test_new_session_is_stopped(session):
    assert session.state is LifecycleState.STOPPED
    assert session.current_player is Player.FIRST
    assert session.status == INITIAL_STATUS
    assert session.cells == (Player.EMPTY,) * CELL_COUNT


def test_start_runs_with_first_player(session, statuses):
    session.start()

    assert session.state is LifecycleState.RUNNING
    assert session.is_running
    assert session.current_player is Player.FIRST
    assert statuses == ["Game started. Player X's turn"]


def test_start_while_running_is_noop(session, statuses):
    session.start()
    session.cell_click(4)
    session.start()

    assert session.state is LifecycleState.RUNNING
    assert session.cells[4] is Player.FIRST
    assert session.current_player is Player.SECOND
    assert len(statuses) == 2


def test_moves_alternate_players(session, statuses):
    session.start()
    session.cell_click(0)
    session.cell_click(4)

    assert session.cells[0] is Player.FIRST
    assert session.cells[4] is Player.SECOND
    assert session.current_player is Player.FIRST
    assert statuses[1:] == ["Player O's turn", "Player X's turn"]


def test_top_row_win_stops_game(session, statuses):
    session.start()
    play(session, 0, 3, 1, 4, 2)

    assert session.board.check_winner()
    assert session.state is LifecycleState.STOPPED
    assert statuses[-1] == "Player X wins!"
    assert session.status == "Player X wins!"


def test_second_player_can_win(session):
    session.start()
    play(session, 0, 3, 1, 4, 8, 5)

    assert session.status == "Player O wins!"
    assert session.state is LifecycleState.STOPPED


def test_finished_board_stays_visible(session):
    session.start()
    play(session, 0, 3, 1, 4, 2)

    assert session.cells[:3] == (Player.FIRST,) * 3
    assert session.cells[3:5] == (Player.SECOND,) * 2


def test_full_board_is_a_draw(session, statuses):
    session.start()
    play(session, *DRAW_MOVES)

    assert session.board.is_full()
    assert not session.board.check_winner()
    assert session.state is LifecycleState.STOPPED
    assert statuses[-1] == "It's a draw!"


def test_occupied_cell_keeps_turn(session, statuses):
    session.start()
    session.cell_click(0)
    cells = session.cells

    session.cell_click(0)

    assert session.cells == cells
    assert session.current_player is Player.SECOND
    assert session.state is LifecycleState.RUNNING
    assert statuses[-1] == "Cell already occupied"


@pytest.mark.parametrize("index", [-1, 9])
def test_out_of_range_cell_keeps_turn(session, statuses, index):
    session.start()
    session.cell_click(index)

    assert session.current_player is Player.FIRST
    assert session.cells == (Player.EMPTY,) * CELL_COUNT
    assert statuses[-1] == "Invalid cell index"


@pytest.mark.parametrize("setup", [[], ["start", "pause"]])
def test_clicks_ignored_when_not_running(session, statuses, setup):
    for name in setup:
        getattr(session, name)()
    emitted = len(statuses)

    session.cell_click(4)

    assert session.cells[4] is Player.EMPTY
    assert len(statuses) == emitted


def test_clicks_ignored_after_game_over(session):
    session.start()
    play(session, 0, 3, 1, 4, 2)
    cells = session.cells

    session.cell_click(8)

    assert session.cells == cells


def test_pause_while_stopped_is_noop(session, statuses):
    session.pause()

    assert session.state is LifecycleState.STOPPED
    assert statuses == []


def test_pause_and_resume_keep_game(session, statuses):
    session.start()
    play(session, 0, 4, 8)
    cells = session.cells

    session.pause()
    assert session.state is LifecycleState.PAUSED
    assert statuses[-1] == "Game paused"

    session.pause()
    assert statuses.count("Game paused") == 1

    session.start()
    assert session.state is LifecycleState.RUNNING
    assert session.current_player is Player.SECOND
    assert session.cells == cells
    assert statuses[-1] == "Game resumed. Player O's turn"


def test_start_after_game_over_begins_fresh(session):
    session.start()
    play(session, 0, 3, 1, 4, 2)

    session.start()

    assert session.cells == (Player.EMPTY,) * CELL_COUNT
    assert session.current_player is Player.FIRST
    assert session.is_running


@pytest.mark.parametrize("confirmed", [False, None, "no", 1])
def test_unconfirmed_quit_is_noop(session, statuses, confirmed):
    session.start()
    session.cell_click(0)
    emitted = len(statuses)

    session.quit(confirmed)

    assert session.is_running
    assert session.cells[0] is Player.FIRST
    assert len(statuses) == emitted


@pytest.mark.parametrize("setup", [[], ["start"], ["start", "pause"]])
def test_confirmed_quit_resets_from_any_state(session, statuses, setup):
    for name in setup:
        getattr(session, name)()
    if session.is_running:
        session.cell_click(0)

    session.quit(True)

    assert session.state is LifecycleState.STOPPED
    assert session.cells == (Player.EMPTY,) * CELL_COUNT
    assert statuses[-1] == "Game quit"


def test_internal_fault_is_reported_and_rolled_back(session, statuses, monkeypatch, caplog):
    session.start()
    session.cell_click(0)

    def broken():
        raise RuntimeError("boom")

    monkeypatch.setattr(session.board, "check_winner", broken)
    with caplog.at_level(logging.ERROR, logger="tictactoe"):
        session.cell_click(4)

    assert statuses[-1] == UNEXPECTED_ERROR_STATUS
    assert session.state is LifecycleState.RUNNING
    assert session.current_player is Player.SECOND
    assert session.cells[4] is Player.EMPTY

    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert errors
    assert errors[0].exc_info[0] is RuntimeError
    assert "cell_click" in errors[0].getMessage()


def test_failing_listener_does_not_stop_others(session, caplog):
    received = []

    def broken(message):
        raise RuntimeError("listener failed")

    session.add_status_listener(broken)
    session.add_status_listener(received.append)
    with caplog.at_level(logging.ERROR, logger="tictactoe"):
        session.start()

    assert session.is_running
    assert received == ["Game started. Player X's turn"]
    assert any("listener" in r.getMessage() for r in caplog.records)


def test_remove_status_listener(session, statuses):
    session.remove_status_listener(statuses.append)
    session.start()

    assert statuses == []


def test_listener_can_query_session(session):
    seen = []
    session.add_status_listener(lambda message: seen.append(session.state))

    session.start()
    session.pause()

    assert seen == [LifecycleState.RUNNING, LifecycleState.PAUSED]


def test_status_is_logged(session, caplog):
    with caplog.at_level(logging.INFO, logger="tictactoe"):
        session.start()

    assert "[session] Game Status: Game started. Player X's turn" in caplog.messages


def test_sessions_are_independent():
    first, second = GameSession(), GameSession()
    first.start()
    first.cell_click(0)

    assert second.state is LifecycleState.STOPPED
    assert second.cells[0] is Player.EMPTY


def test_concurrent_clicks_are_serialized():
    for _ in range(50):
        session = GameSession()
        session.start()
        writes = []
        original = session.board.make_move

        def recording_move(index, player):
            result = original(index, player)
            if result.ok:
                writes.append(index)
            return result

        session.board.make_move = recording_move
        barrier = threading.Barrier(CELL_COUNT)

        def click(index):
            barrier.wait()
            session.cell_click(index)

        threads = [threading.Thread(target=click, args=(i,)) for i in range(CELL_COUNT)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        cells = session.cells
        x_count = cells.count(Player.FIRST)
        o_count = cells.count(Player.SECOND)
        assert 0 <= x_count - o_count <= 1
        assert len(writes) == len(set(writes)) == x_count + o_count
