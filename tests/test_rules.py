"""
Test suite for the GameEngine.

Tests cover:
- Initial state and accessors
- Turn enforcement with value-equal players
- Rejected moves leaving the game untouched
- Win, draw and win-over-draw resolution
- Terminal games refusing further moves
"""

import threading

import pytest

from connect4.game.board import Board
from connect4.game.player import Player
from connect4.game.rules import GameEngine
from connect4.utils import Tile, GameStatus

from conftest import DRAW_ROWS, DRAW_SEQUENCE, grid_from_rows

VALID = "Move was valid"
NOT_YOUR_TURN = "Player cannot make a move."
BLOCKED = "Cannot place tile in column."
INACTIVE = "Game is no longer ACTIVE"
DRAW = "Game Ended in Draw."


@pytest.fixture
def engine(player1, player2):
    return GameEngine(player1, player2)


def play_vertical_win(engine, player1, player2):
    for _ in range(3):
        assert engine.make_move(player1, 0) == VALID
        assert engine.make_move(player2, 1) == VALID
    return engine.make_move(player1, 0)


def play_draw(engine, player1, player2):
    results = []
    for i, column in enumerate(DRAW_SEQUENCE):
        player = player1 if i % 2 == 0 else player2
        results.append(engine.make_move(player, column))
    return results


class TestSetup:
    """Test engine initialization."""

    def test_initial_state(self, engine, player1, player2):
        assert engine.get_current_player() == player1
        assert engine.get_status() == GameStatus.IN_PROGRESS
        assert engine.get_player1() == player1
        assert engine.get_player2() == player2
        assert engine.get_winner() is None
        assert not engine.is_game_over()
        assert engine.get_board().filled_count == 0

    def test_players_need_different_tiles(self):
        with pytest.raises(ValueError, match="different tiles"):
            GameEngine(Player(1, Tile.GOLD), Player(2, Tile.GOLD))

    def test_player_without_tile(self, player2):
        with pytest.raises(ValueError, match="Player 1 has no tile"):
            GameEngine(Player(1, None), player2)

    def test_both_players_without_tile(self):
        with pytest.raises(ValueError, match="has no tile"):
            GameEngine(Player(1, None), Player(2, None))

    def test_supplied_board_is_used(self, player1, player2):
        board = Board()
        engine = GameEngine(player1, player2, board)

        engine.make_move(player1, 0)
        assert board.get_tile(5, 0) == Tile.GOLD


class TestPlayer:
    """Test player value semantics."""

    def test_value_equality(self):
        assert Player(1, Tile.GOLD) == Player(1, Tile.GOLD)
        assert hash(Player(1, Tile.GOLD)) == hash(Player(1, Tile.GOLD))

    def test_id_and_tile_both_matter(self):
        assert Player(1, Tile.GOLD) != Player(2, Tile.GOLD)
        assert Player(1, Tile.GOLD) != Player(1, Tile.RED)

    def test_str(self):
        assert str(Player(1, Tile.GOLD)) == "Player 1 (GOLD)"
        assert str(Player(3, None)) == "Player 3 (None)"


class TestTurns:
    """Test turn alternation and enforcement."""

    def test_valid_moves_alternate(self, engine, player1, player2):
        for _ in range(2):
            assert engine.make_move(player1, 0) == VALID
            assert engine.get_current_player() == player2
            assert engine.make_move(player2, 1) == VALID
            assert engine.get_current_player() == player1

    def test_equal_player_may_move(self, engine, player2):
        """A separately built but equal player owns the turn."""
        assert engine.make_move(Player(1, Tile.GOLD), 3) == VALID
        assert engine.get_current_player() == player2

    def test_wrong_player(self, engine, player1, player2):
        assert engine.make_move(player2, 0) == NOT_YOUR_TURN
        assert engine.get_current_player() == player1
        assert engine.get_board().filled_count == 0

    def test_same_player_twice(self, engine, player1):
        assert engine.make_move(player1, 0) == VALID
        assert engine.make_move(player1, 0) == NOT_YOUR_TURN
        assert engine.get_board().filled_count == 1

    def test_stranger_cannot_move(self, engine, player1):
        assert engine.make_move(Player(3, Tile.GOLD), 0) == NOT_YOUR_TURN
        assert engine.get_current_player() == player1


class TestBlockedColumns:
    """Test moves that cannot be placed."""

    @pytest.mark.parametrize("column", [-1, 7, 8])
    def test_out_of_range_column(self, engine, player1, column):
        assert engine.make_move(player1, column) == BLOCKED
        assert engine.get_current_player() == player1
        assert engine.get_board().filled_count == 0

    def test_retry_after_blocked_column(self, engine, player1, player2):
        assert engine.make_move(player1, 8) == BLOCKED
        assert engine.make_move(player1, 2) == VALID
        assert engine.get_current_player() == player2

    def test_full_column(self, engine, player1, player2):
        for i in range(6):
            player = player1 if i % 2 == 0 else player2
            assert engine.make_move(player, 0) == VALID

        assert engine.make_move(player1, 0) == BLOCKED
        assert engine.get_current_player() == player1
        assert engine.get_board().filled_count == 6


class TestOutcomes:
    """Test win and draw resolution."""

    def test_vertical_win(self, engine, player1, player2):
        assert play_vertical_win(engine, player1, player2) == "Game Ended. Winner is 1"
        assert engine.get_status() == GameStatus.WIN
        assert engine.get_winner() == player1
        assert engine.is_game_over()

    def test_second_player_wins(self, engine, player1, player2):
        for column in [0, 1, 0, 1, 0, 1, 6]:
            player = engine.get_current_player()
            assert engine.make_move(player, column) == VALID

        assert engine.make_move(player2, 1) == "Game Ended. Winner is 2"
        assert engine.get_winner() == player2

    def test_draw(self, engine, player1, player2):
        results = play_draw(engine, player1, player2)

        assert results[:-1] == [VALID] * 41
        assert results[-1] == DRAW
        assert engine.get_status() == GameStatus.DRAW
        assert engine.get_winner() is None
        assert engine.get_board().check_draw()

    def test_win_on_last_cell_beats_draw(self, player1, player2):
        """Filling the board with a line of four ends in a win."""
        rows = list(DRAW_ROWS)
        rows[0] = "GGG.GGR"
        board = Board(grid_from_rows(rows))
        engine = GameEngine(player1, player2, board)

        assert engine.make_move(player1, 3) == "Game Ended. Winner is 1"
        assert board.check_draw()
        assert engine.get_status() == GameStatus.WIN
        assert engine.get_winner() == player1


class TestFinishedGame:
    """Test that terminal games accept nothing."""

    @pytest.mark.parametrize("column", [0, 3, -1, 9])
    def test_no_moves_after_win(self, engine, player1, player2, column):
        play_vertical_win(engine, player1, player2)
        filled = engine.get_board().filled_count

        assert engine.make_move(player1, column) == INACTIVE
        assert engine.make_move(player2, column) == INACTIVE
        assert engine.get_status() == GameStatus.WIN
        assert engine.get_current_player() == player1
        assert engine.get_board().filled_count == filled

    def test_no_moves_after_draw(self, engine, player1, player2):
        play_draw(engine, player1, player2)
        current = engine.get_current_player()

        assert engine.make_move(player1, 0) == INACTIVE
        assert engine.make_move(player2, 0) == INACTIVE
        assert engine.get_status() == GameStatus.DRAW
        assert engine.get_current_player() == current


class TestConcurrency:

    def test_one_move_per_turn_across_threads(self, engine, player1):
        """Only one of many simultaneous requests from the same player lands."""
        results = []
        results_lock = threading.Lock()

        def attempt(column):
            message = engine.make_move(player1, column)
            with results_lock:
                results.append(message)

        threads = [threading.Thread(target=attempt, args=(col,)) for col in range(7)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results.count(VALID) == 1
        assert results.count(NOT_YOUR_TURN) == 6
        assert engine.get_board().filled_count == 1
