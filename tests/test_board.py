"""
Unit tests for the Board class.

Tests verify:
1. Bounds checks and cell access
2. Gravity: pieces land on the lowest free cell
3. Victory detection in every direction
4. Cloning and canonical encoding
"""

import numpy as np
import pytest

from connectfour.exceptions import InvalidStateError, OutOfRangeError
from connectfour.game.board import Board
from connectfour.utils import ROWS, COLS, CONNECT_N, Player, parse_moves

from tests.conftest import build_board


class TestBoardBasics:
    """Bounds, cell access and move mechanics."""

    def test_valid_positions(self):
        assert Board.is_valid_position(0, 0)
        assert Board.is_valid_position(ROWS - 1, COLS - 1)

    def test_invalid_positions(self):
        assert not Board.is_valid_position(-1, 0)
        assert not Board.is_valid_position(0, -1)
        assert not Board.is_valid_position(ROWS, 0)
        assert not Board.is_valid_position(0, COLS)

    def test_reset_clears_board(self, board):
        board.make_move(Player.ONE, 0)
        board.make_move(Player.TWO, 3)
        board.reset()

        for row in range(ROWS):
            for col in range(COLS):
                assert board.get_space(row, col) == Player.EMPTY
        assert board.piece_count() == 0

    def test_get_space(self, board):
        board.make_move(Player.ONE, 0)
        assert board.get_space(0, 0) == Player.ONE
        assert board.get_space(1, 0) == Player.EMPTY

    def test_get_space_out_of_range(self, board):
        with pytest.raises(OutOfRangeError):
            board.get_space(ROWS, 0)
        with pytest.raises(IndexError):
            board.get_space(0, -1)

    def test_column_height(self, board):
        board.make_move(Player.ONE, 0)
        board.make_move(Player.TWO, 0)
        assert board.get_column_height(0) == 2
        assert board.get_column_height(1) == 0

    def test_column_height_out_of_range(self, board):
        with pytest.raises(OutOfRangeError):
            board.get_column_height(COLS)

    def test_can_make_move(self, board):
        assert board.can_make_move(0)
        for i in range(ROWS):
            board.make_move(Player.ONE if i % 2 == 0 else Player.TWO, 0)
        assert not board.can_make_move(0)
        assert 0 not in board.get_valid_moves()

    def test_make_move_returns_landing_row(self, board):
        assert board.make_move(Player.ONE, 2) == 0
        assert board.make_move(Player.TWO, 2) == 1
        assert board.get_space(1, 2) == Player.TWO
        assert board.get_column_height(2) == 2

    def test_make_move_full_column_raises(self, board):
        for i in range(ROWS):
            board.make_move(Player.ONE if i % 2 == 0 else Player.TWO, 0)
        with pytest.raises(InvalidStateError):
            board.make_move(Player.ONE, 0)

    def test_make_move_out_of_range_raises(self, board):
        with pytest.raises(OutOfRangeError):
            board.make_move(Player.ONE, COLS)

    def test_empty_player_cannot_move(self, board):
        with pytest.raises(ValueError):
            board.make_move(Player.EMPTY, 0)

    def test_is_full(self, board):
        assert not board.is_full()
        for col in range(COLS):
            for row in range(ROWS):
                board.make_move(Player.ONE if (row + col) % 2 == 0 else Player.TWO, col)
        assert board.is_full()
        assert board.get_valid_moves() == []


class TestVictory:
    """Win detection through the most recent piece."""

    def test_horizontal_win(self, board):
        for col in range(CONNECT_N):
            board.make_move(Player.ONE, col)
        assert board.check_victory(Player.ONE, CONNECT_N - 1)

    def test_vertical_win(self, board):
        for _ in range(CONNECT_N):
            board.make_move(Player.ONE, 0)
        assert board.check_victory(Player.ONE, 0)

    def test_diagonal_up_win(self, board):
        for col in range(CONNECT_N):
            for _ in range(col):
                board.make_move(Player.TWO, col)
            board.make_move(Player.ONE, col)
        assert board.check_victory(Player.ONE, CONNECT_N - 1)

    def test_diagonal_down_win(self, board):
        for col in range(CONNECT_N):
            for _ in range(CONNECT_N - 1 - col):
                board.make_move(Player.TWO, col)
            board.make_move(Player.ONE, col)
        assert board.check_victory(Player.ONE, 0)

    def test_no_win(self, board):
        board.make_move(Player.ONE, 0)
        assert not board.check_victory(Player.ONE, 0)
        assert not board.check_victory(Player.TWO, 0)

    def test_win_completed_in_middle(self):
        board = build_board([
            [2, 1, 2, 0, 2, 1, 0],
        ])
        board.make_move(Player.TWO, 3)
        assert not board.check_victory(Player.TWO, 3)

        board = build_board([
            [1, 2, 2, 0, 2, 1, 0],
        ])
        board.make_move(Player.TWO, 3)
        assert board.check_victory(Player.TWO, 3)

    def test_empty_player_cannot_win(self, board):
        with pytest.raises(ValueError):
            board.check_victory(Player.EMPTY, 0)

    def test_is_winning_move_does_not_modify(self, board):
        for col in range(3):
            board.make_move(Player.ONE, col)
        before = board.canonical_encoding()

        assert board.is_winning_move(Player.ONE, 3)
        assert not board.is_winning_move(Player.TWO, 3)
        assert not board.is_winning_move(Player.ONE, 5)
        assert board.canonical_encoding() == before

    def test_winning_line(self, board):
        for col in range(1, 5):
            board.make_move(Player.TWO, col)
        assert board.get_winning_line(Player.TWO, 4) == [(0, 1), (0, 2), (0, 3), (0, 4)]
        assert board.get_winning_line(Player.ONE, 4) == []


class TestCopyAndEncoding:
    """Cloning, equality and the canonical string form."""

    def test_clone_is_independent(self, board):
        board.make_move(Player.ONE, 0)
        board.make_move(Player.TWO, 1)
        cloned = board.clone()

        assert cloned is not board
        assert cloned == board
        assert cloned.get_space(0, 1) == Player.TWO
        assert cloned.canonical_encoding() == board.canonical_encoding()

        before = board.canonical_encoding()
        cloned.make_move(Player.ONE, 2)
        assert board.canonical_encoding() == before
        assert board.get_space(0, 2) == Player.EMPTY
        assert board.get_column_height(2) == 0

    def test_encoding_of_empty_board(self, board):
        assert board.canonical_encoding() == '0' * (ROWS * COLS)

    def test_encoding_is_bottom_row_first(self, board):
        board.make_move(Player.ONE, 0)
        board.make_move(Player.TWO, 0)
        encoding = board.canonical_encoding()
        assert encoding[0] == '1'
        assert encoding[COLS] == '2'
        assert encoding.count('0') == ROWS * COLS - 2

    def test_encoding_ignores_move_order(self):
        first = Board.from_moves([0, 1, 2, 3])
        second = Board.from_moves([2, 3, 0, 1])
        assert first.canonical_encoding() == second.canonical_encoding()

    def test_encoding_distinguishes_boards(self):
        assert (Board.from_moves([3]).canonical_encoding()
                != Board.from_moves([4]).canonical_encoding())

    def test_from_encoding_restores_board(self):
        original = Board.from_moves(parse_moves("3,3,2,4,4,4"))
        restored = Board.from_encoding(original.canonical_encoding())
        assert restored == original
        assert restored.get_column_height(4) == 3
        assert np.array_equal(restored.heights, original.heights)

    def test_from_encoding_rejects_bad_input(self):
        with pytest.raises(InvalidStateError):
            Board.from_encoding('0' * 10)
        with pytest.raises(InvalidStateError):
            Board.from_encoding('3' + '0' * (ROWS * COLS - 1))
        # A piece in row 1 with nothing under it
        with pytest.raises(InvalidStateError):
            Board.from_encoding('0' * COLS + '1' + '0' * (ROWS * COLS - COLS - 1))

    def test_get_state_is_a_copy(self, board):
        state = board.get_state()
        state[0, 0] = 1
        assert board.get_space(0, 0) == Player.EMPTY

    def test_render(self, board):
        board.make_move(Player.ONE, 0)
        board.make_move(Player.TWO, 1)
        lines = str(board).split("\n")

        assert len(lines) == ROWS + 3
        assert lines[ROWS] == "|X O          |"
        assert lines[-1] == "|0 1 2 3 4 5 6|"

    def test_render_highlight(self, board):
        board.make_move(Player.ONE, 0)
        lines = board.render([(0, 0)]).split("\n")
        assert lines[ROWS].startswith("|*")


class TestParseMoves:
    def test_parse(self):
        assert parse_moves("3, 3,2") == [3, 3, 2]
        assert parse_moves("") == []

    def test_parse_rejects_bad_columns(self):
        with pytest.raises(ValueError):
            parse_moves("3,x")
        with pytest.raises(ValueError):
            parse_moves("7")
