import pytest

from game.logic.board import (
    EMPTY_BOARD,
    WINNING_LINES,
    evaluate_win,
    is_free,
    is_full,
    is_valid_position,
    place_mark,
)


def _board_with(cells: tuple[int, ...], mark: str = "X") -> str:
    board = EMPTY_BOARD
    for index in cells:
        board = place_mark(board, index + 1, mark)
    return board


def _relabel(board: str) -> str:
    return board.translate(str.maketrans("XO", "OX"))


class TestEvaluateWin:
    def test_exactly_eight_lines(self):
        assert len(set(WINNING_LINES)) == 8

    @pytest.mark.parametrize("line", WINNING_LINES)
    @pytest.mark.parametrize("mark", ["X", "O"])
    def test_each_line_wins_for_either_mark(self, line, mark):
        assert evaluate_win(_board_with(line, mark)) is True

    def test_empty_board_has_no_winner(self):
        assert evaluate_win(EMPTY_BOARD) is False

    @pytest.mark.parametrize(
        "board",
        [
            "XOXXOOOXX",  # full, no line
            "XX_OO____",
            "XOX______",
            "X___X___O",
        ],
    )
    def test_non_winning_boards(self, board):
        assert evaluate_win(board) is False

    def test_mixed_line_is_not_a_win(self):
        assert evaluate_win("XXO______") is False

    @pytest.mark.parametrize("board", ["XXXOO____", "XOX_O_XO_", "XOXOXO___", "XOXXOOOXX", EMPTY_BOARD])
    def test_symmetric_under_relabeling(self, board):
        assert evaluate_win(board) == evaluate_win(_relabel(board))

    def test_only_canonical_triples_win(self):
        canonical = {frozenset(line) for line in WINNING_LINES}
        for a in range(9):
            for b in range(a + 1, 9):
                for c in range(b + 1, 9):
                    triple = (a, b, c)
                    assert evaluate_win(_board_with(triple)) == (frozenset(triple) in canonical)


class TestBoardHelpers:
    @pytest.mark.parametrize(("position", "valid"), [(0, False), (1, True), (9, True), (10, False), (-1, False)])
    def test_valid_positions_are_one_based(self, position, valid):
        assert is_valid_position(position) is valid

    def test_place_mark_is_one_based_and_pure(self):
        board = place_mark(EMPTY_BOARD, 1, "X")
        assert board == "X________"
        assert EMPTY_BOARD == "_________"
        assert place_mark(board, 9, "O") == "X_______O"

    def test_is_free(self):
        board = place_mark(EMPTY_BOARD, 5, "O")
        assert is_free(board, 4) is True
        assert is_free(board, 5) is False

    def test_is_full(self):
        assert is_full("XOXXOOOXX") is True
        assert is_full("XOXXOOOX_") is False
