import pytest

from kxo.game import (
    DRAW,
    EMPTY,
    FIXED_ONE,
    LINES,
    N_GRIDS,
    available_moves,
    calculate_win_value,
    check_win,
    eval_line_segment_score,
    get_score,
    opponent,
)

ROW_LINE, COL_LINE, PRIMARY_LINE, SECONDARY_LINE = LINES


def test_opponent_swaps_players():
    assert opponent("X") == "O"
    assert opponent("O") == "X"


def test_opponent_rejects_unknown_mark():
    with pytest.raises(ValueError):
        opponent("Z")


def test_empty_board_has_no_winner():
    assert check_win(" " * N_GRIDS) == EMPTY


def test_full_board_without_line_is_draw():
    assert check_win("XOXXOOOXX") == DRAW


def test_check_win_accepts_lists():
    assert check_win(list("XXXOO    ")) == "X"


def test_check_win_rejects_wrong_size():
    with pytest.raises(ValueError):
        check_win("XX")


def test_calculate_win_value():
    assert calculate_win_value("X", "X") == FIXED_ONE
    assert calculate_win_value("O", "X") == 0
    assert calculate_win_value(DRAW, "O") == FIXED_ONE // 2


def test_available_moves_lists_empty_cells_in_order():
    assert available_moves("X O  O XX") == [1, 3, 4, 6]


def test_available_moves_full_board():
    assert available_moves("XOXXOOOXX") == []


def test_eval_segment_single_and_double_marks():
    assert eval_line_segment_score("X        ", "X", 0, 0, ROW_LINE) == 1
    assert eval_line_segment_score("XX       ", "X", 0, 0, ROW_LINE) == 10
    assert eval_line_segment_score("X        ", "O", 0, 0, ROW_LINE) == -1


def test_eval_segment_mixed_is_zero():
    assert eval_line_segment_score("XO       ", "X", 0, 0, ROW_LINE) == 0
    assert eval_line_segment_score("X  O     ", "O", 0, 0, COL_LINE) == 0


def test_get_score_empty_board_is_zero():
    assert get_score(" " * N_GRIDS, "X") == 0


@pytest.mark.parametrize("board", ["X   O    ", "XX OO   X", "XOXXOOOXX", "  X O X  "])
def test_get_score_is_antisymmetric(board):
    assert get_score(board, "X") == -get_score(board, "O")


def test_secondary_diagonal_segment():
    board = "  X X X  "
    assert eval_line_segment_score(board, "X", 0, 2, SECONDARY_LINE) == 100
    assert eval_line_segment_score(board, "X", 0, 0, PRIMARY_LINE) == 1