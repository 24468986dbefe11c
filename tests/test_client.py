from datetime import datetime

import pytest

from kxo.client import (
    decode_frame,
    format_time_line,
    render_board,
    request_end,
    toggle_display,
)
from kxo.engine import board_to_mask


def _board_rows(text):
    return text.split("\n")


def test_decode_frame_round_trip_with_mask():
    table = list("XO  X   O")
    mask = board_to_mask(table, "O")
    assert decode_frame(mask.to_bytes(4, "little")) == mask


def test_decode_frame_is_little_endian():
    assert decode_frame(b"\x01\x00\x00\x00") == 1


@pytest.mark.parametrize("data", [b"", b"\x01\x02\x03", b"\x00" * 5])
def test_decode_frame_rejects_wrong_length(data):
    with pytest.raises(ValueError):
        decode_frame(data)


def test_render_empty_board_layout():
    rows = _board_rows(render_board(0))
    assert rows[0] == "\033[9;1H\033[0J"
    assert rows[1::2][:4] == ["+---+---+---+"] * 4
    assert rows[2:8:2] == ["|   |   |   |"] * 3
    assert rows[-1] == ""


def test_render_board_shows_marks_from_mask():
    table = list("XO  X   O")
    rows = _board_rows(render_board(board_to_mask(table, "X")))
    assert rows[2] == "| X | O |   |"
    assert rows[4] == "|   | X |   |"
    assert rows[6] == "|   |   | O |"


def test_render_board_ignores_turn_bit():
    table = list("OX X O  X")
    assert render_board(board_to_mask(table, "O")) == render_board(
        board_to_mask(table, "X")
    )


def test_render_board_unknown_cell_value():
    rows = _board_rows(render_board(3))
    assert rows[2] == "| ? |   |   |"


def test_format_time_line():
    moment = datetime(2024, 1, 2, 3, 4, 5)
    assert format_time_line(moment) == "Time: 2024-01-02 03:04:05"


def test_toggle_display_turns_off_and_back_on():
    original = "1 1 0\n"
    off = toggle_display(original)
    assert off == "0 1 0\n"
    assert toggle_display(off) == original


def test_toggle_display_treats_any_nonzero_as_on():
    assert toggle_display("x 1 0\n")[0] == "0"


def test_request_end_sets_end_switch_only():
    assert request_end("1 1 0\n") == "1 1 1\n"
    assert request_end("0 1 1\n") == "0 1 1\n"


def test_request_end_keeps_display_toggle_independent():
    text = request_end(toggle_display("1 1 0\n"))
    assert text[0] == "0"
    assert text[4] == "1"


@pytest.mark.parametrize("func", [toggle_display, request_end])
def test_state_helpers_reject_short_text(func):
    with pytest.raises(ValueError):
        func("1 1")