"""Board representation, win detection and static evaluation."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

BOARD_SIZE = 3
GOAL = 3
N_GRIDS = BOARD_SIZE * BOARD_SIZE

EMPTY = " "
DRAW = "D"

FIXED_SCALE_BITS = 8
FIXED_ONE = 1 << FIXED_SCALE_BITS
FIXED_MAX = 0xFFFFFFFF


def get_index(i: int, j: int) -> int:
    """Flat board index of row ``i``, column ``j``."""
    return i * BOARD_SIZE + j


@dataclass(frozen=True)
class Line:
    """A direction on the board and the range of cells a segment may start at."""

    i_shift: int
    j_shift: int
    i_lower_bound: int
    j_lower_bound: int
    i_upper_bound: int
    j_upper_bound: int

    def starts(self) -> Iterator[tuple[int, int]]:
        """Yield every (row, column) where a segment of this line can start."""
        for i in range(self.i_lower_bound, self.i_upper_bound):
            for j in range(self.j_lower_bound, self.j_upper_bound):
                yield i, j

    def cells(self, i: int, j: int) -> list[int]:
        """Flat indices of the GOAL cells of the segment starting at (i, j)."""
        return [
            get_index(i + k * self.i_shift, j + k * self.j_shift)
            for k in range(GOAL)
        ]


LINES: tuple[Line, ...] = (
    Line(0, 1, 0, 0, BOARD_SIZE, BOARD_SIZE - GOAL + 1),  # rows
    Line(1, 0, 0, 0, BOARD_SIZE - GOAL + 1, BOARD_SIZE),  # columns
    Line(1, 1, 0, 0, BOARD_SIZE - GOAL + 1, BOARD_SIZE - GOAL + 1),  # primary diagonal
    Line(1, -1, 0, GOAL - 1, BOARD_SIZE - GOAL + 1, BOARD_SIZE),  # secondary diagonal
)


def opponent(player: str) -> str:
    """Return the other player's mark."""
    if player == "O":
        return "X"
    if player == "X":
        return "O"
    raise ValueError(f"unknown player {player!r}")


def _validate(table: Sequence[str]) -> None:
    if len(table) != N_GRIDS:
        raise ValueError(f"board must have {N_GRIDS} cells, got {len(table)}")


def _segment_winner(table: Sequence[str], i: int, j: int, line: Line) -> str:
    marks = [table[index] for index in line.cells(i, j)]
    first = marks[0]
    if first != EMPTY and all(mark == first for mark in marks):
        return first
    return EMPTY


def check_win(table: Sequence[str]) -> str:
    """Return the winning mark, ``DRAW`` for a full board, or ``EMPTY`` if play goes on."""
    _validate(table)
    for line in LINES:
        for i, j in line.starts():
            winner = _segment_winner(table, i, j, line)
            if winner != EMPTY:
                return winner
    return EMPTY if EMPTY in table else DRAW


def calculate_win_value(win: str, player: str) -> int:
    """Fixed-point value of an outcome for ``player``: 1 for a win, 0 for a loss, 1/2 otherwise."""
    if win == player:
        return FIXED_ONE
    if win == opponent(player):
        return 0
    return FIXED_ONE >> 1


def available_moves(table: Sequence[str]) -> list[int]:
    """Indices of the empty cells, in board order."""
    _validate(table)
    return [index for index, mark in enumerate(table) if mark == EMPTY]


def eval_line_segment_score(
    table: Sequence[str], player: str, i: int, j: int, line: Line
) -> int:
    """Score one segment for ``player``: powers of ten for own marks, negative for the opponent's."""
    score = 0
    for index in line.cells(i, j):
        mark = table[index]
        if mark == player:
            if score < 0:
                return 0
            score = score * 10 if score else 1
        elif mark != EMPTY:
            if score > 0:
                return 0
            score = score * 10 if score else -1
    return score


def get_score(table: Sequence[str], player: str) -> int:
    """Static evaluation of the whole board from ``player``'s point of view."""
    _validate(table)
    return sum(
        eval_line_segment_score(table, player, i, j, line)
        for line in LINES
        for i, j in line.starts()
    )