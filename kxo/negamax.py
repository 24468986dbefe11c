"""Negamax search with principal-variation windows, history ordering and a transposition table."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .game import EMPTY, N_GRIDS, available_moves, check_win, get_score, opponent
from .zobrist import ZobristTable

MAX_SEARCH_DEPTH = 6
_INFINITY = 100000
_WORST_SCORE = -10000


@dataclass(frozen=True)
class MoveResult:
    """A search score and the move that achieves it (-1 if none)."""

    score: int
    move: int


class Negamax:
    """Iterative-deepening negamax player."""

    def __init__(self, zobrist: ZobristTable | None = None) -> None:
        self.zobrist = zobrist if zobrist is not None else ZobristTable()
        self._hash = 0
        self._score_sum = [0] * N_GRIDS
        self._count = [0] * N_GRIDS

    def predict(self, table: Sequence[str], player: str) -> MoveResult:
        """Search the position for ``player`` and return the best move found."""
        opponent(player)
        board = list(table)
        if len(board) != N_GRIDS:
            raise ValueError(f"board must have {N_GRIDS} cells, got {len(board)}")
        self._score_sum = [0] * N_GRIDS
        self._count = [0] * N_GRIDS
        result = MoveResult(_WORST_SCORE, -1)
        for depth in range(2, MAX_SEARCH_DEPTH + 1, 2):
            result = self._search(board, depth, player, -_INFINITY, _INFINITY)
            self.zobrist.clear()
        return result

    def _history_average(self, move: int) -> int:
        count = self._count[move]
        if not count:
            return 0
        total = self._score_sum[move]
        quotient = abs(total) // count
        return quotient if total >= 0 else -quotient

    def _search(
        self, board: list[str], depth: int, player: str, alpha: int, beta: int
    ) -> MoveResult:
        if check_win(board) != EMPTY or depth == 0:
            return MoveResult(get_score(board, player), -1)
        entry = self.zobrist.get(self._hash)
        if entry is not None:
            return MoveResult(entry.score, entry.move)

        best_score, best_move = _WORST_SCORE, -1
        other = opponent(player)
        moves = sorted(available_moves(board), key=lambda m: -self._history_average(m))

        for position, move in enumerate(moves):
            board[move] = player
            self._hash ^= self.zobrist.key(move, player)
            if position == 0:
                score = -self._search(board, depth - 1, other, -beta, -alpha).score
            else:
                score = -self._search(board, depth - 1, other, -alpha - 1, -alpha).score
                if alpha < score < beta:
                    score = -self._search(board, depth - 1, other, -beta, -score).score
            self._count[move] += 1
            self._score_sum[move] += score
            if score > best_score:
                best_score, best_move = score, move
            board[move] = EMPTY
            self._hash ^= self.zobrist.key(move, player)
            alpha = max(alpha, score)
            if alpha >= beta:
                break

        self.zobrist.put(self._hash, best_score, best_move)
        return MoveResult(best_score, best_move)