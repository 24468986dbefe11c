"""Monte Carlo tree search player using 32-bit fixed-point arithmetic."""

from __future__ import annotations

from collections.abc import Sequence

from .game import (
    EMPTY,
    FIXED_MAX,
    FIXED_ONE,
    FIXED_SCALE_BITS,
    N_GRIDS,
    available_moves,
    calculate_win_value,
    check_win,
    opponent,
)
from .xoroshiro import Xoroshiro128

ITERATIONS = 100000

_MASK32 = 0xFFFFFFFF
_SIGN_BIT = 1 << 31


def fixed_sqrt(x: int) -> int:
    """Square root of a fixed-point value, bit by bit with 32-bit wrap-around."""
    if x == 0 or x == FIXED_ONE:
        return x
    s = 0
    for i in range((x | 1).bit_length() - 1, -1, -1):
        t = 1 << i
        if ((((s + t) * (s + t)) & _MASK32) >> FIXED_SCALE_BITS) <= x:
            s += t
    return s


def fixed_log(v: int) -> int:
    """Natural logarithm of a fixed-point value; negative results carry the sign bit."""
    if v == 0 or v == FIXED_ONE:
        return 0
    numerator = (v - FIXED_ONE) & _MASK32
    negative = bool(numerator & _SIGN_BIT)
    if negative:
        numerator &= _SIGN_BIT - 1
        numerator = (_SIGN_BIT - numerator) & _MASK32
    y = ((numerator << FIXED_SCALE_BITS) & _MASK32) // ((v + FIXED_ONE) & _MASK32)

    ans = 0
    for i in range(1, 20, 2):
        z = FIXED_ONE
        for _ in range(i):
            z = ((z * y) & _MASK32) >> FIXED_SCALE_BITS
        z = (z << FIXED_SCALE_BITS) & _MASK32
        z //= i << FIXED_SCALE_BITS
        ans = (ans + z) & _MASK32
    ans = (ans << 1) & _MASK32
    return ans | _SIGN_BIT if negative else ans


EXPLORATION_FACTOR = fixed_sqrt(1 << (FIXED_SCALE_BITS + 1))


def uct_score(n_total: int, n_visits: int, score: int) -> int:
    """Upper-confidence score of a child; unvisited children score highest."""
    if n_visits == 0:
        return FIXED_MAX
    # The exploitation term is the raw accumulated score, not an average.
    result = score & _MASK32
    explore = (
        EXPLORATION_FACTOR
        * fixed_sqrt(fixed_log((n_total << FIXED_SCALE_BITS) & _MASK32) // n_visits)
    ) & _MASK32
    explore >>= FIXED_SCALE_BITS
    return (result + explore) & _MASK32


class _Node:
    __slots__ = ("move", "player", "n_visits", "score", "parent", "children")

    def __init__(self, move: int, player: str, parent: _Node | None) -> None:
        self.move = move
        self.player = player
        self.n_visits = 0
        self.score = 0
        self.parent = parent
        self.children: list[_Node] = []


def _backpropagate(node: _Node | None, score: int) -> None:
    while node is not None:
        node.n_visits += 1
        node.score = (node.score + score) & _MASK32
        node = node.parent
        score = (1 - score) & _MASK32


def _select_move(node: _Node) -> _Node | None:
    best_node = None
    best_score = 0
    for child in node.children:
        score = uct_score(node.n_visits, child.n_visits, child.score)
        if score > best_score:
            best_score, best_node = score, child
    return best_node


class MCTS:
    """Monte Carlo tree search with random playouts."""

    def __init__(self, iterations: int = ITERATIONS, rng: Xoroshiro128 | None = None) -> None:
        if iterations < 0:
            raise ValueError("iterations must not be negative")
        self.iterations = iterations
        self.rng = rng if rng is not None else Xoroshiro128()
        self.nr_active_nodes = 0

    def _simulate(self, board: list[str], player: str) -> int:
        current = player
        board = list(board)
        self.rng.jump()
        while True:
            moves = available_moves(board)
            if not moves:
                break
            move = moves[self.rng.next() % len(moves)]
            board[move] = current
            win = check_win(board)
            if win != EMPTY:
                return calculate_win_value(win, player)
            current = opponent(current)
        return FIXED_ONE >> 1

    def _expand(self, node: _Node, board: list[str]) -> int:
        child_player = opponent(node.player)
        node.children = [_Node(move, child_player, node) for move in available_moves(board)]
        return len(node.children)

    def search(self, table: Sequence[str], player: str) -> int:
        """Return the chosen move for ``player``, or -1 if none could be chosen."""
        opponent(player)
        if len(table) != N_GRIDS:
            raise ValueError(f"board must have {N_GRIDS} cells, got {len(table)}")
        root = _Node(-1, player, None)
        self.nr_active_nodes = 1
        for _ in range(self.iterations):
            node = root
            board = list(table)
            while True:
                win = check_win(board)
                if win != EMPTY:
                    _backpropagate(node, calculate_win_value(win, opponent(node.player)))
                    break
                if node.n_visits == 0:
                    _backpropagate(node, self._simulate(board, node.player))
                    break
                if not node.children:
                    self.nr_active_nodes += self._expand(node, board)
                selected = _select_move(node)
                if selected is None:
                    return -1
                node = selected
                board[node.move] = opponent(node.player)

        best_node = root
        most_visits = -1
        for child in root.children:
            if child.n_visits > most_visits:
                most_visits, best_node = child.n_visits, child
        return best_node.move