"""Self-playing tic-tac-toe engine that publishes board frames and game records."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Sequence

from .game import BOARD_SIZE, DRAW, EMPTY, N_GRIDS, check_win
from .mcts import MCTS
from .negamax import Negamax

MAX_MOVES_LEN = 512
MAX_GAMES = 128
FIFO_SIZE = 4096
DEFAULT_DELAY_MS = 100

_COLUMNS = "ABC"
_MOVE_SEPARATOR = " -> "
_TURN_BIT = 18


def board_to_mask(table: Sequence[str], turn: str) -> int:
    """Pack the board into 2 bits per cell (1 = X, 2 = O) plus bit 18 set when O is to move."""
    if len(table) != N_GRIDS:
        raise ValueError(f"board must have {N_GRIDS} cells, got {len(table)}")
    mask = 0
    for index, mark in enumerate(table):
        value = 1 if mark == "X" else 2 if mark == "O" else 0
        mask |= value << (index * 2)
    if turn == "O":
        mask |= 1 << _TURN_BIT
    return mask


def draw_board(table: Sequence[str]) -> str:
    """Render the board as text rows separated by dashed lines."""
    if len(table) != N_GRIDS:
        raise ValueError(f"board must have {N_GRIDS} cells, got {len(table)}")
    width = (BOARD_SIZE << 1) - 1
    parts = ["\n\n"]
    for row in range(BOARD_SIZE):
        cells = table[row * BOARD_SIZE:(row + 1) * BOARD_SIZE]
        parts.append("|".join(cells))
        parts.append("\n")
        parts.append("-" * width)
        parts.append("\n")
    return "".join(parts)


def format_move(pos: int) -> str:
    """Name a cell by column letter and 1-based row, e.g. ``A1`` for cell 0."""
    if not 0 <= pos < N_GRIDS:
        raise ValueError(f"cell index out of range: {pos}")
    row, col = divmod(pos, BOARD_SIZE)
    return f"{_COLUMNS[col]}{row + 1}"


def _append_bounded(text: str, addition: str) -> str:
    """Append as much of ``addition`` as fits in a record of MAX_MOVES_LEN - 1 characters."""
    room = MAX_MOVES_LEN - 1 - len(text)
    return text + addition[:max(room, 0)]


class StateAttribute:
    """The display / resume / end switches, readable and writable as ``"d r e"`` text."""

    def __init__(self, display: str = "1", resume: str = "1", end: str = "0") -> None:
        self._lock = threading.Lock()
        self.display = display
        self.resume = resume
        self.end = end

    def show(self) -> str:
        """Current switches as ``"d r e\\n"`` (at most six characters)."""
        with self._lock:
            return f"{self.display} {self.resume} {self.end}\n"[:6]

    def store(self, text: str) -> int:
        """Parse up to three switch characters separated by whitespace; return the length consumed."""
        values: list[str] = []
        pos = 0
        while len(values) < 3 and pos < len(text):
            if values:
                while pos < len(text) and text[pos].isspace():
                    pos += 1
                if pos >= len(text):
                    break
            values.append(text[pos])
            pos += 1
        with self._lock:
            for name, value in zip(("display", "resume", "end"), values):
                setattr(self, name, value)
        return len(text)


class GameEngine:
    """Two AIs playing each other: MCTS as O, negamax as X, one move per tick."""

    def __init__(
        self,
        delay: int = DEFAULT_DELAY_MS,
        mcts: MCTS | None = None,
        negamax: Negamax | None = None,
    ) -> None:
        if delay < 0:
            raise ValueError("delay must not be negative")
        self.delay = delay
        self.mcts = mcts if mcts is not None else MCTS()
        self.negamax = negamax if negamax is not None else Negamax()
        self.state = StateAttribute()
        self.table: list[str] = [EMPTY] * N_GRIDS
        self.turn = "O"
        self._producer = threading.RLock()
        self._fifo = bytearray()
        self._readable = threading.Condition()
        self._open_count = 0
        self._armed = False
        self._moves = ""
        self._games: deque[str] = deque(maxlen=MAX_GAMES)

    @property
    def running(self) -> bool:
        """Whether the tick timer is armed."""
        return self._armed

    @property
    def open_count(self) -> int:
        """Number of current readers."""
        return self._open_count

    @property
    def history(self) -> list[str]:
        """Finished game records, oldest first (at most MAX_GAMES)."""
        return list(self._games)

    @property
    def pending(self) -> int:
        """Number of bytes waiting to be read."""
        with self._readable:
            return len(self._fifo)

    def open(self) -> None:
        """Register a reader; the first one arms the timer."""
        with self._producer:
            self._open_count += 1
            if self._open_count == 1:
                self._armed = True

    def release(self) -> None:
        """Unregister a reader; the last one stops the timer. Always clears the end switch."""
        with self._producer:
            if self._open_count <= 0:
                raise RuntimeError("engine is not open")
            self._open_count -= 1
            if self._open_count == 0:
                self._armed = False
        with self.state._lock:
            self.state.end = "0"

    def step(self) -> str:
        """Run one timer tick and return the board outcome seen at its start."""
        with self._producer:
            if not self._armed:
                raise RuntimeError("timer is not armed")
            win = check_win(self.table)
            if win == EMPTY:
                self._play_turn()
                if self.state.display != "0":
                    self._produce_frame()
                return win
            self._end_game(win)
            if self.state.display == "1":
                self._produce_frame()
            if self.state.end == "0":
                self.table = [EMPTY] * N_GRIDS
            else:
                self._armed = False
            return win

    def read(self, count: int, block: bool = True) -> bytes:
        """Take up to ``count`` bytes; without ``block`` raise BlockingIOError when empty."""
        if count < 0:
            raise ValueError("count must not be negative")
        if count == 0:
            return b""
        with self._readable:
            while not self._fifo:
                if not block:
                    raise BlockingIOError("no data available")
                self._readable.wait()
            data = bytes(self._fifo[:count])
            del self._fifo[:count]
            return data

    def _play_turn(self) -> None:
        if self.turn == "O":
            move = self.mcts.search(self.table, "O")
            next_turn = "X"
        else:
            move = self.negamax.predict(self.table, "X").move
            next_turn = "O"
        if move != -1:
            self.table[move] = self.turn
            self._moves = _append_bounded(
                self._moves, format_move(move) + _MOVE_SEPARATOR
            )
        self.turn = next_turn

    def _end_game(self, win: str) -> None:
        record = self._moves
        if len(record) >= len(_MOVE_SEPARATOR):
            record = record[: -len(_MOVE_SEPARATOR)]
        outcome = "X win" if win == "X" else "O win" if win == "O" else DRAW
        record = _append_bounded(record, f" [{outcome}]\n")
        self._games.append(record)
        self._fifo_in(record.encode("ascii"))
        self._moves = ""

    def _produce_frame(self) -> None:
        frame = board_to_mask(self.table, self.turn)
        self._fifo_in(frame.to_bytes(4, "little"))

    def _fifo_in(self, data: bytes) -> int:
        with self._readable:
            room = FIFO_SIZE - len(self._fifo)
            accepted = data[:max(room, 0)]
            self._fifo.extend(accepted)
            if accepted:
                self._readable.notify_all()
            return len(accepted)