# kxo

kxo is a tic-tac-toe engine. Two computer players face each other on a 3×3
board, one game after another:

- **O** plays with Monte Carlo tree search (`kxo.mcts.MCTS`). It uses 32-bit
  fixed-point UCT scoring (`fixed_sqrt`, `fixed_log`, `uct_score`) and random
  playouts drawn from a seeded generator (`kxo.xoroshiro.Xoroshiro128`).
- **X** plays with iterative-deepening negamax (`kxo.negamax.Negamax`). The
  search goes to depths 2, 4 and 6. It uses principal-variation windows,
  history-ordered moves and a Zobrist transposition table
  (`kxo.zobrist.ZobristTable`).

## The engine

`kxo.engine.GameEngine` runs the match. A board is a sequence of nine cells,
each `"X"`, `"O"` or `" "`.

- `open()` registers a reader. The first reader arms the tick timer.
- `release()` unregisters a reader. The last reader disarms the timer.
  `release()` always resets the end switch.
- `step()` runs one tick. While the game goes on, the player whose turn it is
  makes a move. When the game is over, the record is finished and the board is
  cleared for the next game, unless the end switch is set; in that case the
  timer is disarmed.
- `read(count, block=True)` takes up to `count` bytes of queued output. With
  `block=False` it raises `BlockingIOError` when nothing is queued.

Output is held in a 4096-byte queue. Anything that does not fit is dropped.
There are two kinds of output:

- A 4-byte little-endian board frame, built by `board_to_mask`. Each cell takes
  2 bits (1 = X, 2 = O), and bit 18 is set when O is to move. The engine
  queues a frame after each move when display is on, and after the last move
  of a game when the display switch is `"1"`.
- One line per finished game, for example `B2 -> A1 -> C3 [X win]`. The line
  ends in `[O win]`, `[X win]` or `[D]`. Cells are named by `format_move`. The
  last 128 records are also kept in `GameEngine.history`.

`StateAttribute` holds three one-character switches: display, resume and end.
`show()` returns them as `"d r e\n"`, and `store(text)` parses them back.
`draw_board` renders a board as plain text rows.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Using the library

```python
from kxo.game import check_win, available_moves
from kxo.negamax import Negamax
from kxo.zobrist import ZobristTable

table = list("X O  O  X")
player = Negamax(ZobristTable(seed=1))
result = player.predict(table, "X")
print(result.move, result.score)
print(check_win(table), available_moves(table))
```

`kxo.game` also provides `get_score` (static evaluation), `calculate_win_value`
and `opponent`.

`kxo.client` has helpers for displaying output:

- `decode_frame` reads a 4-byte little-endian frame.
- `render_board` draws a frame as an ASCII grid.
- `format_time_line` formats the time line.
- `toggle_display` and `request_end` rewrite the state text.

## Command

```
xo-user [--delay MS] [--iterations N]
```

This command runs the engine in its own process and shows a time line, the
current board and the record of each finished game.

- `--delay` sets the milliseconds between moves (default 100).
- `--iterations` sets the number of Monte Carlo iterations per move (default
  100000). The default is slow; a smaller value makes O move faster.

Keys:

- **Ctrl-P** switches the board display on or off.
- **Ctrl-Q** sets the end switch and exits.

## What it does not do

- The engine lives inside the process that creates it. There is no device,
  socket or server, so other processes cannot attach to a running match.
- The resume switch is stored and shown, but nothing acts on it.
- Board size and winning line length are fixed at 3.