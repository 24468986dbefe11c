"""Terminal viewer that runs the engine and shows its board frames and game records."""

from __future__ import annotations

import argparse
import os
import select
import sys
import threading
from datetime import datetime

from .engine import DEFAULT_DELAY_MS, GameEngine
from .mcts import ITERATIONS, MCTS

FRAME_SIZE = 4
READ_SIZE = 1024
CTRL_P = 16
CTRL_Q = 17

_SYMBOLS = " XO?"
_BORDER = "+---+---+---+"
_POLL_SECONDS = 0.05


def decode_frame(data: bytes) -> int:
    """Decode a 4-byte little-endian board frame."""
    if len(data) != FRAME_SIZE:
        raise ValueError(f"a frame is {FRAME_SIZE} bytes, got {len(data)}")
    return int.from_bytes(data, "little")


def render_board(frame: int) -> str:
    """Text that clears the screen below the time line and draws the board of ``frame``."""
    parts = ["\033[9;1H\033[0J\n"]
    for row in range(3):
        cells = [_SYMBOLS[(frame >> (row * 6 + col * 2)) & 0x3] for col in range(3)]
        parts.append(_BORDER + "\n")
        parts.append("| {} | {} | {} |\n".format(*cells))
    parts.append(_BORDER + "\n")
    return "".join(parts)


def format_time_line(now: datetime | None = None) -> str:
    """The time line shown above the board."""
    moment = now if now is not None else datetime.now()
    return moment.strftime("Time: %Y-%m-%d %H:%M:%S")


def _state_prefix(state_text: str) -> list[str]:
    if len(state_text) < 5:
        raise ValueError(f"state text too short: {state_text!r}")
    return list(state_text[:6])


def toggle_display(state_text: str) -> str:
    """Flip the display switch: ``"0"`` becomes ``"1"``, anything else becomes ``"0"``."""
    chars = _state_prefix(state_text)
    chars[0] = "1" if chars[0] == "0" else "0"
    return "".join(chars)


def request_end(state_text: str) -> str:
    """Set the end switch so no new game starts after the current one."""
    chars = _state_prefix(state_text)
    chars[4] = "1"
    return "".join(chars)


class _RawMode:
    """Put a terminal into non-canonical, no-echo, no-flow-control mode while active."""

    def __init__(self, fd: int) -> None:
        self._fd = fd
        self._saved = None

    def __enter__(self) -> _RawMode:
        if not os.isatty(self._fd):
            return self
        import termios

        self._saved = termios.tcgetattr(self._fd)
        raw = termios.tcgetattr(self._fd)
        raw[0] &= ~termios.IXON
        raw[3] &= ~(termios.ECHO | termios.ICANON)
        termios.tcsetattr(self._fd, termios.TCSAFLUSH, raw)
        return self

    def __exit__(self, *exc: object) -> None:
        if self._saved is not None:
            import termios

            termios.tcsetattr(self._fd, termios.TCSAFLUSH, self._saved)


def _tick(engine: GameEngine, stop: threading.Event) -> None:
    while not stop.is_set() and engine.running:
        try:
            engine.step()
        except RuntimeError:
            break
        stop.wait(engine.delay / 1000)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="kxo", description="Watch two AIs play tic-tac-toe."
    )
    parser.add_argument("--delay", type=int, default=DEFAULT_DELAY_MS,
                        help="milliseconds between moves")
    parser.add_argument("--iterations", type=int, default=ITERATIONS,
                        help="Monte Carlo iterations per move")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the engine and show its output; Ctrl-P toggles the board, Ctrl-Q quits."""
    args = _parse_args(argv)
    engine = GameEngine(delay=args.delay, mcts=MCTS(iterations=args.iterations))
    out = sys.stdout
    stdin_fd = sys.stdin.fileno()
    stop = threading.Event()
    display = True
    ending = False

    engine.open()
    ticker = threading.Thread(target=_tick, args=(engine, stop), daemon=True)
    ticker.start()
    try:
        with _RawMode(stdin_fd):
            while not ending:
                ready, _, _ = select.select([stdin_fd], [], [], _POLL_SECONDS)
                if ready:
                    key = os.read(stdin_fd, 1)
                    if key and key[0] == CTRL_P:
                        engine.state.store(toggle_display(engine.state.show()))
                        display = not display
                        if not display:
                            out.write("\n\nStopping to display the chess board...\n")
                            out.flush()
                    elif key and key[0] == CTRL_Q:
                        engine.state.store(request_end(engine.state.show()))
                        display = False
                        ending = True
                        out.write("\n\nStopping the kernel space tic-tac-toe game...\n")
                        out.flush()
                    continue
                try:
                    data = engine.read(READ_SIZE, block=False)
                except BlockingIOError:
                    continue
                if len(data) == FRAME_SIZE:
                    out.write(f"\033[1;1H\033[2K{format_time_line()}")
                    out.write("\033[0J")
                    out.write(render_board(decode_frame(data)))
                else:
                    out.write(data.decode("ascii", errors="replace"))
                out.flush()
    finally:
        stop.set()
        ticker.join(timeout=1)
        engine.release()
    return 0


if __name__ == "__main__":
    sys.exit(main())