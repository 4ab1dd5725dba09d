"""Raw-mode keyboard polling for the render loop."""

import os
import select
import sys
import termios
import time
import tty
from enum import Enum


class Key(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    QUIT = "quit"
    OTHER = "other"


ESCAPE_SEQUENCES = {
    "\x1b[A": Key.UP,
    "\x1b[B": Key.DOWN,
    "\x1b[C": Key.RIGHT,
    "\x1b[D": Key.LEFT,
    "\x1bOA": Key.UP,
    "\x1bOB": Key.DOWN,
    "\x1bOC": Key.RIGHT,
    "\x1bOD": Key.LEFT,
}


def decode_key(chars: str) -> Key:
    """Map raw input characters to a Key."""
    if chars in ESCAPE_SEQUENCES:
        return ESCAPE_SEQUENCES[chars]
    if chars == "q":
        return Key.QUIT
    return Key.OTHER


class KeyReader:
    """
    Reads single key presses from stdin in cbreak mode.

    Use as a context manager so the terminal mode is always restored. When
    stdin is not a TTY, ``poll`` just sleeps for the timeout.
    """

    def __init__(self, stream=None):
        self.stream = stream or sys.stdin
        self._fd: int | None = None
        self._saved = None

    def __enter__(self) -> "KeyReader":
        if self.stream.isatty():
            self._fd = self.stream.fileno()
            self._saved = termios.tcgetattr(self._fd)
            tty.setcbreak(self._fd)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._fd is not None and self._saved is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved)
        self._fd = None
        self._saved = None

    def _ready(self, timeout: float) -> bool:
        rlist, _, _ = select.select([self._fd], [], [], timeout)
        return bool(rlist)

    def _read_char(self) -> str:
        return os.read(self._fd, 1).decode("utf-8", errors="replace")

    def poll(self, timeout: float) -> Key | None:
        """Wait up to ``timeout`` seconds for a key press. Returns None on timeout."""
        if self._fd is None:
            time.sleep(timeout)
            return None
        if not self._ready(timeout):
            return None

        chars = self._read_char()
        if chars == "\x1b":
            # Arrow keys arrive as a three-byte escape sequence
            while len(chars) < 3 and self._ready(0.01):
                chars += self._read_char()
        return decode_key(chars)
