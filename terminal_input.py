"""Terminal key reader: cbreak mode with a bounded ``select`` poll."""

from __future__ import annotations

import codecs
import os
import select
import sys
import termios
import tty
from typing import IO, Optional

ENTER = "ENTER"
TAB = "TAB"
BACKSPACE = "BACKSPACE"
ESC = "ESC"
CTRL_A = "CTRL_A"
CTRL_C = "CTRL_C"
CTRL_Y = "CTRL_Y"
UP = "UP"
DOWN = "DOWN"

_CONTROL_KEYS = {
    "\r": ENTER,
    "\n": ENTER,
    "\t": TAB,
    "\x7f": BACKSPACE,
    "\b": BACKSPACE,
    "\x01": CTRL_A,
    "\x03": CTRL_C,
    "\x19": CTRL_Y,
}

_ESCAPE_SEQUENCES = {
    "[A": UP,
    "[B": DOWN,
    "OA": UP,
    "OB": DOWN,
}


class TerminalKeyReader:
    """Reads single key presses from the controlling terminal.

    Use as a context manager: entering switches the terminal to cbreak mode
    with signal keys disabled (so Ctrl+C arrives as a key), exiting restores
    the saved attributes. When stdin is a pipe, keys are read from /dev/tty.
    """

    def __init__(self, stream: Optional[IO[str]] = None) -> None:
        self._stream = stream
        self._owned: Optional[IO[str]] = None
        self._fd = -1
        self._saved: Optional[list] = None
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="ignore")

    def __enter__(self) -> TerminalKeyReader:
        stream = self._stream
        if stream is None:
            if sys.stdin.isatty():
                stream = sys.stdin
            else:
                stream = self._owned = open("/dev/tty", encoding="utf-8")
        self._fd = stream.fileno()
        self._saved = termios.tcgetattr(self._fd)
        tty.setcbreak(self._fd)
        attrs = termios.tcgetattr(self._fd)
        attrs[3] &= ~termios.ISIG
        termios.tcsetattr(self._fd, termios.TCSADRAIN, attrs)
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._saved is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved)
            self._saved = None
        if self._owned is not None:
            self._owned.close()
            self._owned = None

    def poll(self, timeout_s: float) -> Optional[str]:
        ready, _, _ = select.select([self._fd], [], [], timeout_s)
        if not ready:
            return None
        key = self._read_char()
        if key is None:
            return None
        if key == "\x1b":
            return self._read_escape()
        return _CONTROL_KEYS.get(key, key)

    def _read_char(self) -> Optional[str]:
        # Multi-byte UTF-8 characters arrive one byte at a time.
        while True:
            data = os.read(self._fd, 1)
            if not data:
                return None
            text = self._decoder.decode(data)
            if text:
                return text

    def _read_escape(self) -> Optional[str]:
        sequence = ""
        while select.select([self._fd], [], [], 0.001)[0]:
            sequence += os.read(self._fd, 1).decode("utf-8", errors="ignore")
            if len(sequence) > 1 and sequence[-1].isalpha():
                break
            if sequence.endswith("~") or len(sequence) >= 6:
                break
        if not sequence:
            return ESC
        # Alt+key, Home, End and function keys are ignored rather than quitting.
        return _ESCAPE_SEQUENCES.get(sequence)
