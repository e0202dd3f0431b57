"""
KeyboardSource for raw key input.

This module provides the blocking-with-timeout key reader used by the
InputProducer thread:
- Sets cbreak mode on enter, restores the saved tty settings on exit
- Uses select() with a timeout so the reading thread can notice shutdown
- Reads escape sequences (arrow keys, etc.) as a single key code

Reads go straight to the file descriptor with os.read(): a buffered
text stream could hold bytes that select() no longer reports.
"""

from __future__ import annotations

import codecs
import os
import select
import sys
import termios
import tty
from collections import deque
from typing import IO

from status_panel.exceptions import TerminalError

ESC = "\x1b"
CSI = ESC + "["
SS3 = ESC + "O"
READ_SIZE = 64


def split_keys(text: str) -> list[str]:
    """
    Split decoded input into key codes.

    CSI sequences (ESC [ params final, e.g. "\x1b[A", "\x1b[5~") and SS3
    sequences (ESC O X, e.g. "\x1bOP") stay together as one key; every
    other character is its own key. An unterminated CSI sequence is kept
    whole.

    Args:
        text: Characters read in one chunk

    Returns:
        Key codes in input order
    """
    keys: list[str] = []
    i = 0
    while i < len(text):
        if text.startswith(CSI, i) and i + 2 < len(text):
            end = i + 2
            # Parameter and intermediate bytes run until a final byte 0x40-0x7E
            while end < len(text) and not "\x40" <= text[end] <= "\x7e":
                end += 1
            keys.append(text[i : end + 1])
            i = end + 1
        elif text.startswith(SS3, i) and i + 2 < len(text):
            keys.append(text[i : i + 3])
            i += 3
        else:
            keys.append(text[i])
            i += 1
    return keys


class KeyboardSource:
    """
    Key reader over a tty in cbreak mode.

    Example:
        with KeyboardSource() as source:
            key = source.poll_event(timeout=0.1)
    """

    def __init__(self, stream: IO | None = None) -> None:
        """
        Initialize keyboard source.

        Args:
            stream: Input stream to read (defaults to sys.stdin)
        """
        self._stream = stream
        self._old_settings: list | None = None
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending: deque[str] = deque()

    def _fileno(self) -> int:
        stream = self._stream if self._stream is not None else sys.stdin
        return stream.fileno()

    def __enter__(self) -> KeyboardSource:
        try:
            fd = self._fileno()
            self._old_settings = termios.tcgetattr(fd)
            tty.setcbreak(fd)
        except (OSError, ValueError, termios.error) as e:
            raise TerminalError("initialize", e) from e
        return self

    def __exit__(self, *exc_info: object) -> None:
        old_settings, self._old_settings = self._old_settings, None
        if old_settings is None:
            return
        try:
            termios.tcsetattr(self._fileno(), termios.TCSADRAIN, old_settings)
        except (OSError, ValueError, termios.error) as e:
            raise TerminalError("restore", e) from e

    def poll_event(self, timeout: float) -> str | None:
        """
        Wait up to timeout seconds for a key.

        Does NOT change terminal modes - use the context manager for that.

        Args:
            timeout: Maximum seconds to wait

        Returns:
            Key code, or None if nothing was pressed

        Raises:
            OSError: If the underlying descriptor cannot be read
            EOFError: If input was closed
        """
        if self._pending:
            return self._pending.popleft()

        fd = self._fileno()
        if not select.select([fd], [], [], timeout)[0]:
            return None

        data = os.read(fd, READ_SIZE)
        if not data:
            raise EOFError("keyboard input closed")
        self._pending.extend(split_keys(self._decoder.decode(data)))
        # A partial UTF-8 sequence decodes to nothing until the rest arrives
        if not self._pending:
            return None
        return self._pending.popleft()
