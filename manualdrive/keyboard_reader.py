"""Non-blocking raw keyboard reading from a terminal."""

from __future__ import annotations

import fcntl
import os
import sys
import termios


class KeyboardReader:
    """Puts a terminal into raw, non-blocking mode while used as a context."""

    def __init__(self, fd: int | None = None) -> None:
        self._fd = sys.stdin.fileno() if fd is None else fd
        self._old_attrs: list | None = None
        self._old_flags: int | None = None

    def __enter__(self) -> KeyboardReader:
        try:
            attrs = termios.tcgetattr(self._fd)
        except termios.error:
            self._old_attrs = None
        else:
            self._old_attrs = attrs
            raw = list(attrs)
            raw[3] &= ~(termios.ICANON | termios.ECHO)
            termios.tcsetattr(self._fd, termios.TCSANOW, raw)
        self._old_flags = fcntl.fcntl(self._fd, fcntl.F_GETFL)
        fcntl.fcntl(self._fd, fcntl.F_SETFL, self._old_flags | os.O_NONBLOCK)
        return self

    def __exit__(self, *args) -> None:
        if self._old_attrs is not None:
            termios.tcsetattr(self._fd, termios.TCSANOW, self._old_attrs)
            self._old_attrs = None
        if self._old_flags is not None:
            fcntl.fcntl(self._fd, fcntl.F_SETFL, self._old_flags)
            self._old_flags = None

    def read_key(self) -> int:
        """Return the next byte waiting, or 0 when none is available."""
        try:
            data = os.read(self._fd, 1)
        except BlockingIOError:
            return 0
        return data[0] if data else 0