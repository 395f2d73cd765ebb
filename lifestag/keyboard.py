"""Non-blocking single-key input from a terminal."""

from __future__ import annotations

import os
import termios
from types import TracebackType

_LFLAG = 3
_CC = 6


class Keyboard:
    """Puts a terminal into raw-ish mode and reads single keys from it."""

    def __init__(self, fd: int = 0) -> None:
        self.fd = fd
        self._initial: list | None = None
        self._settings: list | None = None
        self._peek: str | None = None

    def __enter__(self) -> Keyboard:
        self.init()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.destroy()

    def init(self) -> None:
        """Turn off line buffering, echo and signal keys."""
        self._initial = termios.tcgetattr(self.fd)
        settings = termios.tcgetattr(self.fd)
        settings[_LFLAG] &= ~(termios.ICANON | termios.ECHO | termios.ISIG)
        settings[_CC][termios.VMIN] = 1
        settings[_CC][termios.VTIME] = 0
        termios.tcsetattr(self.fd, termios.TCSANOW, settings)
        self._settings = settings

    def destroy(self) -> None:
        """Restore the terminal settings found by init()."""
        if self._initial is not None:
            termios.tcsetattr(self.fd, termios.TCSANOW, self._initial)

    def _set_vmin(self, value: int) -> None:
        assert self._settings is not None
        self._settings[_CC][termios.VMIN] = value
        termios.tcsetattr(self.fd, termios.TCSANOW, self._settings)

    def keyhit(self) -> bool:
        """Return True if a key is waiting, without blocking."""
        if self._peek is not None:
            return True
        if self._settings is None:
            raise RuntimeError("keyboard is not initialised")
        self._set_vmin(0)
        try:
            data = os.read(self.fd, 1)
        finally:
            self._set_vmin(1)
        if data:
            self._peek = chr(data[0])
            return True
        return False

    def readch(self) -> str:
        """Return the next key, blocking until one arrives."""
        if self._peek is not None:
            ch, self._peek = self._peek, None
            return ch
        data = os.read(self.fd, 1)
        if not data:
            raise EOFError("no more input")
        return chr(data[0])