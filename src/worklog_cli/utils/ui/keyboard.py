"""Non-blocking single-key input for the live timer views."""

from __future__ import annotations

import select
import sys
import termios
import tty


class KeyboardHandler:
    """Reads single keypresses from a terminal without blocking.

    When stdin is not a terminal (pipes, tests) ``get_key()`` always
    returns None and the terminal is left alone.
    """

    def __init__(self) -> None:
        self.fd: int | None = None
        self.old_settings: list | None = None
        self._setup()

    def _setup(self) -> None:
        if not sys.stdin.isatty():
            return
        self.fd = sys.stdin.fileno()
        try:
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except termios.error:
            self.fd = None
            self.old_settings = None

    def get_key(self) -> str | None:
        """Return the pressed key in lower case, or None."""
        if self.fd is None:
            return None
        if select.select([sys.stdin], [], [], 0)[0]:
            return sys.stdin.read(1).lower()
        return None

    def stop(self) -> None:
        """Restore terminal settings."""
        if self.fd is not None and self.old_settings is not None:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
            self.old_settings = None
