"""Forward-only line reader with a single line of pushback."""

from __future__ import annotations

import io
from typing import Iterable, Iterator, TextIO


class LineReader:
    """Reads lines strictly forward, allowing one line of lookahead.

    Line terminators (``\\n`` or ``\\r\\n``) are stripped. ``peek`` exposes
    the next line without consuming it, which is how blocks decide whether
    they own the following line or must leave it to their container.
    """

    def __init__(self, source: TextIO | Iterable[str] | str) -> None:
        if isinstance(source, str):
            source = io.StringIO(source)
        self._lines: Iterator[str] = iter(source)
        self._pending: str | None = None
        self._has_pending = False
        self.line_number = 0
        self._started = False

    def _pull(self) -> str | None:
        try:
            line = next(self._lines)
        except StopIteration:
            return None
        if not self._started:
            # Byte order mark left by streams not opened as utf-8-sig
            self._started = True
            line = line.lstrip("\ufeff")
        return line.rstrip("\r\n")

    def peek(self) -> str | None:
        """Return the next line without consuming it, or None at end of input."""
        if not self._has_pending:
            self._pending = self._pull()
            self._has_pending = True
        return self._pending

    def read(self) -> str | None:
        """Consume and return the next line, or None at end of input."""
        line = self.peek()
        if line is not None:
            self._has_pending = False
            self._pending = None
            self.line_number += 1
        return line

    def skip_blank(self) -> None:
        """Consume blank lines up to the next significant line."""
        while True:
            line = self.peek()
            if line is None or line.strip():
                return
            self.read()

    def peek_significant(self) -> str | None:
        """Skip blank lines and return the next non-blank line unconsumed."""
        self.skip_blank()
        return self.peek()

    def read_significant(self) -> str | None:
        """Skip blank lines and consume the next non-blank line."""
        self.skip_blank()
        return self.read()

    @property
    def at_end(self) -> bool:
        return self.peek() is None
