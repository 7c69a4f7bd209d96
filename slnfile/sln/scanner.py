"""Left-to-right cursor over a single line of text."""

from __future__ import annotations

from slnfile.errors import MalformedLineError


class LineScanner:
    def __init__(self, line: str, line_number: int | None = None) -> None:
        self.line = line
        self.line_number = line_number
        self.position = 0

    def read_up_to_and_eat(self, delimiter: str) -> str:
        """Return the text before the next `delimiter` and move past it."""
        index = self.line.find(delimiter, self.position)
        if index < 0:
            raise MalformedLineError(
                f"expected {delimiter!r} in {self.line!r}", self.line_number
            )
        text = self.line[self.position:index]
        self.position = index + len(delimiter)
        return text

    def read_rest(self) -> str:
        text = self.line[self.position:]
        self.position = len(self.line)
        return text

    @property
    def at_end(self) -> bool:
        return self.position >= len(self.line)
