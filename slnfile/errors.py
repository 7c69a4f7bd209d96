"""Exception types raised while reading or building solution files."""

from __future__ import annotations


class SolutionFileError(ValueError):
    """Base class for every solution file parse or validation failure."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.message = message
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class MalformedLineError(SolutionFileError):
    """A delimiter expected on the current line was not found."""


class UnexpectedEndOfInputError(SolutionFileError):
    """The input ended where a line or closing marker was required."""


class InvalidProjectHeaderError(SolutionFileError):
    """A Project(...) line does not follow the expected token sequence."""


class InvalidGuidError(SolutionFileError):
    """A GUID field is not a valid 128-bit identifier."""


class MalformedSectionError(SolutionFileError):
    """A block was opened but not closed properly."""


class EmptyFieldError(SolutionFileError):
    """A required project field (name or path) is empty."""


class UnexpectedContentError(SolutionFileError):
    """Content appeared where the document grammar allows none."""


class DependencyCycleError(SolutionFileError):
    """Project dependencies form a cycle, so no build order exists."""

    def __init__(self, message: str, cycle: list[str] | None = None) -> None:
        self.cycle = cycle or []
        super().__init__(message)
