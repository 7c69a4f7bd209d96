"""Parse and render `ProjectSection` / `GlobalSection` blocks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from slnfile.config import (
    GLOBAL_SECTION,
    PROJECT_SECTION,
    FormatConfig,
    PropertyEntry,
    SectionType,
)
from slnfile.errors import MalformedLineError, MalformedSectionError, UnexpectedEndOfInputError
from slnfile.sln.reader import LineReader
from slnfile.sln.scanner import LineScanner

logger = logging.getLogger(__name__)

_SECTION_KEYWORDS = (PROJECT_SECTION, GLOBAL_SECTION)

# Lines that can never appear inside a section body
_BLOCK_MARKERS = {
    "Global",
    "EndGlobal",
    "EndProject",
    f"End{PROJECT_SECTION}",
    f"End{GLOBAL_SECTION}",
}


def _is_block_marker(line: str) -> bool:
    return (
        line in _BLOCK_MARKERS
        or line.startswith("Project(")
        or line.startswith(f"{PROJECT_SECTION}(")
        or line.startswith(f"{GLOBAL_SECTION}(")
    )


@dataclass(frozen=True)
class SectionBlock:
    """A named, typed block of ordered properties."""
    name: str
    section_type: SectionType
    properties: tuple[PropertyEntry, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "section_type", SectionType(self.section_type))
        object.__setattr__(self, "properties", tuple(self.properties))

    @property
    def keyword(self) -> str:
        return self.section_type.keyword

    def __len__(self) -> int:
        return len(self.properties)

    def __iter__(self) -> Iterator[PropertyEntry]:
        return iter(self.properties)

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return the value of the first property called `name`."""
        for entry in self.properties:
            if entry.name == name:
                return entry.value
        return default

    def as_dict(self) -> dict[str, str]:
        """Properties as a dict; later duplicates win."""
        return {entry.name: entry.value for entry in self.properties}

    def get_text(self, indent: int = 0, config: FormatConfig | None = None) -> str:
        config = config or FormatConfig()
        outer = config.indent * indent
        inner = config.indent * (indent + 1)
        lines = [f"{outer}{self.keyword}({self.name}) = {self.section_type.value}"]
        for entry in self.properties:
            lines.append(f"{inner}{entry.name} = {entry.value}")
        lines.append(f"{outer}End{self.keyword}")
        return "".join(line + config.newline for line in lines)

    @classmethod
    def parse(cls, reader: LineReader, keyword: str | None = None) -> SectionBlock:
        """Parse one section starting at the next non-blank line.

        `keyword` restricts the block to ``ProjectSection`` or
        ``GlobalSection`` when the container only allows one of them.
        """
        start_line = reader.read_significant()
        if start_line is None:
            raise UnexpectedEndOfInputError("expected a section", reader.line_number)
        line_number = reader.line_number
        found_keyword, name, section_type = _parse_opening_line(
            start_line.strip(), line_number
        )
        if keyword is not None and found_keyword != keyword:
            raise MalformedSectionError(
                f"expected {keyword}, found {found_keyword}", line_number
            )

        end_marker = f"End{found_keyword}"
        properties: list[PropertyEntry] = []
        while True:
            line = reader.read()
            if line is None:
                raise MalformedSectionError(
                    f"{found_keyword}({name}) is missing {end_marker}", line_number
                )
            line = line.strip()
            if not line:
                continue
            if line == end_marker:
                break
            if _is_block_marker(line):
                raise MalformedSectionError(
                    f"unexpected {line!r} before {end_marker}", reader.line_number
                )
            properties.append(_parse_property(line, reader.line_number))

        logger.debug(f"Parsed {found_keyword}({name}) with {len(properties)} properties")
        return cls(name=name, section_type=section_type, properties=tuple(properties))


def _parse_opening_line(line: str, line_number: int) -> tuple[str, str, SectionType]:
    scanner = LineScanner(line, line_number)
    try:
        keyword = scanner.read_up_to_and_eat("(")
        name = scanner.read_up_to_and_eat(")")
        separator = scanner.read_up_to_and_eat("=")
    except MalformedLineError as e:
        raise MalformedSectionError(f"invalid section header {line!r}", line_number) from e

    if keyword not in _SECTION_KEYWORDS or separator.strip():
        raise MalformedSectionError(f"invalid section header {line!r}", line_number)

    type_text = scanner.read_rest().strip()
    try:
        section_type = SectionType(type_text)
    except ValueError as e:
        raise MalformedSectionError(f"unknown section type {type_text!r}", line_number) from e
    if section_type.keyword != keyword:
        raise MalformedSectionError(
            f"{keyword} cannot have type {type_text!r}", line_number
        )
    return keyword, name, section_type


def _parse_property(line: str, line_number: int) -> PropertyEntry:
    scanner = LineScanner(line, line_number)
    try:
        name = scanner.read_up_to_and_eat("=")
    except MalformedLineError as e:
        raise MalformedSectionError(f"expected 'name = value', found {line!r}", line_number) from e
    return PropertyEntry(name=name.strip(), value=scanner.read_rest().strip())
