"""Parse and render `Project(...)` ... `EndProject` blocks."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field

from slnfile.config import PROJECT_SECTION, PROJECT_TYPES, SOLUTION_FOLDER_GUID, FormatConfig
from slnfile.errors import (
    EmptyFieldError,
    InvalidProjectHeaderError,
    MalformedLineError,
    MalformedSectionError,
    UnexpectedEndOfInputError,
)
from slnfile.sln.guid import coerce_guid, format_guid, parse_guid, try_parse_guid
from slnfile.sln.reader import LineReader
from slnfile.sln.scanner import LineScanner
from slnfile.sln.section import SectionBlock

logger = logging.getLogger(__name__)

PROJECT_DEPENDENCIES = "ProjectDependencies"


def starts_project(line: str | None) -> bool:
    return line is not None and line.lstrip().startswith("Project(")


def starts_global(line: str | None) -> bool:
    return line is not None and line.strip() == "Global"


@dataclass
class ProjectBlock:
    """One project entry of a solution.

    Both GUIDs may be reassigned after parsing; name and path must stay
    non-empty and are checked on construction.
    """
    project_type_guid: uuid.UUID
    name: str
    path: str
    project_guid: uuid.UUID
    sections: list[SectionBlock] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.name:
            raise EmptyFieldError("project name must not be empty")
        if not self.path:
            raise EmptyFieldError("project path must not be empty")
        self.project_type_guid = coerce_guid(self.project_type_guid)
        self.project_guid = coerce_guid(self.project_guid)
        self.sections = list(self.sections)

    @property
    def is_solution_folder(self) -> bool:
        return str(self.project_type_guid).upper() == SOLUTION_FOLDER_GUID

    @property
    def project_type(self) -> str:
        """Friendly language/kind name, or the type GUID when unknown."""
        type_guid = str(self.project_type_guid).upper()
        return PROJECT_TYPES.get(type_guid, format_guid(self.project_type_guid))

    @property
    def normalised_path(self) -> str:
        return self.path.replace("\\", "/")

    def get_section(self, name: str) -> SectionBlock | None:
        for section in self.sections:
            if section.name == name:
                return section
        return None

    @property
    def dependencies(self) -> list[uuid.UUID]:
        """GUIDs of projects this one declares a build dependency on."""
        section = self.get_section(PROJECT_DEPENDENCIES)
        if section is None:
            return []
        guids = []
        for entry in section:
            guid = try_parse_guid(entry.name)
            if guid is None:
                logger.warning(f"Skipping non-GUID dependency {entry.name!r} of {self.name}")
                continue
            guids.append(guid)
        return guids

    def get_text(self, config: FormatConfig | None = None) -> str:
        config = config or FormatConfig()
        header = (
            f'Project("{format_guid(self.project_type_guid)}") = '
            f'"{self.name}", "{self.path}", "{format_guid(self.project_guid)}"'
        )
        parts = [header + config.newline]
        for section in self.sections:
            parts.append(section.get_text(indent=1, config=config))
        parts.append("EndProject" + config.newline)
        return "".join(parts)

    @classmethod
    def parse(cls, reader: LineReader) -> ProjectBlock:
        start_line = reader.read_significant()
        if start_line is None:
            raise UnexpectedEndOfInputError("expected a Project line", reader.line_number)
        line_number = reader.line_number
        header = _ProjectHeader(LineScanner(start_line.lstrip(), line_number))

        try:
            header.expect_project_keyword()
            project_type_guid = header.read_type_guid()
            header.expect_separator("=")
            name = header.read_field()
            header.expect_separator(",")
            path = header.read_field()
            header.expect_separator(",")
            project_guid = header.read_guid()
        except MalformedLineError as e:
            raise InvalidProjectHeaderError(e.message, line_number) from e

        sections = []
        while True:
            line = reader.peek_significant()
            if line is None or starts_project(line) or not line[0].isspace():
                break
            sections.append(SectionBlock.parse(reader, PROJECT_SECTION))

        _read_project_end(reader, name)

        try:
            block = cls(
                project_type_guid=project_type_guid,
                name=name,
                path=path,
                project_guid=project_guid,
                sections=sections,
            )
        except EmptyFieldError as e:
            raise EmptyFieldError(e.message, line_number) from e

        logger.debug(f"Parsed project {name} -> {path} ({len(sections)} sections)")
        return block


class _ProjectHeader:
    """Field-by-field reader for `Project("{type}") = "name", "path", "{guid}"`."""

    def __init__(self, scanner: LineScanner) -> None:
        self.scanner = scanner

    def expect_project_keyword(self) -> None:
        keyword = self.scanner.read_up_to_and_eat('("')
        if keyword != "Project":
            raise InvalidProjectHeaderError(
                f"expected 'Project', found {keyword!r}", self.scanner.line_number
            )

    def read_type_guid(self) -> uuid.UUID:
        return parse_guid(self.scanner.read_up_to_and_eat('")'), self.scanner.line_number)

    def expect_separator(self, separator: str) -> None:
        # Text up to the next quote must be the separator, whitespace allowed
        text = self.scanner.read_up_to_and_eat('"')
        if text.strip() != separator:
            raise InvalidProjectHeaderError(
                f"expected {separator!r}, found {text!r}", self.scanner.line_number
            )

    def read_field(self) -> str:
        return self.scanner.read_up_to_and_eat('"')

    def read_guid(self) -> uuid.UUID:
        return parse_guid(self.scanner.read_up_to_and_eat('"'), self.scanner.line_number)


def _read_project_end(reader: LineReader, name: str) -> None:
    """Consume `EndProject`, tolerating its absence before `Project(` or `Global`."""
    line = reader.peek_significant()
    if line is None:
        raise UnexpectedEndOfInputError(
            f"project {name!r} is missing EndProject", reader.line_number
        )
    if starts_project(line) or starts_global(line):
        logger.debug(f"Project {name} has no EndProject, accepted before {line.strip()!r}")
        return
    reader.read()
    if line != "EndProject":
        raise MalformedSectionError(
            f"expected EndProject, found {line.strip()!r}", reader.line_number
        )
