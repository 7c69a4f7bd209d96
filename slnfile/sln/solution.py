"""Parse and render whole .sln documents (custom text format, not XML)."""

from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, TextIO

from slnfile.config import GLOBAL_SECTION, FormatConfig
from slnfile.errors import (
    InvalidProjectHeaderError,
    MalformedSectionError,
    UnexpectedContentError,
    UnexpectedEndOfInputError,
)
from slnfile.sln.guid import coerce_guid, try_parse_guid
from slnfile.sln.project import ProjectBlock, starts_global, starts_project
from slnfile.sln.reader import LineReader
from slnfile.sln.section import SectionBlock

logger = logging.getLogger(__name__)

_FORMAT_VERSION_RE = re.compile(r"^Microsoft Visual Studio Solution File, Format Version\s+(\S+)")
_VS_VERSION_RE = re.compile(r"^VisualStudioVersion\s*=\s*(\S+)")
_MIN_VS_VERSION_RE = re.compile(r"^MinimumVisualStudioVersion\s*=\s*(\S+)")

SOLUTION_CONFIGURATION_PLATFORMS = "SolutionConfigurationPlatforms"
NESTED_PROJECTS = "NestedProjects"

# A keyword glued to `("`, e.g. a misspelt `Project("`
_NEAR_PROJECT_RE = re.compile(r'^\w+\("')
_BLOCK_END_MARKERS = {"EndProject", "EndGlobal", "EndProjectSection", "EndGlobalSection"}
_SECTION_OPENERS = ("ProjectSection(", "GlobalSection(")


@dataclass
class SolutionDocument:
    """A parsed solution: opaque header lines, projects, global sections."""
    header_lines: list[str] = field(default_factory=list)
    projects: list[ProjectBlock] = field(default_factory=list)
    global_sections: list[SectionBlock] = field(default_factory=list)

    # --- Header ---

    def _header_value(self, pattern: re.Pattern) -> str | None:
        for line in self.header_lines:
            match = pattern.match(line.strip())
            if match:
                return match.group(1)
        return None

    @property
    def format_version(self) -> str | None:
        return self._header_value(_FORMAT_VERSION_RE)

    @property
    def visual_studio_version(self) -> str | None:
        return self._header_value(_VS_VERSION_RE)

    @property
    def minimum_visual_studio_version(self) -> str | None:
        return self._header_value(_MIN_VS_VERSION_RE)

    # --- Lookups ---

    def get_project(self, guid: uuid.UUID | str) -> ProjectBlock | None:
        guid = coerce_guid(guid)
        for project in self.projects:
            if project.project_guid == guid:
                return project
        return None

    def find_project(self, name: str) -> ProjectBlock | None:
        for project in self.projects:
            if project.name == name:
                return project
        return None

    def get_global_section(self, name: str) -> SectionBlock | None:
        for section in self.global_sections:
            if section.name == name:
                return section
        return None

    @property
    def buildable_projects(self) -> list[ProjectBlock]:
        """Projects excluding solution folders."""
        return [p for p in self.projects if not p.is_solution_folder]

    @property
    def solution_configurations(self) -> list[str]:
        """Configuration|Platform pairs, e.g. ``Debug|Any CPU``."""
        section = self.get_global_section(SOLUTION_CONFIGURATION_PLATFORMS)
        if section is None:
            return []
        return [entry.name for entry in section]

    @property
    def nested_projects(self) -> dict[uuid.UUID, uuid.UUID]:
        """Child project GUID -> parent solution folder GUID."""
        section = self.get_global_section(NESTED_PROJECTS)
        if section is None:
            return {}
        nested = {}
        for entry in section:
            child, parent = try_parse_guid(entry.name), try_parse_guid(entry.value)
            if child is None or parent is None:
                logger.warning(f"Skipping non-GUID nesting entry {entry.name!r} = {entry.value!r}")
                continue
            nested[child] = parent
        return nested

    # --- Serialisation ---

    def get_text(self, config: FormatConfig | None = None) -> str:
        config = config or FormatConfig()
        parts = [line + config.newline for line in self.header_lines]
        for project in self.projects:
            parts.append(project.get_text(config))
        parts.append("Global" + config.newline)
        for section in self.global_sections:
            parts.append(section.get_text(indent=1, config=config))
        parts.append("EndGlobal" + config.newline)
        return "".join(parts)

    @classmethod
    def parse(cls, source: LineReader | TextIO | Iterable[str] | str) -> SolutionDocument:
        """Parse a full document: header, projects, then one Global block."""
        reader = source if isinstance(source, LineReader) else LineReader(source)

        header_lines = _parse_header(reader)

        projects = []
        while starts_project(reader.peek_significant()):
            projects.append(ProjectBlock.parse(reader))

        global_sections: list[SectionBlock] = []
        if reader.peek_significant() is not None:
            global_sections = _parse_global(reader)

        logger.debug(
            f"Parsed solution with {len(projects)} projects and "
            f"{len(global_sections)} global sections"
        )
        return cls(
            header_lines=header_lines,
            projects=projects,
            global_sections=global_sections,
        )


def _parse_header(reader: LineReader) -> list[str]:
    """Collect every line before the first project or the Global block."""
    lines: list[str] = []
    while True:
        line = reader.peek()
        if line is None or starts_project(line) or starts_global(line):
            break
        reader.read()
        _check_header_line(line, reader.line_number)
        lines.append(line)
    return lines


def _check_header_line(line: str, line_number: int) -> None:
    """Reject block-shaped lines that would otherwise pass as opaque header text."""
    stripped = line.strip()
    if _NEAR_PROJECT_RE.match(stripped):
        raise InvalidProjectHeaderError(
            f"expected a Project line, found {stripped!r}", line_number
        )
    if stripped in _BLOCK_END_MARKERS or stripped.startswith(_SECTION_OPENERS):
        raise UnexpectedContentError(
            f"{stripped!r} outside of a Project or Global block", line_number
        )


def _parse_global(reader: LineReader) -> list[SectionBlock]:
    line = reader.read_significant()
    if not starts_global(line):
        raise UnexpectedContentError(
            f"expected Project or Global, found {line.strip()!r}", reader.line_number
        )
    start_line_number = reader.line_number

    sections = []
    while True:
        line = reader.peek_significant()
        if line is None:
            raise UnexpectedEndOfInputError(
                f"Global block opened on line {start_line_number} is missing EndGlobal",
                reader.line_number,
            )
        if not line[0].isspace():
            break
        sections.append(SectionBlock.parse(reader, GLOBAL_SECTION))

    line = reader.read_significant()
    if line.strip() != "EndGlobal":
        raise MalformedSectionError(
            f"expected EndGlobal, found {line.strip()!r}", reader.line_number
        )

    trailing = reader.peek_significant()
    if trailing is not None:
        reader.read()
        raise UnexpectedContentError(
            f"unexpected content after EndGlobal: {trailing.strip()!r}", reader.line_number
        )
    return sections


def loads(text: str) -> SolutionDocument:
    return SolutionDocument.parse(text)


def dumps(document: SolutionDocument, config: FormatConfig | None = None) -> str:
    return document.get_text(config)


def load(path: str | Path, config: FormatConfig | None = None) -> SolutionDocument:
    """Read and parse a .sln file."""
    config = config or FormatConfig()
    with open(path, "r", encoding=config.encoding) as f:
        return SolutionDocument.parse(f)


def dump(document: SolutionDocument, path: str | Path, config: FormatConfig | None = None) -> None:
    """Write a document to `path` exactly as `get_text` renders it."""
    config = config or FormatConfig()
    encoding = "utf-8-sig" if config.write_bom else "utf-8"
    with open(path, "w", encoding=encoding, newline="") as f:
        f.write(document.get_text(config))
