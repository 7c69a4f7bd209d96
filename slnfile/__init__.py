"""slnfile - Parse and write Visual Studio solution (.sln) files."""

import logging

from slnfile.config import FormatConfig, PropertyEntry, SectionType
from slnfile.errors import (
    EmptyFieldError,
    InvalidGuidError,
    InvalidProjectHeaderError,
    MalformedSectionError,
    SolutionFileError,
    UnexpectedEndOfInputError,
)
from slnfile.sln.project import ProjectBlock
from slnfile.sln.section import SectionBlock
from slnfile.sln.solution import SolutionDocument, dump, dumps, load, loads

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "EmptyFieldError",
    "FormatConfig",
    "InvalidGuidError",
    "InvalidProjectHeaderError",
    "MalformedSectionError",
    "ProjectBlock",
    "PropertyEntry",
    "SectionBlock",
    "SectionType",
    "SolutionDocument",
    "SolutionFileError",
    "UnexpectedEndOfInputError",
    "dump",
    "dumps",
    "load",
    "loads",
]
