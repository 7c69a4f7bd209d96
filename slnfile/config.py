"""Core data types and configuration for solution files."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SectionType(str, Enum):
    PRE_PROJECT = "preProject"
    POST_PROJECT = "postProject"
    PRE_SOLUTION = "preSolution"
    POST_SOLUTION = "postSolution"

    @property
    def keyword(self) -> str:
        """Block keyword used for sections of this type."""
        if self in (SectionType.PRE_PROJECT, SectionType.POST_PROJECT):
            return PROJECT_SECTION
        return GLOBAL_SECTION


PROJECT_SECTION = "ProjectSection"
GLOBAL_SECTION = "GlobalSection"


@dataclass(frozen=True)
class PropertyEntry:
    """A single `name = value` line inside a section."""
    name: str
    value: str


@dataclass
class FormatConfig:
    indent: str = "\t"
    newline: str = "\n"
    encoding: str = "utf-8-sig"
    write_bom: bool = False


# Known project type GUIDs
CSHARP_GUID = "FAE04EC0-301F-11D3-BF4B-00C04F79EFBC"
CSHARP_SDK_GUID = "9A19103F-16F7-4668-BE54-9A1E7A4F7556"
VBNET_GUID = "F184B08F-C81C-45F6-A57F-5ABD9991F28F"
VBNET_SDK_GUID = "778DAE3C-4631-46EA-AA77-85C1314464D9"
FSHARP_GUID = "F2A71F9B-5D33-465A-A702-920D77279786"
FSHARP_SDK_GUID = "6EC3EE1D-3C4E-46DD-8F32-0CC8E7565705"
CPP_GUID = "8BC9CEB8-8B4A-11D0-8D11-00A0C91BC942"
SOLUTION_FOLDER_GUID = "2150E333-8FDC-42A3-9474-1A3956D46DE8"

PROJECT_TYPES = {
    CSHARP_GUID: "C#",
    CSHARP_SDK_GUID: "C#",
    VBNET_GUID: "VB.NET",
    VBNET_SDK_GUID: "VB.NET",
    FSHARP_GUID: "F#",
    FSHARP_SDK_GUID: "F#",
    CPP_GUID: "C++",
    SOLUTION_FOLDER_GUID: "Solution Folder",
}
