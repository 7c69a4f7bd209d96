"""JSON-ready summaries of parsed solutions."""

from __future__ import annotations

from typing import Any

from slnfile.graph.project_graph import ProjectGraph
from slnfile.sln.guid import format_guid
from slnfile.sln.section import SectionBlock
from slnfile.sln.solution import SolutionDocument


def _section_dict(section: SectionBlock) -> dict[str, Any]:
    return {
        "name": section.name,
        "type": section.section_type.value,
        "properties": [{"name": e.name, "value": e.value} for e in section],
    }


def _count_project_types(document: SolutionDocument) -> dict[str, int]:
    counts: dict[str, int] = {}
    for project in document.buildable_projects:
        counts[project.project_type] = counts.get(project.project_type, 0) + 1
    return counts


def build_summary(document: SolutionDocument, source: str | None = None) -> dict[str, Any]:
    """Build a dict describing the document, suitable for json.dumps."""
    graph = ProjectGraph.from_document(document)
    nested = {format_guid(c): format_guid(p) for c, p in document.nested_projects.items()}

    projects = []
    for project in document.projects:
        key = format_guid(project.project_guid)
        projects.append({
            "name": project.name,
            "path": project.normalised_path,
            "guid": key,
            "type_guid": format_guid(project.project_type_guid),
            "type": project.project_type,
            "is_folder": project.is_solution_folder,
            "parent": nested.get(key),
            "dependencies": graph.dependencies_of(key),
            "sections": [_section_dict(s) for s in project.sections],
        })

    return {
        "metadata": {
            "source": source,
            "format_version": document.format_version,
            "visual_studio_version": document.visual_studio_version,
            "minimum_visual_studio_version": document.minimum_visual_studio_version,
        },
        "stats": {
            "projects": len(document.buildable_projects),
            "folders": len(document.projects) - len(document.buildable_projects),
            "global_sections": len(document.global_sections),
            "project_types": _count_project_types(document),
        },
        "configurations": document.solution_configurations,
        "projects": projects,
        "global_sections": [_section_dict(s) for s in document.global_sections],
    }
