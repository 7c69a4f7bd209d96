"""Project dependency and folder graph backed by networkx.DiGraph."""

from __future__ import annotations

import logging
import uuid

import networkx as nx

from slnfile.errors import DependencyCycleError
from slnfile.sln.guid import coerce_guid, format_guid
from slnfile.sln.solution import SolutionDocument

logger = logging.getLogger(__name__)

DEPENDS_ON = "DEPENDS_ON"
CONTAINS = "CONTAINS"


class ProjectGraph:
    """Wrapper around networkx.DiGraph keyed by canonical project GUID strings.

    DEPENDS_ON edges run from a project to the project it needs built first.
    CONTAINS edges run from a solution folder to the entries nested in it.
    """

    def __init__(self) -> None:
        self.graph = nx.DiGraph()

    @classmethod
    def from_document(cls, document: SolutionDocument) -> ProjectGraph:
        pg = cls()
        for project in document.projects:
            pg.graph.add_node(
                format_guid(project.project_guid),
                name=project.name,
                path=project.normalised_path,
                project_type=project.project_type,
                is_folder=project.is_solution_folder,
            )

        for project in document.projects:
            source = format_guid(project.project_guid)
            for dependency in project.dependencies:
                target = format_guid(dependency)
                if target not in pg.graph:
                    logger.warning(f"{project.name} depends on unknown project {target}")
                    continue
                pg.graph.add_edge(source, target, edge_type=DEPENDS_ON)

        for child, parent in document.nested_projects.items():
            child_key, parent_key = format_guid(child), format_guid(parent)
            if child_key not in pg.graph or parent_key not in pg.graph:
                logger.warning(f"Skipping nesting of unknown project {child_key} in {parent_key}")
                continue
            pg.graph.add_edge(parent_key, child_key, edge_type=CONTAINS)

        return pg

    def _neighbours(self, guid: uuid.UUID | str, edge_type: str) -> list[str]:
        key = format_guid(coerce_guid(guid))
        if key not in self.graph:
            return []
        return [
            target for target in self.graph.successors(key)
            if self.graph.edges[key, target]["edge_type"] == edge_type
        ]

    def dependencies_of(self, guid: uuid.UUID | str) -> list[str]:
        return self._neighbours(guid, DEPENDS_ON)

    def children_of(self, folder_guid: uuid.UUID | str) -> list[str]:
        return self._neighbours(folder_guid, CONTAINS)

    def name_of(self, key: str) -> str:
        return self.graph.nodes[key]["name"]

    def build_order(self) -> list[str]:
        """Project GUIDs ordered so that every dependency precedes its dependents.

        Solution folders are not built and are left out. Ties keep document order.
        """
        position = {key: i for i, key in enumerate(self.graph.nodes)}
        buildable = [key for key, data in self.graph.nodes(data=True) if not data["is_folder"]]

        dependencies = nx.DiGraph()
        dependencies.add_nodes_from(buildable)
        for source, target, data in self.graph.edges(data=True):
            if data["edge_type"] != DEPENDS_ON:
                continue
            if source in dependencies and target in dependencies:
                # Reversed so a dependency comes before the project needing it
                dependencies.add_edge(target, source)

        try:
            return list(nx.lexicographical_topological_sort(dependencies, key=position.get))
        except nx.NetworkXUnfeasible as e:
            cycle = [u for u, _ in nx.find_cycle(dependencies)]
            names = " -> ".join(self.name_of(key) for key in cycle)
            raise DependencyCycleError(f"dependency cycle: {names}", cycle=cycle) from e
