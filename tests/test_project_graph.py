"""Tests for ProjectGraph."""

from __future__ import annotations

import os

import pytest

from slnfile.errors import DependencyCycleError
from slnfile.graph.project_graph import CONTAINS, DEPENDS_ON, ProjectGraph
from slnfile.sln.solution import load, loads

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")

CSHARP = "{FAE04EC0-301F-11D3-BF4B-00C04F79EFBC}"
APP = "{A1B2C3D4-0000-4000-8000-000000000001}"
CORE = "{A1B2C3D4-0000-4000-8000-000000000002}"


def _project(name: str, guid: str, depends_on: list[str] | None = None) -> str:
    lines = [f'Project("{CSHARP}") = "{name}", "{name}.csproj", "{guid}"']
    if depends_on:
        lines.append("\tProjectSection(ProjectDependencies) = postProject")
        lines.extend(f"\t\t{d} = {d}" for d in depends_on)
        lines.append("\tEndProjectSection")
    lines.append("EndProject")
    return "\n".join(lines) + "\n"


class TestProjectGraph:
    def test_nodes_from_document(self):
        pg = ProjectGraph.from_document(load(os.path.join(FIXTURES_DIR, "simple.sln")))

        assert set(pg.graph.nodes) == {APP, CORE}
        assert pg.graph.nodes[APP]["name"] == "App"
        assert pg.graph.nodes[APP]["path"] == "App/App.csproj"
        assert pg.graph.nodes[APP]["project_type"] == "C#"

    def test_dependency_edges(self):
        pg = ProjectGraph.from_document(load(os.path.join(FIXTURES_DIR, "simple.sln")))

        assert pg.dependencies_of(APP) == [CORE]
        assert pg.dependencies_of(CORE) == []
        assert pg.graph.edges[APP, CORE]["edge_type"] == DEPENDS_ON

    def test_build_order(self):
        pg = ProjectGraph.from_document(load(os.path.join(FIXTURES_DIR, "simple.sln")))
        assert [pg.name_of(k) for k in pg.build_order()] == ["Core", "App"]

    def test_nested_projects(self):
        pg = ProjectGraph.from_document(load(os.path.join(FIXTURES_DIR, "legacy.sln")))
        folder = "{B0000000-0000-4000-8000-00000000000C}"

        children = pg.children_of(folder)
        assert sorted(pg.name_of(k) for k in children) == ["Data", "Web"]
        assert pg.graph.edges[folder, children[0]]["edge_type"] == CONTAINS

    def test_build_order_skips_folders(self):
        pg = ProjectGraph.from_document(load(os.path.join(FIXTURES_DIR, "legacy.sln")))
        assert [pg.name_of(k) for k in pg.build_order()] == ["Data", "Web"]

    def test_independent_projects_keep_document_order(self):
        guids = [f"{{00000000-0000-4000-8000-00000000000{i}}}" for i in range(1, 4)]
        text = "".join(_project(n, g) for n, g in zip(["C", "A", "B"], guids))
        pg = ProjectGraph.from_document(loads(text))
        assert [pg.name_of(k) for k in pg.build_order()] == ["C", "A", "B"]

    def test_cycle(self):
        text = _project("App", APP, [CORE]) + _project("Core", CORE, [APP])
        pg = ProjectGraph.from_document(loads(text))

        with pytest.raises(DependencyCycleError) as exc:
            pg.build_order()
        assert set(exc.value.cycle) == {APP, CORE}

    def test_unknown_dependency_ignored(self):
        missing = "{DEADBEEF-0000-4000-8000-000000000000}"
        pg = ProjectGraph.from_document(loads(_project("App", APP, [missing])))
        assert pg.dependencies_of(APP) == []

    def test_unknown_node(self):
        pg = ProjectGraph()
        assert pg.dependencies_of(APP) == []
        assert pg.children_of(APP) == []
