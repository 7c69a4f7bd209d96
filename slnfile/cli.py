"""slnfile CLI - inspect and normalise Visual Studio solution files."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from slnfile.config import FormatConfig
from slnfile.errors import SolutionFileError
from slnfile.sln.solution import SolutionDocument, dump, load


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    from rich.console import Console
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _load(path: str) -> SolutionDocument:
    try:
        return load(path)
    except SolutionFileError as e:
        raise click.ClickException(f"{path}: {e}") from e


@click.group()
def cli() -> None:
    """slnfile - Read, check and rewrite .sln solution files."""
    pass


@cli.command("show")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print a JSON summary instead of a table")
@click.option("--verbose", is_flag=True, help="Log parser progress to stderr")
def show_cmd(path: str, as_json: bool, verbose: bool) -> None:
    """List the projects declared in a solution."""
    _configure_logging(verbose)
    document = _load(path)

    if as_json:
        from slnfile.output import build_summary

        try:
            summary = build_summary(document, source=path)
        except SolutionFileError as e:
            raise click.ClickException(f"{path}: {e}") from e
        click.echo(json.dumps(summary, indent=2))
        return

    from rich.console import Console
    from rich.table import Table

    table = Table(title=f"Solution: {Path(path).name}", show_edge=False)
    table.add_column("Name", style="bold")
    table.add_column("Type")
    table.add_column("Path")
    table.add_column("GUID")

    for project in document.projects:
        table.add_row(
            project.name,
            project.project_type,
            project.normalised_path,
            str(project.project_guid).upper(),
        )

    console = Console()
    console.print(table)
    if document.solution_configurations:
        console.print(f"[bold]Configurations:[/bold] {', '.join(document.solution_configurations)}")


@cli.command("format")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", "output_path", default=None, help="Write the result to this file")
@click.option("--check", is_flag=True, help="Exit with status 1 if the file is not canonical")
@click.option("--crlf", is_flag=True, help="Use CRLF line endings")
@click.option("--bom", is_flag=True, help="Write a UTF-8 byte order mark")
@click.option("--verbose", is_flag=True, help="Log parser progress to stderr")
def format_cmd(
    path: str,
    output_path: str | None,
    check: bool,
    crlf: bool,
    bom: bool,
    verbose: bool,
) -> None:
    """Rewrite a solution in canonical form (tabs, uppercase GUIDs, EndProject)."""
    _configure_logging(verbose)
    config = FormatConfig(newline="\r\n" if crlf else "\n", write_bom=bom)
    document = _load(path)
    text = document.get_text(config)

    if check:
        with open(path, "r", encoding=config.encoding, newline="") as f:
            original = f.read()
        if original != text:
            click.echo(f"{path}: would reformat", err=True)
            raise click.exceptions.Exit(1)
        return

    if output_path is None:
        click.echo(text, nl=False)
        return

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    dump(document, output, config)


@cli.command("order")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--verbose", is_flag=True, help="Log parser progress to stderr")
def order_cmd(path: str, verbose: bool) -> None:
    """Print projects in dependency build order."""
    from slnfile.graph.project_graph import ProjectGraph

    _configure_logging(verbose)
    document = _load(path)
    try:
        graph = ProjectGraph.from_document(document)
        order = graph.build_order()
    except SolutionFileError as e:
        raise click.ClickException(str(e)) from e

    for i, key in enumerate(order, start=1):
        click.echo(f"{i}. {graph.name_of(key)}")


if __name__ == "__main__":
    cli()
