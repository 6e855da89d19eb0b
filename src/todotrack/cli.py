"""
Command-line interface.

Usage:
    todotrack files                 # Files selected by the config filter
    todotrack list                  # All annotations
    todotrack list --unreported     # Only annotations without an issue
    todotrack report --dry-run      # Preview what would be filed
    todotrack report                # File new annotations and stamp ids
    todotrack purge                 # Remove annotations whose issue closed
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

import typer

from todotrack.core.errors import ConfigurationError, TrackerError
from todotrack.core.project import Project
from todotrack.core.results import BatchResult
from todotrack.todos.manager import TodoManager
from todotrack.todos.reporter import AnnotationReporter
from todotrack.trackers import create_tracker
from todotrack.trackers.base import IssueTracker

app = typer.Typer(
    help="Track TODO comments as issues.",
    no_args_is_help=True,
    add_completion=False,
)


class OutputFormat(str, Enum):
    text = "text"
    markdown = "markdown"
    json = "json"


def _fail(message: str, code: int) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(code)


def _project(ctx: typer.Context, dry_run: bool = False) -> Project:
    try:
        return Project.load(ctx.obj.get("root"), dry_run=dry_run)
    except ConfigurationError as e:
        raise _fail(str(e), 2) from e


def _tracker(project: Project) -> IssueTracker:
    try:
        return create_tracker(project.settings.tracker)
    except ConfigurationError as e:
        raise _fail(str(e), 2) from e


def _run(ctx: typer.Context, dry_run: bool, purge: bool) -> None:
    project = _project(ctx, dry_run)
    try:
        if dry_run and not purge:
            # A dry-run report only reads files
            results = TodoManager(project).report()
        else:
            with _tracker(project) as tracker:
                manager = TodoManager(project, tracker)
                results = manager.purge() if purge else manager.report()
    except TrackerError as e:
        raise _fail(str(e), 1) from e

    _print_results(results, dry_run)
    if not results.success:
        raise typer.Exit(1)


def _print_results(results: BatchResult, dry_run: bool) -> None:
    for result in results:
        if result.is_error():
            typer.echo(result.message, err=True)
        elif result.changed or dry_run:
            typer.echo(result.message)
    if dry_run and results.diff:
        typer.echo(results.diff)


@app.callback()
def main(
    ctx: typer.Context,
    root: Path | None = typer.Option(
        None,
        "--root",
        help="Project root (defaults to the enclosing git repository)",
        file_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Find TODO comments, report them as issues and clean them up once closed."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"root": root}


@app.command("files")
def files_cmd(ctx: typer.Context):
    """Print all files selected by the config."""
    project = _project(ctx)
    for path in TodoManager(project).files():
        typer.echo(path.as_posix())


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    reported: bool = typer.Option(False, "--reported", "-r", help="Reported annotations"),
    unreported: bool = typer.Option(False, "--unreported", "-u", help="Unreported annotations"),
    output_format: OutputFormat = typer.Option(
        OutputFormat.text, "--format", "-f", help="Output format"
    ),
):
    """List annotations. Without flags, both reported and unreported are shown."""
    if not reported and not unreported:
        reported = unreported = True

    project = _project(ctx)
    found = TodoManager(project).list_annotations(reported=reported, unreported=unreported)
    output = AnnotationReporter(found).render(output_format.value)
    if output:
        typer.echo(output)


@app.command("report")
def report_cmd(
    ctx: typer.Context,
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Show what would be reported"),
):
    """Report every new annotation and stamp the issue id into the source."""
    _run(ctx, dry_run, purge=False)


@app.command("purge")
def purge_cmd(
    ctx: typer.Context,
    dry_run: bool = typer.Option(False, "--dry-run", "-n", help="Show what would be removed"),
):
    """Remove annotations whose issue has been closed."""
    _run(ctx, dry_run, purge=True)
