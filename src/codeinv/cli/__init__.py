"""
CLI for codeinv.

Provides command-line access to scanning, type detection, content reading
and ratio-allocated export listings.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from codeinv.cli.ui import (
    render_export_summary,
    render_file_content,
    render_file_table,
    render_read_table,
    render_type_table,
)
from codeinv.core.code_cleaner import CleanOptions
from codeinv.services import (
    ReadRequest,
    ServicesContainer,
    clean_options_from_config,
    create_services,
    parse_selections,
)

# Initialize Rich Console
console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="codeinv",
    help="Code inventory - scan, classify and read source trees",
    add_completion=False,
)

IgnoreOption = typer.Option(
    None, "--ignore", "-i", help="Extra ignore pattern (bare name or glob); repeatable"
)
NoGitignoreOption = typer.Option(
    False, "--no-gitignore", help="Do not read the root's .gitignore"
)
JsonOption = typer.Option(False, "--json", help="Print machine-readable JSON")


def _configure_logging(level_name: str, fmt: str) -> None:
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name}")
    logging.basicConfig(level=level, format=fmt)


def _scan_options(
    container: ServicesContainer, ignore: Optional[list[str]], no_gitignore: bool
) -> tuple[list[str], bool]:
    custom_ignore = list(container.config.scanning.custom_ignore) + list(ignore or [])
    use_gitignore = container.config.scanning.use_gitignore and not no_gitignore
    return custom_ignore, use_gitignore


def _echo_json(data: object) -> None:
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (.yaml, .yml or .json)"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"
    ),
):
    """Code inventory - scan, classify and read source trees."""
    try:
        container = create_services(config_path=config)
        _configure_logging(
            log_level or container.config.logging.level, container.config.logging.format
        )
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    ctx.obj = container


@app.command()
def scan(
    ctx: typer.Context,
    root: Path = typer.Argument(..., help="Directory to scan"),
    ignore: Optional[list[str]] = IgnoreOption,
    no_gitignore: bool = NoGitignoreOption,
    as_json: bool = JsonOption,
):
    """List the files of a directory with their language and size."""
    container: ServicesContainer = ctx.obj
    custom_ignore, use_gitignore = _scan_options(container, ignore, no_gitignore)

    result = container.inventory_service.scan_directory(root, custom_ignore, use_gitignore)
    if not result.success:
        console.print(f"[bold red]Error:[/bold red] {result.error}")
        raise typer.Exit(1)

    if as_json:
        _echo_json(result.to_dict())
        return

    if not result.files:
        console.print("[yellow]No files found.[/yellow]")
        return
    render_file_table(console, str(root), result.files)


@app.command("types")
def detect_types(
    ctx: typer.Context,
    roots: list[Path] = typer.Argument(..., help="Directories to aggregate"),
    ignore: Optional[list[str]] = IgnoreOption,
    no_gitignore: bool = NoGitignoreOption,
    as_json: bool = JsonOption,
):
    """Aggregate file counts and sizes per extension."""
    container: ServicesContainer = ctx.obj
    custom_ignore, use_gitignore = _scan_options(container, ignore, no_gitignore)

    result = container.inventory_service.detect_file_types(roots, custom_ignore, use_gitignore)
    if not result.success:
        console.print(f"[bold red]Error:[/bold red] {result.error}")
        raise typer.Exit(1)

    if as_json:
        _echo_json(result.to_dict())
        return

    if not result.types:
        console.print("[yellow]No file types found.[/yellow]")
        return
    render_type_table(console, result.types)


@app.command()
def read(
    ctx: typer.Context,
    root: Path = typer.Argument(..., help="Directory whose files are read"),
    ignore: Optional[list[str]] = IgnoreOption,
    no_gitignore: bool = NoGitignoreOption,
    show_content: bool = typer.Option(
        False, "--content", help="Print each file's content"
    ),
    as_json: bool = JsonOption,
):
    """Scan a directory and load every file's text content."""
    container: ServicesContainer = ctx.obj
    custom_ignore, use_gitignore = _scan_options(container, ignore, no_gitignore)
    service = container.inventory_service

    scan_result = service.scan_directory(root, custom_ignore, use_gitignore)
    if not scan_result.success:
        console.print(f"[bold red]Error:[/bold red] {scan_result.error}")
        raise typer.Exit(1)

    result = service.read_files_content(ReadRequest.from_record(r) for r in scan_result.files)
    if not result.success:
        console.print(f"[bold red]Error:[/bold red] {result.error}")
        raise typer.Exit(1)

    if as_json:
        _echo_json(result.to_dict())
        return

    if not result.files:
        console.print("[yellow]No files found.[/yellow]")
        return

    if show_content:
        for item in result.files:
            if item.error:
                console.print(f"[bold red]Error:[/bold red] {item.relative_path}: {item.error}")
            else:
                render_file_content(console, item)
    else:
        render_read_table(console, result.files)


@app.command()
def export(
    ctx: typer.Context,
    selections: list[str] = typer.Argument(
        ..., help="Directories to export, each as PATH or PATH:RATIO"
    ),
    lines_per_page: Optional[int] = typer.Option(
        None, "--lines-per-page", help="Lines printed on one page"
    ),
    max_pages: Optional[int] = typer.Option(
        None, "--max-pages", help="Page budget for the whole listing"
    ),
    keep_comments: bool = typer.Option(
        False, "--keep-comments", help="Do not strip comments"
    ),
    as_json: bool = JsonOption,
):
    """Print a cleaned listing of directories, split by ratio over a page budget."""
    container: ServicesContainer = ctx.obj

    try:
        parsed = parse_selections(selections)
        options: CleanOptions = clean_options_from_config(container.config.export)
        if keep_comments:
            options.remove_comments = False

        preview = container.export_service.prepare(
            parsed,
            lines_per_page=lines_per_page,
            max_pages=max_pages,
            clean_options=options,
        )
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if as_json:
        _echo_json(preview.to_dict())
        return

    for line in preview.allocation.lines:
        typer.echo(line)
    render_export_summary(err_console, preview)


if __name__ == "__main__":
    app()
