"""
UI components module for the codeinv CLI.

Renders scan, type, read and export results as Rich tables and panels.
"""

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from codeinv.core.file_scanner import FileRecord, TypeSummary
from codeinv.services.export_service import ExportPreview
from codeinv.services.inventory_service import FileContent

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_size(size_bytes: int) -> str:
    """Format a byte count for display, e.g. 1536 -> '1.5 KB'."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    size = float(size_bytes)
    for unit in _SIZE_UNITS[1:-1]:
        size /= 1024
        if size < 1024:
            return f"{size:.1f} {unit}"
    return f"{size / 1024:.1f} {_SIZE_UNITS[-1]}"


def render_file_table(console: Console, root: str, files: list[FileRecord]) -> None:
    """
    Render the files of one scan.

    Args:
        console: Rich Console instance for output.
        root: Scanned root, shown in the title.
        files: Records in scan order.
    """
    table = Table(title=f"Files in {root}", border_style="blue")
    table.add_column("Path", style="cyan")
    table.add_column("Language", style="green")
    table.add_column("Size", justify="right", style="magenta")

    for record in files:
        table.add_row(record.relative_path, record.language, format_size(record.size_bytes))

    console.print(table)
    total = sum(r.size_bytes for r in files)
    console.print(f"[bold]{len(files)}[/bold] files, {format_size(total)}")


def render_type_table(console: Console, types: list[TypeSummary]) -> None:
    """Render per-extension statistics."""
    table = Table(title="File Types", border_style="blue")
    table.add_column("Extension", style="cyan", no_wrap=True)
    table.add_column("Language", style="green")
    table.add_column("Files", justify="right")
    table.add_column("Total Size", justify="right", style="magenta")

    for summary in types:
        table.add_row(
            summary.extension,
            summary.language,
            str(summary.file_count),
            format_size(summary.total_size_bytes),
        )

    console.print(table)


def render_read_table(console: Console, files: list[FileContent]) -> None:
    """Render the outcome of a batch read, one row per file."""
    table = Table(title="File Contents", border_style="blue")
    table.add_column("Path", style="cyan")
    table.add_column("Lines", justify="right")
    table.add_column("Status")

    for item in files:
        status = f"[red]{item.error}[/red]" if item.error else "[green]ok[/green]"
        table.add_row(item.relative_path, str(item.line_count), status)

    console.print(table)


def render_file_content(console: Console, item: FileContent) -> None:
    """Render one file's content with syntax highlighting."""
    lexer = item.ext.lstrip(".") or "text"
    syntax = Syntax(item.content, lexer, line_numbers=True, word_wrap=True)
    console.print(
        Panel(
            syntax,
            title=f"[bold cyan]{item.relative_path}[/bold cyan]",
            subtitle=f"{item.line_count} lines",
            border_style="blue",
        )
    )


def render_export_summary(console: Console, preview: ExportPreview) -> None:
    """Render the per-directory breakdown of an export."""
    allocation = preview.allocation

    table = Table(title="Export Allocation", border_style="blue")
    table.add_column("Directory", style="cyan")
    table.add_column("Ratio", justify="right")
    table.add_column("Pages", justify="right")
    table.add_column("Lines", justify="right")
    table.add_column("Files", justify="right")

    for item in allocation.allocations:
        table.add_row(
            item.path,
            f"{item.ratio:g}",
            str(item.allocated_pages),
            f"{item.allocated_lines}/{item.total_lines}",
            f"{item.allocated_files}/{item.total_files}",
        )

    console.print(table)

    summary = Table.grid(padding=(0, 2))
    summary.add_column(style="bold")
    summary.add_column()
    summary.add_row("Total lines:", str(len(allocation.lines)))
    summary.add_row("Total pages:", str(allocation.total_pages))
    summary.add_row("Files read:", str(preview.file_count))
    if allocation.is_truncated:
        summary.add_row("Truncated:", "[yellow]yes[/yellow]")
    console.print(Panel(summary, title="Summary", border_style="green", expand=False))

    if preview.failed_files:
        console.print("\n[bold red]Failed Files:[/bold red]")
        for item in preview.failed_files[:5]:
            console.print(f"  - {item.relative_path}: {item.error}")
        if len(preview.failed_files) > 5:
            console.print(f"  ... and {len(preview.failed_files) - 5} more")

    for error in preview.scan_errors:
        console.print(f"[bold red]Error:[/bold red] {error}")
