"""
Banner and UI components for Lead Mapper
"""

import logging
from typing import Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from core._version import __version__
from core.models import ExtractedRecord, FileResult, FilterStats

# Global console instance
console = Console()


TAGLINE = "Map, clean and split lead files for dialer import"


def setup_logging(level: str = "WARNING"):
    """Route library logging through the shared Rich console."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, rich_tracebacks=True)],
        force=True,
    )


def show_banner():
    """Display banner"""
    panel = Panel(
        f"[bold cyan]LEAD MAPPER[/bold cyan]\n\n[dim]{TAGLINE}[/dim]\n[dim]v{__version__}[/dim]",
        border_style="cyan",
        padding=(1, 3),
    )
    console.print(panel)


def show_step(step: int, title: str, description: str = ""):
    """Show a step header"""
    console.print()
    header = f"[bold cyan]Step {step}: {title}[/bold cyan]"
    if description:
        console.print(f"{header}\n[dim]{description}[/dim]")
    else:
        console.print(header)


def show_success(message: str):
    console.print(f"☉ [green]{message}[/green]")


def show_error(message: str):
    console.print(f"☿ [red]{message}[/red]")


def show_warning(message: str):
    console.print(f"▲ [yellow]{message}[/yellow]")


def show_info(message: str):
    console.print(f"◈ [blue]{message}[/blue]")


def show_processing_summary(results: Sequence[FileResult]):
    """One row per file: status, sheet, records, mapped fields or error message."""
    table = Table(title="Processing Summary", show_header=True, header_style="bold cyan")
    table.add_column("File", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Sheet")
    table.add_column("Records", justify="right")
    table.add_column("Details", overflow="fold")

    for result in results:
        if result.ok:
            status = "[green]☉ success[/green]"
            details = result.message
            if result.mapped_fields:
                details += f" · {', '.join(result.mapped_fields)}"
        else:
            status = "[red]☿ error[/red]"
            details = f"[red]{result.message}[/red]"
        table.add_row(
            result.file_name,
            status,
            result.selected_sheet or "-",
            str(result.record_count),
            details,
        )

    console.print(table)


def show_preview_table(records: Sequence[ExtractedRecord], limit: int = 5):
    """Display preview of extracted records"""
    table = Table(show_header=True, header_style="bold cyan")
    for header in ("Name", "Phone", "Address", "Postal Code", "City", "Source"):
        table.add_column(header, overflow="fold")

    for record in records[:limit]:
        table.add_row(
            record.name[:30], record.phone, record.address[:30],
            record.postal_code, record.city[:20], record.source_file,
        )

    console.print(table)


def show_filter_summary(stats: FilterStats):
    """Show filter statistics"""
    kept = (stats.filtered_records / stats.total_records * 100) if stats.total_records else 0
    panel = Panel(
        f"[bold]Filter Summary[/bold]\n\n"
        f"Total records: [white]{stats.total_records}[/white]\n"
        f"☉ Kept: [green]{stats.filtered_records}[/green] ({kept:.0f}%)\n"
        f"Removed (no phone): [yellow]{stats.removed_by_null_phone_filter}[/yellow]\n"
        f"Removed (not mobile): [yellow]{stats.removed_by_portable_filter}[/yellow]\n"
        f"Removed (generic postal code): [yellow]{stats.removed_by_postal_code_filter}[/yellow]",
        border_style="cyan",
        padding=(1, 2)
    )
    console.print(panel)


def show_export_summary(records_exported: int, paths: Sequence[str]):
    """Show export summary"""
    files = "\n".join(f"  [cyan]{p}[/cyan]" for p in paths)
    panel = Panel(
        f"[bold green]Export Complete![/bold green]\n\n"
        f"Records exported: [white]{records_exported}[/white]\n"
        f"Files: [white]{len(paths)}[/white]\n{files}",
        border_style="green",
        padding=(1, 2)
    )
    console.print(panel)
