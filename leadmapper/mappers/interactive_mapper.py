"""
Interactive field mapper

Terminal UI for assigning one or more source columns to each canonical field.
"""

from typing import List, Optional, Sequence

from rich.prompt import Confirm, Prompt
from rich.table import Table

from core.models import FieldKind, FieldMapping, TabularSource
from ..banner import console


# Friendly display names for the 5 canonical fields
FRIENDLY = {
    FieldKind.NAME: 'Name',
    FieldKind.PHONE: 'Phone',
    FieldKind.ADDRESS: 'Address',
    FieldKind.POSTAL_CODE: 'Postal Code',
    FieldKind.CITY: 'City',
}

HINTS = {
    FieldKind.NAME: "e.g. Nom + Prénom",
    FieldKind.PHONE: "normalized to 0XXXXXXXXX",
    FieldKind.ADDRESS: "street, number...",
    FieldKind.POSTAL_CODE: "e.g. 35200",
    FieldKind.CITY: "e.g. Rennes",
}


class InteractiveMapper:
    """
    Interactive field mapping with Rich UI.

    Example:
        mapper = InteractiveMapper(table)
        mapping = mapper.map(auto_mapping)
    """

    def __init__(self, table: TabularSource, preview_rows: int = 3):
        """
        Initialize interactive mapper.

        Args:
            table: Parsed source table (headers + a few rows are shown)
            preview_rows: Number of sample values shown per column
        """
        self.table = table
        self.headers = list(table.headers)
        self.preview_rows = preview_rows

    def map(self, auto_mapping: Optional[FieldMapping] = None) -> FieldMapping:
        """
        Interactively map fields.

        Args:
            auto_mapping: Optional suggested mapping used as defaults

        Returns:
            FieldMapping with user-selected columns
        """
        title = self.table.name + (f" · {self.table.sheet}" if self.table.sheet else "")
        console.print()
        console.rule(f"[bold cyan]Field Mapping[/bold cyan] [dim]{title}[/dim]", style="cyan")
        console.print("[dim]Enter column [bold]#[/bold] or names, comma separated · "
                      "Enter = keep suggestion · [bold]-[/bold] = none[/dim]")
        console.print()
        self._show_source_columns()

        if auto_mapping and not auto_mapping.is_empty():
            console.print()
            self._show_mapping(auto_mapping, "Suggested Mapping")
            if Confirm.ask("\n[cyan]Use suggested mapping?[/cyan]", default=True):
                return auto_mapping

        mapping = FieldMapping()
        for step, kind in enumerate(FieldKind, 1):
            default = auto_mapping.headers_for(kind) if auto_mapping else ()
            for header in self._map_field(kind, default, f"{step}/{len(FRIENDLY)}"):
                mapping = mapping.add(kind, header)

        console.print()
        self._show_mapping(mapping, "Mapping Summary")
        return mapping

    # ── Internal helpers ──────────────────────────────────────────────────────

    def _show_source_columns(self):
        table = Table(title="Source Columns", show_header=True)
        table.add_column("#", style="dim", width=4)
        table.add_column("Column Name", style="cyan bold", width=25)
        table.add_column("Sample Values", style="white", overflow="fold")

        for i, header in enumerate(self.headers, 1):
            samples = []
            for row in self.table.rows[:self.preview_rows]:
                value = row[i - 1] if i - 1 < len(row) else ''
                if value:
                    samples.append(value[:40] + ("..." if len(value) > 40 else ""))
            sample_text = " | ".join(samples) if samples else "[dim]<empty>[/dim]"
            table.add_row(f"{i}.", header or "[dim]<blank>[/dim]", sample_text)

        console.print(table)

    def _show_mapping(self, mapping: FieldMapping, title: str):
        table = Table(title=f"[bold cyan]{title}[/bold cyan]", show_header=True, border_style="cyan")
        table.add_column("Field", style="cyan bold", width=14)
        table.add_column("Source Columns", style="white")

        for kind, label in FRIENDLY.items():
            headers = mapping.headers_for(kind)
            table.add_row(label, " + ".join(headers) if headers else "[dim]-[/dim]")

        console.print(table)

    def resolve(self, user_input: str) -> List[str]:
        """
        Resolve "1, 3" / "Nom, Prénom" / "nom" to header names.

        Unknown entries are reported and skipped.
        """
        selected: List[str] = []
        for token in (t.strip() for t in user_input.split(',')):
            if not token:
                continue

            if token.isdigit():
                index = int(token) - 1
                if 0 <= index < len(self.headers):
                    selected.append(self.headers[index])
                else:
                    console.print(f"  [red]☿ Invalid — must be 1–{len(self.headers)}[/red]")
                continue

            if token in self.headers:
                selected.append(token)
                continue

            matches = [h for h in self.headers if token.lower() in h.lower()]
            if len(matches) == 1:
                selected.append(matches[0])
            elif matches:
                console.print(f"  [yellow]Ambiguous '{token}':[/yellow] {', '.join(matches[:5])}")
            else:
                console.print(f"  [red]☿ Not found:[/red] '{token}'")

        return list(dict.fromkeys(selected))

    def _map_field(self, kind: FieldKind, default: Sequence[str], step: str) -> List[str]:
        console.print(f"[bold cyan]{FRIENDLY[kind]}[/bold cyan] [dim]({step})[/dim]  [dim]{HINTS[kind]}[/dim]")

        default_text = ", ".join(default)
        if default_text:
            console.print(f"  [green]☉ suggested:[/green] [white]{default_text}[/white]")

        user_input = Prompt.ask("  [cyan]→[/cyan]", default=default_text, show_default=False)

        if not user_input or user_input.strip() == '-':
            console.print("  [dim]— skipped[/dim]")
            return []

        selected = self.resolve(user_input)
        if selected:
            console.print(f"  [green]☉ {' + '.join(selected)}[/green]")
        return selected
