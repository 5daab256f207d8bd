"""Rich output for the CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from rich.console import Console
from rich.table import Table

console = Console()


def report_error(message: Any) -> None:
    console.print(f"[bold red]❌ {message}[/]")


def render_summary(source: Path, output: Path, page_format: str, pages: int, size: int) -> None:
    """Print where a rendered PDF went and what it contains."""
    table = Table(title="📄 Rendered", show_header=False, border_style="green")
    table.add_column("", style="bold")
    table.add_column("")
    table.add_row("Source", str(source))
    table.add_row("Output", f"[bold green]{output}[/]")
    table.add_row("Format", page_format)
    table.add_row("Pages", str(pages))
    table.add_row("Size", f"{size:,} bytes")
    console.print(table)


def settings_table(settings: Mapping[str, Any], title: str = "⚙️  PDF settings") -> None:
    """One row per setting, grouped by section."""
    table = Table(title=title, show_header=True, border_style="blue")
    table.add_column("Section", style="cyan")
    table.add_column("Setting", style="green")
    table.add_column("Value")

    for section, values in settings.items():
        if not isinstance(values, Mapping):
            table.add_row("", section, str(values))
            continue
        for name, value in values.items():
            if isinstance(value, list):
                value = ", ".join(map(str, value)) or "-"
            table.add_row(section, name, "-" if value is None else str(value))
            section = ""

    console.print(table)


def validation_table(errors: list[Mapping[str, Any]]) -> None:
    """Print pydantic validation errors as ``location / message`` rows."""
    table = Table(title="❌ Invalid settings", show_header=True, border_style="red")
    table.add_column("Setting", style="yellow", no_wrap=True)
    table.add_column("Problem")
    for error in errors:
        table.add_row(".".join(map(str, error["loc"])), error["msg"])
    console.print(table)


def fonts_table(font_families: Mapping[str, str], core_fonts: Mapping[str, str]) -> None:
    """Print font aliases with their CSS stacks and the core font drawn."""
    table = Table(title="🔤 Font aliases", show_header=True, border_style="blue")
    table.add_column("Alias", style="cyan")
    table.add_column("font-family", style="green")
    table.add_column("Core font", style="magenta")

    for alias, stack in font_families.items():
        table.add_row(alias, stack, core_fonts.get(alias, ""))

    console.print(table)
