"""Technologies and version CLI commands."""

from rich.table import Table

from sanca.models.technology import Technology

from .deps import cli_module
from .shared import app, console, get_version


@app.command()
def technologies() -> None:
    """List the technologies that can be passed to --technologies."""
    supported = set(cli_module().create_default_registry().technologies())
    table = Table(title="Technologies")
    table.add_column("Value", style="cyan")
    table.add_column("Name")
    table.add_column("Scan types", style="dim")
    for technology in Technology.selectable():
        if technology not in supported:
            continue
        scans = ", ".join(scan_type.value for scan_type in technology.scans())
        table.add_row(technology.value, technology.display_name, scans)
    console.print(table)


@app.command()
def version() -> None:
    """Show the installed sanca version."""
    console.print(f"Sanca {get_version()}")
