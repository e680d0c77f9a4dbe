"""Shared CLI app objects and option helpers."""

from collections.abc import Iterable

import typer
from rich.console import Console

from sanca.models.technology import ScanType, Technology

app = typer.Typer(
    name="sanca",
    help="Identify the technologies and versions running on a network asset",
    no_args_is_help=True,
)
console = Console()


def get_version() -> str:
    """Return the installed sanca version."""
    from importlib.metadata import PackageNotFoundError, version as pkg_version

    try:
        return pkg_version("sanca")
    except PackageNotFoundError:
        return "0.0.0+unknown"


def parse_scan_type(value: str) -> ScanType:
    """Parse a --scan-type value, exiting with an error message when invalid."""
    try:
        return ScanType(value.strip().lower())
    except ValueError:
        choices = ", ".join(scan_type.value for scan_type in ScanType)
        console.print(f"[red]Invalid scan type: {value}. Use one of: {choices}.[/red]")
        raise typer.Exit(1) from None


def parse_technologies(
    value: str | None, supported: Iterable[Technology] | None = None
) -> list[Technology] | None:
    """Parse a comma-separated --technologies value. None selects every technology.

    Technologies outside ``supported`` are rejected.
    """
    if not value:
        return None
    technologies = []
    for item in value.split(","):
        if not item.strip():
            continue
        try:
            technology = Technology.from_value(item)
        except ValueError as exc:
            console.print(f"[red]{exc}. Run 'sanca technologies' to list them.[/red]")
            raise typer.Exit(1) from None
        if technology not in Technology.selectable():
            console.print(f"[red]{technology.display_name} cannot be selected, use 'os' instead.[/red]")
            raise typer.Exit(1)
        if supported is not None and technology not in supported:
            console.print(f"[red]No checker can identify {technology.display_name} yet.[/red]")
            raise typer.Exit(1)
        technologies.append(technology)
    return technologies or None
