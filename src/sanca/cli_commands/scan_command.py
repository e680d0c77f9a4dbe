"""Scan CLI command."""

import logging

import typer

from sanca.config import ScanSettings
from sanca.errors import UrlParseError
from sanca.models.technology import ScanType
from sanca.modules.report import WRITERS, ReportContext, create_writer
from sanca.modules.scanner import ScanTarget
from sanca.modules.vulndb import FileCacheManager
from sanca.utils.async_utils import safe_async_run
from sanca.utils.logging import configure_logging

from .deps import cli_module
from .shared import app, console, get_version, parse_scan_type, parse_technologies

logger = logging.getLogger(__name__)


@app.command()
def scan(
    scan_type: str = typer.Option(..., "--scan-type", "-s", help="Scan type: tcp, http, udp"),
    url: str | None = typer.Option(None, "--url", "-u", help="URL to scan (HTTP scans)"),
    ip_hostname: str | None = typer.Option(
        None, "--ip-hostname", "-i", help="IP address or hostname (TCP scans)"
    ),
    port: int | None = typer.Option(None, "--port", "-p", min=1, max=65535, help="Port (TCP scans)"),
    technologies: str | None = typer.Option(
        None,
        "--technologies",
        "-t",
        help="Comma-separated technologies to look for (default: all)",
    ),
    writer: str = typer.Option("text", "--writer", "-w", help="Output format: text, csv, json"),
    user_agent: str | None = typer.Option(
        None, "--user-agent", help="User-Agent sent with HTTP probes"
    ),
    vulns: bool = typer.Option(False, "--vulns", help="Look up known CVEs on NVD"),
    cache: bool = typer.Option(True, "--cache/--no-cache", help="Use the local CVE cache"),
    hide_header: bool = typer.Option(False, "--hide-header", help="Do not print the banner"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log scan progress"),
    debug: bool = typer.Option(False, "--debug", help="Log everything"),
) -> None:
    """Identify technologies on a host:port (TCP) or a URL (HTTP)."""
    cli = cli_module()
    configure_logging(verbose=verbose, debug=debug)

    if writer not in WRITERS:
        console.print(f"[red]Unsupported writer: {writer}. Use one of: {', '.join(WRITERS)}.[/red]")
        raise typer.Exit(1)

    registry = cli.create_default_registry()
    target = ScanTarget(
        scan_type=parse_scan_type(scan_type),
        technologies=parse_technologies(technologies, registry.technologies()) or [],
        host=ip_hostname,
        port=port,
        url=url,
    )
    try:
        target.validate()
    except ValueError as exc:
        console.print(f"[red]Invalid parameters: {exc}[/red]")
        raise typer.Exit(1) from None
    if target.scan_type is ScanType.UDP:
        console.print("[red]UDP is not supported yet.[/red]")
        raise typer.Exit(1)

    if writer == "text" and not hide_header:
        console.print(f"[bold]Sanca software v{get_version()}[/bold]\n")

    settings = ScanSettings.load(user_agent=user_agent, use_cache=cache)
    scanner = cli.Scanner(registry, settings)
    report = safe_async_run(scanner.scan(target))

    if vulns and report.findings:
        file_cache = FileCacheManager(settings.cache_dir) if settings.use_cache else None
        fetcher = cli.NVDFetcher(
            file_cache, settings.nvd_url, settings.nvd_api_key, settings.http_timeout
        )
        safe_async_run(fetcher.complete_findings(report.findings))

    try:
        context = ReportContext.for_target(ip_hostname, port, url)
    except UrlParseError as exc:
        logger.warning("%s", exc)
        context = ReportContext(url=url)
    create_writer(writer, context, console).write(report.findings)
