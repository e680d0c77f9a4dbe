"""Renderers for the final list of findings."""

import csv
import json
import sys
from abc import ABC, abstractmethod
from typing import TextIO

from rich.console import Console
from rich.markup import escape

from sanca.models.finding import Finding

from .models import ReportContext

UNKNOWN_VERSION = "unknown"


class Writer(ABC):
    """Render findings for one scanned target."""

    def __init__(self, context: ReportContext | None = None):
        self.context = context or ReportContext()

    @abstractmethod
    def write(self, findings: list[Finding]) -> None:
        """Render the findings."""


class TextWriter(Writer):
    """One line per finding on the terminal, followed by its CVEs."""

    def __init__(self, context: ReportContext | None = None, console: Console | None = None):
        super().__init__(context)
        self.console = console or Console()

    def write(self, findings: list[Finding]) -> None:
        if not findings:
            self.console.print("[yellow]No technology identified.[/yellow]")
            return
        for finding in findings:
            label = f"[{finding.technology.display_name}/{finding.version or UNKNOWN_VERSION}]"
            self.console.print(
                f"[bold green]{escape(label)}[/bold green] {escape(finding.evidence_text)}"
            )
            for cve in finding.vulnerabilities:
                self.console.print(f"  [red]{escape(cve.id)}[/red] ({cve.base_score:.1f})")


class CsvWriter(Writer):
    """CSV with every field quoted. Host and URL columns appear when known."""

    def __init__(self, context: ReportContext | None = None, stream: TextIO | None = None):
        super().__init__(context)
        self.stream = stream or sys.stdout

    def header(self) -> list[str]:
        columns = ["Technology", "Version"]
        if self.context.ip_hostname:
            columns += ["IP / Hostname", "Port"]
        if self.context.url:
            columns += ["Main URL", "URL of finding"]
        return columns + ["Evidence", "Evidence text", "CVEs"]

    def row(self, finding: Finding) -> list[str]:
        values = [finding.technology.display_name, finding.version or UNKNOWN_VERSION]
        if self.context.ip_hostname:
            values += [self.context.ip_hostname, str(self.context.port or "")]
        if self.context.url:
            values += [self.context.url, finding.url_of_finding or ""]
        cve_ids = ", ".join(cve.id for cve in finding.vulnerabilities)
        return values + [finding.evidence, finding.evidence_text, cve_ids]

    def write(self, findings: list[Finding]) -> None:
        writer = csv.writer(self.stream, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(self.header())
        for finding in findings:
            writer.writerow(self.row(finding))


class JsonWriter(Writer):
    """JSON array of findings with their CVEs in the NVD shape."""

    def __init__(self, context: ReportContext | None = None, stream: TextIO | None = None):
        super().__init__(context)
        self.stream = stream or sys.stdout

    def write(self, findings: list[Finding]) -> None:
        data = []
        for finding in findings:
            item = finding.to_dict()
            item["ip_hostname"] = self.context.ip_hostname
            item["port"] = self.context.port
            item["main_url"] = self.context.url
            data.append(item)
        self.stream.write(json.dumps(data, indent=2) + "\n")


WRITERS = ("text", "csv", "json")


def create_writer(
    name: str,
    context: ReportContext | None = None,
    console: Console | None = None,
    stream: TextIO | None = None,
) -> Writer:
    """Return the writer registered under ``name``."""
    if name == "text":
        return TextWriter(context, console)
    if name == "csv":
        return CsvWriter(context, stream)
    if name == "json":
        return JsonWriter(context, stream)
    raise ValueError(f"Unsupported writer: {name}. Available writers: {', '.join(WRITERS)}")
