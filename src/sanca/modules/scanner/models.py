"""Data models for scan targets and results."""

from dataclasses import dataclass, field

from sanca.models.finding import Finding
from sanca.models.technology import ScanType, Technology


@dataclass
class ScanTarget:
    """What to scan: a host and port for TCP, a URL for HTTP."""

    scan_type: ScanType
    technologies: list[Technology] = field(default_factory=list)
    host: str | None = None
    port: int | None = None
    url: str | None = None

    def validate(self) -> None:
        """Raise ValueError when the fields required by the scan type are missing."""
        if self.scan_type in (ScanType.TCP, ScanType.UDP) and (not self.host or not self.port):
            raise ValueError(
                "To perform a TCP or UDP scan, the IP or hostname and the port are required."
            )
        if self.scan_type is ScanType.HTTP and not self.url:
            raise ValueError("To perform a HTTP scan, the url is required.")


@dataclass
class ScanReport:
    """Findings gathered for one target."""

    target: ScanTarget
    findings: list[Finding] = field(default_factory=list)
