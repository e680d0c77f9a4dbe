"""Main scanner orchestration."""

import logging
from collections.abc import Iterable

from sanca.config import ScanSettings
from sanca.errors import UrlParseError
from sanca.models.finding import Finding
from sanca.models.reqres import plan_requests
from sanca.models.technology import ScanType, Technology
from sanca.modules.checkers import CheckerRegistry, create_default_registry
from sanca.tools.http import HttpReader
from sanca.tools.tcp import TcpReader

from .models import ScanReport, ScanTarget

logger = logging.getLogger(__name__)


def filter_technologies(
    technologies: Iterable[Technology] | None,
    scan_type: ScanType,
    available: Iterable[Technology] | None = None,
) -> list[Technology]:
    """Keep the technologies the scan type can reveal. None means every selectable one.

    With ``available``, technologies outside it (those without a checker) are dropped.
    """
    if technologies is None:
        technologies = Technology.selectable()
    allowed = set(available) if available is not None else None
    return [
        tech
        for tech in dict.fromkeys(technologies)
        if tech.supports_scan(scan_type) and (allowed is None or tech in allowed)
    ]


class Scanner:
    """Read a target over TCP or HTTP and dispatch the data to the checkers."""

    def __init__(
        self,
        registry: CheckerRegistry | None = None,
        settings: ScanSettings | None = None,
    ):
        self.registry = registry or create_default_registry()
        self.settings = settings or ScanSettings()

    async def tcp_scan(
        self,
        host: str,
        port: int,
        technologies: Iterable[Technology],
        max_bytes: int | None = None,
    ) -> list[Finding]:
        """Read the service banner and run the TCP checkers on it."""
        reader = TcpReader(host, port, self.settings.tcp_read_timeout)
        try:
            banner = await reader.read(max_bytes or self.settings.tcp_max_bytes)
        except (OSError, TimeoutError) as exc:
            logger.error("Unable to read the TCP banner of %s:%d: %r", host, port, exc)
            return []
        logger.info("Banner of %s:%d: %r", host, port, banner)

        findings = []
        for checker in self.registry.tcp_checkers(technologies):
            finding = checker.check([banner])
            if finding is not None:
                findings.append(finding)
        return findings

    async def http_scan(self, url: str, technologies: Iterable[Technology]) -> list[Finding]:
        """Fetch the planned probes for ``url`` and run the HTTP checkers on them."""
        technologies = list(technologies)
        try:
            requests = plan_requests(url, technologies)
        except UrlParseError as exc:
            logger.error("Skipping %s: %s", url, exc)
            return []

        async with HttpReader(self.settings.user_agent, self.settings.http_timeout) as reader:
            responses = await reader.fetch(requests)

        findings: list[Finding] = []
        for checker in self.registry.http_checkers(technologies):
            logger.debug("Using HTTP checker %s", type(checker).__name__)
            findings.extend(checker.check(responses))
        return self._dedupe(findings)

    async def scan(self, target: ScanTarget) -> ScanReport:
        """Scan one target with the technologies its scan type supports."""
        target.validate()
        technologies = filter_technologies(
            target.technologies or None, target.scan_type, self.registry.technologies()
        )
        logger.debug("Technologies selected: %s", [tech.value for tech in technologies])

        if target.scan_type is ScanType.TCP:
            findings = await self.tcp_scan(target.host, target.port, technologies)
        elif target.scan_type is ScanType.HTTP:
            findings = await self.http_scan(target.url, technologies)
        else:
            raise NotImplementedError("UDP is not supported yet.")

        logger.info("Scan complete, %d finding(s)", len(findings))
        return ScanReport(target=target, findings=findings)

    def _dedupe(self, findings: list[Finding]) -> list[Finding]:
        seen: set[tuple[Technology, str | None, str | None]] = set()
        deduped: list[Finding] = []
        for finding in findings:
            key = (finding.technology, finding.version, finding.url_of_finding)
            if key in seen:
                continue
            seen.add(key)
            deduped.append(finding)
        return deduped
