"""NVD client attaching known CVEs to findings."""

import logging

import httpx

from sanca.config.getters import DEFAULT_NVD_URL as NVD_URL
from sanca.models.finding import CVE, Finding

from .cache import CacheManager

logger = logging.getLogger(__name__)


class NVDFetcher:
    """Complete findings with the CVEs NVD lists for their CPE.

    A configured cache is consulted first and fed with every successful NVD
    answer.
    """

    def __init__(
        self,
        cache: CacheManager | None = None,
        base_url: str = NVD_URL,
        api_key: str | None = None,
        timeout: float = 30.0,
    ):
        self.cache = cache
        self.base_url = base_url
        self.api_key = api_key
        self.timeout = timeout

    def build_url(self, finding: Finding) -> str | None:
        """Return the CVE-by-CPE query URL, or None when the CPE is incomplete."""
        part, vendor, product = finding.technology.cpe_part_vendor_product()
        if not vendor or not product or not finding.version:
            return None
        cpe = f"cpe:2.3:{part}:{vendor}:{product}:{finding.version}"
        return f"{self.base_url}?noRejected&cpeName={cpe}"

    async def complete_findings(self, findings: list[Finding]) -> None:
        """Attach CVEs to each finding in place. Failures leave a finding untouched."""
        headers = {"apiKey": self.api_key} if self.api_key else None
        async with httpx.AsyncClient(timeout=self.timeout, headers=headers) as client:
            for finding in findings:
                if self.cache is not None and self.cache.complete_finding(finding):
                    continue
                await self.fetch_vulns(client, finding)

    async def fetch_vulns(self, client: httpx.AsyncClient, finding: Finding) -> None:
        url = self.build_url(finding)
        if url is None:
            logger.debug(
                "No CPE for %s %s, skipping", finding.technology.display_name, finding.version
            )
            return

        try:
            response = await client.get(url)
        except httpx.HTTPError as exc:
            logger.error("Error while communicating with NVD: %r", exc)
            return
        if not response.is_success:
            logger.error("Invalid HTTP response code from NVD: %d", response.status_code)
            return

        try:
            cves = [CVE.from_nvd(item["cve"]) for item in response.json()["vulnerabilities"]]
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            logger.error("Invalid JSON returned by the NVD API: %r", exc)
            return

        added = finding.add_vulnerabilities([cve for cve in cves if cve.base_score > 0])
        logger.info(
            "%d CVE(s) attached to %s %s", added, finding.technology.display_name, finding.version
        )
        if self.cache is not None:
            self.cache.store(finding.vulnerabilities, finding.technology, finding.version)
