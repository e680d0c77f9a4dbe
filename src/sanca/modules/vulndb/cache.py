"""Local caches of the CVEs known for a technology version."""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from sanca.models.finding import CVE, Finding
from sanca.models.technology import Technology

logger = logging.getLogger(__name__)


class CacheManager(ABC):
    """Store and retrieve CVE lists keyed by technology and version."""

    @abstractmethod
    def read(self, technology: Technology, version: str) -> list[CVE] | None:
        """Return the cached CVEs, or None on a miss."""

    @abstractmethod
    def store(self, cves: list[CVE], technology: Technology, version: str) -> None:
        """Cache the CVEs unless an entry already exists."""

    def complete_finding(self, finding: Finding) -> bool:
        """Attach cached CVEs to the finding. Returns True on a cache hit."""
        if not finding.version:
            return False
        cves = self.read(finding.technology, finding.version)
        if cves is None:
            return False
        finding.vulnerabilities = cves
        logger.debug(
            "Cache hit for %s %s (%d CVEs)", finding.technology.display_name, finding.version, len(cves)
        )
        return True


class FileCacheManager(CacheManager):
    """JSON files under ``<root>/cves/<vendor>/<product>/<version>.json``.

    Files are written once: an existing entry is never overwritten. Two scans
    racing on the same missing entry both query NVD and only the first write
    is kept.
    """

    def __init__(self, root: Path | None = None):
        self.root = Path(root) if root is not None else Path.cwd()

    def path_for(self, technology: Technology, version: str) -> Path | None:
        _part, vendor, product = technology.cpe_part_vendor_product()
        if not vendor or not product:
            return None
        return self.root / "cves" / vendor / product / f"{version}.json"

    def read(self, technology: Technology, version: str) -> list[CVE] | None:
        cache_file = self.path_for(technology, version)
        if cache_file is None or not cache_file.exists():
            return None

        try:
            with cache_file.open(encoding="utf-8") as handle:
                data = json.load(handle)
            return [CVE.from_nvd(item) for item in data]
        except (OSError, json.JSONDecodeError, KeyError, TypeError, AttributeError) as exc:
            logger.warning("Ignoring unreadable cache file %s: %s", cache_file, exc)
            return None

    def store(self, cves: list[CVE], technology: Technology, version: str) -> None:
        cache_file = self.path_for(technology, version)
        if cache_file is None:
            return

        try:
            payload = json.dumps([cve.to_nvd() for cve in cves], indent=2)
        except (TypeError, ValueError) as exc:
            logger.error("Unable to serialize CVEs for %s: %s", cache_file, exc)
            return

        try:
            cache_file.parent.mkdir(parents=True, exist_ok=True)
            with cache_file.open("x", encoding="utf-8") as handle:
                handle.write(payload)
        except FileExistsError:
            logger.debug("Cache file %s already exists, keeping it", cache_file)
        except OSError as exc:
            logger.error("Unable to write the cache file %s: %s", cache_file, exc)
