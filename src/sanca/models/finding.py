"""Findings and the CVE records attached to them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .technology import Technology


@dataclass
class CVEDescription:
    lang: str
    value: str


@dataclass
class CVSSMetric:
    """One CVSS assessment as published by NVD."""

    source: str
    type: str
    cvss_data: dict[str, Any] = field(default_factory=dict)
    exploitability_score: float | None = None
    impact_score: float | None = None

    @property
    def base_score(self) -> float | None:
        score = self.cvss_data.get("baseScore")
        return float(score) if score is not None else None

    @classmethod
    def from_nvd(cls, data: dict[str, Any]) -> CVSSMetric:
        return cls(
            source=data.get("source", ""),
            type=data.get("type", ""),
            cvss_data=dict(data.get("cvssData", {})),
            exploitability_score=data.get("exploitabilityScore"),
            impact_score=data.get("impactScore"),
        )

    def to_nvd(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "source": self.source,
            "type": self.type,
            "cvssData": self.cvss_data,
        }
        if self.exploitability_score is not None:
            data["exploitabilityScore"] = self.exploitability_score
        if self.impact_score is not None:
            data["impactScore"] = self.impact_score
        return data


_METRIC_KEYS = (
    ("cvss_metric_v31", "cvssMetricV31"),
    ("cvss_metric_v30", "cvssMetricV30"),
    ("cvss_metric_v2", "cvssMetricV2"),
)


@dataclass
class CVEMetrics:
    cvss_metric_v31: list[CVSSMetric] = field(default_factory=list)
    cvss_metric_v30: list[CVSSMetric] = field(default_factory=list)
    cvss_metric_v2: list[CVSSMetric] = field(default_factory=list)

    @classmethod
    def from_nvd(cls, data: dict[str, Any]) -> CVEMetrics:
        return cls(
            **{
                attr: [CVSSMetric.from_nvd(item) for item in data.get(key, [])]
                for attr, key in _METRIC_KEYS
            }
        )

    def to_nvd(self) -> dict[str, Any]:
        data = {}
        for attr, key in _METRIC_KEYS:
            metrics = getattr(self, attr)
            if metrics:
                data[key] = [metric.to_nvd() for metric in metrics]
        return data


@dataclass
class CVE:
    """A vulnerability record in the shape NVD publishes it.

    Two records are equal when they share the same CVE id.
    """

    id: str
    source_identifier: str = ""
    published: str = ""
    last_modified: str = ""
    vuln_status: str = ""
    descriptions: list[CVEDescription] = field(default_factory=list)
    metrics: CVEMetrics = field(default_factory=CVEMetrics)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CVE):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def base_score(self) -> float:
        """Base score of the newest CVSS version available, 0.0 when unscored."""
        for attr, _ in _METRIC_KEYS:
            for metric in getattr(self.metrics, attr):
                if metric.base_score is not None:
                    return metric.base_score
        return 0.0

    @property
    def description(self) -> str:
        for description in self.descriptions:
            if description.lang == "en":
                return description.value
        return self.descriptions[0].value if self.descriptions else ""

    @classmethod
    def from_nvd(cls, data: dict[str, Any]) -> CVE:
        """Build a CVE from an NVD ``cve`` object (also the cache format)."""
        return cls(
            id=data["id"],
            source_identifier=data.get("sourceIdentifier", ""),
            published=data.get("published", ""),
            last_modified=data.get("lastModified", ""),
            vuln_status=data.get("vulnStatus", ""),
            descriptions=[
                CVEDescription(lang=item.get("lang", ""), value=item.get("value", ""))
                for item in data.get("descriptions", [])
            ],
            metrics=CVEMetrics.from_nvd(data.get("metrics", {})),
        )

    def to_nvd(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "sourceIdentifier": self.source_identifier,
            "published": self.published,
            "lastModified": self.last_modified,
            "vulnStatus": self.vuln_status,
            "descriptions": [
                {"lang": item.lang, "value": item.value} for item in self.descriptions
            ],
            "metrics": self.metrics.to_nvd(),
        }


@dataclass
class Finding:
    """A technology (and possibly its version) identified on an asset."""

    technology: Technology
    version: str | None
    evidence: str
    evidence_text: str
    url_of_finding: str | None = None
    vulnerabilities: list[CVE] = field(default_factory=list)

    def add_vulnerabilities(self, cves: list[CVE]) -> int:
        """Append CVEs not already attached. Returns how many were added."""
        added = 0
        for cve in cves:
            if cve not in self.vulnerabilities:
                self.vulnerabilities.append(cve)
                added += 1
        return added

    def to_dict(self) -> dict[str, Any]:
        return {
            "technology": self.technology.display_name,
            "version": self.version,
            "evidence": self.evidence,
            "evidence_text": self.evidence_text,
            "url_of_finding": self.url_of_finding,
            "vulnerabilities": [cve.to_nvd() for cve in self.vulnerabilities],
        }
