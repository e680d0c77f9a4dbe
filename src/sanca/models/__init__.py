"""Data models shared by the readers, checkers and writers."""

from .finding import CVE, CVEDescription, CVEMetrics, CVSSMetric, Finding
from .reqres import (
    ProbeRequest,
    ProbeResponse,
    RequestKind,
    hostname_port,
    plan_requests,
    resolve_path,
)
from .technology import ScanType, Technology

__all__ = [
    "CVE",
    "CVEDescription",
    "CVEMetrics",
    "CVSSMetric",
    "Finding",
    "ProbeRequest",
    "ProbeResponse",
    "RequestKind",
    "ScanType",
    "Technology",
    "hostname_port",
    "plan_requests",
    "resolve_path",
]
