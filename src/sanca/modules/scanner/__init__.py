"""Scanner module for sanca - TCP and HTTP fingerprinting."""

from .main import Scanner, filter_technologies
from .models import ScanReport, ScanTarget

__all__ = [
    "ScanReport",
    "ScanTarget",
    "Scanner",
    "filter_technologies",
]
