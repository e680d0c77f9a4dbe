"""Vulnerability enrichment for sanca findings."""

from .cache import CacheManager, FileCacheManager
from .nvd import NVD_URL, NVDFetcher

__all__ = [
    "CacheManager",
    "FileCacheManager",
    "NVDFetcher",
    "NVD_URL",
]
