"""HTTP helpers for sanca."""

from .reader import (
    HttpReader,
    extract_script_urls,
    extract_symfony_profiler,
    normalize_header_name,
    normalize_headers,
)

__all__ = [
    "HttpReader",
    "extract_script_urls",
    "extract_symfony_profiler",
    "normalize_header_name",
    "normalize_headers",
]
