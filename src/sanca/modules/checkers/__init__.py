"""Technology checkers and the registry dispatching to them."""

from .base import HttpChecker, TcpChecker, extract_finding, extract_version
from .factory import create_default_registry
from .registry import CheckerRegistry

__all__ = [
    "CheckerRegistry",
    "HttpChecker",
    "TcpChecker",
    "create_default_registry",
    "extract_finding",
    "extract_version",
]
