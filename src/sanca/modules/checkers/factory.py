"""Factory for the built-in checkers."""

from .os import OSBannerChecker, OSHeaderChecker
from .registry import CheckerRegistry
from .servers import ApacheHttpdChecker, NginxChecker, PHPChecker
from .services import (
    DovecotChecker,
    EximChecker,
    MySQLChecker,
    OpenSSHChecker,
    ProFTPDChecker,
)
from .web import JQueryChecker, SymfonyChecker, WordPressChecker


def create_default_registry() -> CheckerRegistry:
    """Return a registry holding one instance of every built-in checker."""
    return CheckerRegistry(
        [
            OSBannerChecker(),
            ProFTPDChecker(),
            OpenSSHChecker(),
            EximChecker(),
            DovecotChecker(),
            MySQLChecker(),
            OSHeaderChecker(),
            ApacheHttpdChecker(),
            NginxChecker(),
            PHPChecker(),
            SymfonyChecker(),
            WordPressChecker(),
            JQueryChecker(),
        ]
    )
