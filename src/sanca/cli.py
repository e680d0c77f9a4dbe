"""Sanca CLI - technology fingerprinting of network assets."""

from sanca.cli_commands.shared import app, console
from sanca.modules.checkers import create_default_registry
from sanca.modules.scanner import Scanner
from sanca.modules.vulndb import NVDFetcher

# Importing the command modules registers them on ``app``.
from sanca.cli_commands import scan_command, technologies_command  # noqa: E402,F401

__all__ = [
    "NVDFetcher",
    "Scanner",
    "app",
    "console",
    "create_default_registry",
    "main",
]


def main():
    """Entry point for the CLI."""
    app()
