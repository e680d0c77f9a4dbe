"""Transport readers used by the scanner."""

from .http import HttpReader
from .tcp import TcpReader

__all__ = ["HttpReader", "TcpReader"]
