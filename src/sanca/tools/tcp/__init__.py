"""TCP helpers for sanca."""

from .reader import CHUNK_SIZE, TcpReader

__all__ = ["CHUNK_SIZE", "TcpReader"]
