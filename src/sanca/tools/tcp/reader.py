"""Raw banner reader for TCP services."""

import asyncio
import logging

logger = logging.getLogger(__name__)

CHUNK_SIZE = 128


class TcpReader:
    """Read the first bytes a TCP service sends after the connection opens."""

    def __init__(self, host: str, port: int, read_timeout: float = 1.0):
        self.host = host
        self.port = port
        self.read_timeout = read_timeout

    async def read(self, max_bytes: int) -> str:
        """
        Read up to ``max_bytes`` from the service.

        A failure before any byte arrives propagates. Once data has been
        received, a timeout or read error ends the read and the partial data is
        returned. Invalid UTF-8 sequences are replaced.
        """
        reader, writer = await asyncio.open_connection(self.host, self.port)
        buffer = bytearray()
        try:
            while len(buffer) < max_bytes:
                try:
                    chunk = await asyncio.wait_for(reader.read(CHUNK_SIZE), self.read_timeout)
                except (OSError, TimeoutError) as exc:
                    if not buffer:
                        raise
                    logger.warning(
                        "Read from %s:%d stopped after %d bytes: %r",
                        self.host,
                        self.port,
                        len(buffer),
                        exc,
                    )
                    break
                if not chunk:
                    break
                buffer.extend(chunk)
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except OSError:
                pass

        logger.debug("Read %d bytes from %s:%d", len(buffer), self.host, self.port)
        return bytes(buffer[:max_bytes]).decode("utf-8", errors="replace")
