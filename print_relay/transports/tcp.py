import asyncio
import logging

from print_relay.transports.base import Connection, Transport

logger = logging.getLogger(__name__)

READ_CHUNK = 4096


class TcpConnection(Connection):
    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        self._reader = reader
        self._writer = writer

    def write(self, data: bytes):
        self._writer.write(data)

    def write_eof(self):
        if self._writer.can_write_eof():
            self._writer.write_eof()

    async def wait_closed(self):
        await self._writer.drain()
        # some printers answer with status bytes; they are discarded
        while True:
            chunk = await self._reader.read(READ_CHUNK)
            if not chunk:
                break
            logger.debug("Discarding %d bytes sent back by printer", len(chunk))
        self._writer.close()
        await self._writer.wait_closed()

    def abort(self):
        self._writer.transport.abort()


class TcpTransport(Transport):
    """Raw TCP (port 9100 style) transport backed by asyncio streams."""

    async def connect(self, host: str, port: int) -> Connection:
        reader, writer = await asyncio.open_connection(host, port)
        return TcpConnection(reader, writer)
