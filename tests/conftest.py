import asyncio

import pytest

from print_relay import env
from print_relay.transports import Connection, Transport


class FakeConnection(Connection):
    def __init__(self, write_error=None, close_error=None, hang=False):
        self.write_error = write_error
        self.close_error = close_error
        self.hang = hang
        self.written = bytearray()
        self.eof = False
        self.aborted = False

    def write(self, data: bytes):
        if self.write_error is not None:
            raise self.write_error
        self.written += data

    def write_eof(self):
        self.eof = True

    async def wait_closed(self):
        if self.hang:
            await asyncio.Event().wait()
        if self.close_error is not None:
            raise self.close_error

    def abort(self):
        self.aborted = True


class FakeTransport(Transport):
    def __init__(self, connection=None, connect_error=None, hang=False):
        self.connection = connection if connection is not None else FakeConnection()
        self.connect_error = connect_error
        self.hang = hang
        self.calls = []

    async def connect(self, host: str, port: int) -> Connection:
        self.calls.append((host, port))
        if self.hang:
            await asyncio.Event().wait()
        if self.connect_error is not None:
            raise self.connect_error
        return self.connection


@pytest.fixture(autouse=True)
def audit_path(tmp_path, monkeypatch):
    path = tmp_path / "audit.jsonl"
    monkeypatch.setattr(env, "AUDIT_LOG_PATH", str(path))
    return path


@pytest.fixture
def transport():
    return FakeTransport()
