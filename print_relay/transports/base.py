from abc import ABC, abstractmethod


class Connection(ABC):
    """One open printer socket, owned by a single relay attempt."""

    @abstractmethod
    def write(self, data: bytes):
        pass

    @abstractmethod
    def write_eof(self):
        pass

    @abstractmethod
    async def wait_closed(self):
        """Return once the remote end has closed; raise OSError on socket errors."""

    @abstractmethod
    def abort(self):
        pass


class Transport(ABC):

    @abstractmethod
    async def connect(self, host: str, port: int) -> Connection:
        pass
