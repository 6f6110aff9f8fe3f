from print_relay.transports.base import Connection, Transport
from print_relay.transports.tcp import TcpConnection, TcpTransport

default_transport = TcpTransport()

__all__ = ["Connection", "Transport", "TcpConnection", "TcpTransport", "default_transport"]
