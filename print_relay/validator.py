import re
from typing import Any

from print_relay import env
from print_relay.errors import (
    EmptyPayload,
    InvalidAddress,
    InvalidPort,
    InvalidRequest,
    MalformedPayload,
)
from print_relay.models import PrintRequest

# Four dot-separated groups of 1-3 digits. No 0-255 range check:
# "999.999.999.999" passes here and fails later at connect time.
IP_PATTERN = re.compile(r"([0-9]{1,3}\.){3}[0-9]{1,3}")

MIN_PORT = 1
MAX_PORT = 65535


def _resolve_port(port: Any) -> int:
    if port is None:
        return env.DEFAULT_PRINTER_PORT

    if isinstance(port, bool):
        raise InvalidPort()
    if isinstance(port, float):
        if not port.is_integer():
            raise InvalidPort()
        port = int(port)
    elif isinstance(port, str):
        digits = port.strip()
        if not (digits.isascii() and digits.isdigit()):
            raise InvalidPort()
        port = int(digits)
    elif not isinstance(port, int):
        raise InvalidPort()

    if port < MIN_PORT or port > MAX_PORT:
        raise InvalidPort()
    return port


def validate_request(address: Any, port: Any, payload: Any) -> PrintRequest:
    """
    Check a raw print request and build the validated PrintRequest.

    Checks run in a fixed order (required fields, address, port, payload
    conversion, empty payload) and the first failure is raised as a
    RequestError subclass. Nothing here touches the network.
    """
    if not address or payload is None or not isinstance(payload, list):
        raise InvalidRequest()

    if not isinstance(address, str) or not IP_PATTERN.fullmatch(address):
        raise InvalidAddress()

    printer_port = _resolve_port(port)

    try:
        buffer = bytes(payload)
    except (TypeError, ValueError) as e:
        raise MalformedPayload(str(e))

    if len(buffer) == 0:
        raise EmptyPayload()

    return PrintRequest(address=address, port=printer_port, payload=buffer)
