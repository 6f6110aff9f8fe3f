from typing import Any, Dict


# -----------------------------
# Request errors (caller input, HTTP 400)
# -----------------------------
class RequestError(Exception):
    """Invalid print request, detected before any socket is opened."""

    status_code = 400
    error = "Invalid request"

    def __init__(self, error: str = None):
        if error is not None:
            self.error = error
        super().__init__(self.error)

    def to_body(self) -> Dict[str, Any]:
        return {"success": False, "error": self.error}


class InvalidRequest(RequestError):
    error = "Invalid request"
    message = "IP address and data array are required"

    def to_body(self) -> Dict[str, Any]:
        body = super().to_body()
        body["message"] = self.message
        return body


class InvalidAddress(RequestError):
    error = "Invalid IP address format"


class InvalidPort(RequestError):
    error = "Invalid port number (must be 1-65535)"


class MalformedPayload(RequestError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid data format: {reason}")


class EmptyPayload(RequestError):
    error = "Print data is empty"


# -----------------------------
# Transport errors (relay failures, HTTP 500)
# -----------------------------
class TransportError(Exception):
    default_message = "Connection failed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ConnectTimeout(TransportError):
    default_message = "Connection timeout - printer may be offline or unreachable"


class PrinterConnectionError(TransportError):
    default_message = "Connection failed"


class SendError(TransportError):
    def __init__(self, reason: str):
        super().__init__(f"Failed to send data: {reason}")


class ConnectSetupError(TransportError):
    def __init__(self, reason: str):
        super().__init__(f"Failed to connect: {reason}")


class PrematureClose(TransportError):
    default_message = "Connection closed unexpectedly"
