"""
Printer relay: one TCP interaction with a receipt printer per print job.

A relay attempt goes Idle -> Connecting -> Connected&Sending -> Resolved.
Socket events (connect, error, close, timer expiry) are delivered to a
RelayAttempt as on_* calls and every handler resolves through the same
SettlementLatch, so whichever event fires first decides the outcome and
anything arriving afterwards is ignored.
"""
import asyncio
import logging
from typing import Any, Optional

from print_relay import env
from print_relay.errors import (
    ConnectSetupError,
    ConnectTimeout,
    PrematureClose,
    PrinterConnectionError,
    SendError,
)
from print_relay.models import PrintRequest, RelayOutcome
from print_relay.transports import Connection, Transport, default_transport
from print_relay.validator import validate_request

logger = logging.getLogger(__name__)


class SettlementLatch:
    """One-shot result holder. The first settle() wins, later calls are no-ops."""

    def __init__(self):
        self._future = asyncio.get_running_loop().create_future()

    @property
    def settled(self) -> bool:
        return self._future.done()

    def settle(self, outcome: RelayOutcome) -> bool:
        if self._future.done():
            return False
        self._future.set_result(outcome)
        return True

    def abandon(self, exc: BaseException) -> bool:
        """Finish without an outcome; wait() re-raises exc."""
        if self._future.done():
            return False
        self._future.set_exception(exc)
        return True

    async def wait(self) -> RelayOutcome:
        return await self._future


class RelayAttempt:
    def __init__(self, request: PrintRequest, transport: Transport, timeout: float):
        self.request = request
        self.transport = transport
        self.timeout = timeout

        self.connection: Optional[Connection] = None
        self.connected = False
        self.sent = False
        self.latch = SettlementLatch()
        self._task: Optional[asyncio.Task] = None

    @property
    def target(self) -> str:
        return f"{self.request.address}:{self.request.port}"

    def _resolve(self, outcome: RelayOutcome) -> bool:
        settled = self.latch.settle(outcome)
        if not settled:
            logger.debug("Ignoring late result for %s: %s", self.target, outcome.to_body())
        return settled

    def _teardown(self):
        if self.connection is not None:
            self.connection.abort()

    # -----------------------------
    # Socket events
    # -----------------------------
    def on_connect(self, connection: Connection):
        self.connection = connection
        self.connected = True
        logger.info("Connected to printer %s", self.target)
        logger.info("Sending %d bytes...", len(self.request.payload))

        try:
            connection.write(self.request.payload)
            connection.write_eof()
            self.sent = True
        except Exception as e:
            logger.error("Error sending data to %s: %s", self.target, e)
            self._teardown()
            self._resolve(RelayOutcome.from_error(SendError(str(e))))

    def on_error(self, exc: BaseException):
        logger.error("Connection error on %s: %s", self.target, exc)
        self._teardown()
        self._resolve(RelayOutcome.from_error(PrinterConnectionError(str(exc))))

    def on_close(self):
        if self.connected and self.sent:
            if self._resolve(RelayOutcome.ok()):
                logger.info("Print job to %s completed successfully", self.target)
        elif not self.connected and not self.latch.settled:
            logger.warning("Connection to %s closed before completion", self.target)
            self._resolve(RelayOutcome.from_error(PrematureClose()))

    def on_connect_failed(self, exc: BaseException):
        logger.error("Error initiating connection to %s: %s", self.target, exc)
        self._resolve(RelayOutcome.from_error(ConnectSetupError(str(exc))))

    def on_timeout(self):
        if self.latch.settled:
            return
        logger.error("Connection timeout after %ss on %s", self.timeout, self.target)
        self._teardown()
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._resolve(RelayOutcome.from_error(ConnectTimeout()))

    # -----------------------------
    # Driver
    # -----------------------------
    async def _drive(self):
        try:
            connection = await self.transport.connect(self.request.address, self.request.port)
        except OSError as e:
            self.on_error(e)
            self.on_close()
            return
        except Exception as e:
            self.on_connect_failed(e)
            return

        self.on_connect(connection)
        if not self.sent:
            return

        try:
            await connection.wait_closed()
        except OSError as e:
            self.on_error(e)
        self.on_close()

    async def _drive_guarded(self):
        try:
            await self._drive()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self._teardown()
            self.latch.abandon(e)

    async def run(self) -> RelayOutcome:
        loop = asyncio.get_running_loop()
        logger.info("Connecting to printer %s...", self.target)
        timer = loop.call_later(self.timeout, self.on_timeout)
        self._task = loop.create_task(self._drive_guarded())
        try:
            return await self.latch.wait()
        finally:
            timer.cancel()
            if not self._task.done():
                self._task.cancel()


async def relay_request(
    request: PrintRequest,
    transport: Optional[Transport] = None,
    timeout: Optional[float] = None,
) -> RelayOutcome:
    attempt = RelayAttempt(
        request,
        transport or default_transport,
        env.PRINT_TIMEOUT_SECONDS if timeout is None else timeout,
    )
    return await attempt.run()


async def relay(
    address: Any,
    port: Any,
    payload: Any,
    transport: Optional[Transport] = None,
    timeout: Optional[float] = None,
) -> RelayOutcome:
    """
    Validate a print request and relay it to the printer.

    Raises a RequestError subclass for invalid input (no socket is opened in
    that case). Transport problems never raise: they come back as a failed
    RelayOutcome.
    """
    request = validate_request(address, port, payload)
    return await relay_request(request, transport=transport, timeout=timeout)
