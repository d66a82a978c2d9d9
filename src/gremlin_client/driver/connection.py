"""Connection abstraction for the Gremlin client.

The Client shapes requests; a Connection carries them. Everything on the
other side of this seam (framing, serialization, TLS, authentication,
response streaming) belongs to the connection implementation.

Architecture:
- Connection is the PROTOCOL (interface) the Client depends on
- BaseConnection provides lifecycle state, request building and events;
  subclasses supply the transport-specific open/close/send
- MockConnection is an in-memory implementation for tests
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import Enum
from typing import Any, NamedTuple, Protocol, runtime_checkable

from ..errors import ConnectionClosedError
from ..process.bytecode import Bytecode
from .events import ConnectionEvent, EventHandler, EventListeners
from .options import ClientOptions
from .request import TRAVERSAL_PROCESSOR, Operation, RequestMessage

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/vnd.gremlin-v3.0+json"


class ConnectionState(str, Enum):
    """Connection state machine."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


@runtime_checkable
class Connection(Protocol):
    """Protocol for connections used by the Client.

    Implementations handle:
    - Transport setup and teardown (and opening implicitly on submit)
    - Serialization of requests and responses
    - Request/response correlation
    - Event notification (close, log, socketError)
    """

    @property
    def mime_type(self) -> str:
        """Mime type responses are requested in."""
        ...

    async def open(self) -> None:
        """Establish the connection.

        Raises:
            ConnectionError: If the connection cannot be established
        """
        ...

    async def submit(
        self,
        bytecode: Bytecode | None,
        op: str = Operation.BYTECODE.value,
        args: dict[str, Any] | None = None,
        request_id: str | None = None,
        processor: str | None = None,
    ) -> Any:
        """Send a request and return the server's result.

        ``bytecode`` is set for traversal requests and None when ``args``
        carry a script.
        """
        ...

    async def close(self) -> None:
        """Tear the connection down."""
        ...

    def on(self, event: str | ConnectionEvent, handler: EventHandler) -> None:
        """Register an event handler."""
        ...

    def remove_listener(self, event: str | ConnectionEvent, handler: EventHandler) -> None:
        """Remove an event handler."""
        ...


# Builds the connection a Client owns from its url and options
ConnectionFactory = Callable[[str, ClientOptions], Connection]


class BaseConnection(ABC):
    """Base class for connections with common functionality.

    Provides:
    - State management with implicit open on first submit
    - RequestMessage building for bytecode and script requests
    - Event listeners
    """

    def __init__(self, url: str, options: ClientOptions | None = None) -> None:
        self.url = url
        self.options = options or ClientOptions()
        self._state = ConnectionState.DISCONNECTED
        self._listeners = EventListeners()
        self._lock = asyncio.Lock()

    @property
    def state(self) -> ConnectionState:
        """Current connection state."""
        return self._state

    @property
    def is_open(self) -> bool:
        """Check if the connection is open."""
        return self._state == ConnectionState.OPEN

    @property
    def mime_type(self) -> str:
        """Mime type responses are requested in."""
        return self.options.mime_type or DEFAULT_MIME_TYPE

    async def open(self) -> None:
        """Open the connection if it is not open already."""
        async with self._lock:
            if self._state == ConnectionState.OPEN:
                return

            self._state = ConnectionState.CONNECTING
            try:
                await self._do_open()
            except Exception as e:
                self._state = ConnectionState.DISCONNECTED
                raise ConnectionError(f"Failed to connect: {e}") from e

            self._state = ConnectionState.OPEN
            logger.info(f"{self.__class__.__name__} connected to {self.url}")
            self.emit(ConnectionEvent.LOG, f"connection opened: {self.url}")

    async def close(self) -> None:
        """Close the connection and notify close listeners."""
        async with self._lock:
            if self._state == ConnectionState.CLOSED:
                return
            if self._state != ConnectionState.OPEN:
                # Never opened; nothing to tear down
                self._state = ConnectionState.CLOSED
                return

            try:
                await self._do_close()
            finally:
                self._state = ConnectionState.CLOSED
                logger.info(f"{self.__class__.__name__} disconnected from {self.url}")
            self.emit(ConnectionEvent.CLOSE)

    async def submit(
        self,
        bytecode: Bytecode | None,
        op: str = Operation.BYTECODE.value,
        args: dict[str, Any] | None = None,
        request_id: str | None = None,
        processor: str | None = None,
    ) -> Any:
        """Build the request, opening the connection first if needed."""
        if self._state == ConnectionState.CLOSED:
            raise ConnectionClosedError(f"Connection to {self.url} is closed")
        if not self.is_open:
            await self.open()

        request = self.build_request(bytecode, op, args, request_id, processor)
        logger.debug(
            f"Submitting {request.op} request {request.request_id} "
            f"(processor={request.processor!r})"
        )
        return await self._do_send(request)

    def build_request(
        self,
        bytecode: Bytecode | None,
        op: str = Operation.BYTECODE.value,
        args: dict[str, Any] | None = None,
        request_id: str | None = None,
        processor: str | None = None,
    ) -> RequestMessage:
        """Shape the request message for a submit call.

        Bytecode requests default to the traversal processor and carry the
        bytecode under ``gremlin`` with the configured alias.
        """
        if args is None and bytecode is not None:
            args = {"gremlin": bytecode, "aliases": {"g": self.options.alias_target}}
        if not processor and op != Operation.EVAL.value:
            processor = TRAVERSAL_PROCESSOR
        return RequestMessage.create(op, args, processor=processor, request_id=request_id)

    def on(self, event: str | ConnectionEvent, handler: EventHandler) -> None:
        """Register an event handler."""
        self._listeners.on(event, handler)

    def remove_listener(self, event: str | ConnectionEvent, handler: EventHandler) -> None:
        """Remove an event handler."""
        self._listeners.remove_listener(event, handler)

    def emit(self, event: str | ConnectionEvent, *args: Any) -> int:
        """Notify listeners of an event. Returns the number notified."""
        return self._listeners.emit(event, *args)

    # Abstract methods for subclasses
    @abstractmethod
    async def _do_open(self) -> None:
        """Implementation-specific connection logic."""
        ...

    @abstractmethod
    async def _do_close(self) -> None:
        """Implementation-specific teardown logic."""
        ...

    @abstractmethod
    async def _do_send(self, request: RequestMessage) -> Any:
        """Send the request and return the server's result."""
        ...


class SubmitCall(NamedTuple):
    """Arguments of one ``submit`` call, as received."""

    bytecode: Bytecode | None
    op: str
    args: dict[str, Any] | None
    request_id: str | None
    processor: str | None


class MockConnection(BaseConnection):
    """Mock connection for testing.

    Records every submit call and the request built from it, and answers
    with canned results. No actual I/O - everything is in-memory.

    Usage:
        connection = MockConnection()
        connection.set_response("eval", [{"id": 1}])

        client = Client("ws://localhost:8182/gremlin", connection_factory=lambda u, o: connection)
        result = await client.submit("g.V()")

        assert connection.submit_calls[0].op == "eval"
    """

    def __init__(
        self,
        url: str = "mock://localhost:8182/gremlin",
        options: ClientOptions | None = None,
    ) -> None:
        super().__init__(url, options)
        self._responses: dict[str, Any] = {}
        self._errors: dict[str, BaseException] = {}
        self._open_error: BaseException | None = None
        self._submit_calls: list[SubmitCall] = []
        self._recorded_requests: list[RequestMessage] = []
        self.open_count = 0
        self.close_count = 0

    @property
    def submit_calls(self) -> list[SubmitCall]:
        """All submit calls received, in order."""
        return self._submit_calls.copy()

    @property
    def recorded_requests(self) -> list[RequestMessage]:
        """All requests that reached the (fake) wire."""
        return self._recorded_requests.copy()

    def set_response(self, op: str | Operation, result: Any) -> None:
        """Set the canned result for an operation."""
        self._responses[op.value if isinstance(op, Operation) else op] = result

    def set_error(self, op: str | Operation, error: BaseException) -> None:
        """Make requests for an operation fail with ``error``."""
        self._errors[op.value if isinstance(op, Operation) else op] = error

    def fail_open(self, error: BaseException | None) -> None:
        """Make the next opens fail with ``error`` (None to succeed again)."""
        self._open_error = error

    def clear(self) -> None:
        """Clear recorded calls, canned responses, errors and open failures."""
        self._submit_calls.clear()
        self._recorded_requests.clear()
        self._responses.clear()
        self._errors.clear()
        self._open_error = None

    async def submit(
        self,
        bytecode: Bytecode | None,
        op: str = Operation.BYTECODE.value,
        args: dict[str, Any] | None = None,
        request_id: str | None = None,
        processor: str | None = None,
    ) -> Any:
        """Record the call, then submit as usual."""
        self._submit_calls.append(SubmitCall(bytecode, op, args, request_id, processor))
        return await super().submit(bytecode, op, args, request_id, processor)

    async def _do_open(self) -> None:
        self.open_count += 1
        if self._open_error is not None:
            raise self._open_error

    async def _do_close(self) -> None:
        self.close_count += 1

    async def _do_send(self, request: RequestMessage) -> Any:
        """Record the request and return the canned result."""
        self._recorded_requests.append(request)
        if request.op in self._errors:
            raise self._errors[request.op]
        return self._responses.get(request.op, [])


def create_mock_connection(url: str, options: ClientOptions) -> MockConnection:
    """ConnectionFactory building a MockConnection."""
    return MockConnection(url, options)
