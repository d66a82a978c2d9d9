"""Gremlin Server client.

The Client turns scripts and traversal bytecode into requests on a single
Connection it owns. It holds no state besides its options and that
connection; lifecycle, correlation and errors are the connection's business.

Usage:
    async with Client("ws://localhost:8182/gremlin", connection_factory=factory) as client:
        vertices = await client.submit("g.V().has('name', name)", {"name": "marko"})

    # Session mode: scripts share server-side state
    client = Client(url, {"session": "abc123"}, connection_factory=factory)

    # Testing
    client = create_test_client()
    client.connection.set_response("eval", [1, 2, 3])
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, assert_never

from .connection import Connection, ConnectionFactory, MockConnection
from .events import ConnectionEvent, EventHandler, unsubscriber
from .options import ClientOptions
from .request import (
    Operation,
    RequestArgs,
    ScriptRequest,
    TraversalRequest,
    as_request,
)

logger = logging.getLogger(__name__)


class Client:
    """Sends scripts and bytecode to a Gremlin Server.

    Args:
        url: The server resource uri
        options: ClientOptions or a mapping of option values. A mapping is
            copied, never modified.
        connection_factory: Builds the Connection from ``url`` and the
            resolved options. Called once, here.
    """

    def __init__(
        self,
        url: str,
        options: ClientOptions | Mapping[str, Any] | None = None,
        *,
        connection_factory: ConnectionFactory,
    ) -> None:
        self._url = url
        self._options = ClientOptions.coerce(options)
        self._connection = connection_factory(url, self._options)

    @property
    def url(self) -> str:
        """The server resource uri."""
        return self._url

    @property
    def options(self) -> ClientOptions:
        """Resolved options (session and processor derived)."""
        return self._options

    @property
    def connection(self) -> Connection:
        """Access the underlying connection."""
        return self._connection

    async def open(self) -> None:
        """Open the underlying connection, if it's not already open."""
        await self._connection.open()

    async def submit(self, message: Any, bindings: Mapping[str, Any] | None = None) -> Any:
        """Send a script or bytecode to the server.

        Args:
            message: Script text, Bytecode, ScriptRequest or TraversalRequest
            bindings: Script bindings, if any (ignored for bytecode)

        Returns:
            The server's result, as produced by the connection

        Raises:
            UnsupportedMessageError: If ``message`` is not a script or bytecode
        """
        request = as_request(message, bindings)

        if isinstance(request, ScriptRequest):
            args = self._script_args(request)
            processor = self._options.processor or ""
            logger.debug(f"Submitting script (processor={processor!r})")
            return await self._connection.submit(
                None, Operation.EVAL.value, args.to_args(), None, processor
            )

        if isinstance(request, TraversalRequest):
            logger.debug("Submitting bytecode")
            return await self._connection.submit(request.bytecode)

        assert_never(request)

    def _script_args(self, request: ScriptRequest) -> RequestArgs:
        return RequestArgs(
            gremlin=request.text,
            bindings=request.bindings,
            accept=self._connection.mime_type,
            aliases={"g": self._options.alias_target},
            session=self._options.session if self._options.is_session_mode else None,
        )

    async def close(self) -> None:
        """Close the underlying connection."""
        await self._connection.close()

    def add_listener(self, event: str | ConnectionEvent, handler: EventHandler) -> None:
        """Add an event listener to the connection."""
        self._connection.on(event, handler)

    def remove_listener(self, event: str | ConnectionEvent, handler: EventHandler) -> None:
        """Remove a previously added event listener from the connection."""
        self._connection.remove_listener(event, handler)

    def subscribe(
        self, event: str | ConnectionEvent, handler: EventHandler
    ) -> Callable[[], None]:
        """Add an event listener and return a function that removes it."""
        self.add_listener(event, handler)
        return unsubscriber(self.remove_listener, event, handler)

    async def __aenter__(self) -> Client:
        await self.open()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()


# Factory functions


def create_test_client(
    url: str = "ws://localhost:8182/gremlin",
    options: ClientOptions | Mapping[str, Any] | None = None,
    connection: MockConnection | None = None,
) -> Client:
    """Create a client backed by a MockConnection.

    Args:
        url: Server uri recorded on the connection
        options: Client options
        connection: Pre-configured mock connection (creates new if None)

    Returns:
        Client whose ``connection`` is the MockConnection
    """

    def factory(factory_url: str, resolved: ClientOptions) -> Connection:
        if connection is not None:
            return connection
        return MockConnection(factory_url, resolved)

    return Client(url, options, connection_factory=factory)
