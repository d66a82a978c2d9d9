"""Gremlin client - submit scripts and traversal bytecode to a Gremlin Server.

Two request shapes:
- Scripts with bindings, optionally scoped to a server-side session
- Traversal bytecode, passed to the connection unchanged

The transport itself is pluggable: the Client owns one Connection built by a
factory you provide. MockConnection covers tests.
"""

from .driver import (
    BaseConnection,
    Client,
    ClientOptions,
    Connection,
    ConnectionEvent,
    ConnectionState,
    MockConnection,
    RequestArgs,
    RequestMessage,
    ScriptRequest,
    TraversalRequest,
    create_test_client,
)
from .errors import (
    ConnectionClosedError,
    GremlinClientError,
    ResponseError,
    UnsupportedMessageError,
)
from .process import Binding, Bytecode

__version__ = "0.1.0"

__all__ = [
    # Client
    "Client",
    "ClientOptions",
    "create_test_client",
    # Connection
    "Connection",
    "BaseConnection",
    "ConnectionState",
    "ConnectionEvent",
    "MockConnection",
    # Requests
    "ScriptRequest",
    "TraversalRequest",
    "RequestArgs",
    "RequestMessage",
    # Traversal data model
    "Bytecode",
    "Binding",
    # Errors
    "GremlinClientError",
    "UnsupportedMessageError",
    "ResponseError",
    "ConnectionClosedError",
]
