"""Driver layer: the Client and the connection it submits through.

Key concepts:
- Client: shapes script and bytecode requests, derives session settings
- Connection: carries requests to the server (protocol, pluggable)
- ClientOptions: immutable configuration shared by both
"""

from .client import Client, create_test_client
from .connection import (
    DEFAULT_MIME_TYPE,
    BaseConnection,
    Connection,
    ConnectionFactory,
    ConnectionState,
    MockConnection,
    SubmitCall,
    create_mock_connection,
)
from .events import ConnectionEvent, EventHandler, EventListeners
from .options import ClientOptions
from .request import (
    SCRIPT_LANGUAGE,
    Message,
    Operation,
    RequestArgs,
    RequestMessage,
    ScriptRequest,
    TraversalRequest,
    as_request,
)

__all__ = [
    # Client
    "Client",
    "create_test_client",
    "ClientOptions",
    # Connection protocol & base
    "Connection",
    "ConnectionFactory",
    "BaseConnection",
    "ConnectionState",
    "DEFAULT_MIME_TYPE",
    # Testing
    "MockConnection",
    "SubmitCall",
    "create_mock_connection",
    # Events
    "ConnectionEvent",
    "EventHandler",
    "EventListeners",
    # Requests
    "Message",
    "ScriptRequest",
    "TraversalRequest",
    "RequestArgs",
    "RequestMessage",
    "Operation",
    "SCRIPT_LANGUAGE",
    "as_request",
]
