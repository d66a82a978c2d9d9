"""Exceptions raised by the Gremlin client.

Transport and protocol failures belong to the connection that produced
them. The client itself only raises UnsupportedMessageError.
"""

from __future__ import annotations

from typing import Any


class GremlinClientError(Exception):
    """Base class for errors raised by this package."""

    pass


class UnsupportedMessageError(GremlinClientError, TypeError):
    """Submitted message is neither a script nor bytecode."""

    def __init__(self, message: Any) -> None:
        super().__init__(
            f"Unsupported message type: {type(message).__name__} "
            "(expected a script string, Bytecode, ScriptRequest or TraversalRequest)"
        )
        self.message_type = type(message)


class ResponseError(GremlinClientError):
    """Server reported a failure for a request."""

    def __init__(
        self,
        status_code: int,
        message: str,
        attributes: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.attributes = attributes or {}


class ConnectionClosedError(GremlinClientError, ConnectionError):
    """Request submitted on a connection that was already closed."""

    pass
