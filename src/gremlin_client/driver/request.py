"""Request shapes for the driver.

Two kinds of message can be submitted:
- ScriptRequest: Gremlin script text plus variable bindings, sent as an
  ``eval`` operation with a RequestArgs envelope
- TraversalRequest: traversal Bytecode, handed to the connection untouched

Example script envelope (``args`` of an ``eval`` request):
    {
        "gremlin": "g.V(x)",
        "bindings": {"x": 1},
        "language": "gremlin-groovy",
        "accept": "application/vnd.gremlin-v3.0+json",
        "aliases": {"g": "g"},
        "session": "3f1c..."  # only in session mode
    }
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

from ..errors import UnsupportedMessageError
from ..process.bytecode import Bytecode
from ..utils import get_uuid

SCRIPT_LANGUAGE = "gremlin-groovy"
TRAVERSAL_PROCESSOR = "traversal"


class Operation(str, Enum):
    """Server operations used by the driver."""

    EVAL = "eval"
    BYTECODE = "bytecode"


@dataclass(frozen=True)
class ScriptRequest:
    """A Gremlin script with optional bindings."""

    text: str
    bindings: Mapping[str, Any] | None = None


@dataclass(frozen=True)
class TraversalRequest:
    """A traversal in bytecode form."""

    bytecode: Bytecode


Message = Union[ScriptRequest, TraversalRequest]


def as_request(message: Any, bindings: Mapping[str, Any] | None = None) -> Message:
    """Normalize a submitted message.

    Plain strings become ScriptRequests carrying ``bindings``; Bytecode becomes
    a TraversalRequest. Already-typed requests are returned as is. Bindings
    do not apply to traversals and are ignored for them.

    Raises:
        UnsupportedMessageError: If the message is none of the above
        ValueError: If a ScriptRequest is given together with ``bindings``
    """
    if isinstance(message, ScriptRequest):
        if bindings is not None:
            raise ValueError("pass bindings on the ScriptRequest, not alongside it")
        return message
    if isinstance(message, TraversalRequest):
        return message
    if isinstance(message, str):
        return ScriptRequest(text=message, bindings=bindings)
    if isinstance(message, Bytecode):
        return TraversalRequest(bytecode=message)
    raise UnsupportedMessageError(message)


class RequestArgs(BaseModel):
    """Argument envelope of an ``eval`` request."""

    model_config = ConfigDict(frozen=True)

    gremlin: str
    bindings: dict[str, Any] | None = None
    language: str = SCRIPT_LANGUAGE
    accept: Any = None
    aliases: dict[str, str] = Field(default_factory=lambda: {"g": "g"})
    session: str | None = None

    def to_args(self) -> dict[str, Any]:
        """Wire mapping; absent bindings and session are left out."""
        args: dict[str, Any] = {"gremlin": self.gremlin}
        if self.bindings is not None:
            args["bindings"] = dict(self.bindings)
        args["language"] = self.language
        args["accept"] = self.accept
        args["aliases"] = dict(self.aliases)
        if self.session is not None:
            args["session"] = self.session
        return args


class RequestMessage(BaseModel):
    """A request as handed to the transport by a connection."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    request_id: str = Field(default_factory=get_uuid)
    op: str
    processor: str = ""
    args: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def create(
        cls,
        op: str | Operation,
        args: dict[str, Any] | None = None,
        processor: str | None = None,
        request_id: str | None = None,
    ) -> RequestMessage:
        """Factory method for creating requests."""
        return cls(
            request_id=request_id or get_uuid(),
            op=op.value if isinstance(op, Operation) else op,
            processor=processor or "",
            args=args or {},
        )
