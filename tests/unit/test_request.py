"""Unit tests for request shapes."""

import pytest

from gremlin_client.driver.request import (
    Operation,
    RequestArgs,
    RequestMessage,
    ScriptRequest,
    TraversalRequest,
    as_request,
)
from gremlin_client.errors import UnsupportedMessageError
from gremlin_client.process.bytecode import Bytecode


class TestAsRequest:
    """as_request() normalization."""

    def test_string(self):
        """Strings become ScriptRequests with the given bindings."""
        request = as_request("g.V(x)", {"x": 1})

        assert request == ScriptRequest(text="g.V(x)", bindings={"x": 1})

    def test_bytecode(self):
        """Bytecode becomes a TraversalRequest wrapping the same object."""
        bytecode = Bytecode().add_step("V")

        request = as_request(bytecode)

        assert isinstance(request, TraversalRequest)
        assert request.bytecode is bytecode

    def test_typed_requests_pass_through(self):
        """Already-typed requests are returned unchanged."""
        script = ScriptRequest("1+1")
        traversal = TraversalRequest(Bytecode())

        assert as_request(script) is script
        assert as_request(traversal) is traversal

    def test_script_request_with_separate_bindings(self):
        """Bindings passed next to a ScriptRequest are rejected, not dropped."""
        with pytest.raises(ValueError, match="ScriptRequest"):
            as_request(ScriptRequest("g.V(x)"), {"x": 1})

    def test_bindings_ignored_for_traversals(self):
        """Traversals carry no script bindings."""
        bytecode = Bytecode()

        assert as_request(bytecode, {"x": 1}).bytecode is bytecode

    def test_unsupported(self):
        """Other types raise UnsupportedMessageError."""
        with pytest.raises(UnsupportedMessageError) as exc_info:
            as_request(3.14)

        assert exc_info.value.message_type is float


class TestRequestArgs:
    """RequestArgs envelope."""

    def test_full_envelope(self):
        """All fields present in session mode."""
        args = RequestArgs(
            gremlin="g.V()",
            bindings={"x": 1},
            accept="application/json",
            aliases={"g": "gmodern"},
            session="abc",
        )

        assert args.to_args() == {
            "gremlin": "g.V()",
            "bindings": {"x": 1},
            "language": "gremlin-groovy",
            "accept": "application/json",
            "aliases": {"g": "gmodern"},
            "session": "abc",
        }

    def test_defaults(self):
        """No bindings and no session are omitted; alias defaults to g."""
        args = RequestArgs(gremlin="g.V()", accept="application/json").to_args()

        assert args == {
            "gremlin": "g.V()",
            "language": "gremlin-groovy",
            "accept": "application/json",
            "aliases": {"g": "g"},
        }

    def test_none_binding_values_kept(self):
        """Bindings bound to None are still sent."""
        args = RequestArgs(gremlin="x", bindings={"x": None}).to_args()

        assert args["bindings"] == {"x": None}


class TestRequestMessage:
    """RequestMessage.create()."""

    def test_create(self):
        """Enum ops are converted to strings."""
        message = RequestMessage.create(Operation.EVAL, {"gremlin": "1"}, processor="session")

        assert message.op == "eval"
        assert message.processor == "session"
        assert message.args == {"gremlin": "1"}
        assert message.request_id

    def test_defaults(self):
        """Empty processor and args by default."""
        message = RequestMessage.create("bytecode", request_id="req-9")

        assert message.request_id == "req-9"
        assert message.processor == ""
        assert message.args == {}
