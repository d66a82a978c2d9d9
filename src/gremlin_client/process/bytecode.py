"""Traversal bytecode.

Bytecode is the structured form of a traversal: a list of source
instructions (configuring the traversal source, e.g. ``withSack``) followed
by a list of step instructions (``V``, ``out``, ``has``, ...). Each
instruction is a list whose first element is the operator name and whose
remaining elements are its arguments.

Example:
    bytecode = Bytecode()
    bytecode.add_step("V")
    bytecode.add_step("has", "name", Binding("n", "marko"))

    bytecode.step_instructions  # [["V"], ["has", "name", Binding("n", "marko")]]
    bytecode.bindings           # {"n": "marko"}

The client never looks inside bytecode; it is handed to the connection as is.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Binding:
    """A named argument value, sent to the server as a variable binding."""

    key: str
    value: Any


class Bytecode:
    """Ordered source and step instructions of a traversal."""

    def __init__(self, bytecode: Bytecode | None = None) -> None:
        self.source_instructions: list[list[Any]] = []
        self.step_instructions: list[list[Any]] = []
        self.bindings: dict[str, Any] = {}
        if bytecode is not None:
            self.source_instructions = [list(i) for i in bytecode.source_instructions]
            self.step_instructions = [list(i) for i in bytecode.step_instructions]
            self.bindings = dict(bytecode.bindings)

    def add_source(self, source_name: str, *args: Any) -> Bytecode:
        """Append a source instruction."""
        self.source_instructions.append(self._instruction(source_name, args))
        return self

    def add_step(self, step_name: str, *args: Any) -> Bytecode:
        """Append a step instruction."""
        self.step_instructions.append(self._instruction(step_name, args))
        return self

    def _instruction(self, name: str, args: tuple[Any, ...]) -> list[Any]:
        for arg in args:
            if isinstance(arg, Binding):
                self.bindings[arg.key] = arg.value
        return [name, *args]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bytecode):
            return NotImplemented
        return (
            self.source_instructions == other.source_instructions
            and self.step_instructions == other.step_instructions
        )

    def __repr__(self) -> str:
        parts = []
        if self.source_instructions:
            parts.append(f"source={self.source_instructions!r}")
        if self.step_instructions:
            parts.append(f"step={self.step_instructions!r}")
        return f"Bytecode({', '.join(parts)})"
