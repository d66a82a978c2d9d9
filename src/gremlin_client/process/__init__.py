"""Traversal data model shared between traversal construction and the driver."""

from .bytecode import Binding, Bytecode

__all__ = [
    "Binding",
    "Bytecode",
]
