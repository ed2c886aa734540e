from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Hashable, TypeVar

T = TypeVar("T", bound=Hashable)


@dataclass(frozen=True)
class ValueNode(Generic[T]):
    """
    Node identity that wraps an arbitrary hashable value.

    Two ValueNodes are equal when their values are equal, and a ValueNode
    hashes exactly like its value. Any hashable object can serve as a node
    directly; the wrapper keeps node identities from colliding with other
    keys of the same value type, e.g. an int node 1 versus a capacity 1.

    Attributes:
        value: The wrapped value. Must not be None.
    """

    value: T

    def __post_init__(self) -> None:
        if self.value is None:
            raise ValueError("ValueNode value must not be None.")

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        return f"node({self.value!r})"


def node(value: T) -> ValueNode[T]:
    """Shorthand for ``ValueNode(value)``."""
    return ValueNode(value)
