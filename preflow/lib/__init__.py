"""Library utilities for preflow.

This package contains the capacity graph and integration modules for
external libraries.
"""

from preflow.lib.graph import CapacityGraph, CapacityGraphState
from preflow.lib.node import ValueNode, node
from preflow.lib.nx import from_networkx, to_networkx

__all__ = [
    "CapacityGraph",
    "CapacityGraphState",
    "ValueNode",
    "node",
    "from_networkx",
    "to_networkx",
]
