"""preflow: push-relabel maximum flow engine.

Callers build a capacity graph, run the solver and read back flow and
excess values. Snapshots of graph and solver state allow rolling back to a
common baseline, e.g. to compare selection strategies.

Primary API:
    CapacityGraph - Capacity network with fixed source and sink
    PushRelabelMaxFlow - Push-relabel solver operating on a CapacityGraph
    calc_max_flow() - One-call max-flow value, with optional min-cut summary
    ActiveSelect, AdmissibleSelect - Built-in node selection policies
    from_networkx() / to_networkx() - NetworkX conversion

Example:
    from preflow import CapacityGraph, PushRelabelMaxFlow

    g = CapacityGraph("s", "t")
    g.set_arc_capacity(3, "s", "a")
    g.set_arc_capacity(2, "a", "t")

    solver = PushRelabelMaxFlow(g)
    baseline = solver.get_state()
    solver.preflow_push()
    solver.get_flow_amount()  # 2
    solver.restore(baseline)
"""

from __future__ import annotations

from preflow import logging
from preflow.config import SOLVER_CONFIG, SolverConfig
from preflow.lib.algorithms.base import ActiveSelect, AdmissibleSelect
from preflow.lib.algorithms.distance import calc_distance_labels
from preflow.lib.algorithms.max_flow import calc_max_flow
from preflow.lib.algorithms.node_select import (
    active_select_fabric,
    admissible_select_fabric,
)
from preflow.lib.algorithms.push_relabel import (
    IterationLimitError,
    PushRelabelInvariantError,
    PushRelabelMaxFlow,
    PushRelabelState,
)
from preflow.lib.algorithms.types import FlowSummary
from preflow.lib.graph import CapacityGraph, CapacityGraphState
from preflow.lib.node import ValueNode, node
from preflow.lib.nx import from_networkx, to_networkx

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Graph
    "CapacityGraph",
    "CapacityGraphState",
    "ValueNode",
    "node",
    # Solver
    "PushRelabelMaxFlow",
    "PushRelabelState",
    "calc_max_flow",
    "calc_distance_labels",
    "FlowSummary",
    # Strategies
    "ActiveSelect",
    "AdmissibleSelect",
    "active_select_fabric",
    "admissible_select_fabric",
    # Errors
    "PushRelabelInvariantError",
    "IterationLimitError",
    # Configuration
    "SolverConfig",
    "SOLVER_CONFIG",
    # Library integrations (NetworkX)
    "from_networkx",
    "to_networkx",
    # Utilities
    "logging",
]
