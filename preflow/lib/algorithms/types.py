"""Types and data structures for max-flow results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Set

from preflow.lib.graph import Arc, NodeID


@dataclass(frozen=True)
class FlowSummary:
    """Summary of a max-flow computation.

    Attributes:
        total_flow: The maximum flow value achieved.
        arc_flow: Net flow on each arc of the input graph, indexed by
            (tail, head). Opposite arcs never both carry positive flow.
        residual_cap: Residual capacity left on each arc of the input graph.
        reachable: Nodes reachable from the source in the residual graph.
        min_cut: Input arcs leading from a reachable to an unreachable node.
            Their capacities add up to ``total_flow``.
    """

    total_flow: int
    arc_flow: Dict[Arc, int]
    residual_cap: Dict[Arc, int]
    reachable: Set[NodeID]
    min_cut: List[Arc]
