"""NetworkX graph conversion utilities.

Converts between plain NetworkX graphs and CapacityGraph.

Example:
    >>> import networkx as nx
    >>> from preflow.lib.nx import from_networkx, to_networkx
    >>>
    >>> G = nx.DiGraph()
    >>> G.add_edge("s", "a", capacity=3)
    >>> G.add_edge("a", "t", capacity=2)
    >>>
    >>> graph = from_networkx(G, "s", "t")
    >>> graph.get_arc_capacity("s", "a")
    3
    >>> G_out = to_networkx(graph)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Union

import networkx as nx

from preflow.lib.graph import CAPACITY_ATTR, CapacityGraph, NodeID
from preflow.logging import get_logger

if TYPE_CHECKING:
    NxGraph = Union[nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph]
else:
    NxGraph = Any

logger = get_logger(__name__)


def from_networkx(
    G: NxGraph,
    source: NodeID,
    sink: NodeID,
    *,
    capacity_attr: str = "capacity",
) -> CapacityGraph:
    """Build a CapacityGraph from a NetworkX graph.

    Parallel edges of multigraphs are merged by summing their capacities.
    Each edge of an undirected graph yields arcs in both directions.
    Edges with zero capacity and self-loops carry no flow and are skipped.

    Args:
        G: NetworkX graph (DiGraph, MultiDiGraph, Graph, or MultiGraph).
        source: Source node; must be a node of G.
        sink: Sink node; must be a node of G.
        capacity_attr: Edge attribute holding integer capacity.

    Returns:
        CapacityGraph with the given source and sink.

    Raises:
        ValueError: If source or sink is not in G, or an edge lacks capacity
            or has a negative or non-integer one.
    """
    if source not in G:
        raise ValueError(f"Source node '{source}' is not in the graph.")
    if sink not in G:
        raise ValueError(f"Sink node '{sink}' is not in the graph.")

    graph = CapacityGraph(source, sink)
    skipped = 0
    for u, v, data in G.edges(data=True):
        if capacity_attr not in data:
            raise ValueError(f"Edge '{u}'->'{v}' has no '{capacity_attr}' attribute.")
        capacity = data[capacity_attr]
        if capacity < 0:
            raise ValueError(
                f"Edge '{u}'->'{v}' has negative capacity {capacity}."
            )
        if capacity == 0 or u == v:
            skipped += 1
            continue

        graph.increase_arc_capacity(capacity, u, v)
        if not G.is_directed():
            graph.increase_arc_capacity(capacity, v, u)

    if skipped:
        logger.debug("Skipped %d zero-capacity or self-loop edges", skipped)
    return graph


def to_networkx(graph: CapacityGraph) -> nx.DiGraph:
    """Convert a CapacityGraph to a plain NetworkX DiGraph.

    Every stored arc becomes an edge with a ``capacity`` attribute. The
    source and sink are recorded in the graph attributes ``source`` and
    ``sink``.

    Args:
        graph: The CapacityGraph to convert.

    Returns:
        A new nx.DiGraph; changes to it do not affect ``graph``.
    """
    G = nx.DiGraph(source=graph.get_source(), sink=graph.get_sink())
    G.add_nodes_from(graph.nodes)
    for (tail, head), capacity in graph.get_capacities().items():
        G.add_edge(tail, head, **{CAPACITY_ATTR: capacity})
    return G
