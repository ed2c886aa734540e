from __future__ import annotations

from collections import deque
from typing import Deque, Dict

from preflow.lib.graph import CapacityGraph, NodeID


def calc_distance_labels(graph: CapacityGraph) -> Dict[NodeID, int]:
    """
    Compute exact distance labels by breadth-first search from the sink.

    The search walks arcs backwards (from a node to its predecessors), so a
    node's label is the number of arcs on its shortest path to the sink in
    the current capacity graph. The traversal is level by level with an
    explicit frontier queue.

    Special labels:
      - The sink is labeled 0.
      - The source is labeled with the graph's node count. No real distance
        reaches that value, so the source never looks close to the sink.
        The search does not continue through the source.
      - Nodes that cannot reach the sink get no label at all.

    Args:
        graph: The capacity graph to label.

    Returns:
        Dict[NodeID, int]: A new mapping of labeled node to distance, in
        discovery order with the source and sink first.

    Examples:
        >>> g = CapacityGraph("s", "t")
        >>> g.set_arc_capacity(1, "s", "a")
        >>> g.set_arc_capacity(1, "a", "t")
        >>> calc_distance_labels(g)
        {'s': 3, 't': 0, 'a': 1}
    """
    source = graph.get_source()
    sink = graph.get_sink()

    labels: Dict[NodeID, int] = {source: graph.get_number_of_nodes(), sink: 0}

    frontier: Deque[NodeID] = deque([sink])
    while frontier:
        node = frontier.popleft()
        level = labels[node] + 1
        for pred in graph.get_predecessors(node):
            if pred not in labels:
                labels[pred] = level
                frontier.append(pred)

    return labels
