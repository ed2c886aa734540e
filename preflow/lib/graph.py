from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral
from pickle import dumps, loads
from types import MappingProxyType
from typing import Any, Dict, Hashable, List, Mapping, Tuple

import networkx as nx

NodeID = Hashable
Arc = Tuple[NodeID, NodeID]

#: Edge attribute that holds the residual capacity of an arc.
CAPACITY_ATTR = "capacity"


@dataclass(frozen=True, eq=False)
class CapacityGraphState:
    """
    Immutable snapshot of a CapacityGraph's capacity table.

    Attributes:
        origin (CapacityGraph): The graph instance the snapshot was taken from.
            Only that instance accepts the snapshot in ``restore``.
        capacities (Mapping[Arc, int]): Read-only mapping of (tail, head) to
            positive capacity, in the graph's adjacency order.
    """

    origin: "CapacityGraph"
    capacities: Mapping[Arc, int]

    def __repr__(self) -> str:
        return (
            f"CapacityGraphState(origin=<CapacityGraph at {id(self.origin):#x}>, "
            f"arcs={len(self.capacities)})"
        )


class CapacityGraph(nx.DiGraph):
    """
    A directed capacity network with a fixed source and sink.

    Forward arcs and residual arcs share one representation: each stored
    networkx edge (tail, head) carries its current capacity in the
    ``capacity`` attribute. This class enforces:
      - An arc with capacity 0 is never stored; absence means capacity 0.
      - Self-arcs and ``None`` nodes are rejected with ValueError.
      - Nodes exist only while they are an endpoint of some arc, except the
        source and sink which are always present. ``number_of_nodes()`` is
        therefore the count of arc endpoints plus source and sink.
      - Successor and predecessor enumeration follows arc insertion order.
      - Capacities are integers; other numbers are rejected with ValueError.

    The inherited networkx mutators (add_node(s), remove_node(s), add_edge(s),
    remove_edge(s), update, clear, clear_edges) are routed through the same
    rules or rejected.

    Inherits from:
        networkx.DiGraph
    """

    def __init__(self, source: NodeID, sink: NodeID, **attr: Any) -> None:
        """
        Initialize a CapacityGraph.

        Args:
            source (NodeID): The node flow originates from.
            sink (NodeID): The node flow drains into.
            **attr: Graph attributes forwarded to the DiGraph constructor.

        Raises:
            ValueError: If source or sink is None, or if they are equal.
        """
        _check_node(source, "Source")
        _check_node(sink, "Sink")
        if source == sink:
            raise ValueError(f"Source and sink must differ, both are '{source}'.")
        super().__init__(**attr)
        self._source = source
        self._sink = sink
        super().add_node(source)
        super().add_node(sink)

    def copy(self, as_view: bool = False, pickle: bool = True) -> nx.DiGraph:
        """
        Create a copy of this graph.

        By default, uses pickle-based deep copying. The copy is a different
        instance, so snapshots taken from this graph are not accepted by the
        copy (and vice versa).

        Args:
            as_view (bool): If True, return a read-only ``networkx.DiGraph``
                view that tracks this graph's arcs; only used if pickle=False.
                Defaults to False.
            pickle (bool): If True, perform a pickle-based deep copy.
                Defaults to True.

        Returns:
            CapacityGraph: A new graph with identical source, sink and arcs,
                or a frozen DiGraph view when as_view=True.
        """
        if not pickle:
            if as_view:
                return nx.graphviews.generic_graph_view(self, nx.DiGraph)
            graph = self.__class__(self._source, self._sink, **self.graph)
            for (tail, head), capacity in self.get_capacities().items():
                graph.set_arc_capacity(capacity, tail, head)
            return graph
        return loads(dumps(self))

    def get_source(self) -> NodeID:
        return self._source

    def get_sink(self) -> NodeID:
        return self._sink

    #
    # Arc capacity management
    #
    def set_arc_capacity(self, capacity: int, tail: NodeID, head: NodeID) -> None:
        """
        Set the capacity of the arc (tail, head).

        Capacity 0 removes the arc; any positive value inserts or overwrites
        it. The reverse arc (head, tail) is not touched.

        Args:
            capacity (int): New capacity, must be >= 0.
            tail (NodeID): The arc's tail node.
            head (NodeID): The arc's head node.

        Raises:
            ValueError: If capacity is not a non-negative integer, a node is
                None, or tail == head.
        """
        _check_arc(tail, head)
        _check_integer(capacity, "Capacity")
        if capacity < 0:
            raise ValueError(
                f"Capacity of arc '{tail}'->'{head}' must be non-negative, "
                f"got {capacity}."
            )

        if capacity == 0:
            if self.has_edge(tail, head):
                super().remove_edge(tail, head)
                self._prune_node(tail)
                self._prune_node(head)
        elif self.has_edge(tail, head):
            self._succ[tail][head][CAPACITY_ATTR] = capacity
        else:
            super().add_edge(tail, head, **{CAPACITY_ATTR: capacity})

    def increase_arc_capacity(self, delta: int, tail: NodeID, head: NodeID) -> None:
        """
        Add ``delta`` to the current capacity of (tail, head).

        Args:
            delta (int): Capacity to add, must be > 0.
            tail (NodeID): The arc's tail node.
            head (NodeID): The arc's head node.

        Raises:
            ValueError: If delta is not a positive integer, a node is None, or
                tail == head.
        """
        _check_arc(tail, head)
        _check_integer(delta, "Capacity increase")
        if delta <= 0:
            raise ValueError(
                f"Capacity increase of arc '{tail}'->'{head}' must be positive, "
                f"got {delta}."
            )
        self.set_arc_capacity(self.get_arc_capacity(tail, head) + delta, tail, head)

    def get_arc_capacity(self, tail: NodeID, head: NodeID) -> int:
        """
        Return the capacity of (tail, head), or 0 if no such arc is stored.

        Unknown nodes are not an error; they simply have no arcs.
        """
        _check_node(tail, "Tail")
        _check_node(head, "Head")
        attr = self._succ.get(tail, {}).get(head)
        if attr is None:
            return 0
        return attr[CAPACITY_ATTR]

    def get_successors(self, tail: NodeID) -> List[NodeID]:
        """Heads of all stored arcs leaving ``tail``; empty for unknown nodes."""
        _check_node(tail, "Tail")
        return list(self._succ.get(tail, ()))

    def get_predecessors(self, head: NodeID) -> List[NodeID]:
        """Tails of all stored arcs entering ``head``; empty for unknown nodes."""
        _check_node(head, "Head")
        return list(self._pred.get(head, ()))

    def get_number_of_nodes(self) -> int:
        return self.number_of_nodes()

    def get_capacities(self) -> Dict[Arc, int]:
        """
        Retrieve the full capacity table.

        Returns:
            Dict[Arc, int]: A new dict mapping (tail, head) to capacity, in
                adjacency order (tails in node order, heads in arc order).
        """
        return {
            (tail, head): attr[CAPACITY_ATTR]
            for tail, head, attr in self.edges(data=True)
        }

    #
    # Snapshot / restore
    #
    def get_state(self) -> CapacityGraphState:
        """Capture the capacity table as an immutable snapshot."""
        return CapacityGraphState(
            origin=self, capacities=MappingProxyType(self.get_capacities())
        )

    def restore(self, state: CapacityGraphState) -> None:
        """
        Replace the capacity table with the one captured in ``state``.

        Arcs absent from the snapshot are dropped. Nothing is modified when
        the snapshot is rejected.

        Args:
            state (CapacityGraphState): A snapshot taken from this very graph.

        Raises:
            ValueError: If state is None or was produced by another graph instance.
        """
        if state is None:
            raise ValueError("Cannot restore from a missing state.")
        if state.origin is not self:
            raise ValueError(
                "State was captured from a different CapacityGraph instance."
            )

        self.clear_edges()
        for (tail, head), capacity in state.capacities.items():
            super().add_edge(tail, head, **{CAPACITY_ATTR: capacity})

    #
    # networkx mutators that would bypass the capacity invariants
    #
    def add_edge(self, u_of_edge: NodeID, v_of_edge: NodeID, **attr: Any) -> None:
        """
        Add an arc through the networkx API.

        The ``capacity`` keyword is required and routed to
        ``set_arc_capacity``; other attributes are rejected.

        Raises:
            ValueError: If capacity is missing or extra attributes are given.
        """
        if set(attr) != {CAPACITY_ATTR}:
            raise ValueError(
                f"Arcs carry only a '{CAPACITY_ATTR}' attribute, got {sorted(attr)}."
            )
        self.set_arc_capacity(attr[CAPACITY_ATTR], u_of_edge, v_of_edge)

    def add_edges_from(self, ebunch_to_add: Any, **attr: Any) -> None:
        """
        Add arcs one by one via ``add_edge``.

        Accepts (u, v) pairs, with the capacity given as a keyword, and
        (u, v, {"capacity": c}) triples.
        """
        for e in ebunch_to_add:
            if len(e) == 3:
                u, v, data = e
            else:
                u, v = e
                data = {}
            self.add_edge(u, v, **{**attr, **data})

    def remove_edge(self, u: NodeID, v: NodeID) -> None:
        """
        Remove the arc (u, v).

        Raises:
            ValueError: If the arc does not exist.
        """
        if not self.has_edge(u, v):
            raise ValueError(f"No arc from '{u}' to '{v}' to remove.")
        self.set_arc_capacity(0, u, v)

    def remove_edges_from(self, ebunch: Any) -> None:
        """Remove the listed arcs; pairs that are not stored are ignored."""
        for e in ebunch:
            u, v = e[:2]
            if self.has_edge(u, v):
                self.set_arc_capacity(0, u, v)

    def clear_edges(self) -> None:
        """Remove every arc, keeping only the source and sink."""
        super().clear_edges()
        for node in list(self._node):
            self._prune_node(node)

    def clear(self) -> None:
        """Remove every arc and all graph attributes; source and sink stay."""
        self.clear_edges()
        self.graph.clear()

    def update(self, edges: Any = None, nodes: Any = None) -> None:
        """
        Add arcs from another graph or an edge list via ``add_edges_from``.

        Raises:
            ValueError: If ``nodes`` is given; nodes are implied by arcs.
        """
        if nodes is not None:
            raise ValueError(
                "Cannot add nodes without arcs; use set_arc_capacity instead."
            )
        if edges is None:
            return
        if hasattr(edges, "edges"):
            edges = edges.edges(data=True)
        self.add_edges_from(edges)

    def add_node(self, node_for_adding: NodeID, **attr: Any) -> None:
        """
        Nodes are implied by arcs and cannot be added on their own.

        Raises:
            ValueError: Always.
        """
        raise ValueError(
            f"Cannot add node '{node_for_adding}' without an arc; "
            "use set_arc_capacity instead."
        )

    def add_nodes_from(self, nodes_for_adding: Any, **attr: Any) -> None:
        """
        Nodes are implied by arcs and cannot be added on their own.

        Raises:
            ValueError: Always.
        """
        raise ValueError(
            "Cannot add nodes without arcs; use set_arc_capacity instead."
        )

    def remove_node(self, n: NodeID) -> None:
        """
        Remove every arc at ``n``; the node goes away with its last arc.

        Raises:
            ValueError: If ``n`` is the source or sink, or is not in the graph.
        """
        if n == self._source or n == self._sink:
            raise ValueError(f"Cannot remove terminal node '{n}'.")
        if n not in self._node:
            raise ValueError(f"Node '{n}' is not in the graph.")
        heads = list(self._succ[n])
        tails = list(self._pred[n])
        for head in heads:
            self.set_arc_capacity(0, n, head)
        for tail in tails:
            self.set_arc_capacity(0, tail, n)

    def remove_nodes_from(self, nodes: Any) -> None:
        """Remove each listed node via ``remove_node``; unknown nodes are ignored."""
        for n in list(nodes):
            if n in self._node:
                self.remove_node(n)

    def _prune_node(self, node: NodeID) -> None:
        """Drop ``node`` once it is no longer an endpoint of any arc."""
        if node == self._source or node == self._sink:
            return
        if not self._succ[node] and not self._pred[node]:
            super().remove_node(node)


def _check_node(node: NodeID, role: str) -> None:
    if node is None:
        raise ValueError(f"{role} node must not be None.")


def _check_arc(tail: NodeID, head: NodeID) -> None:
    _check_node(tail, "Tail")
    _check_node(head, "Head")
    if tail == head:
        raise ValueError(f"Self-arc on node '{tail}' is not allowed.")


def _check_integer(value: Any, what: str) -> None:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise ValueError(f"{what} must be an integer, got {value!r}.")
