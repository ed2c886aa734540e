"""Push-relabel (preflow-push) maximum flow solver.

Terminology: for an arc (i, j), node i is the tail and node j the head.
The capacity graph doubles as the residual graph; pushing flow along
(i, j) lowers the capacity of (i, j) and raises that of (j, i).

Reference: R. K. Ahuja, T. L. Magnanti, J. B. Orlin, "Network Flows:
Theory, Algorithms, and Applications", chapter 7.
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Union

from preflow.config import SOLVER_CONFIG, SolverConfig
from preflow.lib.algorithms.base import ActiveSelect, AdmissibleSelect
from preflow.lib.algorithms.distance import calc_distance_labels
from preflow.lib.algorithms.node_select import (
    ActiveSelectFunc,
    AdmissibleSelectFunc,
    active_select_fabric,
    admissible_select_fabric,
)
from preflow.lib.graph import CapacityGraph, CapacityGraphState, NodeID
from preflow.logging import get_logger

logger = get_logger(__name__)


class PushRelabelInvariantError(RuntimeError):
    """Raised when the solver detects state that a correct run cannot reach.

    Attributes:
        node: The node at which the violation was found.
    """

    def __init__(self, message: str, node: NodeID) -> None:
        super().__init__(message)
        self.node = node


class IterationLimitError(RuntimeError):
    """Raised when a run exceeds ``SolverConfig.max_iterations``."""

    def __init__(self, iterations: int) -> None:
        super().__init__(f"Push-relabel exceeded {iterations} iterations.")
        self.iterations = iterations


@dataclass(frozen=True, eq=False)
class PushRelabelState:
    """Immutable snapshot of a solver: capacities, labels and excess together.

    Attributes:
        graph_state: Snapshot of the underlying capacity graph.
        distances: Read-only copy of the distance label table.
        excess: Read-only copy of the excess table.
    """

    graph_state: CapacityGraphState
    distances: Mapping[NodeID, int]
    excess: Mapping[NodeID, int]


class PushRelabelMaxFlow:
    """
    Maximum flow solver based on the push-relabel method.

    The solver owns two tables: a distance label per node and the excess
    (inflow minus outflow) of every node holding flow. Capacity changes go
    through the CapacityGraph only. A run floods every arc leaving the
    source, then repeatedly picks an active node (positive excess, neither
    source nor sink) and either pushes its excess along an admissible arc
    or relabels it, until no active node is left. The sink's excess is then
    the maximum flow value.

    Example:
        >>> g = CapacityGraph(1, 4)
        >>> g.set_arc_capacity(2, 1, 2)
        >>> g.set_arc_capacity(4, 1, 3)
        >>> g.set_arc_capacity(3, 2, 3)
        >>> g.set_arc_capacity(5, 3, 4)
        >>> g.set_arc_capacity(1, 2, 4)
        >>> solver = PushRelabelMaxFlow(g)
        >>> solver.preflow_push()
        >>> solver.get_flow_amount()
        6
    """

    def __init__(
        self,
        graph: CapacityGraph,
        active_select: Union[ActiveSelect, ActiveSelectFunc] = ActiveSelect.HIGHEST_LABEL,
        admissible_select: Union[
            AdmissibleSelect, AdmissibleSelectFunc
        ] = AdmissibleSelect.FIRST_ADMISSIBLE,
        *,
        active_select_func: Optional[ActiveSelectFunc] = None,
        admissible_select_func: Optional[AdmissibleSelectFunc] = None,
        seed: Optional[int] = None,
        config: Optional[SolverConfig] = None,
    ) -> None:
        """
        Args:
            graph: The capacity graph to solve. It is mutated in place.
            active_select: Active-node policy, or a ready selection function.
            admissible_select: Admissible-successor policy, or a ready
                selection function.
            active_select_func: Function used when active_select=USER_DEFINED.
            admissible_select_func: Function used when
                admissible_select=USER_DEFINED.
            seed: Seed for AdmissibleSelect.RANDOM_ADMISSIBLE. Falls back to
                ``config.default_random_seed``.
            config: Run-time settings; defaults to the global SOLVER_CONFIG.

        Raises:
            ValueError: If graph is None or a USER_DEFINED policy lacks its function.
        """
        if graph is None:
            raise ValueError("PushRelabelMaxFlow requires a CapacityGraph.")
        self._graph = graph
        self._config = config if config is not None else SOLVER_CONFIG
        self._distances: Dict[NodeID, int] = {}
        self._excess: Dict[NodeID, int] = {}

        if callable(active_select):
            self._active_select = active_select
        else:
            self._active_select = active_select_fabric(
                active_select, active_select_func
            )

        if callable(admissible_select):
            self._admissible_select = admissible_select
        else:
            if seed is None:
                seed = self._config.default_random_seed
            self._admissible_select = admissible_select_fabric(
                admissible_select, admissible_select_func, seed
            )

    @property
    def graph(self) -> CapacityGraph:
        return self._graph

    def get_source(self) -> NodeID:
        return self._graph.get_source()

    def get_sink(self) -> NodeID:
        return self._graph.get_sink()

    #
    # Algorithm
    #
    def preprocess(self) -> None:
        """
        Recompute distance labels and saturate every arc leaving the source.

        This creates the first set of active nodes. It may run again later,
        e.g. after capacities were increased, and then relabels and floods
        from the source's current successors.
        """
        source = self.get_source()
        self.calculate_distances()
        for node in self.get_successors(source):
            self.push_flow(self._graph.get_arc_capacity(source, node), source, node)
        logger.debug(
            "Preprocessed: %d labeled nodes, %d active nodes",
            len(self._distances),
            len(self.get_active_nodes()),
        )

    def calculate_distances(self) -> None:
        """Replace the label table with exact distances to the sink."""
        self._distances.clear()
        self._distances.update(calc_distance_labels(self._graph))
        logger.debug("Distance labels: %s", self._distances)

    def preflow_push(self) -> None:
        """Run the full algorithm: preprocess, then push/relabel to completion.

        Raises:
            PushRelabelInvariantError: If an active node has no successors.
            IterationLimitError: If ``config.max_iterations`` is exceeded.
        """
        self.preprocess()
        self._push_relabel()

    def _push_relabel(self) -> None:
        iterations = 0
        pushes = 0
        while True:
            active_nodes = self.get_active_nodes()
            if not active_nodes:
                break

            iterations += 1
            if self._config.iteration_limit_reached(iterations):
                raise IterationLimitError(self._config.max_iterations)

            node = self._active_select(self, active_nodes)
            if self._push_relabel_node(node):
                pushes += 1

            if self._config.should_log_progress(iterations):
                logger.debug(
                    "Iteration %d: %d active nodes, flow so far %d",
                    iterations,
                    len(active_nodes),
                    self.get_flow_amount(),
                )

        logger.debug(
            "Push-relabel finished after %d iterations (%d pushes, %d relabels); "
            "flow=%d",
            iterations,
            pushes,
            iterations - pushes,
            self.get_flow_amount(),
        )

    def _push_relabel_node(self, node: NodeID) -> bool:
        """
        Push excess out of ``node`` along an admissible arc, or relabel it.

        Returns:
            bool: True if flow was pushed, False if the node was relabeled.
        """
        excess = self.get_node_excess(node)
        if excess <= 0:
            raise ValueError(f"Node '{node}' has no excess to push.")

        admissible_node = self._admissible_select(self, node)
        if admissible_node is not None:
            amount = min(excess, self._graph.get_arc_capacity(node, admissible_node))
            self.push_flow(amount, node, admissible_node)
            return True

        self._relabel(node)
        return False

    def _relabel(self, node: NodeID) -> None:
        successors = self.get_successors(node)
        if not successors:
            raise PushRelabelInvariantError(
                f"Active node '{node}' does not have successors.", node
            )
        new_distance = 1 + min(self._distances[s] for s in successors)
        logger.debug(
            "Relabel '%s': %s -> %d",
            node,
            self._distances.get(node),
            new_distance,
        )
        self._distances[node] = new_distance

    def push_flow(self, amount: int, tail: NodeID, head: NodeID) -> None:
        """
        Push ``amount`` of flow along the arc (tail, head).

        The residual capacity of (tail, head) drops by ``amount`` and that of
        (head, tail) rises by the same amount. The head gains excess and the
        tail loses it, except for the source, which is an unbounded supply.
        All checks run before anything is modified.

        Args:
            amount: Flow to push, must be > 0.
            tail: The arc's tail node.
            head: The arc's head node.

        Raises:
            ValueError: If amount is not a positive integer, exceeds the
                tail's excess (tail other than the source), or exceeds the
                arc's residual capacity, or if a node is None.
        """
        _check_node(tail)
        _check_node(head)
        if isinstance(amount, bool) or not isinstance(amount, Integral):
            raise ValueError(f"Amount of flow must be an integer, got {amount!r}.")
        if amount <= 0:
            raise ValueError(f"Amount of flow must be greater than 0, got {amount}.")
        if not self._is_source(tail) and amount > self.get_node_excess(tail):
            raise ValueError(
                f"Can't push {amount} from '{tail}': excess is only "
                f"{self.get_node_excess(tail)}."
            )
        capacity = self._graph.get_arc_capacity(tail, head)
        if amount > capacity:
            raise ValueError(
                f"Can't push {amount} along '{tail}'->'{head}': residual capacity "
                f"is only {capacity}."
            )

        # Reverse arc first so neither endpoint is pruned in between
        self._graph.increase_arc_capacity(amount, head, tail)
        self._graph.set_arc_capacity(capacity - amount, tail, head)
        self._add_excess(amount, head)
        if not self._is_source(tail):
            self._reduce_excess(amount, tail)

    def _add_excess(self, amount: int, node: NodeID) -> None:
        if self._is_source(node):
            return
        self._excess[node] = self._excess.get(node, 0) + amount

    def _reduce_excess(self, amount: int, node: NodeID) -> None:
        remaining = self._excess[node] - amount
        if remaining == 0:
            del self._excess[node]
        else:
            self._excess[node] = remaining

    def _is_source(self, node: NodeID) -> bool:
        return node == self.get_source()

    #
    # Queries
    #
    def get_flow_amount(self) -> int:
        """Flow that reached the sink; the max-flow value once a run is done."""
        return self.get_node_excess(self.get_sink())

    def get_node_excess(self, node: NodeID) -> int:
        """
        Inflow minus outflow accumulated at ``node`` and not yet passed on.

        Zero for nodes without excess. The source is never tracked and
        always reports 0.
        """
        _check_node(node)
        return self._excess.get(node, 0)

    def get_node_distance(self, node: NodeID) -> Optional[int]:
        """Distance label of ``node``, or None if it has no label."""
        _check_node(node)
        return self._distances.get(node)

    def get_arc_capacity(self, tail: NodeID, head: NodeID) -> int:
        return self._graph.get_arc_capacity(tail, head)

    def get_successors(self, tail: NodeID) -> List[NodeID]:
        """
        Residual successors of ``tail`` that carry a distance label.

        Nodes without a label could not reach the sink when labels were last
        computed, so flow is never routed to them.
        """
        return [
            node
            for node in self._graph.get_successors(tail)
            if node in self._distances
        ]

    def is_arc_admissible(self, tail: NodeID, head: NodeID) -> bool:
        """
        True iff ``label(tail) == label(head) + 1``.

        A pure label comparison: whether the arc exists is not checked.
        Unlabeled nodes never form an admissible arc.
        """
        tail_distance = self.get_node_distance(tail)
        head_distance = self.get_node_distance(head)
        if tail_distance is None or head_distance is None:
            return False
        return tail_distance == head_distance + 1

    def get_active_nodes(self) -> List[NodeID]:
        """Nodes other than source and sink holding positive excess.

        Returned in the order the nodes acquired their current excess.
        """
        source = self.get_source()
        sink = self.get_sink()
        return [node for node in self._excess if node != source and node != sink]

    #
    # Snapshot / restore
    #
    def get_state(self) -> PushRelabelState:
        """Capture capacities, labels and excess as one immutable snapshot."""
        return PushRelabelState(
            graph_state=self._graph.get_state(),
            distances=MappingProxyType(dict(self._distances)),
            excess=MappingProxyType(dict(self._excess)),
        )

    def restore(self, state: PushRelabelState) -> None:
        """
        Roll capacities, labels and excess back to ``state``.

        The graph validates that the snapshot belongs to it before anything
        changes, so a rejected snapshot leaves the solver untouched.

        Raises:
            ValueError: If state is None or was taken from another graph.
        """
        if state is None:
            raise ValueError("Cannot restore from a missing state.")
        self._graph.restore(state.graph_state)
        self._distances.clear()
        self._distances.update(state.distances)
        self._excess.clear()
        self._excess.update(state.excess)


def _check_node(node: NodeID) -> None:
    if node is None:
        raise ValueError("Node must not be None.")
