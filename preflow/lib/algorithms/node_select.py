from __future__ import annotations

import random
from typing import TYPE_CHECKING, Callable, List, Optional

from preflow.lib.algorithms.base import ActiveSelect, AdmissibleSelect
from preflow.lib.graph import NodeID

if TYPE_CHECKING:
    from preflow.lib.algorithms.push_relabel import PushRelabelMaxFlow

#: (solver, active_nodes) -> node to discharge next
ActiveSelectFunc = Callable[["PushRelabelMaxFlow", List[NodeID]], NodeID]

#: (solver, node) -> admissible successor of node, or None if there is none
AdmissibleSelectFunc = Callable[["PushRelabelMaxFlow", NodeID], Optional[NodeID]]


def active_select_fabric(
    active_select: ActiveSelect,
    active_select_func: Optional[ActiveSelectFunc] = None,
) -> ActiveSelectFunc:
    """
    Creates a function that picks the next active node to discharge.

    Args:
        active_select: An ActiveSelect enum specifying the selection policy.
        active_select_func: A user-supplied function if active_select=USER_DEFINED.

    Returns:
        A function with signature ``(solver, active_nodes) -> node``.
        ``active_nodes`` is never empty and follows the order in which nodes
        acquired their excess.

    Raises:
        ValueError: If USER_DEFINED is requested without a function, or the
            policy is unknown.
    """

    def get_highest_label_node(
        solver: PushRelabelMaxFlow, active_nodes: List[NodeID]
    ) -> NodeID:
        """
        Return the active node with the highest distance label.
        Unlabeled nodes rank below every labeled one.
        """

        def label_key(node: NodeID) -> int:
            distance = solver.get_node_distance(node)
            return -1 if distance is None else distance

        return max(active_nodes, key=label_key)

    def get_fifo_node(
        solver: PushRelabelMaxFlow, active_nodes: List[NodeID]
    ) -> NodeID:
        return active_nodes[0]

    # --------------------------------------------------------------------------
    # Map the ActiveSelect enum to the appropriate inner function.
    # --------------------------------------------------------------------------
    if active_select == ActiveSelect.HIGHEST_LABEL:
        return get_highest_label_node
    elif active_select == ActiveSelect.FIFO:
        return get_fifo_node
    elif active_select == ActiveSelect.USER_DEFINED:
        if active_select_func is None:
            raise ValueError(
                "active_select=USER_DEFINED requires 'active_select_func' to be provided."
            )
        return active_select_func
    else:
        raise ValueError(f"Unknown active_select value {active_select}")


def admissible_select_fabric(
    admissible_select: AdmissibleSelect,
    admissible_select_func: Optional[AdmissibleSelectFunc] = None,
    seed: Optional[int] = None,
) -> AdmissibleSelectFunc:
    """
    Creates a function that picks the successor an active node pushes to.

    Args:
        admissible_select: An AdmissibleSelect enum specifying the selection policy.
        admissible_select_func: A user-supplied function if
            admissible_select=USER_DEFINED.
        seed: Seed for the generator behind RANDOM_ADMISSIBLE. Ignored by
            the other policies.

    Returns:
        A function with signature ``(solver, node) -> Optional[node]``.
        It returns None when the node has no admissible successor; the
        solver then relabels the node.

    Raises:
        ValueError: If USER_DEFINED is requested without a function, or the
            policy is unknown.
    """

    def get_first_admissible(
        solver: PushRelabelMaxFlow, node: NodeID
    ) -> Optional[NodeID]:
        for successor in solver.get_successors(node):
            if solver.is_arc_admissible(node, successor):
                return successor
        return None

    rng = random.Random(seed)

    def get_random_admissible(
        solver: PushRelabelMaxFlow, node: NodeID
    ) -> Optional[NodeID]:
        candidates = [
            successor
            for successor in solver.get_successors(node)
            if solver.is_arc_admissible(node, successor)
        ]
        if not candidates:
            return None
        return rng.choice(candidates)

    # --------------------------------------------------------------------------
    # Map the AdmissibleSelect enum to the appropriate inner function.
    # --------------------------------------------------------------------------
    if admissible_select == AdmissibleSelect.FIRST_ADMISSIBLE:
        return get_first_admissible
    elif admissible_select == AdmissibleSelect.RANDOM_ADMISSIBLE:
        return get_random_admissible
    elif admissible_select == AdmissibleSelect.USER_DEFINED:
        if admissible_select_func is None:
            raise ValueError(
                "admissible_select=USER_DEFINED requires "
                "'admissible_select_func' to be provided."
            )
        return admissible_select_func
    else:
        raise ValueError(f"Unknown admissible_select value {admissible_select}")
