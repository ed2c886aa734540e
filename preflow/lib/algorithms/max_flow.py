from typing import Dict, Literal, Optional, Union, overload

from preflow.config import SolverConfig
from preflow.lib.algorithms.base import ActiveSelect, AdmissibleSelect
from preflow.lib.algorithms.push_relabel import PushRelabelMaxFlow
from preflow.lib.algorithms.types import FlowSummary
from preflow.lib.graph import Arc, CapacityGraph


@overload
def calc_max_flow(
    graph: CapacityGraph,
    *,
    return_summary: Literal[False] = False,
    return_graph: Literal[False] = False,
    active_select: ActiveSelect = ActiveSelect.HIGHEST_LABEL,
    admissible_select: AdmissibleSelect = AdmissibleSelect.FIRST_ADMISSIBLE,
    seed: Optional[int] = None,
    config: Optional[SolverConfig] = None,
    copy_graph: bool = True,
) -> int: ...


@overload
def calc_max_flow(
    graph: CapacityGraph,
    *,
    return_summary: Literal[True],
    return_graph: Literal[False] = False,
    active_select: ActiveSelect = ActiveSelect.HIGHEST_LABEL,
    admissible_select: AdmissibleSelect = AdmissibleSelect.FIRST_ADMISSIBLE,
    seed: Optional[int] = None,
    config: Optional[SolverConfig] = None,
    copy_graph: bool = True,
) -> tuple[int, FlowSummary]: ...


@overload
def calc_max_flow(
    graph: CapacityGraph,
    *,
    return_summary: Literal[False] = False,
    return_graph: Literal[True],
    active_select: ActiveSelect = ActiveSelect.HIGHEST_LABEL,
    admissible_select: AdmissibleSelect = AdmissibleSelect.FIRST_ADMISSIBLE,
    seed: Optional[int] = None,
    config: Optional[SolverConfig] = None,
    copy_graph: bool = True,
) -> tuple[int, CapacityGraph]: ...


@overload
def calc_max_flow(
    graph: CapacityGraph,
    *,
    return_summary: Literal[True],
    return_graph: Literal[True],
    active_select: ActiveSelect = ActiveSelect.HIGHEST_LABEL,
    admissible_select: AdmissibleSelect = AdmissibleSelect.FIRST_ADMISSIBLE,
    seed: Optional[int] = None,
    config: Optional[SolverConfig] = None,
    copy_graph: bool = True,
) -> tuple[int, FlowSummary, CapacityGraph]: ...


def calc_max_flow(
    graph: CapacityGraph,
    *,
    return_summary: bool = False,
    return_graph: bool = False,
    active_select: ActiveSelect = ActiveSelect.HIGHEST_LABEL,
    admissible_select: AdmissibleSelect = AdmissibleSelect.FIRST_ADMISSIBLE,
    seed: Optional[int] = None,
    config: Optional[SolverConfig] = None,
    copy_graph: bool = True,
) -> Union[int, tuple]:
    """Compute the maximum flow from the graph's source to its sink.

    Runs ``PushRelabelMaxFlow.preflow_push`` and reads the flow value off the
    sink. The solver turns the capacity graph into its residual graph, so by
    default it works on a copy and the caller's graph stays unmodified.

    Args:
        graph (CapacityGraph):
            The capacity graph; source and sink are taken from it.
        return_summary (bool):
            If True, also return a FlowSummary with per-arc flows and the
            minimum cut. Defaults to False.
        return_graph (bool):
            If True, also return the residual graph left by the solver.
            Defaults to False.
        active_select (ActiveSelect):
            Policy for choosing the next active node. Defaults to
            ``ActiveSelect.HIGHEST_LABEL``.
        admissible_select (AdmissibleSelect):
            Policy for choosing the admissible successor. Defaults to
            ``AdmissibleSelect.FIRST_ADMISSIBLE``.
        seed (Optional[int]):
            Seed for ``AdmissibleSelect.RANDOM_ADMISSIBLE``.
        config (Optional[SolverConfig]):
            Solver settings; the global SOLVER_CONFIG when None.
        copy_graph (bool):
            If True, solve on a copy of the graph. If False, the graph is
            turned into the residual graph in place. Defaults to True.

    Returns:
        Union[int, tuple]:
            - If neither return_summary nor return_graph: int (max flow value)
            - If return_summary only: tuple[int, FlowSummary]
            - If return_graph only: tuple[int, CapacityGraph]
            - If both flags: tuple[int, FlowSummary, CapacityGraph]

    Examples:
        >>> g = CapacityGraph("A", "C")
        >>> g.set_arc_capacity(10, "A", "B")
        >>> g.set_arc_capacity(5, "B", "C")
        >>> calc_max_flow(g)
        5
        >>> flow, summary = calc_max_flow(g, return_summary=True)
        >>> summary.min_cut
        [('B', 'C')]
    """
    original_cap = graph.get_capacities()
    flow_graph = graph.copy() if copy_graph else graph

    solver = PushRelabelMaxFlow(
        flow_graph,
        active_select,
        admissible_select,
        seed=seed,
        config=config,
    )
    solver.preflow_push()
    max_flow = solver.get_flow_amount()

    if not (return_summary or return_graph):
        return max_flow

    ret: list = [max_flow]
    if return_summary:
        ret.append(_build_flow_summary(max_flow, flow_graph, original_cap))
    if return_graph:
        ret.append(flow_graph)
    return tuple(ret)


def _build_flow_summary(
    total_flow: int,
    flow_graph: CapacityGraph,
    original_cap: Dict[Arc, int],
) -> FlowSummary:
    """Build a FlowSummary from the residual graph and the input capacities."""
    arc_flow = {}
    residual_cap = {}
    for (tail, head), capacity in original_cap.items():
        residual = flow_graph.get_arc_capacity(tail, head)
        residual_cap[(tail, head)] = residual
        arc_flow[(tail, head)] = max(0, capacity - residual)

    # DFS in residual graph to find nodes reachable from source
    source = flow_graph.get_source()
    reachable = set()
    stack = [source]
    while stack:
        n = stack.pop()
        if n in reachable:
            continue
        reachable.add(n)
        for nbr in flow_graph.get_successors(n):
            if nbr not in reachable:
                stack.append(nbr)

    min_cut = [
        (tail, head)
        for tail, head in original_cap
        if tail in reachable and head not in reachable
    ]

    return FlowSummary(
        total_flow=total_flow,
        arc_flow=arc_flow,
        residual_cap=residual_cap,
        reachable=reachable,
        min_cut=min_cut,
    )
