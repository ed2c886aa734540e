from collections import defaultdict

import pytest

from preflow.config import SolverConfig
from preflow.lib.algorithms.base import ActiveSelect, AdmissibleSelect
from preflow.lib.algorithms.max_flow import calc_max_flow
from preflow.lib.algorithms.push_relabel import IterationLimitError
from preflow.lib.algorithms.types import FlowSummary
from preflow.lib.graph import CapacityGraph


class TestMaxFlowBasic:
    def test_max_flow_values(self, network6, ahuja4, bottleneck6, diamond, dead_end):
        assert calc_max_flow(network6) == 4
        assert calc_max_flow(ahuja4) == 6
        assert calc_max_flow(bottleneck6) == 9
        assert calc_max_flow(diamond) == 1
        assert calc_max_flow(dead_end) == 3

    def test_max_flow_no_arcs(self):
        assert calc_max_flow(CapacityGraph("s", "t")) == 0

    def test_max_flow_leaves_graph_unchanged(self, bottleneck6):
        before = bottleneck6.get_capacities()
        calc_max_flow(bottleneck6)
        assert bottleneck6.get_capacities() == before

    def test_max_flow_in_place(self, bottleneck6):
        """Without a copy the graph is left as the residual graph."""
        assert calc_max_flow(bottleneck6, copy_graph=False) == 9
        assert bottleneck6.get_arc_capacity("sink", "D") == 2
        assert bottleneck6.get_arc_capacity("C", "B") == 0

        # Nothing left to push on the residual graph
        assert calc_max_flow(bottleneck6, copy_graph=False) == 0

    @pytest.mark.parametrize("active_select", [ActiveSelect.HIGHEST_LABEL, ActiveSelect.FIFO])
    @pytest.mark.parametrize(
        "admissible_select",
        [AdmissibleSelect.FIRST_ADMISSIBLE, AdmissibleSelect.RANDOM_ADMISSIBLE],
    )
    def test_max_flow_strategies(self, ahuja4, active_select, admissible_select):
        flow = calc_max_flow(
            ahuja4,
            active_select=active_select,
            admissible_select=admissible_select,
            seed=3,
        )
        assert flow == 6

    def test_max_flow_config(self, bottleneck6):
        with pytest.raises(IterationLimitError):
            calc_max_flow(bottleneck6, config=SolverConfig(max_iterations=1))


class TestMaxFlowReturns:
    def test_return_graph(self, bottleneck6):
        flow, residual = calc_max_flow(bottleneck6, return_graph=True)
        assert flow == 9
        assert isinstance(residual, CapacityGraph)
        assert residual is not bottleneck6
        assert residual.get_arc_capacity("B", "sink") == 3
        assert residual.get_arc_capacity("sink", "B") == 7

    def test_return_summary(self, bottleneck6):
        flow, summary = calc_max_flow(bottleneck6, return_summary=True)
        assert flow == 9
        assert isinstance(summary, FlowSummary)
        assert summary.total_flow == 9

    def test_return_both(self, bottleneck6):
        result = calc_max_flow(bottleneck6, return_summary=True, return_graph=True)
        assert len(result) == 3
        flow, summary, residual = result
        assert flow == summary.total_flow == 9
        assert isinstance(residual, CapacityGraph)


class TestFlowSummary:
    def test_min_cut(self, bottleneck6):
        _, summary = calc_max_flow(bottleneck6, return_summary=True)

        assert summary.reachable == {"source", "A", "C", "D"}
        assert set(summary.min_cut) == {("source", "B"), ("C", "B"), ("D", "sink")}

    def test_saturated_arcs(self, bottleneck6):
        _, summary = calc_max_flow(bottleneck6, return_summary=True)

        assert summary.arc_flow[("source", "B")] == 1
        assert summary.arc_flow[("C", "B")] == 6
        assert summary.arc_flow[("D", "sink")] == 2
        assert summary.arc_flow[("B", "sink")] == 7
        assert summary.residual_cap[("C", "B")] == 0
        assert summary.residual_cap[("B", "sink")] == 3

    @pytest.mark.parametrize("fixture", ["network6", "ahuja4", "bottleneck6", "dead_end"])
    def test_min_cut_capacity_equals_flow(self, request, fixture):
        graph = request.getfixturevalue(fixture)
        original = graph.get_capacities()
        flow, summary = calc_max_flow(graph, return_summary=True)

        assert sum(original[arc] for arc in summary.min_cut) == flow
        for arc in summary.min_cut:
            assert summary.residual_cap[arc] == 0
            assert summary.arc_flow[arc] == original[arc]

    @pytest.mark.parametrize("fixture", ["network6", "ahuja4", "bottleneck6"])
    def test_arc_flow_is_conserved(self, request, fixture):
        graph = request.getfixturevalue(fixture)
        source, sink = graph.get_source(), graph.get_sink()
        flow, summary = calc_max_flow(graph, return_summary=True)

        balance = defaultdict(int)
        for (tail, head), amount in summary.arc_flow.items():
            assert 0 <= amount <= graph.get_arc_capacity(tail, head)
            balance[head] += amount
            balance[tail] -= amount

        assert balance[sink] == flow
        assert balance[source] == -flow
        for n, value in balance.items():
            if n not in (source, sink):
                assert value == 0

    def test_summary_excludes_dead_branch(self, dead_end):
        _, summary = calc_max_flow(dead_end, return_summary=True)
        assert {"X", "Y"} <= summary.reachable
        assert "sink" not in summary.reachable
        assert summary.arc_flow[("source", "X")] == 0

    def test_summary_is_frozen(self, diamond):
        _, summary = calc_max_flow(diamond, return_summary=True)
        with pytest.raises(AttributeError):
            summary.total_flow = 2  # type: ignore[misc]
