from preflow.lib.algorithms.distance import calc_distance_labels
from preflow.lib.graph import CapacityGraph
from preflow.lib.node import node


def test_labels_network6(network6):
    labels = calc_distance_labels(network6)
    assert labels == {
        "source": 6,
        "sink": 0,
        "C": 1,
        "D": 1,
        "A": 2,
        "B": 2,
    }


def test_labels_ahuja4(ahuja4):
    labels = calc_distance_labels(ahuja4)
    assert labels[node(4)] == 0
    assert labels[node(3)] == 1
    assert labels[node(2)] == 1
    assert labels[node(1)] == 4


def test_source_label_is_node_count_even_when_adjacent_to_sink():
    """The source keeps its sentinel label instead of its real distance."""
    g = CapacityGraph("s", "t")
    g.set_arc_capacity(1, "s", "t")
    g.set_arc_capacity(1, "a", "t")
    labels = calc_distance_labels(g)
    assert labels == {"s": 3, "t": 0, "a": 1}


def test_unreachable_nodes_are_not_labeled(dead_end):
    labels = calc_distance_labels(dead_end)
    assert "X" not in labels
    assert "Y" not in labels
    assert labels == {"source": 5, "sink": 0, "A": 1}


def test_search_does_not_pass_through_source():
    """Nodes that reach the sink only via the source stay unlabeled."""
    g = CapacityGraph("s", "t")
    g.set_arc_capacity(1, "s", "t")
    g.set_arc_capacity(1, "x", "s")
    labels = calc_distance_labels(g)
    assert "x" not in labels


def test_labels_follow_shortest_path():
    # s -> a -> b -> c -> t, plus shortcut a -> t
    g = CapacityGraph("s", "t")
    g.set_arc_capacity(1, "s", "a")
    g.set_arc_capacity(1, "a", "b")
    g.set_arc_capacity(1, "b", "c")
    g.set_arc_capacity(1, "c", "t")
    g.set_arc_capacity(1, "a", "t")
    labels = calc_distance_labels(g)
    assert labels["c"] == 1
    assert labels["a"] == 1
    assert labels["b"] == 2


def test_labels_are_valid_for_every_arc(bottleneck6):
    """label(i) <= label(j) + 1 for every arc between labeled nodes."""
    labels = calc_distance_labels(bottleneck6)
    source = bottleneck6.get_source()
    for (tail, head) in bottleneck6.get_capacities():
        if tail == source or tail not in labels or head not in labels:
            continue
        assert labels[tail] <= labels[head] + 1


def test_long_chain_does_not_recurse():
    """A path far longer than the recursion limit is labeled iteratively."""
    length = 5000
    g = CapacityGraph(0, length)
    for i in range(length):
        g.set_arc_capacity(1, i, i + 1)
    labels = calc_distance_labels(g)
    assert labels[length - 1] == 1
    assert labels[1] == length - 1
    assert labels[0] == length + 1


def test_source_label_follows_bulk_arc_removal():
    g = CapacityGraph("s", "t")
    g.set_arc_capacity(1, "s", "a")
    g.set_arc_capacity(1, "a", "t")
    g.set_arc_capacity(1, "s", "t")

    g.remove_edges_from([("s", "a"), ("a", "t")])

    assert calc_distance_labels(g) == {"s": 2, "t": 0}
