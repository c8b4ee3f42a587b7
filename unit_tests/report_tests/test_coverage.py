import networkx as nx

from network_simulation.snapshot import ConnectivitySnapshot
from report.coverage import analyze_coverage


def _snapshot(nodes, edges) -> ConnectivitySnapshot:
    g = nx.Graph()
    for name, group in nodes:
        g.add_node(name, group=group, position=(0.0, 0.0))
    g.add_edges_from(edges)
    return ConnectivitySnapshot(g)


def test_single_servicing_node():
    snap = _snapshot(
        [("bs1", "bs"), ("bs2", "bs"), ("u1", "user"), ("u2", "user"), ("u3", "user")],
        [("bs1", "bs2"), ("bs2", "u1"), ("bs2", "u2"), ("bs2", "u3")],
    )
    result = analyze_coverage(snap)

    assert result.counts["bs2"] == 3
    assert result.served["bs2"] == ("u1", "u2", "u3")
    assert result.best == ("bs2",)
    assert result.counts["bs1"] == 0
    assert result.max_count == 3


def test_ties_are_all_reported():
    snap = _snapshot(
        [("core", "core"), ("bs1", "bs"), ("bs2", "bs"), ("u1", "user"), ("u2", "user")],
        [("core", "bs1"), ("core", "bs2"), ("bs1", "u1"), ("bs2", "u2")],
    )
    result = analyze_coverage(snap)

    assert result.counts == {"bs1": 1, "bs2": 1, "core": 0}
    assert result.best == ("bs1", "bs2")


def test_leaf_neighbors_of_reporting_node_itself_do_not_count():
    # bs1 has a user but no infrastructure neighbor reports it
    snap = _snapshot(
        [("bs1", "bs"), ("u1", "user")],
        [("bs1", "u1")],
    )
    result = analyze_coverage(snap)

    assert result.counts == {}
    assert result.best == ()
    assert result.max_count == 0


def test_non_leaf_neighbors_are_not_counted():
    snap = _snapshot(
        [("bs1", "bs"), ("bs2", "bs"), ("relay", "relay"), ("u1", "user")],
        [("bs1", "bs2"), ("bs2", "relay"), ("bs2", "u1"), ("bs1", "relay")],
    )
    result = analyze_coverage(snap)

    assert result.counts["bs2"] == 1
    assert "relay" not in result.counts
