import unittest

import networkx as nx

from network_simulation.node_role import NodeRole, RoleMap
from network_simulation.snapshot import ConnectivitySnapshot


class TestConnectivitySnapshot(unittest.TestCase):

    def _mapping(self):
        return {
            "nodes": [
                {"name": "bs1", "group": "core", "position": [0, 0]},
                {"name": "u1", "group": "user", "position": [3, 4]},
                {"name": "x", "group": "sensor"},
            ],
            "edges": [["bs1", "u1"], ["bs1", "x"]],
        }

    def test_roles_resolved_from_group_tags(self):
        snap = ConnectivitySnapshot.from_mapping(self._mapping())
        self.assertEqual(snap.node("bs1").role, NodeRole.INFRASTRUCTURE)
        self.assertEqual(snap.node("u1").role, NodeRole.LEAF)
        self.assertEqual(snap.node("x").role, NodeRole.OTHER)
        self.assertEqual(snap.node("x").position, (0.0, 0.0))

    def test_custom_role_map(self):
        roles = RoleMap({"sensor": NodeRole.LEAF})
        snap = ConnectivitySnapshot.from_mapping(self._mapping(), roles)
        self.assertTrue(snap.node("x").is_leaf)
        self.assertEqual(snap.node("bs1").role, NodeRole.OTHER)

    def test_neighbors_and_distance(self):
        snap = ConnectivitySnapshot.from_mapping(self._mapping())
        self.assertEqual([n.name for n in snap.neighbors("bs1")], ["u1", "x"])
        self.assertEqual([n.name for n in snap.neighbors("u1")], ["bs1"])
        self.assertAlmostEqual(snap.distance("bs1", "u1"), 5.0)
        self.assertEqual(len(snap), 3)
        self.assertIn("u1", snap)

    def test_snapshot_is_read_only(self):
        snap = ConnectivitySnapshot.from_mapping(self._mapping())
        with self.assertRaises(nx.NetworkXError):
            snap.graph.add_edge("u1", "x")

    def test_source_graph_changes_do_not_leak(self):
        g = nx.Graph()
        g.add_node("bs1", group="bs", position=(0, 0))
        g.add_node("u1", group="user", position=(1, 0))
        g.add_edge("bs1", "u1")
        snap = ConnectivitySnapshot(g)
        g.remove_edge("bs1", "u1")
        self.assertEqual([n.name for n in snap.neighbors("bs1")], ["u1"])

    def test_invalid_mappings(self):
        with self.assertRaises(ValueError):
            ConnectivitySnapshot.from_mapping({"nodes": [{"name": "a"}]})
        with self.assertRaises(ValueError):
            ConnectivitySnapshot.from_mapping({"nodes": [{"name": "a", "group": "bs"}], "edges": [["a", "b"]]})
        with self.assertRaises(ValueError):
            ConnectivitySnapshot.from_mapping({"nodes": [], "edges": ["ab"]})
        with self.assertRaises(ValueError):
            ConnectivitySnapshot.from_mapping({"nodes": [{"name": "a", "group": "bs", "position": 3}]})
        with self.assertRaises(KeyError):
            ConnectivitySnapshot.from_mapping(self._mapping()).node("missing")


if __name__ == "__main__":
    unittest.main()
