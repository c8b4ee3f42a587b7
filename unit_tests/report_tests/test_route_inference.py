import unittest

from report.route_inference import RouteHints, RouteStatus, infer_route


class TestRouteInference(unittest.TestCase):

    def test_shared_station_gives_single_likely_path(self):
        hints = RouteHints.of("user1", "user10", {1, 2}, {2, 3})
        route = infer_route(hints)

        self.assertEqual(route.status, RouteStatus.SHARED)
        self.assertEqual(route.primary, (("user1",), ("bs2",), ("user10",)))
        self.assertEqual(route.secondary, (("user1",), ("bs1",), ("bs3",), ("user10",)))
        self.assertEqual(route.text(), "user1->bs2->user10 | user1->bs1->bs3->user10")

    def test_disjoint_sets_list_each_side(self):
        route = infer_route(RouteHints.of("user1", "user10", {1}, {3}))

        self.assertEqual(route.status, RouteStatus.DISJOINT)
        self.assertEqual(route.text(), "user1->bs1->bs3->user10")
        self.assertIsNone(route.secondary)

    def test_all_ties_listed_in_ascending_order(self):
        route = infer_route(RouteHints.of("a", "b", {7, 3, 5}, {9, 4}))
        self.assertEqual(route.text(), "a->bs3/bs5/bs7->bs4/bs9->b")

        shared = infer_route(RouteHints.of("a", "b", {4, 2, 8}, {8, 2}))
        self.assertEqual(shared.primary[1], ("bs2", "bs8"))
        self.assertEqual(shared.secondary, (("a",), ("bs4",), ("b",)))

    def test_identical_sets_have_no_secondary_hypothesis(self):
        route = infer_route(RouteHints.of("a", "b", {1, 2}, {1, 2}))
        self.assertEqual(route.status, RouteStatus.SHARED)
        self.assertIsNone(route.secondary)
        self.assertEqual(str(route), "a->bs1/bs2->b")

    def test_empty_hints_mean_no_route(self):
        for a, b in (((), {1}), ({1}, ()), ((), ())):
            route = infer_route(RouteHints.of("user1", "user10", a, b))
            self.assertEqual(route.status, RouteStatus.NO_ROUTE)
            self.assertEqual(route.text(), "no route")

    def test_custom_prefix(self):
        route = infer_route(RouteHints.of("a", "b", {1}, {1}), infrastructure_prefix="ap")
        self.assertEqual(route.text(), "a->ap1->b")

    def test_hints_from_mapping(self):
        hints = RouteHints.from_mapping({"user1": [1, "2"], "other": [5]}, "user1", "user10")
        self.assertEqual(hints.source_ids, frozenset({1, 2}))
        self.assertEqual(hints.target_ids, frozenset())
        with self.assertRaises(ValueError):
            RouteHints.from_mapping([1, 2], "user1", "user10")


if __name__ == "__main__":
    unittest.main()
