from des.des import DiscreteEventSimulator


def test_run_without_until_executes_all_events_and_advances_time():
    sim = DiscreteEventSimulator()
    calls = []

    def make_action(name):
        return lambda: calls.append((name, sim.current_time))

    sim.schedule_event(1.0, make_action("a"))
    sim.schedule_event(2.5, make_action("b"))

    sim.run()

    # Both actions should have run in time order
    assert calls == [("a", 1.0), ("b", 2.5)]
    assert sim.current_time == 2.5
    assert sim.end_time == 2.5


def test_same_time_events_run_in_scheduling_order():
    sim = DiscreteEventSimulator()
    calls = []

    sim.schedule_at(3.0, lambda: calls.append("second-scheduled-later"))
    sim.schedule_at(1.0, lambda: calls.append("first"))
    sim.schedule_at(3.0, lambda: calls.append("third"))

    sim.run()

    assert calls == ["first", "second-scheduled-later", "third"]


def test_run_until_stops_before_later_events():
    sim = DiscreteEventSimulator()
    calls = []
    sim.schedule_at(1.0, lambda: calls.append(1.0))
    sim.schedule_at(10.0, lambda: calls.append(10.0))

    sim.run(until=5.0)

    assert calls == [1.0]
    assert sim.get_current_time() == 5.0

    sim.run()
    assert calls == [1.0, 10.0]
