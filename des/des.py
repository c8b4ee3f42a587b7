import itertools
from dataclasses import field, dataclass
from typing import Callable

from des.min_value_priority_queue import MinValuePriorityQueue


@dataclass(order=True)
class DESEvent:
    time: float
    seq: int
    action: Callable[[], None] = field(compare=False)


class DiscreteEventSimulator:
    """Chronological event loop and the simulation clock read by the report.

    Events scheduled for the same instant run in scheduling order, so a
    message's `Created` always reaches listeners before its later events.
    """

    def __init__(self):
        self.current_time = 0.0
        self.event_queue: MinValuePriorityQueue = MinValuePriorityQueue()
        self.scheduling_counter = itertools.count()
        self.end_time: float | None = None

    def schedule_event(self, delay: float, action: Callable[[], None]) -> None:
        """Schedule an event to occur after a certain delay."""
        assert delay >= 0
        event_time = self.current_time + delay
        event = DESEvent(event_time, next(self.scheduling_counter), action)
        self.event_queue.enqueue(event)

    def schedule_at(self, time: float, action: Callable[[], None]) -> None:
        """Schedule an event at an absolute simulation time (not in the past)."""
        self.schedule_event(time - self.current_time, action)

    def run(self, until: float | None = None) -> None:
        """Run the simulation until there are no more events (or `until` is reached)."""
        while self.event_queue:
            if until is not None and self.event_queue.peek().time > until:
                self.current_time = until
                break
            event = self.event_queue.dequeue()
            self.current_time = event.time
            event.action()
        self.end_time = self.current_time

    def get_current_time(self) -> float:
        return self.current_time
