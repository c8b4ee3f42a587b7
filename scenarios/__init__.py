"""Message workload scenarios.

Each scenario only schedules message lifecycle activity on an already-built network.
See `network_simulation.scenario.Scenario`.
"""
from network_simulation.scenario import Scenario
from .trace_replay import TraceEvent, TraceReplayScenario

__all__ = [
    "Scenario",
    "TraceEvent",
    "TraceReplayScenario",
]
