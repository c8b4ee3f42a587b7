from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Sequence, Tuple

from network_simulation.events import EventKind
from network_simulation.scenario import Scenario

_logger = logging.getLogger(__name__)

_REQUIRED_KEYS: Dict[EventKind, Tuple[str, ...]] = {
    EventKind.CREATED: ("source",),
    EventKind.TRANSFER_STARTED: ("from", "to"),
    EventKind.TRANSFERRED: ("from", "to"),
    EventKind.TRANSFER_ABORTED: ("from", "to"),
    EventKind.DELETED: ("where",),
}


@dataclass(frozen=True)
class TraceEvent:
    time: float
    kind: EventKind
    message_id: str
    params: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def from_mapping(d: Mapping[str, Any], *, path: str) -> "TraceEvent":
        if not isinstance(d, Mapping):
            raise ValueError(f"Expected mapping at '{path}', got {type(d).__name__}")
        missing = [k for k in ("time", "kind", "message") if k not in d]
        if missing:
            raise ValueError(f"Missing required {path} keys: " + ", ".join(missing))
        kind = EventKind.parse(d["kind"])
        missing = [k for k in _REQUIRED_KEYS[kind] if k not in d]
        if missing:
            raise ValueError(f"Missing required {path} keys for {kind.name.lower()}: " + ", ".join(missing))
        time = float(d["time"])
        if time < 0:
            raise ValueError(f"Negative time at '{path}.time': {time}")
        params = {k: v for k, v in d.items() if k not in ("time", "kind", "message")}
        return TraceEvent(time=time, kind=kind, message_id=str(d["message"]), params=params)


def _check_message_ids(events: Tuple[TraceEvent, ...]) -> None:
    """Every message must be created exactly once, before any other event (or response) refers to it."""
    created: set[str] = set()
    for i, ev in sorted(enumerate(events), key=lambda item: item[1].time):
        if ev.kind is EventKind.CREATED:
            if ev.message_id in created:
                raise ValueError(f"Message '{ev.message_id}' created twice at 'events[{i}].message'")
            request = ev.params.get("request")
            if request is not None and str(request) not in created:
                raise ValueError(f"Unknown request message '{request}' at 'events[{i}].request'")
            created.add(ev.message_id)
        elif ev.message_id not in created:
            raise ValueError(f"Unknown message '{ev.message_id}' at 'events[{i}].message'")


@dataclass(frozen=True)
class TraceReplayScenario(Scenario):
    """Replays a recorded message lifecycle trace on a network.

    Events are scheduled at their absolute times; events sharing a timestamp keep
    their trace order.
    """

    events: Tuple[TraceEvent, ...] = ()
    name: str = "trace-replay"

    @staticmethod
    def from_mapping(events: Sequence[Any] | None, *, name: str = "trace-replay") -> "TraceReplayScenario":
        if events is None:
            events = []
        if not isinstance(events, Sequence) or isinstance(events, str):
            raise ValueError("Expected list at 'events'")
        parsed = tuple(TraceEvent.from_mapping(e, path=f"events[{i}]") for i, e in enumerate(events))
        _check_message_ids(parsed)
        return TraceReplayScenario(events=parsed, name=name)

    def install(self, network) -> None:
        for ev in sorted(self.events, key=lambda e: e.time):
            network.simulator.schedule_at(ev.time, self._action(network, ev))
        _logger.debug(f"Scheduled {len(self.events)} trace events")

    @staticmethod
    def _action(network, ev: TraceEvent):
        p = ev.params

        if ev.kind is EventKind.CREATED:
            request = p.get("request")
            return lambda: network.create_message(ev.message_id, str(p["source"]),
                                                  response_size=int(p.get("response_size", 0)),
                                                  request_id=str(request) if request is not None else None)
        if ev.kind is EventKind.TRANSFER_STARTED:
            return lambda: network.start_transfer(ev.message_id, str(p["from"]), str(p["to"]))
        if ev.kind is EventKind.TRANSFERRED:
            return lambda: network.transfer(ev.message_id, str(p["from"]), str(p["to"]),
                                            bool(p.get("final_target", False)))
        if ev.kind is EventKind.TRANSFER_ABORTED:
            return lambda: network.abort_transfer(ev.message_id, str(p["from"]), str(p["to"]))
        return lambda: network.delete_message(ev.message_id, str(p["where"]), bool(p.get("dropped", False)))

    def parameters_summary(self) -> Dict[str, Any]:
        out = super().parameters_summary()
        out["trace_events"] = len(self.events)
        return out
