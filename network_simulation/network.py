import logging
from typing import Any, Callable, Dict, List, Optional

from des.des import DiscreteEventSimulator
from network_simulation.events import (
    Created,
    Deleted,
    MessageEvent,
    TransferAborted,
    Transferred,
    TransferStarted,
)
from network_simulation.message import Message
from network_simulation.scenario import Scenario
from network_simulation.snapshot import ConnectivitySnapshot
from report.message_stats_report import MessageStatsReport, ReportBundle, ReportSettings
from report.route_inference import RouteHints

_logger = logging.getLogger(__name__)

MessageListener = Callable[[MessageEvent], None]


class Network:
    """Message-level view of a simulated network.

    Owns the simulator clock and the message records, applies lifecycle operations to
    the records and pushes the matching events to every registered listener. The
    connectivity snapshot and route hints are taken as given at the end of the run.
    """

    def __init__(self, name: str, snapshot: ConnectivitySnapshot, route_hints: RouteHints,
                 settings: Optional[ReportSettings] = None, warmup_time: float = 0.0):
        self.name = name
        self.simulator = DiscreteEventSimulator()
        self.snapshot = snapshot
        self.route_hints = route_hints
        self.messages: Dict[str, Message] = {}
        self.report = MessageStatsReport(self.simulator, warmup_time=warmup_time, settings=settings)
        self._listeners: List[MessageListener] = [self.report.on_event]
        self._scenario: Scenario | None = None
        self._bundle: ReportBundle | None = None

    def assign_scenario(self, scenario: Scenario) -> None:
        logging.info("Creating scenario...")
        self._scenario = scenario
        self._scenario.install(self)
        logging.info("Scenario created.")

    def _emit(self, event: MessageEvent) -> None:
        for listener in self._listeners:
            listener(event)

    def get_message(self, message_id: str) -> Message:
        message = self.messages.get(message_id)
        if message is None:
            raise KeyError(f"Unknown message '{message_id}'")
        return message

    # --- message lifecycle operations (called from scheduled events) ---

    def create_message(self, message_id: str, source: str, response_size: int = 0,
                       request_id: str | None = None) -> Message:
        assert message_id not in self.messages, f"message {message_id} created twice"
        now = self.simulator.get_current_time()
        request = self.get_message(request_id) if request_id is not None else None
        message = Message(message_id=message_id, creation_time=now, hops=[source],
                          response_size=response_size, request=request, receive_time=now)
        self.messages[message_id] = message
        self._emit(Created(message))
        return message

    def start_transfer(self, message_id: str, from_node: str, to_node: str) -> None:
        self._emit(TransferStarted(self.get_message(message_id), from_node, to_node))

    def transfer(self, message_id: str, from_node: str, to_node: str, final_target: bool) -> None:
        message = self.get_message(message_id)
        message.hops.append(to_node)
        message.receive_time = self.simulator.get_current_time()
        self._emit(Transferred(message, from_node, to_node, final_target))

    def abort_transfer(self, message_id: str, from_node: str, to_node: str) -> None:
        self._emit(TransferAborted(self.get_message(message_id), from_node, to_node))

    def delete_message(self, message_id: str, where: str, dropped: bool) -> None:
        self._emit(Deleted(self.get_message(message_id), where, dropped))

    def run(self, until: float | None = None) -> None:
        assert self.simulator is not None
        self.simulator.run(until)

    def get_results(self) -> ReportBundle:
        """Finalize the report against the terminal snapshot (once)."""
        if self._bundle is None:
            self._bundle = self.report.finalize(self.snapshot, self.route_hints)
        return self._bundle

    def get_parameters_summary(self) -> Dict[str, Any]:
        settings = self.report.settings
        params: Dict[str, Any] = {
            'warmup_time': self.report.stats.warmup_time,
            'bandwidth_bps': settings.bandwidth_bps,
            'rate_node': settings.rate_node,
            'route_endpoints': "->".join(settings.route_endpoints),
            'nodes count': len(self.snapshot),
            'messages count': len(self.messages),
        }
        if self._scenario is not None:
            params.update(self._scenario.parameters_summary())
        return params
