"""Streaming message statistics, updated one lifecycle event at a time."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Protocol

from network_simulation.events import (
    Created,
    Deleted,
    EventKind,
    MessageEvent,
    TransferAborted,
    Transferred,
    TransferStarted,
)
from network_simulation.message import Message

_logger = logging.getLogger(__name__)


class SimulationClock(Protocol):
    def get_current_time(self) -> float: ...


class EventOrderingError(RuntimeError):
    """A lifecycle event arrived for a message whose creation was never seen.

    This is a defect in whatever drives the statistics, never a recoverable condition.
    """


@dataclass
class MessageStatistics:
    """Accumulates message relaying statistics for a single run.

    Messages created during the warm-up interval are remembered by id and every
    later event for them is ignored, so they never reach any counter or series.
    Counters only grow; `creation_times` entries are never removed.
    """

    clock: SimulationClock
    warmup_time: float = 0.0

    creation_times: Dict[str, float] = field(default_factory=dict)
    warmup_ids: set[str] = field(default_factory=set)

    latencies: List[float] = field(default_factory=list)
    hop_counts: List[int] = field(default_factory=list)
    buffer_times: List[float] = field(default_factory=list)
    rtts: List[float] = field(default_factory=list)

    started: int = 0
    relayed: int = 0
    delivered: int = 0
    aborted: int = 0
    dropped: int = 0
    removed: int = 0
    created: int = 0
    response_requested_created: int = 0
    response_delivered: int = 0

    def __post_init__(self) -> None:
        self._handlers: Dict[EventKind, Callable] = {
            EventKind.CREATED: self._on_created,
            EventKind.TRANSFER_STARTED: self._on_transfer_started,
            EventKind.TRANSFERRED: self._on_transferred,
            EventKind.TRANSFER_ABORTED: self._on_transfer_aborted,
            EventKind.DELETED: self._on_deleted,
        }

    def now(self) -> float:
        return self.clock.get_current_time()

    def is_warmup(self) -> bool:
        """True while the clock is still inside the warm-up interval."""
        return self.warmup_time > self.now()

    def is_warmup_id(self, message_id: str) -> bool:
        return message_id in self.warmup_ids

    def on_event(self, event: MessageEvent) -> None:
        if _logger.isEnabledFor(logging.DEBUG):
            _logger.debug(f"[sim_t={self.now():012.6f}s] {event.kind.name:<17} message={event.message_id}")
        self._handlers[event.kind](event)

    # --- listener-style entry points ---

    def record_created(self, message: Message) -> None:
        self.on_event(Created(message))

    def record_transfer_started(self, message: Message, from_node: str, to_node: str) -> None:
        self.on_event(TransferStarted(message, from_node, to_node))

    def record_transferred(self, message: Message, from_node: str, to_node: str, final_target: bool) -> None:
        self.on_event(Transferred(message, from_node, to_node, final_target))

    def record_transfer_aborted(self, message: Message, from_node: str, to_node: str) -> None:
        self.on_event(TransferAborted(message, from_node, to_node))

    def record_deleted(self, message: Message, where: str, dropped: bool) -> None:
        self.on_event(Deleted(message, where, dropped))

    # --- handlers ---

    def _on_created(self, event: Created) -> None:
        message_id = event.message_id
        if self.is_warmup_id(message_id):
            return
        if self.is_warmup():
            self.warmup_ids.add(message_id)
            return

        self.creation_times[message_id] = self.now()
        self.created += 1
        if event.message.response_size > 0:
            self.response_requested_created += 1

    def _on_transfer_started(self, event: TransferStarted) -> None:
        if self.is_warmup_id(event.message_id):
            return
        self.started += 1

    def _on_transferred(self, event: Transferred) -> None:
        if self.is_warmup_id(event.message_id):
            return

        self.relayed += 1
        if not event.final_target:
            return

        message = event.message
        creation_time = self.creation_times.get(message.message_id)
        if creation_time is None:
            raise EventOrderingError(
                f"Message {message.message_id} delivered at t={self.now()} but its creation was never recorded")

        now = self.now()
        self.latencies.append(now - creation_time)
        self.delivered += 1
        self.hop_counts.append(message.hop_count)

        if message.is_response:
            self.rtts.append(now - message.request.creation_time)
            self.response_delivered += 1

    def _on_transfer_aborted(self, event: TransferAborted) -> None:
        if self.is_warmup_id(event.message_id):
            return
        self.aborted += 1

    def _on_deleted(self, event: Deleted) -> None:
        if self.is_warmup_id(event.message_id):
            return

        if event.dropped:
            self.dropped += 1
        else:
            self.removed += 1

        self.buffer_times.append(self.now() - event.message.receive_time)

    def counters(self) -> Dict[str, int]:
        return {
            "created": self.created,
            "started": self.started,
            "relayed": self.relayed,
            "aborted": self.aborted,
            "dropped": self.dropped,
            "removed": self.removed,
            "delivered": self.delivered,
            "response_requested_created": self.response_requested_created,
            "response_delivered": self.response_delivered,
        }
