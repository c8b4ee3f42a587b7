"""Message lifecycle events pushed by the simulation to its report listeners."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from network_simulation.message import Message


class EventKind(Enum):
    CREATED = 1
    TRANSFER_STARTED = 2
    TRANSFERRED = 3
    TRANSFER_ABORTED = 4
    DELETED = 5

    @staticmethod
    def parse(raw: str) -> "EventKind":
        v = str(raw).strip().lower().replace("-", "_")
        for kind in EventKind:
            if kind.name.lower() == v:
                return kind
        valid = " | ".join(k.name.lower() for k in EventKind)
        raise ValueError(f"Unknown event kind {raw!r}. Valid: {valid}")


@dataclass(frozen=True)
class MessageEvent:
    message: Message
    kind: ClassVar[EventKind]

    @property
    def message_id(self) -> str:
        return self.message.message_id


@dataclass(frozen=True)
class Created(MessageEvent):
    kind: ClassVar[EventKind] = EventKind.CREATED


@dataclass(frozen=True)
class TransferStarted(MessageEvent):
    from_node: str
    to_node: str
    kind: ClassVar[EventKind] = EventKind.TRANSFER_STARTED


@dataclass(frozen=True)
class Transferred(MessageEvent):
    from_node: str
    to_node: str
    final_target: bool
    kind: ClassVar[EventKind] = EventKind.TRANSFERRED


@dataclass(frozen=True)
class TransferAborted(MessageEvent):
    from_node: str
    to_node: str
    kind: ClassVar[EventKind] = EventKind.TRANSFER_ABORTED


@dataclass(frozen=True)
class Deleted(MessageEvent):
    where: str
    dropped: bool  # False: removed after delivery/expiry, True: dropped from a full buffer
    kind: ClassVar[EventKind] = EventKind.DELETED
