from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(slots=True, eq=False)
class Message:
    """A message travelling through the simulated network.

    The simulation owns and mutates this record (hops grow on every transfer,
    `receive_time` moves on every arrival). Report code only reads it.
    """
    message_id: str
    creation_time: float
    hops: list[str] = field(default_factory=list)
    response_size: int = 0  # 0 means no response is requested
    request: Optional[Message] = None  # set on response messages only
    receive_time: float = 0.0

    @property
    def is_response(self) -> bool:
        return self.request is not None

    @property
    def hop_count(self) -> int:
        """Number of links traversed so far."""
        return len(self.hops) - 1

    def __str__(self) -> str:
        return self.message_id
