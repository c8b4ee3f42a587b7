from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, TYPE_CHECKING

if TYPE_CHECKING:
    from network_simulation.network import Network


class Scenario(ABC):
    """A message workload played on top of a network.

    A Scenario must not build connectivity. It only schedules message lifecycle
    activity on `network.simulator` through the network's message operations.
    """

    name: str

    @abstractmethod
    def install(self, network: Network) -> None:
        raise NotImplementedError

    def parameters_summary(self) -> Dict[str, Any]:
        return {"scenario": getattr(self, "name", self.__class__.__name__)}
