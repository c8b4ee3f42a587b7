"""Leaf coverage of the infrastructure nodes in a connectivity snapshot."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from network_simulation.snapshot import ConnectivitySnapshot


@dataclass(frozen=True)
class CoverageResult:
    # servicing node name -> number of leaf nodes it serves directly
    counts: Dict[str, int] = field(default_factory=dict)
    # servicing node name -> names of the leaf nodes it serves, sorted
    served: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    # every servicing node whose count no other node exceeds, in name order
    best: Tuple[str, ...] = ()

    @property
    def max_count(self) -> int:
        return max(self.counts.values(), default=0)


def analyze_coverage(snapshot: ConnectivitySnapshot) -> CoverageResult:
    """Count leaf nodes served by infrastructure nodes reachable from other infrastructure nodes.

    Only the infrastructure neighbors of infrastructure nodes report coverage: for every
    infrastructure node, each of its infrastructure neighbors is credited with that
    neighbor's own directly connected leaf nodes.
    """
    served: Dict[str, Tuple[str, ...]] = {}
    for host in snapshot.nodes():
        if not host.is_infrastructure:
            continue
        for station in snapshot.neighbors(host.name):
            if not station.is_infrastructure or station.name in served:
                continue
            served[station.name] = tuple(sorted(n.name for n in snapshot.neighbors(station.name) if n.is_leaf))

    counts = {name: len(leaves) for name, leaves in served.items()}
    best = tuple(sorted(name for name, c in counts.items()
                        if not any(c < other for other in counts.values())))
    return CoverageResult(counts=counts, served=served, best=best)
