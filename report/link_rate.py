"""Simplified per-link throughput estimate (Shannon-like shape, not a radio model)."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

from network_simulation.snapshot import ConnectivitySnapshot

PROPAGATION_CONSTANT = 5.0


@dataclass(frozen=True)
class LinkRate:
    node: str
    neighbor: str
    distance: float
    rate_kbps: float


def estimate_rate(bandwidth_bps: float, distance: float, k: float = PROPAGATION_CONSTANT) -> float:
    """rate = bandwidth * log2(1 + k / distance) / 1000, in Kb/s.

    Co-located nodes (distance 0) get an unbounded rate.
    """
    if distance < 0:
        raise ValueError(f"distance must be non-negative, got {distance}")
    if distance == 0:
        return math.inf
    return bandwidth_bps * math.log2(1 + k / distance) / 1000


def estimate_node_link_rates(snapshot: ConnectivitySnapshot, node_name: str, bandwidth_bps: float,
                             k: float = PROPAGATION_CONSTANT) -> List[LinkRate]:
    """Rates of the links from `node_name` to each of its leaf neighbors.

    An absent node yields no rates.
    """
    if node_name not in snapshot:
        return []
    bandwidth = math.floor(bandwidth_bps)
    rates = []
    for neighbor in snapshot.neighbors(node_name):
        if not neighbor.is_leaf:
            continue
        distance = snapshot.distance(node_name, neighbor.name)
        rates.append(LinkRate(node_name, neighbor.name, distance, estimate_rate(bandwidth, distance, k)))
    return rates
