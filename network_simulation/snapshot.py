"""Read-only view of the network's connectivity at one simulation instant."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterator, List, Mapping, Sequence, Tuple

import networkx as nx

from network_simulation.node_role import NodeRole, RoleMap

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnapshotNode:
    name: str
    group: str
    role: NodeRole
    position: Tuple[float, ...]

    @property
    def is_infrastructure(self) -> bool:
        return self.role is NodeRole.INFRASTRUCTURE

    @property
    def is_leaf(self) -> bool:
        return self.role is NodeRole.LEAF


class ConnectivitySnapshot:
    """Nodes (group tag, role, position) and their active bidirectional connections.

    The underlying graph is frozen; any attempt to add or remove nodes/edges raises.
    Iteration order follows insertion order of the source graph.
    """

    def __init__(self, graph: nx.Graph, roles: RoleMap | None = None):
        roles = roles or RoleMap()
        g = nx.Graph()
        for name, attrs in graph.nodes(data=True):
            group = str(attrs.get("group", ""))
            position = tuple(float(c) for c in attrs.get("position", (0.0, 0.0)))
            g.add_node(str(name), node=SnapshotNode(name=str(name), group=group, role=roles.role_of(group),
                                               position=position))
        g.add_edges_from((str(a), str(b)) for a, b in graph.edges())
        self._graph = nx.freeze(g)
        if _logger.isEnabledFor(logging.DEBUG):
            _logger.debug(f"Connectivity snapshot: {g.number_of_nodes()} nodes, {g.number_of_edges()} connections")

    @staticmethod
    def from_mapping(d: Mapping[str, Any], roles: RoleMap | None = None) -> "ConnectivitySnapshot":
        """Build a snapshot from a `topology` config section.

        Expected layout::

            nodes: [{name: bs1, group: core, position: [0, 0]}, ...]
            edges: [[bs1, bs2], ...]
        """
        if not isinstance(d, Mapping):
            raise ValueError("Expected mapping for topology")
        nodes = d.get("nodes", [])
        edges = d.get("edges", [])
        if not isinstance(nodes, Sequence) or not isinstance(edges, Sequence):
            raise ValueError("topology.nodes and topology.edges must be lists")

        graph = nx.Graph()
        for i, n in enumerate(nodes):
            if not isinstance(n, Mapping) or "name" not in n or "group" not in n:
                raise ValueError(f"topology.nodes[{i}] must be a mapping with 'name' and 'group'")
            position = n.get("position", (0.0, 0.0))
            if not isinstance(position, Sequence) or isinstance(position, str) or len(position) < 2:
                raise ValueError(f"topology.nodes[{i}].position must be a list of at least two coordinates")
            graph.add_node(str(n["name"]), group=str(n["group"]), position=tuple(position))
        for i, e in enumerate(edges):
            if not isinstance(e, Sequence) or isinstance(e, str) or len(e) != 2:
                raise ValueError(f"topology.edges[{i}] must be a pair of node names")
            a, b = str(e[0]), str(e[1])
            for end in (a, b):
                if end not in graph:
                    raise ValueError(f"topology.edges[{i}] references unknown node '{end}'")
            graph.add_edge(a, b)
        return ConnectivitySnapshot(graph, roles)

    @property
    def graph(self) -> nx.Graph:
        return self._graph

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __contains__(self, name: str) -> bool:
        return name in self._graph

    def __iter__(self) -> Iterator[SnapshotNode]:
        return iter(self.nodes())

    def node(self, name: str) -> SnapshotNode:
        if name not in self._graph:
            raise KeyError(f"Unknown node '{name}'")
        return self._graph.nodes[name]["node"]

    def nodes(self) -> List[SnapshotNode]:
        return [attrs["node"] for _, attrs in self._graph.nodes(data=True)]

    def neighbors(self, name: str) -> List[SnapshotNode]:
        return [self._graph.nodes[n]["node"] for n in self._graph.neighbors(name)]

    def distance(self, a: str, b: str) -> float:
        """Euclidean distance between two nodes' positions."""
        return math.dist(self.node(a).position, self.node(b).position)
