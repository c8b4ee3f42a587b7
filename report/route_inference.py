"""Guess the infrastructure path between two endpoints from their connection history.

The simulation records, for each of two endpoints, every infrastructure node the endpoint
was attached to during the run. The hypotheses produced here are inference, not the
route the messages actually took.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import AbstractSet, Any, Iterable, List, Mapping, Optional, Tuple


class RouteStatus(Enum):
    NO_ROUTE = 1  # at least one endpoint has no recorded infrastructure node
    SHARED = 2  # both endpoints were attached to a common infrastructure node
    DISJOINT = 3  # no common infrastructure node


@dataclass(frozen=True)
class RouteHints:
    source: str
    target: str
    source_ids: frozenset[int] = field(default_factory=frozenset)
    target_ids: frozenset[int] = field(default_factory=frozenset)

    @staticmethod
    def of(source: str, target: str, source_ids: Iterable[int], target_ids: Iterable[int]) -> "RouteHints":
        return RouteHints(source, target, frozenset(int(i) for i in source_ids),
                          frozenset(int(i) for i in target_ids))

    @staticmethod
    def from_mapping(d: Mapping[str, Any] | None, source: str, target: str) -> "RouteHints":
        """Read `route_hints: {<source>: [ids...], <target>: [ids...]}`; absent endpoints have no hints."""
        d = d or {}
        if not isinstance(d, Mapping):
            raise ValueError("Expected mapping for route_hints")
        return RouteHints.of(source, target, d.get(source) or (), d.get(target) or ())


@dataclass(frozen=True)
class RouteHypothesis:
    status: RouteStatus
    source: str
    target: str
    # each path is a sequence of segments; inner segments are alternative node names
    primary: Tuple[Tuple[str, ...], ...] = ()
    secondary: Optional[Tuple[Tuple[str, ...], ...]] = None

    @staticmethod
    def render_path(path: Tuple[Tuple[str, ...], ...]) -> str:
        return "->".join("/".join(segment) for segment in path)

    def text(self) -> str:
        if self.status is RouteStatus.NO_ROUTE:
            return "no route"
        out = self.render_path(self.primary)
        if self.secondary is not None:
            out += " | " + self.render_path(self.secondary)
        return out

    def __str__(self) -> str:
        return self.text()


def _segment(ids: AbstractSet[int], prefix: str) -> Tuple[str, ...]:
    return tuple(f"{prefix}{i}" for i in sorted(ids))


def infer_route(hints: RouteHints, *, infrastructure_prefix: str = "bs") -> RouteHypothesis:
    """Infer the most likely infrastructure path(s) from hints.source to hints.target.

    - either hint set empty: NO_ROUTE;
    - common ids: primary path through all of them, plus a secondary path through the
      ids each endpoint does not share (empty segments left out, omitted when nothing
      is left);
    - no common ids: one path through all source ids, then all target ids.

    All ids of a segment are listed in ascending order; none is dropped to break a tie.
    """
    a, b = hints.source_ids, hints.target_ids
    src, dst = (hints.source,), (hints.target,)
    if not a or not b:
        return RouteHypothesis(RouteStatus.NO_ROUTE, hints.source, hints.target)

    shared = a & b
    if not shared:
        primary = (src, _segment(a, infrastructure_prefix), _segment(b, infrastructure_prefix), dst)
        return RouteHypothesis(RouteStatus.DISJOINT, hints.source, hints.target, primary=primary)

    primary = (src, _segment(shared, infrastructure_prefix), dst)
    middle: List[Tuple[str, ...]] = [_segment(ids, infrastructure_prefix) for ids in (a - shared, b - shared) if ids]
    secondary = (src, *middle, dst) if middle else None
    return RouteHypothesis(RouteStatus.SHARED, hints.source, hints.target, primary=primary, secondary=secondary)
