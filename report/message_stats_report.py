"""Message statistics report: event listener during the run, one-shot analysis at the end."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from des.message_statistics import MessageStatistics, SimulationClock
from network_simulation.events import MessageEvent
from network_simulation.node_role import RoleMap
from network_simulation.snapshot import ConnectivitySnapshot
from report.coverage import CoverageResult, analyze_coverage
from report.finalizer import (
    Stat,
    Unavailable,
    average,
    delivery_probability,
    format_stat,
    int_median,
    median,
    overhead_ratio,
    response_probability,
)
from report.link_rate import PROPAGATION_CONSTANT, LinkRate, estimate_node_link_rates
from report.route_inference import RouteHints, RouteHypothesis, infer_route

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportSettings:
    """Finalize-time parameters (the `report` config section)."""

    bandwidth_bps: float = 250000.0
    propagation_constant: float = PROPAGATION_CONSTANT
    rate_node: str = "bs106"
    route_endpoints: Tuple[str, str] = ("user1", "user10")
    infrastructure_prefix: str = "bs"
    roles: RoleMap = field(default_factory=RoleMap)
    precision: int = 4

    @staticmethod
    def from_mapping(d: Mapping[str, Any] | None) -> "ReportSettings":
        if d is None:
            return ReportSettings()
        if not isinstance(d, Mapping):
            raise ValueError("Expected mapping for report")
        defaults = ReportSettings()
        endpoints = d.get("route_endpoints", defaults.route_endpoints)
        if not isinstance(endpoints, Sequence) or isinstance(endpoints, str) or len(endpoints) != 2:
            raise ValueError("report.route_endpoints must list exactly two endpoint names")
        return ReportSettings(
            bandwidth_bps=float(d.get("bandwidth_bps", defaults.bandwidth_bps)),
            propagation_constant=float(d.get("propagation_constant", defaults.propagation_constant)),
            rate_node=str(d.get("rate_node", defaults.rate_node)),
            route_endpoints=(str(endpoints[0]), str(endpoints[1])),
            infrastructure_prefix=str(d.get("infrastructure_prefix", defaults.infrastructure_prefix)),
            roles=RoleMap.from_mapping(d.get("roles")),
            precision=int(d.get("precision", defaults.precision)),
        )


@dataclass(frozen=True)
class SeriesSummary:
    average: Stat
    median: Stat | int


@dataclass(frozen=True)
class ReportBundle:
    counters: Dict[str, int]
    delivery_prob: Stat
    response_prob: float
    overhead_ratio: Stat
    latency: SeriesSummary
    hop_count: SeriesSummary
    buffer_time: SeriesSummary
    rtt: SeriesSummary
    coverage: CoverageResult
    route: RouteHypothesis
    link_rates: List[LinkRate]

    def to_dict(self) -> Dict[str, Any]:
        """Plain mapping for serialization; unavailable statistics become "NaN"."""

        def _v(x):
            return str(x) if isinstance(x, Unavailable) else x

        def _s(s: SeriesSummary):
            return {"avg": _v(s.average), "med": _v(s.median)}

        return {
            "counters": dict(self.counters),
            "delivery_prob": _v(self.delivery_prob),
            "response_prob": self.response_prob,
            "overhead_ratio": _v(self.overhead_ratio),
            "latency": _s(self.latency),
            "hopcount": _s(self.hop_count),
            "buffertime": _s(self.buffer_time),
            "rtt": _s(self.rtt),
            "coverage": {
                name: {"count": count, "served": list(self.coverage.served[name])}
                for name, count in self.coverage.counts.items()
            },
            "best_coverage": list(self.coverage.best),
            "route": {"status": self.route.status.name.lower(), "text": self.route.text()},
            "link_rates": [
                {"node": r.node, "neighbor": r.neighbor, "distance": r.distance, "rate_kbps": r.rate_kbps}
                for r in self.link_rates
            ],
        }


class MessageStatsReport:
    """Listens to message lifecycle events for one run and builds the final report."""

    def __init__(self, clock: SimulationClock, warmup_time: float = 0.0,
                 settings: ReportSettings | None = None):
        self.settings = settings or ReportSettings()
        self.stats = MessageStatistics(clock=clock, warmup_time=warmup_time)
        self._finalized = False

    def on_event(self, event: MessageEvent) -> None:
        assert not self._finalized, "report already finalized"
        self.stats.on_event(event)

    def finalize(self, snapshot: ConnectivitySnapshot, hints: RouteHints) -> ReportBundle:
        s = self.stats
        settings = self.settings
        self._finalized = True

        coverage = analyze_coverage(snapshot)
        route = infer_route(hints, infrastructure_prefix=settings.infrastructure_prefix)
        link_rates = estimate_node_link_rates(snapshot, settings.rate_node, settings.bandwidth_bps,
                                              settings.propagation_constant)
        if settings.rate_node not in snapshot:
            _logger.warning(f"Rate node '{settings.rate_node}' is not in the connectivity snapshot")

        bundle = ReportBundle(
            counters=s.counters(),
            delivery_prob=delivery_probability(s.delivered, s.created),
            response_prob=response_probability(s.response_delivered, s.response_requested_created),
            overhead_ratio=overhead_ratio(s.relayed, s.delivered),
            latency=SeriesSummary(average(s.latencies), median(s.latencies)),
            hop_count=SeriesSummary(average(s.hop_counts), int_median(s.hop_counts)),
            buffer_time=SeriesSummary(average(s.buffer_times), median(s.buffer_times)),
            rtt=SeriesSummary(average(s.rtts), median(s.rtts)),
            coverage=coverage,
            route=route,
            link_rates=link_rates,
        )
        _logger.info(f"Report finalized: created={s.created} delivered={s.delivered} "
                     f"best coverage={','.join(coverage.best) or '-'} route={route.status.name.lower()}")
        return bundle


def format_time(sim_time: float) -> str:
    return f"{sim_time:.4f}"


def format_report(bundle: ReportBundle, scenario_name: str, sim_time: float, precision: int = 4) -> str:
    """Render a finalized report in the plain-text layout of the report file."""

    def f(x):
        return format_stat(x, precision)

    c = bundle.counters
    lines = [
        f"Message stats for scenario {scenario_name}",
        f"sim_time: {format_time(sim_time)}",
        f"created: {c['created']}",
        f"started: {c['started']}",
        f"relayed: {c['relayed']}",
        f"aborted: {c['aborted']}",
        f"dropped: {c['dropped']}",
        f"removed: {c['removed']}",
        f"delivered: {c['delivered']}",
        f"delivery_prob: {f(bundle.delivery_prob)}",
        f"response_prob: {f(bundle.response_prob)}",
        f"overhead_ratio: {f(bundle.overhead_ratio)}",
        f"latency_avg: {f(bundle.latency.average)}",
        f"latency_med: {f(bundle.latency.median)}",
        f"hopcount_avg: {f(bundle.hop_count.average)}",
        f"hopcount_med: {f(bundle.hop_count.median)}",
        f"buffertime_avg: {f(bundle.buffer_time.average)}",
        f"buffertime_med: {f(bundle.buffer_time.median)}",
        f"rtt_avg: {f(bundle.rtt.average)}",
        f"rtt_med: {f(bundle.rtt.median)}",
        "",
    ]
    for name, count in bundle.coverage.counts.items():
        lines.append(name + ":" + "".join("\t" + leaf for leaf in bundle.coverage.served[name]))
        lines.append(f"users served: {count}")
    lines.append("best coverage: " + ("/".join(bundle.coverage.best) or "-"))
    lines.append(f"route {bundle.route.source} -> {bundle.route.target}: {bundle.route.text()}")
    for r in bundle.link_rates:
        lines.append(f"{r.node}\t{r.neighbor}\trate = {f(r.rate_kbps)}Kb/s")
    return "\n".join(lines) + "\n"
