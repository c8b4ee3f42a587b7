from report.coverage import CoverageResult, analyze_coverage
from report.finalizer import NO_DATA, UNDEFINED, Unavailable
from report.link_rate import LinkRate, estimate_node_link_rates, estimate_rate
from report.message_stats_report import MessageStatsReport, ReportBundle, ReportSettings, format_report
from report.route_inference import RouteHints, RouteHypothesis, RouteStatus, infer_route

__all__ = [
    "CoverageResult",
    "analyze_coverage",
    "NO_DATA",
    "UNDEFINED",
    "Unavailable",
    "LinkRate",
    "estimate_node_link_rates",
    "estimate_rate",
    "MessageStatsReport",
    "ReportBundle",
    "ReportSettings",
    "format_report",
    "RouteHints",
    "RouteHypothesis",
    "RouteStatus",
    "infer_route",
]
