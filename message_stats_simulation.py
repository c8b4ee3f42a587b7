"""Message statistics report runner (YAML-driven).

Usage:
    python message_stats_simulation.py <path-to-config.yaml>

Replays the configured message lifecycle trace, then finalizes the message statistics
report against the configured connectivity snapshot and route hints.
"""

import argparse
import logging
import os
import sys
import time
from typing import Any, Dict

import yaml

from log_setup import configure_run_logging
from network_simulation.network import Network
from network_simulation.snapshot import ConnectivitySnapshot
from report.message_stats_report import ReportSettings, format_report
from report.route_inference import RouteHints
from scenarios.trace_replay import TraceReplayScenario
from visualization.snapshot_visualizer import plot_latency_histogram, visualize_snapshot


def _require_dict(d: Any, path: str) -> Dict[str, Any]:
    if not isinstance(d, dict):
        raise ValueError(f"Expected mapping at '{path}', got {type(d).__name__}")
    return d


def _load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    return _require_dict(data, "/")


def _resolve_yaml_arg(arg: str) -> str:
    if not isinstance(arg, str) or not arg:
        raise ValueError("config argument must be a non-empty string")
    if not arg.lower().endswith((".yaml", ".yml")):
        raise ValueError("Config argument must be a YAML file path")

    candidate = os.path.abspath(arg)
    if not os.path.exists(candidate):
        raise FileNotFoundError(f"YAML configuration file not found: {candidate}")
    return candidate


def build_network(cfg: Dict[str, Any]) -> Network:
    run_cfg = _require_dict(cfg.get("run", {}), "run")
    settings = ReportSettings.from_mapping(_require_dict(cfg.get("report", {}), "report"))
    snapshot = ConnectivitySnapshot.from_mapping(_require_dict(cfg.get("topology", {}), "topology"),
                                                 settings.roles)
    source, target = settings.route_endpoints
    hints = RouteHints.from_mapping(cfg.get("route_hints"), source, target)

    warmup = float(run_cfg.get("warmup_s", 0.0))
    if warmup < 0:
        raise ValueError(f"run.warmup_s must be non-negative, got {warmup}")

    return Network(
        name=str(run_cfg.get("scenario", "default")),
        snapshot=snapshot,
        route_hints=hints,
        settings=settings,
        warmup_time=warmup,
    )


def build_scenario(cfg: Dict[str, Any]) -> TraceReplayScenario:
    run_cfg = _require_dict(cfg.get("run", {}), "run")
    return TraceReplayScenario.from_mapping(cfg.get("events"), name=str(run_cfg.get("scenario", "trace-replay")))


def _write_output(path: str, data: Dict[str, Any]) -> str:
    out = os.path.abspath(path)
    os.makedirs(os.path.dirname(out) or ".", exist_ok=True)
    with open(out, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)
    return out


def parse_args(argv):
    p = argparse.ArgumentParser(description="Message statistics report (YAML-driven)")
    p.add_argument("config", help="Path to YAML configuration file")
    return p.parse_args(argv)


def main(argv) -> int:
    args = parse_args(argv)
    yaml_path = _resolve_yaml_arg(args.config)
    cfg = _load_yaml(yaml_path)

    run_cfg = _require_dict(cfg.get("run", {}), "run")
    file_debug = bool(run_cfg.get("file_debug", False))
    visualize = bool(run_cfg.get("visualize", False))
    scenario_name = str(run_cfg.get("scenario", "default"))

    logfile_path = configure_run_logging(
        f"message_stats.{scenario_name}",
        console_level=logging.INFO,
        file_level=logging.DEBUG if file_debug else logging.INFO,
        force=True,
    )
    logging.info("Logging to console and file: %s", logfile_path)
    logging.info(f"Loaded configuration from: {yaml_path}")

    network = build_network(cfg)
    network.assign_scenario(build_scenario(cfg))

    logging.info("Starting trace replay")
    start = time.perf_counter()
    network.run()
    elapsed = time.perf_counter() - start
    logging.info("Replay run time: %.3f seconds", elapsed)

    bundle = network.get_results()
    sim_time = network.simulator.end_time or 0.0
    params = network.get_parameters_summary()
    logging.info("Parameters:\n%s", "\n".join(f"{k}: {v}" for k, v in params.items()))
    logging.info("Report:\n%s", format_report(bundle, scenario_name, sim_time, network.report.settings.precision))

    output = run_cfg.get("output")
    if output:
        logging.info("Report written to %s", _write_output(str(output), {
            "scenario": scenario_name,
            "sim_time": sim_time,
            "parameters": params,
            "report": bundle.to_dict(),
        }))

    if visualize:
        visualize_snapshot(scenario_name, network.snapshot, bundle.coverage)
        plot_latency_histogram(network.report.stats.latencies, scenario_name)

    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main(sys.argv[1:]))
    except Exception:
        logging.exception("Report run failed with an exception")
        raise
