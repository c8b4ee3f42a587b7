import logging
import os

import pytest

from network_simulation.snapshot import ConnectivitySnapshot
from report.coverage import analyze_coverage
from visualization.snapshot_visualizer import plot_latency_histogram, visualize_snapshot

pytest.importorskip("matplotlib")


def _snapshot() -> ConnectivitySnapshot:
    return ConnectivitySnapshot.from_mapping({
        "nodes": [
            {"name": "bs1", "group": "bs", "position": [0, 0]},
            {"name": "bs2", "group": "bs", "position": [10, 0]},
            {"name": "u1", "group": "user", "position": [12, 3]},
        ],
        "edges": [["bs1", "bs2"], ["bs2", "u1"]],
    })


def test_visualize_snapshot_saves_png(tmp_path):
    snap = _snapshot()
    path = visualize_snapshot("demo", snap, analyze_coverage(snap), out_dir=str(tmp_path))
    assert path is not None
    assert os.path.exists(path)
    assert path.endswith(".png")


def test_empty_inputs_are_skipped(tmp_path):
    empty = ConnectivitySnapshot.from_mapping({"nodes": [], "edges": []})
    assert visualize_snapshot("empty", empty, out_dir=str(tmp_path)) is None
    assert plot_latency_histogram([], "empty", out_dir=str(tmp_path)) is None


def test_latency_histogram(tmp_path):
    path = plot_latency_histogram([1.0, 2.0, 2.5, 7.0], "demo run", out_dir=str(tmp_path))
    assert path is not None
    assert os.path.basename(path) == "latency_demo_run.png"


def test_failed_saves_are_logged_and_skipped(tmp_path, caplog):
    not_a_dir = tmp_path / "occupied"
    not_a_dir.write_text("x", encoding="utf-8")
    snap = _snapshot()

    with caplog.at_level(logging.WARNING):
        assert plot_latency_histogram([1.0, 2.0], "r", out_dir=str(not_a_dir)) is None
        assert visualize_snapshot("demo", snap, out_dir=str(not_a_dir)) is None

    messages = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert any("Latency histogram failed to save" in m for m in messages)
    assert any("Snapshot failed to save" in m for m in messages)
