import datetime
import logging
import os
from typing import Optional, Sequence

from network_simulation.node_role import NodeRole
from network_simulation.snapshot import ConnectivitySnapshot
from report.coverage import CoverageResult

_ROLE_COLORS = {
    NodeRole.INFRASTRUCTURE: "orange",
    NodeRole.LEAF: "lightblue",
    NodeRole.OTHER: "lightgray",
}


def _non_colliding_path(out_dir: str, stem: str) -> str:
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    ver_index = 1
    while True:
        path = os.path.join(out_dir, f"{stem}_{timestamp}_{ver_index}.png")
        if not os.path.exists(path):
            return path
        ver_index += 1


def visualize_snapshot(name: str, snapshot: ConnectivitySnapshot, coverage: Optional[CoverageResult] = None,
                       out_dir: str = "results") -> Optional[str]:
    """Draw the connectivity snapshot at the nodes' own positions and save it as PNG.

    Nodes are colored by role; servicing nodes are labelled with their leaf count and the
    best-covering node(s) are outlined in red. Returns the saved path, or None if plotting
    is unavailable or fails.
    """
    try:
        import matplotlib as mpl
        mpl.use('Agg')
        import matplotlib.pyplot as plt
        import networkx as nx
    except ImportError:
        logging.warning("matplotlib/networkx not available, skipping snapshot visualization")
        return None

    g = snapshot.graph
    if g.number_of_nodes() == 0:
        logging.warning("Empty connectivity snapshot, nothing to visualize")
        return None

    nodes = {n.name: n for n in snapshot.nodes()}
    pos = {name: n.position[:2] for name, n in nodes.items()}
    colors = [_ROLE_COLORS[nodes[name].role] for name in g.nodes()]
    best = set(coverage.best) if coverage is not None else set()
    edge_colors = ["red" if name in best else "black" for name in g.nodes()]

    labels = {}
    for name in g.nodes():
        if coverage is not None and name in coverage.counts:
            labels[name] = f"{name}\n({coverage.counts[name]})"
        else:
            labels[name] = name

    fig, ax = plt.subplots(figsize=(12, 9))
    try:
        nx.draw_networkx_edges(g, pos, ax=ax, edge_color="gray", width=1.2, alpha=0.8)
        nx.draw_networkx_nodes(g, pos, ax=ax, node_color=colors, edgecolors=edge_colors, node_size=500)
        nx.draw_networkx_labels(g, pos, labels=labels, ax=ax, font_size=8)
        ax.set_title(f"Connectivity snapshot: {name}")
        ax.set_aspect("equal", adjustable="datalim")

        os.makedirs(out_dir, exist_ok=True)
        saved_path = os.path.abspath(_non_colliding_path(out_dir, f"snapshot_{name}"))
        fig.savefig(saved_path, bbox_inches="tight")
        logging.info(f"Snapshot saved to {saved_path}")
        return saved_path
    except Exception as e:
        logging.warning(f"Snapshot failed to save: {e}")
        return None
    finally:
        plt.close(fig)


def plot_latency_histogram(latencies: Sequence[float], run_name: str, out_dir: str = "results",
                           num_bins: int = 30) -> Optional[str]:
    """Histogram of delivery latencies (seconds). Returns the saved path or None."""
    if not latencies:
        logging.warning("No latencies to plot")
        return None
    try:
        import matplotlib as mpl
        mpl.use('Agg')
        import matplotlib.pyplot as plt
        import numpy as np
    except ImportError:
        logging.warning("matplotlib not available, skipping latency histogram")
        return None

    values = np.asarray(latencies, dtype=float)
    counts, edges = np.histogram(values, bins=min(num_bins, max(1, len(values))))

    fig, ax = plt.subplots()
    ax.bar(edges[:-1], counts, width=np.diff(edges), align="edge", color="tab:blue", edgecolor="black")
    ax.axvline(float(np.median(values)), color="red", linestyle="--", label="median")
    ax.set_xlabel("Latency (s)")
    ax.set_ylabel("Delivered messages")
    ax.set_title(f"Delivery latency: {run_name}")
    ax.legend()
    fig.tight_layout()

    safe_name = "".join(c if c.isalnum() or c in '._-' else '_' for c in str(run_name))
    try:
        os.makedirs(out_dir, exist_ok=True)
        out_path = os.path.abspath(os.path.join(out_dir, f"latency_{safe_name}.png"))
        fig.savefig(out_path)
        return out_path
    except Exception as e:
        logging.warning(f"Latency histogram failed to save: {e}")
        return None
    finally:
        plt.close(fig)
