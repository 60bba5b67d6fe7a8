"""Per-frame heat history writers."""

from __future__ import annotations

import csv
from pathlib import Path

import matplotlib

matplotlib.use("Agg", force=True)
import matplotlib.pyplot as plt
import numpy as np

HISTORY_FIELDS = ["frame", "tick", "total_heat", "min_heat", "max_heat"]


def _ensure_outdir(outdir: str | Path) -> Path:
    path = Path(outdir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def save_history_csv(history: list[dict[str, float]], outdir: str | Path, filename: str = "history.csv") -> Path:
    """Save frame history rows into CSV."""
    path = _ensure_outdir(outdir) / filename
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=HISTORY_FIELDS)
        writer.writeheader()
        for row in history:
            writer.writerow({key: row.get(key) for key in HISTORY_FIELDS})
    return path


def save_history_png(history: list[dict[str, float]], outdir: str | Path, filename: str = "history.png") -> Path:
    """Plot total heat and the min/max band against tick."""
    if not history:
        raise ValueError("History is empty; nothing to plot.")

    tick = np.asarray([float(row["tick"]) for row in history], dtype=float)
    total = np.asarray([float(row["total_heat"]) for row in history], dtype=float)
    lo = np.asarray([float(row["min_heat"]) for row in history], dtype=float)
    hi = np.asarray([float(row["max_heat"]) for row in history], dtype=float)

    path = _ensure_outdir(outdir) / filename
    fig, axes = plt.subplots(nrows=2, ncols=1, figsize=(7.2, 5.0), dpi=140, sharex=True)

    axes[0].plot(tick, total, color="#d62728", lw=1.8)
    axes[0].set_ylabel("total heat")
    axes[0].grid(alpha=0.3)

    axes[1].fill_between(tick, lo, hi, color="#1f77b4", alpha=0.3)
    axes[1].plot(tick, lo, color="#1f77b4", lw=1.2)
    axes[1].plot(tick, hi, color="#1f77b4", lw=1.2)
    axes[1].set_ylabel("tile heat range")
    axes[1].set_xlabel("tick")
    axes[1].grid(alpha=0.3)

    fig.suptitle("Heat history", y=0.995)
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    return path
