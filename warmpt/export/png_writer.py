"""PNG writer for the heat field."""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg", force=True)
import matplotlib.pyplot as plt
import numpy as np


def _ensure_outdir(outdir: str | Path) -> Path:
    path = Path(outdir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def save_heatmap_png(
    field: np.ndarray,
    outdir: str | Path,
    filename: str = "heat.png",
    max_heat: float | None = None,
) -> Path:
    """Save a (height, width) heat field as a diverging heatmap PNG.

    The color range is symmetric around zero; ``max_heat`` fixes it, otherwise
    the largest magnitude in the field is used.
    """
    arr = np.asarray(field, dtype=float)
    if arr.ndim != 2:
        raise ValueError(f"heat field must be 2D, got shape {arr.shape}.")
    path = _ensure_outdir(outdir) / filename

    if max_heat is None:
        finite = arr[np.isfinite(arr)]
        max_heat = float(np.max(np.abs(finite))) if finite.size else 1.0
    vlim = max(float(max_heat), 1e-12)

    fig, ax = plt.subplots(figsize=(6.4, 4.8), dpi=120)
    im = ax.imshow(arr, origin="upper", cmap="coolwarm", vmin=-vlim, vmax=vlim, interpolation="nearest")
    ax.set_xlabel("x [tile]")
    ax.set_ylabel("y [tile]")
    ax.set_title("Heat field")
    cbar = fig.colorbar(im, ax=ax)
    cbar.set_label("heat")
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    return path
