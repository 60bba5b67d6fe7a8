"""NumPy heat field writer."""

from __future__ import annotations

from pathlib import Path

import numpy as np


def save_heat_npy(field: np.ndarray, outdir: str | Path, filename: str = "heat.npy") -> Path:
    """Save a (height, width) heat field as .npy."""
    out = Path(outdir)
    out.mkdir(parents=True, exist_ok=True)
    path = out / filename
    np.save(path, np.asarray(field, dtype=float))
    return path
