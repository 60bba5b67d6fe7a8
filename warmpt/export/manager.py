"""Export manager orchestrating format-specific writers."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ..world import World
from .history_writer import save_history_csv, save_history_png
from .npy_writer import save_heat_npy
from .png_writer import save_heatmap_png

VALID_FORMATS = {"npy", "png", "csv"}


def export_results(
    world: World,
    outdir: str | Path,
    formats: Iterable[str],
    history: list[dict[str, float]] | None = None,
    max_heat: float | None = None,
) -> list[Path]:
    """Export the final world state and run history in the requested formats."""
    requested = {str(fmt).lower() for fmt in formats}
    unknown = requested - VALID_FORMATS
    if unknown:
        raise ValueError(f"Unsupported export format(s): {sorted(unknown)}")

    out = Path(outdir)
    out.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []

    if "npy" in requested:
        written.append(save_heat_npy(world.heat_field(), out, filename="heat.npy"))

    if "png" in requested:
        written.append(save_heatmap_png(world.heat_field(), out, filename="heat.png", max_heat=max_heat))

    if "csv" in requested:
        rows = list(history or [])
        written.append(save_history_csv(rows, out, filename="history.csv"))
        if rows:
            written.append(save_history_png(rows, out, filename="history.png"))

    return written
