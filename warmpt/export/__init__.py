"""Export manager and format-specific writers."""

from .gif_writer import save_frames_gif
from .history_writer import save_history_csv, save_history_png
from .manager import export_results
from .npy_writer import save_heat_npy
from .png_writer import save_heatmap_png

__all__ = [
    "export_results",
    "save_frames_gif",
    "save_heat_npy",
    "save_heatmap_png",
    "save_history_csv",
    "save_history_png",
]
