"""Animated GIF encoding of rendered frames."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import imageio.v3 as iio
import numpy as np


def save_frames_gif(
    frames: Sequence[np.ndarray],
    path: str | Path,
    *,
    ms_per_frame: int,
    repeat: bool,
) -> Path:
    """Encode uint8 RGB frames of equal shape into a GIF.

    ``repeat`` loops the animation forever; otherwise it plays once.
    """
    if not frames:
        raise ValueError("No frames to encode.")
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)

    stack = np.stack([np.asarray(frame, dtype=np.uint8) for frame in frames])
    kwargs: dict[str, int] = {"duration": int(ms_per_frame)}
    if repeat:
        kwargs["loop"] = 0
    iio.imwrite(out, stack, extension=".gif", **kwargs)
    return out
