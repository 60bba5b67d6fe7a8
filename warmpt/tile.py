"""Single simulation tile and its color mapping."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .heat import Conductor, HeatBehavior, Sink, Source

Rgb = tuple[int, int, int]


def _narrow_to_channel(value: float) -> int:
    """Narrow a non-negative float to an 8-bit channel like a float->u8 cast."""
    if math.isnan(value):
        return 0
    if value >= 255.0:
        return 255
    return int(value)


@dataclass(slots=True)
class Tile:
    """One grid cell: a fixed heat behavior plus a heat value.

    For conductors ``heat_energy`` is the simulated quantity. For sources and
    sinks it is the ceiling/floor reference and the kernel never rewrites it.
    """

    material: HeatBehavior
    heat_energy: float = 0.0

    @classmethod
    def source(cls, produced_per_tick: float, heat: float) -> "Tile":
        return cls(Source(produced_per_tick=float(produced_per_tick)), float(heat))

    @classmethod
    def sink(cls, absorbed_per_tick: float, heat: float) -> "Tile":
        return cls(Sink(absorbed_per_tick=float(absorbed_per_tick)), float(heat))

    @classmethod
    def conductor(cls, heat: float, rate: float) -> "Tile":
        """Conductor tile; note heat comes first, then the transfer rate."""
        return cls(Conductor(rate=float(rate)), float(heat))

    @classmethod
    def default(cls) -> "Tile":
        """Non-conducting tile at zero heat."""
        return cls(Conductor(rate=0.0), 0.0)

    def heat(self) -> float:
        return self.heat_energy

    def set_heat(self, value: float) -> None:
        self.heat_energy = value

    def behavior(self) -> HeatBehavior:
        return self.material

    def copy(self) -> "Tile":
        return Tile(self.material, self.heat_energy)

    def color_for_heat(self, max_heat: float) -> Rgb:
        """Map heat to RGB: positive heat in red, negative in blue, zero is black.

        The magnitude is scaled by ``255 / max_heat`` and truncated to 8 bits
        without clamping first, so heat beyond ``max_heat`` loses precision.
        """
        if max_heat <= 0.0:
            raise ValueError(f"max_heat must be > 0, got {max_heat}.")
        heat_color_coef = 255.0 / float(max_heat)
        color = _narrow_to_channel(heat_color_coef * abs(self.heat_energy))

        if self.heat_energy == 0.0:
            return (0, 0, 0)
        if self.heat_energy > 0.0:
            return (color, 0, 0)
        return (0, 0, color)
