"""Typed models for scenario configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from ..tile import Tile

TileKind = Literal["source", "sink", "conductor"]
InstructionKind = Literal["set", "set_sect_x", "set_sect_y"]


@dataclass(frozen=True)
class TileSpec:
    """Tile description ``[kind, param1, param2]``.

    For sources and sinks ``param1`` is the per-tick rate and ``param2`` the
    reference heat. For conductors ``param1`` is the initial heat and
    ``param2`` the transfer rate percentage.
    """

    kind: TileKind
    param1: float
    param2: float

    def to_tile(self) -> Tile:
        if self.kind == "source":
            return Tile.source(self.param1, self.param2)
        if self.kind == "sink":
            return Tile.sink(self.param1, self.param2)
        return Tile.conductor(self.param1, self.param2)


@dataclass(frozen=True)
class BuildInstruction:
    """One world override.

    ``set`` uses ``(x, y)``. ``set_sect_x`` uses ``(x_start, x_end, y)`` and
    ``set_sect_y`` uses ``(y_start, y_end, x)``.
    """

    kind: InstructionKind
    coords: tuple[int, ...]
    tile: TileSpec


@dataclass(frozen=True)
class WorldConfig:
    width: int
    height: int
    default_tile: TileSpec
    instructions: list[BuildInstruction] = field(default_factory=list)


@dataclass(frozen=True)
class RenderConfig:
    """Animation and simulation pacing."""

    render_file: str
    repeat: bool
    ms_per_frame: int
    sim_steps: int
    sim_substeps: int
    max_display_heat: float


@dataclass(frozen=True)
class ExportConfig:
    outdir: str = "outputs/run"
    formats: list[str] = field(default_factory=lambda: ["npy"])


@dataclass(frozen=True)
class ScenarioConfig:
    world: WorldConfig
    render: RenderConfig
    export: ExportConfig | None = None
