"""Tile-based heat diffusion simulator."""

from .errors import ScenarioError, TileOutOfBoundsError
from .heat import Conductor, HeatBehavior, Sink, Source
from .scenario import SimulationResult, build_world, load_scenario, run_scenario, run_scenario_data
from .tile import Tile
from .world import World, WorldBuilder, neighbors

__all__ = [
    "Conductor",
    "HeatBehavior",
    "ScenarioError",
    "SimulationResult",
    "Sink",
    "Source",
    "Tile",
    "TileOutOfBoundsError",
    "World",
    "WorldBuilder",
    "build_world",
    "load_scenario",
    "neighbors",
    "run_scenario",
    "run_scenario_data",
]
__version__ = "0.1.0"
