"""YAML scenario loading, world construction and the simulation driver."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np
import yaml
from tqdm import tqdm

from .config import ScenarioConfig, WorldConfig, parse_scenario_config
from .errors import ScenarioError, TileOutOfBoundsError
from .export import export_results, save_frames_gif
from .world import World, WorldBuilder

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Outcome of a scenario run."""

    world: World
    config: ScenarioConfig
    frames: list[np.ndarray] = field(default_factory=list)
    history: list[dict[str, float]] = field(default_factory=list)
    exports: list[Path] = field(default_factory=list)


def load_scenario(scenario_path: str | Path) -> dict[str, Any]:
    """Load YAML scenario from file."""
    path = Path(scenario_path)
    if not path.exists():
        raise ScenarioError(f"Scenario file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ScenarioError(f"Failed to parse YAML scenario: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ScenarioError(f"Failed to read scenario: {path}") from exc

    if payload is None:
        raise ScenarioError(f"Scenario is empty: {path}")
    if not isinstance(payload, dict):
        raise ScenarioError("scenario must be a mapping.")
    return payload


def build_world(config: WorldConfig) -> World:
    """Fill the world with the default tile, then apply overrides in order.

    A failing override aborts the whole build; the partially staged world is
    discarded.
    """
    builder = WorldBuilder.with_default_tile(config.width, config.height, config.default_tile.to_tile())
    for idx, inst in enumerate(config.instructions):
        logger.debug("Executing build instruction %d: %s %s", idx, inst.kind, inst.coords)
        tile = inst.tile.to_tile()
        try:
            if inst.kind == "set":
                x, y = inst.coords
                builder.set(x, y, tile)
            elif inst.kind == "set_sect_x":
                x_start, x_end, y = inst.coords
                builder.set_rect_x(x_start, x_end, y, tile)
            elif inst.kind == "set_sect_y":
                y_start, y_end, x = inst.coords
                builder.set_rect_y(y_start, y_end, x, tile)
            else:
                raise ScenarioError(f"build_instructions[{idx}] has unknown kind '{inst.kind}'.")
        except TileOutOfBoundsError as exc:
            raise ScenarioError(f"build_instructions[{idx}] ('{inst.kind}') failed: {exc}") from exc
    return builder.build()


def _resolve_path(scenario_path: Path, target: str, out_override: str | Path | None) -> Path:
    if out_override is not None:
        return Path(out_override).resolve() / Path(target).name
    path = Path(target)
    if not path.is_absolute():
        path = (scenario_path.parent / path).resolve()
    return path


def _resolve_outdir(scenario_path: Path, outdir: str, out_override: str | Path | None) -> Path:
    if out_override is not None:
        return Path(out_override).resolve()
    path = Path(outdir)
    if not path.is_absolute():
        path = (scenario_path.parent / path).resolve()
    return path


def _history_row(world: World, frame: int, tick: int) -> dict[str, float]:
    heat = world.heat_field()
    return {
        "frame": frame,
        "tick": tick,
        "total_heat": float(np.sum(heat)),
        "min_heat": float(np.min(heat)),
        "max_heat": float(np.max(heat)),
    }


def simulate(
    world: World, config: ScenarioConfig, *, progress: bool = False
) -> tuple[list[np.ndarray], list[dict[str, float]]]:
    """Run ``sim_steps`` frames of ``sim_substeps`` ticks each, rendering after every frame.

    ``progress`` shows a tqdm bar over frames on stderr.
    """
    render = config.render
    frames: list[np.ndarray] = []
    history: list[dict[str, float]] = []
    logger.debug(
        "Simulation running for %d frames, with %d steps per frame", render.sim_steps, render.sim_substeps
    )

    ticks = 0
    for frame in tqdm(range(render.sim_steps), desc="Simulating", unit="frame", disable=not progress):
        for _ in range(render.sim_substeps):
            world.tick()
            ticks += 1
        frames.append(world.render(render.max_display_heat))
        history.append(_history_row(world, frame, ticks))
        logger.debug("Rendered frame %d/%d (tick %d)", frame + 1, render.sim_steps, ticks)
    return frames, history


def run_scenario_data(
    payload: dict[str, Any],
    *,
    scenario_path: str | Path | None = None,
    out_override: str | Path | None = None,
    progress: bool = False,
) -> SimulationResult:
    """Run a scenario from an in-memory payload.

    Relative output paths resolve against the scenario file's directory.
    ``out_override`` redirects every output into one directory. ``progress``
    shows a frame progress bar while simulating.
    """
    path = Path("__in_memory_scenario__.yaml") if scenario_path is None else Path(scenario_path)
    if not path.is_absolute():
        path = (Path.cwd() / path).resolve()

    if not isinstance(payload, dict):
        raise ScenarioError("scenario must be a mapping.")

    try:
        config = parse_scenario_config(payload)
    except (TypeError, ValueError) as exc:
        raise ScenarioError(str(exc)) from exc
    logger.info("Loaded world properties")

    logger.info("Building world..")
    world = build_world(config.world)
    logger.info("Built %dx%d world", world.width, world.height)

    before = time.perf_counter()
    frames, history = simulate(world, config, progress=progress)
    logger.debug("Simulation ran in %.3fs", time.perf_counter() - before)

    result = SimulationResult(world=world, config=config, frames=frames, history=history)

    gif_path = _resolve_path(path, config.render.render_file, out_override)
    logger.info("Creating render file %s", gif_path)
    try:
        result.exports.append(
            save_frames_gif(
                frames,
                gif_path,
                ms_per_frame=config.render.ms_per_frame,
                repeat=config.render.repeat,
            )
        )
        if config.export is not None:
            outdir = _resolve_outdir(path, config.export.outdir, out_override)
            result.exports.extend(
                export_results(
                    world,
                    outdir,
                    config.export.formats,
                    history=history,
                    max_heat=config.render.max_display_heat,
                )
            )
    except (OSError, ValueError) as exc:
        raise ScenarioError(f"Writing outputs failed: {exc}") from exc

    logger.info("done!")
    return result


def run_scenario(
    scenario_path: str | Path,
    out_override: str | Path | None = None,
    *,
    progress: bool = False,
) -> SimulationResult:
    """Run a simulation described by a YAML scenario file."""
    scenario_path = Path(scenario_path).resolve()
    logger.debug("Loading configuration from %s..", scenario_path)
    payload = load_scenario(scenario_path)
    return run_scenario_data(payload, scenario_path=scenario_path, out_override=out_override, progress=progress)
