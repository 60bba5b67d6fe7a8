"""Scenario payload parsing into typed models."""

from __future__ import annotations

from typing import Any, Mapping, cast

from .models import (
    BuildInstruction,
    ExportConfig,
    InstructionKind,
    RenderConfig,
    ScenarioConfig,
    TileKind,
    TileSpec,
    WorldConfig,
)
from .validators import (
    as_list,
    ensure_choice,
    ensure_nonnegative,
    opt_mapping,
    required,
    to_bool,
    to_float,
    to_int,
)

TILE_KINDS: tuple[str, ...] = ("source", "sink", "conductor")
EXPORT_FORMATS: tuple[str, ...] = ("npy", "png", "csv")

# instruction name -> names of its integer coordinates
INSTRUCTION_COORDS: dict[str, tuple[str, ...]] = {
    "set": ("x", "y"),
    "set_sect_x": ("x_start", "x_end", "y"),
    "set_sect_y": ("y_start", "y_end", "x"),
}


def parse_tile_from_parts(kind: Any, param1: Any, param2: Any, context: str) -> TileSpec:
    """Parse a tile spec given as separate kind/param values."""
    if not isinstance(kind, str):
        raise ValueError(f"{context}.kind must be a string, got {kind!r}.")
    kind_name = ensure_choice(f"{context}.kind", kind, TILE_KINDS)
    return TileSpec(
        kind=cast(TileKind, kind_name),
        param1=to_float(param1, "param1", context),
        param2=to_float(param2, "param2", context),
    )


def parse_tile_spec(raw: Any, context: str) -> TileSpec:
    """Parse ``[kind, param1, param2]``."""
    parts = as_list(raw, context)
    if len(parts) != 3:
        raise ValueError(f"{context} must have exactly 3 entries [kind, param1, param2], got {len(parts)}.")
    return parse_tile_from_parts(parts[0], parts[1], parts[2], context)


def parse_build_instruction(raw: Any, idx: int) -> BuildInstruction:
    """Parse one ``build_instructions`` entry."""
    context = f"build_instructions[{idx}]"
    parts = as_list(raw, context)
    if not parts:
        raise ValueError(f"{context} must not be empty.")

    name = parts[0]
    if not isinstance(name, str):
        raise ValueError(f"{context}[0] must be an instruction name, got {name!r}.")
    inst_name = ensure_choice(f"{context}[0]", name, tuple(INSTRUCTION_COORDS))
    coord_names = INSTRUCTION_COORDS[inst_name]

    expected = 1 + len(coord_names) + 3
    if len(parts) != expected:
        raise ValueError(f"{context} ('{inst_name}') must have {expected} entries, got {len(parts)}.")

    coords: list[int] = []
    for offset, coord_name in enumerate(coord_names, start=1):
        value = to_int(parts[offset], coord_name, context)
        ensure_nonnegative(f"{context}.{coord_name}", value)
        coords.append(value)

    tile_parts = parts[1 + len(coord_names):]
    tile = parse_tile_from_parts(tile_parts[0], tile_parts[1], tile_parts[2], f"{context}.tile")
    return BuildInstruction(kind=cast(InstructionKind, inst_name), coords=tuple(coords), tile=tile)


def parse_world_config(payload: Mapping[str, Any]) -> WorldConfig:
    """Extract world size, default tile and overrides."""
    size = as_list(required(payload, "world_size", "scenario"), "scenario.world_size")
    if len(size) != 2:
        raise ValueError(f"scenario.world_size must be [width, height], got {size!r}.")
    width = to_int(size[0], "width", "scenario.world_size")
    height = to_int(size[1], "height", "scenario.world_size")
    ensure_nonnegative("scenario.world_size.width", width, allow_zero=False)
    ensure_nonnegative("scenario.world_size.height", height, allow_zero=False)

    default_tile = parse_tile_spec(required(payload, "default_tile", "scenario"), "scenario.default_tile")

    raw_instructions = payload.get("build_instructions")
    if raw_instructions is None:
        raw_instructions = []
    instructions = [
        parse_build_instruction(raw, idx)
        for idx, raw in enumerate(as_list(raw_instructions, "scenario.build_instructions"))
    ]
    return WorldConfig(width=width, height=height, default_tile=default_tile, instructions=instructions)


def parse_render_config(payload: Mapping[str, Any]) -> RenderConfig:
    """Extract animation output and pacing settings."""
    ctx = "scenario"
    render_file = required(payload, "render_file", ctx)
    if not isinstance(render_file, str) or not render_file:
        raise ValueError(f"{ctx}.render_file must be a non-empty string.")

    ms_per_frame = to_int(required(payload, "ms_per_frame", ctx), "ms_per_frame", ctx)
    sim_steps = to_int(required(payload, "sim_steps", ctx), "sim_steps", ctx)
    sim_substeps = to_int(required(payload, "sim_substeps", ctx), "sim_substeps", ctx)
    max_display_heat = to_float(required(payload, "max_display_heat", ctx), "max_display_heat", ctx)
    ensure_nonnegative(f"{ctx}.ms_per_frame", ms_per_frame)
    ensure_nonnegative(f"{ctx}.sim_steps", sim_steps, allow_zero=False)
    ensure_nonnegative(f"{ctx}.sim_substeps", sim_substeps)
    ensure_nonnegative(f"{ctx}.max_display_heat", max_display_heat, allow_zero=False)

    return RenderConfig(
        render_file=render_file,
        repeat=to_bool(required(payload, "render_repeat", ctx), "render_repeat", ctx),
        ms_per_frame=ms_per_frame,
        sim_steps=sim_steps,
        sim_substeps=sim_substeps,
        max_display_heat=max_display_heat,
    )


def parse_export_config(payload: Mapping[str, Any]) -> ExportConfig | None:
    """Extract optional data export settings."""
    if payload.get("export") is None:
        return None
    export = opt_mapping(payload["export"], "scenario.export")
    formats_raw = as_list(export.get("formats", ["npy"]), "scenario.export.formats")
    if not formats_raw:
        raise ValueError("scenario.export.formats must be a non-empty list.")
    formats = [ensure_choice("scenario.export.formats", str(fmt), EXPORT_FORMATS) for fmt in formats_raw]
    return ExportConfig(outdir=str(export.get("outdir", "outputs/run")), formats=formats)


def parse_scenario_config(payload: Mapping[str, Any]) -> ScenarioConfig:
    """Parse a whole scenario payload; any invalid entry aborts parsing."""
    return ScenarioConfig(
        world=parse_world_config(payload),
        render=parse_render_config(payload),
        export=parse_export_config(payload),
    )
