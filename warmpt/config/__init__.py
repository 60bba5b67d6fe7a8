"""Typed scenario models and parsers."""

from .models import BuildInstruction, ExportConfig, RenderConfig, ScenarioConfig, TileSpec, WorldConfig
from .parser import (
    parse_build_instruction,
    parse_export_config,
    parse_render_config,
    parse_scenario_config,
    parse_tile_spec,
    parse_world_config,
)
from .validators import as_list, as_mapping, ensure_choice, ensure_nonnegative, opt_mapping, required, to_float, to_int

__all__ = [
    "BuildInstruction",
    "ExportConfig",
    "RenderConfig",
    "ScenarioConfig",
    "TileSpec",
    "WorldConfig",
    "as_list",
    "as_mapping",
    "ensure_choice",
    "ensure_nonnegative",
    "opt_mapping",
    "parse_build_instruction",
    "parse_export_config",
    "parse_render_config",
    "parse_scenario_config",
    "parse_tile_spec",
    "parse_world_config",
    "required",
    "to_float",
    "to_int",
]
