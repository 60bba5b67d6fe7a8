from __future__ import annotations

import importlib
import tempfile
from dataclasses import dataclass
from pathlib import Path

from .scenario import run_scenario_data


@dataclass
class CheckRow:
    name: str
    ok: bool
    detail: str


@dataclass
class SelfCheckReport:
    rows: list[CheckRow]

    @property
    def ok(self) -> bool:
        return all(row.ok for row in self.rows)

    def to_text(self) -> str:
        lines: list[str] = []
        for row in self.rows:
            status = "OK" if row.ok else "FAIL"
            lines.append(f"[{status}] {row.name}: {row.detail}")
        lines.append(f"overall: {'OK' if self.ok else 'FAIL'}")
        return "\n".join(lines)


SMOKE_SCENARIO = {
    "render_file": "smoke.gif",
    "render_repeat": True,
    "ms_per_frame": 40,
    "sim_steps": 4,
    "sim_substeps": 2,
    "max_display_heat": 100.0,
    "world_size": [6, 4],
    "default_tile": ["conductor", 0.0, 50.0],
    "build_instructions": [
        ["set", 0, 0, "source", 10.0, 100.0],
        ["set_sect_y", 0, 3, 5, "sink", 5.0, -50.0],
    ],
    "export": {"formats": ["npy", "csv"]},
}


def run_selfcheck(*, smoke: bool = True) -> SelfCheckReport:
    rows: list[CheckRow] = []

    for module_name in ("numpy", "yaml", "matplotlib", "imageio", "tqdm"):
        try:
            mod = importlib.import_module(module_name)
            version = getattr(mod, "__version__", "unknown")
            rows.append(CheckRow(module_name, True, f"version={version}"))
        except Exception as exc:
            rows.append(CheckRow(module_name, False, str(exc)))

    if smoke and all(row.ok for row in rows):
        try:
            with tempfile.TemporaryDirectory(prefix="warmpt-selfcheck-") as tmp:
                outdir = Path(tmp) / "out"
                result = run_scenario_data(
                    dict(SMOKE_SCENARIO),
                    scenario_path=Path(tmp) / "smoke.yaml",
                    out_override=outdir,
                )
                expected = [outdir / "smoke.gif", outdir / "heat.npy", outdir / "history.csv"]
                missing = [path.name for path in expected if not path.exists()]
                if missing:
                    rows.append(CheckRow("smoke", False, f"missing artifacts: {', '.join(missing)}"))
                else:
                    rows.append(
                        CheckRow(
                            "smoke",
                            True,
                            f"world={result.world.shape}, frames={len(result.frames)}",
                        )
                    )
        except Exception as exc:
            rows.append(CheckRow("smoke", False, str(exc)))

    return SelfCheckReport(rows=rows)
