"""Heat behaviors a tile can have."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union


@dataclass(frozen=True)
class Source:
    """Heat source.

    The owning tile's heat is the ceiling up to which neighbors are raised and is
    never changed by the simulation.
    """

    produced_per_tick: float
    kind: ClassVar[str] = "source"


@dataclass(frozen=True)
class Sink:
    """Heat sink. The owning tile's heat is the floor neighbors are lowered to."""

    absorbed_per_tick: float
    kind: ClassVar[str] = "sink"


@dataclass(frozen=True)
class Conductor:
    """Passive conductor; rate is the percentage (out of 100) of heat difference moved per tick."""

    rate: float
    kind: ClassVar[str] = "conductor"


HeatBehavior = Union[Source, Sink, Conductor]

__all__ = ["Conductor", "HeatBehavior", "Sink", "Source"]
