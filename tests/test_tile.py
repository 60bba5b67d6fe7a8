"""Tile behavior and color mapping tests."""

from __future__ import annotations

import dataclasses

import pytest

from warmpt.heat import Conductor, Sink, Source
from warmpt.tile import Tile


pytestmark = pytest.mark.unit


def test_constructors_map_parameters_to_behaviors() -> None:
    src = Tile.source(10.0, 100.0)
    assert src.behavior() == Source(produced_per_tick=10.0)
    assert src.heat() == 100.0

    sink = Tile.sink(5.0, -3.0)
    assert sink.behavior() == Sink(absorbed_per_tick=5.0)
    assert sink.heat() == -3.0

    cond = Tile.conductor(7.0, 50.0)
    assert cond.behavior() == Conductor(rate=50.0)
    assert cond.heat() == 7.0

    assert Tile.default() == Tile(Conductor(rate=0.0), 0.0)


def test_behavior_is_immutable_and_copy_is_independent() -> None:
    tile = Tile.conductor(1.0, 25.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        tile.behavior().rate = 99.0  # type: ignore[misc]

    clone = tile.copy()
    clone.set_heat(42.0)
    assert tile.heat() == 1.0
    assert clone.heat() == 42.0
    assert clone.behavior() == tile.behavior()


def test_color_for_heat_splits_sign_between_red_and_blue() -> None:
    assert Tile.conductor(50.0, 0.0).color_for_heat(100.0) == (127, 0, 0)
    assert Tile.conductor(-50.0, 0.0).color_for_heat(100.0) == (0, 0, 127)
    assert Tile.conductor(255.0, 0.0).color_for_heat(255.0) == (255, 0, 0)
    assert Tile.conductor(-12.0, 0.0).color_for_heat(255.0) == (0, 0, 12)

    for heat in (-1000.0, -3.5, -0.01, 0.01, 3.5, 99.9, 1000.0):
        r, g, b = Tile.conductor(heat, 0.0).color_for_heat(100.0)
        assert g == 0
        assert not (r and b)


def test_zero_heat_is_black_for_every_kind() -> None:
    for tile in (Tile.source(10.0, 0.0), Tile.sink(5.0, 0.0), Tile.conductor(0.0, 30.0)):
        assert tile.color_for_heat(1.0) == (0, 0, 0)


def test_color_truncates_toward_zero_and_saturates_past_max() -> None:
    # 255 / 100 * 0.3 = 0.765 -> 0
    assert Tile.conductor(0.3, 0.0).color_for_heat(100.0) == (0, 0, 0)
    assert Tile.conductor(200.0, 0.0).color_for_heat(100.0) == (255, 0, 0)
    assert Tile.conductor(-200.0, 0.0).color_for_heat(100.0) == (0, 0, 255)


def test_color_rejects_nonpositive_max_heat() -> None:
    tile = Tile.conductor(1.0, 0.0)
    with pytest.raises(ValueError, match="max_heat must be > 0"):
        tile.color_for_heat(0.0)
    with pytest.raises(ValueError, match="max_heat must be > 0"):
        tile.color_for_heat(-5.0)
