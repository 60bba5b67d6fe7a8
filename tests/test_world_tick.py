"""Update kernel tests for World.tick."""

from __future__ import annotations

import numpy as np
import pytest

from warmpt.tile import Tile
from warmpt.world import World, WorldBuilder


pytestmark = pytest.mark.unit


def _heats(world: World) -> list[list[float]]:
    return [[world.tile(x, y).heat() for x in range(world.width)] for y in range(world.height)]


def test_source_next_to_conductor_two_tile_line() -> None:
    builder = WorldBuilder.with_default_tile(2, 1, Tile.conductor(0.0, 50.0))
    builder.set(0, 0, Tile.source(10.0, 100.0))
    world = builder.build()

    world.tick()

    assert world.tile(1, 0).heat() == 10.0
    assert world.tile(0, 0).heat() == 100.0


def test_three_tile_line_with_sink_follows_sequential_sweep() -> None:
    builder = WorldBuilder(3, 1)
    builder.set(0, 0, Tile.conductor(50.0, 100.0))
    builder.set(1, 0, Tile.conductor(0.0, 100.0))
    builder.set(2, 0, Tile.sink(5.0, 0.0))
    world = builder.build()

    world.tick()

    # left cell hands all 50 to the middle first; the middle then splits its
    # transfer between the sink (unchanged) and the left cell, and the sink
    # finally pulls 5 out of the middle
    assert world.tile(0, 0).heat() == pytest.approx(12.5)
    assert world.tile(1, 0).heat() == pytest.approx(7.5)
    assert world.tile(2, 0).heat() == 0.0


def test_in_place_update_differs_from_snapshot_semantics() -> None:
    builder = WorldBuilder.with_default_tile(3, 1, Tile.conductor(0.0, 100.0))
    builder.set(0, 0, Tile.conductor(100.0, 100.0))
    world = builder.build()

    world.tick()

    assert _heats(world) == [[pytest.approx(25.0), pytest.approx(50.0), pytest.approx(25.0)]]
    assert world.total_heat() == pytest.approx(100.0)


@pytest.mark.parametrize(
    "tile",
    [Tile.source(10.0, 100.0), Tile.sink(5.0, -20.0), Tile.conductor(42.0, 75.0)],
)
def test_isolated_tile_never_changes(tile: Tile) -> None:
    world = WorldBuilder.with_default_tile(1, 1, tile).build()
    for _ in range(5):
        world.tick()
    assert world.tile(0, 0).heat() == tile.heat()


def test_source_raise_ignores_ceiling_for_new_value() -> None:
    builder = WorldBuilder.with_default_tile(3, 1, Tile.conductor(10.0, 0.0))
    builder.set(1, 0, Tile.source(30.0, 20.0))
    builder.set(2, 0, Tile.conductor(20.0, 0.0))
    world = builder.build()

    world.tick()

    assert world.tile(0, 0).heat() == 40.0
    assert world.tile(2, 0).heat() == 20.0
    assert world.tile(1, 0).heat() == 20.0


def test_sink_lower_ignores_floor_for_new_value() -> None:
    builder = WorldBuilder.with_default_tile(3, 1, Tile.conductor(10.0, 0.0))
    builder.set(1, 0, Tile.sink(30.0, 0.0))
    builder.set(2, 0, Tile.conductor(-5.0, 0.0))
    world = builder.build()

    world.tick()

    assert world.tile(0, 0).heat() == -20.0
    assert world.tile(2, 0).heat() == -5.0
    assert world.tile(1, 0).heat() == 0.0


def test_conductor_does_not_heat_sources_or_sinks() -> None:
    builder = WorldBuilder(3, 1)
    builder.set(0, 0, Tile.sink(0.0, -10.0))
    builder.set(1, 0, Tile.conductor(40.0, 50.0))
    builder.set(2, 0, Tile.source(0.0, -10.0))
    world = builder.build()

    world.tick()

    assert world.tile(0, 0).heat() == -10.0
    assert world.tile(2, 0).heat() == -10.0
    # east: diff 50 -> change 12.5; west: diff 37.5 -> change 9.375
    assert world.tile(1, 0).heat() == pytest.approx(40.0 - 12.5 - 9.375)


def test_conductor_local_balance_with_conductor_neighbors() -> None:
    builder = WorldBuilder(3, 3)
    builder.set(1, 1, Tile.conductor(100.0, 40.0))
    world = builder.build()

    world.tick()

    center = world.tile(1, 1).heat()
    received = [world.tile(x, y).heat() for x, y in world.neighbors(1, 1)]
    assert received == pytest.approx([10.0, 9.0, 8.1, 7.29])
    assert center == pytest.approx(65.61)
    assert sum(received) == pytest.approx(100.0 - center)


def test_conductor_skips_hotter_neighbors() -> None:
    builder = WorldBuilder(2, 1)
    builder.set(0, 0, Tile.conductor(5.0, 100.0))
    builder.set(1, 0, Tile.conductor(50.0, 0.0))
    world = builder.build()

    world.tick()

    assert world.tile(0, 0).heat() == 5.0
    assert world.tile(1, 0).heat() == 50.0


def test_tick_is_deterministic_for_cloned_states() -> None:
    rng = np.random.default_rng(7)
    builder = WorldBuilder(6, 5)
    for x in range(6):
        for y in range(5):
            roll = rng.random()
            if roll < 0.1:
                builder.set(x, y, Tile.source(float(rng.uniform(1, 5)), float(rng.uniform(50, 100))))
            elif roll < 0.2:
                builder.set(x, y, Tile.sink(float(rng.uniform(1, 5)), float(rng.uniform(-100, -50))))
            else:
                builder.set(x, y, Tile.conductor(float(rng.uniform(-10, 10)), float(rng.uniform(0, 100))))
    first = builder.build()
    second = first.copy()
    assert first == second

    for _ in range(10):
        first.tick()
        second.tick()

    assert first == second
    np.testing.assert_array_equal(first.heat_field(), second.heat_field())


def test_run_applies_multiple_ticks() -> None:
    builder = WorldBuilder.with_default_tile(2, 1, Tile.conductor(0.0, 0.0))
    builder.set(0, 0, Tile.source(1.0, 100.0))
    world = builder.build()

    world.run(4)

    assert world.tile(1, 0).heat() == 4.0


def test_behaviors_never_change_across_ticks() -> None:
    builder = WorldBuilder.with_default_tile(4, 4, Tile.conductor(1.0, 60.0))
    builder.set(0, 0, Tile.source(2.0, 10.0))
    builder.set(3, 3, Tile.sink(2.0, -10.0))
    world = builder.build()
    before = [[world.tile(x, y).behavior() for y in range(4)] for x in range(4)]

    world.run(20)

    after = [[world.tile(x, y).behavior() for y in range(4)] for x in range(4)]
    assert before == after
    assert world.tile(0, 0).heat() == 10.0
    assert world.tile(3, 3).heat() == -10.0


def test_render_produces_uint8_image_indexed_by_y_then_x() -> None:
    builder = WorldBuilder(3, 2)
    builder.set(2, 0, Tile.conductor(255.0, 0.0))
    builder.set(0, 1, Tile.conductor(-255.0, 0.0))
    world = builder.build()

    img = world.render(255.0)

    assert img.shape == (2, 3, 3)
    assert img.dtype == np.uint8
    assert tuple(img[0, 2]) == (255, 0, 0)
    assert tuple(img[1, 0]) == (0, 0, 255)
    assert int(img.sum()) == 510
    np.testing.assert_array_equal(img, world.render(255.0))


def test_render_rejects_nonpositive_max_heat() -> None:
    world = WorldBuilder(2, 2).build()
    with pytest.raises(ValueError):
        world.render(0.0)


def test_zero_size_world_tick_and_render_are_noops() -> None:
    world = WorldBuilder(0, 0).build()
    world.tick()
    assert world.render(10.0).shape == (0, 0, 3)
    assert world.heat_field().shape == (0, 0)
    assert world.total_heat() == 0.0
