"""Tile world, its per-tick update kernel and the staging builder."""

from __future__ import annotations

import numpy as np

from .errors import TileOutOfBoundsError
from .heat import Conductor, Sink, Source
from .tile import Tile


def neighbors(x: int, y: int, width: int, height: int) -> list[tuple[int, int]]:
    """Orthogonal in-bounds neighbors in east, south, west, north order.

    Out-of-range positions are dropped, so edge tiles have 3 neighbors and
    corner tiles 2.
    """
    around = ((x + 1, y), (x, y + 1), (x - 1, y), (x, y - 1))
    return [(nx, ny) for nx, ny in around if 0 <= nx < width and 0 <= ny < height]


class World:
    """Rectangular grid of tiles indexed as ``tiles[x][y]``.

    Dimensions are fixed once built; only tile heat values change, via ``tick``.
    """

    __slots__ = ("_tiles", "_width", "_height")

    def __init__(self, tiles: list[list[Tile]], width: int, height: int) -> None:
        if len(tiles) != width or any(len(column) != height for column in tiles):
            raise ValueError(f"tiles must form a {width}x{height} grid.")
        self._tiles = tiles
        self._width = int(width)
        self._height = int(height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def shape(self) -> tuple[int, int]:
        """Image shape as (height, width)."""
        return (self._height, self._width)

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise TileOutOfBoundsError(x, y, self._width, self._height)

    def tile(self, x: int, y: int) -> Tile:
        self._check_bounds(x, y)
        return self._tiles[x][y]

    def neighbors(self, x: int, y: int) -> list[tuple[int, int]]:
        return neighbors(x, y, self._width, self._height)

    def copy(self) -> "World":
        return World([[t.copy() for t in column] for column in self._tiles], self._width, self._height)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, World):
            return NotImplemented
        return (self._width, self._height) == (other._width, other._height) and self._tiles == other._tiles

    def __repr__(self) -> str:
        return f"World(width={self._width}, height={self._height})"

    def heat_field(self) -> np.ndarray:
        """Return heat values as a float array of shape (height, width)."""
        field = np.zeros(self.shape, dtype=float)
        for x, column in enumerate(self._tiles):
            for y, t in enumerate(column):
                field[y, x] = t.heat()
        return field

    def total_heat(self) -> float:
        return float(sum(t.heat() for column in self._tiles for t in column))

    def render(self, max_heat: float) -> np.ndarray:
        """Render the world 1 tile : 1 pixel as a uint8 RGB image of shape (height, width, 3)."""
        if max_heat <= 0.0:
            raise ValueError(f"max_heat must be > 0, got {max_heat}.")
        img = np.zeros((self._height, self._width, 3), dtype=np.uint8)
        for x, column in enumerate(self._tiles):
            for y, t in enumerate(column):
                img[y, x] = t.color_for_heat(max_heat)
        return img

    def tick(self) -> None:
        """Advance the simulation by one step.

        Cells are visited x-major, y-minor and updated in place, so a cell sees
        the values its earlier neighbors already received during this tick.
        """
        tiles = self._tiles
        width = self._width
        height = self._height
        for x in range(width):
            for y in range(height):
                heat_at = tiles[x][y].heat()
                behavior = tiles[x][y].behavior()

                if isinstance(behavior, Source):
                    for nx, ny in neighbors(x, y, width, height):
                        h = tiles[nx][ny].heat()
                        # only the eligibility test uses the source heat as a ceiling
                        if h < heat_at:
                            tiles[nx][ny].set_heat(h + behavior.produced_per_tick)

                elif isinstance(behavior, Sink):
                    for nx, ny in neighbors(x, y, width, height):
                        h = tiles[nx][ny].heat()
                        if h > heat_at:
                            tiles[nx][ny].set_heat(h - behavior.absorbed_per_tick)

                elif isinstance(behavior, Conductor):
                    rate_percent = behavior.rate / 100.0
                    new_heat_at = heat_at
                    around = neighbors(x, y, width, height)
                    num_around = len(around)
                    for nx, ny in around:
                        other = tiles[nx][ny]
                        other_heat = other.heat()
                        heat_dif = new_heat_at - other_heat
                        if heat_dif > 0.0:
                            change = heat_dif * rate_percent
                            change /= num_around
                            # sources and sinks absorb the change without moving
                            if isinstance(other.behavior(), Conductor):
                                other.set_heat(other_heat + change)
                            new_heat_at -= change
                    tiles[x][y].set_heat(new_heat_at)

    def run(self, ticks: int) -> None:
        """Apply ``tick`` the given number of times."""
        for _ in range(int(ticks)):
            self.tick()


class WorldBuilder:
    """Staging object that fills a world with a default tile and applies overrides."""

    def __init__(self, width: int, height: int, default_tile: Tile | None = None) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"World size must be non-negative, got {width}x{height}.")
        base = Tile.default() if default_tile is None else default_tile
        tiles = [[base.copy() for _ in range(height)] for _ in range(width)]
        self._world: World | None = World(tiles, width, height)

    @classmethod
    def with_default_tile(cls, width: int, height: int, tile: Tile) -> "WorldBuilder":
        return cls(width, height, default_tile=tile)

    def _staged(self) -> World:
        if self._world is None:
            raise RuntimeError("WorldBuilder has already been built.")
        return self._world

    @property
    def width(self) -> int:
        return self._staged().width

    @property
    def height(self) -> int:
        return self._staged().height

    def set(self, x: int, y: int, tile: Tile) -> None:
        world = self._staged()
        world._check_bounds(x, y)
        world._tiles[x][y] = tile.copy()

    def get(self, x: int, y: int) -> Tile:
        return self._staged().tile(x, y).copy()

    def set_rect_x(self, x_start: int, x_end: int, y: int, tile: Tile) -> None:
        """Set cells (x, y) for x in [x_start, x_end]; empty when x_start > x_end."""
        world = self._staged()
        if x_start > x_end:
            return
        world._check_bounds(x_start, y)
        world._check_bounds(x_end, y)
        for x in range(x_start, x_end + 1):
            world._tiles[x][y] = tile.copy()

    def set_rect_y(self, y_start: int, y_end: int, x: int, tile: Tile) -> None:
        """Set cells (x, y) for y in [y_start, y_end]; empty when y_start > y_end."""
        world = self._staged()
        if y_start > y_end:
            return
        world._check_bounds(x, y_start)
        world._check_bounds(x, y_end)
        for y in range(y_start, y_end + 1):
            world._tiles[x][y] = tile.copy()

    def build(self) -> World:
        """Hand over the finished world; the builder cannot be used afterward."""
        world = self._staged()
        self._world = None
        return world
