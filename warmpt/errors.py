"""Shared error types for warmpt."""

from __future__ import annotations


class ScenarioError(ValueError):
    """Raised when a scenario is invalid or execution fails."""


class TileOutOfBoundsError(IndexError):
    """Raised when a tile coordinate falls outside the world."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(f"Tile ({x}, {y}) is outside world of size {width}x{height}.")
        self.x = x
        self.y = y
        self.width = width
        self.height = height
