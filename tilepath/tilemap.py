from __future__ import annotations
import os
import json
import math
from typing import Optional, List, Sequence, Set, Tuple

import numpy as np
from pygame.math import Vector2

from .config import WORLD_FILE, CELL_SIZE, TILE_WALL

Tile = Tuple[int, int]


class TileMap:
    """Tile map loaded from external file (default) or provided grid."""

    def __init__(
        self,
        map_grid: Optional[List[List[int]]] = None,
        cell_size: Optional[Sequence[float]] = None,
    ) -> None:
        size = cell_size
        if map_grid is not None:
            self.map = map_grid
        else:
            # Load map and cell size from JSON file
            world_path = os.path.join(os.path.dirname(__file__), WORLD_FILE)
            self.map, file_size = self._load(world_path)
            if size is None:
                size = file_size
        if size is None:
            size = CELL_SIZE
        self.cell_size = Vector2(float(size[0]), float(size[1]))
        if self.cell_size.x <= 0 or self.cell_size.y <= 0:
            raise ValueError(f"cell size must be positive, got {tuple(size)}")

        self.height = len(self.map)
        self.width = len(self.map[0]) if self.height > 0 else 0
        for y, row in enumerate(self.map):
            if len(row) != self.width:
                raise ValueError(
                    f"map row {y} has {len(row)} tiles, expected {self.width}"
                )

    @classmethod
    def from_file(cls, path: str) -> TileMap:
        """Load a tile map from a JSON world file at ``path``."""
        map_grid, cell_size = cls._load(path)
        return cls(map_grid=map_grid, cell_size=cell_size)

    @staticmethod
    def _load(path: str) -> Tuple[List[List[int]], Optional[Tuple[float, float]]]:
        try:
            with open(path, "r") as f:
                data = json.load(f)
            map_grid = [[int(t) for t in row] for row in data.get("map", [])]
            size = data.get("cell_size")
            if isinstance(size, (int, float)):
                cell_size = (float(size), float(size))
            elif isinstance(size, (list, tuple)) and len(size) == 2:
                cell_size = (float(size[0]), float(size[1]))
            else:
                cell_size = None
        except Exception as e:
            raise RuntimeError(f"Failed to load world map from {path}: {e}")
        return map_grid, cell_size

    @property
    def half_tile_size(self) -> Vector2:
        """Offset from a tile's origin to its center, in world units."""
        return self.cell_size / 2

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell(self, x: int, y: int) -> Optional[int]:
        """Return the tile value at (x, y), or None if out of bounds."""
        if not self.in_bounds(x, y):
            return None
        return self.map[y][x]

    def is_wall(self, x: float, y: float) -> bool:
        """Return True if (x, y) is a wall tile or out of bounds."""
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return True
        return self.map[int(y)][int(x)] == TILE_WALL

    def non_walkable_tiles(self) -> Set[Tile]:
        """Return the coordinates of every wall tile."""
        return {
            (x, y)
            for y, row in enumerate(self.map)
            for x, tile in enumerate(row)
            if tile == TILE_WALL
        }

    def walkable_mask(self) -> np.ndarray:
        """Boolean array indexed ``[y, x]``; True where the tile is walkable."""
        if self.height == 0 or self.width == 0:
            return np.zeros((self.height, self.width), dtype=bool)
        return np.asarray(self.map) != TILE_WALL

    def world_to_map(self, pos: Sequence[float]) -> Tile:
        """Convert a world-space position to the tile containing it."""
        return (
            int(math.floor(pos[0] / self.cell_size.x)),
            int(math.floor(pos[1] / self.cell_size.y)),
        )

    def map_to_world(self, tile: Sequence[int]) -> Vector2:
        """Return the world-space position of a tile's top-left corner."""
        return Vector2(tile[0] * self.cell_size.x, tile[1] * self.cell_size.y)

    def tile_center(self, tile: Sequence[int]) -> Vector2:
        return self.map_to_world(tile) + self.half_tile_size
