"""
Path queries on top of the tile graph: start/end management, validation and
the current-path slot consumed by walkers.
"""
from __future__ import annotations
import logging
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from pygame.math import Vector2

from .config import USE_DIAGONAL, ALLOW_CORNER_CUTTING
from .graph import TileGraph, build_graph_from_mask
from .pathfinding import find_path

if TYPE_CHECKING:
    from .tilemap import TileMap

Tile = Tuple[int, int]

logger = logging.getLogger(__name__)


class AstarPath:
    """A* path finding over a tile map, configured once per map load."""

    def __init__(self) -> None:
        self.tilemap: Optional[TileMap] = None
        self.graph: Optional[TileGraph] = None
        self.half_tile_offset = Vector2(0, 0)
        self._start: Optional[Tile] = None
        self._end: Optional[Tile] = None
        self._path: List[Tile] = []

    @property
    def is_configured(self) -> bool:
        return self.graph is not None

    @property
    def start(self) -> Optional[Tile]:
        return self._start

    @property
    def end(self) -> Optional[Tile]:
        return self._end

    @property
    def current_path(self) -> List[Tile]:
        """Copy of the last computed path; empty if none."""
        return list(self._path)

    def configure(
        self,
        tilemap: TileMap,
        diagonal: Optional[bool] = None,
        corner_cutting: Optional[bool] = None,
    ) -> TileGraph:
        """
        Build the navigation graph for ``tilemap``.
        Calling this again rebuilds from scratch and clears start, end and
        the current path.
        """
        if diagonal is None:
            diagonal = USE_DIAGONAL
        if corner_cutting is None:
            corner_cutting = ALLOW_CORNER_CUTTING
        self.graph = build_graph_from_mask(
            tilemap.walkable_mask(),
            diagonal=diagonal,
            corner_cutting=corner_cutting,
        )
        self.tilemap = tilemap
        self.half_tile_offset = Vector2(tilemap.half_tile_size)
        self._start = None
        self._end = None
        self._path = []
        return self.graph

    def is_valid_tile(self, coord: Sequence[int]) -> bool:
        """True if ``coord`` is an in-bounds, walkable node of the graph."""
        if self.graph is None:
            return False
        x, y = coord[0], coord[1]
        # Tile coordinates are whole numbers; int() would move -0.5 onto 0
        if x != int(x) or y != int(y):
            return False
        return self.graph.is_walkable(int(x), int(y))

    def try_set_start(self, coord: Sequence[int]) -> bool:
        """
        Set the path start tile. Recomputes the current path when an end
        tile is already set. Returns False and changes nothing if the tile
        is not walkable.
        """
        if not self._check_tile(coord, "start"):
            return False
        self._start = (int(coord[0]), int(coord[1]))
        if self._end is not None:
            self._calculate()
        return True

    def try_set_end(self, coord: Sequence[int]) -> bool:
        """Set the path end tile; False and no change if not walkable."""
        if not self._check_tile(coord, "end"):
            return False
        self._end = (int(coord[0]), int(coord[1]))
        return True

    def request_path(
        self, start_tile: Sequence[int], end_tile: Sequence[int]
    ) -> Optional[List[Tile]]:
        """
        Compute and store the path between two tiles.
        Returns None (state untouched) if either tile is rejected, otherwise
        the new path, which is empty when the end is unreachable.
        """
        if self.graph is None:
            logger.error(
                "Path requested before a tile map was configured; "
                "call configure(tilemap) first"
            )
            return None
        if not (
            self._check_tile(start_tile, "start")
            and self._check_tile(end_tile, "end")
        ):
            return None
        self._start = (int(start_tile[0]), int(start_tile[1]))
        self._end = (int(end_tile[0]), int(end_tile[1]))
        return self._calculate()

    def try_compute_path(
        self, start_world: Sequence[float], end_world: Sequence[float]
    ) -> bool:
        """
        Compute a path between two world-space positions.
        Returns True if the search ran and its result was stored.
        """
        if self.tilemap is None:
            logger.error(
                "Path requested before a tile map was configured; "
                "call configure(tilemap) first"
            )
            return False
        start_tile = self.tilemap.world_to_map(start_world)
        end_tile = self.tilemap.world_to_map(end_world)
        return self.request_path(start_tile, end_tile) is not None

    def _check_tile(self, coord: Sequence[int], role: str) -> bool:
        if self.graph is None:
            logger.error("Cannot set %s tile: no tile map configured", role)
            return False
        if not self.is_valid_tile(coord):
            logger.debug("Rejected %s tile %s: not walkable", role, tuple(coord))
            return False
        return True

    def _calculate(self) -> List[Tile]:
        graph = self.graph
        start_id = graph.tile_id(*self._start)
        end_id = graph.tile_id(*self._end)
        self._path = [
            graph.point_position(i) for i in find_path(graph, start_id, end_id)
        ]
        if not self._path:
            logger.info("No path from %s to %s", self._start, self._end)
        return list(self._path)
