"""
Graph building: turns a walkability grid into a weighted undirected graph.
"""
from __future__ import annotations
import logging
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

import numpy as np

from .config import ORTHOGONAL_COST, DIAGONAL_COST

Tile = Tuple[int, int]

logger = logging.getLogger(__name__)

# Orthogonal neighbours: right, left, up, down
ORTHOGONAL_STEPS = ((1, 0), (-1, 0), (0, -1), (0, 1))
# All 8 surrounding tiles, row-major around the centre
ALL_STEPS = tuple(
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)
)


class TileGraph:
    """
    Nodes are walkable tiles keyed by ``tile_id``; edges are stored in both
    directions as adjacency lists of (neighbour id, weight).
    """

    def __init__(self, width: int, height: int, diagonal: bool = False) -> None:
        if width < 0 or height < 0:
            raise ValueError(
                f"grid dimensions must be non-negative, got {width}x{height}"
            )
        self.width = width
        self.height = height
        self.diagonal = diagonal
        self._points: Dict[int, Tile] = {}
        self._edges: Dict[int, List[Tuple[int, float]]] = {}

    def __len__(self) -> int:
        return len(self._points)

    def __contains__(self, point_id: int) -> bool:
        return point_id in self._points

    def tile_id(self, x: int, y: int) -> int:
        """Unique integer key for tile (x, y)."""
        return y * self.width + x

    def tile_of(self, point_id: int) -> Tile:
        """Inverse of ``tile_id``."""
        if self.width == 0:
            raise ValueError("a zero-width grid has no tiles")
        y, x = divmod(point_id, self.width)
        return (x, y)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_walkable(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.tile_id(x, y) in self._points

    def add_point(self, point_id: int, position: Tile) -> None:
        self._points[point_id] = position
        self._edges.setdefault(point_id, [])

    def has_point(self, point_id: int) -> bool:
        return point_id in self._points

    def point_position(self, point_id: int) -> Tile:
        return self._points[point_id]

    def point_ids(self) -> Iterator[int]:
        return iter(self._points)

    def connect_points(self, a: int, b: int, weight: float) -> None:
        """Add an undirected edge; a repeated or self edge is ignored."""
        if a == b:
            return
        if a not in self._points or b not in self._points:
            raise KeyError(f"cannot connect unregistered points {a} and {b}")
        if self.are_connected(a, b):
            return
        self._edges[a].append((b, weight))
        self._edges[b].append((a, weight))

    def are_connected(self, a: int, b: int) -> bool:
        return any(n == b for n, _ in self._edges.get(a, ()))

    def neighbors(self, point_id: int) -> List[Tuple[int, float]]:
        return self._edges.get(point_id, [])

    def edge_weight(self, a: int, b: int) -> Optional[float]:
        for n, weight in self._edges.get(a, ()):
            if n == b:
                return weight
        return None

    @property
    def edge_count(self) -> int:
        return sum(len(adj) for adj in self._edges.values()) // 2


def build_graph(
    width: int,
    height: int,
    non_walkable: Iterable[Tile],
    diagonal: bool = False,
    corner_cutting: bool = True,
) -> TileGraph:
    """
    Build the navigation graph for a ``width`` x ``height`` grid.

    Every in-bounds tile not in ``non_walkable`` becomes a node. Orthogonal
    neighbours are joined with weight 1; with ``diagonal`` the four diagonal
    neighbours are joined too, with weight sqrt(2). When ``corner_cutting`` is
    False a diagonal edge also needs both flanking orthogonal tiles walkable.
    """
    graph = TileGraph(width, height, diagonal=diagonal)
    blocked: Set[Tile] = set(non_walkable)

    # Register walkable tiles in row-major order
    walkable: List[Tile] = []
    for y in range(height):
        for x in range(width):
            if (x, y) in blocked:
                continue
            walkable.append((x, y))
            graph.add_point(graph.tile_id(x, y), (x, y))

    steps = ALL_STEPS if diagonal else ORTHOGONAL_STEPS
    for x, y in walkable:
        tile_id = graph.tile_id(x, y)
        for dx, dy in steps:
            nx, ny = x + dx, y + dy
            if not graph.is_walkable(nx, ny):
                continue
            if dx and dy:
                if not corner_cutting and not (
                    graph.is_walkable(x + dx, y) and graph.is_walkable(x, y + dy)
                ):
                    continue
                weight = DIAGONAL_COST
            else:
                weight = ORTHOGONAL_COST
            graph.connect_points(tile_id, graph.tile_id(nx, ny), weight)

    logger.info(
        "Built %dx%d graph: %d nodes, %d edges (diagonal=%s)",
        width,
        height,
        len(graph),
        graph.edge_count,
        diagonal,
    )
    return graph


def build_graph_from_mask(
    mask: np.ndarray, diagonal: bool = False, corner_cutting: bool = True
) -> TileGraph:
    """Build a graph from a boolean array indexed ``[y, x]`` (True = walkable)."""
    mask = np.asarray(mask, dtype=bool)
    if mask.ndim != 2:
        raise ValueError(f"walkability mask must be 2D, got shape {mask.shape}")
    height, width = mask.shape
    blocked = {(int(x), int(y)) for y, x in zip(*np.nonzero(~mask))}
    return build_graph(width, height, blocked, diagonal, corner_cutting)
