"""
Pathfinding utilities: implements A* search over a TileGraph.
"""
from __future__ import annotations
import heapq
import math
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from .graph import TileGraph

Heuristic = Callable[[Tuple[int, int], Tuple[int, int]], float]


def manhattan(a, b):
    """Manhattan distance heuristic for 4-directional grids."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def euclidean(a, b):
    """Straight-line distance heuristic for 8-directional grids."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def heuristic_for(graph: TileGraph) -> Heuristic:
    """Pick the heuristic matching the graph's edge weights."""
    return euclidean if graph.diagonal else manhattan


def find_path(
    graph: TileGraph,
    start_id: int,
    end_id: int,
    heuristic: Optional[Heuristic] = None,
) -> List[int]:
    """
    Find a path through ``graph`` from start_id to end_id using A*.
    Both ids must be registered points of the graph.
    Returns the list of point ids from start to end inclusive, or an empty
    list if the end cannot be reached.
    """
    if heuristic is None:
        heuristic = heuristic_for(graph)
    goal = graph.point_position(end_id)

    # A* open set as a priority queue of (f_score, count, node); the count
    # breaks ties in insertion order
    open_set: List[Tuple[float, int, int]] = []
    count = 0
    # G cost from start to node
    g_score: Dict[int, float] = {start_id: 0.0}
    # For path reconstruction
    came_from: Dict[int, int] = {}

    f0 = heuristic(graph.point_position(start_id), goal)
    heapq.heappush(open_set, (f0, count, start_id))
    closed = set()

    while open_set:
        _, _, current = heapq.heappop(open_set)
        if current == end_id:
            path = [current]
            while current in came_from:
                current = came_from[current]
                path.append(current)
            path.reverse()
            return path

        if current in closed:
            continue
        closed.add(current)

        for neighbor, weight in graph.neighbors(current):
            if neighbor in closed:
                continue
            tentative_g = g_score[current] + weight
            # If this path to neighbor is better than any previous one
            if tentative_g < g_score.get(neighbor, float("inf")):
                came_from[neighbor] = current
                g_score[neighbor] = tentative_g
                f_score = tentative_g + heuristic(
                    graph.point_position(neighbor), goal
                )
                count += 1
                heapq.heappush(open_set, (f_score, count, neighbor))

    # No path found
    return []


def find_point_path(
    graph: TileGraph, start_id: int, end_id: int
) -> List[Tuple[int, int]]:
    """Like ``find_path`` but returns tile coordinates instead of ids."""
    return [graph.point_position(i) for i in find_path(graph, start_id, end_id)]


def path_cost(graph: TileGraph, path: Sequence[int]) -> float:
    """Sum of edge weights along ``path``."""
    total = 0.0
    for a, b in zip(path, path[1:]):
        weight = graph.edge_weight(a, b)
        if weight is None:
            raise ValueError(f"points {a} and {b} are not connected")
        total += weight
    return total
