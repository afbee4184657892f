"""
Walker module: moves an actor along the current path of an AstarPath.
"""
from __future__ import annotations
import math
from typing import TYPE_CHECKING, Optional, Sequence

from pygame.math import Vector2

from .config import WALK_SPEED, ARRIVAL_EPSILON

if TYPE_CHECKING:
    from .astar_path import AstarPath


class PathWalker:
    """Follows a path one node at a time, in world coordinates."""

    def __init__(
        self,
        astar: AstarPath,
        position: Sequence[float] = (0.0, 0.0),
        speed: float = WALK_SPEED,
    ) -> None:
        self.astar = astar
        # Position in world coordinates
        self.position = Vector2(position)
        self.speed = float(speed)
        # Index of the path node being walked towards; node 0 is the start
        self.target_index = 1
        # Facing angle (radians) toward the current target
        self.heading = 0.0

    def __repr__(self):
        return (
            f"<PathWalker x={self.position.x:.2f} y={self.position.y:.2f} "
            f"target={self.target_index}>"
        )

    def request(self, end_world: Sequence[float]) -> bool:
        """
        Ask for a path from the current position to ``end_world``.
        On success walking restarts from the first node after the start.
        """
        if self.astar.try_compute_path(self.position, end_world):
            self.target_index = 1
            return True
        return False

    @property
    def is_walking(self) -> bool:
        return self.target_index < len(self.astar.current_path)

    def current_target(self) -> Optional[Vector2]:
        """World-space center of the node being walked to, or None when idle."""
        path = self.astar.current_path
        if self.target_index >= len(path):
            return None
        tile = path[self.target_index]
        return self.astar.tilemap.map_to_world(tile) + self.astar.half_tile_offset

    def update(self, dt: float) -> None:
        """Advance toward the current target node by ``speed * dt``."""
        target = self.current_target()
        if target is None:
            return
        delta = target - self.position
        if delta.length() > ARRIVAL_EPSILON:
            self.heading = math.atan2(delta.y, delta.x)
        self.position = self.position.move_towards(target, self.speed * dt)
        if self.position.distance_to(target) <= ARRIVAL_EPSILON:
            self.position = Vector2(target)
            self.target_index += 1
