import math

# Tile values
# Value used in map grids for empty, walkable floor
TILE_EMPTY = 0
# Value used in map grids for non-walkable wall tiles
TILE_WALL = 1

# World file: JSON definition of the map layout (relative to this package)
WORLD_FILE = "worlds/default.json"
# Size of one tile in world units (width, height)
CELL_SIZE = (32, 32)

# Graph settings
# Connect all 8 surrounding tiles instead of the 4 orthogonal ones
USE_DIAGONAL = True
# Allow diagonal edges that squeeze between two blocking orthogonal tiles
ALLOW_CORNER_CUTTING = True
# Edge weights for orthogonal and diagonal steps
ORTHOGONAL_COST = 1.0
DIAGONAL_COST = math.sqrt(2)

# Walker settings
# Movement speed along a path in world units per second
WALK_SPEED = 150.0
# Distance at which a path node counts as reached (world units)
ARRIVAL_EPSILON = 1e-3
