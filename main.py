import sys
import argparse
import logging

from tilepath.astar_path import AstarPath
from tilepath.tilemap import TileMap
from tilepath.config import USE_DIAGONAL


def render_ascii(tilemap, path, start, end):
    """Render the map with the path overlaid: # wall, . floor, * path."""
    on_path = set(path)
    lines = []
    for y in range(tilemap.height):
        row = []
        for x in range(tilemap.width):
            if (x, y) == start:
                row.append("S")
            elif (x, y) == end:
                row.append("E")
            elif (x, y) in on_path:
                row.append("*")
            elif tilemap.is_wall(x, y):
                row.append("#")
            else:
                row.append(".")
        lines.append("".join(row))
    return "\n".join(lines)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Find an A* path between two tiles of a world map."
    )
    parser.add_argument("sx", type=int, help="start tile x")
    parser.add_argument("sy", type=int, help="start tile y")
    parser.add_argument("ex", type=int, help="end tile x")
    parser.add_argument("ey", type=int, help="end tile y")
    parser.add_argument(
        "--world", help="JSON world file (defaults to the bundled map)"
    )
    parser.add_argument(
        "--diagonal",
        action=argparse.BooleanOptionalAction,
        default=USE_DIAGONAL,
        help="allow diagonal movement",
    )
    parser.add_argument(
        "--no-corner-cutting",
        action="store_true",
        help="forbid diagonal steps between two blocking tiles",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    tilemap = TileMap.from_file(args.world) if args.world else TileMap()
    astar = AstarPath()
    astar.configure(
        tilemap,
        diagonal=args.diagonal,
        corner_cutting=not args.no_corner_cutting,
    )
    start, end = (args.sx, args.sy), (args.ex, args.ey)
    path = astar.request_path(start, end)
    if path is None:
        print(f"Invalid endpoints: {start} -> {end}", file=sys.stderr)
        return 1
    print(render_ascii(tilemap, path, start, end))
    if path:
        print(f"{len(path) - 1} steps: {' -> '.join(map(str, path))}")
    else:
        print("No path")
    return 0


if __name__ == "__main__":
    sys.exit(main())
